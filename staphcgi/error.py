#! /usr/bin/python3

from . import message
from . import output

__doc__ = "Exceptions"

class ResponseError(Exception):
    """ Error meant for the client

    Raise it from a handler, or wrap it in a Failure, to answer with this
    status and reason instead of a generic 500. headers are added to the
    error response, e.g. Allow for a 405.
    """
    def __init__(self, status: int = 500, reason: str = None, headers: dict = None):
        self.status = status
        self.reason = reason or output.reason_phrase(status)
        self.headers = headers or {}
        super().__init__(status, self.reason)
    def __str__(self) -> str:
        return str(self.status) + " " + self.reason
    def to_response(self) -> message.Response:
        " Plain text Response describing the error "
        resp = message.string_response(self.status, self.reason)
        for name, value in self.headers.items():
            resp.set_header(name, value)
        return resp
