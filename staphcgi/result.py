#! /usr/bin/python3

from . import error
from . import message

__doc__ = "Outcome of a fallible handler"

class Success():
    " Handler produced a response "
    def __init__(self, response: message.Response):
        self.response = response
    def __repr__(self) -> str:
        return "<Success " + repr(self.response) + ">"

class Failure():
    """ Handler could not produce a response

    error is any value. Its str() ends up in the body of the error response.
    A ResponseError also decides the status code.
    """
    def __init__(self, error):
        self.error = error
    def __str__(self) -> str:
        return str(self.error)
    def __repr__(self) -> str:
        return "<Failure " + repr(self.error) + ">"

def to_response(outcome, status: int = 500) -> message.Response:
    " Turn a Success or Failure into the Response to send "
    if isinstance(outcome, Success):
        return outcome.response
    if isinstance(outcome, Failure):
        if isinstance(outcome.error, error.ResponseError):
            return outcome.error.to_response()
        return message.string_response(status, str(outcome))
    raise TypeError("Expected Success or Failure, got " + repr(outcome))
