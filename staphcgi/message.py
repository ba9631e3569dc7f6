#! /usr/bin/python3

import email.message

__doc__ = "Request and Response objects"

def new_header() -> email.message.Message:
    " Empty case-insensitive header block "
    return email.message.Message()

def set_header(headers: email.message.Message, name: str, value: str):
    """ Set a header, replacing any previous value

    Item assignment on a Message appends a second header of the same name.
    """
    if name in headers:
        headers.replace_header(name, str(value))
    else:
        headers[name] = str(value)

class Request():
    """ HTTP request rebuilt from the CGI environment

    Headers are kept in an email.message.Message so lookups are
    case-insensitive. Not modified once built.
    """
    def __init__(
        self,
        method: str = "GET",
        target: str = "/",
        version: str = "HTTP/1.1",
        headers: email.message.Message = None,
        body: bytes = b""
    ):
        self.method = method
        self.target = target
        self.version = version
        self.headers = new_header() if headers is None else headers
        self.body = body

    @property
    def path(self) -> str:
        "Target without the query string"
        return self.target.split("?", 1)[0]

    @property
    def query(self) -> str:
        "Query string, None when the target has none"
        parts = self.target.split("?", 1)
        return parts[1] if len(parts) > 1 else None

    def __repr__(self) -> str:
        return "".join((
            '<Request method="', self.method,
            '" target="', self.target,
            '" version="', self.version,
            '" body=', str(len(self.body)), ' />'
        ))

class Response():
    """ HTTP response to be written back to the host server

    Header names are case-insensitive and unique: setting an existing
    header replaces its value. Set headers through set_header only;
    assigning to self.headers[name] appends a duplicate, and the writer
    emits every copy.
    """
    def __init__(self, status: int = 200, headers = None, body: bytes = b""):
        self.status = status
        self.headers = new_header()
        self.body = body
        if headers:
            for name, value in (headers.items() if hasattr(headers, "items") else headers):
                self.set_header(name, value)

    def set_header(self, name: str, value: str):
        " Set a header, replacing any previous value "
        set_header(self.headers, name, value)

    def get_header(self, name: str, default: str = None) -> str:
        return self.headers.get(name, default)

    def __repr__(self) -> str:
        return "".join((
            "<Response status=", str(self.status),
            " headers=", str(len(self.headers)),
            " body=", str(len(self.body)), " />"
        ))

## Convenience constructors

def binary_response(status: int, body: bytes, content_type: str = None) -> Response:
    " Response carrying raw bytes "
    resp = Response(status, body = bytes(body))
    if content_type is not None:
        resp.set_header("Content-Type", content_type)
    resp.set_header("Content-Length", len(resp.body))
    return resp

def empty_response(status: int) -> Response:
    " Response without a body, e.g. empty_response(404) "
    return binary_response(status, b"")

def string_response(status: int, text: str) -> Response:
    " Plain text response, UTF-8 encoded "
    return binary_response(status, text.encode("utf-8"), "text/plain; charset=utf-8")

def html_response(status: int, text: str) -> Response:
    " HTML response, UTF-8 encoded "
    return binary_response(status, text.encode("utf-8"), "text/html")
