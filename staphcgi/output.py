#! /usr/bin/python3

import http
import logging

from . import message

__doc__ = "Output Handler"

logger = logging.getLogger(__name__)

HEADER_ENCODING = "iso-8859-1"
UNKNOWN_REASON = "Unknown"

def reason_phrase(status: int) -> str:
    " Standard reason phrase, or Unknown for non-standard codes "
    try:
        return http.HTTPStatus(status).phrase
    except ValueError:
        return UNKNOWN_REASON

def serialize_response(resp: message.Response) -> bytes:
    """ Render the response in the CGI output format

    Status line, headers in the order they were set, a Content-Length
    derived from the body unless one was set, a blank line, then the body.
    """
    lines = [b" ".join((
        b"Status:",
        str(resp.status).encode("ascii"),
        reason_phrase(resp.status).encode(HEADER_ENCODING)
    ))]
    lines.extend(
        name.encode(HEADER_ENCODING) + b": " + str(value).encode(HEADER_ENCODING)
        for name, value in resp.headers.items()
    )
    if "Content-Length" not in resp.headers:
        lines.append(b"Content-Length: " + str(len(resp.body)).encode("ascii"))
    return b"\r\n".join(lines) + b"\r\n\r\n" + bytes(resp.body)

def write_bytes(data: bytes, stdout):
    " Write serialized output to a binary sink and flush it "
    stdout.write(data)
    stdout.flush()

def write_response(resp: message.Response, stdout):
    """ Write the response to a binary sink in one pass

    OSError from the sink is not caught here. A header that cannot be
    encoded raises UnicodeEncodeError before anything is written.
    """
    data = serialize_response(resp)
    write_bytes(data, stdout)
    logger.debug("Wrote %r as %d bytes", resp, len(data))

def split_output(data: bytes) -> tuple:
    " Split CGI output at the first blank line, CRLF or bare LF "
    found = [(data.find(sep), sep) for sep in (b"\r\n\r\n", b"\n\n") if sep in data]
    if not found:
        return data, b""
    index, separator = min(found)
    return data[:index], data[index + len(separator):]

def parse_response(data: bytes) -> message.Response:
    """ Parse CGI output back into a Response

    Meant for checking scripts locally. The Status header becomes the
    status code (200 when missing). Raises ValueError on a header line
    without a colon or a bad status.
    """
    head, body = split_output(data)
    resp = message.Response()
    for line in head.decode(HEADER_ENCODING).splitlines():
        if not line:
            continue
        if ":" not in line:
            raise ValueError("Bad header line: " + repr(line))
        name, value = line.split(":", 1)
        name = name.strip()
        value = value.strip()
        if name.lower() == "status":
            try:
                resp.status = int(value.split(" ", 1)[0])
            except ValueError as err:
                raise ValueError("Bad status line: " + repr(line)) from err
        else:
            resp.set_header(name, value)
    resp.body = body
    return resp
