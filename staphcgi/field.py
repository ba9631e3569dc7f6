#! /usr/bin/python3

import logging

from . import message

__doc__ = "Request builder from CGI meta-variables and stdin"

logger = logging.getLogger(__name__)

DEFAULT_METHOD = "GET"
DEFAULT_PATH = "/"
DEFAULT_PROTOCOL = "HTTP/1.1"
READ_CHUNK = 1 << 16

## Meta-variables without an HTTP_ prefix that are exposed as X-CGI-* headers.
## CONTENT_TYPE and CONTENT_LENGTH are regular headers and not listed here.
META_VARIABLES = (
    "AUTH_TYPE",
    "GATEWAY_INTERFACE",
    "PATH_INFO",
    "PATH_TRANSLATED",
    "QUERY_STRING",
    "REMOTE_ADDR",
    "REMOTE_HOST",
    "REMOTE_IDENT",
    "REMOTE_USER",
    "REQUEST_METHOD",
    "SCRIPT_NAME",
    "SERVER_NAME",
    "SERVER_PORT",
    "SERVER_PROTOCOL",
    "SERVER_SOFTWARE"
)

def header_name(name: str) -> str:
    """ Convert a meta-variable name into an HTTP header name

    USER_AGENT becomes User-Agent.
    """
    return "-".join(part.capitalize() for part in name.split("_"))

def get_content_length(environ: dict) -> int:
    " Declared body length, 0 when absent or malformed "
    value = environ.get("CONTENT_LENGTH")
    if value is None or not value.strip():
        return 0
    try:
        length = int(value)
    except ValueError:
        logger.warning("Ignoring malformed CONTENT_LENGTH %r", value)
        return 0
    if length < 0:
        logger.warning("Ignoring negative CONTENT_LENGTH %r", value)
        return 0
    return length

def read_body(stdin, length: int) -> bytes:
    """ Read up to length bytes from stdin

    Stops early at end of stream. Hosts do misreport the length, so a short
    read is accepted as is.
    """
    if length <= 0:
        return b""
    chunks = []
    remaining = length
    while remaining:
        chunk = stdin.read(min(remaining, READ_CHUNK))
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    if remaining:
        logger.warning(
            "Short read on stdin: expected %d bytes, got %d", length, length - remaining
        )
    return b"".join(chunks)

def build_target(environ: dict) -> str:
    " Request target: path plus the query string when there is one "
    if "REQUEST_URI" in environ:
        ## The query is taken from QUERY_STRING, not from the URI
        path = environ["REQUEST_URI"].split("?", 1)[0]
    else:
        path = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
    if not path:
        path = DEFAULT_PATH
    query = environ.get("QUERY_STRING", "")
    return "?".join((path, query)) if query else path

def build_headers(environ: dict, meta_headers: bool = True):
    " Collect HTTP_* variables and the content meta-variables into headers "
    headers = message.new_header()
    for name, value in environ.items():
        if not name.startswith("HTTP_") or len(name) == 5:
            continue
        if name in ("HTTP_CONTENT_TYPE", "HTTP_CONTENT_LENGTH"):
            ## Some hosts pass these twice. The unprefixed variable wins.
            continue
        if meta_headers and name.startswith("HTTP_X_CGI_"):
            ## X-CGI-* only ever comes from the host, never from the client
            logger.warning("Dropping client header %s", name)
            continue
        message.set_header(headers, header_name(name[5:]), value.strip())
    if "CONTENT_TYPE" in environ:
        message.set_header(headers, "Content-Type", environ["CONTENT_TYPE"])
    if "CONTENT_LENGTH" in environ:
        message.set_header(headers, "Content-Length", environ["CONTENT_LENGTH"])
    if meta_headers:
        for name in META_VARIABLES:
            if name in environ:
                message.set_header(headers, "X-CGI-" + header_name(name), environ[name])
    return headers

def build_request(environ: dict, stdin, meta_headers: bool = True) -> message.Request:
    """ Build a Request from an environment snapshot and a binary stdin

    Never fails on bad input: every missing variable has a default so the
    same script runs outside a CGI host. stdin is only read when
    CONTENT_LENGTH announces a body.
    """
    if "REQUEST_METHOD" not in environ:
        logger.debug("REQUEST_METHOD not set, not running under a CGI host?")
    request = message.Request(
        method = environ.get("REQUEST_METHOD") or DEFAULT_METHOD,
        target = build_target(environ),
        version = environ.get("SERVER_PROTOCOL") or DEFAULT_PROTOCOL,
        headers = build_headers(environ, meta_headers),
        body = read_body(stdin, get_content_length(environ))
    )
    logger.debug("Built %r", request)
    return request
