#! /usr/bin/python3

import logging
import os
import sys

from . import config
from . import error
from . import field
from . import message
from . import output
from . import result

__doc__ = "CGI dispatcher: environment to handler to stdout"

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_WRITE_FAILED = 1

def call_handler(handler, request: message.Request, fallible: bool, error_status: int):
    """ Invoke the handler once and adapt what it gives back to a Response

    Exceptions from the handler are logged and answered with a 500.
    """
    try:
        outcome = handler(request)
    except error.ResponseError as err:
        logger.warning("Handler raised %r", err)
        return err.to_response()
    except Exception: #pylint: disable=broad-except
        logger.exception("Handler raised for %r", request)
        return error.ResponseError(500).to_response()
    if fallible and isinstance(outcome, (result.Success, result.Failure)):
        if isinstance(outcome, result.Failure):
            logger.warning("Handler failed for %r: %s", request, outcome)
        return result.to_response(outcome, error_status)
    if isinstance(outcome, message.Response):
        return outcome
    logger.error("Handler returned %r instead of a Response", outcome)
    return error.ResponseError(500).to_response()

def run(handler, environ: dict, stdin, stdout, fallible: bool = False, conf: dict = None) -> int:
    """ Process one CGI request and return the exit status

    environ is a snapshot of the environment, stdin and stdout are binary
    streams. The HTTP status goes into the output; the exit status only
    tells whether the output could be written.
    """
    if conf is None:
        try:
            conf = config.load_from(environ)
        except ValueError as err:
            logger.error("Bad configuration, using defaults: %s", err)
            conf = dict(config.DEFAULTS)
    request = field.build_request(environ, stdin, conf["meta_headers"])
    resp = call_handler(handler, request, fallible, conf["error_status"])
    try:
        data = output.serialize_response(resp)
    except (ValueError, TypeError) as err:
        ## Header not encodable as ISO-8859-1, body not bytes, ...
        logger.error("Cannot serialize %r: %s", resp, err)
        data = output.serialize_response(error.ResponseError(500).to_response())
    try:
        output.write_bytes(data, stdout)
    except OSError as err:
        logger.error("Failed to write the response: %s", err)
        return EXIT_WRITE_FAILED
    return EXIT_OK

def setup_logging(environ: dict) -> dict:
    " Send log records to stderr, stdout carries the response "
    try:
        conf = config.load_from(environ)
    except ValueError as err:
        conf = dict(config.DEFAULTS)
        logging.basicConfig(stream = sys.stderr, level = conf["log_level"])
        logger.error("Bad configuration, using defaults: %s", err)
        return conf
    logging.basicConfig(stream = sys.stderr, level = conf["log_level"])
    return conf

def main(handler, fallible: bool = False):
    """ Main invocation from a CGI script """
    environ = dict(os.environ)
    conf = setup_logging(environ)
    sys.exit(run(
        handler,
        environ,
        sys.stdin.buffer,
        sys.stdout.buffer,
        fallible = fallible,
        conf = conf
    ))

def handle(handler):
    """ Run handler(Request) -> Response as this process's CGI request """
    main(handler)

def handle_fallible(handler):
    """ Run handler(Request) -> Success or Failure as this process's CGI request """
    main(handler, fallible = True)
