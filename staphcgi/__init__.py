#!/usr/bin/python3

from . import config
from . import error
from . import field
from . import message
from . import output
from . import result
from . import server

__doc__ = "Write CGI (RFC 3875) programs against Request and Response objects"

## Rebinding

Request = message.Request
Response = message.Response
empty_response = message.empty_response
string_response = message.string_response
html_response = message.html_response
binary_response = message.binary_response
ResponseError = error.ResponseError
Success = result.Success
Failure = result.Failure
build_request = field.build_request
serialize_response = output.serialize_response
write_response = output.write_response
parse_response = output.parse_response
run = server.run
handle = server.handle
handle_fallible = server.handle_fallible
