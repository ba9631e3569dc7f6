#!/usr/bin/python3
import staphcgi

__doc__ = "CGI Debugger"

def main(request: staphcgi.Request) -> staphcgi.Response:
    """ Echo the request back as plain text """
    text = "".join((
        "Request:\n",
        " ".join((request.method, request.target, request.version)), "\n",
        "\nHeaders:\n",
        "".join(name + ": " + value + "\n" for name, value in request.headers.items()),
        "\nBody:\n"
    ))
    resp = staphcgi.binary_response(
        200,
        text.encode("utf-8") + request.body + b"\n",
        "text/plain; charset=utf-8"
    )
    return resp

if __name__ == "__main__":
    staphcgi.handle(main)
