#! /usr/bin/python3

import configparser
import logging
import os

__doc__ = "Configuration file loader for StaphCGI."

ENV_VAR = "STAPHCGI_CONFIG"

DEFAULTS = {
    "meta_headers": True,
    "error_status": 500,
    "log_level": logging.WARNING
}

def load(path: str = None) -> dict:
    """Load config file on top of the defaults

    A missing file or missing key keeps the default. Raises ValueError on a
    value that cannot be used.
    """
    result = dict(DEFAULTS)
    if not path or not os.path.isfile(path):
        return result
    config = configparser.ConfigParser()
    try:
        config.read(path)
    except configparser.Error as err:
        raise ValueError("Bad config file " + path + ": " + str(err)) from err

    ## Request - X-CGI-* headers for the meta-variables
    if config.has_option("Request", "meta headers"):
        result["meta_headers"] = config["Request"].getboolean("meta headers")

    ## Response - status for failed handlers
    if config.has_option("Response", "error status"):
        status = config["Response"].getint("error status")
        if not 100 <= status <= 999:
            raise ValueError("error status out of range: " + str(status))
        result["error_status"] = status

    ## Logging
    if config.has_option("Logging", "level"):
        level = config["Logging"]["level"].strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError("Unknown log level: " + level)
        result["log_level"] = logging.getLevelName(level)
    return result

def load_from(environ: dict) -> dict:
    "Load the file named by STAPHCGI_CONFIG in the environment snapshot"
    return load(environ.get(ENV_VAR))

if __name__ == "__main__":
    print(load_from(os.environ))
