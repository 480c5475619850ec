# logger.py
import logging
import sys

LOGGER_NAME = "subnetcheck"

log = logging.getLogger(LOGGER_NAME)

_handler = logging.StreamHandler(sys.stderr)
_handler.setFormatter(logging.Formatter(
    "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
))


def setup_logger(verbose: bool = False) -> logging.Logger:
    _handler.stream = sys.stderr
    log.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if _handler not in log.handlers:
        log.addHandler(_handler)
    return log
