"""Logging setup for the godl command line."""
import logging
import sys

LOGGER_NAME = "godl"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the godl logger.

    Core modules only emit debug records; they are shown with verbose set.
    Warnings and errors are always written to stderr.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s" if not verbose
                                           else "%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
