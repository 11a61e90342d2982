"""Progress reporter implementations."""

from __future__ import annotations

import logging
import sys

from isometric_converter.application.ports import ConversionReporter

RUN_LOGGER_NAME = "isometric_converter.run"


class NullReporter:
    """Reporter that discards every message."""

    def info(self, msg: str, *args: object) -> None:
        del msg, args

    def warning(self, msg: str, *args: object) -> None:
        del msg, args

    def error(self, msg: str, *args: object) -> None:
        del msg, args


def build_reporter(verbose: bool) -> ConversionReporter:
    """Return the run reporter for the requested verbosity.

    Parameters
    ----------
    verbose : bool
        When ``False`` a :class:`NullReporter` is returned.

    Returns
    -------
    ConversionReporter
        A ``logging.Logger`` writing to stderr, or a no-op reporter.
    """
    if not verbose:
        return NullReporter()

    logger = logging.getLogger(RUN_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger
