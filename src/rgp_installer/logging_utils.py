"""Diagnostic logging for commands run and files touched."""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(verbose: bool = False) -> logging.Handler:
    """Attach a stderr handler to the package logger and return it.

    Progress messages for the user are printed directly; this logger carries
    the diagnostic trail (commands, exit codes, paths) and stays quiet unless
    ``verbose`` is set. Calling it again adjusts the level and points the
    existing handler at the current ``sys.stderr``.
    """
    logger = logging.getLogger("rgp_installer")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    handler = getattr(logger, "_rgp_handler", None)
    if handler is not None:
        handler.setStream(sys.stderr)
        return handler

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    logger.addHandler(handler)
    logger.propagate = False

    setattr(logger, "_rgp_handler", handler)
    return handler
