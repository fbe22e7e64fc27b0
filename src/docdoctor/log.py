"""Diagnostic logging for docdoctor.

Library modules log under the ``docdoctor`` logger and never print; the
CLI calls ``setup_logging`` once to route those records to stderr.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "docdoctor"
_FORMAT = "[docdoctor] %(levelname)s %(message)s"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the docdoctor logger.

    Safe to call repeatedly: later calls retarget the handler at the
    current sys.stderr and reset the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    handler = next(
        (h for h in logger.handlers if getattr(h, "_docdoctor", False)), None,
    )
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._docdoctor = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    else:
        handler.setStream(sys.stderr)
    logger.setLevel(logging.INFO if verbose else logging.ERROR)
    return logger
