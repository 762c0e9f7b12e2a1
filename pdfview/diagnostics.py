"""User-facing diagnostics written to stderr.

All error and warning messages shown to the user pass through a
Diagnostics instance, which carries the quiet flag for the run.
"""

import logging
import sys
from typing import TextIO

_FORMAT = "%(levelname)s: %(message)s"

logger = logging.getLogger(__name__)
logger.propagate = False
logger.setLevel(logging.WARNING)


class Diagnostics:
    """Emit ``ERROR:`` and ``WARNING:`` messages unless running quietly.

    Attributes:
        quiet: Suppress every message when True.
        error_count: Number of errors reported so far, including
            suppressed ones.
    """

    def __init__(self, quiet: bool = False, stream: TextIO | None = None) -> None:
        self.quiet = quiet
        self.error_count = 0
        self._handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        self._handler.setFormatter(logging.Formatter(_FORMAT))

    def error(self, message: str) -> None:
        self.error_count += 1
        self._emit(logging.ERROR, message)

    def warning(self, message: str) -> None:
        self._emit(logging.WARNING, message)

    def _emit(self, level: int, message: str) -> None:
        if self.quiet:
            return
        # The handler is attached only while emitting so that each
        # instance writes to its own stream.
        logger.addHandler(self._handler)
        try:
            logger.log(level, message)
        finally:
            logger.removeHandler(self._handler)
