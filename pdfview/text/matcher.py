"""Line-oriented regular expression matching.

Scans the lines of a page against an optional pattern and writes matched
lines, per-page counts, or nothing at all depending on the match mode.

Per-line precedence:
    1. stop modes: the first line with a match ends the scan
    2. per-page counting: matches added to page and document totals
    3. count-only: matches added to the document total
    4. with a pattern, lines without matches are skipped
    5. the line is printed, optionally prefixed by file and page
"""

import logging
import re
from dataclasses import dataclass
from typing import TextIO

from pdfview.config import MatchMode
from pdfview.diagnostics import Diagnostics

logger = logging.getLogger(__name__)


@dataclass
class MatchAccumulator:
    """Running match state for one document."""

    total: int = 0
    page_matches: int = 0
    stopped: bool = False

    def start_page(self) -> None:
        self.page_matches = 0


@dataclass(frozen=True)
class LineMatchResult:
    handled: bool
    stopped: bool
    page_matches: int = 0


def compile_pattern(
    expression: str | None,
    ignore_case: bool,
    diagnostics: Diagnostics,
) -> re.Pattern[str] | None:
    """Compile the search expression.

    An invalid expression is reported as a warning and disables matching,
    so every line is printed as if no expression had been given.

    Args:
        expression: Regular expression, or None for no filtering.
        ignore_case: Compile with re.IGNORECASE.
        diagnostics: Where the warning goes.

    Returns:
        The compiled pattern, or None.
    """
    if expression is None:
        return None

    flags = re.IGNORECASE if ignore_case else 0
    try:
        return re.compile(expression, flags)
    except re.error as e:
        diagnostics.warning(f"Invalid regular expression '{expression}': {e}; matching disabled.")
        return None


def count_matches(pattern: re.Pattern[str] | None, line: str) -> int:
    if pattern is None:
        return 0
    return sum(1 for _ in pattern.finditer(line))


def format_prefix(file_name: str | None, page_number: int) -> str:
    if file_name is None:
        return f"{page_number}:"
    return f"{file_name}:{page_number}:"


class LineMatcher:
    """Scan page text line by line under one match mode.

    Attributes:
        mode: How matches are reported.
        pattern: Compiled search pattern, or None to accept every line.
        print_page_numbers: Prefix printed lines with file and page.
    """

    def __init__(
        self,
        mode: MatchMode,
        pattern: re.Pattern[str] | None,
        print_page_numbers: bool,
        out: TextIO,
    ) -> None:
        self.mode = mode
        self.pattern = pattern
        self.print_page_numbers = print_page_numbers
        self._out = out

    def scan(
        self,
        page_text: str,
        page_number: int,
        file_name: str | None,
        accumulator: MatchAccumulator,
    ) -> LineMatchResult:
        """Match every line of a page.

        Args:
            page_text: Normalized page text.
            page_number: 1-based page number.
            file_name: Name used in prefixes, or None.
            accumulator: Document match state, updated in place.

        Returns:
            Whether the page was handled and whether scanning should stop.
        """
        accumulator.start_page()

        for line in page_text.split("\n"):
            matches = count_matches(self.pattern, line)

            if self.mode.stops_at_first_match:
                if matches > 0:
                    accumulator.total += matches
                    accumulator.stopped = True
                    logger.debug(f"First match on page {page_number}")
                    break
                continue

            if self.mode.counts_per_page:
                accumulator.page_matches += matches
                accumulator.total += matches
                continue

            if self.mode is MatchMode.COUNT_ONLY:
                accumulator.total += matches
                continue

            if self.pattern is not None and matches == 0:
                continue

            if self.print_page_numbers:
                self._out.write(format_prefix(file_name, page_number))
            self._out.write(f"{line}\n")

        if self.mode.counts_per_page and self.pattern is not None and not accumulator.stopped:
            skip_page = (
                self.mode is MatchMode.PER_PAGE_COUNT_MATCHING_ONLY
                and accumulator.page_matches == 0
            )
            if not skip_page:
                self._out.write(
                    f"{format_prefix(file_name, page_number)}{accumulator.page_matches}\n"
                )

        return LineMatchResult(
            handled=True,
            stopped=accumulator.stopped,
            page_matches=accumulator.page_matches,
        )
