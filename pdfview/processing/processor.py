"""Per-document page loop.

Selects the pages to visit, normalizes each page's text, hands it to the
line matcher and writes the per-document summaries.
"""

import logging
from typing import TextIO

from pdfview.config import MatchMode, ProcessingConfig
from pdfview.diagnostics import Diagnostics
from pdfview.models.schemas import ProcessResult
from pdfview.parsing.pdf_document import Document
from pdfview.text.matcher import LineMatcher, MatchAccumulator, compile_pattern
from pdfview.text.normalizer import EmptyPageError, normalize_text

logger = logging.getLogger(__name__)


class PageProcessor:
    """Print, filter and count the text of documents.

    One processor serves a whole run; match totals are kept per document.

    Attributes:
        config: Options for the run.
    """

    def __init__(
        self,
        config: ProcessingConfig,
        out: TextIO,
        diagnostics: Diagnostics,
    ) -> None:
        self.config = config
        self._out = out
        self._pattern = compile_pattern(config.expression, config.ignore_case, diagnostics)
        self._mode = config.match_mode
        self._matcher = LineMatcher(
            mode=self._mode,
            pattern=self._pattern,
            print_page_numbers=config.print_page_numbers,
            out=out,
        )

    @property
    def line_oriented(self) -> bool:
        """Whether pages are split into lines before printing."""
        return (
            self.config.print_page_numbers
            or self._pattern is not None
            or self._mode is not MatchMode.PLAIN
        )

    def process(self, document: Document, file_name: str | None = None) -> ProcessResult:
        """Process every selected page of a document.

        Args:
            document: Source of page text.
            file_name: Name shown in prefixes and summaries, or None.

        Returns:
            Match totals for the document.
        """
        accumulator = MatchAccumulator()
        page_counts: dict[int, int] = {}
        pages_visited = 0

        pages = self.config.pages
        page_count = document.page_count or 0
        last = pages.last if pages is not None else page_count

        for index in range(1, page_count + 1):
            if pages is not None:
                if index > last:
                    break
                if index < pages.first or index not in pages:
                    continue

            raw = document.page_text(index)
            if not raw:
                logger.debug(f"No text on page {index}")
                continue
            pages_visited += 1

            try:
                text = normalize_text(
                    raw,
                    dehyphenate=self.config.dehyphenate,
                    raw_mode=self.config.raw_text,
                    wrap_columns=self.config.wrap_columns,
                )
            except EmptyPageError:
                logger.debug(f"Page {index} is empty after normalization")
                continue

            if not self.line_oriented:
                self._out.write(f"{text}\n")
                continue

            result = self._matcher.scan(text, index, file_name, accumulator)
            if self._mode.counts_per_page:
                page_counts[index] = result.page_matches
            if result.stopped:
                break

        self._write_summary(accumulator, file_name)

        return ProcessResult(
            total_matches=accumulator.total,
            stopped=accumulator.stopped,
            page_counts=page_counts,
            pages_visited=pages_visited,
        )

    def _write_summary(self, accumulator: MatchAccumulator, file_name: str | None) -> None:
        if self._mode.stops_at_first_match:
            if file_name is None:
                return
            if accumulator.total > 0 and self._mode is MatchMode.STOP_AT_FIRST:
                self._out.write(f"{file_name}\n")
            elif accumulator.total == 0 and self._mode is MatchMode.LIST_ONLY_WHEN_NO_MATCH:
                self._out.write(f"{file_name}\n")
            return

        if self.config.count_only:
            if file_name is None:
                self._out.write(f"{accumulator.total}\n")
            else:
                self._out.write(f"{file_name}:{accumulator.total}\n")
