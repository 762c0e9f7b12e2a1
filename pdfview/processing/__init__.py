"""Document-level processing.

Responsibilities:
    - Page selection, normalization and matching per document
    - Match count and file name summaries
    - Metadata reporting
"""

from pdfview.processing.metadata import report_metadata
from pdfview.processing.processor import PageProcessor

__all__ = ["PageProcessor", "report_metadata"]
