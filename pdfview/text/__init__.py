"""Text post-processing for extracted pages.

Responsibilities:
    - Trimming, dehyphenation and smart punctuation replacement
    - Optional wrapping of long lines
    - Regular expression line matching and match counting
"""

from pdfview.text.matcher import (
    LineMatcher,
    LineMatchResult,
    MatchAccumulator,
    compile_pattern,
)
from pdfview.text.normalizer import EmptyPageError, normalize_text

__all__ = [
    "EmptyPageError",
    "LineMatchResult",
    "LineMatcher",
    "MatchAccumulator",
    "compile_pattern",
    "normalize_text",
]
