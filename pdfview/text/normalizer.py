"""Page text normalization.

Each stage is a pure function returning a new string:
trim, hyphenation handling, punctuation replacement and optional wrapping.
"""

import textwrap

# Smart punctuation and its plain replacement, applied in order.
PUNCTUATION_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("“", '"'),  # left double quote
    ("”", '"'),  # right double quote
    ("‘", "'"),  # left single quote
    ("’", "'"),  # right single quote
    ("–", "-"),  # en dash
    ("—", "-"),  # em dash
)

HYPHEN_SPACE_NEWLINE = "- \n"
HYPHEN_SPACE = "- "
HYPHEN_NEWLINE = "-\n"


class EmptyPageError(Exception):
    """Raised when a page has no text left to show."""

    pass


def trim_text(text: str) -> str:
    return text.strip()


def apply_hyphenation(text: str, dehyphenate: bool) -> str:
    """Rejoin or break hyphenated words.

    Args:
        text: Page text.
        dehyphenate: Remove hyphen+space and hyphen+newline sequences when
            True; otherwise turn each hyphen+space into a line break after
            the hyphen. A hyphen followed by a space and a newline counts as
            a single marker.

    Returns:
        The transformed text.
    """
    if dehyphenate:
        for marker in (HYPHEN_SPACE_NEWLINE, HYPHEN_SPACE, HYPHEN_NEWLINE):
            text = text.replace(marker, "")
        return text
    return text.replace(HYPHEN_SPACE_NEWLINE, HYPHEN_NEWLINE).replace(HYPHEN_SPACE, HYPHEN_NEWLINE)


def replace_punctuation(text: str) -> str:
    for smart, plain in PUNCTUATION_REPLACEMENTS:
        text = text.replace(smart, plain)
    return text


def wrap_text(text: str, columns: int) -> str:
    """Split lines longer than ``columns`` at whitespace.

    Shorter lines are kept as they are and long words are never broken.
    """
    wrapped: list[str] = []
    for line in text.split("\n"):
        if len(line) <= columns:
            wrapped.append(line)
            continue
        wrapped.extend(
            textwrap.wrap(line, width=columns, break_long_words=False, break_on_hyphens=False)
            or [line]
        )
    return "\n".join(wrapped)


def normalize_text(
    raw: str,
    dehyphenate: bool = False,
    raw_mode: bool = False,
    wrap_columns: int | None = None,
) -> str:
    """Normalize the raw text of a page.

    Args:
        raw: Text extracted from the page.
        dehyphenate: Rejoin words split across lines.
        raw_mode: Skip the punctuation replacement.
        wrap_columns: Wrap lines longer than this many columns.

    Returns:
        The normalized text.

    Raises:
        EmptyPageError: If nothing is left after trimming or hyphenation.
    """
    text = trim_text(raw)
    if not text:
        raise EmptyPageError("Page is empty")

    text = apply_hyphenation(text, dehyphenate)
    if not text:
        raise EmptyPageError("Page is empty after hyphenation")

    if not raw_mode:
        text = replace_punctuation(text)

    if wrap_columns:
        text = wrap_text(text, wrap_columns)

    return text
