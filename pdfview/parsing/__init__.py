"""PDF access and page selection.

Responsibilities:
    - PDF opening and lazy per-page text extraction with pypdf
    - Encryption, lock and permission flags
    - File-type detection by content sniffing
    - Page specification parsing
"""

from pdfview.parsing.page_spec import (
    EmptyPageSpec,
    InvalidPageSpecSyntax,
    PageIndexSet,
    PageSpecError,
    parse_page_spec,
)
from pdfview.parsing.pdf_document import (
    Document,
    DocumentError,
    FileTypeError,
    PdfDocument,
    detect_file_type,
    is_pdf_type,
)

__all__ = [
    "Document",
    "DocumentError",
    "EmptyPageSpec",
    "FileTypeError",
    "InvalidPageSpecSyntax",
    "PageIndexSet",
    "PageSpecError",
    "PdfDocument",
    "detect_file_type",
    "is_pdf_type",
    "parse_page_spec",
]
