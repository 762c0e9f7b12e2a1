"""One-line document metadata summaries."""

from pdfview.parsing.pdf_document import Document


def report_metadata(document: Document, file_name: str) -> str:
    """Describe a document's page count, encryption and restrictions.

    Args:
        document: Document to describe.
        file_name: Name leading the summary.

    Returns:
        A line such as ``"a.pdf: 3 pages, encrypted, No copying, printing"``.
    """
    page_count = document.page_count
    if page_count is None:
        parts = [f"{file_name}: unknown page count"]
    else:
        unit = "page" if page_count == 1 else "pages"
        parts = [f"{file_name}: {page_count} {unit}"]

    if document.encrypted:
        parts.append("encrypted")
    if document.locked:
        parts.append("locked")

    restricted = document.permissions.restrictions()
    if restricted:
        parts.append("No " + ", ".join(restricted))

    return ", ".join(parts)
