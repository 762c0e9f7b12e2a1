"""PDF document access using pypdf.

Opens PDF files, exposes per-page text lazily, and reports the
encryption, lock and permission state of a document.
"""

import logging
import mimetypes
from pathlib import Path
from typing import Protocol

from pypdf import PdfReader
from pypdf.constants import UserAccessPermissions
from pypdf.errors import PdfReadError, PdfStreamError

from pdfview.models.schemas import DocumentPermissions

logger = logging.getLogger(__name__)

# Constants
PDF_MIME_TYPE = "application/pdf"
PDF_MAGIC_BYTES = b"%PDF"
SNIFF_SIZE = 1024
UNKNOWN_MIME_TYPE = "application/octet-stream"


class DocumentError(Exception):
    """Raised when a PDF document cannot be opened or read."""

    pass


class FileTypeError(Exception):
    """Raised when the type of a file cannot be determined."""

    pass


class Document(Protocol):
    """Read-only view of a document consumed by the processors."""

    @property
    def page_count(self) -> int | None: ...

    @property
    def encrypted(self) -> bool: ...

    @property
    def locked(self) -> bool: ...

    @property
    def permissions(self) -> DocumentPermissions: ...

    def page_text(self, index: int) -> str | None: ...


def detect_file_type(path: Path) -> str:
    """Determine the MIME type of a file.

    Content sniffing wins over the file name: anything carrying the PDF
    header within its first KiB is a PDF.

    Args:
        path: File to inspect.

    Returns:
        A MIME type string.

    Raises:
        FileTypeError: If the file cannot be read.
    """
    try:
        with path.open("rb") as f:
            head = f.read(SNIFF_SIZE)
    except OSError as e:
        raise FileTypeError(f"Cannot determine file type for '{path}': {e}") from e

    if PDF_MAGIC_BYTES in head:
        return PDF_MIME_TYPE

    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or UNKNOWN_MIME_TYPE


def is_pdf_type(type_id: str) -> bool:
    """Return True if a MIME type identifies a PDF."""
    return type_id == PDF_MIME_TYPE


def _has_permission(flags: int, permission: UserAccessPermissions) -> bool:
    return bool(flags & int(permission))


def _read_permissions(reader: PdfReader) -> DocumentPermissions:
    """Decode the /P entry of the encryption dictionary.

    Args:
        reader: Reader for an encrypted document.

    Returns:
        Permissions granted to the user.
    """
    try:
        encrypt = reader.trailer["/Encrypt"].get_object()
        flags = int(encrypt["/P"])
    except (KeyError, PdfReadError) as e:
        logger.debug(f"Failed to read document permissions: {e}")
        return DocumentPermissions()

    return DocumentPermissions(
        allows_copying=_has_permission(flags, UserAccessPermissions.EXTRACT),
        allows_printing=_has_permission(flags, UserAccessPermissions.PRINT),
        allows_changes=_has_permission(flags, UserAccessPermissions.MODIFY),
        allows_assembly=_has_permission(flags, UserAccessPermissions.ASSEMBLE_DOC),
        allows_commenting=_has_permission(flags, UserAccessPermissions.ADD_OR_MODIFY),
    )


class PdfDocument:
    """A PDF file opened with pypdf.

    Attributes:
        path: Location of the file.
        encrypted: Whether the file is encrypted.
        locked: Whether the file is encrypted and could not be opened with
            an empty user password.
        permissions: Capabilities granted to the user.
    """

    def __init__(self, path: Path, reader: PdfReader) -> None:
        self.path = path
        self._reader = reader
        self.encrypted = reader.is_encrypted
        self.locked = False
        self.permissions = DocumentPermissions()

        if self.encrypted:
            try:
                self.locked = not reader.decrypt("")
            except (NotImplementedError, PdfReadError) as e:
                logger.debug(f"Failed to decrypt {path.name}: {e}")
                self.locked = True
            self.permissions = _read_permissions(reader)

    @classmethod
    def open(cls, path: Path) -> "PdfDocument":
        """Open a PDF file.

        Args:
            path: Path to the PDF.

        Returns:
            The opened document.

        Raises:
            DocumentError: If the file is not a readable PDF.
        """
        try:
            reader = PdfReader(path)
        except (PdfReadError, PdfStreamError) as e:
            raise DocumentError(f"Not a valid PDF: '{path}': {e}") from e
        except OSError as e:
            raise DocumentError(f"Cannot read '{path}': {e}") from e
        except Exception as e:
            raise DocumentError(f"Failed to read PDF '{path}': {e}") from e

        return cls(path, reader)

    @property
    def page_count(self) -> int | None:
        """Number of pages, or None when it cannot be determined."""
        try:
            if self.locked:
                return self._declared_page_count()
            return len(self._reader.pages)
        except Exception as e:
            logger.debug(f"Failed to count pages of {self.path.name}: {e}")
            return None

    def _declared_page_count(self) -> int:
        """Read /Count from the page tree root without decrypting.

        Only strings and streams are encrypted, so the page tree of a locked
        document can still be read as stored.
        """
        reader = self._reader
        try:
            reader._override_encryption = True
            return int(reader.trailer["/Root"]["/Pages"]["/Count"])
        finally:
            reader._override_encryption = False

    def page_text(self, index: int) -> str | None:
        """Extract the text of one page.

        Args:
            index: 1-based page number.

        Returns:
            The raw page text, or None when the page has no extractable text.
        """
        page_count = self.page_count
        if page_count is None or index < 1 or index > page_count:
            return None

        try:
            return self._reader.pages[index - 1].extract_text()
        except Exception as e:
            logger.debug(f"Failed to extract text from page {index}: {e}")
            return None

    def close(self) -> None:
        self._reader.close()

    def __enter__(self) -> "PdfDocument":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
