"""Pytest fixtures and shared test configuration.

Fixtures:
    - make_document: in-memory documents with given page texts
    - make_pdf: real PDF files with one text line per page line
    - make_encrypted_pdf: pypdf-encrypted PDF files
    - diagnostics: quiet-off diagnostics writing to a buffer
"""

import io
from collections.abc import Callable
from pathlib import Path

import pytest
from pypdf import PdfWriter
from pypdf.constants import UserAccessPermissions

from pdfview.diagnostics import Diagnostics
from pdfview.models.schemas import DocumentPermissions


class FakeDocument:
    """Document backed by a list of page texts."""

    def __init__(
        self,
        pages: list[str | None] | None,
        encrypted: bool = False,
        locked: bool = False,
        permissions: DocumentPermissions | None = None,
    ) -> None:
        self.pages = pages
        self.encrypted = encrypted
        self.locked = locked
        self.permissions = permissions or DocumentPermissions()
        self.requested: list[int] = []

    @property
    def page_count(self) -> int | None:
        return len(self.pages) if self.pages is not None else None

    def page_text(self, index: int) -> str | None:
        self.requested.append(index)
        return self.pages[index - 1]


def _escape(line: str) -> str:
    return line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf_bytes(pages: list[str]) -> bytes:
    """Build a minimal PDF using Helvetica, one text line per line of input."""
    page_ids = [4 + 2 * i for i in range(len(pages))]
    kids = " ".join(f"{page_id} 0 R" for page_id in page_ids)
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for page_id, text in zip(page_ids, pages):
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {page_id + 1} 0 R >>"
            ).encode()
        )
        ops = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
        if text:
            ops.extend(f"({_escape(line)}) Tj T*" for line in text.split("\n"))
        ops.append("ET")
        stream = "\n".join(ops).encode("latin-1")
        objects.append(
            b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return bytes(out)


@pytest.fixture
def make_document() -> Callable[..., FakeDocument]:
    """Return a factory for in-memory documents.

    Returns:
        Callable taking page texts and optional flags.
    """
    return FakeDocument


@pytest.fixture
def make_pdf(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing text PDFs into a temporary directory.

    Args:
        tmp_path: Per-test temporary directory.

    Returns:
        Callable taking page texts and a file name, returning the path.
    """

    def _make(pages: list[str], name: str = "doc.pdf") -> Path:
        path = tmp_path / name
        path.write_bytes(build_pdf_bytes(pages))
        return path

    return _make


@pytest.fixture
def make_encrypted_pdf(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing encrypted single-page PDFs.

    Args:
        tmp_path: Per-test temporary directory.

    Returns:
        Callable taking a user password and permission flags.
    """

    def _make(
        user_password: str = "",
        permissions: UserAccessPermissions = UserAccessPermissions.PRINT,
        name: str = "secure.pdf",
    ) -> Path:
        writer = PdfWriter()
        writer.add_blank_page(width=612, height=792)
        writer.encrypt(
            user_password=user_password,
            owner_password="owner-secret",
            permissions_flag=permissions,
        )
        path = tmp_path / name
        with path.open("wb") as f:
            writer.write(f)
        return path

    return _make


@pytest.fixture
def stderr_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def diagnostics(stderr_buffer: io.StringIO) -> Diagnostics:
    """Diagnostics writing to an in-memory buffer."""
    return Diagnostics(stream=stderr_buffer)
