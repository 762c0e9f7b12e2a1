"""Pydantic models shared across the pipeline.

Models:
    - DocumentPermissions: capabilities granted by a PDF
    - ProcessResult: per-document match totals
"""

from pdfview.models.schemas import DocumentPermissions, ProcessResult

__all__ = ["DocumentPermissions", "ProcessResult"]
