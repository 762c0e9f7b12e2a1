"""pdfview - display and search the text in PDF documents.

Combines pypdf for text extraction with a small post-processing pipeline
for command-line use.

Components:
    - parsing: PDF document access, file-type detection, page specs
    - text: page text normalization and line matching
    - processing: per-document page loop and metadata reporting
    - models: result and permission schemas
"""

__version__ = "0.3.0"
