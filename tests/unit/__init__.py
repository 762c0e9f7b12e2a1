"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: page specs, file-type detection, pypdf document adapter
    - text/: normalization and line matching
    - processing/: page loop and metadata lines
    - config and diagnostics

Uses in-memory fake documents instead of PDF files where possible.
Leverages pytest-check for multiple assertions per test.
"""
