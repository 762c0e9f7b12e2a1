"""Test package for pdfview.

Provides coverage for all components with unit tests for isolated logic
and integration tests for the command line.

Structure:
    - unit/: Individual function and class tests
    - integration/: End-to-end runs against generated PDF files

PDF files are generated on the fly, so no binary fixtures are stored.
Leverages pytest with pytest-check for soft assertions.
"""
