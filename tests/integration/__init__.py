"""Integration tests for the command line.

No mocks - runs the full pipeline on PDF files written to a temporary
directory, from argument parsing to stdout and the exit code.
"""
