"""Command-line entry point.

Displays, searches and counts the text of PDF files given on the command
line. The exit status is the number of files that could not be processed.
Defaults are read from the environment and the .env file (see config).
"""

import argparse
import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import NoReturn, TextIO

from pdfview import __version__
from pdfview.config import AppSettings, ProcessingConfig, get_app_settings
from pdfview.diagnostics import Diagnostics
from pdfview.parsing.page_spec import PageSpecError, parse_page_spec
from pdfview.parsing.pdf_document import (
    DocumentError,
    FileTypeError,
    PdfDocument,
    detect_file_type,
    is_pdf_type,
)
from pdfview.processing.metadata import report_metadata
from pdfview.processing.processor import PageProcessor

logger = logging.getLogger(__name__)

PROG = "pdfview"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class UsageError(Exception):
    """Raised when the command line cannot be used."""

    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        description="Display and search the text in PDF files.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-q", "--quiet", action="store_true", help="Do not print errors or warnings")
    parser.add_argument(
        "-n", "--page-numbers", action="store_true", help="Print the file name and page number"
    )
    parser.add_argument("-d", "--dehyphenate", action="store_true", help="Rejoin hyphenated words")
    parser.add_argument(
        "-r", "--raw", action="store_true", help="Do not replace smart quotes and dashes"
    )
    parser.add_argument("-e", "--expression", help="Print only lines matching this regex")
    parser.add_argument("-i", "--ignore-case", action="store_true", help="Match case-insensitively")
    parser.add_argument("-c", "--count", action="store_true", help="Print match counts per file")
    parser.add_argument(
        "-C", "--page-count", action="store_true", help="Print match counts per page"
    )
    parser.add_argument(
        "-M",
        "--page-count-matching",
        action="store_true",
        help="Print match counts only for pages with matches",
    )
    parser.add_argument(
        "-l", "--files-with-matches", action="store_true", help="List files that match"
    )
    parser.add_argument(
        "-L", "--files-without-match", action="store_true", help="List files that do not match"
    )
    parser.add_argument("-m", "--metadata", action="store_true", help="Print document metadata")
    parser.add_argument("-p", "--pages", help="Pages to process, e.g. 1,3-5 (first file only)")
    parser.add_argument("-w", "--wrap", type=int, metavar="COLS", help="Wrap lines longer than COLS")
    parser.add_argument("files", nargs="*", help="PDF files")
    return parser


def build_config(args: argparse.Namespace, settings: AppSettings) -> ProcessingConfig:
    """Build the processing options from parsed arguments.

    Args:
        args: Parsed command line.
        settings: Environment defaults.

    Returns:
        The run configuration.

    Raises:
        UsageError: If an option value is invalid.
    """
    if args.expression is not None and not args.expression:
        raise UsageError("Empty expression.")

    pages = None
    if args.pages is not None:
        try:
            pages = parse_page_spec(args.pages)
        except PageSpecError as e:
            raise UsageError(str(e)) from e

    wrap_columns = args.wrap if args.wrap is not None else settings.wrap_columns
    if wrap_columns is not None and wrap_columns < 1:
        raise UsageError(f"Invalid number of columns: {wrap_columns}")

    return ProcessingConfig(
        print_page_numbers=args.page_numbers,
        ignore_case=args.ignore_case,
        count_only=args.count,
        per_page_count=args.page_count,
        per_page_count_matching_only=args.page_count_matching,
        stop_at_first_match=args.files_with_matches,
        list_only_when_no_match=args.files_without_match,
        dehyphenate=args.dehyphenate,
        raw_text=args.raw,
        expression=args.expression,
        pages=pages,
        wrap_columns=wrap_columns,
    )


def process_file(
    file_arg: str,
    processor: PageProcessor,
    diagnostics: Diagnostics,
    out: TextIO,
    metadata_only: bool = False,
) -> bool:
    """Process one file named on the command line.

    Args:
        file_arg: Path as given by the user.
        processor: Shared page processor.
        diagnostics: Error and warning output.
        out: Standard output.
        metadata_only: Print the metadata line instead of the text.

    Returns:
        False if the file produced an error, True otherwise.
    """
    if not file_arg:
        diagnostics.error("Filename is empty.")
        return False

    path = Path(file_arg)
    if not path.is_file() or not os.access(path, os.R_OK):
        diagnostics.error(f"'{file_arg}' does not exist, or is not readable.")
        return False

    try:
        type_id = detect_file_type(path)
    except FileTypeError as e:
        diagnostics.warning(str(e))
        return True

    if not is_pdf_type(type_id):
        diagnostics.error(f"Not a PDF: '{file_arg}'")
        return False

    try:
        document = PdfDocument.open(path)
    except DocumentError as e:
        diagnostics.error(str(e))
        return False

    with document:
        page_count = document.page_count
        if page_count is None:
            diagnostics.error(f"Cannot count the pages of '{file_arg}'")
            return False
        if page_count < 1:
            diagnostics.error(f"PDF has no pages: '{file_arg}'")
            return False

        if metadata_only:
            out.write(report_metadata(document, path.name) + "\n")
            return True

        if document.locked:
            diagnostics.error(f"PDF is locked: '{file_arg}'")
            return False

        result = processor.process(document, path.name)
        logger.info(
            f"Processed {path.name}: {result.pages_visited} pages, "
            f"{result.total_matches} matches"
        )

    return True


def run(
    argv: list[str] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    settings: AppSettings | None = None,
) -> int:
    """Run pdfview.

    Args:
        argv: Command-line arguments, without the program name.
        stdout: Output stream (defaults to sys.stdout).
        stderr: Diagnostics stream (defaults to sys.stderr).
        settings: Environment defaults (loaded when not provided).

    Returns:
        The number of files (or usage problems) that produced an error.
    """
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr

    try:
        settings = settings or get_app_settings()
    except ValueError as e:
        Diagnostics(stream=err).error(f"Invalid environment settings: {e}")
        return 1

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # -h and --version
        return e.code if isinstance(e.code, int) else 0
    except UsageError as e:
        Diagnostics(quiet=settings.quiet, stream=err).error(str(e))
        parser.print_usage(err)
        return 1

    diagnostics = Diagnostics(quiet=args.quiet or settings.quiet, stream=err)
    try:
        config = build_config(args, settings)
    except UsageError as e:
        diagnostics.error(str(e))
        parser.print_usage(err)
        return 1

    if not args.files:
        diagnostics.error("No files specified.")
        parser.print_usage(err)
        return 1

    files = args.files
    if config.pages is not None and len(files) > 1:
        logger.debug(f"Page selection applies to the first file only; ignoring {len(files) - 1}")
        files = files[:1]

    processor = PageProcessor(config, out, diagnostics)
    errors = 0
    with _silenced_logging(diagnostics.quiet):
        for file_arg in files:
            if not process_file(
                file_arg, processor, diagnostics, out, metadata_only=args.metadata
            ):
                errors += 1

    return errors


@contextmanager
def _silenced_logging(quiet: bool) -> Iterator[None]:
    """Keep library log records (pypdf included) off stderr in quiet mode."""
    root = logging.getLogger()
    previous = root.level
    if quiet:
        root.setLevel(logging.CRITICAL + 1)
    try:
        yield
    finally:
        root.setLevel(previous)


def _best_effort_utf8_stdout() -> None:
    try:
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    except (AttributeError, ValueError):
        pass


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def main() -> None:
    """Console script entry point."""
    try:
        settings = get_app_settings()
    except ValueError as e:
        Diagnostics().error(f"Invalid environment settings: {e}")
        raise SystemExit(1) from e

    configure_logging(settings.log_level)
    _best_effort_utf8_stdout()
    raise SystemExit(run(sys.argv[1:], settings=settings))


if __name__ == "__main__":
    main()
