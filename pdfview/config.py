"""Run configuration with environment variable loading.

Pydantic-based settings for a pdfview run: the per-run processing options
taken from the command line, and process defaults taken from the
environment (or a .env file).
"""

import os
from enum import Enum
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pdfview.parsing.page_spec import PageIndexSet

# Load environment variables from .env file
load_dotenv()


class MatchMode(str, Enum):
    """How matched lines are reported, highest precedence first."""

    LIST_ONLY_WHEN_NO_MATCH = "list_only_when_no_match"
    STOP_AT_FIRST = "stop_at_first"
    PER_PAGE_COUNT_MATCHING_ONLY = "per_page_count_matching_only"
    PER_PAGE_COUNT = "per_page_count"
    COUNT_ONLY = "count_only"
    PLAIN = "plain"

    @property
    def stops_at_first_match(self) -> bool:
        return self in (MatchMode.STOP_AT_FIRST, MatchMode.LIST_ONLY_WHEN_NO_MATCH)

    @property
    def counts_per_page(self) -> bool:
        return self in (MatchMode.PER_PAGE_COUNT, MatchMode.PER_PAGE_COUNT_MATCHING_ONLY)


class ProcessingConfig(BaseModel):
    """Options for processing documents, fixed for the whole run.

    Attributes:
        print_page_numbers: Prefix output lines with file name and page number.
        ignore_case: Match the expression case-insensitively.
        count_only: Print the number of matches per file.
        per_page_count: Print the number of matches per page.
        per_page_count_matching_only: Like per_page_count, skipping pages
            without matches.
        stop_at_first_match: Print the file name once a match is found.
        list_only_when_no_match: Print the file name when nothing matched.
        dehyphenate: Rejoin words split by hyphenated line breaks.
        raw_text: Leave smart quotes and dashes untouched.
        expression: Regular expression to search for.
        pages: Pages to visit (all pages when None).
        wrap_columns: Split lines longer than this many columns.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    print_page_numbers: bool = False
    ignore_case: bool = False
    count_only: bool = False
    per_page_count: bool = False
    per_page_count_matching_only: bool = False
    stop_at_first_match: bool = False
    list_only_when_no_match: bool = False
    dehyphenate: bool = False
    raw_text: bool = False
    expression: str | None = None
    pages: PageIndexSet | None = None
    wrap_columns: int | None = Field(default=None, ge=1)

    @model_validator(mode="before")
    @classmethod
    def apply_implied_flags(cls, data: Any) -> Any:
        """Turn on the flags implied by the more specific ones."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("list_only_when_no_match"):
            data["stop_at_first_match"] = True
        if data.get("per_page_count_matching_only"):
            data["per_page_count"] = True
        return data

    @field_validator("expression")
    @classmethod
    def validate_expression(cls, v: str | None) -> str | None:
        """Reject an empty search expression."""
        if v is not None and not v:
            raise ValueError("Empty expression")
        return v

    @property
    def match_mode(self) -> MatchMode:
        if self.list_only_when_no_match:
            return MatchMode.LIST_ONLY_WHEN_NO_MATCH
        if self.stop_at_first_match:
            return MatchMode.STOP_AT_FIRST
        if self.per_page_count_matching_only:
            return MatchMode.PER_PAGE_COUNT_MATCHING_ONLY
        if self.per_page_count:
            return MatchMode.PER_PAGE_COUNT
        if self.count_only:
            return MatchMode.COUNT_ONLY
        return MatchMode.PLAIN


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str) -> int | None:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


class AppSettings(BaseModel):
    """Process-wide defaults read from the environment.

    Attributes:
        log_level: Level for the application loggers (LOG_LEVEL).
        quiet: Suppress diagnostics by default (PDFVIEW_QUIET).
        wrap_columns: Default wrap width (PDFVIEW_WRAP_COLUMNS).
    """

    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING"),
        validate_default=True,
        description="Logging level name",
    )
    quiet: bool = Field(
        default_factory=lambda: _env_flag("PDFVIEW_QUIET"),
        description="Suppress error and warning messages",
    )
    wrap_columns: int | None = Field(
        default_factory=lambda: _env_int("PDFVIEW_WRAP_COLUMNS"),
        ge=1,
        validate_default=True,
        description="Wrap lines longer than this many columns",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the level name and reject unknown levels."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


def get_app_settings() -> AppSettings:
    """Create application settings from the environment.

    Returns:
        Configured AppSettings instance.

    Raises:
        ValueError: If an environment variable holds an invalid value.
    """
    return AppSettings()
