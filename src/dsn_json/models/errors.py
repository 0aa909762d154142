"""Custom exception hierarchy for the DSN parser."""

from __future__ import annotations

from typing import Any


class DsnJsonError(Exception):
    """Base exception for all dsn-json errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class DsnReadError(DsnJsonError):
    """Text could not be read into an S-expression tree."""


class DepthLimitError(DsnReadError):
    """S-expression nesting exceeds the configured depth limit."""


class InvalidFileFormatError(DsnJsonError):
    """File is not a readable DSN document."""


class InvalidPathError(DsnJsonError):
    """File path is invalid or inaccessible."""


class SectionValidationError(DsnJsonError):
    """A recognised section does not match its schema."""

    def __init__(
        self,
        section: str,
        location: str = "",
        value: Any = None,
        reason: str = "",
    ):
        where = f"{section}.{location}" if location else section
        message = f"Invalid '{where}': {reason}" if reason else f"Invalid '{where}'"
        if value is not None:
            message += f" (got {value!r})"
        super().__init__(
            message,
            details={"section": section, "location": location, "value": value},
        )
        self.section = section
        self.location = location
        self.value = value
