"""Exception types raised by the resolution engine."""

from __future__ import annotations

from typing import Optional


class DropperError(Exception):
    """Base class for resolution errors surfaced to callers."""


class SpecifierError(DropperError, ValueError):
    """Raised when a specifier string matches no recognized grammar form."""

    def __init__(self, raw: str, reason: Optional[str] = None):
        self.raw = raw
        self.reason = reason
        msg = f"Malformed package specifier '{raw}'"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class ExtractionError(DropperError):
    """Raised when release labels cannot be turned into versions."""


class UnparseableLabelError(ExtractionError):
    """A release label contains no version-like numeric run."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"No version number found in release label '{label}'")


class InconsistentColumnsError(ExtractionError):
    """The selected version column is missing for some label."""

    def __init__(self, column: int, label_index: int):
        self.column = column
        self.label_index = label_index
        super().__init__(
            f"Release label #{label_index} has no candidate at version column {column}"
        )


class SourceUnavailableError(DropperError):
    """The release source could not be fetched."""

    def __init__(self, source: str, url: str, status_code: int):
        self.source = source
        self.url = url
        self.status_code = status_code
        reason = "no response" if status_code == 0 else f"HTTP {status_code}"
        super().__init__(f"{source} request to {url} failed ({reason})")
