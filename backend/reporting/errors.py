"""Exception hierarchy for the document export pipeline.

Every error is fail-fast and non-retriable; callers decide how to surface it.
"""
from __future__ import annotations


class ExportError(Exception):
    """Base exception for all export pipeline errors."""


class ElementNotFoundError(ExportError):
    """Raised when the requested render source does not exist on the host."""

    def __init__(self, element_id: str) -> None:
        super().__init__(f"Element not found: {element_id!r}")
        self.element_id = element_id


class PopupBlockedError(ExportError):
    """Raised when the platform refuses to open a transient print surface."""

    def __init__(self, message: str = "Print window was blocked. Please allow popups for this site and try again.") -> None:
        super().__init__(message)


class RasterizationError(ExportError):
    """Raised when capturing or encoding a document into PDF pages fails."""


class SerializationError(ExportError):
    """Raised when a record set cannot be encoded as CSV."""
