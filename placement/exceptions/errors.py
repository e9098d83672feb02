"""Placement feature exceptions."""
from __future__ import annotations


class PlacementError(Exception):
    """Base exception for the placement feature."""


class DocumentLoadError(PlacementError):
    """Raised when a PDF cannot be opened or parsed."""


class PageOutOfRangeError(PlacementError):
    """Raised when a page index outside the document is requested."""

    def __init__(self, index: int, page_count: int) -> None:
        super().__init__(f"Page index {index} out of range (document has {page_count} pages)")
        self.index = index
        self.page_count = page_count


class NoDocumentError(PlacementError):
    """Raised when a session operation needs a loaded document."""
