from __future__ import annotations


class PageNavigator:
    """
    Current page within a document (1-based page_number, 0-based page_index).
    Moves beyond the first/last page are refused, not raised.
    """

    def __init__(self, total_pages: int, page_number: int = 1) -> None:
        if total_pages < 1:
            raise ValueError(f"total_pages must be >= 1, got {total_pages}")
        self._total = int(total_pages)
        self._page = self._clamp(page_number)

    def _clamp(self, page_number: int) -> int:
        return max(1, min(int(page_number), self._total))

    @property
    def total_pages(self) -> int:
        return self._total

    @property
    def page_number(self) -> int:
        return self._page

    @property
    def page_index(self) -> int:
        return self._page - 1

    @property
    def can_go_previous(self) -> bool:
        return self._page > 1

    @property
    def can_go_next(self) -> bool:
        return self._page < self._total

    def previous(self) -> bool:
        if not self.can_go_previous:
            return False
        self._page -= 1
        return True

    def next(self) -> bool:
        if not self.can_go_next:
            return False
        self._page += 1
        return True

    def go_to(self, page_number: int) -> bool:
        """Jump to page_number (clamped). Returns True if the page changed."""
        target = self._clamp(page_number)
        if target == self._page:
            return False
        self._page = target
        return True

    def label(self) -> str:
        return f"Page {self._page} of {self._total}"
