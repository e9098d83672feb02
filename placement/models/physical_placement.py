from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PhysicalPlacement:
    """
    Signature rectangle in millimeters on the document page, origin top-left.
    Read-only output; always recomputed, never patched.
    """
    x: float
    y: float
    w: float
    h: float
    page_index: Optional[int] = None   # 0-based

    def as_dict(self) -> dict:
        """Hand-off mapping for the stamping step."""
        return {
            "page_index": self.page_index,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
        }

    def format(self, precision: int = 2) -> str:
        page = "?" if self.page_index is None else str(self.page_index + 1)
        return (
            f"page {page}: x={self.x:.{precision}f} mm, y={self.y:.{precision}f} mm, "
            f"w={self.w:.{precision}f} mm, h={self.h:.{precision}f} mm"
        )
