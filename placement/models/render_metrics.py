from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from .geometry import Dimension


@dataclass(frozen=True)
class RenderMetrics:
    """
    Result of one render event.

    canvas_size: pixel footprint of the page as presented on screen
    page_size:   pixel footprint of the page at the renderer's reference scale

    Replaced wholesale on every render; never merged with an earlier value.
    """
    canvas_size: Dimension
    page_size: Dimension

    @property
    def is_degenerate(self) -> bool:
        return self.canvas_size.is_degenerate or self.page_size.is_degenerate

    def scale_factors(self) -> Tuple[float, float]:
        """Per-axis page/canvas ratio. Callers must check is_degenerate first."""
        return (
            self.page_size.width / self.canvas_size.width,
            self.page_size.height / self.canvas_size.height,
        )
