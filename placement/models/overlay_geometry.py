from __future__ import annotations
from dataclasses import dataclass, field

from .geometry import Dimension, Position

DEFAULT_OVERLAY_WIDTH = 200.0
DEFAULT_OVERLAY_HEIGHT = 50.0


@dataclass(frozen=True)
class OverlayGeometry:
    """The marker rectangle in pixel space (what the user drags and resizes)."""
    position: Position = field(default_factory=Position)
    dimension: Dimension = field(
        default_factory=lambda: Dimension(DEFAULT_OVERLAY_WIDTH, DEFAULT_OVERLAY_HEIGHT)
    )

    @classmethod
    def default(cls, width: float = DEFAULT_OVERLAY_WIDTH, height: float = DEFAULT_OVERLAY_HEIGHT) -> "OverlayGeometry":
        return cls(position=Position(0.0, 0.0), dimension=Dimension(float(width), float(height)))
