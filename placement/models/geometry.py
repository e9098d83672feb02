from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Dimension:
    """Width/height pair. Pixels or millimeters, never mixed within one context."""
    width: float = 0.0
    height: float = 0.0

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def scaled(self, sx: float, sy: float) -> "Dimension":
        return Dimension(self.width * sx, self.height * sy)


@dataclass(frozen=True)
class Position:
    """Top-left corner in pixel space, origin at the canvas top-left. May be negative mid-drag."""
    x: float = 0.0
    y: float = 0.0

    def moved(self, dx: float, dy: float) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def scaled(self, sx: float, sy: float) -> "Position":
        return Position(self.x * sx, self.y * sy)
