"""
CoordinateMapper – overlay pixel geometry -> physical placement in millimeters.

Two scale factors are kept strictly apart and applied in this order:
  1. page/canvas ratio per axis (layout-driven stretching of the preview)
  2. fixed px -> mm conversion at the reference DPI

The mapper serves exactly one page. A page or document change builds a new
instance instead of mutating this one.
"""
from __future__ import annotations

from threading import RLock
from typing import Optional, Tuple

from ..models.geometry import Dimension, Position
from ..models.overlay_geometry import OverlayGeometry
from ..models.physical_placement import PhysicalPlacement
from ..models.render_metrics import RenderMetrics
from .units import px_to_mm


class CoordinateMapper:
    """Tracks render metrics and overlay geometry; converts on demand."""

    def __init__(
        self,
        *,
        page_index: int = 0,
        overlay: Optional[OverlayGeometry] = None,
    ) -> None:
        self._lock = RLock()
        self._page_index = page_index
        self._metrics: Optional[RenderMetrics] = None
        self._overlay = overlay if overlay is not None else OverlayGeometry.default()

    @classmethod
    def for_new_page(cls, previous: "CoordinateMapper", page_index: int) -> "CoordinateMapper":
        """Fresh mapper for another page; keeps the overlay, drops the metrics."""
        return cls(page_index=page_index, overlay=previous.overlay)

    # ------------------------------------------------------------------ state
    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def metrics(self) -> Optional[RenderMetrics]:
        with self._lock:
            return self._metrics

    @property
    def overlay(self) -> OverlayGeometry:
        with self._lock:
            return self._overlay

    @property
    def has_metrics(self) -> bool:
        with self._lock:
            return self._metrics is not None and not self._metrics.is_degenerate

    def snapshot(self) -> Tuple[Optional[RenderMetrics], OverlayGeometry]:
        """Metrics and overlay read together."""
        with self._lock:
            return self._metrics, self._overlay

    # ------------------------------------------------------------------ events
    def on_page_rendered(self, page_size: Dimension, canvas_size: Dimension) -> None:
        metrics = RenderMetrics(canvas_size=canvas_size, page_size=page_size)
        with self._lock:
            self._metrics = metrics

    def on_drag(self, delta_x: float, delta_y: float) -> None:
        # no clamping here, the marker has to follow the pointer off-canvas
        with self._lock:
            self._overlay = OverlayGeometry(
                position=self._overlay.position.moved(delta_x, delta_y),
                dimension=self._overlay.dimension,
            )

    def on_resize_stop(self, new_width: float, new_height: float) -> None:
        with self._lock:
            self._overlay = OverlayGeometry(
                position=self._overlay.position,
                dimension=Dimension(float(new_width), float(new_height)),
            )

    # ------------------------------------------------------------------ conversion
    def compute_physical_placement(self) -> Optional[PhysicalPlacement]:
        """
        None while no usable metrics exist (before the first render, or a
        render reported a zero-sized page or canvas).
        """
        metrics, overlay = self.snapshot()
        if metrics is None or metrics.is_degenerate:
            return None

        sx, sy = metrics.scale_factors()
        real_pos: Position = overlay.position.scaled(sx, sy)
        real_dim: Dimension = overlay.dimension.scaled(sx, sy)

        return PhysicalPlacement(
            x=px_to_mm(max(0.0, real_pos.x)),
            y=px_to_mm(max(0.0, real_pos.y)),
            w=px_to_mm(real_dim.width),
            h=px_to_mm(real_dim.height),
            page_index=self._page_index,
        )
