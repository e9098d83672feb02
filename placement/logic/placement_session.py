"""
PlacementSession – glue between page renderer, gesture surface and the
coordinate mapper (no UI).

* recomputes the physical placement after every change and notifies subscribers
* a render event that arrives during a drag/resize is held back until the
  gesture ends, so one gesture never mixes old and new scale factors
* a new document resets the overlay; a page change keeps it but needs a
  fresh render before a placement is available again
"""
from __future__ import annotations

from typing import Any, Callable, List, Optional

from ..exceptions.errors import NoDocumentError
from ..models.geometry import Dimension
from ..models.overlay_geometry import OverlayGeometry
from ..models.physical_placement import PhysicalPlacement
from .coordinate_mapper import CoordinateMapper
from .page_navigator import PageNavigator

_FEATURE_ID = "placement"

PlacementCallback = Callable[[Optional[PhysicalPlacement]], None]


def _default_logger() -> Any:
    # lazy: importing the logger opens the configured log database
    from core.logging.logic.logger import logger
    return logger


class PlacementSession:
    GESTURE_NONE = "none"
    GESTURE_DRAG = "drag"
    GESTURE_RESIZE = "resize"

    def __init__(
        self,
        *,
        default_overlay: Optional[OverlayGeometry] = None,
        logger: Optional[Any] = None,
    ) -> None:
        self._default_overlay = default_overlay or OverlayGeometry.default()
        self._logger = logger if logger is not None else _default_logger()
        self._navigator: Optional[PageNavigator] = None
        self._mapper: Optional[CoordinateMapper] = None
        self._document_name: Optional[str] = None
        self._gesture = self.GESTURE_NONE
        self._pending_render: Optional[tuple[Dimension, Dimension]] = None
        self._placement: Optional[PhysicalPlacement] = None
        self._subscribers: List[PlacementCallback] = []

    # ------------------------------------------------------------------ observers
    def subscribe(self, callback: PlacementCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: PlacementCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _publish(self) -> None:
        for cb in list(self._subscribers):
            cb(self._placement)

    # ------------------------------------------------------------------ accessors
    def _require_mapper(self) -> CoordinateMapper:
        if self._mapper is None:
            raise NoDocumentError("No document loaded")
        return self._mapper

    def _require_navigator(self) -> PageNavigator:
        if self._navigator is None:
            raise NoDocumentError("No document loaded")
        return self._navigator

    @property
    def has_document(self) -> bool:
        return self._mapper is not None

    @property
    def document_name(self) -> Optional[str]:
        return self._document_name

    @property
    def navigator(self) -> PageNavigator:
        return self._require_navigator()

    @property
    def mapper(self) -> CoordinateMapper:
        return self._require_mapper()

    @property
    def overlay(self) -> OverlayGeometry:
        return self._require_mapper().overlay

    @property
    def placement(self) -> Optional[PhysicalPlacement]:
        return self._placement

    @property
    def gesture(self) -> str:
        return self._gesture

    @property
    def has_pending_render(self) -> bool:
        return self._pending_render is not None

    # ------------------------------------------------------------------ document / pages
    def load_document(self, total_pages: int, *, name: Optional[str] = None) -> None:
        """Start over with a new document: default overlay, page 1, no metrics."""
        self._navigator = PageNavigator(total_pages)
        self._mapper = CoordinateMapper(page_index=0, overlay=self._default_overlay)
        self._document_name = name
        self._gesture = self.GESTURE_NONE
        self._pending_render = None
        self._logger.log(
            _FEATURE_ID, "DocumentLoaded",
            reference_id=name, message=f"pages={total_pages}",
        )
        self._recompute()

    def _change_page(self, moved: bool) -> bool:
        if not moved:
            return False
        nav = self._require_navigator()
        self._mapper = CoordinateMapper.for_new_page(self._require_mapper(), nav.page_index)
        self._gesture = self.GESTURE_NONE
        self._pending_render = None
        self._logger.log(
            _FEATURE_ID, "PageChanged",
            reference_id=self._document_name, message=nav.label(),
        )
        self._recompute()
        return True

    def next_page(self) -> bool:
        return self._change_page(self._require_navigator().next())

    def previous_page(self) -> bool:
        return self._change_page(self._require_navigator().previous())

    def go_to_page(self, page_number: int) -> bool:
        return self._change_page(self._require_navigator().go_to(page_number))

    # ------------------------------------------------------------------ renderer events
    def on_page_rendered(self, page_size: Dimension, canvas_size: Dimension) -> None:
        mapper = self._require_mapper()
        if self._gesture != self.GESTURE_NONE:
            # last render wins; applied at gesture end
            self._pending_render = (page_size, canvas_size)
            return
        self._apply_render(mapper, page_size, canvas_size)
        self._recompute()

    def _apply_render(self, mapper: CoordinateMapper, page_size: Dimension, canvas_size: Dimension) -> None:
        mapper.on_page_rendered(page_size, canvas_size)
        if canvas_size.is_degenerate or page_size.is_degenerate:
            self._logger.log(
                _FEATURE_ID, "RenderWithheld", level="WARNING",
                reference_id=self._document_name,
                message=f"page={page_size} canvas={canvas_size}",
            )
        else:
            self._logger.log(
                _FEATURE_ID, "PageRendered", level="DEBUG",
                reference_id=self._document_name,
                message=(
                    f"index={mapper.page_index} page={page_size.width:.1f}x{page_size.height:.1f} "
                    f"canvas={canvas_size.width:.1f}x{canvas_size.height:.1f}"
                ),
            )

    def _flush_pending_render(self) -> None:
        if self._pending_render is None:
            return
        page_size, canvas_size = self._pending_render
        self._pending_render = None
        self._apply_render(self._require_mapper(), page_size, canvas_size)

    # ------------------------------------------------------------------ gestures
    def begin_drag(self) -> None:
        self._require_mapper()
        self._gesture = self.GESTURE_DRAG

    def drag(self, delta_x: float, delta_y: float) -> None:
        self._require_mapper().on_drag(delta_x, delta_y)
        self._recompute()

    def end_drag(self) -> None:
        self._require_mapper()
        self._end_gesture("DragStop")

    def begin_resize(self) -> None:
        self._require_mapper()
        self._gesture = self.GESTURE_RESIZE

    def resize_stop(self, new_width: float, new_height: float) -> None:
        self._require_mapper().on_resize_stop(new_width, new_height)
        self._end_gesture("ResizeStop")

    def cancel_gesture(self) -> None:
        """Gesture abandoned without a stop event: only release held-back renders."""
        if self._mapper is None or self._gesture == self.GESTURE_NONE:
            return
        self._gesture = self.GESTURE_NONE
        self._flush_pending_render()
        self._recompute()

    def _end_gesture(self, event: str) -> None:
        self._gesture = self.GESTURE_NONE
        self._flush_pending_render()
        self._recompute()
        self._logger.log(
            _FEATURE_ID, event,
            reference_id=self._document_name,
            message=self._placement.format() if self._placement else "placement unavailable",
        )

    # ------------------------------------------------------------------ internals
    def _recompute(self) -> None:
        self._placement = self._mapper.compute_physical_placement() if self._mapper else None
        self._publish()
