from __future__ import annotations

import pytest

from placement.exceptions.errors import NoDocumentError
from placement.logic.placement_session import PlacementSession
from placement.logic.units import px_to_mm
from placement.models.geometry import Dimension, Position
from placement.models.overlay_geometry import OverlayGeometry


class RecordingLogger:
    def __init__(self) -> None:
        self.entries: list[tuple[str, str, dict]] = []

    def log(self, feature: str, event: str, **kwargs) -> None:
        self.entries.append((feature, event, kwargs))

    def events(self) -> list[str]:
        return [e for _, e, _ in self.entries]


PAGE = Dimension(816, 1056)


@pytest.fixture
def log() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def session(log: RecordingLogger) -> PlacementSession:
    s = PlacementSession(logger=log)
    s.load_document(3, name="contract.pdf")
    return s


def test_operations_need_a_document(log: RecordingLogger) -> None:
    s = PlacementSession(logger=log)
    assert not s.has_document
    assert s.placement is None
    with pytest.raises(NoDocumentError):
        s.drag(1, 1)
    with pytest.raises(NoDocumentError):
        s.on_page_rendered(PAGE, PAGE)
    with pytest.raises(NoDocumentError):
        s.next_page()


def test_placement_unavailable_until_first_render(session: PlacementSession) -> None:
    assert session.placement is None
    session.on_page_rendered(PAGE, PAGE)
    p = session.placement
    assert p is not None
    assert p.page_index == 0
    assert p.w == pytest.approx(px_to_mm(200))


def test_placement_is_recomputed_on_every_drag_tick(session: PlacementSession) -> None:
    seen = []
    session.subscribe(seen.append)
    session.on_page_rendered(PAGE, PAGE)
    session.begin_drag()
    session.drag(48, 0)
    session.drag(48, 96)
    session.end_drag()
    xs = [p.x for p in seen if p is not None]
    assert xs[-3:] == [pytest.approx(12.7), pytest.approx(25.4), pytest.approx(25.4)]
    assert session.placement.y == pytest.approx(25.4)


def test_render_during_drag_is_deferred_until_drag_stop(session: PlacementSession) -> None:
    session.on_page_rendered(PAGE, PAGE)
    session.begin_drag()
    session.drag(96, 0)
    # layout shrinks the preview to half size mid-gesture
    session.on_page_rendered(PAGE, Dimension(408, 528))
    assert session.has_pending_render
    session.drag(0, 0)
    assert session.placement.x == pytest.approx(25.4)  # still the old scale
    session.end_drag()
    assert not session.has_pending_render
    assert session.placement.x == pytest.approx(50.8)  # new scale after the gesture


def test_render_during_resize_is_deferred_until_resize_stop(session: PlacementSession) -> None:
    session.on_page_rendered(PAGE, PAGE)
    session.begin_resize()
    session.on_page_rendered(PAGE, Dimension(408, 528))
    session.on_page_rendered(PAGE, Dimension(204, 264))  # last render wins
    assert session.mapper.metrics.canvas_size == PAGE
    session.resize_stop(96, 48)
    assert session.mapper.metrics.canvas_size == Dimension(204, 264)
    assert session.placement.w == pytest.approx(4 * 25.4)
    assert session.placement.h == pytest.approx(2 * 25.4)


def test_cancelled_gesture_only_releases_pending_render(session: PlacementSession) -> None:
    session.on_page_rendered(PAGE, PAGE)
    session.begin_resize()
    session.on_page_rendered(PAGE, Dimension(408, 528))
    session.cancel_gesture()
    assert session.gesture == PlacementSession.GESTURE_NONE
    assert session.overlay.dimension == Dimension(200, 50)
    assert session.mapper.metrics.canvas_size == Dimension(408, 528)


def test_new_document_resets_overlay(session: PlacementSession) -> None:
    session.on_page_rendered(PAGE, PAGE)
    session.drag(70, 80)
    session.resize_stop(10, 10)
    session.next_page()
    session.load_document(1, name="other.pdf")
    assert session.overlay == OverlayGeometry.default()
    assert session.navigator.page_number == 1
    assert session.placement is None


def test_custom_default_overlay_is_used_on_load(log: RecordingLogger) -> None:
    s = PlacementSession(default_overlay=OverlayGeometry.default(100, 30), logger=log)
    s.load_document(1)
    assert s.overlay.dimension == Dimension(100, 30)


def test_page_change_keeps_overlay_and_needs_new_render(session: PlacementSession) -> None:
    session.on_page_rendered(PAGE, PAGE)
    session.drag(10, 20)
    assert session.next_page() is True
    assert session.placement is None
    assert session.overlay.position == Position(10, 20)
    session.on_page_rendered(PAGE, PAGE)
    assert session.placement.page_index == 1


def test_page_change_ends_an_unfinished_gesture(session: PlacementSession) -> None:
    session.on_page_rendered(PAGE, PAGE)
    session.begin_drag()
    assert session.next_page() is True
    assert session.gesture == PlacementSession.GESTURE_NONE
    session.on_page_rendered(PAGE, PAGE)
    assert not session.has_pending_render
    assert session.placement is not None
    assert session.placement.page_index == 1


def test_page_change_beyond_bounds_is_a_no_op(session: PlacementSession) -> None:
    session.on_page_rendered(PAGE, PAGE)
    assert session.previous_page() is False
    assert session.placement is not None
    assert session.go_to_page(3) is True
    assert session.next_page() is False
    assert session.navigator.page_index == 2


def test_degenerate_render_is_logged_as_warning(session: PlacementSession, log: RecordingLogger) -> None:
    session.on_page_rendered(PAGE, Dimension(0, 0))
    assert session.placement is None
    feature, event, kwargs = log.entries[-1]
    assert (feature, event) == ("placement", "RenderWithheld")
    assert kwargs["level"] == "WARNING"


def test_gesture_results_are_logged(session: PlacementSession, log: RecordingLogger) -> None:
    session.on_page_rendered(PAGE, PAGE)
    session.begin_drag()
    session.drag(1, 1)
    session.end_drag()
    session.begin_resize()
    session.resize_stop(50, 50)
    assert log.events()[0] == "DocumentLoaded"
    assert log.events()[-2:] == ["DragStop", "ResizeStop"]
    assert log.entries[-1][2]["reference_id"] == "contract.pdf"


def test_unsubscribe_stops_notifications(session: PlacementSession) -> None:
    seen = []
    session.subscribe(seen.append)
    session.unsubscribe(seen.append)
    session.on_page_rendered(PAGE, PAGE)
    assert seen == []
