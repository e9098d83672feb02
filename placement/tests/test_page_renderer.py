from __future__ import annotations

from pathlib import Path

import pytest
from pypdf import PdfWriter

from placement.exceptions.errors import DocumentLoadError, PageOutOfRangeError
from placement.logic.page_renderer import PdfPageRenderer
from placement.logic.placement_session import PlacementSession
from placement.models.geometry import Dimension

LETTER = (612, 792)   # pt
A4 = (595.28, 841.89)


@pytest.fixture
def pdf_path(tmp_path: Path) -> Path:
    writer = PdfWriter()
    writer.add_blank_page(width=LETTER[0], height=LETTER[1])
    writer.add_blank_page(width=A4[0], height=A4[1])
    rotated = writer.add_blank_page(width=LETTER[0], height=LETTER[1])
    rotated.rotate(90)
    path = tmp_path / "sample.pdf"
    with open(path, "wb") as fh:
        writer.write(fh)
    return path


def test_page_count_and_intrinsic_size(pdf_path: Path) -> None:
    with PdfPageRenderer(pdf_path) as r:
        assert r.page_count == 3
        assert r.page_size_points(0) == pytest.approx(LETTER)
        size = r.page_size(0)
        assert size.width == pytest.approx(816)
        assert size.height == pytest.approx(1056)


def test_rotated_page_swaps_width_and_height(pdf_path: Path) -> None:
    with PdfPageRenderer(pdf_path) as r:
        assert r.page_size_points(2) == pytest.approx((LETTER[1], LETTER[0]))


def test_render_without_fit_uses_page_size_times_zoom(pdf_path: Path) -> None:
    with PdfPageRenderer(pdf_path) as r:
        page = r.render(0, fit_mode="none", zoom=0.5)
        assert page.canvas_size == Dimension(408, 528)
        assert page.image.size == (408, 528)
        assert page.page_size.width == pytest.approx(816)


def test_render_contain_keeps_aspect_ratio(pdf_path: Path) -> None:
    with PdfPageRenderer(pdf_path) as r:
        page = r.render(0, box=(408, 2000), fit_mode="contain")
        assert page.canvas_size == Dimension(408, 528)
        assert page.image.size == (408, 528)


def test_render_stretch_fills_box_non_uniformly(pdf_path: Path) -> None:
    with PdfPageRenderer(pdf_path) as r:
        page = r.render(1, box=(300, 300), fit_mode="stretch")
        assert page.canvas_size == Dimension(300, 300)
        assert page.image.size == (300, 300)
        assert page.index == 1


def test_out_of_range_page_raises(pdf_path: Path) -> None:
    with PdfPageRenderer(pdf_path) as r:
        with pytest.raises(PageOutOfRangeError) as exc:
            r.render(3)
        assert exc.value.page_count == 3
        with pytest.raises(PageOutOfRangeError):
            r.page_size(-1)


def test_unknown_fit_mode_is_rejected() -> None:
    with pytest.raises(ValueError):
        PdfPageRenderer.canvas_size_for(Dimension(10, 10), fit_mode="cover", box=(5, 5))


def test_missing_file_raises_document_load_error(tmp_path: Path) -> None:
    with pytest.raises(DocumentLoadError):
        PdfPageRenderer(tmp_path / "missing.pdf")


def test_garbage_file_raises_document_load_error(tmp_path: Path) -> None:
    bad = tmp_path / "bad.pdf"
    bad.write_bytes(b"this is not a pdf")
    with pytest.raises(DocumentLoadError):
        PdfPageRenderer(bad)


class _SilentLogger:
    def log(self, feature: str, event: str, **kwargs) -> None:
        pass


@pytest.mark.parametrize("fit_mode", ["none", "contain", "stretch"])
@pytest.mark.parametrize("zoom", [0.5, 1.0, 1.5])
@pytest.mark.parametrize("box", [(424, 600), (300, 700)])
def test_overlay_covering_the_rendered_a4_page_measures_210_by_297_mm(
    pdf_path: Path, fit_mode: str, zoom: float, box: tuple[int, int]
) -> None:
    session = PlacementSession(logger=_SilentLogger())
    with PdfPageRenderer(pdf_path) as r:
        session.load_document(r.page_count, name=pdf_path.name)
        session.go_to_page(2)
        page = r.render(1, zoom=zoom, box=box, fit_mode=fit_mode)

    session.on_page_rendered(page.page_size, page.canvas_size)
    session.begin_resize()
    session.resize_stop(page.canvas_size.width, page.canvas_size.height)

    p = session.placement
    assert p is not None
    assert p.page_index == 1
    assert (p.x, p.y) == (0, 0)
    assert p.w == pytest.approx(210.0, abs=0.01)
    assert p.h == pytest.approx(297.0, abs=0.01)
