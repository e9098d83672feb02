"""
PDF page renderer for the placement preview.

pypdf answers the geometry questions (page count, page box, rotation),
pypdfium2 rasterizes, Pillow scales the bitmap to the requested footprint.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import pypdfium2 as pdfium
from PIL import Image
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from ..exceptions.errors import DocumentLoadError, PageOutOfRangeError
from ..models.geometry import Dimension
from .units import points_to_px

FIT_MODES = ("none", "contain", "stretch")


@dataclass(frozen=True)
class RenderedPage:
    """One rasterized page plus the sizes the coordinate mapper needs."""
    index: int
    image: Image.Image
    page_size: Dimension     # intrinsic size in reference pixels
    canvas_size: Dimension   # achieved on-screen footprint (== image size)


class PdfPageRenderer:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        try:
            self._reader = PdfReader(str(self._path))
            self._page_count = len(self._reader.pages)
            self._pdf = pdfium.PdfDocument(str(self._path))
        except (OSError, PdfReadError, pdfium.PdfiumError) as exc:
            raise DocumentLoadError(f"Cannot open PDF '{self._path}': {exc}") from exc
        if self._page_count < 1:
            self._pdf.close()
            raise DocumentLoadError(f"PDF '{self._path}' has no pages")

    # ------------------------------------------------------------------ context
    def __enter__(self) -> "PdfPageRenderer":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        if self._pdf is not None:
            self._pdf.close()
            self._pdf = None

    # ------------------------------------------------------------------ geometry
    @property
    def path(self) -> Path:
        return self._path

    @property
    def page_count(self) -> int:
        return self._page_count

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._page_count:
            raise PageOutOfRangeError(index, self._page_count)

    def page_size_points(self, index: int) -> Tuple[float, float]:
        """Displayed page size in PDF points (crop box, rotation applied)."""
        self._check_index(index)
        page = self._reader.pages[index]
        box = page.cropbox  # falls back to mediabox
        w, h = float(box.width), float(box.height)
        if page.rotation % 180 == 90:
            w, h = h, w
        return w, h

    def page_size(self, index: int) -> Dimension:
        """Intrinsic page size in reference pixels (1 px = 1/96 inch)."""
        w_pt, h_pt = self.page_size_points(index)
        return Dimension(points_to_px(w_pt), points_to_px(h_pt))

    @staticmethod
    def canvas_size_for(
        page_size: Dimension,
        *,
        zoom: float = 1.0,
        box: Optional[Tuple[float, float]] = None,
        fit_mode: str = "contain",
    ) -> Dimension:
        """On-screen footprint for a page, rounded to whole pixels."""
        if fit_mode not in FIT_MODES:
            raise ValueError(f"Unknown fit mode: {fit_mode!r} (expected one of {FIT_MODES})")
        if zoom <= 0:
            raise ValueError(f"zoom must be > 0, got {zoom}")

        if fit_mode == "none" or box is None:
            w, h = page_size.width, page_size.height
        elif fit_mode == "contain":
            s = min(box[0] / page_size.width, box[1] / page_size.height)
            w, h = page_size.width * s, page_size.height * s
        else:  # stretch
            w, h = float(box[0]), float(box[1])

        return Dimension(float(max(1, round(w * zoom))), float(max(1, round(h * zoom))))

    # ------------------------------------------------------------------ render
    def render(
        self,
        index: int,
        *,
        zoom: float = 1.0,
        box: Optional[Tuple[float, float]] = None,
        fit_mode: str = "contain",
    ) -> RenderedPage:
        if self._pdf is None:
            raise DocumentLoadError(f"PDF '{self._path}' is closed")
        page_size = self.page_size(index)
        canvas = self.canvas_size_for(page_size, zoom=zoom, box=box, fit_mode=fit_mode)
        w_pt, h_pt = self.page_size_points(index)

        # rasterize at least at target resolution, then scale to the exact footprint
        scale = max(canvas.width / w_pt, canvas.height / h_pt)
        page = self._pdf[index]
        try:
            bitmap = page.render(scale=scale)
            pil = bitmap.to_pil()
        finally:
            page.close()

        target = (int(canvas.width), int(canvas.height))
        if pil.size != target:
            pil = pil.resize(target, Image.LANCZOS)

        return RenderedPage(index=index, image=pil, page_size=page_size, canvas_size=canvas)
