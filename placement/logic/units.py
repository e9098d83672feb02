"""
Unit conversion between on-screen pixels and millimeters.

Pixels are CSS-style reference pixels (96 per inch). This is a fixed
constant and has nothing to do with the render scale of a page preview.
"""
from __future__ import annotations

MM_PER_INCH = 25.4
REFERENCE_DPI = 96.0
POINTS_PER_INCH = 72.0

# pdf points -> reference pixels; the renderer reports page sizes at this scale
REFERENCE_RENDER_SCALE = REFERENCE_DPI / POINTS_PER_INCH


def px_to_mm(px: float) -> float:
    # divide first: 96 px -> exactly 25.4 mm
    return px / REFERENCE_DPI * MM_PER_INCH


def points_to_px(pt: float) -> float:
    return pt * REFERENCE_RENDER_SCALE
