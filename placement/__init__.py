"""
Placement feature package.

Preview a PDF page, drag/resize a signature marker over it and read the
marker's physical position (mm) on the page for the stamping step.

The factories let a main window mount the feature without knowing its internals.
"""

from typing import Optional
import tkinter as tk


def get_feature_name() -> str:
    return "Signature placement"


def create_feature_view(parent: tk.Misc, app_context: Optional[object] = None) -> tk.Frame:
    """
    Factory for the placement view.

    Args:
        parent (tk.Misc): Tk container to mount the view onto.
        app_context (object, optional): Unused; accepted for a uniform factory signature.

    Returns:
        tk.Frame: The wired placement view.
    """
    from .gui.placement_view import PlacementView  # lazy: the view pulls in PIL.ImageTk

    return PlacementView(parent)
