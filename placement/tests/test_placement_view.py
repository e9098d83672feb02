from __future__ import annotations

import tkinter as tk

import pytest

from placement.logic.placement_session import PlacementSession


class _SilentLogger:
    def log(self, feature: str, event: str, **kwargs) -> None:
        pass


@pytest.fixture
def root():
    try:
        win = tk.Tk()
    except tk.TclError:
        pytest.skip("no display available")
    win.withdraw()
    yield win
    win.destroy()


def test_destroy_releases_the_global_escape_binding(root: tk.Tk) -> None:
    from placement.gui.placement_view import PlacementView

    session = PlacementSession(logger=_SilentLogger())
    view = PlacementView(root, session=session)
    assert root.bind_all("<Escape>") != ""

    view.destroy()
    assert root.bind_all("<Escape>") == ""
