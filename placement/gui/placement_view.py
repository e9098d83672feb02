from __future__ import annotations
import tkinter as tk
from tkinter import ttk, filedialog, messagebox
from typing import Optional

from PIL import ImageTk

from core.config.config_service import config_service
from core.logging.logic.log_export_utils import logs_to_json
from core.logging.logic.logger import logger
from ..exceptions.errors import DocumentLoadError
from ..logic.page_renderer import PdfPageRenderer
from ..logic.placement_session import PlacementSession
from ..models.overlay_geometry import OverlayGeometry
from ..models.physical_placement import PhysicalPlacement


class PlacementView(ttk.Frame):
    """
    Vorschau + Platzierung:
      • PDF wählen, blättern, zoomen
      • Marker per Maus verschieben (Körper) oder skalieren (Griff unten rechts)
      • Ergebnis in mm für die aktuelle Seite
    """

    HANDLE = 8            # px, Griffgröße
    MIN_SIZE = 10         # px, kleinste Markergröße
    ZOOM_STEPS = ("50%", "75%", "100%", "125%", "150%", "200%")
    RERENDER_DELAY_MS = 120
    LOG_EXPORT_LIMIT = 200

    def __init__(self, parent: tk.Misc, *, session: Optional[PlacementSession] = None, **kwargs) -> None:
        super().__init__(parent, **kwargs)
        cfg_p = config_service.placement
        self._render_cfg = config_service.render
        self._session = session or PlacementSession(
            default_overlay=OverlayGeometry.default(cfg_p.default_width, cfg_p.default_height)
        )
        self._session.subscribe(self._on_placement)

        self._renderer: Optional[PdfPageRenderer] = None
        self._page_tk: Optional[ImageTk.PhotoImage] = None
        self._pdf_path = tk.StringVar(value="")
        self._page_label = tk.StringVar(value="—")
        self._zoom = tk.StringVar(value=f"{int(round(self._render_cfg.zoom * 100))}%")

        self._out = {k: tk.StringVar(value="—") for k in ("page", "x", "y", "w", "h")}

        # gesture state (pixel space)
        self._mode: Optional[str] = None
        self._last = (0, 0)
        self._resize_preview = (0.0, 0.0)
        self._rerender_job: Optional[str] = None

        self._make_ui()

    # ------------------------------------------------------------------ UI
    def _make_ui(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        bar = ttk.Frame(self)
        bar.grid(row=0, column=0, columnspan=2, sticky="ew", padx=10, pady=(10, 6))
        bar.columnconfigure(0, weight=1)

        ttk.Entry(bar, textvariable=self._pdf_path, state="readonly").grid(row=0, column=0, sticky="ew")
        ttk.Button(bar, text="Choose PDF…", command=self._browse).grid(row=0, column=1, padx=(6, 12))

        self._btn_prev = ttk.Button(bar, text="Previous", command=self._previous, state="disabled")
        self._btn_prev.grid(row=0, column=2)
        ttk.Label(bar, textvariable=self._page_label, width=14, anchor="center").grid(row=0, column=3, padx=6)
        self._btn_next = ttk.Button(bar, text="Next", command=self._next, state="disabled")
        self._btn_next.grid(row=0, column=4)

        zoom = ttk.Combobox(bar, textvariable=self._zoom, values=self.ZOOM_STEPS, state="readonly", width=6)
        zoom.grid(row=0, column=5, padx=(12, 0))
        zoom.bind("<<ComboboxSelected>>", lambda e: self._render_page())

        self._canvas = tk.Canvas(self, bg="#f8f8f8", highlightthickness=1, highlightbackground="#888")
        self._canvas.grid(row=1, column=0, sticky="nsew", padx=(10, 6), pady=(0, 10))
        self._canvas.bind("<ButtonPress-1>", self._on_press)
        self._canvas.bind("<B1-Motion>", self._on_motion)
        self._canvas.bind("<ButtonRelease-1>", self._on_release)
        self._canvas.bind("<Configure>", self._on_canvas_resized)
        self.bind_all("<Escape>", self._on_escape)

        side = ttk.LabelFrame(self, text="Signature placement")
        side.grid(row=1, column=1, sticky="n", padx=(0, 10), pady=(0, 10))
        for row, (key, title) in enumerate(
            (("page", "Page"), ("x", "X (mm)"), ("y", "Y (mm)"), ("w", "Width (mm)"), ("h", "Height (mm)"))
        ):
            ttk.Label(side, text=title).grid(row=row, column=0, sticky="w", padx=8, pady=2)
            ttk.Label(side, textvariable=self._out[key], width=10, anchor="e").grid(
                row=row, column=1, sticky="e", padx=8, pady=2
            )
        ttk.Button(side, text="Copy", command=self._copy).grid(row=5, column=0, columnspan=2, pady=(8, 4))
        ttk.Separator(side).grid(row=6, column=0, columnspan=2, sticky="ew", padx=8, pady=4)
        ttk.Button(side, text="Copy log", command=self._copy_log).grid(row=7, column=0, padx=(8, 2), pady=(4, 8))
        ttk.Button(side, text="Clear log", command=self._clear_log).grid(row=7, column=1, padx=(2, 8), pady=(4, 8))

    # ------------------------------------------------------------------ document / pages
    def _browse(self) -> None:
        p = filedialog.askopenfilename(parent=self, filetypes=[("PDF", "*.pdf")], title="Choose PDF")
        if p:
            self.open_document(p)

    def open_document(self, path: str) -> None:
        try:
            renderer = PdfPageRenderer(path)
        except DocumentLoadError as exc:
            messagebox.showerror("PDF", str(exc), parent=self)
            return
        if self._renderer is not None:
            self._renderer.close()
        self._renderer = renderer
        self._pdf_path.set(path)
        self._session.load_document(renderer.page_count, name=renderer.path.name)
        self._render_page()

    def _previous(self) -> None:
        if self._session.previous_page():
            self._render_page()

    def _next(self) -> None:
        if self._session.next_page():
            self._render_page()

    def _zoom_factor(self) -> float:
        try:
            return float(self._zoom.get().rstrip("%")) / 100.0
        except ValueError:
            return 1.0

    def _render_page(self) -> None:
        self._rerender_job = None
        if self._renderer is None:
            return
        nav = self._session.navigator
        box = None
        if self._render_cfg.fit_mode != "none":
            cw = max(1, self._canvas.winfo_width() - 2)
            ch = max(1, self._canvas.winfo_height() - 2)
            box = (
                min(cw, self._render_cfg.max_canvas_width),
                min(ch, self._render_cfg.max_canvas_height),
            )
        rendered = self._renderer.render(
            nav.page_index, zoom=self._zoom_factor(), box=box, fit_mode=self._render_cfg.fit_mode
        )
        self._page_tk = ImageTk.PhotoImage(rendered.image)
        self._canvas.delete("page")
        self._canvas.create_image(0, 0, image=self._page_tk, anchor="nw", tags="page")
        self._canvas.tag_lower("page")

        self._page_label.set(nav.label())
        self._btn_prev.config(state="normal" if nav.can_go_previous else "disabled")
        self._btn_next.config(state="normal" if nav.can_go_next else "disabled")

        self._session.on_page_rendered(rendered.page_size, rendered.canvas_size)
        self._draw_overlay()

    def _on_canvas_resized(self, _event) -> None:
        if self._renderer is None or self._render_cfg.fit_mode == "none":
            return
        if self._rerender_job is not None:
            self.after_cancel(self._rerender_job)
        self._rerender_job = self.after(self.RERENDER_DELAY_MS, self._render_page)

    # ------------------------------------------------------------------ overlay
    def _draw_overlay(self, size: Optional[tuple[float, float]] = None) -> None:
        self._canvas.delete("overlay")
        if not self._session.has_document:
            return
        ov = self._session.overlay
        x0, y0 = ov.position.x, ov.position.y
        w, h = size if size else (ov.dimension.width, ov.dimension.height)
        self._canvas.create_rectangle(
            x0, y0, x0 + w, y0 + h, fill="#D6EBFF", outline="#0A84FF", width=2, tags=("overlay", "body")
        )
        self._canvas.create_text(
            x0 + w / 2, y0 + h / 2, text="Signature here", font=("Segoe UI", 9, "bold"), tags="overlay"
        )
        hs = self.HANDLE
        self._canvas.create_rectangle(
            x0 + w - hs, y0 + h - hs, x0 + w, y0 + h, fill="#0A84FF", outline="", tags=("overlay", "handle")
        )

    def _hit(self, x: float, y: float) -> Optional[str]:
        ov = self._session.overlay
        x0, y0 = ov.position.x, ov.position.y
        x1, y1 = x0 + ov.dimension.width, y0 + ov.dimension.height
        if x1 - self.HANDLE <= x <= x1 and y1 - self.HANDLE <= y <= y1:
            return PlacementSession.GESTURE_RESIZE
        if x0 <= x <= x1 and y0 <= y <= y1:
            return PlacementSession.GESTURE_DRAG
        return None

    # ------------------------------------------------------------------ gestures
    def _on_press(self, e) -> None:
        if not self._session.has_document:
            return
        self._mode = self._hit(e.x, e.y)
        self._last = (e.x, e.y)
        if self._mode == PlacementSession.GESTURE_DRAG:
            self._session.begin_drag()
        elif self._mode == PlacementSession.GESTURE_RESIZE:
            dim = self._session.overlay.dimension
            self._resize_preview = (dim.width, dim.height)
            self._session.begin_resize()

    def _on_motion(self, e) -> None:
        if self._mode == PlacementSession.GESTURE_DRAG:
            dx, dy = e.x - self._last[0], e.y - self._last[1]
            self._last = (e.x, e.y)
            self._session.drag(dx, dy)
            self._draw_overlay()
        elif self._mode == PlacementSession.GESTURE_RESIZE:
            pos = self._session.overlay.position
            self._resize_preview = (
                max(self.MIN_SIZE, e.x - pos.x),
                max(self.MIN_SIZE, e.y - pos.y),
            )
            self._draw_overlay(size=self._resize_preview)

    def _on_release(self, _e) -> None:
        if self._mode == PlacementSession.GESTURE_DRAG:
            self._session.end_drag()
        elif self._mode == PlacementSession.GESTURE_RESIZE:
            self._session.resize_stop(*self._resize_preview)
        self._mode = None
        self._draw_overlay()

    def _on_escape(self, _e) -> None:
        if self._mode is None:
            return
        self._mode = None
        self._session.cancel_gesture()
        self._draw_overlay()

    # ------------------------------------------------------------------ output
    def _on_placement(self, placement: Optional[PhysicalPlacement]) -> None:
        if placement is None:
            for var in self._out.values():
                var.set("—")
            return
        self._out["page"].set(str(placement.page_index + 1))
        self._out["x"].set(f"{placement.x:.2f}")
        self._out["y"].set(f"{placement.y:.2f}")
        self._out["w"].set(f"{placement.w:.2f}")
        self._out["h"].set(f"{placement.h:.2f}")

    def _copy(self) -> None:
        placement = self._session.placement
        if placement is None:
            messagebox.showinfo("Info", "No placement available yet.", parent=self)
            return
        self.clipboard_clear()
        self.clipboard_append(placement.format())

    def _copy_log(self) -> None:
        entries = logger.query_logs(feature="placement", limit=self.LOG_EXPORT_LIMIT)
        if not entries:
            messagebox.showinfo("Info", "The placement log is empty.", parent=self)
            return
        self.clipboard_clear()
        self.clipboard_append(logs_to_json(entries))

    def _clear_log(self) -> None:
        if messagebox.askyesno("Clear log", "Delete all log entries?", parent=self):
            logger.clear_logs()

    def destroy(self) -> None:
        self.unbind_all("<Escape>")
        self._session.unsubscribe(self._on_placement)
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None
        super().destroy()
