import sys
import tkinter as tk
from tkinter import Frame, Label, X

from core.config.config_service import config_service
from core.logging.logic.logger import logger
import placement


class MainWindow(tk.Tk):
    def __init__(self, pdf_path=None):
        super().__init__()

        general = config_service.general
        self.title(f"{general.app_name} {general.version}".strip())
        self.geometry("1100x850")

        # Anzeige-Bereich (Mitte)
        self.display_area = Frame(self)
        self.display_area.pack(fill="both", expand=True)

        # Statusleiste (unten)
        self.status_bar = Label(self, text="Choose a PDF to start", anchor="w", bg="#eeeeee")
        self.status_bar.pack(side="bottom", fill=X)

        self.active_view = placement.create_feature_view(self.display_area)
        self.active_view.pack(fill="both", expand=True)
        self.set_status(placement.get_feature_name())
        logger.log("app", "Started", message=general.version)

        if pdf_path:
            # after the first layout pass, so fit modes see the real canvas size
            self.after(50, lambda: self.active_view.open_document(pdf_path))

        self.protocol("WM_DELETE_WINDOW", self.on_close)

    def set_status(self, message):
        """Aktualisiert die Statusleiste."""
        self.status_bar.config(text=message)

    def on_close(self):
        logger.log("app", "Stopped")
        logger.close()
        self.destroy()


def main():
    app = MainWindow(sys.argv[1] if len(sys.argv) > 1 else None)
    app.mainloop()


if __name__ == "__main__":
    main()
