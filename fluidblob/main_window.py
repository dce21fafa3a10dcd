"""
Main window — assembles the blob canvas, control panel, and menu bar.
"""

from __future__ import annotations

import logging
import os

from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import (
    QAction,
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QMessageBox,
    QWidget,
)

from . import __version__
from .canvas import FluidCanvas
from .controls import ControlPanel
from .engine import PointField

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Top-level window for the Fluid Blob background."""

    def __init__(self, field: PointField, render_scale: float = 0.25) -> None:
        super().__init__()
        self.setWindowTitle(f"Fluid Blob  v{__version__}")
        self.setMinimumSize(720, 480)

        self.field = field
        self.canvas = FluidCanvas(field, render_scale)
        self.controls = ControlPanel(self.canvas, field)

        # Layout
        central = QWidget()
        self.setCentralWidget(central)
        h_layout = QHBoxLayout(central)
        h_layout.setContentsMargins(0, 0, 0, 0)
        h_layout.setSpacing(0)
        h_layout.addWidget(self.canvas, stretch=1)
        h_layout.addWidget(self.controls)

        self._build_menu()
        self.statusBar().showMessage("Move the mouse to stir the colours")

        # Signals
        self.controls.save_requested.connect(self._save)
        self.controls.record_requested.connect(self._record)
        self.canvas.recording_finished.connect(self._on_recorded)
        self.canvas.recording_failed.connect(self._on_record_failed)

    def _build_menu(self) -> None:
        menu = self.menuBar()

        file_menu = menu.addMenu("&File")
        save_act = QAction("&Save Image…", self)
        save_act.setShortcut(QKeySequence.Save)
        save_act.triggered.connect(self._save)
        file_menu.addAction(save_act)
        record_act = QAction("&Record Clip…", self)
        record_act.setShortcut(QKeySequence("Ctrl+Shift+R"))
        record_act.triggered.connect(self._record)
        file_menu.addAction(record_act)
        file_menu.addSeparator()
        quit_act = QAction("&Quit", self)
        quit_act.setShortcut(QKeySequence.Quit)
        quit_act.triggered.connect(self.close)
        file_menu.addAction(quit_act)

        edit_menu = menu.addMenu("&Edit")
        pause_act = QAction("&Pause / Resume", self)
        pause_act.setShortcut(QKeySequence("Space"))
        pause_act.triggered.connect(self._toggle_pause)
        edit_menu.addAction(pause_act)
        reset_act = QAction("Reset &Defaults", self)
        reset_act.setShortcut(QKeySequence("Ctrl+R"))
        reset_act.triggered.connect(self.controls._on_reset)
        edit_menu.addAction(reset_act)
        random_act = QAction("Randomise &Colours", self)
        random_act.setShortcut(QKeySequence("C"))
        random_act.triggered.connect(self.controls._on_randomise)
        edit_menu.addAction(random_act)

        view_menu = menu.addMenu("&View")
        panel_act = QAction("Show &Controls", self)
        panel_act.setCheckable(True)
        panel_act.setChecked(True)
        panel_act.setShortcut(QKeySequence("Ctrl+H"))
        panel_act.toggled.connect(self.controls.setVisible)
        view_menu.addAction(panel_act)

        help_menu = menu.addMenu("&Help")
        about_act = QAction("&About", self)
        about_act.triggered.connect(self._about)
        help_menu.addAction(about_act)

    def _save(self) -> None:
        img = self.canvas.get_image()
        if img is None:
            QMessageBox.warning(self, "Save Error", "No image to save yet.")
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Background Image", "blurred_background.png",
            "PNG (*.png);;JPEG (*.jpg);;All (*)",
        )
        if path:
            if img.save(path):
                self.statusBar().showMessage(f"Saved to {path}")
            else:
                QMessageBox.critical(self, "Save Error", f"Failed to save:\n{path}")

    def _record(self) -> None:
        if self.canvas.recorder.recording:
            QMessageBox.information(self, "Recording", "A clip is already being recorded.")
            return
        directory = QFileDialog.getExistingDirectory(self, "Record Clip Into")
        if not directory:
            return
        target = os.path.join(directory, "fluidblob_recording")
        try:
            self.canvas.start_recording(target)
        except (OSError, RuntimeError) as e:
            logger.error("Cannot start recording: %s", e)
            QMessageBox.warning(self, "Recording Unavailable", f"Recording not supported:\n{e}")
            return
        self.statusBar().showMessage(
            f"Recording {self.canvas.recorder.duration:.0f}s clip…"
        )

    def _on_recorded(self, paths: list) -> None:
        if paths:
            folder = os.path.dirname(paths[0])
            self.statusBar().showMessage(f"Recorded {len(paths)} frames to {folder}")
        else:
            self.statusBar().showMessage("Recording finished with no frames")

    def _on_record_failed(self, message: str) -> None:
        QMessageBox.warning(self, "Recording Failed", f"Recording not supported:\n{message}")
        self.statusBar().showMessage("Recording failed")

    def _toggle_pause(self) -> None:
        self.controls._pause_btn.setChecked(not self.canvas.paused)

    def _about(self) -> None:
        QMessageBox.about(
            self,
            "About Fluid Blob",
            f"<h3>Fluid Blob v{__version__}</h3>"
            "<p>An ambient, mouse-reactive background of blurred, "
            "drifting colour blobs.</p>"
            "<ul>"
            "<li>Blobs near the cursor are pushed away</li>"
            "<li>Colour follows cursor distance through the palette</li>"
            "<li>While the mouse rests, blobs creep toward it</li>"
            "</ul>"
            "<p>The first palette entry is the page background; the rest "
            "form the colour ring.</p>",
        )
