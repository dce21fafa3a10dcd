"""
Blob field canvas widget — animated display with QTimer-driven rendering.

Rendering happens in the main thread (numpy at reduced resolution) and
updates at ~60 fps.  Mouse tracking feeds the field's pointer state.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import numpy as np
from PyQt5.QtCore import QTimer, Qt, pyqtSignal
from PyQt5.QtGui import QColor, QImage, QPainter, QPixmap
from PyQt5.QtWidgets import QWidget

from .engine import PointField
from .recorder import FrameRecorder
from .renderer import render_frame

logger = logging.getLogger(__name__)


class FluidCanvas(QWidget):
    """Animated blob field display.

    Signals:
        fps_changed(float):          current rendering FPS
        recording_finished(list):    paths of a completed clip
        recording_failed(str):       error message of a failed clip
    """

    fps_changed = pyqtSignal(float)
    recording_finished = pyqtSignal(list)
    recording_failed = pyqtSignal(str)

    def __init__(
        self,
        field: PointField,
        render_scale: float = 0.25,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.field = field
        self.render_scale = render_scale
        self.recorder = FrameRecorder()
        self._frame: Optional[np.ndarray] = None
        self._pixmap: Optional[QPixmap] = None
        self._paused = False

        # Timing
        self._last_time = time.perf_counter()
        self._frame_count = 0
        self._fps_accum = 0.0

        self.setMouseTracking(True)
        self.setMinimumSize(320, 240)

        # Animation timer (~60 fps)
        self._timer = QTimer(self)
        self._timer.setInterval(16)
        self._timer.timeout.connect(self._tick)
        self._timer.start()

    # ── properties ────────────────────────────────────────────────────────

    @property
    def paused(self) -> bool:
        return self._paused

    @paused.setter
    def paused(self, val: bool) -> None:
        self._paused = val

    def set_render_scale(self, scale: float) -> None:
        self.render_scale = max(0.1, min(1.0, scale))

    # ── animation loop ────────────────────────────────────────────────────

    def _tick(self) -> None:
        now = time.perf_counter()
        dt = now - self._last_time
        self._last_time = now

        if self._paused and self._frame is not None:
            return

        commands = self.field.advance(now)
        self._frame = render_frame(
            commands,
            self.field.palette.background,
            self.width(),
            self.height(),
            self.render_scale,
            self.field.params.blur_radius,
        )
        self._pixmap = self._to_pixmap(self._frame)
        self.update()

        if self.recorder.recording:
            try:
                paths = self.recorder.capture(self._frame, now)
            except OSError as e:
                logger.error("Recording failed: %s", e)
                self.recorder.cancel()
                self.recording_failed.emit(str(e))
            else:
                if paths is not None:
                    self.recording_finished.emit(paths)

        # FPS tracking
        self._frame_count += 1
        self._fps_accum += dt
        if self._fps_accum >= 1.0:
            fps = self._frame_count / self._fps_accum
            self.fps_changed.emit(fps)
            self._frame_count = 0
            self._fps_accum = 0.0

    def _to_pixmap(self, img: np.ndarray) -> QPixmap:
        h, w, ch = img.shape
        bytes_per_line = ch * w
        qimg = QImage(img.data, w, h, bytes_per_line, QImage.Format_RGBA8888).copy()
        return QPixmap.fromImage(qimg).scaled(
            self.width(), self.height(),
            Qt.IgnoreAspectRatio,
            Qt.SmoothTransformation,
        )

    # ── painting ──────────────────────────────────────────────────────────

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.SmoothPixmapTransform)

        bg = self.field.palette.background
        painter.fillRect(self.rect(), QColor(bg[0], bg[1], bg[2]))

        if self._pixmap:
            painter.drawPixmap(0, 0, self._pixmap)

        if self._paused:
            painter.setPen(QColor(255, 255, 255, 180))
            painter.drawText(self.rect(), Qt.AlignCenter, "⏸ PAUSED")

        painter.end()

    def resizeEvent(self, event):
        self.field.resize(self.width(), self.height())
        super().resizeEvent(event)

    # ── pointer tracking ──────────────────────────────────────────────────

    def mouseMoveEvent(self, event):
        pos = event.pos()
        self.field.pointer.move(pos.x(), pos.y(), time.perf_counter())

    # ── export ────────────────────────────────────────────────────────────

    def get_image(self) -> Optional[QImage]:
        if self._pixmap:
            return self._pixmap.toImage()
        return None

    def start_recording(self, directory: str) -> None:
        self.recorder.start(
            directory, time.perf_counter(), (self.width(), self.height())
        )
