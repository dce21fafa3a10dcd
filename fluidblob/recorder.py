"""
Fixed-length clip recording as a numbered PNG sequence.

Frames are buffered in memory while recording and written out once the
clip duration has elapsed.  Writing goes through a *writer* callable so
the canvas can use Qt while tests pass a plain function.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, List, Optional, Tuple

import numpy as np

from .renderer import upscale_image

logger = logging.getLogger(__name__)

FrameWriter = Callable[[np.ndarray, str], bool]


def qimage_writer(frame: np.ndarray, path: str) -> bool:
    """Save an (H, W, 4) RGBA frame with QImage."""
    from PyQt5.QtGui import QImage

    h, w, ch = frame.shape
    data = np.ascontiguousarray(frame)
    qimg = QImage(data.data, w, h, ch * w, QImage.Format_RGBA8888).copy()
    return qimg.save(path)


class FrameRecorder:
    """Captures frames for *duration* seconds at up to *fps* frames/s."""

    def __init__(
        self,
        duration: float = 5.0,
        fps: float = 30.0,
        writer: Optional[FrameWriter] = None,
    ) -> None:
        self.duration = duration
        self.fps = fps
        self.writer = writer or qimage_writer
        self._frames: List[np.ndarray] = []
        self._start: Optional[float] = None
        self._last: Optional[float] = None
        self._directory = ""
        self._size: Optional[Tuple[int, int]] = None

    @property
    def recording(self) -> bool:
        return self._start is not None

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    def start(
        self,
        directory: str,
        now: float,
        size: Optional[Tuple[int, int]] = None,
    ) -> None:
        """Begin a clip; frames are written at *size* (width, height) if given."""
        if self.recording:
            raise RuntimeError("Recording already in progress")
        os.makedirs(directory, exist_ok=True)
        self._directory = directory
        self._size = size
        self._frames = []
        self._start = now
        self._last = None
        logger.info("Recording %.1fs clip to %s", self.duration, directory)

    def capture(self, frame: np.ndarray, now: float) -> Optional[List[str]]:
        """Offer a frame; returns the written paths once the clip ends."""
        if self._start is None:
            return None
        if now - self._start >= self.duration:
            return self.finish()
        if self._last is None or now - self._last >= 1.0 / self.fps:
            self._frames.append(frame.copy())
            self._last = now
        return None

    def finish(self) -> List[str]:
        """Write buffered frames and stop recording."""
        frames, self._frames = self._frames, []
        self._start = None
        self._last = None
        paths = []
        for i, frame in enumerate(frames):
            if self._size is not None:
                frame = upscale_image(frame, *self._size)
            path = os.path.join(self._directory, f"frame_{i:04d}.png")
            if not self.writer(frame, path):
                raise OSError(f"Failed to write {path}")
            paths.append(path)
        logger.info("Recorded %d frames", len(paths))
        return paths

    def cancel(self) -> None:
        self._frames = []
        self._start = None
        self._last = None
