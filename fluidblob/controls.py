"""
Control panel — all user-adjustable parameters for the blob field.

Organised into groups:
  - Appearance (blur, circle radius, glow)
  - Motion (smoothness, speed, circle count)
  - Palette (presets, per-entry editor, randomise)
  - Rendering (quality)
  - Actions (pause, reset, save, record)
"""

from __future__ import annotations

import logging
from typing import List, Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import (
    QColorDialog,
    QComboBox,
    QFrame,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from .canvas import FluidCanvas
from .engine import FieldParams, PointField
from .palettes import PALETTES, list_palettes, random_palette, rgb_to_hex

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Labelled slider helper
# ---------------------------------------------------------------------------

class LSlider(QWidget):
    """Horizontal slider with label and readout."""

    valueChanged = pyqtSignal(int)

    def __init__(self, label, lo, hi, val, suffix="", scale=1, parent=None):
        super().__init__(parent)
        lay = QHBoxLayout(self)
        lay.setContentsMargins(0, 1, 0, 1)

        self._lbl = QLabel(label)
        self._lbl.setFixedWidth(110)
        lay.addWidget(self._lbl)

        self._slider = QSlider(Qt.Horizontal)
        self._slider.setRange(lo, hi)
        self._slider.setValue(val)
        lay.addWidget(self._slider, stretch=1)

        self._suffix = suffix
        self._scale = scale
        self._ro = QLabel(self._format(val))
        self._ro.setFixedWidth(48)
        self._ro.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        lay.addWidget(self._ro)

        self._slider.valueChanged.connect(self._changed)

    def _format(self, v):
        if self._scale == 1:
            return f"{v}{self._suffix}"
        return f"{v / self._scale:g}{self._suffix}"

    def _changed(self, v):
        self._ro.setText(self._format(v))
        self.valueChanged.emit(v)

    def value(self):
        return self._slider.value()

    def setValue(self, v):
        self._slider.setValue(v)


# ---------------------------------------------------------------------------
# Control panel
# ---------------------------------------------------------------------------

class ControlPanel(QWidget):
    """Side panel with all field controls."""

    save_requested = pyqtSignal()
    record_requested = pyqtSignal()

    def __init__(
        self,
        canvas: FluidCanvas,
        field: PointField,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.canvas = canvas
        self.field = field
        self.setFixedWidth(320)

        # ── Scroll wrapper ────────────────────────────────────────────────
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        outer.addWidget(scroll)

        inner = QWidget()
        scroll.setWidget(inner)
        layout = QVBoxLayout(inner)
        layout.setSpacing(8)

        p = field.params

        # ══════════════════════════════════════════════════════════════════
        # APPEARANCE
        # ══════════════════════════════════════════════════════════════════
        look_group = QGroupBox("Appearance")
        lg = QVBoxLayout(look_group)

        self._blur_slider = LSlider("Blur", 0, 200, int(p.blur_radius), "px")
        self._blur_slider.valueChanged.connect(
            lambda v: self.field.set_blur_radius(float(v))
        )
        lg.addWidget(self._blur_slider)

        self._radius_slider = LSlider("Circle Radius", 10, 300, int(p.circle_radius), "px")
        self._radius_slider.valueChanged.connect(
            lambda v: self.field.set_circle_radius(float(v))
        )
        lg.addWidget(self._radius_slider)

        self._shadow_slider = LSlider("Glow", 0, 100, int(p.shadow_radius), "px")
        self._shadow_slider.valueChanged.connect(
            lambda v: self.field.set_shadow_radius(float(v))
        )
        lg.addWidget(self._shadow_slider)

        layout.addWidget(look_group)

        # ══════════════════════════════════════════════════════════════════
        # MOTION
        # ══════════════════════════════════════════════════════════════════
        motion_group = QGroupBox("Motion")
        mg = QVBoxLayout(motion_group)

        self._smooth_slider = LSlider(
            "Smoothness", 0, 200, int(p.smoothness * 10), "", scale=10
        )
        self._smooth_slider.valueChanged.connect(
            lambda v: self.field.set_smoothness_factor(v / 10)
        )
        mg.addWidget(self._smooth_slider)

        self._speed_slider = LSlider("Speed", 0, 100, int(p.speed * 10), "x", scale=10)
        self._speed_slider.valueChanged.connect(
            lambda v: self.field.set_speed_factor(v / 10)
        )
        mg.addWidget(self._speed_slider)

        self._count_slider = LSlider("Circles", 0, 400, p.count)
        self._count_slider.valueChanged.connect(self.field.set_population_count)
        mg.addWidget(self._count_slider)

        layout.addWidget(motion_group)

        # ══════════════════════════════════════════════════════════════════
        # PALETTE
        # ══════════════════════════════════════════════════════════════════
        palette_group = QGroupBox("Palette")
        pg = QVBoxLayout(palette_group)

        self._palette_combo = QComboBox()
        for key in list_palettes():
            self._palette_combo.addItem(key.capitalize(), key)
        self._palette_combo.currentIndexChanged.connect(self._on_palette_changed)
        pg.addWidget(self._palette_combo)

        self._entry_grid = QGridLayout()
        pg.addLayout(self._entry_grid)

        random_btn = QPushButton("🎲  Randomise Colours")
        random_btn.clicked.connect(self._on_randomise)
        pg.addWidget(random_btn)

        layout.addWidget(palette_group)

        # ══════════════════════════════════════════════════════════════════
        # RENDERING
        # ══════════════════════════════════════════════════════════════════
        render_group = QGroupBox("Rendering")
        rg = QVBoxLayout(render_group)

        self._quality_slider = LSlider(
            "Quality", 10, 60, int(canvas.render_scale * 100), "%"
        )
        self._quality_slider.valueChanged.connect(
            lambda v: self.canvas.set_render_scale(v / 100)
        )
        rg.addWidget(self._quality_slider)

        layout.addWidget(render_group)

        # ══════════════════════════════════════════════════════════════════
        # ACTIONS
        # ══════════════════════════════════════════════════════════════════
        action_group = QGroupBox("Actions")
        ag = QGridLayout(action_group)

        self._pause_btn = QPushButton("⏸  Pause")
        self._pause_btn.setCheckable(True)
        self._pause_btn.toggled.connect(self._on_pause)
        ag.addWidget(self._pause_btn, 0, 0)

        reset_btn = QPushButton("↻  Defaults")
        reset_btn.clicked.connect(self._on_reset)
        ag.addWidget(reset_btn, 0, 1)

        save_btn = QPushButton("↓  Save PNG")
        save_btn.clicked.connect(self.save_requested.emit)
        ag.addWidget(save_btn, 1, 0)

        record_btn = QPushButton("●  Record 5s")
        record_btn.clicked.connect(self.record_requested.emit)
        ag.addWidget(record_btn, 1, 1)

        layout.addWidget(action_group)

        # ── Status ────────────────────────────────────────────────────────
        self._status = QLabel("Move the mouse over the canvas")
        self._status.setWordWrap(True)
        self._status.setStyleSheet("color: #888; font-size: 11px; font-style: italic;")
        layout.addWidget(self._status)

        layout.addStretch()

        canvas.fps_changed.connect(self._on_fps)

        self._entry_buttons: List[QPushButton] = []
        self._rebuild_entries()

    # ── palette slots ─────────────────────────────────────────────────────

    def _on_palette_changed(self, idx: int) -> None:
        key = self._palette_combo.currentData()
        try:
            self.field.set_palette(PALETTES[key])
        except (KeyError, ValueError) as e:
            logger.error("Palette error: %s", e)
            return
        self._rebuild_entries()

    def _on_randomise(self) -> None:
        self.field.set_palette(random_palette(rng=self.field.rng).colors)
        self._rebuild_entries()

    def _rebuild_entries(self) -> None:
        """Rebuild one swatch button per palette entry."""
        while self._entry_grid.count():
            item = self._entry_grid.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._entry_buttons = []

        for i, hex_value in enumerate(self.field.palette.to_hex()):
            label = QLabel("Background" if i == 0 else f"Colour {i}")
            btn = QPushButton(hex_value)
            btn.clicked.connect(lambda _checked=False, idx=i: self._pick_entry(idx))
            self._style_swatch(btn, hex_value)
            self._entry_grid.addWidget(label, i, 0)
            self._entry_grid.addWidget(btn, i, 1)
            self._entry_buttons.append(btn)

    @staticmethod
    def _style_swatch(btn: QPushButton, hex_value: str) -> None:
        c = QColor(hex_value)
        text = "#000" if c.lightness() > 140 else "#fff"
        btn.setStyleSheet(
            f"background: {hex_value}; color: {text}; border: 1px solid #555;"
        )

    def _pick_entry(self, index: int) -> None:
        current = QColor(*self.field.palette[index])
        color = QColorDialog.getColor(current, self, f"Pick Colour {index}")
        if not color.isValid():
            return
        rgb = (color.red(), color.green(), color.blue())
        self.field.set_palette_entry(index, rgb)
        btn = self._entry_buttons[index]
        btn.setText(rgb_to_hex(rgb))
        self._style_swatch(btn, rgb_to_hex(rgb))

    # ── action slots ──────────────────────────────────────────────────────

    def _on_pause(self, checked: bool) -> None:
        self.canvas.paused = checked
        self._pause_btn.setText("▶  Play" if checked else "⏸  Pause")

    def _on_reset(self) -> None:
        self.field.restore_defaults()
        d = FieldParams()
        sliders = (
            (self._blur_slider, int(d.blur_radius)),
            (self._radius_slider, int(d.circle_radius)),
            (self._shadow_slider, int(d.shadow_radius)),
            (self._smooth_slider, int(d.smoothness * 10)),
            (self._speed_slider, int(d.speed * 10)),
            (self._count_slider, d.count),
        )
        # Block signals so the sliders don't re-roll the fresh population
        for sl, val in sliders:
            sl.blockSignals(True)
            sl.setValue(val)
            sl.blockSignals(False)
        self._status.setText("Defaults restored")

    def _on_fps(self, fps: float) -> None:
        self._status.setText(f"{self.field.count} circles  •  {fps:.0f} fps")
