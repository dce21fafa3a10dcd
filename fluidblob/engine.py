"""
Blob field engine.

Owns the population of drifting points and advances it one frame per
tick.  Pointer proximity repels points and steers each point's colour
progress; while the pointer is idle the points creep toward its last
known position, one short step per point per cooldown window.

No timers are scheduled here: the pointer debounce and the per-point
drift cooldown are plain timestamps compared against the ``now`` value
passed into each tick.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .palettes import DEFAULT_PALETTE, RGB, Palette, get_palette

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Point
# ---------------------------------------------------------------------------

@dataclass
class Point:
    """A single drifting blob, in canvas pixels."""
    x: float = 0.0
    y: float = 0.0
    dx: float = 0.0
    dy: float = 0.0
    random_offset: float = 0.0   # 0..0.2, fixed for the point's lifetime
    drift_cooldown_until: float = float("-inf")

    def moving_to_mouse(self, now: float) -> bool:
        """True while the idle drift step is cooling down."""
        return now < self.drift_cooldown_until


@dataclass(frozen=True)
class DrawCommand:
    """One filled, glowing disc for the renderer."""
    center: Tuple[float, float]
    radius: float
    fill: RGB
    shadow_radius: float

    @property
    def shadow_color(self) -> RGB:
        return self.fill


# ---------------------------------------------------------------------------
# Parameters (user-tunable)
# ---------------------------------------------------------------------------

@dataclass
class FieldParams:
    """All tuneable field constants.

    The slider-backed values are the stock page defaults;
    the remainder are fixed behaviour constants.
    """
    # Cosmetic
    blur_radius: float = 90.0
    circle_radius: float = 100.0
    shadow_radius: float = 10.0

    # Population
    count: int = 120

    # Motion
    smoothness: float = 7.0     # pixel push per repulsion tick
    speed: float = 1.5          # velocity scale

    # Fixed behaviour
    repulsion_radius: float = 160.0
    progress_smoothing: float = 0.05
    idle_drift_step: float = 0.5
    drift_cooldown: float = 1.0     # seconds
    pointer_timeout: float = 1.0    # seconds
    max_random_offset: float = 0.2


# ---------------------------------------------------------------------------
# Pointer debounce
# ---------------------------------------------------------------------------

class PointerState:
    """Last pointer position plus an Idle / Active(deadline) debounce.

    Every ``move`` pushes the deadline forward; once ``now`` passes the
    deadline the state drops back to Idle.
    """

    def __init__(self, x: float = 0.0, y: float = 0.0, timeout: float = 1.0) -> None:
        self.x = x
        self.y = y
        self.timeout = timeout
        self.deadline: Optional[float] = None   # None == Idle

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def move(self, x: float, y: float, now: float) -> None:
        self.x = x
        self.y = y
        self.deadline = now + self.timeout

    def is_active(self, now: float) -> bool:
        if self.deadline is None:
            return False
        if now >= self.deadline:
            self.deadline = None
            logger.debug("Pointer idle at (%.0f, %.0f)", self.x, self.y)
            return False
        return True


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class PointField:
    """Manages point creation, per-frame stepping, and configuration.

    Parameters:
        width, height: Canvas size in pixels.
        params:        Field parameters (or defaults).
        palette:       Colour palette (or the default palette).
        seed:          RNG seed, for tests (None = random).
    """

    def __init__(
        self,
        width: float = 800.0,
        height: float = 600.0,
        params: Optional[FieldParams] = None,
        palette: Optional[Palette] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.params = params or FieldParams()
        self.palette = palette or get_palette(DEFAULT_PALETTE)
        self.rng = np.random.default_rng(seed)
        self.width = float(width)
        self.height = float(height)
        self.pointer = PointerState(
            self.width / 2, self.height / 2, self.params.pointer_timeout
        )
        self.points: List[Point] = []
        self.color_progress = np.zeros(0, dtype=np.float64)
        self.initialize(self.params.count)

    # ── population management ─────────────────────────────────────────────

    def initialize(self, count: Optional[int] = None) -> None:
        """Discard every point and create a fresh population."""
        if count is not None:
            self.params.count = max(0, int(count))
        n = self.params.count
        self.points = [self._create_point() for _ in range(n)]
        self.color_progress = np.full(n, 0.5, dtype=np.float64)
        logger.info("Field initialised: %d points on %.0fx%.0f", n, self.width, self.height)

    def _create_point(self) -> Point:
        speed = self.params.speed
        return Point(
            x=self.rng.uniform(0, self.width) if self.width > 0 else 0.0,
            y=self.rng.uniform(0, self.height) if self.height > 0 else 0.0,
            dx=self.rng.uniform(-0.5, 0.5) * speed,
            dy=self.rng.uniform(-0.5, 0.5) * speed,
            random_offset=self.rng.uniform(0, self.params.max_random_offset),
        )

    @property
    def count(self) -> int:
        return len(self.points)

    @property
    def diagonal(self) -> float:
        return math.hypot(self.width, self.height)

    # ── configuration setters ─────────────────────────────────────────────

    def set_population_count(self, count: int) -> None:
        self.initialize(count)

    def set_speed_factor(self, speed: float) -> None:
        """Change the drift speed and re-roll every point's velocity."""
        self.params.speed = float(speed)
        for p in self.points:
            p.dx = self.rng.uniform(-0.5, 0.5) * self.params.speed
            p.dy = self.rng.uniform(-0.5, 0.5) * self.params.speed
        logger.debug("Speed factor -> %.2f", self.params.speed)

    def set_circle_radius(self, radius: float) -> None:
        self.params.circle_radius = float(radius)

    def set_smoothness_factor(self, smoothness: float) -> None:
        self.params.smoothness = float(smoothness)

    def set_shadow_radius(self, radius: float) -> None:
        self.params.shadow_radius = float(radius)

    def set_blur_radius(self, radius: float) -> None:
        self.params.blur_radius = float(radius)

    def set_palette(self, colors: Iterable) -> None:
        self.palette.set_all(colors)
        logger.debug("Palette replaced: %s", self.palette.to_hex())

    def set_palette_entry(self, index: int, color) -> None:
        self.palette.set_entry(index, color)

    def set_color_progress(self, index: int, value: float) -> None:
        """Inject a progress value, clamped to 0..1."""
        self.color_progress[index] = min(1.0, max(0.0, float(value)))

    def resize(self, width: float, height: float) -> None:
        """Change the canvas size; points keep their positions."""
        self.width = float(width)
        self.height = float(height)

    def restore_defaults(self) -> None:
        """Reset every tunable parameter and rebuild the population."""
        self.params = FieldParams()
        self.pointer.timeout = self.params.pointer_timeout
        self.initialize()

    # ── stepping ──────────────────────────────────────────────────────────

    def advance(self, now: float) -> List[DrawCommand]:
        """Tick using the built-in pointer debounce state."""
        return self.tick(self.pointer.position, self.pointer.is_active(now), now)

    def tick(
        self,
        pointer: Tuple[float, float],
        pointer_active: bool,
        now: float = 0.0,
    ) -> List[DrawCommand]:
        """Advance every point by one frame and return draw commands."""
        p = self.params
        mx, my = pointer
        r = p.circle_radius
        w, h = self.width, self.height
        diag = self.diagonal or 1.0
        palette = self.palette
        progress = self.color_progress
        commands: List[DrawCommand] = []

        for i, pt in enumerate(self.points):
            dist = math.hypot(mx - pt.x, my - pt.y)
            t = dist / diag

            # ── Colour progress ──
            if pointer_active:
                target = min(1.0, t)
                progress[i] += (target - progress[i]) * p.progress_smoothing
            color = palette.sample(float(progress[i]), pt.random_offset)

            # ── Repulsion ──
            if dist < p.repulsion_radius:
                angle = math.atan2(my - pt.y, mx - pt.x)
                push = p.smoothness * (1.0 - t)
                pt.x -= math.cos(angle) * push
                pt.y -= math.sin(angle) * push

            # ── Idle drift toward pointer ──
            if not pointer_active and not pt.moving_to_mouse(now):
                angle = math.atan2(my - pt.y, mx - pt.x)
                pt.x += math.cos(angle) * p.idle_drift_step
                pt.y += math.sin(angle) * p.idle_drift_step
                pt.drift_cooldown_until = now + p.drift_cooldown

            # ── Ambient drift ──
            pt.x += pt.dx
            pt.y += pt.dy

            # ── Wrap around ──
            if pt.x < -r:
                pt.x = w + r
            if pt.x > w + r:
                pt.x = -r
            if pt.y < -r:
                pt.y = h + r
            if pt.y > h + r:
                pt.y = -r

            commands.append(DrawCommand((pt.x, pt.y), r, color, p.shadow_radius))

        return commands
