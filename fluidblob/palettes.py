"""
Colour palettes and gradient sampling for the blob field.

A palette is an ordered list of RGB colours:
  - entry 0:     page background colour
  - entries 1..n: the gradient ring the blobs cycle through

Colours are exchanged as ``#RRGGBB`` strings at the UI boundary and held
as integer triples internally.
"""

from __future__ import annotations

import math
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

RGB = Tuple[int, int, int]

MIN_PALETTE_LENGTH = 2

_HEX_RE = re.compile(r"#?[0-9A-Fa-f]{6}")


# ── Hex conversion ────────────────────────────────────────────────────────

def hex_to_rgb(value: str) -> RGB:
    """Parse ``#RRGGBB`` (leading ``#`` optional) into an RGB triple."""
    text = value.strip()
    if not _HEX_RE.fullmatch(text):
        raise ValueError(f"Expected a #RRGGBB colour, got {value!r}")
    text = text.lstrip("#")
    return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))


def rgb_to_hex(rgb: RGB) -> str:
    return "#{:02X}{:02X}{:02X}".format(*rgb)


def _round_half_up(v: float) -> int:
    return max(0, min(255, int(math.floor(v + 0.5))))


def interpolate_colors(a: RGB, b: RGB, t: float) -> RGB:
    """Per-channel linear blend from *a* to *b*, rounded to integers."""
    return (
        _round_half_up(a[0] + (b[0] - a[0]) * t),
        _round_half_up(a[1] + (b[1] - a[1]) * t),
        _round_half_up(a[2] + (b[2] - a[2]) * t),
    )


# ── Gradient sampling ─────────────────────────────────────────────────────

def sample_gradient(progress: float, offset: float, colors: Sequence[RGB]) -> RGB:
    """Map a progress value onto the palette's gradient ring.

    The ring is formed by indices ``1..n`` (``n = len(colors) - 1``);
    index 0 is the background and never sampled.  After the last entry the
    gradient wraps to index 1.  A two-entry palette therefore always
    yields ``colors[1]``.

    Args:
        progress: Per-blob colour progress, nominally 0..1.
        offset:   Per-blob jitter, nominally 0..0.2.
        colors:   Palette with at least two entries.
    """
    n = len(colors) - 1
    t = (progress + offset) * (n - 1)
    base = math.floor(t)
    i = base % n + 1  # fold out-of-domain values back into 1..n
    nxt = i + 1 if i + 1 <= n else 1
    return interpolate_colors(colors[i], colors[nxt], t - base)


# ── Palette ───────────────────────────────────────────────────────────────

class Palette:
    """Mutable ordered colour list, never shorter than two entries."""

    def __init__(self, colors: Iterable) -> None:
        self._colors: List[RGB] = []
        self.set_all(colors)

    @staticmethod
    def _coerce(color) -> RGB:
        if isinstance(color, str):
            return hex_to_rgb(color)
        r, g, b = color
        for c in (r, g, b):
            if not 0 <= int(c) <= 255:
                raise ValueError(f"Colour channel out of range: {color!r}")
        return (int(r), int(g), int(b))

    def set_all(self, colors: Iterable) -> None:
        """Replace every entry at once."""
        new = [self._coerce(c) for c in colors]
        if len(new) < MIN_PALETTE_LENGTH:
            raise ValueError(
                f"Palette needs at least {MIN_PALETTE_LENGTH} colours, got {len(new)}"
            )
        self._colors = new

    def set_entry(self, index: int, color) -> None:
        if not 0 <= index < len(self._colors):
            raise IndexError(
                f"Palette index {index} out of range (0..{len(self._colors) - 1})"
            )
        self._colors[index] = self._coerce(color)

    @property
    def colors(self) -> List[RGB]:
        return list(self._colors)

    @property
    def background(self) -> RGB:
        return self._colors[0]

    def to_hex(self) -> List[str]:
        return [rgb_to_hex(c) for c in self._colors]

    def sample(self, progress: float, offset: float) -> RGB:
        return sample_gradient(progress, offset, self._colors)

    def __len__(self) -> int:
        return len(self._colors)

    def __getitem__(self, index: int) -> RGB:
        return self._colors[index]

    def __repr__(self) -> str:
        return f"Palette({self.to_hex()!r})"


# ── Built-in palettes ─────────────────────────────────────────────────────

PALETTES: Dict[str, List[str]] = {
    "default": ["#1B0CEC", "#FF9AAD", "#FF6B6B", "#FF9E2C", "#D6A3FF", "#BE33FF", "#F8D0B8"],
    "sunset": ["#1A0A1F", "#FF5E5B", "#FF9E2C", "#FFD166", "#EF476F", "#8338EC"],
    "ocean": ["#021526", "#03346E", "#6EACDA", "#1FAB89", "#62D2A2", "#E2E2B6"],
    "aurora": ["#050816", "#00F5A0", "#00D9F5", "#7B2FF7", "#F107A3"],
    "mono": ["#101010", "#FFFFFF", "#9A9A9A", "#4A4A4A"],
}

DEFAULT_PALETTE = "default"

RANDOM_PALETTE_SIZE = 7


def get_palette(name: str) -> Palette:
    if name not in PALETTES:
        available = ", ".join(sorted(PALETTES.keys()))
        raise KeyError(f"Unknown palette '{name}'. Available: {available}")
    return Palette(PALETTES[name])


def list_palettes() -> List[str]:
    return sorted(PALETTES.keys())


def random_palette(
    size: int = RANDOM_PALETTE_SIZE,
    rng: Optional[np.random.Generator] = None,
) -> Palette:
    """Generate a palette of *size* uniformly random colours."""
    rng = rng or np.random.default_rng()
    values = rng.integers(0, 0x1000000, size=max(size, MIN_PALETTE_LENGTH))
    return Palette(f"#{int(v):06X}" for v in values)
