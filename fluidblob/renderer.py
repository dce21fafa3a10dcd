"""
Disc renderer — numpy rasterisation of the field's draw commands.

Renders at a reduced resolution and returns an (H, W, 4) RGBA uint8
array suitable for display in a QImage.  The frosted-glass look is a
separable box blur applied over the whole frame.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from .engine import DrawCommand
from .palettes import RGB

logger = logging.getLogger(__name__)

BLUR_PASSES = 3


def _box_blur_axis(img: np.ndarray, radius: int, axis: int) -> np.ndarray:
    """Running-mean blur of *radius* along one axis, edges clamped."""
    size = 2 * radius + 1
    pad = [(0, 0)] * img.ndim
    pad[axis] = (radius + 1, radius)
    padded = np.pad(img, pad, mode="edge")
    csum = np.cumsum(padded, axis=axis)
    hi = np.take(csum, np.arange(size, csum.shape[axis]), axis=axis)
    lo = np.take(csum, np.arange(0, csum.shape[axis] - size), axis=axis)
    return (hi - lo) / size


def blur_image(img: np.ndarray, sigma: float) -> np.ndarray:
    """Approximate a Gaussian blur of std-dev *sigma* (pixels).

    Three box passes per axis converge on a Gaussian; each pass gets a
    radius chosen so the summed variance matches sigma².
    """
    if sigma <= 0.5:
        return img
    # variance of one box of width 2r+1 is ((2r+1)^2 - 1) / 12
    radius = int(round((np.sqrt(12.0 * sigma * sigma / BLUR_PASSES + 1.0) - 1.0) / 2.0))
    if radius < 1:
        return img
    out = img.astype(np.float64)
    for _ in range(BLUR_PASSES):
        out = _box_blur_axis(out, radius, axis=0)
        out = _box_blur_axis(out, radius, axis=1)
    return out


def render_frame(
    commands: Sequence[DrawCommand],
    background: RGB,
    width: int = 800,
    height: int = 600,
    render_scale: float = 0.25,
    blur_radius: float = 0.0,
) -> np.ndarray:
    """Render one frame → (height, width, 4) uint8 RGBA array at render scale.

    Parameters:
        commands:     Discs to paint, back to front.
        background:   Page colour (palette entry 0).
        width:        Canvas width in pixels.
        height:       Canvas height in pixels.
        render_scale: Fraction to render at (e.g. 0.25 = 25%).
        blur_radius:  Glass blur in canvas pixels (0 = sharp).
    """
    rw = max(4, int(width * render_scale))
    rh = max(4, int(height * render_scale))
    sx = rw / max(width, 1)
    sy = rh / max(height, 1)

    rgb = np.empty((rh, rw, 3), dtype=np.float64)
    rgb[...] = np.array(background, dtype=np.float64)

    py_idx = np.arange(rh) + 0.5
    px_idx = np.arange(rw) + 0.5

    for cmd in commands:
        cx = cmd.center[0] * sx
        cy = cmd.center[1] * sy
        r = cmd.radius * sx
        glow = cmd.shadow_radius * sx
        reach = r + glow

        # Bounding box of disc plus glow, clipped to the frame
        x0 = max(0, int(cx - reach))
        x1 = min(rw, int(cx + reach) + 1)
        y0 = max(0, int(cy - reach))
        y1 = min(rh, int(cy + reach) + 1)
        if x0 >= x1 or y0 >= y1:
            continue

        dx = px_idx[x0:x1][np.newaxis, :] - cx
        dy = py_idx[y0:y1][:, np.newaxis] - cy
        dist = np.sqrt(dx * dx + dy * dy)

        # Glow fades linearly from the rim to rim + shadow radius
        if glow > 0:
            alpha = np.clip(1.0 - (dist - r) / glow, 0.0, 1.0)
        else:
            alpha = (dist <= r).astype(np.float64)
        alpha = np.where(dist <= r, 1.0, alpha)[..., np.newaxis]

        fill = np.array(cmd.fill, dtype=np.float64)
        region = rgb[y0:y1, x0:x1]
        rgb[y0:y1, x0:x1] = region + (fill - region) * alpha

    rgb = blur_image(rgb, blur_radius * sx)

    img = np.empty((rh, rw, 4), dtype=np.uint8)
    img[..., :3] = np.clip(rgb + 0.5, 0, 255).astype(np.uint8)
    img[..., 3] = 255
    return img


def upscale_image(img: np.ndarray, target_w: int, target_h: int) -> np.ndarray:
    """Simple nearest-neighbour upscale.

    The canvas smooths with SmoothTransformation when scaling the pixmap;
    recorded clips use this to write frames at full canvas size.
    """
    h, w = img.shape[:2]
    if h == target_h and w == target_w:
        return img
    ys = (np.arange(target_h) * h // max(target_h, 1)).clip(0, h - 1)
    xs = (np.arange(target_w) * w // max(target_w, 1)).clip(0, w - 1)
    return img[ys][:, xs]
