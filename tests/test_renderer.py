import numpy as np

from fluidblob.engine import DrawCommand
from fluidblob.renderer import blur_image, render_frame, upscale_image

BG = (27, 12, 236)


def test_empty_frame_is_background():
    img = render_frame([], BG, 800, 600, render_scale=0.25)
    assert img.shape == (150, 200, 4)
    assert img.dtype == np.uint8
    assert np.all(img[..., :3] == BG)
    assert np.all(img[..., 3] == 255)


def test_disc_is_painted_at_center():
    cmd = DrawCommand((400.0, 300.0), 100.0, (255, 0, 0), 0.0)
    img = render_frame([cmd], BG, 800, 600, render_scale=0.25)
    assert tuple(img[75, 100, :3]) == (255, 0, 0)
    assert tuple(img[0, 0, :3]) == BG


def test_later_commands_paint_over_earlier():
    a = DrawCommand((400.0, 300.0), 100.0, (255, 0, 0), 0.0)
    b = DrawCommand((400.0, 300.0), 40.0, (0, 255, 0), 0.0)
    img = render_frame([a, b], BG, 800, 600, render_scale=0.25)
    assert tuple(img[75, 100, :3]) == (0, 255, 0)


def test_glow_fades_outside_disc():
    cmd = DrawCommand((400.0, 300.0), 40.0, (255, 255, 255), 40.0)
    img = render_frame([cmd], (0, 0, 0), 800, 600, render_scale=0.25)
    # radius 10px and glow 10px at quarter scale
    inside = int(img[75, 100, 0])
    halo = int(img[75, 115, 0])
    outside = int(img[75, 125, 0])
    assert inside == 255
    assert 0 < halo < 255
    assert outside == 0


def test_offscreen_disc_is_skipped():
    cmd = DrawCommand((-500.0, -500.0), 100.0, (255, 0, 0), 10.0)
    img = render_frame([cmd], BG, 800, 600, render_scale=0.25)
    assert np.all(img[..., :3] == BG)


def test_blur_keeps_flat_image_flat():
    flat = np.full((40, 50, 3), 77.0)
    out = blur_image(flat, 6.0)
    assert out.shape == flat.shape
    assert np.allclose(out, 77.0)


def test_blur_softens_edges():
    img = np.zeros((40, 40, 3))
    img[:, 20:] = 255.0
    out = blur_image(img, 4.0)
    assert 0.0 < out[20, 19, 0] < 255.0
    assert out[20, 0, 0] == 0.0


def test_small_blur_is_noop():
    img = np.arange(12.0).reshape(2, 2, 3)
    assert blur_image(img, 0.2) is img


def test_upscale_shape():
    img = np.zeros((150, 200, 4), dtype=np.uint8)
    out = upscale_image(img, 800, 600)
    assert out.shape == (600, 800, 4)
    assert upscale_image(img, 200, 150) is img
