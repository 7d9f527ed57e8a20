from fractinator.core.framebuffer import FrameBuffer
from fractinator.core.render_loop import Frame


def test_buffer_starts_with_background_and_persists():
    fb = FrameBuffer(50, 40, background=0xFF0066FF)
    assert fb.size == (50, 40)
    assert fb.center == (25.0, 20.0)
    assert fb.pixel(3, 3) == (0x00, 0x66, 0xFF)
    fb.line((0, 20), (49, 20), 0xFFFFFFFF, width=3)
    assert fb.pixel(25, 20) == (255, 255, 255)
    # nothing clears implicitly
    assert fb.pixel(25, 20) == (255, 255, 255)


def test_fill_floods_whole_buffer():
    fb = FrameBuffer(10, 10)
    fb.fill(0xFF00FF00)
    arr = fb.to_array()
    assert arr.shape == (10, 10, 3)
    assert (arr == [0, 255, 0]).all()


def test_polygon_filled_and_outline():
    fb = FrameBuffer(30, 30)
    tri = [(5, 5), (25, 5), (15, 25)]
    fb.polygon(tri, 0xFFFF0000, filled=False)
    assert fb.pixel(15, 12) == (0, 0, 0)
    assert fb.pixel(15, 5) == (255, 0, 0)
    fb.polygon(tri, 0xFFFF0000, filled=True)
    assert fb.pixel(15, 12) == (255, 0, 0)


def test_to_array_is_a_copy():
    fb = FrameBuffer(4, 4)
    arr = fb.to_array()
    arr[:] = 255
    assert fb.pixel(0, 0) == (0, 0, 0)


def test_frame_blit_scales_to_frame_size():
    fb = FrameBuffer(10, 10, background=0xFF123456)
    frame = Frame(20, 5)
    frame.blit(fb)
    assert frame.size == (20, 5)
    assert frame.image.getpixel((19, 4)) == (0x12, 0x34, 0x56)


def test_color_helpers():
    from PIL import Image

    from fractinator.utils.image_ops import argb_to_rgb, hex_to_argb, to_rgba_bytes

    assert argb_to_rgb(0xFF0066FF) == (0, 0x66, 0xFF)
    assert hex_to_argb("#1E90FF") == 0xFF1E90FF
    assert hex_to_argb("80112233") == 0x80112233
    data, w, h = to_rgba_bytes(Image.new("RGB", (3, 2), (1, 2, 3)))
    assert (w, h) == (3, 2)
    assert data[:4] == bytes([1, 2, 3, 255])
