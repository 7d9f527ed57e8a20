from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from fractinator.utils.image_ops import argb_to_rgb


class FrameBuffer:
    """Off-screen RGB raster that survives between frames.

    Nothing clears it implicitly: engines decide when to flood-fill.
    """

    def __init__(self, width: int, height: int, background: int = 0xFF000000):
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.image = Image.new("RGB", (self.width, self.height), argb_to_rgb(background))
        self._draw = ImageDraw.Draw(self.image)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def center(self) -> Tuple[float, float]:
        return self.width / 2.0, self.height / 2.0

    def fill(self, color: int) -> None:
        self._draw.rectangle((0, 0, self.width, self.height), fill=argb_to_rgb(color))

    def line(self, start, end, color: int, width: int = 1) -> None:
        self._draw.line([tuple(start), tuple(end)], fill=argb_to_rgb(color), width=max(1, int(width)))

    def polygon(self, points: Sequence, color: int, filled: bool = True, width: int = 1) -> None:
        pts = [tuple(p) for p in points]
        rgb = argb_to_rgb(color)
        if filled:
            self._draw.polygon(pts, fill=rgb)
        else:
            self._draw.polygon(pts, outline=rgb, width=max(1, int(width)))

    def pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        return self.image.getpixel((int(x), int(y)))

    def to_array(self) -> np.ndarray:
        return np.asarray(self.image, dtype=np.uint8).copy()

    def snapshot(self) -> Image.Image:
        return self.image.copy()
