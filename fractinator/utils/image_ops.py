from __future__ import annotations

from typing import Tuple

from PIL import Image


def argb_to_rgb(color: int) -> Tuple[int, int, int]:
    c = int(color) & 0xFFFFFFFF
    return ((c >> 16) & 0xFF, (c >> 8) & 0xFF, c & 0xFF)


def hex_to_argb(text: str) -> int:
    s = text.strip().lstrip("#")
    if len(s) == 6:
        s = "FF" + s
    if len(s) != 8:
        raise ValueError(f"not a color: {text!r}")
    return int(s, 16)


def to_rgba_bytes(img: Image.Image) -> Tuple[bytes, int, int]:
    rgba = img.convert("RGBA")
    return rgba.tobytes("raw", "RGBA"), rgba.width, rgba.height
