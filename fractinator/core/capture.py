from __future__ import annotations

import logging
from typing import List

from PIL import Image

from .framebuffer import FrameBuffer

logger = logging.getLogger(__name__)


def capture_frames(engine, width: int, height: int, frames: int, buffer: FrameBuffer = None) -> List[Image.Image]:
    """Run an engine for ``frames`` frames without a host and keep every frame."""
    if buffer is None:
        buffer = FrameBuffer(width, height, getattr(engine, "background", 0xFF000000))
    out = []
    for _ in range(max(0, int(frames))):
        engine.advance_frame(buffer)
        out.append(buffer.snapshot())
    return out


def save_gif(images: List[Image.Image], path: str, interval_ms: int, loop: bool = True) -> str:
    import imageio.v3 as iio
    import numpy as np

    if not images:
        raise ValueError("nothing to save")
    dur = max(10, int(interval_ms))
    iio.imwrite(path, [np.asarray(im.convert("RGB")) for im in images],
                extension=".gif", duration=dur, loop=0 if loop else 1)
    logger.info("capture: wrote %d frame(s) to %s", len(images), path)
    return path
