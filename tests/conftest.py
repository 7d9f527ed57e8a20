import random

import pytest

from fractinator.core.framebuffer import FrameBuffer
from fractinator.core.render_loop import Frame


class FakeSurface:
    """Hands out ``frames`` frames, then reports the surface as gone."""

    def __init__(self, width=64, height=48, frames=None):
        self.width = width
        self.height = height
        self.left = frames
        self.published = []

    def acquire_frame(self):
        if self.left is not None:
            if self.left <= 0:
                return None
            self.left -= 1
        return Frame(self.width, self.height)

    def publish(self, frame):
        self.published.append(frame)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def buffer():
    return FrameBuffer(400, 300)


@pytest.fixture
def fake_surface():
    return FakeSurface
