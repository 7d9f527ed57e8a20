import random
import threading
import time

import pytest

from fractinator.core.branching import BranchingEngine
from fractinator.core.errors import SurfaceUnavailable
from fractinator.core.framebuffer import FrameBuffer
from fractinator.core.render_loop import LoopState, RenderLoop


class SlowEngine:
    """Counts frames and asks for a very long sleep between them."""

    def __init__(self, interval_ms=60_000):
        self.interval_ms = interval_ms
        self.frames = 0
        self.advanced = threading.Event()

    def advance_frame(self, buffer):
        self.frames += 1
        self.advanced.set()


def _wait_for(pred, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if pred():
            return True
        time.sleep(0.01)
    return False


def test_loop_stops_when_surface_goes_away(fake_surface):
    surface = fake_surface(frames=3)
    engine = BranchingEngine(rng=random.Random(3))
    engine.params.interval_ms.value = 7
    loop = RenderLoop(surface, engine, FrameBuffer(64, 48))
    loop.start()
    assert _wait_for(lambda: loop.state is LoopState.STOPPED and len(surface.published) == 3)
    loop.stop()
    assert loop.ticks == 3
    assert engine.frames == 3


def test_stop_joins_worker(fake_surface):
    engine = SlowEngine(interval_ms=5)
    loop = RenderLoop(fake_surface(), engine, FrameBuffer(32, 32))
    loop.start()
    assert loop.running
    assert engine.advanced.wait(5)
    loop.stop()
    assert loop.state is LoopState.STOPPED
    frames = engine.frames
    time.sleep(0.05)
    assert engine.frames == frames


def test_wake_cuts_sleep_short(fake_surface):
    engine = SlowEngine()
    loop = RenderLoop(fake_surface(), engine, FrameBuffer(32, 32))
    loop.start()
    try:
        assert _wait_for(lambda: engine.frames == 1)
        loop.wake()
        assert _wait_for(lambda: engine.frames == 2)
    finally:
        loop.stop()
    assert engine.frames == 2


def test_stop_interrupts_long_sleep(fake_surface):
    engine = SlowEngine()
    loop = RenderLoop(fake_surface(), engine, FrameBuffer(32, 32))
    loop.start()
    assert _wait_for(lambda: engine.frames == 1)
    started = time.monotonic()
    loop.stop()
    assert time.monotonic() - started < 5


def test_restart_after_stop(fake_surface):
    engine = SlowEngine(interval_ms=1)
    surface = fake_surface()
    loop = RenderLoop(surface, engine, FrameBuffer(32, 32))
    loop.start()
    assert _wait_for(lambda: engine.frames >= 1)
    loop.stop()
    n = engine.frames
    loop.start()
    assert _wait_for(lambda: engine.frames > n)
    loop.stop()


def test_tick_without_frame_raises(fake_surface):
    loop = RenderLoop(fake_surface(frames=0), SlowEngine(), FrameBuffer(8, 8))
    with pytest.raises(SurfaceUnavailable):
        loop.tick()


def test_tick_blits_buffer_into_frame(fake_surface):
    surface = fake_surface(width=20, height=10)
    buffer = FrameBuffer(20, 10, background=0xFF102030)
    loop = RenderLoop(surface, SlowEngine(), buffer)
    loop.tick()
    assert surface.published[0].image.getpixel((5, 5)) == (0x10, 0x20, 0x30)
