from __future__ import annotations

import enum
import logging
import threading
from typing import Optional, Protocol, Tuple

from PIL import Image

from .errors import InterruptedWait, SurfaceUnavailable
from .framebuffer import FrameBuffer

logger = logging.getLogger(__name__)

JOIN_RETRY_S = 0.5


class LoopState(enum.Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class Frame:
    """A drawable frame handed out by a host surface for a single tick."""

    def __init__(self, width: int, height: int):
        self.image = Image.new("RGB", (max(1, int(width)), max(1, int(height))))

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def blit(self, buffer: FrameBuffer) -> None:
        src = buffer.image
        if src.size != self.image.size:
            src = src.resize(self.image.size, Image.NEAREST)
        self.image.paste(src, (0, 0))


class Surface(Protocol):
    def acquire_frame(self) -> Optional[Frame]: ...

    def publish(self, frame: Frame) -> None: ...


class RenderLoop:
    """Drives one engine on a dedicated worker thread.

    Each tick acquires a frame from the surface, advances the engine by one
    frame into the persistent buffer, blits and publishes, then sleeps for the
    engine's current interval. A missing frame means the host is gone and the
    loop stops. ``stop`` lets the in-flight frame finish before returning.
    """

    def __init__(self, surface: Surface, engine, buffer: FrameBuffer, name: str = "render"):
        self.surface = surface
        self.engine = engine
        self.buffer = buffer
        self.name = name
        self.ticks = 0
        self._state = LoopState.STOPPED
        self._state_lock = threading.Lock()
        self._stop = threading.Event()
        self._wake = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def state(self) -> LoopState:
        with self._state_lock:
            return self._state

    @property
    def running(self) -> bool:
        return self.state is LoopState.RUNNING

    def _set_state(self, state: LoopState) -> None:
        with self._state_lock:
            self._state = state

    def start(self) -> None:
        old = self._thread
        if old is not None and old is not threading.current_thread() and self.state is LoopState.STOPPED:
            # the previous worker stopped on its own and may still be unwinding
            old.join()
        with self._state_lock:
            if self._state is LoopState.RUNNING:
                return
            self._state = LoopState.RUNNING
            self._stop.clear()
            self._wake.clear()
            self._thread = threading.Thread(target=self._run, name=f"{self.name}-loop", daemon=True)
        self._thread.start()
        logger.info("%s: render loop started (%dx%d)", self.name, *self.buffer.size)

    def stop(self) -> None:
        self._stop.set()
        self._wake.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            while thread.is_alive():
                thread.join(JOIN_RETRY_S)
        self._thread = None
        self._set_state(LoopState.STOPPED)

    def wake(self) -> None:
        """Cut the current inter-frame sleep short."""
        self._wake.set()

    def tick(self) -> None:
        frame = self.surface.acquire_frame()
        if frame is None:
            raise SurfaceUnavailable(f"{self.name}: surface returned no frame")
        self.engine.advance_frame(self.buffer)
        frame.blit(self.buffer)
        self.surface.publish(frame)
        self.ticks += 1

    def _sleep(self, interval_ms: int) -> None:
        if self._wake.wait(max(0, interval_ms) / 1000.0):
            self._wake.clear()
            raise InterruptedWait()

    def _run(self) -> None:
        try:
            while not self._stop.is_set():
                try:
                    self.tick()
                except SurfaceUnavailable as e:
                    logger.info("%s", e)
                    break
                try:
                    self._sleep(self.engine.interval_ms)
                except InterruptedWait:
                    continue
        except Exception:
            logger.exception("%s: frame %d failed, stopping", self.name, self.ticks)
            raise
        finally:
            self._set_state(LoopState.STOPPED)
            logger.info("%s: render loop stopped after %d frame(s)", self.name, self.ticks)
