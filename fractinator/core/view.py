from __future__ import annotations

import logging
from typing import Optional

from .framebuffer import FrameBuffer
from .input import InputController
from .render_loop import RenderLoop

logger = logging.getLogger(__name__)


class AnimationView:
    """Host-independent glue between a surface, an engine and the music player.

    The host calls ``on_surface_ready`` / ``on_surface_gone`` as its drawing
    surface comes and goes, forwards pointer events, and issues menu commands.
    """

    def __init__(self, engine, music=None, name: Optional[str] = None):
        self.engine = engine
        self.music = music
        self.name = name or engine.kind
        self.input = InputController(engine)
        self.buffer: Optional[FrameBuffer] = None
        self.loop: Optional[RenderLoop] = None
        self.play_music = False

    @property
    def running(self) -> bool:
        return self.loop is not None and self.loop.running

    def on_surface_ready(self, surface, width: int, height: int) -> None:
        if self.loop is not None:
            self.loop.stop()
        self.buffer = FrameBuffer(width, height, getattr(self.engine, "background", 0xFF000000))
        self.input.set_viewport(width, height, width, height)
        self.loop = RenderLoop(surface, self.engine, self.buffer, name=self.name)
        self.loop.start()

    def on_surface_gone(self) -> None:
        if self.loop is not None:
            self.loop.stop()
            self.loop = None

    def on_pointer_event(self, x: float, y: float) -> None:
        self.input.on_pointer_event(x, y)

    def command(self, name: str, *args) -> None:
        self.engine.submit(name, *args)

    # -- music

    def toggle_music(self) -> None:
        if self.music is None:
            return
        if self.play_music:
            self.stop_music()
        else:
            self.play_music = True
            self.music.shuffle()
            self.music.play()

    def skip_track(self) -> None:
        if self.music is not None and self.play_music:
            self.music.skip()

    def stop_music(self) -> None:
        self.play_music = False
        if self.music is not None:
            self.music.stop()

    def close(self) -> None:
        self.stop_music()
        self.on_surface_gone()


def make_engine(kind: str, cfg: Optional[dict] = None, rng=None):
    """Build an engine from a config section (see ``config.DEFAULTS``)."""
    from fractinator.utils.image_ops import hex_to_argb

    from .branching import BranchingEngine
    from .params import BranchingParams, TriangleParams
    from .triangles import TriangleEngine

    cfg = cfg or {}
    if kind == "branching":
        section = cfg.get("branching", {})
        engine = BranchingEngine(BranchingParams.from_config(section), rng=rng)
    elif kind == "triangle":
        section = cfg.get("triangle", {})
        engine = TriangleEngine(TriangleParams.from_config(section), rng=rng)
    else:
        raise ValueError(f"unknown animation: {kind!r}")
    if "background" in section:
        engine.background = hex_to_argb(section["background"])
    return engine
