from __future__ import annotations

import abc
import logging
import random
from typing import Callable, Dict, Optional, Tuple

from .commands import MOVE_CENTER, Command, CommandChannel
from .errors import UnknownCommand
from .input import smooth_toward

logger = logging.getLogger(__name__)


class EngineBase(abc.ABC):
    """Command plumbing shared by the two geometry engines.

    Every mutation arrives through ``submit`` and is applied by
    ``apply_pending`` on the render thread, at the top of a frame.
    """

    kind = "engine"
    smoothing = 10.0

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()
        self.channel = CommandChannel()
        self.center: Optional[Tuple[float, float]] = None
        self.canvas_size: Tuple[int, int] = (0, 0)
        self.frames = 0
        self._handlers: Dict[str, Callable] = {MOVE_CENTER: self._move_center}

    def submit(self, name: str, *args) -> None:
        if name not in self._handlers:
            raise UnknownCommand(f"{self.kind} engine has no command {name!r}")
        self.channel.post(Command(name, tuple(args)))

    def apply_pending(self) -> int:
        commands = self.channel.drain()
        for cmd in commands:
            self._handlers[cmd.name](*cmd.args)
        if commands:
            logger.debug("%s: applied %d command(s) at frame %d", self.kind, len(commands), self.frames)
        return len(commands)

    def _move_center(self, x: float, y: float) -> None:
        if self.center is None:
            return
        self.center = smooth_toward(self.center, (x, y), self.smoothing)

    @property
    @abc.abstractmethod
    def interval_ms(self) -> int:
        """Current inter-frame delay in milliseconds."""

    @abc.abstractmethod
    def advance_frame(self, buffer) -> None:
        """Apply pending commands and draw one frame into ``buffer``."""
