from __future__ import annotations

import logging
from typing import List, Optional

from . import commands as cmd
from .engine import EngineBase
from .errors import EmptyGenerationError
from .framebuffer import FrameBuffer
from .geometry import Point, branch_endpoint
from .input import BRANCHING_SMOOTHING
from .palette import BRANCHING_BACKGROUND, BRANCHING_DEFAULT_COLOR, BRANCHING_PALETTE, ColorCycle
from .params import BranchingParams

logger = logging.getLogger(__name__)


class BranchingEngine(EngineBase):
    """Lines fanning out from a center, each tip forking into two.

    Every frame the live generation of tips spawns two children per tip on a
    circle whose radius grows with the iteration count. Children inherit their
    parent's heading plus a random wobble that shrinks as the iteration count
    rises, so the growth keeps heading outward. Once the count passes the
    iteration cap the tree restarts from the center on top of what is already
    painted.
    """

    kind = "branching"
    smoothing = BRANCHING_SMOOTHING

    def __init__(self, params: Optional[BranchingParams] = None, rng=None,
                 background: int = BRANCHING_BACKGROUND):
        super().__init__(rng)
        self.params = params if params is not None else BranchingParams()
        self.background = background
        self.palette = ColorCycle(BRANCHING_PALETTE)
        self.color = BRANCHING_DEFAULT_COLOR
        self.current: List[Point] = []
        self.next_gen: List[Point] = []
        self.iteration = 1
        self._first = True
        self._reset = False
        self._handlers.update({
            cmd.CHANGE_COLOR: self._change_color,
            cmd.TOGGLE_RAINBOW: self._toggle_rainbow,
            cmd.FASTER: self.params.interval_ms.decrease,
            cmd.SLOWER: self.params.interval_ms.increase,
            cmd.BIGGER: self.params.max_iterations.increase,
            cmd.SMALLER: self.params.max_iterations.decrease,
            cmd.LONGER_LINES: self.params.line_length.increase,
            cmd.SHORTER_LINES: self.params.line_length.decrease,
            cmd.RESET: self._request_reset,
        })

    @property
    def interval_ms(self) -> int:
        return self.params.interval_ms.value

    def advance_frame(self, buffer: FrameBuffer) -> None:
        self.apply_pending()
        self._loop_conditionals(buffer)

        width = self.params.stroke_width
        for start in self.current:
            for child in self._spawn_children(start):
                buffer.line(start.xy, child.xy, self.color, width)
                self.next_gen.append(child)

        self.current, self.next_gen = self.next_gen, self.current
        self.next_gen.clear()
        self.iteration += 1
        self.frames += 1

    def _loop_conditionals(self, buffer: FrameBuffer) -> None:
        if self._first or buffer.size != self.canvas_size:
            self._first_frame(buffer)
        if self.params.rainbow:
            self.color = self.palette.advance()
        if self.iteration > self.params.max_iterations.value:
            self.clear_iterations()
        if not self.current:
            self.current.append(Point(*self.center, self.random_direction(), self.random_direction()))
        if not self.current:
            raise EmptyGenerationError("no live branch tips after injection")

    def _first_frame(self, buffer: FrameBuffer) -> None:
        resized = buffer.size != self.canvas_size
        self.canvas_size = buffer.size
        # a moved center survives a reset, but not a new canvas
        if resized or not self._reset or self.center is None:
            self.center = buffer.center
        self.clear_iterations()
        buffer.fill(self.background)
        if self._reset:
            logger.info("branching: reset at frame %d", self.frames)
        self._first = False
        self._reset = False

    def clear_iterations(self) -> None:
        self.iteration = 1
        self.current.clear()
        self.next_gen.clear()

    def _spawn_children(self, start: Point) -> List[Point]:
        children = []
        for direction in (start.direction1, start.direction2):
            x, y = branch_endpoint(self.center, self.params.line_length.value, self.iteration, direction)
            # both of a child's headings wobble off the same parent heading
            children.append(Point(x, y, self.new_direction(direction), self.new_direction(direction)))
        return children

    def random_direction(self) -> float:
        return self.rng.random() * 2.0

    def new_direction(self, old: float) -> float:
        sign = -1 if self.rng.randrange(2) == 1 else 1
        return old + self.rng.random() / (5 + self.iteration) * sign

    def _change_color(self) -> None:
        self.params.rainbow = False
        self.color = self.palette.advance()

    def _toggle_rainbow(self) -> None:
        self.params.rainbow = not self.params.rainbow

    def _request_reset(self) -> None:
        self._first = True
        self._reset = True
