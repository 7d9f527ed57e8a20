from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from . import commands as cmd
from .engine import EngineBase
from .errors import EmptySequenceError
from .framebuffer import FrameBuffer
from .geometry import (
    RIGHT_PHASES,
    EquilateralTriangle,
    RightTriangle,
    crazy_equilateral_corners,
    crazy_right_corners,
    equilateral_corners,
    right_corners,
)
from .input import TRIANGLE_SMOOTHING
from .palette import SEIZURE_PALETTE, TRIANGLE_BACKGROUND, TRIANGLE_PALETTE, ColorCycle
from .params import TriangleParams

logger = logging.getLogger(__name__)

GROW_RATIO = 1.04
SHRINK_RATIO = 0.95
BASE_RADIUS = 1.0
SPAWN_RADIUS = 2.0
FLOOR_RADIUS = 1.0
SEIZURE_INTERVAL_PHASE = 2


class TriangleSequence:
    """Triangles in spawn order.

    The head holds the outermost (largest) triangle and the tail the
    innermost. Growing appends at the tail and prunes the head; shrinking
    prepends at the head and prunes the tail.
    """

    def __init__(self, items: Iterable = ()):
        self._items: deque = deque(items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator:
        return iter(self._items)

    @property
    def head(self):
        if not self._items:
            raise EmptySequenceError("triangle sequence is empty")
        return self._items[0]

    @property
    def tail(self):
        if not self._items:
            raise EmptySequenceError("triangle sequence is empty")
        return self._items[-1]

    def append(self, tri) -> None:
        self._items.append(tri)

    def prepend(self, tri) -> None:
        self._items.appendleft(tri)

    def drop_head(self):
        return self._items.popleft()

    def drop_tail(self):
        return self._items.pop()

    def reseed(self, tri) -> None:
        self._items.clear()
        self._items.append(tri)

    def radii(self) -> List[float]:
        return [t.radius for t in self._items]


@dataclass
class SpinState:
    spin: float
    no_spin: bool = False
    accumulated: float = 1.0

    def frame_angle(self, iteration: int) -> float:
        return 0.0 if self.no_spin else iteration / self.spin


class TriangleEngine(EngineBase):
    """Nested triangles that grow (or shrink) forever while rotating.

    Each triangle sits on a circle around the center; its corners are placed by
    a phase ratio plus the current spin angle. Every frame all radii scale by a
    fixed ratio, a new triangle is spawned at one end of the sequence and the
    one that has left the visible range is dropped at the other.
    """

    kind = "triangle"
    smoothing = TRIANGLE_SMOOTHING

    def __init__(self, params: Optional[TriangleParams] = None, rng=None,
                 background: int = TRIANGLE_BACKGROUND):
        super().__init__(rng)
        self.params = params if params is not None else TriangleParams()
        self.background = background
        self.palette = ColorCycle(TRIANGLE_PALETTE)
        self.seizure_colors = ColorCycle(SEIZURE_PALETTE)
        self.spin = SpinState(float(self.params.spin_table.value))
        self.iteration = 1
        self.last_spin_angle = 0.0
        self._upright = False
        self._right_cursor = 0
        self._first = True
        self._reset = False
        self._ran_reverse = self.params.reverse
        self._wipe = False
        self._paint_background = False
        self._before_seizure = None

        self.rights = TriangleSequence([self.new_right(BASE_RADIUS)])
        self.equilaterals = TriangleSequence([self.new_equilateral(BASE_RADIUS)])

        p = self.params
        self._handlers.update({
            cmd.TOGGLE_FILL: self._toggle_fill,
            cmd.TOGGLE_PERSIST: self._toggle_persist,
            cmd.TOGGLE_REVERSE: self._toggle_reverse,
            cmd.TOGGLE_SEIZURE: self._toggle_seizure,
            cmd.TOGGLE_CRAZY: self._toggle_crazy,
            cmd.TOGGLE_SHAPE_FAMILY: self._toggle_shape_family,
            cmd.SPIN_UP: p.spin_up,
            cmd.SPIN_DOWN: p.spin_down,
            cmd.FASTER: lambda: p.interval_table.step(-1),
            cmd.SLOWER: lambda: p.interval_table.step(1),
            cmd.RESET: self._request_wipe,
        })

    @property
    def interval_ms(self) -> int:
        return self.params.interval_ms

    @property
    def active(self) -> TriangleSequence:
        return self.equilaterals if self.params.equilateral else self.rights

    # -- triangle factories

    def new_equilateral(self, radius: float) -> EquilateralTriangle:
        self._upright = not self._upright
        return EquilateralTriangle(radius, self.palette.take(), self._upright)

    def new_right(self, radius: float) -> RightTriangle:
        n = len(RIGHT_PHASES)
        phases = tuple(RIGHT_PHASES[(self._right_cursor + k) % n] for k in range(3))
        self._right_cursor = (self._right_cursor + 3) % n
        return RightTriangle(radius, self.palette.take(), phases)

    # -- frame

    def advance_frame(self, buffer: FrameBuffer) -> None:
        self.apply_pending()
        outline = self._loop_conditionals(buffer)

        p = self.params
        seq = self.active
        ratio = SHRINK_RATIO if p.reverse else GROW_RATIO
        for index, tri in enumerate(seq):
            corners = self._corners(tri)
            if index == 0:
                self.last_spin_angle = self.spin.accumulated + self.spin.frame_angle(self.iteration)
            color = self.palette.take() if p.seizure else tri.color
            buffer.polygon(corners, color, filled=not outline, width=p.stroke_width)
            tri.radius *= ratio
            if p.pending_spin is not None:
                self._fold_spin()

        if p.reverse:
            self._shrink_maintenance(seq)
        else:
            self._grow_maintenance(seq)
        self.iteration += 1
        self.frames += 1

    def _loop_conditionals(self, buffer: FrameBuffer) -> bool:
        p = self.params
        # only a frame that ran growing and now shrinks reseeds, however many toggles came between
        if p.reverse and not self._ran_reverse and p.equilateral:
            self._reset = True
        self._ran_reverse = p.reverse
        if self._reset:
            self._reset_conditions(buffer)
        if self._wipe:
            self._reset_canvas(buffer)
        if self._first:
            self._first_frame(buffer)
        elif buffer.size != self.canvas_size:
            self._resize(buffer)
        if self._paint_background:
            buffer.fill(self.background)
            self._paint_background = False

        if p.seizure:
            buffer.fill(self.seizure_colors.take())
            self._before_seizure["painted"] = True
            return True
        if p.erase:
            buffer.fill(self.background)
        return not p.fill

    def _first_frame(self, buffer: FrameBuffer) -> None:
        self.canvas_size = buffer.size
        self.center = buffer.center
        self.params.erase = True
        self._first = False

    def _resize(self, buffer: FrameBuffer) -> None:
        logger.info("triangle: canvas resized %dx%d -> %dx%d", *self.canvas_size, *buffer.size)
        self.canvas_size = buffer.size
        self.center = buffer.center

    def _reset_conditions(self, buffer: FrameBuffer) -> None:
        if self.params.reverse:
            self._reset_canvas(buffer)
        elif self.params.equilateral:
            # the next equilateral must face away from the current innermost one
            self._upright = self.equilaterals.tail.upright
        self._reset = False
        self.iteration = 1
        self._first = True

    def _reset_canvas(self, buffer: FrameBuffer) -> None:
        buffer.fill(self.background)
        _, height = buffer.size
        if self.params.equilateral:
            seq, make = self.equilaterals, self.new_equilateral
        else:
            seq, make = self.rights, self.new_right
        if self.params.reverse:
            tri = make(height * 4)
            tri.color = self.background
        else:
            tri = make(BASE_RADIUS)
        seq.reseed(tri)
        self._wipe = False
        logger.info("triangle: canvas reset (%s, %s)",
                    "equilateral" if self.params.equilateral else "right",
                    "shrinking" if self.params.reverse else "growing")

    def _corners(self, tri):
        p = self.params
        angle = self.spin.frame_angle(self.iteration)
        spin_angle = self.spin.accumulated + angle
        if isinstance(tri, EquilateralTriangle):
            if p.crazy:
                return crazy_equilateral_corners(self.center, tri, spin_angle, self.iteration)
            return equilateral_corners(self.center, tri, spin_angle)
        if p.crazy:
            return crazy_right_corners(self.center, tri, self.spin.accumulated, angle, self.iteration, self.rng)
        return right_corners(self.center, tri, spin_angle)

    def _fold_spin(self) -> None:
        change = self.params.pending_spin
        # absorb the rotation so far so the new rate picks up where the old one left off
        self.spin.accumulated += self.spin.frame_angle(self.iteration)
        self.iteration = 0
        self.spin.spin = change.spin
        self.spin.no_spin = change.no_spin
        self.params.pending_spin = None
        logger.debug("triangle: spin divisor now %s%s", change.spin, " (frozen)" if change.no_spin else "")

    def _grow_maintenance(self, seq: TriangleSequence) -> None:
        width, height = self.canvas_size
        tail = seq.tail
        if tail.radius >= SPAWN_RADIUS:
            if isinstance(tail, EquilateralTriangle):
                seq.append(self.new_equilateral(tail.radius / 2))
            else:
                seq.append(self.new_right(tail.radius / 1.5))
        head = seq.head
        if isinstance(head, EquilateralTriangle):
            escaped = head.radius > width * 5 and head.radius > height * 4
        else:
            escaped = head.radius > (width + height) * 4
        if escaped and len(seq) > 1:
            seq.drop_head()

    def _shrink_maintenance(self, seq: TriangleSequence) -> None:
        width, height = self.canvas_size
        head = seq.head
        if head.radius < width * 3 and head.radius < height * 3:
            if isinstance(head, EquilateralTriangle):
                seq.prepend(self.new_equilateral(head.radius * 2))
            else:
                seq.prepend(self.new_right(height * 3))
        if seq.tail.radius <= FLOOR_RADIUS and len(seq) > 1:
            seq.drop_tail()

    # -- commands (render thread only)

    def _toggle_fill(self) -> None:
        self.params.fill = not self.params.fill

    def _toggle_persist(self) -> None:
        self.params.erase = not self.params.erase

    def _toggle_crazy(self) -> None:
        self.params.crazy = not self.params.crazy

    def _toggle_reverse(self) -> None:
        self.params.reverse = not self.params.reverse

    def _toggle_seizure(self) -> None:
        p = self.params
        if p.seizure:
            saved = self._before_seizure
            p.seizure = False
            p.erase = saved["erase"]
            p.fill = saved["fill"]
            p.interval_table.select(saved["interval"])
            self._paint_background = saved["painted"]
            self._before_seizure = None
        else:
            self._before_seizure = {
                "erase": p.erase, "fill": p.fill, "interval": p.interval_table.index, "painted": False,
            }
            p.seizure = True
            p.erase = True
            p.interval_table.select(SEIZURE_INTERVAL_PHASE)

    def _toggle_shape_family(self) -> None:
        self.params.equilateral = not self.params.equilateral
        self._reset = True

    def _request_wipe(self) -> None:
        self._wipe = True
