from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

SPIN_PHASES = (2, 5, 11, 29, 41, 57)
INTERVAL_PHASES_MS = (1, 9, 19, 29, 50, 90, 200, 500)


class PhaseTable:
    """A cursor over a fixed table of discrete values, clamped at both ends."""

    def __init__(self, values: Sequence[float], index: int = 0):
        if not values:
            raise ValueError("phase table is empty")
        self.values = tuple(values)
        self.index = self._clamp(index)

    def _clamp(self, index: int) -> int:
        return max(0, min(len(self.values) - 1, int(index)))

    @property
    def value(self):
        return self.values[self.index]

    @property
    def at_start(self) -> bool:
        return self.index == 0

    @property
    def at_end(self) -> bool:
        return self.index == len(self.values) - 1

    def step(self, delta: int) -> bool:
        """Move by delta; returns False when clamping left the cursor in place."""
        new = self._clamp(self.index + delta)
        moved = new != self.index
        self.index = new
        return moved

    def select(self, index: int) -> None:
        self.index = self._clamp(index)


@dataclass
class SteppedValue:
    """An integer nudged by fixed increments and clamped to [low, high].

    ``snap_low`` is what the value becomes when a step lands below ``low``.
    """
    value: int
    up: int
    down: int
    low: int
    high: int
    snap_low: Optional[int] = None

    def increase(self) -> int:
        self.value = min(self.high, self.value + self.up)
        return self.value

    def decrease(self) -> int:
        v = self.value - self.down
        if v < self.low:
            v = self.low if self.snap_low is None else self.snap_low
        self.value = v
        return self.value


@dataclass
class BranchingParams:
    interval_ms: SteppedValue = field(
        default_factory=lambda: SteppedValue(140, up=65, down=45, low=7, high=1000))
    max_iterations: SteppedValue = field(
        default_factory=lambda: SteppedValue(4, up=1, down=1, low=3, high=12))
    line_length: SteppedValue = field(
        default_factory=lambda: SteppedValue(70, up=9, down=9, low=15, high=370, snap_low=10))
    rainbow: bool = False
    stroke_width: int = 3

    @classmethod
    def from_config(cls, cfg: dict) -> "BranchingParams":
        p = cls()
        p.interval_ms.value = int(cfg.get("interval_ms", p.interval_ms.value))
        p.max_iterations.value = int(cfg.get("max_iterations", p.max_iterations.value))
        p.line_length.value = int(cfg.get("line_length", p.line_length.value))
        p.rainbow = bool(cfg.get("rainbow", p.rainbow))
        p.stroke_width = int(cfg.get("stroke_width", p.stroke_width))
        return p


@dataclass
class SpinChange:
    spin: float
    no_spin: bool


@dataclass
class TriangleParams:
    """Triangle mode state.

    Spin commands only walk ``spin_table`` and leave a ``pending_spin``; the
    engine folds it into its own spin state at the next frame.
    """
    spin_table: PhaseTable = field(default_factory=lambda: PhaseTable(SPIN_PHASES, 3))
    interval_table: PhaseTable = field(default_factory=lambda: PhaseTable(INTERVAL_PHASES_MS, 2))
    no_spin: bool = False
    pending_spin: Optional[SpinChange] = None
    equilateral: bool = True
    reverse: bool = False
    fill: bool = True
    erase: bool = True
    crazy: bool = False
    seizure: bool = False
    stroke_width: int = 1

    @property
    def interval_ms(self) -> int:
        return self.interval_table.value

    @property
    def persist(self) -> bool:
        return not self.erase

    def spin_up(self) -> None:
        moved = self.spin_table.step(-1)
        if moved or self.no_spin:
            self.pending_spin = SpinChange(float(self.spin_table.value), False)
        self.no_spin = False

    def spin_down(self) -> None:
        if self.no_spin:
            return
        moved = self.spin_table.step(1)
        # stepping past the slowest divisor freezes the rotation
        self.no_spin = not moved
        self.pending_spin = SpinChange(float(self.spin_table.value), self.no_spin)

    @classmethod
    def from_config(cls, cfg: dict) -> "TriangleParams":
        p = cls(
            spin_table=PhaseTable(SPIN_PHASES, cfg.get("spin_phase", 3)),
            interval_table=PhaseTable(INTERVAL_PHASES_MS, cfg.get("interval_phase", 2)),
        )
        p.equilateral = bool(cfg.get("equilateral", p.equilateral))
        p.fill = bool(cfg.get("fill", p.fill))
        p.stroke_width = int(cfg.get("stroke_width", p.stroke_width))
        return p
