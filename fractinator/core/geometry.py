from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

Vec2 = Tuple[float, float]

# Distance from the center to a new generation of branch tips, per iteration.
BRANCH_REACH = 1.55

EQUILATERAL_PHASES = (2.0 / 3.0, 1.0 / 3.0)
RIGHT_PHASES = (0.5, 1.0, 1.5, 2.0)
EQUILATERAL_CORNERS = (2.0 / 3.0, 4.0 / 3.0, 2.0)


@dataclass
class Point:
    """A branch tip. Directions are in half-turns (multiples of pi)."""
    x: float
    y: float
    direction1: float = 0.0
    direction2: float = 0.0

    @property
    def xy(self) -> Vec2:
        return (self.x, self.y)


@dataclass
class EquilateralTriangle:
    radius: float
    color: int
    upright: bool

    @property
    def phase(self) -> float:
        return EQUILATERAL_PHASES[0] if self.upright else EQUILATERAL_PHASES[1]


@dataclass
class RightTriangle:
    radius: float
    color: int
    phases: Tuple[float, float, float] = field(default=(0.0, 0.0, 0.0))


def polar(center: Vec2, distance: float, angle: float) -> Vec2:
    # sine drives x, cosine drives y
    cx, cy = center
    return (cx + distance * math.sin(angle), cy + distance * math.cos(angle))


def branch_endpoint(center: Vec2, line_length: float, iteration: int, direction: float) -> Vec2:
    return polar(center, line_length * iteration * BRANCH_REACH, math.pi * direction)


def equilateral_corners(center: Vec2, tri: EquilateralTriangle, spin_angle: float) -> List[Vec2]:
    offset = math.pi * tri.phase + spin_angle
    return [polar(center, tri.radius, math.pi * k + offset) for k in EQUILATERAL_CORNERS]


def right_corners(center: Vec2, tri: RightTriangle, spin_angle: float) -> List[Vec2]:
    return [polar(center, tri.radius, math.pi * ratio - spin_angle) for ratio in tri.phases]


def crazy_equilateral_corners(center: Vec2, tri: EquilateralTriangle, spin_angle: float,
                              iteration: int) -> List[Vec2]:
    """Equilateral corners pushed off their circle by fixed, lopsided offsets."""
    (x1, y1), (x2, y2), (x3, y3) = equilateral_corners(center, tri, spin_angle)
    d = tri.radius
    # iteration can be 0 right after a spin change
    it = iteration if iteration else 1
    return [
        (x1 + d * math.sin(math.pi * (1.0 / 3.0)), y1 + d * math.cos(math.pi * (1.0 / 3.1))),
        (x2 + d * math.sin(math.pi * (4.3 / 3.0)), y2 + d * math.cos(math.pi * (4.0 / it))),
        (x3 + d * math.sin(math.pi * 2.1), y3 + d * math.cos(math.pi * 1.9)),
    ]


def crazy_right_corners(center: Vec2, tri: RightTriangle, accumulated: float, frame_angle: float,
                        iteration: int, rng) -> List[Vec2]:
    """Deliberately non-fractal corner formula kept for its look.

    Two terms divide by a fresh signed 32-bit random integer. A draw of 0
    raises ZeroDivisionError; that defect is left in place on purpose.
    """
    cx, cy = center
    d = tri.radius
    r1, r2, r3 = tri.phases
    it = iteration if iteration else 1
    a = frame_angle
    x1 = cx + d * math.sin(math.pi * (r1 + a))
    y1 = cy + d * math.cos(math.pi * (r1 / 1.1) - (a - 1) / _wild_int(rng))
    x2 = cx + d * math.sin(math.pi * (r2 / it) - accumulated + a)
    y2 = cy + d * math.cos(math.pi * (r2 / (a + 1)))
    a = 0.25
    x3 = cx + d * math.sin(math.pi * r3 - a / _wild_int(rng))
    y3 = cy + d * math.cos(math.pi * (r3 / it - accumulated - a))
    return [(x1, y1), (x2, y2), (x3, y3)]


def _wild_int(rng) -> int:
    return rng.randint(-(2 ** 31), 2 ** 31 - 1)
