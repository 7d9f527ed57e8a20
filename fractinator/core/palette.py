from __future__ import annotations

# Colors are 0xAARRGGBB ints, converted to RGB at paint time.

BRANCHING_BACKGROUND = 0xFF0066FF
BRANCHING_DEFAULT_COLOR = 0xFFE1E1E1

# Index 0 is the startup color; "change color" walks forward and wraps.
BRANCHING_PALETTE = (
    0xFFE1E1E1,
    0xFFFFFFFF,
    0xFFF71300,
    0xFFEAE000,
    0xFF006A28,
    0xFFFF65A3,
    0xFF000000,
    0xFF009D0E,
    0xFF8FBBFF,
    0xFFD59200,
    0xFF4100FF,
)

TRIANGLE_BACKGROUND = 0xFF1E90FF

TRIANGLE_PALETTE = (
    0xFFE1E1E1,
    0xFF000000,
    0xFF635EA7,
    0xFFF78E00,
    0xFFFF1800,
    0xFFEAE000,
    0xFFFF5A88,
    0xFF33823A,
)

SEIZURE_PALETTE = (
    0xFFFFFF00,
    0xFFFFFF00,
    0xFFFF69B4,
    0xFFFF69B4,
    0xFF6B8E23,
    0xFF6B8E23,
)


class ColorCycle:
    """Round-robin cursor over a fixed color table."""

    def __init__(self, colors, start: int = 0):
        if not colors:
            raise ValueError("color table is empty")
        self.colors = tuple(colors)
        self.index = start % len(self.colors)

    @property
    def current(self) -> int:
        return self.colors[self.index]

    def advance(self) -> int:
        self.index = (self.index + 1) % len(self.colors)
        return self.colors[self.index]

    def take(self) -> int:
        # hand out the current color, then move on
        color = self.colors[self.index]
        self.index = (self.index + 1) % len(self.colors)
        return color
