from __future__ import annotations

from typing import Tuple

from .commands import MOVE_CENTER

BRANCHING_SMOOTHING = 13.1
TRIANGLE_SMOOTHING = 10.1


def smooth_toward(center: Tuple[float, float], target: Tuple[float, float], k: float) -> Tuple[float, float]:
    cx, cy = center
    tx, ty = target
    return (cx + (tx - cx) / k, cy + (ty - cy) / k)


class InputController:
    """Turns pointer events into center moves for an engine.

    Pointer positions come in widget coordinates and are rescaled to the
    frame buffer before they are queued.
    """

    def __init__(self, engine):
        self.engine = engine
        self.scale_x = 1.0
        self.scale_y = 1.0

    def set_viewport(self, view_w: int, view_h: int, buf_w: int, buf_h: int) -> None:
        self.scale_x = buf_w / view_w if view_w > 0 else 1.0
        self.scale_y = buf_h / view_h if view_h > 0 else 1.0

    def on_pointer_event(self, x: float, y: float) -> None:
        self.engine.submit(MOVE_CENTER, int(x * self.scale_x), int(y * self.scale_y))
