from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from typing import List, Tuple

# Names shared by both engines.
RESET = "reset"
FASTER = "faster"
SLOWER = "slower"
MOVE_CENTER = "move_center"

# Branching engine.
CHANGE_COLOR = "change_color"
TOGGLE_RAINBOW = "toggle_rainbow"
BIGGER = "bigger"
SMALLER = "smaller"
LONGER_LINES = "longer_lines"
SHORTER_LINES = "shorter_lines"

# Triangle engine.
TOGGLE_FILL = "toggle_fill"
TOGGLE_PERSIST = "toggle_persist"
TOGGLE_REVERSE = "toggle_reverse"
TOGGLE_SEIZURE = "toggle_seizure"
TOGGLE_CRAZY = "toggle_crazy"
TOGGLE_SHAPE_FAMILY = "toggle_shape_family"
SPIN_UP = "spin_up"
SPIN_DOWN = "spin_down"


@dataclass(frozen=True)
class Command:
    name: str
    args: Tuple = ()


class CommandChannel:
    """Many writers, one reader. The render thread drains it once per frame."""

    def __init__(self):
        self._queue: deque = deque()
        self.lock = threading.Lock()

    def post(self, command: Command) -> None:
        with self.lock:
            self._queue.append(command)

    def drain(self) -> List[Command]:
        with self.lock:
            out = list(self._queue)
            self._queue.clear()
        return out

    def __len__(self) -> int:
        with self.lock:
            return len(self._queue)
