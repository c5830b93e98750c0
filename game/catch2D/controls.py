"""
Keyboard state for the host loop.

The core only ever sees a ``FrameInput``: two level-triggered movement flags
sampled once per frame and an edge-triggered restart request. ``HeldKeys``
turns raw press/release events from the windowing toolkit into that record.
Key codes are whatever integers the toolkit uses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Set


@dataclass(frozen=True)
class FrameInput:
    """Input sampled for a single frame"""
    move_left: bool = False
    move_right: bool = False
    restart: bool = False


class HeldKeys:
    """Tracks currently held keys and a latched restart request"""

    def __init__(self, left_keys: Iterable[int], right_keys: Iterable[int], restart_keys: Iterable[int]):
        self.left_keys = frozenset(left_keys)
        self.right_keys = frozenset(right_keys)
        self.restart_keys = frozenset(restart_keys)
        self._held: Set[int] = set()
        self._restart_requested = False

    def press(self, key: int):
        self._held.add(key)
        if key in self.restart_keys:
            self._restart_requested = True

    def release(self, key: int):
        self._held.discard(key)

    def clear(self):
        """Forget everything, e.g. when the window loses focus"""
        self._held.clear()
        self._restart_requested = False

    @property
    def move_left(self) -> bool:
        return not self._held.isdisjoint(self.left_keys)

    @property
    def move_right(self) -> bool:
        return not self._held.isdisjoint(self.right_keys)

    def to_frame_input(self) -> FrameInput:
        """Sample the held state; the restart request is consumed here"""
        restart = self._restart_requested
        self._restart_requested = False
        return FrameInput(move_left=self.move_left, move_right=self.move_right, restart=restart)
