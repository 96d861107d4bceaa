# src/player/queue.py
from __future__ import annotations

import random
from enum import Enum
from typing import Optional, Sequence

from core.models import TrackInfo


class ShuffleMode(Enum):
    OFF = 0
    ON = 1


class RepeatMode(Enum):
    OFF = 0
    QUEUE = 1
    ONE = 2


_SHUFFLE_CYCLE = [ShuffleMode.OFF, ShuffleMode.ON]
_REPEAT_CYCLE = [RepeatMode.OFF, RepeatMode.QUEUE, RepeatMode.ONE]


def _next_in(cycle: list, current):
    return cycle[(cycle.index(current) + 1) % len(cycle)]


class PlayQueue:
    """
    Track list plus a cursor. `order` maps play position -> index in
    `tracks`; it is the identity unless shuffle is on.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.tracks: list[TrackInfo] = []
        self.order: list[int] = []
        self.position: int = -1
        self.shuffle_mode = ShuffleMode.OFF
        self.repeat_mode = RepeatMode.OFF
        self._rng = rng or random.Random()

    # ----------------------------
    # Content
    # ----------------------------

    def set_tracks(self, tracks: Sequence[TrackInfo], start_index: int = 0) -> Optional[TrackInfo]:
        self.tracks = list(tracks)
        if not self.tracks:
            self.order = []
            self.position = -1
            return None

        start_index = max(0, min(len(self.tracks) - 1, int(start_index)))
        self.order = list(range(len(self.tracks)))
        self.position = start_index
        if self.shuffle_mode == ShuffleMode.ON:
            self._shuffle_keeping_current()
        return self.current

    @property
    def current(self) -> Optional[TrackInfo]:
        if 0 <= self.position < len(self.order):
            return self.tracks[self.order[self.position]]
        return None

    # ----------------------------
    # Navigation
    # ----------------------------

    @property
    def can_go_next(self) -> bool:
        if not self.order:
            return False
        return self.repeat_mode != RepeatMode.OFF or self.position < len(self.order) - 1

    @property
    def can_go_prev(self) -> bool:
        if not self.order:
            return False
        return self.repeat_mode != RepeatMode.OFF or self.position > 0

    def next(self) -> Optional[TrackInfo]:
        if not self.can_go_next:
            return None
        self.position = (self.position + 1) % len(self.order)
        return self.current

    def prev(self) -> Optional[TrackInfo]:
        if not self.can_go_prev:
            return None
        self.position = (self.position - 1) % len(self.order)
        return self.current

    # ----------------------------
    # Modes
    # ----------------------------

    def roll_shuffle_mode(self) -> ShuffleMode:
        self.set_shuffle_mode(_next_in(_SHUFFLE_CYCLE, self.shuffle_mode))
        return self.shuffle_mode

    def roll_repeat_mode(self) -> RepeatMode:
        self.repeat_mode = _next_in(_REPEAT_CYCLE, self.repeat_mode)
        return self.repeat_mode

    def set_shuffle_mode(self, mode: ShuffleMode) -> None:
        if mode == self.shuffle_mode:
            return
        self.shuffle_mode = mode
        if not self.order:
            return

        if mode == ShuffleMode.ON:
            self._shuffle_keeping_current()
        else:
            current_index = self.order[self.position]
            self.order = list(range(len(self.tracks)))
            self.position = current_index

    def _shuffle_keeping_current(self) -> None:
        # Current track stays first so shuffling never interrupts playback
        current_index = self.order[self.position]
        rest = [i for i in range(len(self.tracks)) if i != current_index]
        self._rng.shuffle(rest)
        self.order = [current_index] + rest
        self.position = 0
