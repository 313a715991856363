"""
Timed on-screen spell messages.
"""

import heapq
import itertools
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..data.spells import SpellEffect


@dataclass
class DisplayMessage:
    """An active on-screen message and its properties."""
    text: str
    position: Tuple[float, float]
    font_size: int
    lifetime: float
    start_time: float

    @property
    def expires_at(self) -> float:
        return self.start_time + self.lifetime


def to_screen_coords(position: Tuple[float, float], screen_width: int, screen_height: int,
                     text_width: int = 0, text_height: int = 0) -> Tuple[int, int]:
    """
    Convert a normalized position ((0,0) bottom-left, (1,1) top-right) into
    the top-left pixel of a text box centered on it, with y pointing down.
    """
    x = position[0] * screen_width - text_width / 2
    y = (1 - position[1]) * screen_height - text_height / 2
    return int(round(x)), int(round(y))


class SpellDisplayManager:
    """Keeps spell effect messages until their lifetime runs out."""

    def __init__(self):
        self._heap: List[Tuple[float, int, DisplayMessage]] = []
        self._counter = itertools.count()

    def __len__(self):
        return len(self._heap)

    def display(self, effect: Optional[SpellEffect], now: Optional[float] = None) -> Optional[DisplayMessage]:
        """Queue the text of a spell effect for display."""
        if effect is None:
            return None
        now = time.monotonic() if now is None else now
        message = DisplayMessage(
            text=effect.message,
            position=effect.screen_position,
            font_size=effect.font_size,
            lifetime=effect.lifetime,
            start_time=now
        )
        heapq.heappush(self._heap, (message.expires_at, next(self._counter), message))
        return message

    def active_messages(self, now: Optional[float] = None) -> List[DisplayMessage]:
        """Drop expired messages and return the rest in display order."""
        now = time.monotonic() if now is None else now
        while self._heap and now > self._heap[0][0]:
            heapq.heappop(self._heap)
        return [message for _, _, message in sorted(self._heap, key=lambda entry: entry[1])]

    def clear(self):
        self._heap.clear()
