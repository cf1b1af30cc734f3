"""Countdown clock shown beside the board for each player."""

from __future__ import annotations

import time
from collections.abc import Callable
from functools import lru_cache

import pygame

FONT_PATH = "./Font/roboto/Roboto-Regular.ttf"
CLOCK_SIZE = (300, 40)
BACKGROUND = (255, 255, 255)
TEXT_COLOR = (255, 0, 0)
TEXT_SIZE = 32


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    try:
        return pygame.font.Font(FONT_PATH, size)
    except (OSError, pygame.error):
        return pygame.font.Font(None, size)


def format_remaining(milliseconds: int) -> str:
    """Text shown for the remaining time, or ``End`` once it has run out."""
    if milliseconds <= 0:
        return "End"
    hours, rest = divmod(milliseconds, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, millis = divmod(rest, 1000)
    return f"Time: {hours:02d}:{minutes:02d}:{seconds:02d}:{millis:03d}"


class GameTimer:
    """A chess clock that counts down while running and keeps its time when paused."""

    def __init__(
        self,
        hour: int,
        minute: int,
        second: int,
        position: tuple[float, float] = (0, 0),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.position = position
        self.total_time = (hour * 3600 + minute * 60 + second) * 1000
        self.remaining = self.total_time
        self.text = f"{hour}:{minute}:{second}"
        self._clock = clock
        self._started: float | None = None
        self._ended = False

    @property
    def running(self) -> bool:
        return self._started is not None

    def start(self) -> None:
        """Start counting down; does nothing when already running."""
        if self._started is None:
            self._started = self._clock()

    def pause(self) -> None:
        """Stop counting and keep the time that is left."""
        self.total_time = self.remaining
        self._started = None

    def update(self) -> None:
        """Recompute the remaining time and the displayed text."""
        if self._started is not None:
            elapsed = int((self._clock() - self._started) * 1000)
            self.remaining = self.total_time - elapsed
        self.text = format_remaining(self.remaining)
        if self.remaining <= 0:
            self._ended = True

    def is_end(self) -> bool:
        """Whether the time has run out."""
        return self._ended

    def render(self, surface: pygame.Surface) -> None:
        x, y = self.position
        pygame.draw.rect(surface, BACKGROUND, pygame.Rect(round(x), round(y), *CLOCK_SIZE))
        label = _font(TEXT_SIZE).render(self.text, True, TEXT_COLOR)
        surface.blit(label, (round(x), round(y)))