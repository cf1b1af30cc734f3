"""Clickable buttons, drop-down lists, pop-up messages and the promotion picker."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import pygame

from .general import Player

FONT_PATH = "./Font/roboto/Roboto-Regular.ttf"
TEXT_SIZE = 42
PIECE_SIZE = 100
BORDER_COLOR = (27, 153, 139)

Point = tuple[float, float]
ColorLike = pygame.Color | tuple[int, ...]


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    try:
        return pygame.font.Font(FONT_PATH, size)
    except (OSError, pygame.error):
        return pygame.font.Font(None, size)


@dataclass(frozen=True)
class _Box:
    left: float
    top: float
    width: float
    height: float

    @classmethod
    def centered(cls, size: Point, center: Point) -> _Box:
        width, height = size
        return cls(center[0] - width / 2, center[1] - height / 2, width, height)

    def contains(self, point: Point) -> bool:
        x, y = point
        return self.left <= x < self.left + self.width and self.top <= y < self.top + self.height

    def rect(self) -> pygame.Rect:
        return pygame.Rect(round(self.left), round(self.top), round(self.width), round(self.height))


def _fill(surface: pygame.Surface, box: _Box, color: ColorLike) -> None:
    color = pygame.Color(color)
    rect = box.rect()
    if color.a < 255:
        layer = pygame.Surface(rect.size, pygame.SRCALPHA)
        layer.fill(color)
        surface.blit(layer, rect.topleft)
    else:
        pygame.draw.rect(surface, color, rect)


def _draw_text(surface: pygame.Surface, text: str, center: Point, color: ColorLike,
               size: int = TEXT_SIZE) -> None:
    label = _font(size).render(text, True, pygame.Color(color))
    surface.blit(label, label.get_rect(center=(round(center[0]), round(center[1]))))


class Button:
    """A filled rectangle with a centred label."""

    def __init__(self, size: Point, position: Point, text: str, background: ColorLike,
                 text_color: ColorLike) -> None:
        self.position = position
        self.text = text
        self.background = pygame.Color(background)
        self.text_color = pygame.Color(text_color)
        self._box = _Box.centered(size, position)

    def set_background(self, color: ColorLike) -> None:
        self.background = pygame.Color(color)

    def contains(self, point: Point) -> bool:
        """Whether a pixel position lies on the button."""
        return self._box.contains(point)

    def render(self, surface: pygame.Surface) -> None:
        _fill(surface, self._box, self.background)
        _draw_text(surface, self.text, self.position, self.text_color)


class DropdownBox:
    """A header box that unfolds a list of options beneath it."""

    def __init__(self, size: Point, position: Point, text: str, background: ColorLike,
                 text_color: ColorLike, options: Sequence[str]) -> None:
        self.position = position
        self.title = text
        self._default_title = text
        self.options = list(options)
        self.background = pygame.Color(background)
        self.text_color = pygame.Color(text_color)
        self.shown = False
        self._box = _Box.centered(size, position)
        self._item_centers = [
            (position[0], position[1] + size[1] * (index + 1)) for index in range(len(self.options))
        ]
        self._items = [_Box.centered(size, center) for center in self._item_centers]

    def show_list(self) -> None:
        self.shown = True

    def hide_list(self) -> None:
        self.shown = False

    def contains(self, point: Point) -> bool:
        """Whether a pixel position lies on the header box."""
        return self._box.contains(point)

    def click_inside(self, point: Point) -> int | None:
        """Select the option under the point and return its index, or None.

        A hit updates the title and folds the list; a miss restores the title.
        """
        for index, item in enumerate(self._items):
            if item.contains(point):
                self.title = f"Time:{self.options[index]}"
                self.hide_list()
                return index
        self.title = self._default_title
        return None

    def render(self, surface: pygame.Surface) -> None:
        _fill(surface, self._box, self.background)
        _draw_text(surface, self.title, self.position, self.text_color)
        if not self.shown:
            return
        item_color = pygame.Color(self.background)
        item_color.a = 200
        for item in self._items:
            _fill(surface, item, item_color)
        for option, center in zip(self.options, self._item_centers):
            _draw_text(surface, option, center, self.text_color)


class PopUpMessage:
    """A message box that expires a fixed time after it was created."""

    def __init__(self, size: Point, position: Point, text: str, background: ColorLike,
                 text_color: ColorLike, seconds: float = 3.0,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self.position = position
        self.text = text
        self.background = pygame.Color(background)
        self.text_color = pygame.Color(text_color)
        self.total_time = seconds * 1000
        self._box = _Box.centered(size, position)
        self._clock = clock
        self._created = clock()

    def expired(self) -> bool:
        """Whether the message's display time is over."""
        elapsed = int((self._clock() - self._created) * 1000)
        return self.total_time - elapsed <= 0

    def render(self, surface: pygame.Surface) -> None:
        _fill(surface, self._box, self.background)
        _draw_text(surface, self.text, self.position, self.text_color)


_CHOICES = (
    ("Queen", (690, 340)),
    ("Knight", (810, 340)),
    ("Rook", (690, 460)),
    ("Bishop", (810, 460)),
)


def _load_image(path: str) -> pygame.Surface | None:
    if not Path(path).is_file():
        return None
    try:
        return pygame.image.load(path)
    except pygame.error:
        return None


class PromotionBox:
    """Overlay letting the player pick the piece a pawn promotes to."""

    def __init__(self, width: int, height: int, turn: Player) -> None:
        self.width = width
        self.height = height
        self.turn = turn
        self._box = _Box.centered((260, 260), (width / 2, height / 2))
        self._borders = [_Box(width / 2 - 130, 320 + 120 * i, 260, 20) for i in range(3)]
        self._borders += [_Box(670 + 120 * i, height / 2 - 130, 20, 260) for i in range(3)]
        side = "White" if turn is Player.WHITE else "Black"
        self._choices = [
            (name, _Box(x, y, PIECE_SIZE, PIECE_SIZE), _load_image(f"./Textures/{side}-{name}.png"))
            for name, (x, y) in _CHOICES
        ]

    def piece_at(self, point: Point) -> str | None:
        """Name of the piece under the point, or None."""
        for name, box, _ in self._choices:
            if box.contains(point):
                return name
        return None

    def render(self, surface: pygame.Surface) -> None:
        _fill(surface, _Box(0, 0, self.width, self.height), (0, 0, 0, 100))
        _fill(surface, self._box, (0, 0, 0, 150))
        for border in self._borders:
            _fill(surface, border, BORDER_COLOR)
        text_color = (255, 255, 255) if self.turn is Player.WHITE else (0, 0, 0)
        for name, box, image in self._choices:
            if image is not None:
                surface.blit(image, (round(box.left), round(box.top)))
            else:
                center = (box.left + box.width / 2, box.top + box.height / 2)
                _draw_text(surface, name[0] if name != "Knight" else "N", center, text_color)