"""Menu screens: main menu, pause menu, end-of-game overlay and match settings."""

from __future__ import annotations

import time
from collections.abc import Callable
from functools import lru_cache

import pygame

from .general import GameMode, Player, State
from .widgets import Button, DropdownBox, PopUpMessage

FONT_PATH = "./Font/roboto/Roboto-Regular.ttf"
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)
GREEN = (0, 255, 0)
OVERLAY = (0, 0, 0, 100)

TIME_OPTIONS = ("1:00", "3:00", "10:00", "30:00")
TIME_SECONDS = (60, 180, 600, 1800)

NO_TIME_MESSAGE = "You need to choose a time!"
NO_MODE_MESSAGE = "You need to select a gamemode!"


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    try:
        return pygame.font.Font(FONT_PATH, size)
    except (OSError, pygame.error):
        return pygame.font.Font(None, size)


def _draw_text(surface: pygame.Surface, text: str, center: tuple[float, float],
               color: tuple[int, ...], size: int) -> None:
    label = _font(size).render(text, True, pygame.Color(color))
    surface.blit(label, label.get_rect(center=(round(center[0]), round(center[1]))))


def _left_click(event: pygame.event.Event) -> tuple[float, float] | None:
    """Position of a left mouse-button press, or None for any other event."""
    if event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", None) == 1:
        return event.pos
    return None


class MainMenu:
    """Title screen with buttons to start a match or quit."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.quit_requested = False
        self.start_button = Button((200, 50), (width / 2, 500), "Start", WHITE, RED)
        self.quit_button = Button((200, 50), (width / 2, 600), "Quit", WHITE, RED)

    def handle_event(self, event: pygame.event.Event) -> State | None:
        """Return the screen to switch to, or None to stay."""
        point = _left_click(event)
        if point is None:
            return None
        new_state = None
        if self.start_button.contains(point):
            new_state = State.GAME_SETTING
        if self.quit_button.contains(point):
            self.quit_requested = True
        return new_state

    def render(self, surface: pygame.Surface) -> None:
        surface.fill(BLACK)
        _draw_text(surface, "Chess", (self.width / 2, 300), RED, 42)
        self.start_button.render(surface)
        self.quit_button.render(surface)


class PauseMenu:
    """Screen shown while a match is paused."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.resume_button = Button((250, 50), (width / 2, 500), "Resume", WHITE, RED)
        self.back_button = Button((250, 50), (width / 2, 600), "Back to Menu", WHITE, RED)

    def handle_event(self, event: pygame.event.Event) -> State | None:
        """Return the screen to switch to, or None to stay."""
        point = _left_click(event)
        if point is None:
            return None
        new_state = None
        if self.resume_button.contains(point):
            new_state = State.IN_GAME
        if self.back_button.contains(point):
            new_state = State.MAIN_MENU
        return new_state

    def render(self, surface: pygame.Surface) -> None:
        surface.fill(BLACK)
        _draw_text(surface, "Pause", (self.width / 2, 300), RED, 42)
        self.resume_button.render(surface)
        self.back_button.render(surface)


class EndGameScreen:
    """Overlay announcing how a match ended and who won.

    ``loser`` is the side that lost; without it the winner is left unnamed.
    """

    def __init__(self, message: str = "End Game", loser: Player | None = None) -> None:
        self.message = message
        if loser is None:
            self.result = "Someone win"
        else:
            self.result = "Black win" if loser is Player.WHITE else "White win"
        self.leave_button = Button((350, 50), (800, 550), "Leave this match", OVERLAY, WHITE)

    def handle_event(self, event: pygame.event.Event) -> State | None:
        """Return the main menu state when the leave button is pressed."""
        point = _left_click(event)
        if point is not None and self.leave_button.contains(point):
            return State.MAIN_MENU
        return None

    def render(self, surface: pygame.Surface) -> None:
        layer = pygame.Surface((1600, 900), pygame.SRCALPHA)
        layer.fill(pygame.Color(OVERLAY))
        surface.blit(layer, (0, 0))
        _draw_text(surface, self.message, (800, 450), WHITE, 30)
        _draw_text(surface, self.result, (800, 500), WHITE, 30)
        self.leave_button.render(surface)


class GameSetting:
    """Screen for choosing the game mode and the time control."""

    def __init__(self, width: int, height: int,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self.width = width
        self.height = height
        self._clock = clock
        self.chosen_mode = GameMode.NONE
        self.time_selected = -1
        self.message: PopUpMessage | None = None
        self.mode_buttons = (
            (Button((500, 50), (1200, 250), "Player VS Player (offline)", WHITE, RED),
             GameMode.PVP_OFFLINE),
            (Button((500, 50), (1200, 350), "Player VS AI", WHITE, RED), GameMode.AI_OFFLINE),
            (Button((500, 50), (1200, 450), "Player VS Player (online)", WHITE, RED),
             GameMode.PVP_ONLINE),
        )
        self.ready_button = Button((500, 50), (1200, 650), "Ready", WHITE, RED)
        self.time_box = DropdownBox((500, 50), (1200, 550), "Choose Time", WHITE, RED,
                                    TIME_OPTIONS)

    @property
    def minutes(self) -> int:
        """Chosen time control in whole minutes, or -1 when none is chosen."""
        return -1 if self.time_selected == -1 else self.time_selected // 60

    def _show_message(self, text: str) -> None:
        if self.message is None:
            self.message = PopUpMessage((1000, 100), (800, 800), text, (255, 255, 255, 100),
                                        BLACK, 3, clock=self._clock)

    def handle_event(self, event: pygame.event.Event) -> State | None:
        """Return State.IN_GAME once a match can start, else None."""
        point = _left_click(event)
        if point is None:
            return None

        for button, mode in self.mode_buttons:
            if button.contains(point):
                for other, _ in self.mode_buttons:
                    other.set_background(WHITE)
                self.chosen_mode = mode
                button.set_background(GREEN)
                return None

        if self.time_box.contains(point):
            self.time_box.show_list()
            return None

        if self.time_box.shown:
            index = self.time_box.click_inside(point)
            if index is None:
                self.time_box.hide_list()
            else:
                self.time_selected = TIME_SECONDS[index]
            return None

        if not self.ready_button.contains(point):
            return None

        if self.chosen_mode is GameMode.PVP_OFFLINE:
            if self.time_selected == -1:
                self._show_message(NO_TIME_MESSAGE)
                return None
            self.message = None
            return State.IN_GAME
        if self.chosen_mode is GameMode.NONE:
            self._show_message(NO_MODE_MESSAGE)
        return None

    def update(self) -> None:
        """Drop the pop-up message once its time is over."""
        if self.message is not None and self.message.expired():
            self.message = None

    def render(self, surface: pygame.Surface) -> None:
        surface.fill(BLACK)
        pygame.draw.rect(surface, WHITE, pygame.Rect(0, 850, 800, 50))
        for button, _ in self.mode_buttons:
            button.render(surface)
        self.ready_button.render(surface)
        if self.message is not None:
            self.message.render(surface)
        self.time_box.render(surface)