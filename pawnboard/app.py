"""Application window and the loop that switches between screens."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Iterable
from typing import Any

import pygame

from .game import InGame
from .general import State
from .menus import GameSetting, MainMenu, PauseMenu

WIDTH = 1600
HEIGHT = 900
FPS = 60


class App:
    """Holds the screens and routes input to the one currently shown."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT,
                 game_factory: Callable[[int], InGame] | None = None) -> None:
        self.width = width
        self.height = height
        self.state = State.MAIN_MENU
        self.running = True
        self.main_menu: MainMenu | None = None
        self.pause_menu: PauseMenu | None = None
        self.setting: GameSetting | None = None
        self.game: InGame | None = None
        self._game_factory = game_factory or (
            lambda minutes: InGame(self.width, self.height, 0, minutes, 0)
        )

    def _screen(self, state: State) -> Any:
        if state is State.MAIN_MENU:
            if self.main_menu is None:
                self.main_menu = MainMenu(self.width, self.height)
            return self.main_menu
        if state is State.PAUSE:
            if self.pause_menu is None:
                self.pause_menu = PauseMenu(self.width, self.height)
            return self.pause_menu
        if state is State.GAME_SETTING:
            if self.setting is None:
                self.setting = GameSetting(self.width, self.height)
            return self.setting
        return self.game

    def step(self, events: Iterable[pygame.event.Event]) -> bool:
        """Handle one frame of input; return whether the application keeps running."""
        state = self.state
        if state is State.MAIN_MENU:
            self.game = None
            self.setting = None
        screen = self._screen(state)
        if screen is None:
            self.state = State.MAIN_MENU
            return self.running

        for event in events:
            if event.type == pygame.QUIT:
                self.running = False
                continue
            new_state = screen.handle_event(event)
            if state is State.GAME_SETTING and new_state is State.IN_GAME:
                self.game = self._game_factory(screen.minutes)
            if new_state is not None:
                self.state = new_state

        if state is State.MAIN_MENU and screen.quit_requested:
            self.running = False
        elif state is State.IN_GAME:
            screen.tick()
        elif state is State.GAME_SETTING:
            screen.update()
        return self.running

    def render(self, surface: pygame.Surface) -> None:
        screen = self._screen(self.state)
        if screen is not None:
            screen.render(surface)


def main(argv: list[str] | None = None) -> int:
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="pawnboard", description="Play chess.")
    parser.parse_args(argv)

    pygame.init()
    try:
        window = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Chess")
        frame_clock = pygame.time.Clock()
        app = App(WIDTH, HEIGHT)
        while app.step(pygame.event.get()):
            app.render(window)
            pygame.display.flip()
            frame_clock.tick(FPS)
    finally:
        pygame.quit()
    return 0