"""Shared enumerations for the chess game."""

from __future__ import annotations

from enum import Enum, auto


class State(Enum):
    """Screen the application is currently showing."""

    MAIN_MENU = auto()
    IN_GAME = auto()
    PAUSE = auto()
    GAME_SETTING = auto()


class Player(Enum):
    """Side of a piece, or NONE for an empty square."""

    WHITE = auto()
    BLACK = auto()
    NONE = auto()

    def opponent(self) -> Player:
        """Return the side that moves after this one."""
        if self is Player.WHITE:
            return Player.BLACK
        if self is Player.BLACK:
            return Player.WHITE
        raise ValueError("an empty square has no opponent")


class GameMode(Enum):
    """Kind of match chosen on the settings screen."""

    PVP_OFFLINE = auto()
    AI_OFFLINE = auto()
    PVP_ONLINE = auto()
    NONE = auto()