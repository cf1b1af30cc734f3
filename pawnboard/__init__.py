"""A two-player desktop chess game with move checking, chess clocks and engine evaluation."""

__version__ = "0.1.0"
__all__ = ["general", "pieces", "board", "engine", "clock", "widgets", "menus", "game", "app"]