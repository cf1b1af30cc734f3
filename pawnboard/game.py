"""A running match: clocks, moving pieces by dragging, promotion and game end."""

from __future__ import annotations

import time
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

import pygame

from .board import (
    BOARD_LEFT,
    BOARD_SIZE,
    BOARD_TOP,
    SQUARE_SIZE,
    ChessBoard,
    IllegalMoveError,
    square_at,
    square_center,
)
from .clock import GameTimer
from .engine import Engine
from .general import Player, State
from .menus import EndGameScreen
from .widgets import PromotionBox

FONT_PATH = "./Font/roboto/Roboto-Regular.ttf"
BACKGROUND_PATH = "./Textures/backgroundImage.jpg"
LIGHT_SQUARE = (177, 228, 185)
DARK_SQUARE = (112, 162, 163)
GUIDE_COLOR = (27, 153, 139)
LABEL_COLOR = (0, 0, 0)
EVAL_COLOR = (0, 255, 0)
HINT_COLOR = (0, 0, 0, 150)

_GUIDE_BOXES = ((380, 50, 20, 820), (1200, 50, 20, 820), (400, 850, 800, 20))

Point = tuple[float, float]


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    try:
        return pygame.font.Font(FONT_PATH, size)
    except (OSError, pygame.error):
        return pygame.font.Font(None, size)


@lru_cache(maxsize=None)
def _image(path: str) -> pygame.Surface | None:
    if not Path(path).is_file():
        return None
    try:
        return pygame.image.load(path)
    except pygame.error:
        return None


def _draw_centered(surface: pygame.Surface, text: str, center: Point,
                   color: tuple[int, ...], size: int) -> None:
    label = _font(size).render(text, True, pygame.Color(color))
    surface.blit(label, label.get_rect(center=(round(center[0]), round(center[1]))))


def _format_eval(value: float) -> str:
    return f"{value:.6f}"


class InGame:
    """A match between two players at one board, each with a countdown clock."""

    def __init__(
        self,
        width: int = 1600,
        height: int = 900,
        hour: int = 0,
        minute: int = 3,
        second: int = 0,
        engine: Any = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.width = width
        self.height = height
        self.board = ChessBoard()
        self.timer_white = GameTimer(hour, minute, second, (40, 50), clock=clock)
        self.timer_black = GameTimer(hour, minute, second, (1260, 50), clock=clock)
        self.engine = engine if engine is not None else Engine()
        self.turn = Player.WHITE
        self.evaluation = 0.0
        self.eval_text = _format_eval(self.evaluation)
        self.promotion_box: PromotionBox | None = None
        self.end_screen: EndGameScreen | None = None
        self.ended = False
        self.just_moved = False
        self.just_picked = False
        self.dragged: tuple[int, int] | None = None
        self.drag_position: Point | None = None
        self.possible_moves: list[tuple[int, int]] = []
        self.start()

    def start(self) -> None:
        """Start both clocks."""
        self.timer_white.start()
        self.timer_black.start()

    def _pause_clocks(self) -> None:
        self.timer_white.pause()
        self.timer_black.pause()

    def check_end_game(self, turn: Player) -> bool:
        """End the match if ``turn`` is checkmated or stalemated."""
        if self.board.is_checkmate(turn):
            self.end_screen = EndGameScreen("Checkmate", turn)
        elif self.board.is_stalemate(turn):
            self.end_screen = EndGameScreen("Stalemate", turn)
        else:
            return False
        self.ended = True
        return True

    def tick(self) -> None:
        """Advance clocks and pick up new evaluations; detect the end of the match."""
        if self.ended:
            return
        if self.turn is Player.WHITE:
            active, idle = self.timer_white, self.timer_black
        else:
            active, idle = self.timer_black, self.timer_white
        active.start()
        idle.pause()

        score = self.engine.take_update()
        if score is not None:
            self.evaluation = score if self.turn is Player.WHITE else -score
            self.eval_text = _format_eval(self.evaluation / 100)

        self.timer_white.update()
        self.timer_black.update()
        for timer, side in ((self.timer_white, Player.WHITE), (self.timer_black, Player.BLACK)):
            if timer.is_end():
                self._pause_clocks()
                self.ended = True
                self.end_screen = EndGameScreen("Time out!", side)
        if self.ended:
            return

        if self.just_moved:
            if self.check_end_game(self.turn):
                self._pause_clocks()
            self.just_moved = False

    def handle_event(self, event: pygame.event.Event) -> State | None:
        """React to one input event; return the screen to switch to, or None."""
        if self.ended:
            return self.end_screen.handle_event(event) if self.end_screen is not None else None
        if event.type == pygame.KEYDOWN and getattr(event, "key", None) == pygame.K_ESCAPE:
            return State.PAUSE
        button = getattr(event, "button", None)
        if event.type == pygame.MOUSEBUTTONDOWN and button == 1:
            self._press(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and button == 1:
            self._release(event.pos)
        elif event.type == pygame.MOUSEMOTION:
            self._drag(event.pos)
        return None

    def _end_turn(self) -> None:
        self.just_moved = True
        self.board.in_check = False
        self.turn = self.turn.opponent()

    def _press(self, point: Point) -> None:
        if not self.board.promotion_pending:
            square = square_at(*point)
            if square is not None and self.board.color_at(*square) == self.turn:
                self.dragged = square
                self.just_picked = True
        elif self.promotion_box is not None:
            name = self.promotion_box.piece_at(point)
            if name is not None:
                self.engine.run_async(self.board.promote(name, self.turn))
                self.promotion_box = None
                self._end_turn()

    def _release(self, point: Point) -> None:
        if self.dragged is None:
            return
        target = square_at(*point)
        if target is not None:
            try:
                outcome = self.board.try_move(*self.dragged, *target, self.turn)
            except IllegalMoveError:
                pass
            else:
                if outcome.uci is not None:
                    self.engine.run_async(outcome.uci)
                if outcome.promotion:
                    self.promotion_box = PromotionBox(self.width, self.height, self.turn)
                else:
                    self._end_turn()
        self.possible_moves = []
        self.dragged = None
        self.drag_position = None
        self.just_picked = False

    def _drag(self, point: Point) -> None:
        if self.dragged is None:
            return
        self.drag_position = point
        if self.just_picked:
            self.possible_moves = self.board.possible_moves(*self.dragged, self.turn)
            self.just_picked = False

    def _render_board(self, surface: pygame.Surface) -> None:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                color = DARK_SQUARE if (row + col) % 2 == 1 else LIGHT_SQUARE
                rect = pygame.Rect(BOARD_LEFT + SQUARE_SIZE * col, BOARD_TOP + SQUARE_SIZE * row,
                                   SQUARE_SIZE, SQUARE_SIZE)
                pygame.draw.rect(surface, color, rect)
        for box in _GUIDE_BOXES:
            pygame.draw.rect(surface, GUIDE_COLOR, pygame.Rect(*box))
        for index in range(BOARD_SIZE):
            rank = str(BOARD_SIZE - index)
            _draw_centered(surface, rank, (390, 100 + 100 * index), LABEL_COLOR, 24)
            _draw_centered(surface, rank, (1210, 100 + 100 * index), LABEL_COLOR, 24)
            _draw_centered(surface, chr(ord("A") + index), (450 + 100 * index, 860),
                           LABEL_COLOR, 24)

        hint = pygame.Surface((SQUARE_SIZE, SQUARE_SIZE), pygame.SRCALPHA)
        pygame.draw.circle(hint, pygame.Color(HINT_COLOR), (SQUARE_SIZE // 2, SQUARE_SIZE // 2), 15)
        for row, col in self.possible_moves:
            x, y = square_center(row, col)
            surface.blit(hint, (x - SQUARE_SIZE // 2, y - SQUARE_SIZE // 2))

        dragged_piece = None
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self.board.piece_at(row, col)
                if piece is None:
                    continue
                if (row, col) == self.dragged and self.drag_position is not None:
                    dragged_piece = piece
                    continue
                self._render_piece(surface, piece, square_center(row, col))
        if dragged_piece is not None and self.drag_position is not None:
            self._render_piece(surface, dragged_piece, self.drag_position)

    @staticmethod
    def _render_piece(surface: pygame.Surface, piece: Any, center: Point) -> None:
        side = "White" if piece.color is Player.WHITE else "Black"
        image = _image(f"./Textures/{side}-{piece.name}.png")
        x, y = round(center[0]), round(center[1])
        if image is not None:
            surface.blit(image, (x - SQUARE_SIZE // 2, y - SQUARE_SIZE // 2))
            return
        fill = (245, 245, 245) if piece.color is Player.WHITE else (30, 30, 30)
        ink = (30, 30, 30) if piece.color is Player.WHITE else (245, 245, 245)
        pygame.draw.circle(surface, fill, (x, y), 35)
        letter = "N" if piece.name == "Knight" else piece.name[0]
        _draw_centered(surface, letter, (x, y), ink, 42)

    def render(self, surface: pygame.Surface) -> None:
        surface.fill((0, 0, 0))
        background = _image(BACKGROUND_PATH)
        if background is not None:
            surface.blit(background, (0, 0))
        self.timer_white.render(surface)
        self.timer_black.render(surface)
        surface.blit(_font(32).render(self.eval_text, True, pygame.Color(EVAL_COLOR)), (0, 0))
        self._render_board(surface)
        if self.promotion_box is not None:
            self.promotion_box.render(surface)
        if self.end_screen is not None:
            self.end_screen.render(surface)