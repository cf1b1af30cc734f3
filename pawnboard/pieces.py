"""Chess pieces and their movement rules.

Coordinates are (row, col) with row 0 at Black's back rank and row 7 at
White's. A piece consults the board it belongs to, which must provide
``is_occupied(row, col)``, ``color_at(row, col)``, ``check_rook(row, col)``
and the attributes ``en_passant`` (a column, or -1) and ``in_check``.
"""

from __future__ import annotations

import copy as _copy
from collections.abc import Iterator
from typing import Any

from .general import Player


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _straight_between(sr: int, sc: int, er: int, ec: int) -> Iterator[tuple[int, int]]:
    """Squares strictly between two squares on one row or column."""
    if sr == er:
        for col in range(min(sc, ec) + 1, max(sc, ec)):
            yield sr, col
    if sc == ec:
        for row in range(min(sr, er) + 1, max(sr, er)):
            yield row, sc


def _diagonal_between(sr: int, sc: int, er: int, ec: int) -> Iterator[tuple[int, int]]:
    """Squares strictly between two squares along a diagonal path."""
    dr, dc = _sign(er - sr), _sign(ec - sc)
    if dr == 0 or dc == 0:
        return
    for step in range(1, abs(er - sr)):
        yield sr + step * dr, sc + step * dc


class Piece:
    """A chess piece of one colour, attached to a board."""

    name = "Piece"

    def __init__(self, color: Player, board: Any = None) -> None:
        self.color = color
        self.board = board

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.color.name})"

    def move_validate(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        """Whether the move follows this piece's movement pattern."""
        raise NotImplementedError

    def check_occupy(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        """Whether the move is blocked by pieces on the board."""
        raise NotImplementedError

    def copy(self, board: Any) -> Piece:
        """Return an identical piece attached to ``board``."""
        clone = _copy.copy(self)
        clone.board = board
        return clone

    def _path_blocked(self, squares: Iterator[tuple[int, int]]) -> bool:
        return any(self.board.is_occupied(row, col) for row, col in squares)

    def _own_piece_at(self, row: int, col: int) -> bool:
        return self.board.color_at(row, col) == self.color


class Pawn(Piece):
    name = "Pawn"

    def __init__(self, color: Player, board: Any = None, moved: bool = False) -> None:
        super().__init__(color, board)
        self.moved = moved

    def mark_moved(self) -> None:
        self.moved = True

    def move_validate(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        forward = -1 if self.color is Player.WHITE else 1
        if end_row == start_row + forward and abs(start_col - end_col) <= 1:
            return True
        return not self.moved and end_row == start_row + 2 * forward and start_col == end_col

    def check_occupy(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        board = self.board
        if start_col == end_col:
            if abs(start_row - end_row) > 1:
                behind = end_row + 1 if self.color is Player.WHITE else end_row - 1
                return board.is_occupied(behind, end_col) or board.is_occupied(end_row, end_col)
            return board.is_occupied(end_row, end_col)
        target = board.color_at(end_row, end_col)
        passant_row = 3 if self.color is Player.WHITE else 4
        if target is Player.NONE and start_row == passant_row and board.en_passant == end_col:
            return False
        return target in (self.color, Player.NONE)


class Rook(Piece):
    name = "Rook"

    def __init__(self, color: Player, board: Any = None, moved: bool = False) -> None:
        super().__init__(color, board)
        self.moved = moved

    def mark_moved(self) -> None:
        self.moved = True

    def move_validate(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        return start_row == end_row or start_col == end_col

    def check_occupy(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        if self._path_blocked(_straight_between(start_row, start_col, end_row, end_col)):
            return True
        return self._own_piece_at(end_row, end_col)


class Knight(Piece):
    name = "Knight"

    def move_validate(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        return {abs(start_row - end_row), abs(start_col - end_col)} == {1, 2}

    def check_occupy(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        return self._own_piece_at(end_row, end_col)


class Bishop(Piece):
    name = "Bishop"

    def move_validate(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        return abs(start_row - end_row) == abs(start_col - end_col)

    def check_occupy(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        if self._path_blocked(_diagonal_between(start_row, start_col, end_row, end_col)):
            return True
        return self._own_piece_at(end_row, end_col)


class Queen(Piece):
    name = "Queen"

    def move_validate(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        if start_row == end_row or start_col == end_col:
            return True
        return abs(start_row - end_row) == abs(start_col - end_col)

    def check_occupy(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        if start_row == end_row or start_col == end_col:
            path = _straight_between(start_row, start_col, end_row, end_col)
        else:
            path = _diagonal_between(start_row, start_col, end_row, end_col)
        if self._path_blocked(path):
            return True
        return self._own_piece_at(end_row, end_col)


class King(Piece):
    name = "King"

    def __init__(self, color: Player, board: Any = None, moved: bool = False) -> None:
        super().__init__(color, board)
        self.moved = moved

    def mark_moved(self) -> None:
        self.moved = True

    def move_validate(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        if abs(start_row - end_row) <= 1 and abs(start_col - end_col) <= 1:
            return True
        return not self.moved and end_col in (2, 6) and start_row == end_row

    def check_occupy(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        board = self.board
        if abs(start_col - end_col) <= 1:
            return self._own_piece_at(end_row, end_col)
        if end_col == 2 and board.check_rook(end_row, 0) and not board.in_check:
            return any(
                board.is_occupied(end_row, col) for col in range(start_col - 1, end_col - 2, -1)
            )
        if end_col == 6 and board.check_rook(end_row, 7) and not board.in_check:
            return any(
                board.is_occupied(end_row, col) for col in range(start_col + 1, end_col + 1)
            )
        return True