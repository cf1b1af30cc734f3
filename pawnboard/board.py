"""The chess board: piece placement, move legality and game-end detection.

Rows run from 0 (Black's back rank) to 7 (White's back rank); columns run
from 0 (file a) to 7 (file h).
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from .general import Player
from .pieces import Bishop, King, Knight, Pawn, Piece, Queen, Rook

BOARD_SIZE = 8
SQUARE_SIZE = 100
BOARD_LEFT = 400
BOARD_TOP = 50

_BACK_RANK = (Rook, Knight, Bishop, Queen, King, Bishop, Knight, Rook)

_PROMOTIONS: dict[str, tuple[type[Piece], str]] = {
    "Queen": (Queen, "q"),
    "Knight": (Knight, "n"),
    "Rook": (Rook, "r"),
    "Bishop": (Bishop, "b"),
}


class IllegalMoveError(ValueError):
    """Raised when a requested move is not allowed."""


@dataclass(frozen=True)
class MoveOutcome:
    """What happened when a move was made.

    ``uci`` is the move in coordinate notation, or None while a promotion
    piece still has to be chosen.
    """

    uci: str | None
    captured: bool
    promotion: bool


def square_center(row: int, col: int) -> tuple[int, int]:
    """Pixel centre of a board square."""
    half = SQUARE_SIZE // 2
    return BOARD_LEFT + half + SQUARE_SIZE * col, BOARD_TOP + half + SQUARE_SIZE * row


def square_at(x: float, y: float) -> tuple[int, int] | None:
    """Board square under a pixel position, or None when off the board."""
    col = math.floor((x - BOARD_LEFT) / SQUARE_SIZE)
    row = math.floor((y - BOARD_TOP) / SQUARE_SIZE)
    if 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE:
        return row, col
    return None


def _uci(start_row: int, start_col: int, end_row: int, end_col: int) -> str:
    return (
        f"{chr(ord('a') + start_col)}{BOARD_SIZE - start_row}"
        f"{chr(ord('a') + end_col)}{BOARD_SIZE - end_row}"
    )


def _standard_setup() -> dict[tuple[int, int], Piece]:
    pieces: dict[tuple[int, int], Piece] = {}
    for col, kind in enumerate(_BACK_RANK):
        pieces[0, col] = kind(Player.BLACK)
        pieces[7, col] = kind(Player.WHITE)
        pieces[1, col] = Pawn(Player.BLACK)
        pieces[6, col] = Pawn(Player.WHITE)
    return pieces


def _squares() -> Iterator[tuple[int, int]]:
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            yield row, col


def _on_board(*coords: int) -> bool:
    return all(0 <= value < BOARD_SIZE for value in coords)


class ChessBoard:
    """An 8x8 board holding pieces, with the rules that tie them together."""

    def __init__(self, pieces: Mapping[tuple[int, int], Piece] | None = None) -> None:
        self._grid: list[list[Piece | None]] = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self.en_passant = -1
        self.promotion_pending = False
        self.promotion_square: tuple[int, int] | None = None
        self.in_check = False
        for (row, col), piece in (_standard_setup() if pieces is None else pieces).items():
            if not _on_board(row, col):
                raise IndexError(f"square ({row}, {col}) is off the board")
            piece.board = self
            self._grid[row][col] = piece

    def __repr__(self) -> str:
        return f"ChessBoard({dict(self._pieces())!r})"

    def _pieces(self) -> Iterator[tuple[tuple[int, int], Piece]]:
        for row, col in _squares():
            piece = self._grid[row][col]
            if piece is not None:
                yield (row, col), piece

    def piece_at(self, row: int, col: int) -> Piece | None:
        """Piece on a square, or None."""
        if not _on_board(row, col):
            raise IndexError(f"square ({row}, {col}) is off the board")
        return self._grid[row][col]

    def copy(self) -> ChessBoard:
        """Independent copy of the position; the check flag starts cleared."""
        clone = ChessBoard({})
        clone.en_passant = self.en_passant
        clone.promotion_pending = self.promotion_pending
        clone.promotion_square = self.promotion_square
        for (row, col), piece in self._pieces():
            clone._grid[row][col] = piece.copy(clone)
        return clone

    def is_occupied(self, row: int, col: int) -> bool:
        return self.piece_at(row, col) is not None

    def color_at(self, row: int, col: int) -> Player:
        piece = self.piece_at(row, col)
        return Player.NONE if piece is None else piece.color

    def check_rook(self, row: int, col: int) -> bool:
        """Whether an unmoved rook stands on the square."""
        piece = self.piece_at(row, col)
        return isinstance(piece, Rook) and not piece.moved

    def check_king(self, row: int, col: int, turn: Player) -> bool:
        """Whether the king of ``turn`` stands on the square."""
        piece = self.piece_at(row, col)
        return isinstance(piece, King) and piece.color == turn

    def is_check(self, board: ChessBoard, turn: Player) -> bool:
        """Whether the king of ``turn`` is attacked on ``board``.

        A positive answer also raises this board's check flag.
        """
        kings = [square for square, _ in board._pieces() if board.check_king(*square, turn)]
        for (row, col), piece in board._pieces():
            if piece.color == turn:
                continue
            for king_row, king_col in kings:
                if piece.move_validate(row, col, king_row, king_col) and not piece.check_occupy(
                    row, col, king_row, king_col
                ):
                    self.in_check = True
                    return True
        return False

    def check_check_after_move(
        self, start_row: int, start_col: int, end_row: int, end_col: int, turn: Player
    ) -> bool:
        """Whether making the move would leave the king of ``turn`` in check."""
        trial = self.copy()
        trial.force_move(start_row, start_col, end_row, end_col)
        return self.is_check(trial, turn)

    def _is_legal(self, piece: Piece, row: int, col: int, end_row: int, end_col: int,
                  turn: Player) -> bool:
        return (
            piece.move_validate(row, col, end_row, end_col)
            and not piece.check_occupy(row, col, end_row, end_col)
            and not self.check_check_after_move(row, col, end_row, end_col, turn)
        )

    def possible_moves(self, row: int, col: int, turn: Player) -> list[tuple[int, int]]:
        """Destinations the piece on the square may legally move to."""
        piece = self.piece_at(row, col)
        if piece is None:
            return []
        return [
            (end_row, end_col)
            for end_row, end_col in _squares()
            if self._is_legal(piece, row, col, end_row, end_col, turn)
        ]

    def is_possible_move(self, turn: Player) -> bool:
        """Whether ``turn`` has at least one legal move."""
        return any(
            self._is_legal(piece, row, col, end_row, end_col, turn)
            for (row, col), piece in list(self._pieces())
            if piece.color == turn
            for end_row, end_col in _squares()
        )

    def try_move(
        self, start_row: int, start_col: int, end_row: int, end_col: int, turn: Player
    ) -> MoveOutcome:
        """Make a move for ``turn`` if it is legal; raise IllegalMoveError if not."""
        if not _on_board(start_row, start_col, end_row, end_col):
            raise IllegalMoveError("the move is not placed on the board")
        piece = self._grid[start_row][start_col]
        if piece is None or piece.color != turn:
            raise IllegalMoveError("no piece of the side to move on the start square")
        if not piece.move_validate(start_row, start_col, end_row, end_col):
            raise IllegalMoveError("the move breaks the piece's movement rule")
        if piece.check_occupy(start_row, start_col, end_row, end_col):
            raise IllegalMoveError("the destination or the path is occupied")
        if self.check_check_after_move(start_row, start_col, end_row, end_col, turn):
            raise IllegalMoveError("the move leaves the king in check")

        if isinstance(piece, (Pawn, Rook, King)):
            piece.mark_moved()
        captured = self.force_move(start_row, start_col, end_row, end_col)

        is_pawn = isinstance(piece, Pawn)
        self.en_passant = start_col if is_pawn and abs(start_row - end_row) == 2 else -1
        promotion = is_pawn and end_row in (0, BOARD_SIZE - 1)
        if promotion:
            self.promotion_pending = True
            self.promotion_square = (end_row, end_col)
        uci = None if promotion else _uci(start_row, start_col, end_row, end_col)
        return MoveOutcome(uci=uci, captured=captured, promotion=promotion)

    def force_move(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        """Move a piece without any checks; return whether something was captured.

        Handles en passant captures and moves the rook when the king castles.
        """
        piece = self.piece_at(start_row, start_col)
        if piece is None:
            raise IllegalMoveError("no piece on the start square")
        target = self.piece_at(end_row, end_col)
        grid = self._grid

        if target is None and isinstance(piece, Pawn) and start_col != end_col:
            grid[start_row][end_col] = None
            captured = True
        elif isinstance(piece, King) and abs(start_col - end_col) > 1:
            rook_moves = {2: (0, 3), 6: (7, 5)}
            if end_col in rook_moves:
                rook_from, rook_to = rook_moves[end_col]
                grid[end_row][rook_to] = grid[end_row][rook_from]
                grid[end_row][rook_from] = None
            captured = False
        else:
            captured = target is not None

        grid[end_row][end_col] = piece
        grid[start_row][start_col] = None
        return captured

    def is_checkmate(self, turn: Player) -> bool:
        return self.is_check(self, turn) and not self.is_possible_move(turn)

    def is_stalemate(self, turn: Player) -> bool:
        return not self.is_possible_move(turn)

    def promote(self, piece_name: str, color: Player) -> str:
        """Replace the promoting pawn and return the move in coordinate notation."""
        if not self.promotion_pending or self.promotion_square is None:
            raise ValueError("no promotion is pending")
        try:
            kind, letter = _PROMOTIONS[piece_name]
        except KeyError:
            raise ValueError(f"cannot promote to {piece_name!r}") from None
        row, col = self.promotion_square
        new_piece = Rook(color, self, moved=True) if kind is Rook else kind(color, self)
        self._grid[row][col] = new_piece
        self.promotion_pending = False
        self.promotion_square = None
        file = chr(ord("a") + col)
        from_rank = "7" if row == 0 else "2"
        return f"{file}{from_rank}{file}{BOARD_SIZE - row}{letter}"