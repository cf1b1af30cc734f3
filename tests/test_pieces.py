import pytest

from pawnboard.general import Player
from pawnboard.pieces import Bishop, King, Knight, Pawn, Queen, Rook

W, B = Player.WHITE, Player.BLACK


class GridBoard:
    """Minimal board that records which colour stands on each square."""

    def __init__(self):
        self.cells = {}
        self.unmoved_rooks = set()
        self.en_passant = -1
        self.in_check = False

    def put(self, piece, row, col):
        piece.board = self
        self.cells[(row, col)] = piece
        if isinstance(piece, Rook) and not piece.moved:
            self.unmoved_rooks.add((row, col))
        return piece

    def is_occupied(self, row, col):
        return (row, col) in self.cells

    def color_at(self, row, col):
        piece = self.cells.get((row, col))
        return piece.color if piece else Player.NONE

    def check_rook(self, row, col):
        return (row, col) in self.unmoved_rooks


@pytest.fixture
def board():
    return GridBoard()


# --- Pawn -----------------------------------------------------------------

def test_white_pawn_moves_up(board):
    pawn = board.put(Pawn(W), 6, 4)
    assert pawn.move_validate(6, 4, 5, 4)
    assert pawn.move_validate(6, 4, 4, 4)
    assert not pawn.move_validate(6, 4, 7, 4)


def test_black_pawn_moves_down(board):
    pawn = board.put(Pawn(B), 1, 4)
    assert pawn.move_validate(1, 4, 2, 4)
    assert pawn.move_validate(1, 4, 3, 4)
    assert not pawn.move_validate(1, 4, 0, 4)


def test_moved_pawn_loses_double_step(board):
    pawn = board.put(Pawn(W), 6, 4)
    pawn.mark_moved()
    assert not pawn.move_validate(6, 4, 4, 4)
    assert pawn.move_validate(6, 4, 5, 4)


def test_pawn_blocked_straight(board):
    pawn = board.put(Pawn(W), 6, 4)
    board.put(Knight(B), 5, 4)
    assert pawn.check_occupy(6, 4, 5, 4)
    assert pawn.check_occupy(6, 4, 4, 4)


def test_pawn_free_straight(board):
    pawn = board.put(Pawn(B), 1, 2)
    assert not pawn.check_occupy(1, 2, 3, 2)


def test_pawn_diagonal_needs_enemy(board):
    pawn = board.put(Pawn(W), 6, 4)
    assert pawn.check_occupy(6, 4, 5, 5)
    board.put(Knight(B), 5, 5)
    assert not pawn.check_occupy(6, 4, 5, 5)
    board.put(Knight(W), 5, 3)
    assert pawn.check_occupy(6, 4, 5, 3)


def test_white_en_passant(board):
    pawn = board.put(Pawn(W), 3, 4)
    board.put(Pawn(B), 3, 5)
    board.en_passant = 5
    assert not pawn.check_occupy(3, 4, 2, 5)
    board.en_passant = -1
    assert pawn.check_occupy(3, 4, 2, 5)


def test_black_en_passant_requires_row(board):
    pawn = board.put(Pawn(B), 4, 2)
    board.en_passant = 3
    assert not pawn.check_occupy(4, 2, 5, 3)
    other = board.put(Pawn(B), 3, 6)
    board.en_passant = 7
    assert other.check_occupy(3, 6, 4, 7)


# --- Rook -----------------------------------------------------------------

def test_rook_moves_straight_only(board):
    rook = board.put(Rook(W), 7, 0)
    assert rook.move_validate(7, 0, 2, 0)
    assert rook.move_validate(7, 0, 7, 5)
    assert not rook.move_validate(7, 0, 6, 1)


def test_rook_path_and_destination(board):
    rook = board.put(Rook(W), 4, 4)
    assert not rook.check_occupy(4, 4, 4, 0)
    board.put(Pawn(B), 4, 2)
    assert rook.check_occupy(4, 4, 4, 0)
    assert not rook.check_occupy(4, 4, 4, 2)
    board.put(Pawn(W), 1, 4)
    assert rook.check_occupy(4, 4, 1, 4)
    assert not rook.check_occupy(4, 4, 2, 4)


# --- Knight ---------------------------------------------------------------

def test_knight_jumps(board):
    knight = board.put(Knight(W), 7, 1)
    assert knight.move_validate(7, 1, 5, 2)
    assert knight.move_validate(7, 1, 6, 3)
    assert not knight.move_validate(7, 1, 5, 1)
    board.put(Pawn(W), 6, 1)
    assert not knight.check_occupy(7, 1, 5, 2)
    board.put(Pawn(W), 5, 2)
    assert knight.check_occupy(7, 1, 5, 2)


# --- Bishop ---------------------------------------------------------------

def test_bishop_diagonal(board):
    bishop = board.put(Bishop(B), 0, 2)
    assert bishop.move_validate(0, 2, 3, 5)
    assert not bishop.move_validate(0, 2, 2, 3)
    assert not bishop.check_occupy(0, 2, 3, 5)
    board.put(Pawn(W), 1, 3)
    assert bishop.check_occupy(0, 2, 3, 5)
    assert not bishop.check_occupy(0, 2, 1, 3)


@pytest.mark.parametrize("end", [(2, 2), (2, 6), (6, 2), (6, 6)])
def test_bishop_blocked_every_direction(board, end):
    bishop = board.put(Bishop(W), 4, 4)
    for row, col in [(3, 3), (3, 5), (5, 3), (5, 5)]:
        board.put(Pawn(B), row, col)
    assert bishop.check_occupy(4, 4, *end)


# --- Queen ----------------------------------------------------------------

def test_queen_moves(board):
    queen = board.put(Queen(W), 7, 3)
    assert queen.move_validate(7, 3, 3, 3)
    assert queen.move_validate(7, 3, 4, 6)
    assert not queen.move_validate(7, 3, 5, 4)


def test_queen_blocking(board):
    queen = board.put(Queen(W), 4, 4)
    board.put(Pawn(B), 4, 6)
    board.put(Pawn(W), 2, 2)
    assert queen.check_occupy(4, 4, 4, 7)
    assert not queen.check_occupy(4, 4, 4, 6)
    assert queen.check_occupy(4, 4, 2, 2)
    assert queen.check_occupy(4, 4, 1, 1)
    assert not queen.check_occupy(4, 4, 1, 7)


# --- King -----------------------------------------------------------------

def test_king_single_steps(board):
    king = board.put(King(W), 7, 4)
    assert king.move_validate(7, 4, 6, 5)
    assert not king.move_validate(7, 4, 5, 4)
    board.put(Pawn(W), 6, 4)
    assert king.check_occupy(7, 4, 6, 4)
    assert not king.check_occupy(7, 4, 6, 3)


def test_king_castle_pattern(board):
    king = board.put(King(W), 7, 4)
    assert king.move_validate(7, 4, 7, 6)
    assert king.move_validate(7, 4, 7, 2)
    king.mark_moved()
    assert not king.move_validate(7, 4, 7, 6)


def test_king_castle_kingside(board):
    king = board.put(King(W), 7, 4)
    assert king.check_occupy(7, 4, 7, 6)
    board.put(Rook(W), 7, 7)
    assert not king.check_occupy(7, 4, 7, 6)
    board.in_check = True
    assert king.check_occupy(7, 4, 7, 6)


def test_king_castle_queenside_blocked(board):
    king = board.put(King(B), 0, 4)
    board.put(Rook(B), 0, 0)
    assert not king.check_occupy(0, 4, 0, 2)
    board.put(Knight(B), 0, 1)
    assert king.check_occupy(0, 4, 0, 2)


def test_king_castle_with_moved_rook(board):
    king = board.put(King(W), 7, 4)
    board.put(Rook(W, moved=True), 7, 7)
    assert king.check_occupy(7, 4, 7, 6)


# --- copy -----------------------------------------------------------------

@pytest.mark.parametrize("cls", [Pawn, Rook, King])
def test_copy_keeps_moved_flag(board, cls):
    piece = board.put(cls(B), 0, 0)
    piece.mark_moved()
    other = GridBoard()
    clone = piece.copy(other)
    assert type(clone) is cls
    assert clone.color is B
    assert clone.moved
    assert clone.board is other
    assert piece.board is board


def test_copy_is_independent(board):
    pawn = board.put(Pawn(W), 6, 0)
    clone = pawn.copy(GridBoard())
    clone.mark_moved()
    assert not pawn.moved