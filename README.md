# pawnboard

A desktop chess game for two players sharing one screen, built on pygame.

## Features

- Drag-and-drop piece movement. While you drag a piece, dots mark the
  squares it may legally move to.
- Full move checking: no move may leave your own king in check. Castling,
  en passant and pawn promotion are supported; on promotion an overlay asks
  you to pick a queen, knight, rook or bishop.
- Checkmate and stalemate detection, followed by an end-of-game screen with
  a button that leads back to the main menu.
- One countdown clock per side. Choose 1, 3, 10 or 30 minutes before the
  game starts. A player whose clock runs out loses.
- An evaluation readout in the top-left corner. After every move the moves
  played so far are sent, on a background thread, to an external UCI engine
  at `stockfish/stockfish-ubuntu-x86-64-avx2` (relative to the working
  directory), and the score it reports is shown. The commands sent are also
  written to `command.txt` in the working directory. If the engine program
  is missing, the readout stays at its last value.

## Installation

```
pip install .
```

To include the test requirements:

```
pip install ".[test]"
```

## Running

```
pawnboard
```

The game opens at the main menu. Choose **Start**, then pick
**Player VS Player (offline)**. Open **Choose Time** to set the clock, and
press **Ready**. A pop-up reminds you if no game mode or no time has been
chosen. During a game, **Escape** opens the pause menu, from which you can
resume or go back to the main menu.

Fonts and piece images are read from `./Font/roboto/Roboto-Regular.ttf`
and `./Textures/` (for example `./Textures/White-Queen.png`), relative to
the working directory. A background image is read from
`./Textures/backgroundImage.jpg`. When these files are missing, pygame's
default font is used and pieces are drawn as lettered discs.

## Using the rules from code

The board logic in `pawnboard.board` needs no display:

```python
from pawnboard.board import ChessBoard, IllegalMoveError
from pawnboard.general import Player

board = ChessBoard()
outcome = board.try_move(6, 4, 4, 4, Player.WHITE)   # e2-e4
print(outcome.uci)                                   # "e2e4"
print(board.possible_moves(1, 4, Player.BLACK))
print(board.is_checkmate(Player.BLACK))

try:
    board.try_move(7, 0, 3, 0, Player.WHITE)         # rook blocked by its own pawn
except IllegalMoveError as error:
    print(error)
```

Rows count from the top of the board, so row 0 is Black's back rank and
row 7 is White's. Columns count from the a-file. `try_move` returns a
`MoveOutcome` telling whether a piece was captured and whether a promotion
is now pending; finish a promotion with `board.promote("Queen", Player.WHITE)`,
which returns the move in coordinate notation.

Other pieces:

- `pawnboard.engine`: `Engine` and `parse_score` for talking to a UCI engine.
- `pawnboard.clock`: `GameTimer` and `format_remaining` for the chess clocks.
- `pawnboard.pieces`: the piece classes and their movement rules.

## What it does not do

- The **Player VS AI** and **Player VS Player (online)** modes can be
  selected on the settings screen, but pressing **Ready** with either of
  them does not start a game. Only local two-player games are played.
- The engine is used for the evaluation readout only; it never makes moves.
- There are no sounds, no saving or loading of games, and no draw rules
  beyond stalemate (no threefold repetition, fifty-move rule or
  insufficient material).