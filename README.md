# mirrorchess

A chess game for two players who share one terminal. The board is drawn
twice, side by side. White reads it from the left and Black reads it from the
right, so neither player has to turn the screen around. The board uses
Unicode chess symbols and ANSI colours.

## Installation

```
pip install .
```

## Playing

```
mirrorchess
```

Before each prompt the screen is cleared and both boards are redrawn. The
prompt shows the side to move, `[WHITE]` or `[BLACK]`. Type one of these
commands:

| Command            | Effect                                                        |
|--------------------|---------------------------------------------------------------|
| `e2 e4`            | Move a piece from one square to another                       |
| `mark e2`          | Highlight every legal destination of the piece on that square |
| `save <filename>`  | Save the game to `savefiles/<filename>.save`                  |
| `load <filename>`  | Load a game from `savefiles/<filename>.save`                  |
| `help`             | List the commands                                             |
| `quit`             | Leave the game                                                |

Squares are written as a file letter `a`–`h` followed by a rank digit
`1`–`8`. If a command is unknown, malformed or not allowed, the board is
redrawn with a message such as `Command not found!` or `Invalid move spot!`,
and the same side moves again.

The `savefiles` directory is resolved against the current working directory.
It is not created for you. If it does not exist, `save` reports
`Couldn't open file!`.

The game supports castling, en passant and pawn promotion. When a pawn
reaches the last rank you are asked to pick `q`, `r`, `b` or `n`. The game
ends in any of these cases:

- checkmate (`Checkmate! WHITE wins!` or `Checkmate! BLACK wins!`);
- the side to move has no legal move, or only the two kings are left. Both
  are announced as `Stalemate! The game is a draw!`;
- draw by repetition, when each player's last three entered moves go back and
  forth between the same two squares.

After a game ends, press Enter to start a new one. The program also exits
when its input ends, or on Ctrl-C.

## Save file format

A save file has exactly 73 characters: eight lines of eight characters, each
followed by a newline, and then one final character for the side to move.
That character is `w` for White; any other character gives the move to Black.

- The first line is rank 1 and the first column is file a.
- `*` marks an empty square.
- Lower-case letters are White pieces and upper-case letters are Black
  pieces (`p r n b q k`).

A file of any other length is rejected with `Invalid file format!`.

## Using it from Python

```python
import io
from mirrorchess.game import GameState

game = GameState(io.StringIO("e2 e4\nquit\n"), io.StringIO(), "savefiles")
game.start()
```

`GameState(input_stream, output, save_dir)` reads commands from `input_stream`
and writes the drawn boards to `output`. `save_dir` is the directory used by
`save` and `load`. All three default to standard input, standard output and
`savefiles`. `GameState.render_board()` returns the drawn boards as a string.

Other modules:

- `mirrorchess.board.Board` holds a position. `Board()` sets up the starting
  position and `Board(text)` reads the save-file layout. `serialize()` writes
  that layout back. `calculate_squares()` recomputes every piece's legal moves.
  `move_piece(from_pos, to_pos, player)` raises `MoveError` for a move that is
  not allowed.
- `mirrorchess.pieces` defines `Pawn`, `Rook`, `Bishop`, `Knight`, `Queen` and
  `King`, together with `piece_from_char()`.
- `mirrorchess.inputs` parses and checks typed commands. `validate_command()`
  raises `InputError` with the message shown to the player.
- `mirrorchess.geometry` defines `Position`, `Direction` and `Player`.

## What it does not do

There is no computer opponent, no move list or notation export, and no undo.
Repetition is judged only from the last six moves entered, not from repeated
positions. There are no clocks, and there is no fifty-move rule.