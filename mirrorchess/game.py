"""The interactive game: drawing the boards, reading commands and judging the end."""

from __future__ import annotations

import sys
from collections import deque
from pathlib import Path
from typing import Sequence, TextIO

from .board import Board, MoveError
from .geometry import BOARD_SIZE, Player, Position
from .inputs import InputError, parse_square, split_tokens, validate_command, invert_move
from .pieces import Bishop, King, Knight, Pawn, Queen, Rook

CLEAR_SCREEN = "\033[2J\033[H"
RESET = "\033[0m"
LIGHT_SQUARE = "\033[107m"
DARK_SQUARE = "\033[101m"
MARK_COLOR = 43
FILES_HEADER = "  a b c d e f g h         h g f e d c b a\n"
HELP_TEXT = (
    "Available commands: <from> <to>(move), mark <pos>, save <filename>, "
    "load <filename>, help, quit"
)
SAVE_SIZE = BOARD_SIZE * 9 + 1

_PROMOTIONS = {"q": Queen, "r": Rook, "b": Bishop, "n": Knight}


class GameState:
    """A game between two players sharing one terminal."""

    def __init__(
        self,
        input_stream: TextIO | None = None,
        output: TextIO | None = None,
        save_dir: str | Path | None = None,
    ) -> None:
        self.input = input_stream if input_stream is not None else sys.stdin
        self.output = output if output is not None else sys.stdout
        self.save_dir = Path(save_dir) if save_dir is not None else Path("savefiles")
        self.board = Board()
        self.player_turn = Player.WHITE
        self.game_over = False
        self.quit = False
        self.error = ""
        self.last_six_moves: deque[str] = deque(maxlen=6)

    def _write(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

    def _read_line(self) -> str:
        line = self.input.readline()
        if not line:
            raise EOFError("input ended")
        return line[:-1] if line.endswith("\n") else line

    def draw_square(self, pos: Position) -> str:
        """Return the coloured text for one square."""
        square = self.board[pos]
        if square.special_color:
            start = f"\033[{square.special_color}m"
        else:
            start = LIGHT_SQUARE if (pos.row + pos.col) % 2 == 0 else DARK_SQUARE
        piece = square.piece
        body = f"{piece.symbol()} " if piece is not None else "  "
        return start + body + RESET

    def render_board(self) -> str:
        """Return the board drawn from both players' sides, next to each other."""
        lines = [FILES_HEADER]
        for i in range(BOARD_SIZE):
            left_row = BOARD_SIZE - 1 - i
            left = "".join(self.draw_square(Position(left_row, j)) for j in range(BOARD_SIZE))
            right = "".join(
                self.draw_square(Position(i, j)) for j in reversed(range(BOARD_SIZE))
            )
            rank_left = BOARD_SIZE - i
            rank_right = i + 1
            lines.append(
                f"{rank_left} {left} {rank_left}    {rank_right} {right} {rank_right}\n"
            )
        lines.append(FILES_HEADER)
        return "".join(lines)

    def print_board(self) -> None:
        """Clear the terminal and draw the board."""
        self._write(CLEAR_SCREEN + self.render_board())

    def check_for_pawn_promotion(self) -> None:
        """Ask for a promotion piece for any pawn of the side that just moved on its last rank."""
        mover = self.player_turn.opponent()
        backrank = 7 if mover is Player.WHITE else 0
        for col in range(BOARD_SIZE):
            pos = Position(backrank, col)
            piece = self.board.piece_at(pos)
            if not isinstance(piece, Pawn) or piece.color != mover:
                continue
            self.print_board()
            while True:
                self._write("Pawn promotion available! Choose a piece (q, r, b, n): ")
                choice = self._read_line()
                piece_type = _PROMOTIONS.get(choice)
                if piece_type is not None:
                    self.board.set_piece(piece_type(mover), pos)
                    break
                self._write("Invalid choice!\n")

    def execute_command(self, input_str: str) -> None:
        """Carry out one already validated command line."""
        tokens = split_tokens(input_str)
        cmd = tokens[0] if tokens else ""
        arg = tokens[1] if len(tokens) > 1 else ""

        for square in self.board:
            square.special_color = 0

        if cmd == "mark":
            self._mark(arg)
        elif cmd == "save":
            self._save(arg)
        elif cmd == "load":
            self._load(arg)
        elif cmd == "quit":
            self.quit = True
        elif cmd == "help":
            self.error = HELP_TEXT
        else:
            self._move(cmd, arg)

    def _mark(self, square_name: str) -> None:
        piece = self.board.piece_at(parse_square(square_name))
        if piece is None:
            self.error = "No piece at the selected position!"
            return
        self.board.calculate_squares()
        for pos in piece.valid_moves:
            self.board[pos].special_color = MARK_COLOR

    def _save_path(self, filename: str) -> Path:
        return self.save_dir / f"{filename}.save"

    def _save(self, filename: str) -> None:
        turn = "w" if self.player_turn is Player.WHITE else "b"
        try:
            with open(self._save_path(filename), "w", encoding="utf-8", newline="") as out:
                out.write(self.board.serialize() + turn)
        except OSError:
            self.error = "Couldn't open file!"

    def _load(self, filename: str) -> None:
        try:
            with open(self._save_path(filename), encoding="utf-8", newline="") as src:
                data = src.read()
        except OSError:
            self.error = "Couldn't open file!"
            return
        except UnicodeDecodeError:
            self.error = "Invalid file format!"
            return

        if len(data) != SAVE_SIZE:
            self.error = "Invalid file format!"
            return

        self.player_turn = Player.WHITE if data[-1] == "w" else Player.BLACK
        self.last_six_moves.clear()
        self.board = Board(data)

    def _move(self, from_str: str, to_str: str) -> None:
        try:
            self.board.move_piece(parse_square(from_str), parse_square(to_str), self.player_turn)
        except MoveError as exc:
            self.error = str(exc)
        else:
            self.player_turn = self.player_turn.opponent()

        self.last_six_moves.append(from_str + to_str)
        self.check_for_pawn_promotion()

    def _repetition(self) -> bool:
        if len(self.last_six_moves) != 6:
            return False
        moves = list(self.last_six_moves)

        def repeats(first: str, second: str, third: str) -> bool:
            return first == third and second == invert_move(first)

        return repeats(*moves[0::2]) and repeats(*moves[1::2])

    def has_game_ended(self) -> bool:
        """Report checkmate, stalemate or repetition; return whether the game is over."""
        pieces = [square.piece for square in self.board if square.piece is not None]
        only_kings = all(isinstance(piece, King) for piece in pieces)
        in_check = self.board.check_exists == self.player_turn.value
        has_legal_moves = any(
            piece.color == self.player_turn and piece.valid_moves for piece in pieces
        )

        if in_check and not has_legal_moves:
            self.print_board()
            self._write(f"Checkmate! {self.player_turn.opponent()} wins!\n")
            return True

        if not has_legal_moves or only_kings:
            self.print_board()
            self._write("Stalemate! The game is a draw!\n")
            return True

        if self._repetition():
            self.print_board()
            self._write("Draw by repetition!\n")
            return True

        return False

    def update(self) -> None:
        """Read commands until a valid one arrives, run it and judge the position."""
        while True:
            self.print_board()
            if self.error:
                self._write(self.error + "\n")
                self.error = ""
            prefix = "[WHITE] " if self.player_turn is Player.WHITE else "[BLACK] "
            self._write(prefix + "Enter command: ")
            input_str = self._read_line()
            try:
                validate_command(input_str)
            except InputError as exc:
                self.error = str(exc)
                continue
            break

        self.execute_command(input_str)
        self.board.calculate_squares()
        self.game_over = self.has_game_ended()

    def start(self) -> None:
        """Play games one after another until a player quits."""
        while not self.quit:
            while not self.game_over and not self.quit:
                self.update()

            if not self.quit:
                self._write("Press Enter for new game...")
                self._read_line()
                self.board = Board()
                self.player_turn = Player.WHITE
                self.game_over = False


def main(argv: Sequence[str] | None = None) -> int:
    """Run an interactive game on the terminal."""
    game = GameState()
    try:
        game.start()
    except (EOFError, KeyboardInterrupt):
        game.output.write("\n")
    return 0