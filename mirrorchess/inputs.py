"""Parsing and validation of the commands typed by the players."""

from __future__ import annotations

from .geometry import BOARD_SIZE_CHAR, Position

COMMANDS = ("mark", "save", "load", "help", "quit")


class InputError(ValueError):
    """Raised when a typed command is unknown or malformed."""


def char_to_board_index(c: str) -> int:
    """Map a file letter (a-h, case-insensitive) to a column index; 0 otherwise."""
    if "a" <= c <= "h" and len(c) == 1:
        return ord(c) - ord("a")
    if "A" <= c <= "H" and len(c) == 1:
        return ord(c) - ord("A")
    return 0


def char_int_to_board_index(c: str) -> int:
    """Map a rank digit (1-8) to a row index; 0 otherwise."""
    if len(c) == 1 and "1" <= c <= BOARD_SIZE_CHAR:
        return ord(c) - ord("1")
    return 0


def is_valid_coordinate(coord: str) -> bool:
    """Tell whether the text names a square such as 'e4'."""
    if len(coord) != 2:
        return False
    col, row = coord
    return "a" <= col <= "h" and "1" <= row <= BOARD_SIZE_CHAR


def split_tokens(text: str) -> list[str]:
    """Split a command line into words separated by spaces."""
    return [word for word in text.split(" ") if word]


def parse_square(text: str) -> Position:
    """Turn a coordinate such as 'e4' into a board position."""
    col_char = text[0] if len(text) > 0 else ""
    row_char = text[1] if len(text) > 1 else ""
    return Position(char_int_to_board_index(row_char), char_to_board_index(col_char))


def _token(tokens: list[str], index: int) -> str:
    return tokens[index] if index < len(tokens) else ""


def check_existing_command(input_str: str) -> None:
    """Raise InputError unless the first word is a move square or a known command."""
    cmd = _token(split_tokens(input_str), 0)
    if len(cmd) == 2 or cmd in COMMANDS:
        return
    raise InputError("Command not found!")


def check_params(input_str: str) -> None:
    """Raise InputError if the command's parameters are missing or malformed."""
    tokens = split_tokens(input_str)
    cmd = _token(tokens, 0)
    arg = _token(tokens, 1)

    if cmd == "mark":
        if not arg:
            raise InputError("Position cannot be empty!")
        if not is_valid_coordinate(arg):
            raise InputError("Invalid position coordinates!")
    elif cmd in ("save", "load"):
        if not arg:
            raise InputError("Filename cannot be empty!")
    elif len(cmd) == 2:
        if not arg:
            raise InputError("Missing parameters for move command!")
        if not is_valid_coordinate(cmd) or not is_valid_coordinate(arg):
            raise InputError("Invalid move coordinates!")
        if cmd == arg:
            raise InputError("Move cannot be the same square!")


def validate_command(input_str: str) -> list[str]:
    """Check a command line fully and return its words."""
    check_existing_command(input_str)
    check_params(input_str)
    return split_tokens(input_str)


def invert_move(move: str) -> str:
    """Swap the source and destination squares of a four-character move."""
    return move[2:4] + move[0:2]