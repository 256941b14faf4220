"""The chess board: squares, piece placement, move generation and moving."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import product
from typing import Iterator

from .geometry import BOARD_SIZE, NO_CHECK, NO_POSITION, Player, Position
from .pieces import Bishop, King, Knight, Pawn, Piece, Queen, Rook, piece_from_char

_BACK_RANK = (Rook, Knight, Bishop, Queen, King, Bishop, Knight, Rook)
_ROW_WIDTH = BOARD_SIZE + 1


class MoveError(ValueError):
    """Raised when a requested move is not allowed."""


@dataclass
class Square:
    """One square of the board: its piece, highlight colour and attack flags."""

    piece: Piece | None = None
    special_color: int = 0
    _attacked: list[bool] = field(
        default_factory=lambda: [False, False], init=False, repr=False
    )

    def attacked_by(self, player: Player) -> bool:
        """Tell whether the given side attacks this square."""
        return self._attacked[player.value]

    def set_attacked_by(self, player: Player) -> None:
        """Record that the given side attacks this square."""
        self._attacked[player.value] = True

    def clear_attacked_by(self) -> None:
        """Forget which sides attack this square."""
        self._attacked = [False, False]


class Board:
    """An 8x8 board holding pieces, with the state needed to generate moves."""

    def __init__(self, serialized: str | None = None) -> None:
        self._grid = [[Square() for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
        # NO_CHECK, or the value of the player whose king is in check.
        self.check_exists = NO_CHECK
        self.positions_to_block_check: list[Position] = []
        self.en_passant_square = NO_POSITION
        # The en passant square as it was before the latest move.
        self.old_en_passant_square = NO_POSITION

        if serialized is None:
            self._set_up_start()
            self.calculate_squares()
        else:
            self._load(serialized)

    def _set_up_start(self) -> None:
        for col in range(BOARD_SIZE):
            self.set_piece(Pawn(Player.WHITE), Position(1, col))
            self.set_piece(Pawn(Player.BLACK), Position(6, col))
        for color, row in ((Player.WHITE, 0), (Player.BLACK, 7)):
            for col, piece_type in enumerate(_BACK_RANK):
                self.set_piece(piece_type(color), Position(row, col))

    def _load(self, data: str) -> None:
        for row, col in product(range(BOARD_SIZE), repeat=2):
            offset = row * _ROW_WIDTH + col
            char = data[offset] if offset < len(data) else "\0"
            if char in ("\0", "\n", "*"):
                continue
            piece = piece_from_char(char)
            if piece is not None:
                self.set_piece(piece, Position(row, col))

    def __getitem__(self, pos: Position) -> Square:
        if pos.is_out_of_bounds():
            raise IndexError(f"position {pos} is off the board")
        return self._grid[pos.row][pos.col]

    def __iter__(self) -> Iterator[Square]:
        for row in self._grid:
            yield from row

    def serialize(self) -> str:
        """Return the board as eight lines of piece letters, '*' for empty squares."""
        return "".join(
            "".join(square.piece.serialize() if square.piece else "*" for square in row)
            + "\n"
            for row in self._grid
        )

    def piece_at(self, pos: Position) -> Piece | None:
        """Return the piece on a square, or None if it is empty or off the board."""
        if pos.is_out_of_bounds():
            return None
        return self._grid[pos.row][pos.col].piece

    def set_piece(self, piece: Piece | None, pos: Position) -> None:
        """Put a piece (or nothing) on a square; off-board positions are ignored."""
        if pos.is_out_of_bounds():
            return
        self._grid[pos.row][pos.col].piece = piece
        if piece is not None:
            piece.pos = pos

    def add_block_check_position(self, pos: Position) -> None:
        """Record a square on which the current check may be blocked or captured."""
        if pos.is_out_of_bounds():
            return
        self.positions_to_block_check.append(pos)

    def _pieces(self) -> list[Piece]:
        return [square.piece for square in self if square.piece is not None]

    def calculate_squares(self) -> None:
        """Recompute attacked squares, check state and every piece's legal moves."""
        self.clear_attacked_squares()
        self.positions_to_block_check = []
        self.check_exists = NO_CHECK

        for piece in self._pieces():
            piece.calculate_moves(self)
            piece.set_attacked_squares(self)

        if self.check_exists != NO_CHECK:
            for piece in self._pieces():
                piece.remove_moves_not_protecting_king(
                    self.positions_to_block_check, self.check_exists
                )

        # Apply pins, then recompute the kings now that all attacks are known.
        for piece in self._pieces():
            piece.remove_moves_if_pinned()
            piece.clear_pinned_positions()
            if isinstance(piece, King):
                piece.calculate_moves(self)

    def clear_attacked_squares(self) -> None:
        """Forget the attack flags of every square."""
        for square in self:
            square.clear_attacked_by()

    def move_piece(self, from_pos: Position, to_pos: Position, player: Player) -> None:
        """Move a piece of the given side, raising MoveError if the move is not allowed."""
        piece = self.piece_at(from_pos)
        if piece is None:
            raise MoveError("No piece at the from position!")
        if piece.color != player:
            raise MoveError("It's not your turn!")
        if not piece.is_valid_move(to_pos):
            raise MoveError("Invalid move spot!")
        target = self.piece_at(to_pos)
        if target is not None and target.color == player:
            raise MoveError("You cannot capture your own piece!")

        self.old_en_passant_square = self.en_passant_square
        if self.en_passant_square.row != -1:
            self.en_passant_square = NO_POSITION

        piece.move(to_pos, self)