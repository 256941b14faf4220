"""Chess pieces and the rules for how each of them moves."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Iterable

from .geometry import (
    DIAGONAL,
    NO_POSITION,
    ORTHOGONAL,
    Direction,
    Player,
    Position,
)

if TYPE_CHECKING:
    from .board import Board

KING_STEPS = tuple(
    Direction(r, c)
    for r, c in ((0, 1), (0, -1), (1, 0), (-1, 0), (1, 1), (1, -1), (-1, 1), (-1, -1))
)
KNIGHT_STEPS = tuple(
    Direction(r, c)
    for r, c in ((2, 1), (2, -1), (-2, 1), (-2, -1), (1, 2), (1, -2), (-1, 2), (-1, -2))
)


class Piece:
    """A piece of one colour standing on a board square."""

    LETTER: ClassVar[str] = "?"
    SYMBOLS: ClassVar[tuple[str, str]] = ("?", "?")
    DIRECTIONS: ClassVar[tuple[Direction, ...]] = ()

    def __init__(self, color: Player) -> None:
        self.color = color
        self.pos = NO_POSITION
        self.has_moved = False
        self.valid_moves: list[Position] = []
        self.attacking_moves: list[Position] = []
        self.valid_moves_when_pinned: list[Position] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.color.name}, {self.pos})"

    def calculate_moves(self, board: Board) -> None:
        """Recompute the squares this piece may move to and attacks."""
        self.valid_moves = []
        self.attacking_moves = []
        self._add_moves_in_directions(board, self.DIRECTIONS)

    def set_attacked_squares(self, board: Board) -> None:
        """Mark the squares this piece attacks and flag a check on the enemy king."""
        for target in self.attacking_moves:
            if target.is_out_of_bounds():
                continue
            board[target].set_attacked_by(self.color)
            self._flag_check(board, target)

    def _flag_check(self, board: Board, target: Position) -> None:
        victim = board.piece_at(target)
        if isinstance(victim, King) and victim.color != self.color:
            board.check_exists = self.color.opponent().value

    def move(self, to: Position, board: Board) -> None:
        """Move this piece to a new square, leaving its old square empty."""
        origin = self.pos
        self.pos = to
        board[to].piece = self
        board[origin].piece = None
        self.has_moved = True

    def is_valid_move(self, to: Position) -> bool:
        """Tell whether the piece may currently move to the given square."""
        return to in self.valid_moves

    def remove_moves_not_protecting_king(
        self, blocking_positions: Iterable[Position], check_exists: int
    ) -> None:
        """When this side is in check, keep only moves that block or capture the checker."""
        if self.color.value != check_exists:
            return
        allowed = list(blocking_positions)
        self.valid_moves = [move for move in self.valid_moves if move in allowed]

    def remove_moves_if_pinned(self) -> None:
        """Restrict the moves of a pinned piece to the line of the pin."""
        if self.valid_moves_when_pinned:
            self.valid_moves = [
                move for move in self.valid_moves if move in self.valid_moves_when_pinned
            ]

    def clear_pinned_positions(self) -> None:
        """Forget any pin recorded for this piece."""
        self.valid_moves_when_pinned = []

    def serialize(self) -> str:
        """Return the save-file letter: lower case for white, upper case for black."""
        return self.LETTER if self.color is Player.WHITE else self.LETTER.upper()

    def symbol(self) -> str:
        """Return the chess symbol used when drawing the piece."""
        white, black = self.SYMBOLS
        return white if self.color is Player.WHITE else black

    def _add_moves_in_directions(
        self, board: Board, directions: Iterable[Direction]
    ) -> None:
        directions = tuple(directions)
        for direction in directions:
            line = [self.pos]
            saw_enemy_king = False
            step = self.pos
            while True:
                step = step.moved(direction)
                if step.is_out_of_bounds():
                    break
                line.append(step)
                target = board.piece_at(step)
                if target is None:
                    self.valid_moves.append(step)
                    self.attacking_moves.append(step)
                    continue

                if target.color != self.color:
                    self.valid_moves.append(step)
                else:
                    self.attacking_moves.append(step)

                if isinstance(target, King) and target.color != self.color:
                    self.attacking_moves.append(step)
                    saw_enemy_king = True
                    beyond = step.moved(direction)
                    if not beyond.is_out_of_bounds():
                        self.attacking_moves.append(beyond)
                break

            if saw_enemy_king:
                for blocker in line[:-1]:
                    board.add_block_check_position(blocker)

        self._detect_pins(board, directions)

    def _detect_pins(self, board: Board, directions: Iterable[Direction]) -> None:
        for direction in directions:
            line: list[Position] = []
            saw_enemy_king = False
            step = self.pos
            while True:
                step = step.moved(direction)
                if step.is_out_of_bounds():
                    break
                line.append(step)
                target = board.piece_at(step)
                if isinstance(target, King) and target.color != self.color:
                    saw_enemy_king = True
                    break

            if not saw_enemy_king:
                continue

            between = 0
            pinned: Piece | None = None
            pinned_index: int | None = None
            for index, square in enumerate(line):
                occupant = board.piece_at(square)
                if occupant is None:
                    continue
                if isinstance(occupant, King):
                    break
                between += 1
                if between == 1:
                    pinned = occupant
                    pinned_index = index
                else:
                    pinned = None
                    break

            # The pinned piece may neither stay on its own square nor take the king.
            if pinned_index is not None:
                del line[pinned_index]
            if line:
                line.pop()
            line.append(self.pos)

            if between == 1 and pinned is not None:
                pinned.valid_moves_when_pinned = line
            break


class Pawn(Piece):
    """A pawn: moves forward, captures diagonally, may take en passant."""

    LETTER = "p"
    SYMBOLS = ("♙", "♟")

    @property
    def _direction(self) -> int:
        return 1 if self.color is Player.WHITE else -1

    @property
    def _start_row(self) -> int:
        return 1 if self.color is Player.WHITE else 6

    def _capture_squares(self) -> list[Position]:
        ahead = self.pos.row + self._direction
        squares = (Position(ahead, self.pos.col - 1), Position(ahead, self.pos.col + 1))
        return [square for square in squares if not square.is_out_of_bounds()]

    def calculate_moves(self, board: Board) -> None:
        self.valid_moves = []
        self.attacking_moves = []
        forward = Position(self.pos.row + self._direction, self.pos.col)
        if board.piece_at(forward) is None:
            self.valid_moves.append(forward)

        if self.pos.row == self._start_row:
            double = Position(self.pos.row + 2 * self._direction, self.pos.col)
            if board.piece_at(double) is None and board.piece_at(forward) is None:
                self.valid_moves.append(double)

        for capture in self._capture_squares():
            target = board.piece_at(capture)
            if target is not None and target.color != self.color:
                self.valid_moves.append(capture)
            if capture == board.en_passant_square and self.pos.row != self._start_row:
                self.valid_moves.append(capture)

    def set_attacked_squares(self, board: Board) -> None:
        for capture in self._capture_squares():
            board[capture].set_attacked_by(self.color)
            self._flag_check(board, capture)

    def move(self, to: Position, board: Board) -> None:
        direction = self._direction
        if to.row == self.pos.row + 2 * direction:
            board.en_passant_square = Position(self.pos.row + direction, self.pos.col)

        for capture in self._capture_squares():
            if capture == board.old_en_passant_square:
                board[Position(to.row - direction, to.col)].piece = None

        super().move(to, board)


class Rook(Piece):
    """A rook: slides along ranks and files."""

    LETTER = "r"
    SYMBOLS = ("♖", "♜")
    DIRECTIONS = ORTHOGONAL


class Bishop(Piece):
    """A bishop: slides along diagonals."""

    LETTER = "b"
    SYMBOLS = ("♗", "♝")
    DIRECTIONS = DIAGONAL


class Knight(Piece):
    """A knight: jumps in an L shape."""

    LETTER = "n"
    SYMBOLS = ("♘", "♞")

    def calculate_moves(self, board: Board) -> None:
        self.valid_moves = []
        self.attacking_moves = []
        for step in KNIGHT_STEPS:
            target_pos = self.pos.moved(step)
            if target_pos.is_out_of_bounds():
                continue
            target = board.piece_at(target_pos)
            if target is None or target.color != self.color:
                self.valid_moves.append(target_pos)
                self.attacking_moves.append(target_pos)


class Queen(Piece):
    """A queen: slides along ranks, files and diagonals."""

    LETTER = "q"
    SYMBOLS = ("♕", "♛")
    DIRECTIONS = ORTHOGONAL + DIAGONAL


def _path_clear(board: Board, row: int, first_col: int, last_col: int) -> bool:
    return all(
        board.piece_at(Position(row, col)) is None for col in range(first_col, last_col + 1)
    )


class King(Piece):
    """The king: one step in any direction, and may castle."""

    LETTER = "k"
    SYMBOLS = ("♔", "♚")

    def __init__(self, color: Player) -> None:
        super().__init__(color)
        self.can_long_castle = False
        self.can_short_castle = False

    def can_castle_long(self, board: Board, backrank: int) -> bool:
        """Tell whether castling towards the a-file is allowed."""
        rook = board.piece_at(Position(backrank, 0))
        if rook is None or rook.has_moved:
            return False
        if not _path_clear(board, backrank, 1, 3):
            return False
        opponent = self.color.opponent()
        return not (
            board[Position(backrank, 3)].attacked_by(opponent)
            or board[Position(backrank, 2)].attacked_by(opponent)
        )

    def can_castle_short(self, board: Board, backrank: int) -> bool:
        """Tell whether castling towards the h-file is allowed."""
        rook = board.piece_at(Position(backrank, 7))
        if rook is None or rook.has_moved:
            return False
        if not _path_clear(board, backrank, 5, 6):
            return False
        opponent = self.color.opponent()
        return not (
            board[Position(backrank, 5)].attacked_by(opponent)
            or board[Position(backrank, 6)].attacked_by(opponent)
        )

    def calculate_moves(self, board: Board) -> None:
        self.valid_moves = []
        self.attacking_moves = []
        for step in KING_STEPS:
            target_pos = self.pos.moved(step)
            if target_pos.is_out_of_bounds():
                continue
            target = board.piece_at(target_pos)
            if target is None or target.color != self.color:
                self.valid_moves.append(target_pos)
                self.attacking_moves.append(target_pos)

        self.can_short_castle = False
        self.can_long_castle = False
        backrank = 0 if self.color is Player.WHITE else 7
        if (
            self.pos == Position(backrank, 4)
            and not self.has_moved
            and board.check_exists != self.color.value
        ):
            if self.can_castle_long(board, backrank):
                target_pos = Position(backrank, 2)
                self.valid_moves.append(target_pos)
                self.attacking_moves.append(target_pos)
                self.can_long_castle = True
            if self.can_castle_short(board, backrank):
                target_pos = Position(backrank, 6)
                self.valid_moves.append(target_pos)
                self.attacking_moves.append(target_pos)
                self.can_short_castle = True

        opponent = self.color.opponent()
        self.valid_moves = [
            move for move in self.valid_moves if not board[move].attacked_by(opponent)
        ]

    def set_attacked_squares(self, board: Board) -> None:
        for step in KING_STEPS:
            target_pos = self.pos.moved(step)
            if not target_pos.is_out_of_bounds():
                board[target_pos].set_attacked_by(self.color)

    @staticmethod
    def _castle_rook(board: Board, row: int, from_col: int, to_col: int) -> None:
        origin = Position(row, from_col)
        dest = Position(row, to_col)
        rook = board.piece_at(origin)
        if rook is None:
            return
        rook.pos = dest
        board[dest].piece = rook
        board[origin].piece = None
        rook.has_moved = True

    def move(self, to: Position, board: Board) -> None:
        is_short = self.can_short_castle and to == Position(self.pos.row, self.pos.col + 2)
        is_long = self.can_long_castle and to == Position(self.pos.row, self.pos.col - 2)
        if is_short:
            self._castle_rook(board, to.row, self.pos.col + 3, self.pos.col + 1)
        elif is_long:
            self._castle_rook(board, to.row, self.pos.col - 4, self.pos.col - 1)
        super().move(to, board)


_PIECE_TYPES: dict[str, type[Piece]] = {
    cls.LETTER: cls for cls in (Pawn, Rook, Bishop, Knight, Queen, King)
}


def piece_from_char(char: str) -> Piece | None:
    """Build a piece from its save-file letter; None for an empty or unknown square."""
    piece_type = _PIECE_TYPES.get(char.lower())
    if piece_type is None:
        return None
    color = Player.WHITE if "a" <= char <= "z" else Player.BLACK
    return piece_type(color)