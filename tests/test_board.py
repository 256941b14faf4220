import pytest

from mirrorchess.board import Board, MoveError, Square
from mirrorchess.geometry import NO_CHECK, NO_POSITION, Player, Position
from mirrorchess.inputs import parse_square
from mirrorchess.pieces import Bishop, King, Pawn, Queen, Rook


def layout(pieces):
    rows = [["*"] * 8 for _ in range(8)]
    for name, letter in pieces.items():
        pos = parse_square(name)
        rows[pos.row][pos.col] = letter
    return "".join("".join(row) + "\n" for row in rows)


def sq(name):
    return parse_square(name)


def test_square_attack_flags():
    square = Square()
    square.set_attacked_by(Player.BLACK)
    assert square.attacked_by(Player.BLACK) is True
    assert square.attacked_by(Player.WHITE) is False
    square.clear_attacked_by()
    assert square.attacked_by(Player.BLACK) is False


def test_start_position_serialization():
    expected = (
        "rnbqkbnr\npppppppp\n" + "********\n" * 4 + "PPPPPPPP\nRNBQKBNR\n"
    )
    assert Board().serialize() == expected


def test_serialize_round_trip():
    board = Board()
    assert Board(board.serialize()).serialize() == board.serialize()


def test_start_pieces_placed():
    board = Board()
    assert isinstance(board.piece_at(sq("d1")), Queen)
    assert isinstance(board.piece_at(sq("e8")), King)
    assert board.piece_at(sq("e8")).color is Player.BLACK
    assert board.piece_at(sq("e8")).pos == sq("e8")


def test_start_position_has_twenty_white_moves():
    board = Board()
    white_moves = sum(
        len(s.piece.valid_moves) for s in board if s.piece and s.piece.color is Player.WHITE
    )
    assert white_moves == 20
    assert board.check_exists == NO_CHECK


def test_piece_at_off_board_is_none():
    assert Board().piece_at(Position(8, 0)) is None
    assert Board().piece_at(Position(-1, 3)) is None


def test_getitem_off_board_raises():
    with pytest.raises(IndexError):
        Board()[Position(-1, 0)]


def test_set_piece_off_board_is_ignored():
    board = Board(layout({}))
    before = board.serialize()
    board.set_piece(Rook(Player.WHITE), Position(9, 9))
    assert board.serialize() == before


def test_add_block_check_position_ignores_off_board():
    board = Board(layout({}))
    board.add_block_check_position(Position(8, 8))
    board.add_block_check_position(sq("a1"))
    assert board.positions_to_block_check == [sq("a1")]


def test_move_from_empty_square():
    with pytest.raises(MoveError, match="No piece at the from position!"):
        Board().move_piece(sq("e4"), sq("e5"), Player.WHITE)


def test_move_wrong_turn():
    with pytest.raises(MoveError, match="It's not your turn!"):
        Board().move_piece(sq("e7"), sq("e5"), Player.WHITE)


def test_move_invalid_spot():
    with pytest.raises(MoveError, match="Invalid move spot!"):
        Board().move_piece(sq("e2"), sq("e5"), Player.WHITE)


def test_double_pawn_move_sets_en_passant():
    board = Board()
    board.move_piece(sq("e2"), sq("e4"), Player.WHITE)
    assert isinstance(board.piece_at(sq("e4")), Pawn)
    assert board.piece_at(sq("e2")) is None
    assert board.en_passant_square == sq("e3")


def test_en_passant_square_clears_after_next_move():
    board = Board()
    board.move_piece(sq("e2"), sq("e4"), Player.WHITE)
    board.calculate_squares()
    board.move_piece(sq("g8"), sq("f6"), Player.BLACK)
    assert board.en_passant_square == NO_POSITION
    assert board.old_en_passant_square == sq("e3")


def test_check_detected_and_king_avoids_attacked_square():
    board = Board(layout({"a1": "k", "a8": "R", "h8": "K"}))
    board.calculate_squares()
    assert board.check_exists == Player.WHITE.value
    king = board.piece_at(sq("a1"))
    assert sq("a2") not in king.valid_moves
    assert sq("b1") in king.valid_moves


def test_only_blocking_moves_allowed_in_check():
    board = Board(layout({"a1": "k", "a8": "R", "b5": "r", "h8": "K"}))
    board.calculate_squares()
    assert board.piece_at(sq("b5")).valid_moves == [sq("a5")]


def test_pinned_piece_cannot_leave_line():
    board = Board(layout({"e1": "k", "e2": "b", "e8": "R", "h8": "K"}))
    board.calculate_squares()
    bishop = board.piece_at(sq("e2"))
    assert isinstance(bishop, Bishop)
    assert bishop.valid_moves == []


def test_short_castling_moves_rook():
    board = Board(layout({"e1": "k", "h1": "r", "e8": "K"}))
    board.calculate_squares()
    board.move_piece(sq("e1"), sq("g1"), Player.WHITE)
    assert isinstance(board.piece_at(sq("g1")), King)
    assert isinstance(board.piece_at(sq("f1")), Rook)
    assert board.piece_at(sq("h1")) is None
    assert board.piece_at(sq("f1")).has_moved is True


def test_en_passant_capture_removes_pawn():
    board = Board(layout({"e1": "k", "e8": "K", "e5": "p", "d7": "P"}))
    board.calculate_squares()
    board.move_piece(sq("d7"), sq("d5"), Player.BLACK)
    board.calculate_squares()
    assert sq("d6") in board.piece_at(sq("e5")).valid_moves
    board.move_piece(sq("e5"), sq("d6"), Player.WHITE)
    assert board.piece_at(sq("d5")) is None
    assert isinstance(board.piece_at(sq("d6")), Pawn)


def test_clear_attacked_squares():
    board = Board()
    assert board[sq("e3")].attacked_by(Player.WHITE) is True
    board.clear_attacked_squares()
    assert not any(s.attacked_by(Player.WHITE) or s.attacked_by(Player.BLACK) for s in board)