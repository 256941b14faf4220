import pytest

from mirrorchess.geometry import Position
from mirrorchess.inputs import (
    InputError,
    char_int_to_board_index,
    char_to_board_index,
    check_existing_command,
    check_params,
    invert_move,
    is_valid_coordinate,
    parse_square,
    split_tokens,
    validate_command,
)

FILES = "abcdefgh"
RANKS = "12345678"


def test_file_letters_map_in_order():
    for index, letter in enumerate(FILES):
        assert char_to_board_index(letter) == index
        assert char_to_board_index(letter.upper()) == index


@pytest.mark.parametrize("c", ["z", "i", "1", " ", ""])
def test_bad_file_letter_gives_zero(c):
    assert char_to_board_index(c) == 0


def test_rank_digits_map_in_order():
    for index, digit in enumerate(RANKS):
        assert char_int_to_board_index(digit) == index


@pytest.mark.parametrize("c", ["0", "9", "a", ""])
def test_bad_rank_digit_gives_zero(c):
    assert char_int_to_board_index(c) == 0


@pytest.mark.parametrize("coord", ["a1", "h8", "e4"])
def test_valid_coordinates(coord):
    assert is_valid_coordinate(coord) is True


@pytest.mark.parametrize("coord", ["", "a", "a9", "i1", "A1", "e44", "a0"])
def test_invalid_coordinates(coord):
    assert is_valid_coordinate(coord) is False


def test_split_tokens_ignores_repeated_spaces():
    assert split_tokens("  e2   e4 ") == ["e2", "e4"]
    assert split_tokens("") == []


def test_parse_square_matches_indices():
    for col, letter in enumerate(FILES):
        for row, digit in enumerate(RANKS):
            assert parse_square(letter + digit) == Position(row, col)


@pytest.mark.parametrize("cmd", ["mark a1", "save x", "load x", "help", "quit", "e2 e4", "zz"])
def test_existing_commands_pass(cmd):
    check_existing_command(cmd)
    assert split_tokens(cmd)[0] in ("mark", "save", "load", "help", "quit") or len(split_tokens(cmd)[0]) == 2


@pytest.mark.parametrize("cmd", ["", "dance", "e", "move e2 e4"])
def test_unknown_command(cmd):
    with pytest.raises(InputError, match="Command not found!"):
        check_existing_command(cmd)


@pytest.mark.parametrize(
    "cmd, message",
    [
        ("mark", "Position cannot be empty!"),
        ("mark z9", "Invalid position coordinates!"),
        ("save", "Filename cannot be empty!"),
        ("load", "Filename cannot be empty!"),
        ("e2", "Missing parameters for move command!"),
        ("e2 z9", "Invalid move coordinates!"),
        ("zz e4", "Invalid move coordinates!"),
        ("e2 e2", "Move cannot be the same square!"),
    ],
)
def test_bad_params(cmd, message):
    with pytest.raises(InputError) as info:
        check_params(cmd)
    assert str(info.value) == message


def test_validate_command_returns_tokens():
    assert validate_command("e2 e4") == ["e2", "e4"]
    assert validate_command("save game") == ["save", "game"]
    assert validate_command("quit") == ["quit"]


def test_validate_command_rejects_unknown_before_params():
    with pytest.raises(InputError, match="Command not found!"):
        validate_command("castle")


def test_input_error_is_value_error():
    with pytest.raises(ValueError):
        validate_command("mark")


@pytest.mark.parametrize("move", ["e2e4", "g1f3", "a7a8"])
def test_invert_move_round_trip(move):
    inverted = invert_move(move)
    assert inverted[:2] == move[2:]
    assert inverted[2:] == move[:2]
    assert invert_move(inverted) == move