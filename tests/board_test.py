import numpy as np
import pandas as pd
import pytest

from solver import SudokuBoard
from solver.grid.parser import board_from_cells, board_to_dataframe, normalize_cell, normalize_grid

from conftest import CLASSIC_ROWS

# ---------- SudokuBoard ----------


def test_empty_board_has_no_clues():
    board = SudokuBoard.empty()

    assert board.is_empty_board()
    assert not board.is_complete()
    assert board.clue_count() == 0


def test_from_rows_reads_values_by_position(classic_puzzle):
    assert classic_puzzle.value_at(0, 0) == 5
    assert classic_puzzle.value_at(0, 2) == 0
    assert classic_puzzle.value_at(8, 8) == 9
    assert classic_puzzle.clue_count() == 30


def test_canonical_string_matches_rows(classic_puzzle):
    assert classic_puzzle.to_canonical_string() == "".join(CLASSIC_ROWS)
    assert SudokuBoard.from_canonical_string("".join(CLASSIC_ROWS)) == classic_puzzle


def test_dots_are_blank_in_canonical_string():
    board = SudokuBoard.from_canonical_string("." * 80 + "7")

    assert board.clue_count() == 1
    assert board.value_at(8, 8) == 7


def test_from_array_accepts_nine_by_nine(classic_puzzle):
    grid = classic_puzzle.to_array()

    assert grid.shape == (9, 9)
    assert SudokuBoard.from_array(grid) == classic_puzzle


def test_from_bytes_matches_to_bytes(classic_puzzle):
    assert SudokuBoard.from_bytes(classic_puzzle.to_bytes()) == classic_puzzle


def test_to_array_returns_independent_copy(classic_puzzle):
    grid = classic_puzzle.to_array()
    grid[0, 0] = 9

    assert classic_puzzle.value_at(0, 0) == 5


def test_with_value_returns_new_board(classic_puzzle):
    updated = classic_puzzle.with_value(0, 2, 4)

    assert updated.value_at(0, 2) == 4
    assert classic_puzzle.value_at(0, 2) == 0
    assert classic_puzzle.with_value(0, 0, 5) is classic_puzzle
    assert updated.clear(0, 2) == classic_puzzle


def test_equal_boards_hash_equal(classic_puzzle):
    other = SudokuBoard.from_rows(CLASSIC_ROWS)

    assert other == classic_puzzle
    assert hash(other) == hash(classic_puzzle)
    assert len({other, classic_puzzle}) == 1


def test_str_uses_dots_for_blanks(classic_puzzle):
    lines = str(classic_puzzle).splitlines()

    assert len(lines) == 9
    assert lines[0] == "5 3 . . 7 . . . ."


@pytest.mark.parametrize("values", [[0] * 80, [0] * 82, []])
def test_wrong_cell_count_is_rejected(values):
    with pytest.raises(ValueError, match="81"):
        SudokuBoard.from_array(values)


@pytest.mark.parametrize("bad", [-1, 10])
def test_out_of_range_digit_is_rejected(bad):
    values = [0] * 81
    values[40] = bad

    with pytest.raises(ValueError, match="between 0 and 9"):
        SudokuBoard.from_array(values)


def test_bad_character_in_rows_is_rejected():
    with pytest.raises(ValueError):
        SudokuBoard.from_rows(["53007000x"] + ["000000000"] * 8)


def test_position_out_of_range_is_rejected(classic_puzzle):
    with pytest.raises(ValueError, match="Row"):
        classic_puzzle.value_at(9, 0)
    with pytest.raises(ValueError, match="Column"):
        classic_puzzle.with_value(0, -1, 1)


# ---------- parser ----------


def test_normalize_cell_blank_tokens():
    assert normalize_cell(None) == 0
    assert normalize_cell("") == 0
    assert normalize_cell(" . ") == 0
    assert normalize_cell(float("nan")) == 0
    assert normalize_cell("7") == 7
    assert normalize_cell(7.0) == 7
    assert normalize_cell(np.int64(3)) == 3


@pytest.mark.parametrize("bad", ["x", "12", 2.5, True])
def test_normalize_cell_rejects_garbage(bad):
    with pytest.raises(ValueError):
        normalize_cell(bad)


def test_normalize_grid_from_dataframe(classic_puzzle):
    rows = [[ch if ch != "0" else "" for ch in row] for row in CLASSIC_ROWS]
    df = pd.DataFrame(rows)

    assert normalize_grid(df) == classic_puzzle


def test_normalize_grid_rejects_wrong_shape():
    with pytest.raises(ValueError, match="9x9"):
        normalize_grid(pd.DataFrame([[0] * 9] * 8))


def test_dataframe_round_trip(classic_puzzle):
    df = board_to_dataframe(classic_puzzle)

    assert df.shape == (9, 9)
    assert normalize_grid(df) == classic_puzzle


def test_board_from_cells_treats_null_as_blank(classic_puzzle):
    cells = [None if v == 0 else v for v in classic_puzzle.to_list()]

    assert board_from_cells(cells) == classic_puzzle


def test_board_from_cells_requires_81_cells():
    with pytest.raises(ValueError, match="exactly 81 cells"):
        board_from_cells([1, 2, 3])
