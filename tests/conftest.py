import pytest

from solver import SudokuBoard, create_default_solver

CLASSIC_ROWS = [
    "530070000",
    "600195000",
    "098000060",
    "800060003",
    "400803001",
    "700020006",
    "060000280",
    "000419005",
    "000080079",
]

CLASSIC_SOLUTION_ROWS = [
    "534678912",
    "672195348",
    "198342567",
    "859761423",
    "426853791",
    "713924856",
    "961537284",
    "287419635",
    "345286179",
]

# Clearing these cells from the classic solution leaves a 1/3 rectangle
# (rows 4-5, columns 6 and 9) that can be filled in exactly two ways.
TWO_SOLUTION_HOLES = [(3, 5), (3, 8), (4, 5), (4, 8)]


@pytest.fixture
def solver():
    return create_default_solver()


@pytest.fixture
def classic_puzzle():
    return SudokuBoard.from_rows(CLASSIC_ROWS)


@pytest.fixture
def classic_solution():
    return SudokuBoard.from_rows(CLASSIC_SOLUTION_ROWS)


@pytest.fixture
def two_solution_board(classic_solution):
    board = classic_solution
    for row, col in TWO_SOLUTION_HOLES:
        board = board.clear(row, col)
    return board


@pytest.fixture
def row_conflict_board():
    return SudokuBoard.from_rows(["110000000"] + ["000000000"] * 8)
