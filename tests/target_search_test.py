import threading

import pytest

from solver import (
    SolverOptions,
    SudokuBoard,
    TargetPuzzleSearch,
    analyze,
    find_closest,
    find_closest_from_solved,
    generate_random_solved,
)
from solver.csp.generator import _BASE, pattern
from solver.csp.scoring import estimate_solutions, is_better, resolve_max_solutions
from solver.grid.validator import is_valid
from solver.types import Candidate
from solver.config import MIN_CLUES, TOTAL_COMPLETED_GRIDS

# ---------- generator ----------


def test_base_pattern_is_a_solved_grid():
    board = SudokuBoard.from_array(_BASE + 1)

    assert board.is_complete()
    assert is_valid(board)
    assert pattern(0, 0) == 0
    assert pattern(1, 0) == 3


def test_generated_boards_are_complete_and_valid():
    for seed in range(20):
        board = generate_random_solved(seed)

        assert board.is_complete()
        assert is_valid(board)


def test_same_seed_gives_same_board():
    assert generate_random_solved(42) == generate_random_solved(42)
    assert TargetPuzzleSearch().generate_random_solved(7) == generate_random_solved(7)


# ---------- scoring ----------


def test_estimate_of_empty_grid_is_total():
    assert estimate_solutions([0] * 81) == TOTAL_COMPLETED_GRIDS


def test_estimate_divides_by_candidate_count():
    cells = [0] * 81
    cells[0] = 1

    assert estimate_solutions(cells) == 741211528002341437440


def test_estimate_is_zero_when_a_clue_has_no_candidates():
    cells = [0] * 81
    cells[8] = 9
    cells[72:80] = range(1, 9)
    # the last cell sees 1-8 in its row and 9 in its column
    cells[80] = 9

    assert estimate_solutions(cells) == 0


def _candidate(count, approximate=False, target=10, clues=30):
    return Candidate(
        puzzle=[0] * 81,
        solution_count=count,
        approximate=approximate,
        delta=abs(count - target),
        clue_count=clues,
    )


def test_exact_candidate_beats_approximate():
    assert is_better(_candidate(5), _candidate(10, approximate=True))
    assert not is_better(_candidate(10, approximate=True), _candidate(5))


def test_smaller_delta_wins_then_more_clues():
    assert is_better(_candidate(9), _candidate(5))
    assert is_better(_candidate(5, clues=31), _candidate(5, clues=30))
    assert not is_better(_candidate(5, clues=30), _candidate(5, clues=30))
    assert is_better(_candidate(5), None)


@pytest.mark.parametrize(
    "target, cap, expected",
    [(1, 200000, 2), (10, 200000, 11), (500000, 200000, 200000), (5, -1, -1)],
)
def test_resolve_max_solutions(target, cap, expected):
    assert resolve_max_solutions(target, cap) == expected


# ---------- target search ----------


def test_target_one_returns_solved_grid():
    result = find_closest(1, 500, 200000, seed=3)

    assert result.delta == 0
    assert not result.approximate
    assert result.solution_count == 1
    assert result.iterations == 1
    assert result.board == generate_random_solved(3)


def test_target_two_stays_exact_and_under_target():
    seed = 11
    solved = generate_random_solved(seed)

    result = find_closest(2, 600, 200000, seed=seed)

    assert not result.approximate
    assert result.solution_count <= 2
    assert result.delta == 2 - result.solution_count
    assert result.board.clue_count() >= MIN_CLUES

    recount = analyze(result.board, SolverOptions(max_solutions=-1))
    assert recount.solution_count == result.solution_count

    for row in range(9):
        for col in range(9):
            value = result.board.value_at(row, col)
            assert value == 0 or value == solved.value_at(row, col)


def test_from_solved_uses_given_grid(classic_solution):
    result = find_closest_from_solved(classic_solution, 1, 500, 200000, seed=0)

    assert result.board == classic_solution
    assert result.delta == 0


def test_cancelled_search_returns_solved_grid():
    event = threading.Event()
    event.set()

    result = TargetPuzzleSearch().find_closest(50, 5000, 200000, seed=1, cancel_event=event)

    assert result.board == generate_random_solved(1)
    assert result.solution_count == 1
    assert result.delta == 49
    assert result.iterations == 1


@pytest.mark.parametrize("target, cap", [(0, 200000), (-3, 200000), (5, 0)])
def test_bad_arguments_are_rejected(target, cap):
    with pytest.raises(ValueError):
        find_closest(target, 500, cap, seed=0)


def test_incomplete_board_is_rejected(classic_puzzle):
    with pytest.raises(ValueError, match="completely filled"):
        find_closest_from_solved(classic_puzzle, 2, 500, 200000, seed=0)


def test_invalid_solved_board_is_rejected():
    with pytest.raises(ValueError, match="Duplicate"):
        find_closest_from_solved(SudokuBoard.from_array([1] * 81), 2, 500, 200000, seed=0)
