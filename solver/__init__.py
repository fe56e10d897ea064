# -*- coding: utf-8 -*-
"""
solver パッケージの入口となるモジュールです。

api_proto/local_api.py などから:

    from solver import analyze, find_closest

と呼び出されることを想定しています。

- analyze()      : 盤面の解の数を数えて分類する（INVALID / NO_SOLUTION / ...）
- solve()        : 解を 1 つ返す
- find_closest() : 解の数が目標に最も近いパズルを探す
"""

from __future__ import annotations

from typing import Optional
import threading

from .config import TOTAL_COMPLETED_GRIDS
from .logging_utils import get_logger
from .types import (
    Candidate,
    SearchResult,
    SolverOptions,
    SolverStatus,
    SudokuAnalysis,
)
from .grid.board import SudokuBoard
from .grid.validator import ValidationResult, validate
from .csp.search import BacktrackingSudokuSolver, SudokuSolver, create_default_solver
from .csp.generator import generate_random_solved, generate_solved_board
from .csp.target_search import TargetPuzzleSearch
from .service import SolverService

logger = get_logger()

__all__ = [
    "TOTAL_COMPLETED_GRIDS",
    "Candidate",
    "SearchResult",
    "SolverOptions",
    "SolverStatus",
    "SudokuAnalysis",
    "SudokuBoard",
    "ValidationResult",
    "validate",
    "BacktrackingSudokuSolver",
    "SudokuSolver",
    "create_default_solver",
    "generate_random_solved",
    "generate_solved_board",
    "TargetPuzzleSearch",
    "SolverService",
    "analyze",
    "solve",
    "find_closest",
    "find_closest_from_solved",
]


def analyze(board: SudokuBoard, options: Optional[SolverOptions] = None) -> SudokuAnalysis:
    """
    盤面を解析するメイン関数。

    呼び出しごとに作業領域を作り直すので、複数スレッドから同時に呼んでも安全です。
    """
    return create_default_solver().analyze(board, options)


def solve(board: SudokuBoard) -> Optional[SudokuBoard]:
    return create_default_solver().solve(board)


def find_closest(
    target: int,
    time_limit_ms: int,
    max_solutions: int,
    seed: int,
    cancel_event: Optional[threading.Event] = None,
) -> SearchResult:
    """解の数が target に最も近いパズルを、seed から作った完成盤面をもとに探します。"""
    return TargetPuzzleSearch().find_closest(target, time_limit_ms, max_solutions, seed, cancel_event)


def find_closest_from_solved(
    solved: SudokuBoard,
    target: int,
    time_limit_ms: int,
    max_solutions: int,
    seed: int,
    cancel_event: Optional[threading.Event] = None,
) -> SearchResult:
    return TargetPuzzleSearch().find_closest_from_solved(
        solved, target, time_limit_ms, max_solutions, seed, cancel_event
    )
