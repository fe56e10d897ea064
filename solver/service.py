# -*- coding: utf-8 -*-
"""
探索を専用のワーカースレッドで実行するための薄いラッパーです。

探索自体は同期・シングルスレッドの CPU 処理なので、
Web API などからは Future を受け取って待つ形で使います。
ワーカーは 1 本だけで十分です（1 回の探索の中で並列化する利点はありません）。
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from .csp.search import SudokuSolver, create_default_solver
from .csp.target_search import TargetPuzzleSearch
from .grid.board import SudokuBoard
from .logging_utils import get_logger
from .types import SearchResult, SolverOptions, SudokuAnalysis

logger = get_logger("service")


class SolverService:
    """
    SudokuSolver と TargetPuzzleSearch を 1 本のワーカースレッドで動かします。

    with 文で使うと、抜けるときにワーカーを停止します。
    """

    def __init__(
        self,
        solver: Optional[SudokuSolver] = None,
        executor: Optional[ThreadPoolExecutor] = None,
        shutdown_on_close: bool = True,
    ):
        self.solver = solver or create_default_solver()
        self.target_search = TargetPuzzleSearch(self.solver)
        self.executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="sudoku-solver"
        )
        self.shutdown_on_close = shutdown_on_close

    def analyze_async(
        self, board: SudokuBoard, options: Optional[SolverOptions] = None
    ) -> "Future[SudokuAnalysis]":
        if board is None:
            raise ValueError("board must not be None")
        return self.executor.submit(self.solver.analyze, board, options or SolverOptions.default_options())

    def analyze_blocking(
        self, board: SudokuBoard, options: Optional[SolverOptions] = None
    ) -> SudokuAnalysis:
        return self.solver.analyze(board, options or SolverOptions.default_options())

    def find_closest_async(
        self,
        target: int,
        time_limit_ms: int,
        max_solutions: int,
        seed: int,
        cancel_event: Optional[threading.Event] = None,
    ) -> "Future[SearchResult]":
        return self.executor.submit(
            self.target_search.find_closest,
            target,
            time_limit_ms,
            max_solutions,
            seed,
            cancel_event,
        )

    def close(self) -> None:
        if self.shutdown_on_close:
            logger.info("Shutting down solver worker.")
            self.executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "SolverService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
