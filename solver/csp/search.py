# -*- coding: utf-8 -*-
"""
数独の解を数え上げる探索を行うモジュールです。

ざっくり流れ
------------
1. 盤面がルール違反なら、探索せずに INVALID を返す
2. 空の盤面なら、既知の総数をそのまま返す（オプションで無効化可能）
3. すでに埋まっている盤面なら、それ自身が唯一の解
4. それ以外はバックトラック探索
   - naked single を先に確定させる（propagation.py）
   - 候補が最も少ないマスを選んで分岐する（MRV）
   - 数字は最下位ビットから順に試す
5. 解の数・打ち切り理由から結果を分類して返す

打ち切り条件（解の上限・締め切り・キャンセル）は
再帰に入るたびに確認します。
"""

from __future__ import annotations

import abc
import time
from typing import List, Optional

from ..config import TOTAL_COMPLETED_GRIDS
from ..grid.board import SudokuBoard
from ..grid.validator import validate
from ..logging_utils import get_logger
from ..types import SolverOptions, SolverStatus, SudokuAnalysis
from .propagation import Workspace, propagate_singles, undo_forced

logger = get_logger("search")


class SudokuSolver(abc.ABC):
    """
    解析戦略の共通インターフェースです。

    実装クラスは analyze() だけを実装すれば、
    solve() / solve_or_raise() はそのまま使えます。
    """

    @abc.abstractmethod
    def analyze(self, board: SudokuBoard, options: Optional[SolverOptions] = None) -> SudokuAnalysis:
        ...

    def solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        """解を 1 つ返します。解が無ければ None。"""
        return self.analyze(board, SolverOptions.find_first_solution()).exemplar_solution

    def solve_or_raise(self, board: SudokuBoard) -> SudokuBoard:
        solution = self.solve(board)
        if solution is None:
            raise RuntimeError("Board does not have a valid solution")
        return solution


class BacktrackingSudokuSolver(SudokuSolver):
    """ビットマスク + naked single 伝播 + MRV によるバックトラック探索。"""

    def analyze(self, board: SudokuBoard, options: Optional[SolverOptions] = None) -> SudokuAnalysis:
        if board is None:
            raise ValueError("board must not be None")
        if options is None:
            options = SolverOptions.default_options()

        validation = validate(board)
        if not validation.valid:
            return SudokuAnalysis.invalid(board, validation.message)

        if board.is_empty_board() and options.treat_empty_board_as_known:
            return SudokuAnalysis.empty_board(board, TOTAL_COMPLETED_GRIDS)

        if board.is_complete():
            return SudokuAnalysis.already_solved(board)

        state = _SearchState(board, options)
        state.search()

        if state.limit_reached:
            status = SolverStatus.LIMIT_REACHED
        elif state.solution_count == 0:
            status = SolverStatus.NO_SOLUTION
        elif state.solution_count == 1:
            status = SolverStatus.UNIQUE_SOLUTION
        else:
            status = SolverStatus.MULTIPLE_SOLUTIONS

        solution = None
        if state.first_solution is not None:
            solution = SudokuBoard.from_array(state.first_solution)

        logger.debug(
            "analyze: status=%s count=%d nodes=%d (%s)",
            status.value,
            state.solution_count,
            state.visited_nodes,
            state.message,
        )

        return SudokuAnalysis(
            initial_board=board,
            valid=True,
            status=status,
            solution_count=state.solution_count,
            exemplar_solution=solution,
            limit_reached=state.limit_reached,
            explored_nodes=state.visited_nodes,
            message=state.message,
            exact=not state.limit_reached,
        )


class _SearchState:
    """1 回の analyze() 呼び出しの間だけ使う探索状態です。"""

    def __init__(self, board: SudokuBoard, options: SolverOptions):
        self.options = options
        self.limit = options.max_solutions
        self.unlimited = options.is_unlimited
        self.deadline = options.deadline
        self.cancel_event = options.cancel_event

        self.ws = Workspace(board.to_list())
        self.first_solution: Optional[List[int]] = None

        self.solution_count = 0
        self.limit_reached = False
        self.time_limit_reached = False
        self.cancelled = False
        self.visited_nodes = 0
        self.message = "Search completed"

    def search(self) -> None:
        self._backtrack(0)

        if self.cancelled:
            self.message = "Stopped due to cancellation"
        elif self.time_limit_reached:
            self.message = "Stopped after reaching time limit"
        elif self.limit_reached:
            self.message = f"Stopped after reaching maxSolutions={self.limit}"
        elif self.solution_count == 0:
            self.message = "No solutions found"
        else:
            self.message = f"Enumerated {self.solution_count} solution(s)"

    def _should_stop(self) -> bool:
        if self.limit_reached:
            return True
        if self.deadline > 0 and time.monotonic() >= self.deadline:
            self.time_limit_reached = True
            self.limit_reached = True
            return True
        if self.cancel_event is not None and self.cancel_event.is_set():
            self.cancelled = True
            self.limit_reached = True
            return True
        return False

    def _record_solution(self) -> None:
        self.solution_count += 1
        if self.first_solution is None and self.options.capture_first_solution:
            self.first_solution = list(self.ws.cells)
        if not self.unlimited and self.solution_count >= self.limit:
            self.limit_reached = True

    def _backtrack(self, depth: int) -> None:
        if self._should_stop():
            return

        ws = self.ws
        total = ws.empty_count
        if depth == total:
            self._record_solution()
            return

        forced_start = ws.forced_top
        forced_count = propagate_singles(ws, depth)
        if forced_count < 0:
            return
        if self._should_stop():
            undo_forced(ws, depth, forced_start)
            return

        next_depth = depth + forced_count
        if next_depth == total:
            self._record_solution()
            undo_forced(ws, depth, forced_start)
            return

        pivot = self._select_pivot(next_depth)
        ws.swap(next_depth, pivot)
        cell = ws.empties[next_depth]
        candidates = ws.masks.candidates(cell)

        while candidates:
            bit = candidates & -candidates
            candidates &= candidates - 1
            ws.place(cell, bit)
            self.visited_nodes += 1
            self._backtrack(next_depth + 1)
            ws.remove(cell, bit)
            if self._should_stop():
                break

        ws.swap(next_depth, pivot)
        undo_forced(ws, depth, forced_start)

    def _select_pivot(self, depth: int) -> int:
        """
        未確定マスのうち候補数が最小のものの位置を返します。

        候補 0 のマスを見つけた場合は即座にその位置を返します。
        呼び出し側はそのマスを先頭へ入れ替えますが、分岐が 1 つも生まれないので
        入れ替えを戻してそのまま戻ります。
        """
        empties = self.ws.empties
        masks = self.ws.masks
        best_index = depth
        best_count = 10

        for i in range(depth, len(empties)):
            candidates = masks.candidates(empties[i])
            if candidates == 0:
                return i
            count = candidates.bit_count()
            if count < best_count:
                best_count = count
                best_index = i
                if count == 1:
                    break

        return best_index


def create_default_solver() -> SudokuSolver:
    return BacktrackingSudokuSolver()
