# -*- coding: utf-8 -*-
"""
解の数が目標値にできるだけ近いパズルを探すモジュールです。

方針（ランダム再スタート付きの山登り）
--------------------------------------
1. 完成盤面そのもの（解は 1 個）を最初の候補にする
2. 目標が 1 ならそれで完了
3. 締め切りまで次を繰り返す
   - 81 マスをランダムな順に並べ、完成盤面から 1 マスずつヒントを消す
   - 消すたびに探索エンジンで解の数を数える（上限は「目標 + 1」程度）
   - 数え上げが打ち切られた、または目標を超えた場合は消したヒントを戻して次のマスへ
   - そうでなければ削除を採用し、最良候補より良ければ記録する
4. 目標ちょうどの候補が見つかった時点で終了

乱数はすべて呼び出し側が渡す seed から作るので、
（時間切れのタイミングを除いて）結果は再現可能です。
"""

from __future__ import annotations

import random
import threading
import time
from typing import Optional

from ..config import MIN_CLUES, MIN_TIME_LIMIT_MS, PROGRESS_LOG_INTERVAL
from ..grid.board import SudokuBoard
from ..grid.validator import validate
from ..logging_utils import get_logger
from ..types import Candidate, SearchResult, SolverOptions
from .generator import generate_random_solved, generate_solved_board
from .scoring import evaluate_candidate, is_better, resolve_max_solutions
from .search import SudokuSolver, create_default_solver

logger = get_logger("target")


def _require_arguments(target: int, max_solutions: int) -> None:
    if isinstance(target, bool) or not isinstance(target, int):
        raise ValueError("target must be an integer")
    if target <= 0:
        raise ValueError("target must be positive")
    if max_solutions == 0:
        raise ValueError("max_solutions must be non-zero")


def _should_stop(deadline: float, cancel_event: Optional[threading.Event]) -> bool:
    if time.monotonic() >= deadline:
        return True
    return cancel_event is not None and cancel_event.is_set()


class TargetPuzzleSearch:
    """解の数が目標に最も近いパズルを探すクラスです。"""

    def __init__(self, solver: Optional[SudokuSolver] = None):
        self.solver = solver or create_default_solver()

    def generate_random_solved(self, seed: int) -> SudokuBoard:
        return generate_random_solved(seed)

    def find_closest(
        self,
        target: int,
        time_limit_ms: int,
        max_solutions: int,
        seed: int,
        cancel_event: Optional[threading.Event] = None,
    ) -> SearchResult:
        """
        seed から完成盤面を作り、そこから目標解数に近いパズルを探します。
        """
        _require_arguments(target, max_solutions)
        rng = random.Random(seed)
        solved = generate_solved_board(rng)
        return self._search(solved, target, time_limit_ms, max_solutions, rng, cancel_event)

    def find_closest_from_solved(
        self,
        solved: SudokuBoard,
        target: int,
        time_limit_ms: int,
        max_solutions: int,
        seed: int,
        cancel_event: Optional[threading.Event] = None,
    ) -> SearchResult:
        """
        与えられた完成盤面からヒントを消していき、目標解数に近いパズルを探します。

        Parameters
        ----------
        solved : SudokuBoard
            完成していて、ルール違反のない盤面。
        target : int
            目標とする解の数（正の整数）。
        time_limit_ms : int
            時間制限（ミリ秒）。MIN_TIME_LIMIT_MS より短い値は切り上げます。
        max_solutions : int
            探索エンジンに渡す解数の上限。負なら無制限。0 は不可。
        seed : int
            削除順を決める乱数の seed。
        cancel_event : threading.Event, optional
            セットされると探索を打ち切り、その時点の最良候補を返します。
        """
        _require_arguments(target, max_solutions)
        if solved is None or not solved.is_complete():
            raise ValueError("solved board must be completely filled")
        validation = validate(solved)
        if not validation.valid:
            raise ValueError(validation.message)

        return self._search(
            solved, target, time_limit_ms, max_solutions, random.Random(seed), cancel_event
        )

    def _search(
        self,
        solved: SudokuBoard,
        target: int,
        time_limit_ms: int,
        max_solutions: int,
        rng: random.Random,
        cancel_event: Optional[threading.Event],
    ) -> SearchResult:
        bounded_ms = max(MIN_TIME_LIMIT_MS, time_limit_ms)
        start = time.monotonic()
        deadline = start + bounded_ms / 1000.0

        solver_limit = resolve_max_solutions(target, max_solutions)
        options = SolverOptions(
            max_solutions=solver_limit,
            capture_first_solution=False,
            treat_empty_board_as_known=True,
            deadline=deadline,
            cancel_event=cancel_event,
        )

        logger.info(
            "Target search START: target=%d, time_limit=%dms, solver_limit=%d",
            target,
            bounded_ms,
            solver_limit,
        )

        base = solved.to_list()
        best = evaluate_candidate(self.solver, base, target, options)
        iterations = 1
        restarts = 0

        while best.delta != 0 and not _should_stop(deadline, cancel_event):
            restarts += 1
            puzzle = list(base)
            clues = len(puzzle)
            order = list(range(len(puzzle)))
            rng.shuffle(order)

            for cell in order:
                if _should_stop(deadline, cancel_event) or clues <= MIN_CLUES:
                    break
                previous = puzzle[cell]
                if previous == 0:
                    continue

                puzzle[cell] = 0
                candidate = evaluate_candidate(self.solver, puzzle, target, options)
                iterations += 1

                if iterations % PROGRESS_LOG_INTERVAL == 0:
                    logger.info(
                        "[target] iterations=%d, restarts=%d, best_count=%d, best_delta=%d",
                        iterations,
                        restarts,
                        best.solution_count,
                        best.delta,
                    )

                if _rejects(candidate, target):
                    puzzle[cell] = previous
                    continue

                clues -= 1
                if is_better(candidate, best):
                    best = candidate
                if best.delta == 0:
                    break

        elapsed_millis = int((time.monotonic() - start) * 1000)
        logger.info(
            "Target search END: count=%d, delta=%d, approximate=%s, iterations=%d, elapsed=%dms",
            best.solution_count,
            best.delta,
            best.approximate,
            iterations,
            elapsed_millis,
        )

        return SearchResult(
            board=SudokuBoard.from_array(best.puzzle),
            solution_count=best.solution_count,
            approximate=best.approximate,
            iterations=iterations,
            elapsed_millis=elapsed_millis,
            delta=best.delta,
        )


def _rejects(candidate: Candidate, target: int) -> bool:
    """
    打ち切られた評価（上限到達は「目標超え」を意味する）と、
    正確に数えて目標を超えた評価は採用しません。
    """
    return candidate.approximate or candidate.solution_count > target
