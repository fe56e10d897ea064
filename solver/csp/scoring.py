# -*- coding: utf-8 -*-
"""
目標解数探索で使う「候補盤面の評価」をまとめたモジュールです。

- evaluate_candidate : 探索エンジンで解の数を数え、目標との差を計算
- estimate_solutions : 探索が打ち切られたときの大まかな解数の推定
- is_better          : 2 つの候補のどちらが良いかの比較
- resolve_max_solutions : 目標解数から探索エンジンに渡す上限を決める
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional, Sequence

from ..config import CELL_COUNT, ESTIMATE_PRECISION, TOTAL_COMPLETED_GRIDS
from ..grid.board import SudokuBoard
from ..types import Candidate, SolverOptions
from .masks import ConstraintMasks, digit_bit
from .search import SudokuSolver

_ESTIMATE_CONTEXT = Context(prec=ESTIMATE_PRECISION, rounding=ROUND_HALF_UP)


def estimate_solutions(cells: Sequence[int]) -> int:
    """
    ヒントの配置から解の数をざっくり推定します。

    完成盤面の総数から出発し、ヒントを走査順に 1 つずつ置きながら
    「そのマスに置けた数字の候補数」で割っていきます。
    途中で候補 0 のマスがあれば 0、ヒントが 1 つも無ければ総数そのものです。
    """
    estimate = Decimal(TOTAL_COMPLETED_GRIDS)
    masks = ConstraintMasks()
    any_filled = False

    for cell, value in enumerate(cells):
        if value == 0:
            continue
        any_filled = True
        count = masks.candidates(cell).bit_count()
        if count == 0:
            return 0
        estimate = _ESTIMATE_CONTEXT.divide(estimate, Decimal(count))
        masks.place(cell, digit_bit(value))

    if not any_filled:
        return TOTAL_COMPLETED_GRIDS
    return int(estimate.quantize(Decimal(1), rounding=ROUND_HALF_UP, context=_ESTIMATE_CONTEXT))


def count_clues(cells: Sequence[int]) -> int:
    return CELL_COUNT - list(cells).count(0)


def evaluate_candidate(
    solver: SudokuSolver,
    cells: Sequence[int],
    target: int,
    options: SolverOptions,
) -> Candidate:
    """
    盤面のスナップショットを探索エンジンで評価し、Candidate にまとめます。

    探索が打ち切られた場合（上限・締め切り・キャンセル）は approximate=True とし、
    推定値が正ならそれを解の数として使います。
    """
    snapshot = list(cells)
    analysis = solver.analyze(SudokuBoard.from_array(snapshot), options)

    count = analysis.solution_count
    approximate = analysis.limit_reached
    if approximate:
        estimate = estimate_solutions(snapshot)
        if estimate > 0:
            count = estimate

    return Candidate(
        puzzle=snapshot,
        solution_count=count,
        approximate=approximate,
        delta=abs(count - target),
        clue_count=count_clues(snapshot),
    )


def is_better(candidate: Candidate, baseline: Optional[Candidate]) -> bool:
    """
    candidate が baseline より良ければ True。

    1. 正確な値は近似値より常に優先
    2. 目標との差が小さい方
    3. ヒントが多く残っている方
    """
    if baseline is None:
        return True
    if candidate.approximate != baseline.approximate:
        return not candidate.approximate
    if candidate.delta != baseline.delta:
        return candidate.delta < baseline.delta
    return candidate.clue_count > baseline.clue_count


def resolve_max_solutions(target: int, max_solutions: int) -> int:
    """
    探索エンジンに渡す解数の上限を決めます。

    目標 + 1 個見つかれば「目標を超えた」ことが分かるので、
    それ以上は数えません。ただし設定された上限を超えないようにします。
    負の上限（無制限）はそのまま返します。
    """
    if max_solutions < 0:
        return max_solutions
    desired = max(2, target + 1)
    return min(desired, max_solutions)
