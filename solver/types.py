# -*- coding: utf-8 -*-
"""
数独 solver で使う主なデータ構造（型）をまとめたモジュールです。

dataclass を使うことで、
「この構造体はどんなフィールドを持っているのか」を
分かりやすく表現しています。
"""

from __future__ import annotations

import enum
import threading
import time
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from .config import DEFAULT_MAX_SOLUTIONS
from .grid.board import SudokuBoard

# グリッド上の座標を表す型 (row, col)
CellCoord = Tuple[int, int]


class SolverStatus(str, enum.Enum):
    """解析結果の大まかな判定。"""

    INVALID = "INVALID"
    NO_SOLUTION = "NO_SOLUTION"
    UNIQUE_SOLUTION = "UNIQUE_SOLUTION"
    MULTIPLE_SOLUTIONS = "MULTIPLE_SOLUTIONS"
    LIMIT_REACHED = "LIMIT_REACHED"


@dataclass(frozen=True)
class SolverOptions:
    """
    探索の挙動を調整するオプションです。

    Attributes
    ----------
    max_solutions : int
        数え上げる解の上限。負の値は「上限なし」。0 は不可。
    capture_first_solution : bool
        最初に見つかった解を結果に含めるかどうか。
    treat_empty_board_as_known : bool
        空の盤面に対して、探索せずに既知の総数を返すかどうか。
    deadline : float
        time.monotonic() 基準の締め切り時刻。0 なら締め切りなし。
    cancel_event : threading.Event or None
        セットされると探索を途中で打ち切る協調的キャンセル用のフラグ。
    """

    max_solutions: int = DEFAULT_MAX_SOLUTIONS
    capture_first_solution: bool = True
    treat_empty_board_as_known: bool = True
    deadline: float = 0.0
    cancel_event: Optional[threading.Event] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.max_solutions == 0:
            raise ValueError("max_solutions must be non-zero. Use -1 for unlimited.")
        if self.deadline < 0:
            raise ValueError("deadline must be >= 0")

    @classmethod
    def default_options(cls) -> "SolverOptions":
        return cls()

    @classmethod
    def find_first_solution(cls) -> "SolverOptions":
        return cls(max_solutions=1)

    @classmethod
    def uniqueness_probe(cls) -> "SolverOptions":
        return cls(max_solutions=2)

    @property
    def is_unlimited(self) -> bool:
        return self.max_solutions < 0

    def with_max_solutions(self, new_max: int) -> "SolverOptions":
        return replace(self, max_solutions=new_max)

    def without_empty_board_shortcut(self) -> "SolverOptions":
        return replace(self, treat_empty_board_as_known=False)

    def with_deadline(self, deadline: float) -> "SolverOptions":
        return replace(self, deadline=deadline)

    def with_time_limit_millis(self, millis: int) -> "SolverOptions":
        """現在時刻から millis ミリ秒後を締め切りにします。0 以下なら締め切りなし。"""
        if millis <= 0:
            return self.with_deadline(0.0)
        return self.with_deadline(time.monotonic() + millis / 1000.0)

    def with_cancel_event(self, event: Optional[threading.Event]) -> "SolverOptions":
        return replace(self, cancel_event=event)


@dataclass(frozen=True)
class SudokuAnalysis:
    """
    盤面を解析した結果です。

    Attributes
    ----------
    initial_board : SudokuBoard
        解析対象の盤面。
    valid : bool
        ルール違反が無ければ True。
    status : SolverStatus
        判定結果。
    solution_count : int
        見つかった解の数（任意精度の整数）。
    exemplar_solution : SudokuBoard or None
        最初に見つかった解。
    limit_reached : bool
        上限・締め切り・キャンセルで途中終了したかどうか。
    explored_nodes : int
        分岐で数字を置いた回数（診断用）。
    message : str
        人が読める説明文。
    exact : bool
        solution_count が列挙し尽くした正確な値かどうか。
    """

    initial_board: SudokuBoard
    valid: bool
    status: SolverStatus
    solution_count: int
    exemplar_solution: Optional[SudokuBoard]
    limit_reached: bool
    explored_nodes: int
    message: str
    exact: bool = True

    def __post_init__(self) -> None:
        if self.solution_count < 0:
            raise ValueError("solution_count must be non-negative")

    @property
    def has_unique_solution(self) -> bool:
        return self.status == SolverStatus.UNIQUE_SOLUTION

    @property
    def has_multiple_solutions(self) -> bool:
        return self.status in (SolverStatus.MULTIPLE_SOLUTIONS, SolverStatus.LIMIT_REACHED)

    @classmethod
    def invalid(cls, board: SudokuBoard, message: str) -> "SudokuAnalysis":
        return cls(board, False, SolverStatus.INVALID, 0, None, False, 0, message)

    @classmethod
    def empty_board(cls, board: SudokuBoard, known_count: int) -> "SudokuAnalysis":
        return cls(
            board,
            True,
            SolverStatus.MULTIPLE_SOLUTIONS,
            known_count,
            None,
            False,
            0,
            "Empty board has a known number of completions",
            exact=False,
        )

    @classmethod
    def already_solved(cls, board: SudokuBoard) -> "SudokuAnalysis":
        return cls(board, True, SolverStatus.UNIQUE_SOLUTION, 1, board, False, 0, "Board already solved")


@dataclass
class Candidate:
    """
    目標解数探索で評価した 1 つの候補盤面です。

    Attributes
    ----------
    puzzle : list of int
        81 マスの値（評価時点のスナップショット）。
    solution_count : int
        解の数。approximate が True のときは推定値。
    approximate : bool
        探索が上限・締め切りで打ち切られ、推定値になっているかどうか。
    delta : int
        目標解数との差の絶対値。
    clue_count : int
        残っているヒントの数。
    """

    puzzle: List[int]
    solution_count: int
    approximate: bool
    delta: int
    clue_count: int


@dataclass(frozen=True)
class SearchResult:
    """目標解数探索の最終結果です。"""

    board: SudokuBoard
    solution_count: int
    approximate: bool
    iterations: int
    elapsed_millis: int
    delta: int
