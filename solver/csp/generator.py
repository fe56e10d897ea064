# -*- coding: utf-8 -*-
"""
探索を使わずに、ランダムな完成盤面を作るモジュールです。

基本パターン
    pattern(r, c) = (3 * (r % 3) + r // 3 + c) % 9
は、行・列・ボックスのどこにも重複がない完成盤面になります。

これに対して次の置換をランダムにかけても、完成盤面であることは保たれます。
- バンド（3 行の塊）の並べ替え
- スタック（3 列の塊）の並べ替え
- 各バンド内の 3 行、各スタック内の 3 列の並べ替え
- 数字ラベル 1〜9 の付け替え

そのため、生成後の検証は不要です。
"""

from __future__ import annotations

import random
from typing import List

import numpy as np

from ..config import REGION_SIZE, SIZE
from ..grid.board import SudokuBoard

_BASE = np.fromfunction(
    lambda r, c: (REGION_SIZE * (r % REGION_SIZE) + r // REGION_SIZE + c) % SIZE,
    (SIZE, SIZE),
    dtype=int,
)


def pattern(r: int, c: int) -> int:
    """基本パターンの (r, c) の値（0〜8）。"""
    return int(_BASE[r, c])


def _shuffled_lines(rng: random.Random) -> List[int]:
    """塊の並べ替え＋塊の中の並べ替えをした行（または列）の番号列を返します。"""
    groups = rng.sample(range(REGION_SIZE), REGION_SIZE)
    return [
        g * REGION_SIZE + offset
        for g in groups
        for offset in rng.sample(range(REGION_SIZE), REGION_SIZE)
    ]


def generate_solved_board(rng: random.Random) -> SudokuBoard:
    """
    rng を使ってランダムな完成盤面を 1 つ作ります。

    同じ状態の rng からは同じ盤面が得られます。
    """
    rows = _shuffled_lines(rng)
    cols = _shuffled_lines(rng)
    digits = np.array(rng.sample(range(1, SIZE + 1), SIZE), dtype=np.uint8)

    grid = digits[_BASE[np.ix_(rows, cols)]]
    return SudokuBoard.from_array(grid)


def generate_random_solved(seed: int) -> SudokuBoard:
    return generate_solved_board(random.Random(seed))
