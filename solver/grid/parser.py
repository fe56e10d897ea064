# -*- coding: utf-8 -*-
"""
外部から渡された盤面データを SudokuBoard に正規化するモジュールです。

主な役割:
- pandas.DataFrame（9×9）を SudokuBoard に変換
- API から届く 81 要素のリスト（null を含む）を SudokuBoard に変換
- 各セルの値を 0（空き）〜9 の整数に正規化
"""

from __future__ import annotations

import math
from typing import Any, List, Optional, Sequence

import pandas as pd

from ..config import CELL_COUNT, SIZE
from .board import SudokuBoard

# 空きマスとして扱う文字
BLANK_TOKENS = {"", ".", "0", "-", "_"}


def normalize_cell(x: Any) -> int:
    """
    個々のセルの値を 0〜9 の整数に変換します。

    変換ルール（例）
    ----------------
    - None / NaN / "" / "." : 0（空き）
    - 5 / "5" / 5.0         : 5
    - それ以外              : ValueError
    """
    if x is None:
        return 0

    if isinstance(x, bool):
        raise ValueError(f"Unexpected cell value: {x!r}")

    if isinstance(x, float):
        # pandas は欠損を NaN で表すので、空きマスとして扱う
        if math.isnan(x):
            return 0
        if not x.is_integer():
            raise ValueError(f"Unexpected cell value: {x!r}")
        x = int(x)

    if isinstance(x, int) or hasattr(x, "__index__"):
        value = int(x)
    else:
        s = str(x).strip()
        if s in BLANK_TOKENS:
            return 0
        if not s.isdigit():
            raise ValueError(f"Unexpected cell value: {x!r}")
        value = int(s)

    if value < 0 or value > 9:
        raise ValueError(f"Cell values must be between 0 and 9 but was {value}")
    return value


def normalize_grid(df: pd.DataFrame) -> SudokuBoard:
    """
    9×9 の DataFrame から SudokuBoard を作ります。

    Parameters
    ----------
    df : pandas.DataFrame
        入力の盤面データ。セルには数字・数字文字列・空文字・None などが入ります。

    Returns
    -------
    SudokuBoard
    """
    rows, cols = df.shape
    if (rows, cols) != (SIZE, SIZE):
        raise ValueError(f"Board must be {SIZE}x{SIZE} but was {rows}x{cols}")

    values: List[int] = []
    for i in range(rows):
        for j in range(cols):
            values.append(normalize_cell(df.iat[i, j]))

    return SudokuBoard.from_array(values)


def board_from_cells(cells: Optional[Sequence[Any]]) -> SudokuBoard:
    """API の "cells"（81 要素、null は空き）から盤面を作ります。"""
    if cells is None or len(cells) != CELL_COUNT:
        raise ValueError(f"Request must contain exactly {CELL_COUNT} cells")
    return SudokuBoard.from_array([normalize_cell(v) for v in cells])


def board_to_dataframe(board: SudokuBoard) -> pd.DataFrame:
    """表示・CSV 出力用に 9×9 の DataFrame に変換します。"""
    return pd.DataFrame(board.to_array().astype(int))
