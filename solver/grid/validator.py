# -*- coding: utf-8 -*-
"""
数独のルール（行・列・ボックス内で同じ数字を使わない）に
違反していないかを判定するモジュールです。

空きマス（0）は無視します。最初に見つかった矛盾だけを報告します。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import REGION_SIZE, SIZE
from .board import SudokuBoard


@dataclass(frozen=True)
class ValidationResult:
    """
    検証結果。

    Attributes
    ----------
    valid : bool
        矛盾が無ければ True。
    message : str
        人が読める説明文。矛盾時は "row" / "column" / "box" を含みます。
    unit : str or None
        矛盾したユニットの種類（"row", "column", "box"）。
    index : int or None
        矛盾したユニットの番号（0 始まり）。
    value : int or None
        重複していた数字。
    """

    valid: bool
    message: str
    unit: Optional[str] = None
    index: Optional[int] = None
    value: Optional[int] = None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(True, "Board is valid")

    @classmethod
    def row_conflict(cls, row: int, value: int) -> "ValidationResult":
        return cls(False, f"Duplicate value {value} in row {row + 1}", "row", row, value)

    @classmethod
    def column_conflict(cls, col: int, value: int) -> "ValidationResult":
        return cls(False, f"Duplicate value {value} in column {col + 1}", "column", col, value)

    @classmethod
    def box_conflict(cls, box: int, value: int) -> "ValidationResult":
        box_row, box_col = divmod(box, REGION_SIZE)
        return cls(
            False,
            f"Duplicate value {value} in box {box_row + 1}/{box_col + 1}",
            "box",
            box,
            value,
        )


def box_index(row: int, col: int) -> int:
    return (row // REGION_SIZE) * REGION_SIZE + (col // REGION_SIZE)


def validate(board: SudokuBoard) -> ValidationResult:
    """盤面を走査し、最初に見つかった重複を返します。"""
    row_masks = [0] * SIZE
    col_masks = [0] * SIZE
    box_masks = [0] * SIZE

    cells = board.to_list()
    for index, value in enumerate(cells):
        if value == 0:
            continue
        row, col = divmod(index, SIZE)
        box = box_index(row, col)
        bit = 1 << (value - 1)

        if row_masks[row] & bit:
            return ValidationResult.row_conflict(row, value)
        if col_masks[col] & bit:
            return ValidationResult.column_conflict(col, value)
        if box_masks[box] & bit:
            return ValidationResult.box_conflict(box, value)

        row_masks[row] |= bit
        col_masks[col] |= bit
        box_masks[box] |= bit

    return ValidationResult.success()


def is_valid(board: SudokuBoard) -> bool:
    return validate(board).valid


def require_valid(board: SudokuBoard) -> None:
    result = validate(board)
    if not result.valid:
        raise ValueError(result.message)
