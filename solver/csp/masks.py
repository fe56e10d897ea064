# -*- coding: utf-8 -*-
"""
行・列・ボックスごとの「使用済み数字」をビットマスクで管理するモジュールです。

ビット b が立っていれば「数字 b+1 がそのユニットに既に置かれている」
ことを表します。マスクは作業用盤面と常に同期させます。
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ..config import ALL_DIGITS_MASK, CELL_COUNT, REGION_SIZE, SIZE

# マス番号 → (行, 列, ボックス) の早見表
CELL_ROW: Tuple[int, ...] = tuple(i // SIZE for i in range(CELL_COUNT))
CELL_COL: Tuple[int, ...] = tuple(i % SIZE for i in range(CELL_COUNT))
CELL_BOX: Tuple[int, ...] = tuple(
    (r // REGION_SIZE) * REGION_SIZE + (c // REGION_SIZE)
    for r, c in zip(CELL_ROW, CELL_COL)
)


def digit_bit(digit: int) -> int:
    return 1 << (digit - 1)


def bit_digit(bit: int) -> int:
    """単一ビットのマスクを数字（1〜9）に戻します。"""
    return bit.bit_length()


class ConstraintMasks:
    """
    3 種類のユニット（行・列・ボックス）のマスクをまとめたクラスです。

    place / remove は必ず対にして呼びます（スタック規律）。
    """

    __slots__ = ("rows", "cols", "boxes")

    def __init__(self) -> None:
        self.rows: List[int] = [0] * SIZE
        self.cols: List[int] = [0] * SIZE
        self.boxes: List[int] = [0] * SIZE

    @classmethod
    def from_cells(cls, cells: Sequence[int]) -> "ConstraintMasks":
        """
        盤面の値からマスクを組み立てます。

        重複チェックは行いません（呼び出し側で検証済みである前提）。
        """
        masks = cls()
        for cell, value in enumerate(cells):
            if value:
                masks.place(cell, digit_bit(value))
        return masks

    def candidates(self, cell: int) -> int:
        """そのマスに置ける数字のビット集合を返します。"""
        used = self.rows[CELL_ROW[cell]] | self.cols[CELL_COL[cell]] | self.boxes[CELL_BOX[cell]]
        return ~used & ALL_DIGITS_MASK

    def place(self, cell: int, bit: int) -> None:
        self.rows[CELL_ROW[cell]] |= bit
        self.cols[CELL_COL[cell]] |= bit
        self.boxes[CELL_BOX[cell]] |= bit

    def remove(self, cell: int, bit: int) -> None:
        self.rows[CELL_ROW[cell]] &= ~bit
        self.cols[CELL_COL[cell]] &= ~bit
        self.boxes[CELL_BOX[cell]] &= ~bit
