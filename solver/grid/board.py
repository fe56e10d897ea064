# -*- coding: utf-8 -*-
"""
9×9 数独盤面の不変な値型 SudokuBoard を定義するモジュールです。

内部では numpy の uint8 配列（長さ 81、書き込み禁止）として保持します。
- 0     : 空きマス
- 1〜9  : 数字

探索中の書き換えはすべて「作業用のコピー」に対して行い、
SudokuBoard 自体は一度作ったら変更しません。
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np

from ..config import CELL_COUNT, SIZE


def _require_within_range(value: int) -> None:
    if value < 0 or value > 9:
        raise ValueError(f"Cell values must be between 0 and 9 but was {value}")


def _require_position(row: int, col: int) -> None:
    if not 0 <= row < SIZE:
        raise ValueError(f"Row must be between 0 and 8 but was {row}")
    if not 0 <= col < SIZE:
        raise ValueError(f"Column must be between 0 and 8 but was {col}")


def _frozen(cells: np.ndarray) -> np.ndarray:
    cells.flags.writeable = False
    return cells


class SudokuBoard:
    """
    9×9 数独盤面のスナップショット。

    直接 ``SudokuBoard(...)`` を呼ぶのではなく、
    :meth:`empty` や :meth:`from_array` などのファクトリを使ってください。
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: np.ndarray):
        # ファクトリ経由で検証済みの配列だけを受け取る
        self._cells = cells

    # ---- ファクトリ ---------------------------------------------------

    @classmethod
    def empty(cls) -> "SudokuBoard":
        return cls(_frozen(np.zeros(CELL_COUNT, dtype=np.uint8)))

    @classmethod
    def from_array(cls, values: Iterable[int] | np.ndarray) -> "SudokuBoard":
        """
        81 個の整数（1 次元）または 9×9 の配列から盤面を作ります。

        要素数が 81 でない場合や、0〜9 以外の値が含まれる場合は
        ValueError を送出します。
        """
        arr = np.asarray(values if isinstance(values, np.ndarray) else list(values))
        if arr.size != CELL_COUNT:
            raise ValueError(f"Expected {CELL_COUNT} values but got {arr.size}")
        if arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.integer):
            raise ValueError("Cell values must be integers")

        flat = arr.reshape(CELL_COUNT)
        for value in flat.tolist():
            _require_within_range(value)
        return cls(_frozen(flat.astype(np.uint8)))

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> "SudokuBoard":
        if len(data) != CELL_COUNT:
            raise ValueError(f"Expected {CELL_COUNT} values but got {len(data)}")
        for value in data:
            _require_within_range(value)
        return cls(_frozen(np.frombuffer(bytes(data), dtype=np.uint8).copy()))

    @classmethod
    def from_canonical_string(cls, canonical: str) -> "SudokuBoard":
        """
        "530070000600195000..." のような 81 文字の文字列から盤面を作ります。
        '0' と '.' は空きマスとして扱います。
        """
        if len(canonical) != CELL_COUNT:
            raise ValueError(f"Canonical string must be {CELL_COUNT} characters long")
        values: List[int] = []
        for ch in canonical:
            if ch == ".":
                values.append(0)
            elif "0" <= ch <= "9":
                values.append(ord(ch) - ord("0"))
            else:
                raise ValueError(f"Canonical string must only contain digits but found '{ch}'")
        return cls.from_array(values)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "SudokuBoard":
        """9 文字 × 9 行の文字列リストから盤面を作ります。"""
        if len(rows) != SIZE:
            raise ValueError(f"Exactly {SIZE} rows are required but was {len(rows)}")
        for row in rows:
            if len(row) != SIZE:
                raise ValueError(f"Each row must contain exactly {SIZE} characters")
        return cls.from_canonical_string("".join(rows))

    # ---- 参照 ---------------------------------------------------------

    def value_at(self, row: int, col: int) -> int:
        _require_position(row, col)
        return int(self._cells[row * SIZE + col])

    def to_array(self) -> np.ndarray:
        """書き込み可能な 9×9 のコピーを返します。"""
        return self._cells.reshape(SIZE, SIZE).copy()

    def to_list(self) -> List[int]:
        return self._cells.tolist()

    def to_bytes(self) -> bytes:
        return self._cells.tobytes()

    def is_empty_board(self) -> bool:
        return not self._cells.any()

    def is_complete(self) -> bool:
        return bool(self._cells.all())

    def clue_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def to_canonical_string(self) -> str:
        return "".join(str(v) for v in self._cells.tolist())

    # ---- 更新（新しい盤面を返す） -------------------------------------

    def with_value(self, row: int, col: int, value: int) -> "SudokuBoard":
        _require_position(row, col)
        _require_within_range(value)
        index = row * SIZE + col
        if int(self._cells[index]) == value:
            return self
        updated = self._cells.copy()
        updated[index] = value
        return SudokuBoard(_frozen(updated))

    def clear(self, row: int, col: int) -> "SudokuBoard":
        return self.with_value(row, col, 0)

    # ---- 比較・表示 ---------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return NotImplemented
        return bool(np.array_equal(self._cells, other._cells))

    def __hash__(self) -> int:
        return hash(self._cells.tobytes())

    def __str__(self) -> str:
        lines = []
        for r in range(SIZE):
            row = self._cells[r * SIZE:(r + 1) * SIZE].tolist()
            lines.append(" ".join("." if v == 0 else str(v) for v in row))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard('{self.to_canonical_string()}')"
