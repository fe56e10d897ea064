# -*- coding: utf-8 -*-
"""
制約伝播（propagation）を行うモジュールです。

ここでの制約伝播は「候補が 1 つしかないマス（naked single）を
分岐せずに確定させる」単純なものです。

ポイント
--------
- 盤面のコピーは作らず、作業用盤面・マスク・空きマス配列を
  その場で書き換えます。
- 強制的に置いた数字は (マス, ビット, 入れ替え元の位置) の
  記録としてスタックに積み、バックトラック時に逆順で元に戻します。
- スタックは空きマス数ぶんを最初に確保した配列で、
  forced_top が「次に積む位置」を表します（ノードごとの確保はしません）。

空きマス配列 empties は、depth より前が「確定済み」、
depth 以降が「未確定」という 2 つの区画に分かれています。
"""

from __future__ import annotations

from typing import List, Sequence

from .masks import ConstraintMasks, bit_digit


class Workspace:
    """
    1 回の探索呼び出しの間だけ使う作業領域です。

    探索ごとに新しく作るため、複数の探索（複数スレッド）で
    共有されることはありません。
    """

    __slots__ = (
        "cells",
        "masks",
        "empties",
        "forced_cells",
        "forced_bits",
        "forced_swap",
        "forced_top",
    )

    def __init__(self, cells: Sequence[int]):
        self.cells: List[int] = list(cells)
        self.masks = ConstraintMasks.from_cells(self.cells)
        self.empties: List[int] = [i for i, v in enumerate(self.cells) if v == 0]

        n = len(self.empties)
        self.forced_cells: List[int] = [0] * n
        self.forced_bits: List[int] = [0] * n
        self.forced_swap: List[int] = [0] * n
        self.forced_top = 0

    @property
    def empty_count(self) -> int:
        return len(self.empties)

    def place(self, cell: int, bit: int) -> None:
        self.cells[cell] = bit_digit(bit)
        self.masks.place(cell, bit)

    def remove(self, cell: int, bit: int) -> None:
        self.cells[cell] = 0
        self.masks.remove(cell, bit)

    def swap(self, i: int, j: int) -> None:
        if i != j:
            e = self.empties
            e[i], e[j] = e[j], e[i]


def propagate_singles(ws: Workspace, depth: int) -> int:
    """
    depth 以降の未確定マスから naked single を探し、確定できなくなるまで繰り返します。

    Returns
    -------
    int
        確定させたマスの数。候補 0 のマスが見つかった（行き止まり）場合は -1。
        -1 のときは、この呼び出しで置いた数字はすべて元に戻っています。
    """
    start = ws.forced_top
    empties = ws.empties
    masks = ws.masks
    n = len(empties)

    progress = True
    while progress:
        progress = False
        filled = ws.forced_top - start
        for i in range(depth + filled, n):
            cell = empties[i]
            candidates = masks.candidates(cell)
            if candidates == 0:
                undo_forced(ws, depth, start)
                return -1
            if candidates & (candidates - 1) == 0:
                # 候補がちょうど 1 つ
                target = depth + filled
                ws.swap(target, i)
                top = ws.forced_top
                ws.forced_swap[top] = i
                ws.forced_cells[top] = cell
                ws.forced_bits[top] = candidates
                ws.forced_top = top + 1
                ws.place(cell, candidates)
                progress = True
                break

    return ws.forced_top - start


def undo_forced(ws: Workspace, depth: int, start: int) -> None:
    """
    スタック位置 start 以降に積んだ強制配置を逆順に取り消し、
    空きマス配列の並びも伝播前の状態に戻します。
    """
    for i in range(ws.forced_top - 1, start - 1, -1):
        ws.remove(ws.forced_cells[i], ws.forced_bits[i])
        ws.swap(depth + (i - start), ws.forced_swap[i])
    ws.forced_top = start
