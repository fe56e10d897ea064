# -*- coding: utf-8 -*-
"""
solver.grid パッケージ

盤面（グリッド）に関する処理をまとめたサブパッケージです。
- board.py     : 不変な盤面の値型 SudokuBoard
- parser.py    : DataFrame や API のリストから SudokuBoard への変換
- validator.py : 行・列・ボックスの重複チェック
"""

from .board import SudokuBoard
from .validator import ValidationResult, validate, is_valid

__all__ = ["SudokuBoard", "ValidationResult", "validate", "is_valid"]
