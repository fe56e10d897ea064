# -*- coding: utf-8 -*-
"""
探索結果をもとに表示用（API レスポンス用）の情報を構築するモジュールです。

解の数は 64 ビットに収まらないことがあるため、
JSON では文字列として返します。
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..grid.board import SudokuBoard
from ..types import SearchResult, SudokuAnalysis


def format_count(value: int) -> str:
    """3 桁ごとにカンマを入れた文字列にします（例: 1234567 → "1,234,567"）。"""
    return f"{value:,}"


def board_to_list(board: Optional[SudokuBoard]) -> Optional[List[int]]:
    if board is None:
        return None
    return board.to_list()


def build_analyze_response(analysis: SudokuAnalysis) -> Dict[str, Any]:
    """
    SudokuAnalysis を /api/analyze のレスポンス形式に変換します。

    solutionCount はカンマ無しの文字列です（クライアント側で整形する想定）。
    """
    return {
        "valid": analysis.valid,
        "status": analysis.status.value,
        "solutionCount": str(analysis.solution_count),
        "limitReached": analysis.limit_reached,
        "unique": analysis.has_unique_solution,
        "exact": analysis.exact,
        "message": analysis.message,
        "exemplarSolution": board_to_list(analysis.exemplar_solution),
        "exploredNodes": analysis.explored_nodes,
    }


def build_target_message(result: SearchResult) -> str:
    return (
        f"Closest count {format_count(result.solution_count)} "
        f"(delta {format_count(result.delta)}) in {result.elapsed_millis}ms"
    )


def build_target_response(result: SearchResult) -> Dict[str, Any]:
    """SearchResult を /api/target のレスポンス形式に変換します。"""
    return {
        "board": result.board.to_list(),
        "solutionCount": format_count(result.solution_count),
        "approximate": result.approximate,
        "delta": format_count(result.delta),
        "elapsedMillis": result.elapsed_millis,
        "iterations": result.iterations,
        "message": build_target_message(result),
    }
