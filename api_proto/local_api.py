import asyncio
import logging
import os
import random
import re
from typing import Any, List, Optional

import pandas as pd
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from solver import SolverOptions, SolverService
from solver.config import ANALYZE_TIME_LIMIT_MS, TARGET_MAX_SOLUTIONS, TARGET_TIME_LIMIT_MS
from solver.grid.parser import board_from_cells, normalize_grid
from solver.postprocess.render_result import build_analyze_response, build_target_response

# ============================================================
# Configuration & Logging
# ============================================================
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("sudoku_web")

ANALYZE_LIMIT_MS = int(os.getenv("SUDOKU_ANALYZE_TIME_LIMIT_MS", ANALYZE_TIME_LIMIT_MS))
TARGET_LIMIT_MS = int(os.getenv("SUDOKU_TARGET_TIME_LIMIT_MS", TARGET_TIME_LIMIT_MS))
TARGET_MAX = int(os.getenv("SUDOKU_TARGET_MAX_SOLUTIONS", TARGET_MAX_SOLUTIONS))

# 探索は 1 本のワーカースレッドで順番に処理する
solver_service = SolverService()

app = FastAPI()


@app.on_event("startup")
async def on_startup():
    logger.info(
        "Solver API started. analyze_limit=%dms, target_limit=%dms, target_max=%d",
        ANALYZE_LIMIT_MS,
        TARGET_LIMIT_MS,
        TARGET_MAX,
    )


# ============================================================
# Pydantic Models
# ============================================================
class AnalyzeRequest(BaseModel):
    # 81 要素のフラットなリスト（null は空き）
    cells: Optional[List[Optional[int]]] = None
    # 互換用：9×9 の 2 次元配列（文字列・数値・空文字が混在してよい）
    board: Optional[List[List[Any]]] = None


class TargetCountRequest(BaseModel):
    target: Optional[str] = None
    timeLimitMs: Optional[int] = None
    seed: Optional[int] = None
    maxSolutions: Optional[int] = None


class HealthResponse(BaseModel):
    ok: bool


def parse_target(raw: Optional[str]) -> int:
    """'1,000' のようなカンマ区切りも受け付けます。"""
    text = (raw or "").strip()
    if not text:
        raise ValueError("Target must be provided.")
    text = text.replace(",", "")
    if not re.fullmatch(r"\d+", text):
        raise ValueError("Target must be a positive integer.")
    value = int(text)
    if value <= 0:
        raise ValueError("Target must be greater than zero.")
    return value


def request_to_board(request: AnalyzeRequest):
    if request.board is not None:
        return normalize_grid(pd.DataFrame(request.board))
    return board_from_cells(request.cells)


# ============================================================
# API Endpoints
# ============================================================
@app.get("/health", response_model=HealthResponse)
async def health():
    return {"ok": True}


@app.post("/api/analyze")
async def api_analyze(request: AnalyzeRequest):
    """
    Counts the solutions of a board (unbounded, with a time limit).
    """
    try:
        board = request_to_board(request)
        options = SolverOptions.default_options().with_max_solutions(-1).with_time_limit_millis(
            ANALYZE_LIMIT_MS
        )
        analysis = await asyncio.wrap_future(solver_service.analyze_async(board, options))
        return build_analyze_response(analysis)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Analyze Error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/target")
async def api_target(request: TargetCountRequest):
    """
    Searches for the puzzle whose solution count is closest to the target.
    """
    try:
        target = parse_target(request.target)
        time_limit_ms = request.timeLimitMs if request.timeLimitMs and request.timeLimitMs > 0 else TARGET_LIMIT_MS
        seed = request.seed if request.seed is not None else random.getrandbits(63)
        max_solutions = request.maxSolutions if request.maxSolutions else TARGET_MAX

        logger.info("Target request: target=%d, time_limit=%dms, seed=%d", target, time_limit_ms, seed)
        result = await asyncio.wrap_future(
            solver_service.find_closest_async(target, time_limit_ms, max_solutions, seed)
        )
        return build_target_response(result)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Target Error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
