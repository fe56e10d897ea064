import asyncio

from fastapi.testclient import TestClient

from api_proto.local_api import app, parse_target
from solver import SolverService, SolverStatus, SudokuBoard
from solver.config import TOTAL_COMPLETED_GRIDS
from solver.csp.generator import generate_random_solved
from solver.postprocess.render_result import build_target_message, format_count
from solver.types import SearchResult

from conftest import CLASSIC_ROWS

client = TestClient(app)


def _classic_cells():
    return [None if ch == "0" else int(ch) for ch in "".join(CLASSIC_ROWS)]


# ---------- render_result ----------


def test_format_count_groups_digits():
    assert format_count(TOTAL_COMPLETED_GRIDS) == "6,670,903,752,021,072,936,960"
    assert format_count(0) == "0"


def test_target_message():
    result = SearchResult(
        board=SudokuBoard.empty(),
        solution_count=1200,
        approximate=False,
        iterations=40,
        elapsed_millis=812,
        delta=34,
    )

    assert build_target_message(result) == "Closest count 1,200 (delta 34) in 812ms"


def test_parse_target_accepts_commas():
    assert parse_target(" 1,000 ") == 1000


# ---------- SolverService ----------


def test_service_runs_analysis_on_worker(classic_puzzle, classic_solution):
    with SolverService() as service:
        analysis = service.analyze_async(classic_puzzle).result(timeout=30)

    assert analysis.status == SolverStatus.UNIQUE_SOLUTION
    assert analysis.exemplar_solution == classic_solution


def test_service_can_be_awaited(classic_puzzle):
    async def run(service):
        return await asyncio.wrap_future(service.find_closest_async(1, 500, 200000, 5))

    with SolverService() as service:
        result = asyncio.run(run(service))

    assert result.delta == 0
    assert result.board == generate_random_solved(5)


def test_blocking_analysis_matches_async(two_solution_board):
    with SolverService() as service:
        blocking = service.analyze_blocking(two_solution_board)
        background = service.analyze_async(two_solution_board).result(timeout=30)

    assert blocking.solution_count == background.solution_count == 2


# ---------- HTTP API ----------


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_analyze_classic_cells():
    response = client.post("/api/analyze", json={"cells": _classic_cells()})

    assert response.status_code == 200
    body = response.json()
    assert body["valid"]
    assert body["status"] == "UNIQUE_SOLUTION"
    assert body["solutionCount"] == "1"
    assert body["unique"]
    assert body["exact"]
    assert len(body["exemplarSolution"]) == 81


def test_analyze_two_dimensional_board():
    board = [[ch if ch != "0" else "" for ch in row] for row in CLASSIC_ROWS]

    response = client.post("/api/analyze", json={"board": board})

    assert response.status_code == 200
    assert response.json()["status"] == "UNIQUE_SOLUTION"


def test_analyze_duplicate_row_is_invalid():
    cells = [0] * 81
    cells[0] = 4
    cells[8] = 4

    response = client.post("/api/analyze", json={"cells": cells})

    assert response.status_code == 200
    body = response.json()
    assert not body["valid"]
    assert body["status"] == "INVALID"
    assert "row" in body["message"]


def test_analyze_wrong_length_is_bad_request():
    response = client.post("/api/analyze", json={"cells": [1, 2, 3]})

    assert response.status_code == 400


def test_analyze_out_of_range_is_bad_request():
    cells = [0] * 81
    cells[0] = 12

    response = client.post("/api/analyze", json={"cells": cells})

    assert response.status_code == 400


def test_target_one():
    response = client.post("/api/target", json={"target": "1", "seed": 9, "timeLimitMs": 500})

    assert response.status_code == 200
    body = response.json()
    assert body["delta"] == "0"
    assert body["solutionCount"] == "1"
    assert not body["approximate"]
    assert body["board"] == generate_random_solved(9).to_list()
    assert body["message"].startswith("Closest count 1 (delta 0)")


def test_target_must_be_positive_integer():
    for bad in ["abc", "0", "", "-4"]:
        response = client.post("/api/target", json={"target": bad})

        assert response.status_code == 400
