"""Tests for the solver step tracer."""

import csv

from src.sudoku import solver_core
from src.sudoku.puzzles import make_puzzle
from src.utils.trace import Tracer, enable_tracing, get_tracer, reset_tracer


def test_tracer_captures_steps(tmp_path):
    reset_tracer()
    tracer = get_tracer()

    tracer.log_constraints_built(empty_cells=40, filled_count=41)
    tracer.log_assign(0, 1, 7, candidate_count=2, filled_count=42)
    tracer.log_dead_end(2, 3, filled_count=42)
    tracer.log_revert(0, 1, 7, filled_count=41)
    tracer.log_solution_found(filled_count=81)

    summary = tracer.summary()
    assert summary["total_steps"] == 5
    assert summary["num_assignments"] == 1
    assert summary["num_reverts"] == 1
    assert summary["num_dead_ends"] == 1
    assert [s.step_number for s in tracer.steps] == [1, 2, 3, 4, 5]

    output_path = tmp_path / "traces" / "trace.csv"
    tracer.to_csv(output_path)
    with open(output_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["action_type"] for r in rows] == [
        "constraints_built", "assign", "dead_end", "revert", "solution_found"
    ]
    assert rows[1]["value"] == "7"


def test_disabled_tracer_records_nothing():
    reset_tracer()
    enable_tracing(False)
    get_tracer().log_assign(0, 0, 1, candidate_count=1, filled_count=1)
    assert get_tracer().steps == []
    reset_tracer()
    assert get_tracer().enabled


def test_solver_uses_global_tracer_by_default():
    reset_tracer()
    grid = make_puzzle(5, seed=4)
    assert solver_core.solve(grid)
    summary = get_tracer().summary()
    assert summary["num_assignments"] >= 5
    assert summary["action_counts"]["solution_found"] == 1
    reset_tracer()


def test_to_csv_without_steps_writes_nothing(tmp_path):
    path = tmp_path / "empty.csv"
    Tracer().to_csv(path)
    assert not path.exists()
