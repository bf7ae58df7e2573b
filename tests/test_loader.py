import json

import pandas as pd
import pytest

from src.sudoku.grid import GridShapeError
from src.sudoku.loader import load_puzzles, parse_puzzle
from src.sudoku.puzzles import SKIENA_PUZZLE, make_puzzle

PUZZLE = make_puzzle(40, seed=0).to_string()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_puzzles(str(tmp_path / "nope.json"))


def test_json_object_and_array(tmp_path):
    single = tmp_path / "one.json"
    single.write_text(json.dumps({"id": "a", "puzzle": PUZZLE}))
    many = tmp_path / "many.json"
    many.write_text(json.dumps([{"id": "b", "puzzle": PUZZLE}, {"grid": SKIENA_PUZZLE}, "junk"]))

    assert load_puzzles(str(single)) == [{"id": "a", "puzzle": PUZZLE}]

    records = load_puzzles(str(many))
    assert [r["id"] for r in records] == ["b", "many-1"]
    assert parse_puzzle(records[1]).rows() == SKIENA_PUZZLE


def test_json_falls_back_to_lines(tmp_path):
    path = tmp_path / "lines.json"
    path.write_text(
        json.dumps({"id": "x", "puzzle": PUZZLE}) + "\n{broken\n\n"
        + json.dumps({"id": "y", "quizzes": PUZZLE.replace("0", ".")}) + "\n"
    )
    records = load_puzzles(str(path))
    assert [r["id"] for r in records] == ["x", "y"]
    assert parse_puzzle(records[1]).cells == parse_puzzle(records[0]).cells


def test_csv_keeps_leading_zeros(tmp_path):
    path = tmp_path / "puzzles.csv"
    pd.DataFrame({"quizzes": [PUZZLE], "solutions": ["1" * 81]}).to_csv(path, index=False)

    records = load_puzzles(str(path))
    assert len(records) == 1
    assert records[0]["id"] == "puzzles-0"
    assert records[0]["puzzle"] == PUZZLE


def test_parquet(tmp_path):
    pytest.importorskip("pyarrow")
    path = tmp_path / "puzzles.parquet"
    pd.DataFrame({"id": ["p1", "p2"], "puzzle": [PUZZLE, PUZZLE]}).to_parquet(path)

    records = load_puzzles(str(path))
    assert [r["id"] for r in records] == ["p1", "p2"]


def test_parse_puzzle_errors():
    with pytest.raises(ValueError):
        parse_puzzle({"id": "empty"})
    with pytest.raises(GridShapeError):
        parse_puzzle({"id": "short", "puzzle": "123"})


def test_unreadable_grid_cells_leave_record_without_puzzle(tmp_path):
    path = tmp_path / "batch.json"
    path.write_text(json.dumps([
        {"id": "bad", "grid": [[None] * 9] * 9},
        {"id": "letters", "board": ["x"] * 81},
        {"id": "good", "puzzle": PUZZLE},
    ]))

    records = load_puzzles(str(path))
    assert [r["id"] for r in records] == ["bad", "letters", "good"]
    assert "puzzle" not in records[0]
    assert "puzzle" not in records[1]
    with pytest.raises(ValueError):
        parse_puzzle(records[0])
    assert parse_puzzle(records[2]).to_string() == PUZZLE
