import json
import os
from typing import Any, Dict, List, Optional

import pandas as pd

from .grid import Grid

PUZZLE_KEYS = ("puzzle", "grid", "quizzes", "board", "question")


def _flatten(value: Any) -> Optional[str]:
    if isinstance(value, str):
        compact = "".join(value.split())
        return compact or None
    if hasattr(value, "tolist"):
        value = value.tolist()
    if isinstance(value, (list, tuple)):
        cells: List[Any] = []
        for item in value:
            if hasattr(item, "tolist"):
                item = item.tolist()
            if isinstance(item, (list, tuple)):
                cells.extend(item)
            else:
                cells.append(item)
        try:
            return "".join(str(int(v)) for v in cells)
        except (TypeError, ValueError):
            # Unreadable cell; leave the record without a puzzle so it fails on its own.
            return None
    return None


def _normalize_record(record: Dict[str, Any], fallback_id: str) -> Dict[str, Any]:
    for key in PUZZLE_KEYS:
        if key in record and record[key] is not None:
            text = _flatten(record[key])
            if text:
                record["puzzle"] = text
                break

    raw_id = record.get("id")
    if raw_id is None or (isinstance(raw_id, float) and pd.isna(raw_id)) or str(raw_id).strip() == "":
        record["id"] = fallback_id
    else:
        record["id"] = str(raw_id)
    return record


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzles from a file. Handles .json, .jsonl, .csv and .parquet formats.
    Returns a list of raw puzzle dictionaries, each carrying `id` and `puzzle`.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    stem = os.path.splitext(os.path.basename(file_path))[0]

    def _finish(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return [_normalize_record(r, f"{stem}-{i}") for i, r in enumerate(records)]

    # Case 1: Parquet File (Binary)
    if file_path.endswith(".parquet"):
        try:
            df = pd.read_parquet(file_path)
        except Exception as e:
            print(f"Error reading parquet: {e}")
            return []
        return _finish(df.to_dict(orient="records"))

    # Case 2: CSV File; keep digit strings intact (leading zeros are blanks)
    if file_path.endswith(".csv"):
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        return _finish(df.to_dict(orient="records"))

    # Case 3: JSON File (array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            if isinstance(payload, list):
                return _finish([p for p in payload if isinstance(p, dict)])
            if isinstance(payload, dict):
                return _finish([payload])
            return []
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            pass

    # Case 4: JSONL File (Text)
    data = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(obj, dict):
                data.append(obj)
    return _finish(data)


def parse_puzzle(record: Dict[str, Any]) -> Grid:
    """Build a Grid from a loaded record."""
    text = record.get("puzzle")
    if not isinstance(text, str) or not text:
        raise ValueError(f"Puzzle {record.get('id', 'unknown')} has no puzzle grid")
    return Grid.from_string(text)
