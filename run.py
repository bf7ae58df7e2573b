"""CLI entrypoint: load puzzle(s), run solver, and report results."""

import argparse
import csv
import os
from pathlib import Path
from typing import Any, Optional

from tqdm import tqdm

from solver import solve_puzzle
from src.sudoku.grid import Grid, format_grid
from src.sudoku.loader import load_puzzles
from src.sudoku.puzzles import make_puzzle
from src.sudoku.solver_core import SearchLimitExceeded, SearchLimits
from src.utils.io import save_json
from src.utils.trace import get_tracer, reset_tracer

PUZZLE_SUFFIXES = [".json", ".jsonl", ".parquet", ".csv"]
DEFAULT_TIMEOUT = 60.0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the backtracking Sudoku solver on puzzle files")
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=os.environ.get("SUDOKU_DATA_PATH"),
        help="Path to a puzzle file or directory of puzzles (default: $SUDOKU_DATA_PATH)",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional .csv or .json path for results")
    parser.add_argument("--max-steps", type=int, default=None, help="Give up after this many search levels")
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Give up after this many seconds per puzzle (default: {DEFAULT_TIMEOUT:g}; 0 disables)",
    )
    parser.add_argument(
        "--all-cells",
        action="store_true",
        help="Try every ranked cell at each level instead of only the most constrained one.",
    )
    parser.add_argument("--trace-dir", type=Path, default=None, help="Write one trace CSV per puzzle here")
    parser.add_argument(
        "--demo",
        type=int,
        default=None,
        metavar="M",
        help="Blank M cells of the reference solution, then solve and print it.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for --demo clue removal")
    args = parser.parse_args(argv)
    if args.input is None and args.demo is None:
        parser.error("an input path (or $SUDOKU_DATA_PATH) or --demo is required")
    return args


def format_solution(puzzle_id: str, grid: Optional[Grid], steps: int, status: Optional[str] = None) -> dict:
    if status is None:
        status = "solved" if grid is not None else "unsolved"
    return {
        "id": puzzle_id,
        "status": status,
        "solution": grid.to_string() if grid is not None else "",
        "steps": steps,
    }


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "status", "solution", "steps"])
        for r in results:
            writer.writerow([r["id"], r["status"], r["solution"], r["steps"]])


def _solver_options(args) -> dict[str, Any]:
    timeout = args.timeout if args.timeout else None
    limits = None
    if args.max_steps is not None or timeout is not None:
        limits = SearchLimits(max_steps=args.max_steps, timeout=timeout)
    return {"limits": limits, "strict_mrv": not args.all_cells}


def run_demo(m: int, seed: Optional[int], options: dict[str, Any]) -> bool:
    grid = make_puzzle(m, seed)
    print(format_grid(grid))
    try:
        solved = solve_puzzle(grid, **options) is not None
    except SearchLimitExceeded as e:
        print(f"ERROR: {e}")
        solved = False
    print(f"Solved = {solved}")
    print(format_grid(grid))
    return solved


def collect_puzzles(input_path: Path) -> list[dict]:
    puzzles = []
    if input_path.is_file():
        puzzles = load_puzzles(str(input_path))
    elif input_path.is_dir():
        for file_path in sorted(input_path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
    else:
        raise ValueError(f"Input path {input_path} is neither file nor directory")
    return puzzles


def main(argv=None):
    args = parse_args(argv)
    options = _solver_options(args)

    if args.demo is not None:
        reset_tracer()
        run_demo(args.demo, args.seed, options)
        return

    puzzles = collect_puzzles(args.input)
    results = []

    for puzzle in tqdm(puzzles, desc="Solving", unit="puzzle", disable=len(puzzles) < 2):
        reset_tracer()
        tracer = get_tracer()
        puzzle_id = puzzle.get("id", "unknown")

        try:
            grid = solve_puzzle(puzzle, **options)
            summary = tracer.summary()
            results.append(format_solution(puzzle_id, grid, summary["num_assignments"]))
        except Exception as e:
            print(f"ERROR: Failed to solve puzzle {puzzle_id}: {e}")
            results.append(format_solution(puzzle_id, None, -1, status="error"))

        if args.trace_dir:
            tracer.to_csv(args.trace_dir / f"{puzzle_id}.csv")

    if args.output and args.output.suffix == ".json":
        save_json(args.output, results)
    elif args.output:
        write_results_csv(results, args.output)
    else:
        for r in results:
            print(f"{r['id']}: {r['status']} ({r['steps']} steps)")
            if r["solution"]:
                print(format_grid(Grid.from_string(r["solution"])))


if __name__ == "__main__":
    main()
