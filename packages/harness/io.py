"""
I/O utilities for packing runs.

Responsibilities:
- write_csv:      stream word-level solutions to CSV (one row per solution).
- write_jsonl:    same, as JSON lines (one object per solution).
- write_manifest: dump a JSON manifest with config, hashes, and counts.
- timestamp_id:   stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.

Notes:
- The writers consume an iterator and never hold more than one row, so a run
  with millions of solutions streams straight to disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable
import csv
import json
import subprocess
import datetime as dt

from packages.engine import WordSolution
from packages.engine.packing import GUESSES_PER_SOLUTION

CSV_FIELDS = ["answer"] + [f"guess_{i}" for i in range(1, GUESSES_PER_SOLUTION + 1)]
OUTPUT_FORMATS = ("csv", "jsonl")


def _prepare(path: str) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def write_csv(solutions: Iterable[WordSolution], path: str) -> int:
    """
    Serialize word-level solutions to CSV.

    Schema (columns):
      answer, guess_1, ..., guess_6

    Returns:
      Number of rows written (header excluded).
    """
    p = _prepare(path)
    n = 0
    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(CSV_FIELDS)
        for s in solutions:
            w.writerow(s.as_row())
            n += 1
    return n


def write_jsonl(solutions: Iterable[WordSolution], path: str) -> int:
    """One {"answer": ..., "guesses": [...]} object per line; returns the count."""
    p = _prepare(path)
    n = 0
    with p.open("w", encoding="utf-8") as f:
        for s in solutions:
            f.write(json.dumps(s.as_dict()))
            f.write("\n")
            n += 1
    return n


def write_solutions(solutions: Iterable[WordSolution], path: str, fmt: str = "csv") -> int:
    if fmt == "csv":
        return write_csv(solutions, path)
    if fmt == "jsonl":
        return write_jsonl(solutions, path)
    raise ValueError(f"unknown output format {fmt!r}; expected one of {OUTPUT_FORMATS}")


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest with run configuration and dataset validation summary.

    Typical keys:
      - run_id, git_commit
      - config: CLI args (paths, N, workers, partition letters, outdir)
      - wordlists: output of datasets.validate_wordlists(...)
      - lettersets, packings, solutions: counts for this run
    """
    p = _prepare(path)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
