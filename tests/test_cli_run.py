import csv
import json
from pathlib import Path

import pytest

from apps.cli.run import main
from packages.engine import WordSolution
from packages.harness import write_csv, write_jsonl, write_solutions


def _write(p: Path, lines):
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _args(tmp_path: Path, *extra):
    return [
        "--N", "3",
        "--answers", str(tmp_path / "answers.txt"),
        "--guesses", str(tmp_path / "guesses.txt"),
        "--outdir", str(tmp_path / "out"),
        "--workers", "1",
        "--progress", "off",
        *extra,
    ]


def test_write_csv_and_jsonl(tmp_path: Path):
    rows = [WordSolution("abc", ("stu", "def", "ghi", "jkl", "mno", "pqr"))]
    assert write_csv(rows, str(tmp_path / "s.csv")) == 1
    with (tmp_path / "s.csv").open(encoding="utf-8") as f:
        data = list(csv.reader(f))
    assert data[0] == ["answer"] + [f"guess_{i}" for i in range(1, 7)]
    assert data[1] == ["abc", "def", "ghi", "jkl", "mno", "pqr", "stu"]

    assert write_jsonl(iter(rows), str(tmp_path / "s.jsonl")) == 1
    line = (tmp_path / "s.jsonl").read_text(encoding="utf-8").strip()
    assert json.loads(line) == {"answer": "abc", "guesses": ["def", "ghi", "jkl", "mno", "pqr", "stu"]}

    with pytest.raises(ValueError):
        write_solutions(rows, str(tmp_path / "s.txt"), "txt")


def test_cli_end_to_end(tmp_path: Path, capsys):
    _write(tmp_path / "answers.txt", ["abc"])
    _write(tmp_path / "guesses.txt", ["def", "fed", "ghi", "jkl", "mno", "pqr", "stu"])

    n = main(_args(tmp_path))
    assert n == 2

    out = capsys.readouterr().out
    assert "There are 2 (optimally bad) wordle solutions." in out
    assert "First packing: abc | def ghi jkl mno pqr stu" in out

    csvs = list((tmp_path / "out").glob("solutions_*.csv"))
    manifests = list((tmp_path / "out").glob("solutions_*_manifest.json"))
    assert len(csvs) == 1 and len(manifests) == 1
    with csvs[0].open(encoding="utf-8") as f:
        assert len(list(csv.reader(f))) == 3
    manifest = json.loads(manifests[0].read_text(encoding="utf-8"))
    assert manifest["packings"] == 1 and manifest["solutions"] == 2


def test_cli_invalid_words(tmp_path: Path):
    _write(tmp_path / "answers.txt", ["abc", "a1c"])
    _write(tmp_path / "guesses.txt", ["def", "ghi", "jkl", "mno", "pqr", "stu"])

    with pytest.raises(SystemExit):
        main(_args(tmp_path))
    assert main(_args(tmp_path, "--on-invalid", "skip", "--format", "jsonl")) == 1
    skipped = list((tmp_path / "out").glob("solutions_*_skipped.txt"))
    assert len(skipped) == 1
    assert skipped[0].read_text(encoding="utf-8") == "a1c\n"


def test_cli_rejects_oversized_partition(tmp_path: Path):
    _write(tmp_path / "answers.txt", ["abc"])
    _write(tmp_path / "guesses.txt", ["def", "ghi", "jkl", "mno", "pqr", "stu"])

    with pytest.raises(SystemExit):
        main(_args(tmp_path, "--partition-letters", "abcdefghijklmnopq"))


def test_cli_only_requires_known_answer(tmp_path: Path):
    _write(tmp_path / "answers.txt", ["abc", "xyz"])
    _write(tmp_path / "guesses.txt", ["def", "ghi", "jkl", "mno", "pqr", "stu"])

    assert main(_args(tmp_path, "--only", "cab")) == 1
    with pytest.raises(SystemExit):
        main(_args(tmp_path, "--only", "zzz"))
