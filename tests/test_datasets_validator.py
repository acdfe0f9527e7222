from pathlib import Path

import pytest

from packages.datasets import validate_wordlists, pretty_summary, load_words, write_lines


def _write(p: Path, lines):
    assert write_lines(lines, p) == str(p)


def test_validate_wordlists_happy_path(tmp_path: Path):
    # N=5; all lowercase alpha; guesses need not contain the answers
    ans = tmp_path / "answers_5.txt"
    gue = tmp_path / "guesses_5.txt"
    _write(ans, ["slate", "least", "crane"])
    _write(gue, ["brick", "jumpy", "vozhd", "fight"])

    rep = validate_wordlists(5, str(ans), str(gue))
    assert rep["passed"] is True
    assert rep["answers"]["count"] == 3
    assert rep["answers"]["lettersets"] == 2  # slate/least collapse
    assert rep["overlap"] == 0
    s = pretty_summary(rep)
    assert "N=5" in s and "sets=2" in s and s.endswith("OK")


def test_validate_wordlists_flags_errors(tmp_path: Path):
    # N mismatch and invalid chars should be flagged
    ans = tmp_path / "answers_6.txt"
    gue = tmp_path / "guesses_6.txt"
    # 'crane' (len 5) invalid for N=6, '???' invalid chars, 'raiser' is fine
    ans.write_text("raiser\ncrane\n???\n", encoding="utf-8")
    gue.write_text("planet\nplanet\nPALATE\n", encoding="utf-8")

    rep = validate_wordlists(6, str(ans), str(gue))
    assert rep["passed"] is False
    assert rep["answers"]["invalid_lines"] == 2
    assert rep["guesses"]["invalid_lines"] == 1  # uppercase is not clean
    assert any("duplicate" in msg for msg in rep["issues"])
    assert pretty_summary(rep).endswith("FAIL")


def test_validate_wordlists_missing_file(tmp_path: Path):
    ans = tmp_path / "answers_5.txt"
    _write(ans, ["crane"])

    rep = validate_wordlists(5, str(ans), str(tmp_path / "nope.txt"))
    assert rep["passed"] is False
    assert any("not found" in msg for msg in rep["issues"])


def test_load_words_drops_blanks(tmp_path: Path):
    p = tmp_path / "words.txt"
    p.write_text("crane\n\n  Slate \r\n", encoding="utf-8")
    assert load_words(p) == ["crane", "Slate"]
    with pytest.raises(FileNotFoundError):
        load_words(tmp_path / "missing.txt")
