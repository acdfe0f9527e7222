"""
Dataset validator for wrong-wordle.

What this module does:
- Validate a pair of word lists: answers_N.txt (answer pool) and guesses_N.txt
  (guess pool). The two are independent: the standard guess list does NOT
  contain the answers, so no subset relation is required.
- Enforce formatting rules (lowercase, a–z only, exact length N, one per line).
- Detect duplicates and invalid lines; count distinct lettersets (the number
  of nodes the packer actually works on); compute SHA-256 of the raw files.
- Return a machine-readable dict (for manifests) and provide a pretty one-line summary.

Typical use:
    from packages.datasets import validate_wordlists, pretty_summary
    rep = validate_wordlists(5, "packages/datasets/data/answers_5.txt",
                                "packages/datasets/data/guesses_5.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Tuple
import hashlib

from packages.engine.letterset import letterset
from packages.engine.validation import is_valid_word


# -----------------------------
# Dataclasses for structured reports
# -----------------------------

@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str            # file path (as given)
    exists: bool         # did the file exist on disk?
    count: int           # number of VALID words after cleaning
    sha256: str          # SHA-256 of raw file bytes (empty string if missing)
    unique_count: int    # unique valid words (after dedupe)
    invalid_lines: int   # number of invalid lines encountered
    lettersets: int      # distinct lettersets among the valid words


@dataclass
class ValidationReport:
    """Top-level validation result for the (answers, guesses) pair."""
    N: int
    answers: FileReport
    guesses: FileReport
    overlap: int         # words present in both lists
    passed: bool
    issues: List[str]    # human-friendly list of problems (if any)


# -----------------------------
# Helpers
# -----------------------------

def _sha256_file(path: Path) -> str:
    """Compute SHA-256 of a file's raw bytes."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _load_and_check(path: Path, N: int) -> Tuple[List[str], int]:
    """
    Load words from a text file and validate them.

    Rules:
      - one token per line
      - must be lowercase a–z
      - must have exact length N
      - blank lines are ignored (trailing newlines are common)

    Returns:
      (valid_words, invalid_count)
    """
    valid: List[str] = []
    invalid = 0

    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            w = raw.strip()
            if not w:
                continue
            # require already-lowercase & a–z & exact length
            if w == w.lower() and is_valid_word(w, N):
                valid.append(w)
            else:
                invalid += 1

    return valid, invalid


def _file_report(path: Path, words: List[str], invalid: int) -> FileReport:
    return FileReport(
        path=str(path),
        exists=True,
        count=len(words),
        sha256=_sha256_file(path),
        unique_count=len(set(words)),
        invalid_lines=invalid,
        lettersets=len({letterset(w) for w in words}),
    )


def _as_dict(rep: ValidationReport) -> Dict:
    """Dataclass → plain dict (stable ordering)."""
    return asdict(rep)


# -----------------------------
# Public API
# -----------------------------

def validate_wordlists(N: int, answers_path: str, guesses_path: str) -> Dict:
    """
    Validate the answers/guesses word lists for length N.

    Parameters
    ----------
    N : int
        Word length (5 for Wordle).
    answers_path : str
        Path to the answers file (one word per line).
    guesses_path : str
        Path to the guesses file (one word per line).

    Returns
    -------
    Dict
        A JSON-serializable dictionary (see ValidationReport schema) with:
          - counts, distinct lettersets, SHA-256, duplicate/invalid flags
          - overlap between the two lists
          - `passed` boolean (strict: both files exist, non-empty, no invalids)
          - `issues` (list of strings) to surface any problems
    """
    issues: List[str] = []

    ans_p = Path(answers_path)
    gue_p = Path(guesses_path)

    ans_exists = ans_p.exists()
    gue_exists = gue_p.exists()

    # Early return if either file is missing
    if not ans_exists or not gue_exists:
        if not ans_exists:
            issues.append(f"answers file not found: {answers_path}")
        if not gue_exists:
            issues.append(f"guesses file not found: {guesses_path}")
        rep = ValidationReport(
            N=N,
            answers=FileReport(answers_path, ans_exists, 0, "", 0, 0, 0),
            guesses=FileReport(guesses_path, gue_exists, 0, "", 0, 0, 0),
            overlap=0,
            passed=False,
            issues=issues,
        )
        return _as_dict(rep)

    answers, ans_invalid = _load_and_check(ans_p, N)
    guesses, gue_invalid = _load_and_check(gue_p, N)

    ans_report = _file_report(ans_p, answers, ans_invalid)
    gue_report = _file_report(gue_p, guesses, gue_invalid)
    overlap = len(set(answers) & set(guesses))

    # Empty-file guardrails: not fatal for a run (zero solutions), but worth flagging
    if ans_report.count == 0:
        issues.append("answers file contains 0 valid words")
    if gue_report.count == 0:
        issues.append("guesses file contains 0 valid words")

    # Invalid-line diagnostics
    if ans_invalid:
        issues.append(f"answers has {ans_invalid} invalid line(s)")
    if gue_invalid:
        issues.append(f"guesses has {gue_invalid} invalid line(s)")

    # Duplicate diagnostics (count vs unique_count mismatch)
    if ans_report.count != ans_report.unique_count:
        issues.append("answers contains duplicate lines")
    if gue_report.count != gue_report.unique_count:
        issues.append("guesses contains duplicate lines")

    passed = (
            ans_invalid == 0
            and gue_invalid == 0
            and ans_report.count > 0
            and gue_report.count > 0
    )

    rep = ValidationReport(
        N=N,
        answers=ans_report,
        guesses=gue_report,
        overlap=overlap,
        passed=passed,
        issues=issues,
    )
    return _as_dict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Produce a compact, human-friendly one-liner for console/docs.

    Example:
        N=5 | answers=2315 (uniq=2315, sets=1990, sha=abc123...) | guesses=10657 (uniq=10657, sets=7905, sha=def456...) | overlap=0 | OK
    """
    N = report["N"]
    a = report["answers"]
    b = report["guesses"]
    status = "OK" if report["passed"] else "FAIL"
    # abbreviate sha to 12 chars for readability
    a_sha = (a.get("sha256") or "")[:12]
    b_sha = (b.get("sha256") or "")[:12]
    return (
        f"N={N} | answers={a['count']} (uniq={a['unique_count']}, sets={a['lettersets']}, sha={a_sha}) "
        f"| guesses={b['count']} (uniq={b['unique_count']}, sets={b['lettersets']}, sha={b_sha}) "
        f"| overlap={report['overlap']} | {status}"
    )
