# apps/cli/run.py
"""
CLI entry point for finding optimally bad Wordle games.

This script:
  1) Validates the wordlists (prints counts + SHA + distinct lettersets).
  2) Builds the letterset index and the partition keyer.
  3) Packs every answer (one answer + six letter-disjoint guesses) on a
     worker pool with a live progress indicator.
  4) Realizes the packings into words and streams them to disk:
       - CSV or JSONL: one row per word-level solution
       - JSON: manifest with config, wordlist hashes, counts, git commit, etc.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Iterable, Iterator, List, Set

from tqdm import tqdm

from packages.datasets import validate_wordlists, pretty_summary, load_words, write_lines
from packages.engine import InvalidWord, Solution, build_index, check_word, letterset
from packages.engine.realizer import count_realizations
from packages.harness import build_keyer, iter_packings, realize_all
from packages.harness.core import resolve_workers
from packages.harness.io import (
    OUTPUT_FORMATS, write_solutions, write_manifest, timestamp_id, git_commit_or_unknown,
)


def _progress(items: Iterable, *, total: int, desc: str, unit: str, mode: str) -> Iterator:
    """
    Wrap `items` with the chosen progress display (bar, plain, or off).
    """
    if mode == "bar":
        yield from tqdm(items, total=total, ncols=80, desc=desc, unit=unit)
        return
    if mode == "off":
        yield from items
        return

    start = time.time()
    last_print = 0.0
    idx = 0
    for idx, item in enumerate(items, 1):
        yield item
        now = time.time()
        if (now - last_print >= 1.0) or (idx == total):
            elapsed = now - start
            rate = (idx / elapsed) if elapsed > 0 else 0.0
            remaining = (total - idx) / rate if rate > 0 else 0.0
            pct = 100.0 * idx / max(1, total)
            sys.stderr.write(
                f"\r[{desc}] {idx}/{total} {pct:5.1f}% | elapsed {elapsed:6.1f}s | ETA {remaining:5.1f}s"
            )
            sys.stderr.flush()
            last_print = now
    if idx:
        sys.stderr.write("\n"); sys.stderr.flush()


def _select_answers(index, only: List[str] | None, sample: int | None) -> List[int]:
    """
    Answer lettersets to pack: the --only words (must be answers), else all,
    optionally cut to the first K (in canonical order).
    """
    if only:
        picked = []
        for tok in only:
            try:
                mask = letterset(check_word(tok, index.N))
            except InvalidWord as e:
                raise SystemExit(str(e))
            if mask not in index.answer_words:
                raise SystemExit(f"--only word {tok!r} is not in the answers list")
            if mask not in picked:
                picked.append(mask)
        todo = sorted(picked)
    else:
        todo = list(index.answers)
    if sample is not None:
        todo = todo[:sample]
    return todo


def main(argv: List[str] | None = None):
    """
    Parse CLI args, validate datasets, pack and realize with progress, and write outputs.
    """
    ap = argparse.ArgumentParser(description="wrong-wordle: find every optimally bad Wordle game")
    ap.add_argument("--N", type=int, default=5, help="word length (5 for Wordle)")
    ap.add_argument("--answers", default="packages/datasets/data/answers_5.txt",
                    help="path to answers list")
    ap.add_argument("--guesses", default="packages/datasets/data/guesses_5.txt",
                    help="path to guesses list")
    ap.add_argument("--on-invalid", choices=["reject", "skip"], default="reject",
                    help="what to do with malformed words: abort the run or skip them")
    ap.add_argument("--partition-letters",
                    help="override the partition letters (default: 10 most frequent guess letters)")
    ap.add_argument("--only", nargs="+", metavar="WORD",
                    help="pack only these answers (e.g. civic pinch zesty)")
    ap.add_argument("--sample", type=int,
                    help="pack only the first K answer lettersets (quick experiments)")
    ap.add_argument("--workers", type=int, help="worker processes (default: CPU count)")
    ap.add_argument("--format", choices=list(OUTPUT_FORMATS), default="csv",
                    help="output format for word-level solutions")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument(
        "--progress",
        choices=["auto", "bar", "plain", "off"],
        default="auto",
        help="Show run progress (auto=bar on a terminal, else plain text)."
    )
    args = ap.parse_args(argv)

    # 1) Validate wordlists and print a one-liner summary (counts, SHAs, lettersets)
    rep = validate_wordlists(args.N, args.answers, args.guesses)
    print(pretty_summary(rep))
    for issue in rep["issues"]:
        print(f"  - {issue}")

    # 2) Load lists and build the letterset index (the only place words can be rejected)
    answers = load_words(args.answers)
    guesses = load_words(args.guesses)
    try:
        index = build_index(answers, guesses, N=args.N, on_invalid=args.on_invalid)
    except InvalidWord as e:
        raise SystemExit(f"{e} (use --on-invalid skip to drop such words)")
    if index.skipped:
        print(f"Skipped {len(index.skipped)} invalid word(s), e.g. {list(index.skipped[:5])}")
    print(f"Lettersets: answers={len(index.answers)} guesses={len(index.guesses)}")
    if index.is_empty:
        print("A vocabulary is empty after ingestion; there are no solutions to find.")

    try:
        keyer = build_keyer(index, args.partition_letters)
    except ValueError as e:
        raise SystemExit(f"--partition-letters: {e}")
    print(f"Partition letters: {keyer.letters!r}")

    todo = _select_answers(index, args.only, args.sample)

    mode = args.progress
    if mode == "auto":
        mode = "bar" if sys.stderr.isatty() else "plain"
    workers = resolve_workers(args.workers)

    # 3) Pack every answer on the worker pool
    start = time.time()
    packings: Set[Solution] = set()
    stream = iter_packings(index, keyer, workers=workers, answers=todo)
    for _, found in _progress(stream, total=len(todo), desc="Packing", unit="answer", mode=mode):
        packings |= found
    pack_s = time.time() - start
    print(f"Found {len(packings)} packing(s) over {len(todo)} answer letterset(s) in {pack_s:.1f}s")
    if packings:
        print(f"First packing: {min(packings).describe()}")

    # 4) Realize into words, streaming straight to the output file
    run_id = timestamp_id()
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    out_path = outdir / f"solutions_{run_id}.{args.format}"
    manifest_path = outdir / f"solutions_{run_id}_manifest.json"
    skipped_path = None
    if index.skipped:
        skipped_path = write_lines(index.skipped, outdir / f"solutions_{run_id}_skipped.txt")

    expected = sum(count_realizations(s, index) for s in packings)
    words = realize_all(packings, index, workers=workers)
    n_solutions = write_solutions(
        _progress(words, total=expected, desc="Realizing", unit="solution", mode=mode),
        str(out_path), args.format,
    )

    manifest = {
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": vars(args),
        "wordlists": rep,
        "partition_letters": keyer.letters,
        "lettersets": {"answers": len(index.answers), "guesses": len(index.guesses)},
        "skipped_words": list(index.skipped),
        "skipped_path": skipped_path,
        "answers_packed": len(todo),
        "packings": len(packings),
        "solutions": n_solutions,
        "pack_seconds": round(pack_s, 3),
    }
    write_manifest(manifest, str(manifest_path))

    print(f"Wrote: {out_path}")
    print(f"Wrote: {manifest_path}")
    if skipped_path:
        print(f"Wrote: {skipped_path}")
    print(f"There are {n_solutions} (optimally bad) wordle solutions.")
    return n_solutions


if __name__ == "__main__":
    main()
