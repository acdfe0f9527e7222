"""
Packing harness core primitives.

- pack_for_answer: run the per-answer pipeline (filter -> triples -> join).
- iter_packings:   fan answers out over a worker pool, yield as each finishes.
- pack_all:        merge every answer's solutions into one set.
- realize_all:     second parallel pass, streaming word-level solutions.
- solve:           words in, (index, solutions) out.

The shared inputs (guess lettersets and their partition keys, or the index
for realization) are immutable and handed to each worker once through the
pool initializer; tasks carry only an answer letterset or a solution.
These functions are UI-agnostic: progress display is the caller's job.
"""

from __future__ import annotations

import multiprocessing as mp
import os
from typing import Dict, Iterable, Iterator, Sequence, Set, Tuple

import numpy as np

from packages.engine import (
    LettersetIndex,
    PartitionKeyer,
    Solution,
    WordSolution,
    build_index,
    enumerate_triples,
    filter_candidates,
    pack_hextuples,
    realize,
)

# Per-process read-only state, filled by the pool initializers.
_WORKER_STATE: Dict = {}


def resolve_workers(workers: int | None) -> int:
    """None -> one worker per CPU; anything else is clamped to >= 1."""
    if workers is None:
        return os.cpu_count() or 1
    return max(1, int(workers))


def _pool_context():
    start_methods = mp.get_all_start_methods()
    return mp.get_context("fork" if "fork" in start_methods else "spawn")


def build_keyer(index: LettersetIndex, letters: str | None = None) -> PartitionKeyer:
    """Keyer from explicit letters, or from letter frequency over the guess words."""
    if letters:
        return PartitionKeyer.from_letters(letters)
    return PartitionKeyer.from_words(w for ws in index.guess_words.values() for w in ws)


def pack_for_answer(answer: int, guesses, guess_keys) -> Set[Solution]:
    """
    All letterset-level solutions for one answer.

    Args:
      answer     : answer letterset
      guesses    : ascending guess lettersets (uint32 array or sequence)
      guess_keys : partition key of each guess (same length)
    """
    candidates, pos = filter_candidates(guesses, answer, return_index=True)
    triples = enumerate_triples(candidates, np.asarray(guess_keys, dtype=np.uint16)[pos])
    return pack_hextuples(answer, triples)


def _init_pack_worker(guesses: np.ndarray, guess_keys: np.ndarray) -> None:
    _WORKER_STATE["guesses"] = guesses
    _WORKER_STATE["guess_keys"] = guess_keys


def _pack_worker(answer: int) -> Tuple[int, Set[Solution]]:
    return answer, pack_for_answer(answer, _WORKER_STATE["guesses"], _WORKER_STATE["guess_keys"])


def iter_packings(
        index: LettersetIndex,
        keyer: PartitionKeyer,
        *,
        workers: int | None = None,
        answers: Sequence[int] | None = None,
) -> Iterator[Tuple[int, Set[Solution]]]:
    """
    Yield (answer, solutions) for each answer letterset, in completion order.

    Args:
      index   : the shared letterset index
      keyer   : partition keyer (built once per run)
      workers : pool size; None = CPU count, 1 = in-process, no pool
      answers : restrict to these answer lettersets (default: all)
    """
    guesses = np.asarray(index.guesses, dtype=np.uint32)
    guess_keys = keyer.keys(guesses)
    todo = list(index.answers if answers is None else answers)

    n = min(resolve_workers(workers), len(todo))
    if n <= 1:
        for answer in todo:
            yield answer, pack_for_answer(answer, guesses, guess_keys)
        return

    ctx = _pool_context()
    with ctx.Pool(processes=n, initializer=_init_pack_worker,
                  initargs=(guesses, guess_keys)) as pool:
        yield from pool.imap_unordered(_pack_worker, todo, chunksize=1)


def pack_all(
        index: LettersetIndex,
        keyer: PartitionKeyer,
        *,
        workers: int | None = None,
        answers: Sequence[int] | None = None,
) -> Set[Solution]:
    """Union of every answer's solutions (merge order is irrelevant)."""
    out: Set[Solution] = set()
    for _, solutions in iter_packings(index, keyer, workers=workers, answers=answers):
        out |= solutions
    return out


def _init_realize_worker(index: LettersetIndex) -> None:
    _WORKER_STATE["index"] = index


def _realize_worker(solution: Solution):
    return list(realize(solution, _WORKER_STATE["index"]))


def realize_all(
        solutions: Iterable[Solution],
        index: LettersetIndex,
        *,
        workers: int | None = None,
        chunksize: int = 64,
) -> Iterator[WordSolution]:
    """
    Stream the word-level solutions of every letterset-level solution.

    Solutions are processed in sorted order and results come back in that
    order, so the stream is identical from run to run. Work is handed to the
    pool one window of `workers * chunksize` solutions at a time and the next
    window is only submitted once the consumer has drained the current one,
    so at most one window of realizations is buffered ahead of the caller.
    """
    ordered = sorted(solutions)
    n = min(resolve_workers(workers), len(ordered))
    if n <= 1:
        for s in ordered:
            yield from realize(s, index)
        return

    chunksize = max(1, int(chunksize))
    window = n * chunksize
    ctx = _pool_context()
    with ctx.Pool(processes=n, initializer=_init_realize_worker, initargs=(index,)) as pool:
        for start in range(0, len(ordered), window):
            for batch in pool.imap(_realize_worker, ordered[start:start + window], chunksize=chunksize):
                yield from batch


def solve(
        answer_words: Iterable[str],
        guess_words: Iterable[str],
        *,
        N: int | None = None,
        on_invalid: str = "reject",
        partition_letters: str | None = None,
        workers: int | None = None,
) -> Tuple[LettersetIndex, Set[Solution]]:
    """
    Words in, letterset-level solutions out.

    Realize them with realize_all(solutions, index) when words are needed.
    """
    index = build_index(answer_words, guess_words, N=N, on_invalid=on_invalid)
    if index.is_empty:
        return index, set()
    keyer = build_keyer(index, partition_letters)
    return index, pack_all(index, keyer, workers=workers)
