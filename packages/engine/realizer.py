"""
Realizing letterset-level solutions into words.

A solution (a, g1..g6) stands for every choice of one word per letterset:

  a  = {a,e,l,s,t} -> ["least", "slate"]
  g1 = {b,i,k,l,n} -> ["blink"]
  g2 = {c,o,r,u,y} -> ["corny", "court", "curvy"]
  ...

so it realizes to the Cartesian product of the seven word lists
(2 x 1 x 3 x ... words). Solutions are independent of each other, so the
orchestrator can hand them to any number of workers.
"""

from __future__ import annotations

from itertools import product
from math import prod
from typing import Iterator

from .letterset import LettersetIndex
from .packing import Solution, WordSolution


def realize(solution: Solution, index: LettersetIndex) -> Iterator[WordSolution]:
    """
    Yield every word-level solution of `solution`.

    Raises KeyError if a letterset is not in the index, which cannot happen
    for solutions computed from that same index.
    """
    slots = [index.words_for_answer(solution.answer)]
    slots += [index.words_for_guess(g) for g in solution.guesses]
    for answer, *guesses in product(*slots):
        yield WordSolution(answer, tuple(guesses))


def count_realizations(solution: Solution, index: LettersetIndex) -> int:
    """Number of word-level solutions `realize` would yield, without expanding."""
    return len(index.words_for_answer(solution.answer)) * prod(
        len(index.words_for_guess(g)) for g in solution.guesses
    )
