"""
Solution records.

Solution      : letterset level, (answer, 6 ascending guess lettersets)
WordSolution  : word level, (answer word, 6 guess words sorted alphabetically)

Both are frozen and ordered, so sets/sorting depend only on membership and
never on the order in which a worker happened to find them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .letterset import Letterset, is_disjoint_packing, letters_of

GUESSES_PER_SOLUTION = 6


@dataclass(frozen=True, order=True)
class Solution:
    answer: Letterset
    guesses: Tuple[Letterset, ...]

    def __post_init__(self):
        g = tuple(int(x) for x in self.guesses)
        if len(g) != GUESSES_PER_SOLUTION:
            raise ValueError(f"a solution has {GUESSES_PER_SOLUTION} guesses; got {len(g)}")
        object.__setattr__(self, "answer", int(self.answer))
        object.__setattr__(self, "guesses", tuple(sorted(g)))

    @property
    def masks(self) -> Tuple[Letterset, ...]:
        return (self.answer,) + self.guesses

    def is_valid(self) -> bool:
        """All 21 pairwise intersections empty and no repeated letterset."""
        return len(set(self.guesses)) == len(self.guesses) and is_disjoint_packing(self.masks)

    def describe(self) -> str:
        # e.g. "ab | cd ef gh ij kl mn"
        return letters_of(self.answer) + " | " + " ".join(letters_of(g) for g in self.guesses)


@dataclass(frozen=True, order=True)
class WordSolution:
    answer: str
    guesses: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "guesses", tuple(sorted(self.guesses)))

    def as_row(self) -> Tuple[str, ...]:
        return (self.answer,) + self.guesses

    def as_dict(self) -> Dict:
        return {"answer": self.answer, "guesses": list(self.guesses)}
