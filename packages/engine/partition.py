"""
Partition keys: a small filter derived from the most frequent letters.

Pick the PARTITION_SIZE letters that occur in the most guess words (for the
standard Wordle list: "seaoriltnu"). For a mask m, key(m) has bit i set iff
letters[i] is in m, so keys fit in 10 bits (1,024 buckets).

Soundness:
  key(a) & key(b) != 0  =>  a & b != 0   (they share that literal letter)

The converse does not hold: two masks with disjoint keys can still overlap on
a letter outside the partition, so the key only narrows which pairs need the
full mask comparison. It never replaces it.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from .letterset import ALPHABET, Letterset, letterset

PARTITION_SIZE = 10
# Keys are stored as uint16
MAX_PARTITION_SIZE = 16


def letter_frequencies(words: Iterable[str]) -> Counter:
    """Number of words containing each letter (a word counts a letter once)."""
    counts: Counter = Counter()
    for w in words:
        counts.update(set(w))
    return counts


@dataclass(frozen=True)
class PartitionKeyer:
    letters: str
    mask: Letterset
    bits: Tuple[int, ...]

    @classmethod
    def from_letters(cls, letters: str) -> "PartitionKeyer":
        letters = letters.strip().lower()
        if len(set(letters)) != len(letters) or any(ch not in ALPHABET for ch in letters):
            raise ValueError(f"partition letters must be distinct a-z letters; got {letters!r}")
        if len(letters) > MAX_PARTITION_SIZE:
            raise ValueError(
                f"at most {MAX_PARTITION_SIZE} partition letters fit a key; got {len(letters)}"
            )
        return cls(
            letters=letters,
            mask=letterset(letters),
            bits=tuple(ord(ch) - 97 for ch in letters),
        )

    @classmethod
    def from_words(cls, words: Iterable[str], size: int = PARTITION_SIZE) -> "PartitionKeyer":
        """
        Keyer over the `size` letters present in the most words. Ties are broken
        alphabetically so the same vocabulary always gives the same keyer.
        """
        counts = letter_frequencies(words)
        ranked = sorted(counts, key=lambda ch: (-counts[ch], ch))
        return cls.from_letters("".join(ranked[:size]))

    @property
    def size(self) -> int:
        return len(self.bits)

    def key(self, mask: Letterset) -> int:
        k = 0
        for i, bit in enumerate(self.bits):
            if mask >> bit & 1:
                k |= 1 << i
        return k

    def keys(self, masks) -> np.ndarray:
        """Vectorized key() over an array of masks (uint16 result)."""
        masks = np.asarray(masks, dtype=np.uint32)
        out = np.zeros(masks.shape, dtype=np.uint16)
        for i, bit in enumerate(self.bits):
            out |= (((masks >> bit) & 1) << i).astype(np.uint16)
        return out
