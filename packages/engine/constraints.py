"""
Candidate filtering for one answer.

Given:
  - the guess lettersets (ascending, as built by the LettersetIndex)
  - one answer letterset a

Return:
  - C(a) = { g : g & a == 0 }, the guesses that share no letter with a.

This is the first and cheapest cut: every later stage only ever sees C(a),
which for most answers is a small fraction of the guess pool.
"""

from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np

from .letterset import Letterset


def as_mask_array(masks: Union[Sequence[Letterset], np.ndarray]) -> np.ndarray:
    return np.asarray(masks, dtype=np.uint32)


def filter_candidates(
        guesses: Union[Sequence[Letterset], np.ndarray],
        answer: Letterset,
        *,
        return_index: bool = False,
) -> Union[np.ndarray, Tuple[np.ndarray, np.ndarray]]:
    """
    Keep only guesses letter-disjoint from `answer` (order preserved).

    Args:
      guesses      : guess lettersets
      answer       : answer letterset
      return_index : also return the positions kept, so per-guess arrays
                     (e.g. partition keys) can be sliced alongside

    Returns:
      uint32 array of candidates, or (candidates, positions)
    """
    g = as_mask_array(guesses)
    keep = np.flatnonzero((g & np.uint32(answer)) == 0)
    if return_index:
        return g[keep], keep
    return g[keep]
