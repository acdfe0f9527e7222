"""
Triple enumeration: all mutually disjoint 3-combinations of a candidate pool.

Algorithm (depth-first with pruning):
  - candidates are in ascending mask order; combinations are taken as
    g1 < g2 < g3 by position, so each combination is visited once
  - after choosing a candidate, the rest of the pool is filtered against the
    running combined mask; anything sharing a letter is dropped before the
    next depth ever sees it
  - at the last depth every survivor completes a triple, so the whole
    surviving pool is emitted in one vectorized step

Each triple carries its combined mask (OR of members) and its partition key
(OR of the members' keys, accumulated as the recursion descends).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

TRIPLE_SIZE = 3


@dataclass(frozen=True)
class TripleSet:
    """Column-wise store of triples, rows in lexicographic member order."""
    members: np.ndarray  # (T, 3) uint32, each row ascending
    masks: np.ndarray    # (T,) uint32
    keys: np.ndarray     # (T,) uint16

    def __len__(self) -> int:
        return int(self.masks.shape[0])

    @classmethod
    def empty(cls, size: int = TRIPLE_SIZE) -> "TripleSet":
        return cls(
            members=np.empty((0, size), dtype=np.uint32),
            masks=np.empty(0, dtype=np.uint32),
            keys=np.empty(0, dtype=np.uint16),
        )


# (prefix positions, completing positions, combined masks, keys)
_Chunk = Tuple[Tuple[int, ...], np.ndarray, np.ndarray, np.ndarray]


def _descend(cands: np.ndarray, keys: np.ndarray, pool: np.ndarray,
             mask: int, key: int, prefix: Tuple[int, ...], remaining: int,
             out: List[_Chunk]) -> None:
    # Every position in `pool` is already disjoint from `mask`
    if remaining == 1:
        if pool.size:
            out.append((prefix, pool, cands[pool] | np.uint32(mask), keys[pool] | np.uint16(key)))
        return
    for pos in range(pool.size - remaining + 1):
        idx = int(pool[pos])
        m = mask | int(cands[idx])
        rest = pool[pos + 1:]
        rest = rest[(cands[rest] & np.uint32(m)) == 0]
        if rest.size >= remaining - 1:
            _descend(cands, keys, rest, m, key | int(keys[idx]), prefix + (idx,),
                     remaining - 1, out)


def enumerate_triples(candidates, keys, size: int = TRIPLE_SIZE) -> TripleSet:
    """
    Enumerate all `size`-combinations of pairwise-disjoint candidates.

    Args:
      candidates : ascending uint32 letterset array (e.g. C(a) from the filter)
      keys       : partition key per candidate (same length)
      size       : combination size; 3 for the packing pipeline

    Returns:
      TripleSet with rows in lexicographic order.
    """
    cands = np.asarray(candidates, dtype=np.uint32)
    keys = np.asarray(keys, dtype=np.uint16)
    if cands.shape != keys.shape:
        raise ValueError(f"candidates and keys differ in shape: {cands.shape} vs {keys.shape}")
    if size < 1 or cands.size < size:
        return TripleSet.empty(size)

    chunks: List[_Chunk] = []
    _descend(cands, keys, np.arange(cands.size), 0, 0, (), size, chunks)
    if not chunks:
        return TripleSet.empty(size)

    members = np.concatenate([
        np.column_stack(
            [np.full(last.size, cands[p], dtype=np.uint32) for p in prefix] + [cands[last]]
        )
        for prefix, last, _, _ in chunks
    ])
    return TripleSet(
        members=members,
        masks=np.concatenate([m for _, _, m, _ in chunks]),
        keys=np.concatenate([k for _, _, _, k in chunks]),
    )
