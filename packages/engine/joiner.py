"""
Joining triples into hextuples, using partition keys to skip most pairs.

Steps:
  1) Bucket the triples of one answer by partition key (<= 1,024 buckets).
  2) Walk unordered bucket pairs (k1, k2). If k1 & k2 != 0 every triple in
     one bucket shares a partition letter with every triple in the other,
     so the whole pair of buckets is skipped without a single mask test.
     A bucket pairs with itself only when its key is 0.
  3) For surviving bucket pairs, compare combined masks block by block.

Ordering rule: (t1, t2) is emitted only when max(t1) < min(t2). An ascending
hextuple h0 < ... < h5 has exactly one split meeting that rule,
(h0 h1 h2 | h3 h4 h5), and both halves are disjoint triples of the same pool,
so every hextuple comes out exactly once, already sorted. The rule also
rules out t1 == t2 and the mirrored (t2, t1).
"""

from __future__ import annotations

from typing import Dict, List, Set

import numpy as np

from .packing import Solution
from .triples import TripleSet

# Upper bound on the boolean block built per comparison step (~4 MB).
BLOCK_ELEMENTS = 1 << 22


def bucket_by_key(triples: TripleSet) -> Dict[int, np.ndarray]:
    """Partition key -> positions of the triples carrying it."""
    if not len(triples):
        return {}
    order = np.argsort(triples.keys, kind="stable")
    sorted_keys = triples.keys[order]
    uniq, starts = np.unique(sorted_keys, return_index=True)
    bounds = starts.tolist()[1:] + [int(order.size)]
    return {int(k): order[s:e] for k, s, e in zip(uniq.tolist(), starts.tolist(), bounds)}


def _compare(triples: TripleSet, left: np.ndarray, right: np.ndarray,
             both_ways: bool, out: List[np.ndarray]) -> None:
    masks = triples.masks
    first = triples.members[:, 0]
    last = triples.members[:, -1]

    r_mask = masks[right][None, :]
    r_first = first[right][None, :]
    r_last = last[right][None, :]
    rows = max(1, BLOCK_ELEMENTS // max(1, right.size))

    for start in range(0, left.size, rows):
        blk = left[start:start + rows]
        ok = (masks[blk][:, None] & r_mask) == 0
        if not ok.any():
            continue
        fwd = np.nonzero(ok & (last[blk][:, None] < r_first))
        if fwd[0].size:
            out.append(np.hstack([triples.members[blk[fwd[0]]], triples.members[right[fwd[1]]]]))
        if both_ways:
            bwd = np.nonzero(ok & (r_last < first[blk][:, None]))
            if bwd[0].size:
                out.append(np.hstack([triples.members[right[bwd[1]]], triples.members[blk[bwd[0]]]]))


def join_triples(triples: TripleSet) -> np.ndarray:
    """
    All hextuples formed by two disjoint triples of the same answer.

    Returns:
      (H, 6) uint32 array; each row ascending, no row repeated.
    """
    width = 2 * triples.members.shape[1]
    buckets = bucket_by_key(triples)
    keys = sorted(buckets)
    found: List[np.ndarray] = []

    for i, k1 in enumerate(keys):
        for k2 in keys[i:]:
            if k1 & k2:
                continue
            if k1 == k2:
                # only reachable for k1 == k2 == 0
                _compare(triples, buckets[k1], buckets[k2], False, found)
            else:
                _compare(triples, buckets[k1], buckets[k2], True, found)

    if not found:
        return np.empty((0, width), dtype=np.uint32)
    return np.concatenate(found).astype(np.uint32, copy=False)


def pack_hextuples(answer: int, triples: TripleSet) -> Set[Solution]:
    """Join the triples of `answer` and wrap each hextuple as a Solution."""
    return {Solution(answer, tuple(row)) for row in join_triples(triples).tolist()}
