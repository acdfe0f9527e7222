from itertools import combinations

import numpy as np
import pytest

from packages.engine import (
    InvalidWord, PartitionKeyer, Solution, build_index, bucket_by_key, check_word,
    enumerate_triples, filter_candidates, is_disjoint_packing, is_valid_word, join_triples,
    letters_of, letterset, pack_hextuples,
)
from packages.engine.letterset import (
    ALPHABET, FULL_MASK, disjoint, infer_length,
)

# Small N=3 vocabulary: eight pairwise-disjoint guesses plus overlapping noise
GUESSES = [
    "bcd", "efg", "hij", "klm", "nop", "qrs", "tuv", "wxy",
    "bek", "cfl", "dgo", "hnq", "irt", "jsw", "mux", "pvy", "bhe", "dcb",
]
ANSWERS = ["azz", "aei", "zap", "lab"]


def _index():
    return build_index(ANSWERS, GUESSES)


def _brute_combos(cands, size):
    return {c for c in combinations(sorted(cands), size) if is_disjoint_packing(c)}


# --- lettersets ---

@pytest.mark.parametrize("word,letters", [
    ("abc", "abc"),
    ("slate", "aelst"),
    ("sassy", "asy"),
    ("zzz", "z"),
])
def test_letterset_distinct_letters(word, letters):
    assert letters_of(letterset(word)) == letters
    assert bin(letterset(word)).count("1") == len(letters)


def test_letterset_anagrams_collapse():
    assert letterset("slate") == letterset("least") == letterset("tales")
    assert letterset("brick") & letterset("jumpy") == 0
    assert letterset("hello") & letterset("world") == letterset("lo")
    assert letterset(ALPHABET) == FULL_MASK


def test_letterset_set_operations():
    hello, world = letterset("hello"), letterset("world")
    assert not disjoint(hello, world)
    assert disjoint(letterset("brick"), letterset("jumpy"))
    assert is_disjoint_packing([letterset("brick"), letterset("jumpy"), letterset("vozhd")])
    assert not is_disjoint_packing([letterset("brick"), letterset("jumpy"), letterset("fight")])


def test_check_word_normalizes_and_rejects():
    assert check_word(" Slate\n", 5) == "slate"
    assert is_valid_word("slate", 5) is True
    assert is_valid_word("slates", 5) is False
    assert is_valid_word("café", 4) is False
    for bad in ["sl4te", "", "ab-c", None]:
        with pytest.raises(InvalidWord):
            check_word(bad, 5)


# --- index ---

def test_build_index_dedupes_and_groups():
    idx = build_index(["slate", "least", "slate", "crane"], ["brick", "jumpy"])
    assert idx.N == 5
    assert idx.answers == tuple(sorted({letterset("slate"), letterset("crane")}))
    assert idx.answer_words[letterset("least")] == ("slate", "least")
    assert idx.guess_words[letterset("jumpy")] == ("jumpy",)
    assert not idx.is_empty


def test_build_index_invalid_word_policy():
    with pytest.raises(InvalidWord):
        build_index(["abc", "ab1"], ["def"])
    with pytest.raises(InvalidWord):
        build_index(["abc"], ["defg"])  # 3 vs 4 tie: the shorter length wins
    idx = build_index(["abc", "ab1"], ["defg", "def"], on_invalid="skip")
    assert idx.skipped == ("ab1", "defg")
    assert idx.guesses == (letterset("def"),)
    with pytest.raises(ValueError):
        build_index(["abc"], ["def"], on_invalid="ignore")


def test_build_index_infers_length_from_most_words():
    # a malformed-length first token must not fix N for the rest
    idx = build_index(["ab", "abc", "xyz"], ["def", "ghi"], on_invalid="skip")
    assert idx.N == 3
    assert idx.skipped == ("ab",)
    assert idx.answers == tuple(sorted({letterset("abc"), letterset("xyz")}))
    assert infer_length(["Slate", "crane", "ab1", "toolong"]) == 5
    assert infer_length(["", "a-b"]) is None


def test_build_index_empty_vocabulary_is_not_an_error():
    idx = build_index([], ["abc"])
    assert idx.is_empty and idx.answers == ()


# --- partition keys ---

def test_partition_keyer_picks_most_frequent_letters():
    keyer = PartitionKeyer.from_words(["abc", "abd", "abe", "xyz"], size=3)
    # a, b in 3 words; the rest tie at 1 and break alphabetically
    assert keyer.letters == "abc"
    assert keyer.key(letterset("cab")) == 0b111
    assert keyer.key(letterset("xyz")) == 0
    assert keyer.key(letterset("bxy")) == 0b010


def test_partition_keyer_vectorized_matches_scalar():
    keyer = PartitionKeyer.from_words(GUESSES)
    masks = sorted({letterset(w) for w in GUESSES})
    assert keyer.keys(masks).tolist() == [keyer.key(m) for m in masks]
    assert keyer.size == 10


def test_partition_key_overlap_implies_mask_overlap():
    keyer = PartitionKeyer.from_words(GUESSES)
    masks = sorted({letterset(w) for w in GUESSES + ANSWERS})
    for a, b in combinations(masks, 2):
        if keyer.key(a) & keyer.key(b):
            assert a & b, (letters_of(a), letters_of(b))


def test_partition_keyer_rejects_bad_letters():
    with pytest.raises(ValueError):
        PartitionKeyer.from_letters("aab")
    with pytest.raises(ValueError):
        PartitionKeyer.from_letters("ab1")
    with pytest.raises(ValueError):
        PartitionKeyer.from_letters(ALPHABET[:17])
    keyer = PartitionKeyer.from_letters(ALPHABET[:16])
    masks = [letterset("p"), letterset("ap"), letterset("qz")]
    assert keyer.keys(masks).tolist() == [keyer.key(m) for m in masks] == [1 << 15, 1 | 1 << 15, 0]


# --- filter ---

def test_filter_candidates_drops_shared_letters():
    idx = _index()
    a = letterset("aei")
    cands, pos = filter_candidates(idx.guesses, a, return_index=True)
    expected = [g for g in idx.guesses if g & a == 0]
    assert cands.tolist() == expected
    assert [idx.guesses[p] for p in pos.tolist()] == expected


def test_filter_candidates_empty_pool():
    assert filter_candidates([], letterset("abc")).size == 0


# --- triples ---

@pytest.mark.parametrize("answer", ANSWERS)
def test_enumerate_triples_matches_brute_force(answer):
    idx = _index()
    keyer = PartitionKeyer.from_words(GUESSES)
    cands = filter_candidates(idx.guesses, letterset(answer))
    triples = enumerate_triples(cands, keyer.keys(cands))

    got = [tuple(row) for row in triples.members.tolist()]
    assert len(got) == len(set(got))
    assert set(got) == _brute_combos(cands.tolist(), 3)
    assert got == sorted(got)  # lexicographic, members ascending
    for row, mask, key in zip(got, triples.masks.tolist(), triples.keys.tolist()):
        assert mask == row[0] | row[1] | row[2]
        assert key == keyer.key(mask)


def test_enumerate_triples_small_pools():
    assert len(enumerate_triples([], [])) == 0
    assert len(enumerate_triples([1, 2], [0, 0])) == 0
    assert len(enumerate_triples([1, 2, 3], [0, 0, 0])) == 0  # 1 & 3 overlap
    t = enumerate_triples([1, 2, 4], [0, 0, 0])
    assert t.members.tolist() == [[1, 2, 4]]
    with pytest.raises(ValueError):
        enumerate_triples([1, 2, 4], [0, 0])


# --- joiner ---

def test_bucket_by_key_covers_every_triple():
    idx = _index()
    keyer = PartitionKeyer.from_words(GUESSES)
    cands = filter_candidates(idx.guesses, letterset("azz"))
    triples = enumerate_triples(cands, keyer.keys(cands))
    buckets = bucket_by_key(triples)
    positions = np.sort(np.concatenate(list(buckets.values())))
    assert positions.tolist() == list(range(len(triples)))
    for k, pos in buckets.items():
        assert set(triples.keys[pos].tolist()) == {k}


@pytest.mark.parametrize("answer", ANSWERS)
def test_join_triples_matches_brute_force(answer):
    idx = _index()
    keyer = PartitionKeyer.from_words(GUESSES)
    a = letterset(answer)
    cands = filter_candidates(idx.guesses, a)
    rows = join_triples(enumerate_triples(cands, keyer.keys(cands))).tolist()

    got = [tuple(r) for r in rows]
    assert len(got) == len(set(got))  # no permutation duplicates
    assert all(list(r) == sorted(r) for r in got)
    assert set(got) == _brute_combos(cands.tolist(), 6)


def test_pack_hextuples_solutions_are_disjoint():
    idx = _index()
    keyer = PartitionKeyer.from_words(GUESSES)
    a = letterset("azz")
    cands = filter_candidates(idx.guesses, a)
    solutions = pack_hextuples(a, enumerate_triples(cands, keyer.keys(cands)))
    # the eight disjoint guesses alone give C(8, 6) packings
    assert len(solutions) >= 28
    for s in solutions:
        assert s.answer == a
        assert s.is_valid()
        assert all((x & y) == 0 for x, y in combinations(s.masks, 2))


def test_solution_canonical_order():
    a = Solution(1, (64, 2, 32, 4, 16, 8))
    b = Solution(1, (2, 4, 8, 16, 32, 64))
    assert a == b and hash(a) == hash(b)
    assert a.is_valid()
    assert not Solution(1, (3, 4, 8, 16, 32, 64)).is_valid()
    with pytest.raises(ValueError):
        Solution(1, (2, 4))
    assert Solution(1, (64, 2, 32, 4, 16, 8)).describe() == "a | b c d e f g"
