"""
Lettersets: 26-bit masks of the distinct letters in a word.

Conventions:
  - bit i is set iff letter chr(ord('a') + i) occurs in the word
  - repeated letters do not change the mask ("sassy" == "says")
  - anagrams collapse to one letterset ("slate" == "least" == "tales")

Two lettersets are disjoint iff (a & b) == 0, which is the only test the
packing engine ever needs.

This module also builds the LettersetIndex: the deduplicated, sorted answer
and guess lettersets plus the letterset -> words vocabularies used to turn
letterset-level solutions back into words.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from itertools import combinations
from typing import Dict, Iterable, List, Mapping, Tuple

from .validation import InvalidWord, check_policy, check_word, normalize_word

ALPHABET = "abcdefghijklmnopqrstuvwxyz"
FULL_MASK = (1 << len(ALPHABET)) - 1

# A letterset is a plain int in [0, FULL_MASK]; int equality/hash are by value.
Letterset = int
WordVocabulary = Mapping[Letterset, Tuple[str, ...]]


def letterset(word: str) -> Letterset:
    """
    Mask of the distinct letters in a normalized a–z word.

    Examples:
      letterset("abc")   -> 0b111
      letterset("slate") == letterset("least")
    """
    mask = 0
    for ch in word:
        mask |= 1 << (ord(ch) - 97)
    return mask


def disjoint(a: Letterset, b: Letterset) -> bool:
    return a & b == 0


def letters_of(mask: Letterset) -> str:
    """Decode a mask back to its letters in alphabetical order (0b111 -> 'abc')."""
    return "".join(ch for i, ch in enumerate(ALPHABET) if mask >> i & 1)


def is_disjoint_packing(masks: Iterable[Letterset]) -> bool:
    """True iff every pair of masks has an empty intersection."""
    return all(disjoint(a, b) for a, b in combinations(list(masks), 2))


@dataclass(frozen=True)
class LettersetIndex:
    """
    Immutable ingestion result shared read-only by every stage.

    answers / guesses: unique lettersets in ascending order (canonical order)
    answer_words / guess_words: letterset -> words in first-seen order
    skipped: raw tokens dropped under on_invalid="skip"
    """
    N: int | None
    answers: Tuple[Letterset, ...]
    guesses: Tuple[Letterset, ...]
    answer_words: WordVocabulary = field(repr=False)
    guess_words: WordVocabulary = field(repr=False)
    skipped: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Either vocabulary empty after ingestion: zero solutions, not an error."""
        return not self.answers or not self.guesses

    def words_for_answer(self, mask: Letterset) -> Tuple[str, ...]:
        return self.answer_words[mask]

    def words_for_guess(self, mask: Letterset) -> Tuple[str, ...]:
        return self.guess_words[mask]


def _group_words(words: Iterable[str]) -> Dict[Letterset, Tuple[str, ...]]:
    groups: Dict[Letterset, List[str]] = {}
    seen = set()
    for w in words:
        if w in seen:
            continue
        seen.add(w)
        groups.setdefault(letterset(w), []).append(w)
    return {mask: tuple(ws) for mask, ws in groups.items()}


def infer_length(tokens: Iterable[str]) -> int | None:
    """
    Most common length among well-formed tokens (ties go to the shorter
    length); None when there are none.
    """
    lengths: Counter = Counter()
    for tok in tokens:
        if isinstance(tok, str):
            w = normalize_word(tok)
            if w and w.isascii() and w.isalpha():
                lengths[len(w)] += 1
    if not lengths:
        return None
    return min(lengths, key=lambda n: (-lengths[n], n))


def _clean(tokens: Iterable[str], N: int | None, on_invalid: str,
           skipped: List[str]) -> List[str]:
    out: List[str] = []
    for tok in tokens:
        try:
            out.append(check_word(tok, N))
        except InvalidWord:
            if on_invalid == "reject":
                raise
            skipped.append(tok if isinstance(tok, str) else repr(tok))
    return out


def build_index(
        answers: Iterable[str],
        guesses: Iterable[str],
        *,
        N: int | None = None,
        on_invalid: str = "reject",
) -> LettersetIndex:
    """
    Canonicalize both vocabularies into lettersets.

    Args:
      answers    : raw answer tokens
      guesses    : raw guess tokens
      N          : expected word length; None = most common well-formed length
      on_invalid : "reject" raises InvalidWord, "skip" drops and records it

    Returns:
      LettersetIndex (empty vocabularies yield empty sets, not an error)
    """
    check_policy(on_invalid)
    skipped: List[str] = []
    answers, guesses = list(answers), list(guesses)
    if N is None:
        N = infer_length(answers + guesses)
    answer_list = _clean(answers, N, on_invalid, skipped)
    guess_list = _clean(guesses, N, on_invalid, skipped)

    answer_words = _group_words(answer_list)
    guess_words = _group_words(guess_list)
    return LettersetIndex(
        N=N,
        answers=tuple(sorted(answer_words)),
        guesses=tuple(sorted(guess_words)),
        answer_words=answer_words,
        guess_words=guess_words,
        skipped=tuple(skipped),
    )
