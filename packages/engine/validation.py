"""
Word hygiene at the ingestion boundary.

A token is a valid word iff:
  - it is a string
  - after strip/lowercase it is ASCII a–z only
  - it has exact length N

Everything downstream works on letter masks, so a bad token would silently
corrupt a mask (e.g. 'é' or '-' shifting outside the 26-bit range). This is
the only place where words are rejected; the combinatorial stages never fail.
"""

from __future__ import annotations

ON_INVALID_POLICIES = ("reject", "skip")


class InvalidWord(ValueError):
    """Raised when a raw token is not an N-letter a–z word."""

    def __init__(self, token, N: int | None):
        self.token = token
        self.N = N
        expected = f"{N}-letter a-z word" if N is not None else "a-z word"
        super().__init__(f"invalid word {token!r}: expected a {expected}")


def normalize_word(token: str) -> str:
    """Strip surrounding whitespace and lowercase (Wordle is case-insensitive)."""
    return token.strip().lower()


def is_valid_word(word, N: int | None = None) -> bool:
    """
    Return True if `word` (already normalized) is alphabetic a–z and, when N
    is given, exactly N letters long.
    """
    if not isinstance(word, str) or not word:
        return False
    # isalpha() alone accepts accented letters; masks only cover a–z
    if not (word.isascii() and word.isalpha()):
        return False
    return N is None or len(word) == N


def check_word(token, N: int | None = None) -> str:
    """
    Normalize `token` and return it, or raise InvalidWord.

    Examples:
      check_word(" Slate ", 5) -> "slate"
      check_word("slat3", 5)   -> InvalidWord
    """
    if not isinstance(token, str):
        raise InvalidWord(token, N)
    w = normalize_word(token)
    if not is_valid_word(w, N):
        raise InvalidWord(token, N)
    return w


def check_policy(on_invalid: str) -> str:
    if on_invalid not in ON_INVALID_POLICIES:
        raise ValueError(f"on_invalid must be one of {ON_INVALID_POLICIES}; got {on_invalid!r}")
    return on_invalid
