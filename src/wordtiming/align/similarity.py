"""Case-insensitive lexical similarity between single words."""

from __future__ import annotations

DEFAULT_SIMILARITY_THRESHOLD = 0.7


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit costs, ignoring case."""
    a_folded = a.casefold()
    b_folded = b.casefold()
    if a_folded == b_folded:
        return 0
    if not a_folded:
        return len(b_folded)
    if not b_folded:
        return len(a_folded)

    # Two-row DP over the (len(a)+1) x (len(b)+1) table.
    previous = list(range(len(b_folded) + 1))
    for i, a_char in enumerate(a_folded, start=1):
        current = [i] + [0] * len(b_folded)
        for j, b_char in enumerate(b_folded, start=1):
            cost = 0 if a_char == b_char else 1
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            )
        previous = current
    return previous[-1]


def similarity_ratio(a: str, b: str) -> float:
    """Return `1 - distance / max(len)`, in `[0, 1]`; identical words score 1."""
    longest = max(len(a.casefold()), len(b.casefold()))
    if longest == 0:
        return 1.0
    return 1.0 - edit_distance(a, b) / longest


def are_words_similar(
    word1: str,
    word2: str,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> bool:
    """Fuzzy word equality used as the alignment match test."""
    if word1.casefold() == word2.casefold():
        return True
    return similarity_ratio(word1, word2) >= threshold
