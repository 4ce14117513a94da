"""Fuzzy longest-common-subsequence alignment of word lists.

The alignment produces an edit script that turns the old word list into the
new one. Word equality is a pluggable predicate, by default the lexical
similarity test from `wordtiming.align.similarity`, so typo fixes and case
changes count as the same word.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from wordtiming.align.similarity import are_words_similar

logger = logging.getLogger(__name__)

WordMatcher = Callable[[str, str], bool]


@dataclass(frozen=True)
class Keep:
    """Old word survives as the new word at `new_index`."""

    old_index: int
    new_index: int
    kind: Literal["keep"] = "keep"


@dataclass(frozen=True)
class Replace:
    """Old word is substituted one-for-one by a dissimilar new word."""

    old_index: int
    new_index: int
    kind: Literal["replace"] = "replace"


@dataclass(frozen=True)
class Delete:
    """Old word has no counterpart in the new list."""

    old_index: int
    kind: Literal["delete"] = "delete"


@dataclass(frozen=True)
class Insert:
    """New word has no counterpart in the old list."""

    new_index: int
    kind: Literal["insert"] = "insert"


EditOperation = Keep | Replace | Delete | Insert


def find_matches(
    old_words: list[str],
    new_words: list[str],
    matcher: WordMatcher = are_words_similar,
) -> list[tuple[int, int]]:
    """Return matched `(old_index, new_index)` pairs of a maximal fuzzy LCS.

    Backtracking starts at the bottom-right cell. When neither neighbour has a
    strictly larger LCS length, the step goes back in the new list; this keeps
    results reproducible when several maximal alignments exist.
    """
    m = len(old_words)
    n = len(new_words)
    similar = [[matcher(old_word, new_word) for new_word in new_words] for old_word in old_words]

    lengths = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row = lengths[i]
        above = lengths[i - 1]
        for j in range(1, n + 1):
            if similar[i - 1][j - 1]:
                row[j] = above[j - 1] + 1
            else:
                row[j] = max(above[j], row[j - 1])

    matches: list[tuple[int, int]] = []
    i, j = m, n
    while i > 0 and j > 0:
        if similar[i - 1][j - 1]:
            matches.append((i - 1, j - 1))
            i -= 1
            j -= 1
        elif lengths[i - 1][j] > lengths[i][j - 1]:
            i -= 1
        else:
            j -= 1

    matches.reverse()
    return matches


def compute_word_diff(
    old_words: list[str],
    new_words: list[str],
    matcher: WordMatcher = are_words_similar,
) -> list[EditOperation]:
    """Compute the ordered edit script transforming `old_words` into `new_words`.

    Words that sit between the same pair of matches on both sides are paired
    up as `Replace` operations so they keep serving as timing anchors; only
    the surplus on one side becomes `Delete` or `Insert`.
    """
    matches = find_matches(old_words, new_words, matcher)
    # Sentinel past both ends so trailing words follow the same rules.
    matches.append((len(old_words), len(new_words)))

    operations: list[EditOperation] = []
    old_idx = 0
    new_idx = 0
    match_idx = 0
    while old_idx < len(old_words) or new_idx < len(new_words):
        next_old, next_new = matches[match_idx]
        if old_idx == next_old and new_idx == next_new:
            operations.append(Keep(old_index=old_idx, new_index=new_idx))
            old_idx += 1
            new_idx += 1
            match_idx += 1
        elif old_idx < next_old and new_idx < next_new:
            operations.append(Replace(old_index=old_idx, new_index=new_idx))
            old_idx += 1
            new_idx += 1
        elif old_idx < next_old:
            operations.append(Delete(old_index=old_idx))
            old_idx += 1
        else:
            operations.append(Insert(new_index=new_idx))
            new_idx += 1

    logger.debug(
        "word diff: %d old, %d new, %d matched, %d operations",
        len(old_words),
        len(new_words),
        len(matches) - 1,
        len(operations),
    )
    return operations
