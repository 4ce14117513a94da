"""Word similarity and sequence alignment."""

from wordtiming.align.diff import (
    Delete,
    EditOperation,
    Insert,
    Keep,
    Replace,
    WordMatcher,
    compute_word_diff,
    find_matches,
)
from wordtiming.align.similarity import (
    DEFAULT_SIMILARITY_THRESHOLD,
    are_words_similar,
    edit_distance,
    similarity_ratio,
)

__all__ = [
    "DEFAULT_SIMILARITY_THRESHOLD",
    "Delete",
    "EditOperation",
    "Insert",
    "Keep",
    "Replace",
    "WordMatcher",
    "are_words_similar",
    "compute_word_diff",
    "edit_distance",
    "find_matches",
    "similarity_ratio",
]
