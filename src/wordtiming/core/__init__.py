"""Retiming pipeline entry points."""

from wordtiming.core.pipeline import (
    apply_text_edit,
    match_word_timing,
    needs_recalculation,
    preserve_word_timing,
    retime,
    tokenize,
)

__all__ = [
    "apply_text_edit",
    "match_word_timing",
    "needs_recalculation",
    "preserve_word_timing",
    "retime",
    "tokenize",
]
