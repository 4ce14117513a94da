"""Retiming pipeline: old timed words + edited text -> new timed words.

Every call is a pure function of its inputs; all intermediate structures
are built fresh per call, so calls may run concurrently.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from functools import partial

from wordtiming.align import DEFAULT_SIMILARITY_THRESHOLD, are_words_similar, compute_word_diff
from wordtiming.models import (
    CaptionSegment,
    MatchSource,
    RetimeMetadata,
    RetimeRequest,
    RetimeResponse,
    SegmentBounds,
    TimedWord,
    WordMatch,
)
from wordtiming.timing import distribute_evenly, reconstruct

logger = logging.getLogger(__name__)

_ALGORITHM = "fuzzy-lcs-anchor-interpolation-v1"


def tokenize(text: str) -> list[str]:
    """Split text on runs of whitespace, dropping empty tokens."""
    return text.split()


def needs_recalculation(old_text: str, new_text: str) -> bool:
    """Return False only when word count and every word (ignoring case) are unchanged."""
    old_tokens = tokenize(old_text)
    new_tokens = tokenize(new_text)
    if len(old_tokens) != len(new_tokens):
        return True
    return any(
        old.casefold() != new.casefold() for old, new in zip(old_tokens, new_tokens, strict=True)
    )


def match_word_timing(
    original_words: Sequence[TimedWord],
    new_text: str,
    segment_start: float,
    segment_end: float,
    *,
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[WordMatch]:
    """Retime `new_text` against `original_words`, keeping match annotations."""
    new_words = tokenize(new_text)
    if not new_words:
        return []

    bounds = SegmentBounds(start=segment_start, end=segment_end)
    if not original_words:
        return distribute_evenly(new_words, bounds)

    matcher = partial(are_words_similar, threshold=similarity_threshold)
    operations = compute_word_diff([word.word for word in original_words], new_words, matcher)
    return reconstruct(original_words, operations, new_words, bounds)


def preserve_word_timing(
    original_words: Sequence[TimedWord],
    new_text: str,
    segment_start: float,
    segment_end: float,
    *,
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[TimedWord]:
    """Produce timed words for edited caption text, reusing original timing."""
    matches = match_word_timing(
        original_words,
        new_text,
        segment_start,
        segment_end,
        similarity_threshold=similarity_threshold,
    )
    return [
        TimedWord(word=match.word, start=match.start, end=match.end, confidence=match.confidence)
        for match in matches
    ]


def apply_text_edit(
    segment: CaptionSegment,
    new_text: str,
    *,
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> CaptionSegment:
    """Return a copy of `segment` carrying `new_text` and matching word timing."""
    if not needs_recalculation(segment.text, new_text):
        return segment.model_copy(update={"text": new_text})

    words = preserve_word_timing(
        segment.words,
        new_text,
        segment.start,
        segment.end,
        similarity_threshold=similarity_threshold,
    )
    logger.debug("segment %s retimed: %d -> %d words", segment.id, len(segment.words), len(words))
    return segment.model_copy(update={"text": new_text, "words": words})


def retime(
    request: RetimeRequest,
    *,
    default_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> RetimeResponse:
    """Run the retiming pipeline for a request payload."""
    threshold = request.similarity_threshold or default_threshold
    original_text = " ".join(word.word for word in request.words)
    matches = match_word_timing(
        request.words,
        request.text,
        request.segment_start,
        request.segment_end,
        similarity_threshold=threshold,
    )

    metadata = RetimeMetadata(
        algorithm=_ALGORITHM,
        similarity_threshold=threshold,
        word_count=len(matches),
        kept_count=_count_source(matches, "kept"),
        replaced_count=_count_source(matches, "replaced"),
        interpolated_count=_count_source(matches, "interpolated"),
        words_changed=needs_recalculation(original_text, request.text),
        generated_at=datetime.now(UTC),
    )
    return RetimeResponse(metadata=metadata, words=matches)


def _count_source(matches: Sequence[WordMatch], source: MatchSource) -> int:
    return sum(1 for match in matches if match.source == source)
