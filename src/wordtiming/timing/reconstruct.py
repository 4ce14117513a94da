"""Timing reconstruction for an edited word sequence.

Slots of the new word list are filled in two passes over a fixed-size
array: kept and replaced words copy their old timing and become anchors,
then every run of unfilled slots is spread evenly over the gap between
its neighbouring anchors (or the segment bounds). A final repair pass makes
the sequence monotonic, positive-duration and contained in the segment.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from wordtiming.align.diff import EditOperation, Keep, Replace
from wordtiming.models import MatchSource, SegmentBounds, TimedWord, WordMatch

logger = logging.getLogger(__name__)

REPLACED_CONFIDENCE_FACTOR = 0.8
INTERPOLATED_CONFIDENCE = 0.5
MIN_WORD_DURATION_SEC = 0.05


def reconstruct(
    old_words: Sequence[TimedWord],
    operations: Sequence[EditOperation],
    new_words: Sequence[str],
    bounds: SegmentBounds,
) -> list[WordMatch]:
    """Assign timing to every word of `new_words` from an edit script."""
    slots: list[WordMatch | None] = [None] * len(new_words)

    source: MatchSource
    for op in operations:
        if isinstance(op, Keep):
            original = old_words[op.old_index]
            confidence = original.confidence
            source = "kept"
        elif isinstance(op, Replace):
            original = old_words[op.old_index]
            confidence = original.confidence * REPLACED_CONFIDENCE_FACTOR
            source = "replaced"
        else:
            continue
        slots[op.new_index] = WordMatch(
            word=new_words[op.new_index],
            start=original.start,
            end=original.end,
            confidence=confidence,
            source=source,
            is_matched=True,
            is_interpolated=False,
            original_index=op.old_index,
        )

    _fill_unmatched_runs(slots, new_words, bounds)
    return repair_timing([slot for slot in slots if slot is not None], bounds)


def distribute_evenly(new_words: Sequence[str], bounds: SegmentBounds) -> list[WordMatch]:
    """Spread words evenly over the whole segment with fabricated timing."""
    slots: list[WordMatch | None] = [None] * len(new_words)
    _fill_unmatched_runs(slots, new_words, bounds)
    return [slot for slot in slots if slot is not None]


def _fill_unmatched_runs(
    slots: list[WordMatch | None],
    new_words: Sequence[str],
    bounds: SegmentBounds,
) -> None:
    index = 0
    while index < len(slots):
        if slots[index] is not None:
            index += 1
            continue

        run_start = index
        while index < len(slots) and slots[index] is None:
            index += 1
        run_end = index

        prev_anchor = slots[run_start - 1] if run_start > 0 else None
        next_anchor = slots[run_end] if run_end < len(slots) else None
        gap_start = prev_anchor.end if prev_anchor is not None else bounds.start
        gap_end = next_anchor.start if next_anchor is not None else bounds.end
        step = (gap_end - gap_start) / (run_end - run_start)

        for position, slot_index in enumerate(range(run_start, run_end)):
            start = gap_start + step * position
            end = gap_end if slot_index == run_end - 1 else gap_start + step * (position + 1)
            slots[slot_index] = WordMatch(
                word=new_words[slot_index],
                start=start,
                end=end,
                confidence=INTERPOLATED_CONFIDENCE,
                source="interpolated",
                is_matched=False,
                is_interpolated=True,
                original_index=-1,
            )


def repair_timing(words: Sequence[WordMatch], bounds: SegmentBounds) -> list[WordMatch]:
    """Return a copy of `words` that is ordered, positive-duration and in bounds.

    Words that start before the previous word ends are pushed forward, and
    words left without duration get `MIN_WORD_DURATION_SEC`. If pushing runs
    the tail into the segment end, the collapsed words are spread evenly over
    the shortest trailing stretch of the segment that gives each of them a
    positive duration.
    """
    if not words:
        return []

    lower, upper = bounds.start, bounds.end
    starts = [word.start for word in words]
    ends = [word.end for word in words]

    starts[0] = max(starts[0], lower)
    ends[-1] = min(ends[-1], upper)
    for index in range(len(words)):
        if index > 0 and starts[index] < ends[index - 1]:
            starts[index] = ends[index - 1]
        if ends[index] <= starts[index]:
            ends[index] = starts[index] + MIN_WORD_DURATION_SEC

    starts = [_clamp(value, lower, upper) for value in starts]
    ends = [_clamp(value, lower, upper) for value in ends]
    _spread_collapsed_tail(starts, ends, lower, upper)

    repaired: list[WordMatch] = []
    for word, start, end in zip(words, starts, ends, strict=True):
        if start != word.start or end != word.end:
            logger.debug(
                "repaired %r: %.3f-%.3f -> %.3f-%.3f", word.word, word.start, word.end, start, end
            )
            word = word.model_copy(update={"start": start, "end": end})
        repaired.append(word)
    return repaired


def _spread_collapsed_tail(
    starts: list[float],
    ends: list[float],
    lower: float,
    upper: float,
) -> None:
    # After clamping, only a suffix pinned to the segment end can collapse.
    collapsed = next((i for i in range(len(starts)) if ends[i] <= starts[i]), None)
    if collapsed is None:
        return

    # Widen the window one intact word at a time until every share is positive.
    first = collapsed
    while True:
        window_start = ends[first - 1] if first > 0 else lower
        spans = _even_spans(window_start, upper, len(starts) - first)
        if first == 0 or all(end > start for start, end in spans):
            break
        first -= 1

    for offset, (start, end) in enumerate(spans):
        starts[first + offset] = start
        ends[first + offset] = end


def _even_spans(start: float, end: float, count: int) -> list[tuple[float, float]]:
    step = (end - start) / count
    return [
        (start + step * position, end if position == count - 1 else start + step * (position + 1))
        for position in range(count)
    ]


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))
