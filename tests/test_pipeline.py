import pytest

from wordtiming.core import (
    apply_text_edit,
    match_word_timing,
    needs_recalculation,
    preserve_word_timing,
    retime,
    tokenize,
)
from wordtiming.models import CaptionSegment, RetimeRequest, TimedWord


def _word(text: str, start: float, end: float, confidence: float = 0.9) -> TimedWord:
    return TimedWord(word=text, start=start, end=end, confidence=confidence)


def test_tokenize_splits_on_whitespace_runs() -> None:
    assert tokenize("  hello \t big\n world  ") == ["hello", "big", "world"]
    assert tokenize("   ") == []
    assert tokenize("") == []


def test_needs_recalculation() -> None:
    assert not needs_recalculation("hello world", "hello world")
    assert not needs_recalculation("Hello World", "hello world")
    assert not needs_recalculation("hello  world", " hello world ")
    assert needs_recalculation("hello world", "hello beautiful world")
    assert needs_recalculation("hello beautiful world", "hello world")
    assert needs_recalculation("hello world", "hello universe")
    assert not needs_recalculation("", "   ")


def test_pure_insertion() -> None:
    old = [_word("hello", 0.0, 3.0), _word("world", 7.0, 10.0)]
    result = preserve_word_timing(old, "hello beautiful world", 0.0, 10.0)

    assert [word.word for word in result] == ["hello", "beautiful", "world"]
    assert (result[0].start, result[0].end) == (0.0, 3.0)
    assert (result[2].start, result[2].end) == (7.0, 10.0)
    assert 3.0 <= result[1].start
    assert result[1].end <= 7.0
    assert result[1].confidence == 0.5


def test_pure_deletion() -> None:
    old = [_word("hello", 0.0, 3.0), _word("beautiful", 3.0, 6.0), _word("world", 6.0, 10.0)]
    result = preserve_word_timing(old, "hello world", 0.0, 10.0)

    assert [(w.word, w.start, w.end) for w in result] == [
        ("hello", 0.0, 3.0),
        ("world", 6.0, 10.0),
    ]


def test_replacement_inherits_slot() -> None:
    old = [_word("hello", 0.0, 5.0), _word("world", 5.0, 10.0)]
    result = preserve_word_timing(old, "hello universe", 0.0, 10.0)

    assert result[1].word == "universe"
    assert (result[1].start, result[1].end) == (5.0, 10.0)
    assert result[1].confidence == pytest.approx(0.72)
    assert result[1].confidence < old[1].confidence


def test_empty_original_distributes_evenly() -> None:
    result = preserve_word_timing([], "hello world", 0.0, 10.0)

    assert len(result) == 2
    assert result[0].start == 0.0
    assert result[0].end == pytest.approx(5.0)
    assert result[1].end == 10.0
    assert all(word.confidence == 0.5 for word in result)


def test_empty_new_text() -> None:
    old = [_word("hello", 0.0, 5.0)]

    assert preserve_word_timing(old, "", 0.0, 10.0) == []
    assert preserve_word_timing(old, "  \n ", 0.0, 10.0) == []


def test_case_only_edit_keeps_exact_timing() -> None:
    old = [_word("hello", 0.2, 0.9, 0.8), _word("world", 1.1, 1.6, 0.7)]
    result = preserve_word_timing(old, "Hello World", 0.0, 2.0)

    assert [(w.word, w.start, w.end, w.confidence) for w in result] == [
        ("Hello", 0.2, 0.9, 0.8),
        ("World", 1.1, 1.6, 0.7),
    ]


def test_match_word_timing_reports_sources() -> None:
    old = [_word("the", 0.0, 1.0), _word("quick", 1.0, 2.0), _word("fox", 2.0, 3.0)]
    matches = match_word_timing(old, "the slow brown fox", 0.0, 3.0)

    assert [m.source for m in matches] == ["kept", "replaced", "interpolated", "kept"]
    assert [m.original_index for m in matches] == [0, 1, -1, 2]


def test_similarity_threshold_is_forwarded() -> None:
    old = [_word("hello", 0.0, 1.0), _word("wrld", 1.0, 2.0)]

    lenient = match_word_timing(old, "hello world", 0.0, 2.0, similarity_threshold=0.7)
    strict = match_word_timing(old, "hello world", 0.0, 2.0, similarity_threshold=0.95)

    assert lenient[1].source == "kept"
    assert strict[1].source == "replaced"


def test_out_of_bounds_original_timing_is_repaired() -> None:
    old = [_word("hello", -0.5, 1.0), _word("world", 0.8, 2.5)]
    result = preserve_word_timing(old, "hello world", 0.0, 2.0)

    assert result[0].start == 0.0
    assert result[1].start == 1.0
    assert result[1].end == 2.0


def test_apply_text_edit_retimes_changed_words() -> None:
    segment = CaptionSegment(
        id="seg-1",
        text="hello world",
        start=0.0,
        end=10.0,
        words=[_word("hello", 0.0, 3.0), _word("world", 7.0, 10.0)],
    )
    edited = apply_text_edit(segment, "hello beautiful world")

    assert edited.text == "hello beautiful world"
    assert [w.word for w in edited.words] == ["hello", "beautiful", "world"]
    assert segment.text == "hello world"
    assert len(segment.words) == 2


def test_apply_text_edit_keeps_words_for_case_only_edit() -> None:
    words = [_word("hello", 0.0, 3.0), _word("world", 7.0, 10.0)]
    segment = CaptionSegment(id="seg-1", text="hello world", start=0.0, end=10.0, words=words)
    edited = apply_text_edit(segment, "Hello World")

    assert edited.text == "Hello World"
    assert edited.words == words


def test_retime_reports_metadata() -> None:
    response = retime(
        RetimeRequest(
            words=[_word("the", 0.0, 1.0), _word("quick", 1.0, 2.0), _word("fox", 2.0, 3.0)],
            text="the slow brown fox",
            segment_start=0.0,
            segment_end=3.0,
        )
    )

    assert response.metadata.word_count == 4
    assert response.metadata.kept_count == 2
    assert response.metadata.replaced_count == 1
    assert response.metadata.interpolated_count == 1
    assert response.metadata.words_changed
    assert response.metadata.similarity_threshold == 0.7
    assert response.metadata.algorithm == "fuzzy-lcs-anchor-interpolation-v1"


def test_retime_uses_request_threshold_over_default() -> None:
    response = retime(
        RetimeRequest(
            words=[_word("hello", 0.0, 1.0)],
            text="Hello",
            segment_start=0.0,
            segment_end=1.0,
            similarity_threshold=0.9,
        ),
        default_threshold=0.6,
    )

    assert response.metadata.similarity_threshold == 0.9
    assert not response.metadata.words_changed
    assert response.metadata.kept_count == 1


def test_retime_request_rejects_inverted_bounds() -> None:
    with pytest.raises(ValueError, match="segment_end must be greater"):
        RetimeRequest(words=[], text="hello", segment_start=5.0, segment_end=5.0)


def test_empty_recognizer_word_is_tolerated() -> None:
    old = [_word("hello", 0.0, 1.0), _word("", 1.0, 2.0), _word("world", 2.0, 3.0)]
    result = preserve_word_timing(old, "hello world", 0.0, 3.0)

    assert [(w.word, w.start, w.end) for w in result] == [
        ("hello", 0.0, 1.0),
        ("world", 2.0, 3.0),
    ]
