"""Quality report helpers for a retiming result."""

from __future__ import annotations

from collections.abc import Sequence
from statistics import mean, median

from wordtiming.models import TimedWord, WordMatch


def compute_anchor_drift_ms(
    matches: Sequence[WordMatch],
    original_words: Sequence[TimedWord],
) -> list[float]:
    """Absolute start/end drift in milliseconds of anchored words from their originals."""
    drift_ms: list[float] = []
    for match in matches:
        if match.original_index < 0:
            continue
        original = original_words[match.original_index]
        drift_ms.append(abs(match.start - original.start) * 1000.0)
        drift_ms.append(abs(match.end - original.end) * 1000.0)
    return drift_ms


def summarize_retiming(
    matches: Sequence[WordMatch],
    original_words: Sequence[TimedWord],
) -> dict[str, float]:
    """Summarize how much of a retiming reused original timing."""
    drift_ms = compute_anchor_drift_ms(matches, original_words)
    word_count = len(matches)
    kept = sum(1 for match in matches if match.source == "kept")
    replaced = sum(1 for match in matches if match.source == "replaced")
    interpolated = sum(1 for match in matches if match.source == "interpolated")
    preserved = kept / word_count if word_count > 0 else 0.0

    return {
        "word_count": float(word_count),
        "kept_words": float(kept),
        "replaced_words": float(replaced),
        "interpolated_words": float(interpolated),
        "preserved_ratio": round(preserved, 4),
        "mean_confidence": round(mean(m.confidence for m in matches), 4) if matches else 0.0,
        "anchor_drift_mean_ms": round(mean(drift_ms), 3) if drift_ms else 0.0,
        "anchor_drift_median_ms": round(median(drift_ms), 3) if drift_ms else 0.0,
        "anchor_drift_p95_ms": round(_percentile(drift_ms, 95.0), 3),
        "anchor_drift_max_ms": round(max(drift_ms), 3) if drift_ms else 0.0,
    }


def _percentile(values: list[float], pct: float) -> float:
    if not values:
        return 0.0
    sorted_vals = sorted(values)
    if len(sorted_vals) == 1:
        return sorted_vals[0]

    rank = (pct / 100.0) * (len(sorted_vals) - 1)
    lower = int(rank)
    upper = min(lower + 1, len(sorted_vals) - 1)
    weight = rank - lower
    return sorted_vals[lower] * (1.0 - weight) + sorted_vals[upper] * weight
