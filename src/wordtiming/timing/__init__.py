"""Timing reconstruction for edited captions."""

from wordtiming.timing.reconstruct import (
    INTERPOLATED_CONFIDENCE,
    MIN_WORD_DURATION_SEC,
    REPLACED_CONFIDENCE_FACTOR,
    distribute_evenly,
    reconstruct,
    repair_timing,
)

__all__ = [
    "INTERPOLATED_CONFIDENCE",
    "MIN_WORD_DURATION_SEC",
    "REPLACED_CONFIDENCE_FACTOR",
    "distribute_evenly",
    "reconstruct",
    "repair_timing",
]
