"""Evaluation utilities."""

from wordtiming.eval.metrics import compute_anchor_drift_ms, summarize_retiming

__all__ = ["compute_anchor_drift_ms", "summarize_retiming"]
