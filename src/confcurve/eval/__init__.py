"""Evaluation utilities for confidence curves."""

from .curve_eval import (
    curve_area,
    curve_to_frame,
    p_value_at,
    summarize_curve,
    two_sided_p_value,
)

__all__ = [
    "curve_area",
    "curve_to_frame",
    "p_value_at",
    "summarize_curve",
    "two_sided_p_value",
]
