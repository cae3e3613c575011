"""Visualization utilities for confidence curves."""

from .plot_curve import plot_confidence_curve, set_publication_style

__all__ = [
    "plot_confidence_curve",
    "set_publication_style",
]
