"""Confidence Curves for Cross-Validated Classifier Comparison.

This package computes and plots confidence curves: families of nested
confidence intervals, over a continuum of confidence levels, for the
difference in performance between two classifiers evaluated by repeated
k-fold cross-validation with the Nadeau-Bengio variance correction.
"""

from . import eval, methods, viz
from .methods import build, confidence_curve

__all__ = [
    "build",
    "confidence_curve",
    "eval",
    "methods",
    "viz",
]
