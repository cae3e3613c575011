"""Confidence curve construction methods."""

from .confidence_curve import (
    ConfidenceCurveResult,
    ConfidenceInterval,
    CrossValidationDesign,
    CurveConfig,
    EffectEstimate,
    build,
    confidence_curve,
)
from .method_utils import ConfigurationWarning, DomainError, RangeAdvisory
from .nadeau_bengio import aucc, corrected_standard_deviation, critical_values

__all__ = [
    "ConfidenceCurveResult",
    "ConfidenceInterval",
    "ConfigurationWarning",
    "CrossValidationDesign",
    "CurveConfig",
    "DomainError",
    "EffectEstimate",
    "RangeAdvisory",
    "aucc",
    "build",
    "confidence_curve",
    "corrected_standard_deviation",
    "critical_values",
]
