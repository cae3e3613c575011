"""Summaries of a built confidence curve.

Key functions:
    curve_area: Numerical area between the two bound curves.
    p_value_at: Read the two-sided p-value of a value off the curve.
    two_sided_p_value: Exact corrected t-test p-value of a value.
    curve_to_frame: Tabular form of the nested interval family.
    summarize_curve: Human-readable report.
"""

import numpy as np
import pandas as pd
from scipy import stats

from ..methods.confidence_curve import (
    ConfidenceCurveResult,
    CrossValidationDesign,
    EffectEstimate,
)
from ..methods.nadeau_bengio import corrected_standard_deviation


def curve_area(result: ConfidenceCurveResult) -> float:
    """Compute the area between the lower and upper bound curves.

    Uses trapezoidal integration of the interval width over the computed
    alpha levels. Unlike the closed-form AUCC this only covers the alpha
    range of the curve and uses the t rather than the normal quantiles, so
    it approaches AUCC as level -> 0, m -> inf and df -> inf.

    Args:
        result: Built confidence curve.

    Returns:
        Integrated area between the bounds. 0.0 for a single interval.
    """
    widths = result.uppers - result.lowers
    if len(widths) < 2:
        return 0.0
    return float(np.trapezoid(widths, result.alphas))


def p_value_at(result: ConfidenceCurveResult, value: float = 0.0) -> float | None:
    """Read the two-sided p-value of a hypothesised difference off the curve.

    Returns the smallest computed alpha whose interval excludes ``value``.
    Its accuracy is limited by the alpha spacing 1/m.

    Args:
        result: Built confidence curve.
        value: Hypothesised true difference in performance. Defaults to the
            null value 0.

    Returns:
        The smallest excluding alpha, or None if every computed interval
        contains ``value``.
    """
    excludes = (result.lowers > value) | (result.uppers < value)
    if not np.any(excludes):
        return None
    return float(result.alphas[np.argmax(excludes)])


def two_sided_p_value(
    design: CrossValidationDesign, estimate: EffectEstimate, value: float = 0.0
) -> float:
    """Exact two-sided p-value of the corrected resampled t-test.

    Args:
        design: Cross-validation design.
        estimate: Point estimate and variance.
        value: Hypothesised true difference. Defaults to 0.

    Returns:
        2 * P(T_df > |effect_size - value| / SD).
    """
    sd = corrected_standard_deviation(
        design.r, design.k, design.n1, design.n2, estimate.variance
    )
    distance = abs(estimate.effect_size - value)
    if sd == 0.0:
        return 1.0 if distance == 0.0 else 0.0
    return float(2.0 * stats.t.sf(distance / sd, design.df))


def curve_to_frame(result: ConfidenceCurveResult) -> pd.DataFrame:
    """Return the nested intervals as a DataFrame, one row per interval."""
    return pd.DataFrame(
        {
            "alpha": result.alphas,
            "confidence": 1.0 - result.alphas,
            "lower": result.lowers,
            "upper": result.uppers,
            "width": result.uppers - result.lowers,
        }
    )


def summarize_curve(result: ConfidenceCurveResult) -> str:
    """Generate a formatted text summary of a confidence curve.

    Args:
        result: Built confidence curve.

    Returns:
        Formatted multi-line string.

    Examples:
        >>> from confcurve.methods import confidence_curve
        >>> summary = summarize_curve(confidence_curve(1, 10, 90, 10, 0.05, 4e-4))
        >>> "AUCC" in summary
        True
    """
    widest, narrowest = result.widest, result.narrowest
    p_null = p_value_at(result, 0.0)

    lines = [
        "=" * 60,
        "CONFIDENCE CURVE SUMMARY",
        "=" * 60,
        f"Effect size: {result.effect_size:.4f}",
        f"Degrees of freedom: {result.df}",
        f"Corrected SD: {result.sd:.6f}",
        f"Nested intervals: {len(result)}",
        "",
        "AREA",
        "-" * 40,
        f"  AUCC (closed form): {result.aucc:.4f}",
        f"  Area over computed alphas: {curve_area(result):.4f}",
        "",
        "INTERVALS",
        "-" * 40,
        f"  Widest ({widest.confidence:.1%}): "
        f"[{widest.lower:.4f}, {widest.upper:.4f}]",
        f"  Narrowest ({narrowest.confidence:.1%}): "
        f"[{narrowest.lower:.4f}, {narrowest.upper:.4f}]",
        "",
        "NULL VALUE",
        "-" * 40,
    ]

    if p_null is None:
        lines.append(f"  0 lies inside every interval (p >= {narrowest.alpha:.4f})")
    else:
        lines.append(f"  p-value at 0 (curve resolution): {p_null:.4f}")

    lines.append("=" * 60)
    return "\n".join(lines)
