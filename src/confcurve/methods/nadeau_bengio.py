"""Nadeau-Bengio corrected t statistics for repeated k-fold cross-validation.

The r x k performance differences obtained by repeating k-fold
cross-validation r times are not independent: training sets overlap across
folds and repetitions. Treating them as independent understates the variance
of their mean. Nadeau & Bengio (2003) correct for this by inflating the
variance by ``n2 / n1``, the ratio of validation to training set size, which
gives the corrected resampled t statistic with ``k*r - 1`` degrees of freedom.

References:
    Nadeau, C. and Bengio, Y. (2003). "Inference for the Generalization Error."
    Machine Learning, 52(3), 239-281.

    Bouckaert, R.R. and Frank, E. (2004). "Evaluating the Replicability of
    Significance Tests for Comparing Learning Algorithms." PAKDD 2004.
"""

import math

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from .method_utils import DomainError

# Area under the standard normal confidence curve: integral of 2 * z_{1-p/2}
# over p in (0, 1), i.e. 2 * E|Z| = 4 / sqrt(2 * pi).
GAUSSIAN_AUCC_FACTOR = 4.0 / math.sqrt(2.0 * math.pi)


def corrected_standard_deviation(
    r: int, k: int, n1: float, n2: float, variance: float
) -> float:
    """Compute the Nadeau-Bengio corrected standard deviation.

    SD = sqrt((1 / (k*r) + n2 / n1) * variance)

    Args:
        r: Number of repetitions of k-fold cross-validation.
        k: Number of folds.
        n1: Number of cases in a training set.
        n2: Number of cases in a validation set.
        variance: Variance of the per-fold performance differences.

    Returns:
        Corrected standard deviation of the mean performance difference.

    Raises:
        DomainError: If k*r <= 1, n1 or n2 is not positive, variance is
            negative, or the resulting SD is not finite.

    Examples:
        >>> round(corrected_standard_deviation(1, 10, 90, 10, 0.0004), 5)
        0.00919
    """
    if k * r <= 1:
        raise DomainError(
            "Need k*r > 1 for positive degrees of freedom, "
            f"got k={k}, r={r} (df={k * r - 1})"
        )
    if n1 <= 0:
        raise DomainError(f"Training set size n1 must be positive, got n1={n1}")
    if n2 <= 0:
        raise DomainError(f"Validation set size n2 must be positive, got n2={n2}")
    if variance < 0:
        raise DomainError(f"variance must be non-negative, got variance={variance}")

    sd = math.sqrt((1.0 / (k * r) + n2 / n1) * variance)
    if not math.isfinite(sd):
        raise DomainError(
            "Corrected standard deviation is not finite for "
            f"r={r}, k={k}, n1={n1}, n2={n2}, variance={variance}"
        )
    return sd


def critical_values(alphas: NDArray | float, df: int) -> NDArray:
    """Two-sided Student's t critical values.

    Args:
        alphas: Significance level(s) in (0, 1]. An alpha of 1 gives 0.
        df: Degrees of freedom, k*r - 1. Must be positive.

    Returns:
        Array of t_{1 - alpha/2, df} with the same shape as alphas.

    Raises:
        DomainError: If df is not positive or any alpha is outside (0, 1].

    Examples:
        >>> round(float(critical_values(0.01, 9)), 4)
        3.2498
    """
    if df <= 0:
        raise DomainError(
            f"Degrees of freedom k*r - 1 must be positive, got df={df}"
        )

    alphas = np.asarray(alphas, dtype=float)
    if np.any(~np.isfinite(alphas)) or np.any(alphas <= 0) or np.any(alphas > 1):
        raise DomainError(
            f"alpha must lie in (0, 1], got range [{alphas.min()}, {alphas.max()}]"
        )

    t_crit = stats.t.ppf(1.0 - alphas / 2.0, df)
    # ppf(0.5) can come back as a tiny negative number
    return np.maximum(t_crit, 0.0)


def aucc(sd: float) -> float:
    """Closed-form area under the confidence curve.

    Gaussian approximation of the area enclosed by the two bound curves over
    the full probability range. Independent of the effect size and of the
    number of nested intervals.

    Args:
        sd: Corrected standard deviation.

    Returns:
        4 / sqrt(2*pi) * sd.
    """
    return GAUSSIAN_AUCC_FACTOR * sd
