"""Confidence curves for the difference in performance between two classifiers.

A confidence curve stacks a family of nested two-sided confidence intervals,
one per alpha level, all centred on the same point estimate. Plotting the
lower and upper bounds against alpha gives a curve that can be read as a
p-value function: the alpha at which the interval first excludes a value is
the two-sided p-value of that value.

The intervals here assume the cross-validated performance difference follows
Student's t distribution with k*r - 1 degrees of freedom, with the
Nadeau-Bengio variance correction for repeated k-fold cross-validation.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from torch import Tensor

from .method_utils import (
    DomainError,
    clip_alphas,
    require_finite,
    to_float,
    to_int,
    warn_if_jagged,
)
from .nadeau_bengio import aucc, corrected_standard_deviation, critical_values

# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class CrossValidationDesign:
    """Design of an r x k-fold cross-validation experiment.

    Attributes:
        r: Number of repetitions of k-fold cross-validation.
        k: Number of folds.
        n1: Number of cases in a training set.
        n2: Number of cases in a validation set.
    """

    r: int
    k: int
    n1: float
    n2: float

    def __post_init__(self) -> None:
        self.r = to_int(self.r, "r")
        self.k = to_int(self.k, "k")
        require_finite(n1=self.n1, n2=self.n2)
        if self.r < 1 or self.k < 1 or self.k * self.r <= 1:
            raise DomainError(
                "Need k*r > 1 for positive degrees of freedom, "
                f"got k={self.k}, r={self.r} (df={self.k * self.r - 1})"
            )
        if self.n1 <= 0:
            raise DomainError(
                f"Training set size n1 must be positive, got n1={self.n1}"
            )
        if self.n2 <= 0:
            raise DomainError(
                f"Validation set size n2 must be positive, got n2={self.n2}"
            )

    @property
    def df(self) -> int:
        """Degrees of freedom of the corrected t statistic."""
        return self.k * self.r - 1


@dataclass
class EffectEstimate:
    """Caller-supplied point estimate of a performance difference.

    Attributes:
        effect_size: Mean difference in performance between the classifiers.
        variance: Variance of the per-fold differences.
    """

    effect_size: float
    variance: float

    def __post_init__(self) -> None:
        require_finite(effect_size=self.effect_size, variance=self.variance)
        if self.variance < 0:
            raise DomainError(
                f"variance must be non-negative, got variance={self.variance}"
            )


@dataclass
class CurveConfig:
    """Resolution and extent of the nested interval family.

    Attributes:
        m: Number of nested confidence intervals. Values of 10 or less give a
            jagged curve and trigger a ConfigurationWarning when building.
        level: Alpha level of the widest confidence interval.
    """

    m: int = 100
    level: float = 0.01

    def __post_init__(self) -> None:
        self.m = to_int(self.m, "m")
        if self.m < 1:
            raise DomainError(f"m must be at least 1, got m={self.m}")
        if not (0.0 < self.level < 1.0):
            raise DomainError(f"level must lie in (0, 1), got level={self.level}")


@dataclass(frozen=True)
class ConfidenceInterval:
    """One row of the nested interval family."""

    alpha: float
    lower: float
    upper: float

    @property
    def confidence(self) -> float:
        return 1.0 - self.alpha

    @property
    def width(self) -> float:
        return self.upper - self.lower


@dataclass(frozen=True)
class ConfidenceCurveResult:
    """Nested confidence intervals ordered by increasing alpha, plus AUCC.

    Attributes:
        intervals: Exactly m intervals, widest first.
        aucc: Closed-form area under the confidence curve.
        effect_size: Point estimate every interval is centred on.
        sd: Corrected standard deviation used for the bounds.
        df: Degrees of freedom of the t distribution.
    """

    intervals: tuple[ConfidenceInterval, ...]
    aucc: float
    effect_size: float
    sd: float
    df: int
    _arrays: dict[str, NDArray] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Read-only column views, kept in step with the frozen intervals
        arrays = {}
        for name in ("alpha", "lower", "upper"):
            column = np.array(
                [getattr(ci, name) for ci in self.intervals], dtype=float
            )
            column.flags.writeable = False
            arrays[name] = column
        object.__setattr__(self, "intervals", tuple(self.intervals))
        object.__setattr__(self, "_arrays", arrays)

    def __len__(self) -> int:
        return len(self.intervals)

    def __iter__(self) -> Iterator[ConfidenceInterval]:
        return iter(self.intervals)

    @property
    def alphas(self) -> NDArray:
        return self._arrays["alpha"]

    @property
    def lowers(self) -> NDArray:
        return self._arrays["lower"]

    @property
    def uppers(self) -> NDArray:
        return self._arrays["upper"]

    @property
    def widest(self) -> ConfidenceInterval:
        return self.intervals[0]

    @property
    def narrowest(self) -> ConfidenceInterval:
        return self.intervals[-1]


# =============================================================================
# Curve Construction
# =============================================================================


def build(
    design: CrossValidationDesign,
    estimate: EffectEstimate,
    config: CurveConfig | None = None,
    verbose: bool = False,
) -> ConfidenceCurveResult:
    """Build the nested confidence interval family for a CV effect estimate.

    For i = 0..m-1 the alpha levels are ``level + i/m`` and the bounds are
    ``effect_size -/+ t_{1 - alpha/2, k*r-1} * SD`` with the Nadeau-Bengio
    corrected SD. Alpha levels above 1 are kept in the output but evaluated
    as alpha = 1 (zero-width interval), with a RangeAdvisory warning.

    Args:
        design: Cross-validation design (r, k, n1, n2).
        estimate: Point estimate and variance of the performance difference.
        config: Number of intervals and alpha of the widest one. Defaults to
            CurveConfig() (m=100, level=0.01).
        verbose: If True, print the AUCC rounded to 4 decimals.

    Returns:
        ConfidenceCurveResult with exactly m intervals.

    Raises:
        DomainError: If the degrees of freedom or the corrected standard
            deviation are undefined for the inputs.

    Examples:
        >>> design = CrossValidationDesign(r=1, k=10, n1=90, n2=10)
        >>> estimate = EffectEstimate(effect_size=0.05, variance=0.0004)
        >>> result = build(design, estimate)
        >>> len(result)
        100
        >>> round(result.widest.lower, 4), round(result.widest.upper, 4)
        (0.0201, 0.0799)
        >>> round(result.aucc, 5)
        0.01466
    """
    if config is None:
        config = CurveConfig()

    m, level = config.m, config.level
    warn_if_jagged(m)

    sd = corrected_standard_deviation(
        design.r, design.k, design.n1, design.n2, estimate.variance
    )

    # Alpha levels of the nested intervals, widest first
    alphas = level + np.arange(m, dtype=float) / m
    t_crit = critical_values(clip_alphas(alphas), design.df)

    half_widths = t_crit * sd
    lowers = estimate.effect_size - half_widths
    uppers = estimate.effect_size + half_widths

    intervals = tuple(
        ConfidenceInterval(alpha=float(a), lower=float(lo), upper=float(hi))
        for a, lo, hi in zip(alphas, lowers, uppers)
    )
    area = aucc(sd)

    if verbose:
        print(f"AUCC = {round(area, 4)}")

    return ConfidenceCurveResult(
        intervals=intervals,
        aucc=area,
        effect_size=estimate.effect_size,
        sd=sd,
        df=design.df,
    )


def confidence_curve(
    r: int | NDArray | Tensor,
    k: int | NDArray | Tensor,
    n1: float | NDArray | Tensor,
    n2: float | NDArray | Tensor,
    effect_size: float | NDArray | Tensor,
    variance: float | NDArray | Tensor,
    m: int = 100,
    level: float = 0.01,
    verbose: bool = False,
) -> ConfidenceCurveResult:
    """Compute a confidence curve from flat scalar arguments.

    Convenience wrapper around ``build``. Every numeric argument may be a
    Python number, a single-element numpy array, or a single-element torch
    tensor (including CUDA tensors), so estimates coming straight out of a
    training loop can be passed without conversion.

    Args:
        r: The number of repetitions of k-fold cross-validation.
        k: The k in k-fold cross-validation.
        n1: The number of cases in a training set.
        n2: The number of cases in a validation set.
        effect_size: The point estimate of the difference in performance.
        variance: The variance of the effect size.
        m: The number of nested confidence intervals. Defaults to 100.
        level: Alpha level of the widest confidence interval. Defaults to 0.01.
        verbose: If True, print the area under the confidence curve.

    Returns:
        ConfidenceCurveResult with exactly m intervals.

    Raises:
        DomainError: On k*r <= 1, non-positive n1 or n2, negative variance,
            non-finite inputs, m < 1, or level outside (0, 1).
    """
    design = CrossValidationDesign(
        r=to_int(r, "r"),
        k=to_int(k, "k"),
        n1=to_float(n1, "n1"),
        n2=to_float(n2, "n2"),
    )
    estimate = EffectEstimate(
        effect_size=to_float(effect_size, "effect_size"),
        variance=to_float(variance, "variance"),
    )
    config = CurveConfig(m=to_int(m, "m"), level=to_float(level, "level"))

    return build(design, estimate, config, verbose=verbose)
