"""Shared utilities for the confidence curve methods."""

import math
import warnings

import numpy as np
from numpy.typing import NDArray
from torch import Tensor


class DomainError(ValueError):
    """Raised when inputs leave the curve's numerical domain undefined."""


class ConfigurationWarning(UserWarning):
    """Non-fatal warning about a curve configuration that renders poorly."""


class RangeAdvisory(UserWarning):
    """Non-fatal warning that some alpha levels exceed 1."""


def to_float(value: float | NDArray | Tensor, name: str = "value") -> float:
    """Convert a scalar-like input to a Python float.

    Args:
        value: Python number, 0-d or single-element numpy array, or
            single-element torch tensor (including CUDA tensors).
        name: Parameter name used in error messages.

    Returns:
        The value as a float.

    Raises:
        DomainError: If the input holds more than one element.
    """
    # If tensor, convert to numpy (moving to CPU and widening dtypes such as
    # bfloat16 that numpy cannot hold)
    if isinstance(value, Tensor):
        value = value.detach().cpu().double().numpy()

    arr = np.asarray(value, dtype=float)
    if arr.size != 1:
        raise DomainError(f"{name} must be a scalar, got shape {arr.shape}")
    return float(arr.reshape(()))


def to_int(value: int | NDArray | Tensor, name: str = "value") -> int:
    """Convert a scalar-like input to a Python int, rejecting fractions."""
    as_float = to_float(value, name)
    if not math.isfinite(as_float) or as_float != int(as_float):
        raise DomainError(f"{name} must be an integer, got {as_float}")
    return int(as_float)


def require_finite(**values: float) -> None:
    """Raise DomainError naming every non-finite value."""
    bad = {name: v for name, v in values.items() if not math.isfinite(v)}
    if bad:
        details = ", ".join(f"{name}={v}" for name, v in bad.items())
        raise DomainError(f"Inputs must be finite, got {details}")


def warn_if_jagged(m: int, threshold: int = 10) -> None:
    """Warn when too few nested intervals are requested for a smooth curve."""
    if m <= threshold:
        warnings.warn(
            f"The number of nested confidence intervals is too small; "
            f"interpolation won't give a smooth curve for {m} intervals.",
            ConfigurationWarning,
            stacklevel=3,
        )


def clip_alphas(alphas: NDArray) -> NDArray:
    """Clip alpha levels into the quantile's usable range.

    Alphas above 1 would place ``1 - alpha / 2`` below the median and give
    negative critical values. Such levels are evaluated at alpha = 1 instead,
    which collapses the interval onto the point estimate.

    Args:
        alphas: Alpha levels, possibly exceeding 1.

    Returns:
        Alphas clipped to at most 1.
    """
    # level == 1/m can round a few ulps above 1
    over = alphas > 1.0 + 1e-12
    if np.any(over):
        warnings.warn(
            f"{int(over.sum())} of {len(alphas)} alpha levels exceed 1 "
            f"(max {alphas.max():.4f}); their intervals are collapsed onto the "
            "point estimate. Use level <= 1/m to avoid this.",
            RangeAdvisory,
            stacklevel=3,
        )
    return np.minimum(alphas, 1.0)
