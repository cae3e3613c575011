"""Drawing confidence curves with matplotlib.

The curve is drawn as two bound curves with alpha (the p-value) on the
y axis and the true difference in performance on the x axis. A secondary
axis on the right reads the same positions as confidence levels.

Example usage:
    ```python
    from confcurve.methods import confidence_curve
    from confcurve.viz import plot_confidence_curve

    result = confidence_curve(r=10, k=10, n1=900, n2=100,
                              effect_size=0.05, variance=0.0004)
    ax = plot_confidence_curve(result, color="lightsteelblue")
    ax.figure.savefig("confidence_curve.png", dpi=300, bbox_inches="tight")
    ```
"""

from typing import Any

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from matplotlib.axes import Axes

from ..methods.confidence_curve import ConfidenceCurveResult

# Confidence levels labelled on the right-hand axis, in percent
CONFIDENCE_TICKS = (0, 20, 40, 60, 80, 100)


def _configure_publication_style() -> dict[str, Any]:
    """Return matplotlib rcParams for publication-quality plots."""
    return {
        "font.family": "sans-serif",
        "font.size": 10,
        "axes.labelsize": 10,
        "axes.titlesize": 11,
        "xtick.labelsize": 9,
        "ytick.labelsize": 9,
        "axes.linewidth": 0.8,
        "lines.linewidth": 1.5,
        "figure.dpi": 150,
        "savefig.dpi": 300,
        "savefig.bbox": "tight",
    }


def set_publication_style() -> None:
    """Set matplotlib/seaborn style for publication-quality figures.

    Examples:
        >>> set_publication_style()
        >>> fig, ax = plt.subplots()
        >>> # Figure will use publication-quality styling
    """
    plt.rcParams.update(_configure_publication_style())
    sns.set_palette("deep")


def _fill_regions(ax: Axes, result: ConfidenceCurveResult, color: str) -> None:
    """Shade the region enclosed by each bound curve.

    Each polygon follows one bound curve from the widest to the narrowest
    interval and closes back to the widest interval's alpha.
    """
    alphas = result.alphas
    for bounds in (result.lowers, result.uppers):
        cord_x = np.append(bounds, bounds[-1])
        cord_y = np.append(alphas, alphas[0])
        ax.fill(cord_x, cord_y, facecolor=color, edgecolor="black", linewidth=0.8)


def plot_confidence_curve(
    result: ConfidenceCurveResult,
    ax: Axes | None = None,
    color: str | None = None,
    xlim: tuple[float, float] | None = (-0.10, 0.50),
    line_color: str = "black",
    p_reference: float = 0.05,
    null_value: float = 0.0,
) -> Axes:
    """Plot a confidence curve for a difference in classifier performance.

    Args:
        result: Curve returned by ``confidence_curve`` or ``build``.
        ax: Matplotlib axes object. If None, creates new figure.
        color: Fill color for the area under each bound curve. None draws
            the bound curves only.
        xlim: Limits of the difference axis. None lets matplotlib choose.
        line_color: Color of the bound curves and reference lines.
        p_reference: p-value marked by a horizontal line (default: 0.05).
        null_value: Null difference marked by a vertical line (default: 0).

    Returns:
        Matplotlib Axes object containing the plot.

    Example:
        ```python
        ax = plot_confidence_curve(result, color="lightgray", xlim=None)
        ```
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 5))

    alphas = result.alphas

    # Bound curves
    ax.plot(result.lowers, alphas, "-", color=line_color, linewidth=1.0)
    ax.plot(result.uppers, alphas, "-", color=line_color, linewidth=1.0)

    if color is not None:
        _fill_regions(ax, result, color)

    # Mark p = 0.05 and the null value
    ax.axhline(p_reference, color=line_color, linewidth=0.8)
    ax.axvline(null_value, color=line_color, linewidth=0.8)

    # Styling
    if xlim is not None:
        ax.set_xlim(*xlim)
    ax.set_ylim(0, 1)
    ax.set_xlabel("True difference in performance")
    ax.set_ylabel("p-value")

    # Right-hand axis reads 1 - alpha as a percentage
    conf_axis = ax.secondary_yaxis(
        "right",
        functions=(lambda a: 100.0 * (1.0 - a), lambda c: 1.0 - c / 100.0),
    )
    conf_axis.set_yticks(CONFIDENCE_TICKS)
    conf_axis.set_ylabel("Confidence level [%]")

    # Emphasised tick at the point estimate
    effect_axis = ax.secondary_xaxis("bottom")
    effect_axis.set_xticks([round(result.effect_size, 3)])
    effect_axis.tick_params(axis="x", width=2.0, length=6.0, labelsize=8)

    return ax
