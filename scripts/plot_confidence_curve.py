#!/usr/bin/env python
"""
Confidence Curve for a Cross-Validated Classifier Comparison

This script plots the confidence curve of the difference in performance
between two classifiers evaluated by r repetitions of k-fold cross-validation,
and reports the area under the confidence curve (AUCC).

Usage:
    python plot_confidence_curve.py --r 10 --k 10 --n1 900 --n2 100 \\
        --effect-size 0.05 --variance 0.0004
    python plot_confidence_curve.py ... --color lightgray --csv curve.csv
    python plot_confidence_curve.py --help                   # Show all options
"""

import argparse
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from confcurve.eval import curve_to_frame, summarize_curve  # noqa: E402
from confcurve.methods import confidence_curve  # noqa: E402
from confcurve.viz import plot_confidence_curve, set_publication_style  # noqa: E402

# =============================================================================
# Main Entry Point
# =============================================================================


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Plot the confidence curve of a cross-validated performance difference",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Cross-validation design
    parser.add_argument(
        "--r", type=int, required=True, help="Repetitions of k-fold cross-validation"
    )
    parser.add_argument("--k", type=int, required=True, help="Number of folds")
    parser.add_argument(
        "--n1", type=float, required=True, help="Number of cases in a training set"
    )
    parser.add_argument(
        "--n2", type=float, required=True, help="Number of cases in a validation set"
    )

    # Effect estimate
    parser.add_argument(
        "--effect-size",
        type=float,
        required=True,
        help="Point estimate of the difference in performance",
    )
    parser.add_argument(
        "--variance", type=float, required=True, help="Variance of the effect size"
    )

    # Curve configuration
    parser.add_argument(
        "--m", type=int, default=100, help="Number of nested confidence intervals"
    )
    parser.add_argument(
        "--level",
        type=float,
        default=0.01,
        help="Alpha level of the widest confidence interval",
    )
    parser.add_argument(
        "--color",
        default=None,
        help="Fill color of the area under the confidence curve (none if omitted)",
    )
    parser.add_argument(
        "--xlim",
        type=float,
        nargs=2,
        default=[-0.10, 0.50],
        help="Limits of the difference axis",
    )

    # Output
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("confidence_curve.png"),
        help="Path of the saved figure",
    )
    parser.add_argument(
        "--csv", type=Path, default=None, help="Also save the intervals as CSV"
    )
    parser.add_argument(
        "--summary", action="store_true", help="Print a full curve summary"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Do not print the AUCC"
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    result = confidence_curve(
        r=args.r,
        k=args.k,
        n1=args.n1,
        n2=args.n2,
        effect_size=args.effect_size,
        variance=args.variance,
        m=args.m,
        level=args.level,
        verbose=not args.quiet,
    )

    if args.summary:
        print(summarize_curve(result))

    set_publication_style()
    ax = plot_confidence_curve(result, color=args.color, xlim=tuple(args.xlim))

    args.output.parent.mkdir(parents=True, exist_ok=True)
    ax.figure.savefig(args.output)
    plt.close(ax.figure)
    if not args.quiet:
        print(f"  Saved: {args.output.name}")

    if args.csv is not None:
        args.csv.parent.mkdir(parents=True, exist_ok=True)
        curve_to_frame(result).to_csv(args.csv, index=False)
        if not args.quiet:
            print(f"  Saved: {args.csv.name}")


if __name__ == "__main__":
    main()
