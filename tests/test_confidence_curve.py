"""
Unit tests for confidence_curve module.

Critical behaviors tested:
1. The nested interval family has exactly m rows ordered by increasing alpha
2. Every interval is symmetric around and contains the point estimate
3. Intervals narrow monotonically as alpha increases
4. AUCC depends only on the corrected SD
5. Configuration and range advisories warn; domain violations raise
6. Scalar inputs may be numpy arrays or torch tensors
"""

import dataclasses
import math
import warnings

import numpy as np
import pytest
import torch
from scipy import stats

from confcurve.methods import (
    ConfidenceCurveResult,
    ConfigurationWarning,
    CrossValidationDesign,
    CurveConfig,
    DomainError,
    EffectEstimate,
    RangeAdvisory,
    build,
    confidence_curve,
)


@pytest.fixture
def design():
    """Single run of 10-fold cross-validation on 100 cases."""
    return CrossValidationDesign(r=1, k=10, n1=90, n2=10)


@pytest.fixture
def estimate():
    return EffectEstimate(effect_size=0.05, variance=0.0004)


@pytest.fixture
def result(design, estimate):
    return build(design, estimate, CurveConfig(m=100, level=0.01))


# =============================================================================
# Data Model
# =============================================================================


class TestDataModel:
    """Test validation of the input data classes."""

    def test_design_degrees_of_freedom(self):
        assert CrossValidationDesign(r=10, k=10, n1=900, n2=100).df == 99

    @pytest.mark.parametrize(
        "r,k", [(1, 1), (0, 5), (3, 0)], ids=["df_zero", "no_repeats", "no_folds"]
    )
    def test_design_rejects_non_positive_df(self, r, k):
        with pytest.raises(DomainError, match=f"k={k}, r={r}"):
            CrossValidationDesign(r=r, k=k, n1=90, n2=10)

    @pytest.mark.parametrize(
        "n1,n2", [(0, 10), (-1, 10), (90, 0), (math.inf, 10)],
        ids=["zero_n1", "negative_n1", "zero_n2", "infinite_n1"],
    )
    def test_design_rejects_bad_set_sizes(self, n1, n2):
        with pytest.raises(DomainError):
            CrossValidationDesign(r=1, k=10, n1=n1, n2=n2)

    def test_estimate_rejects_negative_variance(self):
        with pytest.raises(DomainError, match="variance=-0.1"):
            EffectEstimate(effect_size=0.05, variance=-0.1)

    def test_estimate_rejects_nan(self):
        with pytest.raises(DomainError, match="effect_size=nan"):
            EffectEstimate(effect_size=math.nan, variance=0.1)

    @pytest.mark.parametrize(
        "m,level", [(0, 0.01), (100, 0.0), (100, 1.0), (100, math.nan)],
        ids=["no_intervals", "zero_level", "unit_level", "nan_level"],
    )
    def test_config_rejects_invalid(self, m, level):
        with pytest.raises(DomainError):
            CurveConfig(m=m, level=level)

    def test_config_defaults(self):
        config = CurveConfig()
        assert config.m == 100
        assert config.level == 0.01

    def test_domain_error_is_value_error(self):
        with pytest.raises(ValueError):
            CrossValidationDesign(r=1, k=1, n1=90, n2=10)

    @pytest.mark.parametrize(
        "r,k,name", [(1.5, 2, "r"), (1, 10.5, "k")], ids=["fractional_r", "fractional_k"]
    )
    def test_design_rejects_fractional_counts(self, r, k, name):
        with pytest.raises(DomainError, match=f"{name} must be an integer"):
            CrossValidationDesign(r=r, k=k, n1=90, n2=10)

    def test_design_normalises_integral_floats(self):
        design = CrossValidationDesign(r=2.0, k=np.int64(5), n1=80, n2=20)
        assert design.df == 9
        assert isinstance(design.df, int)

    @pytest.mark.parametrize("m", [2.5, 100.1], ids=["small", "large"])
    def test_config_rejects_fractional_m(self, m):
        with pytest.raises(DomainError, match="m must be an integer"):
            CurveConfig(m=m)



# =============================================================================
# Concrete Scenario
# =============================================================================


class TestTenFoldScenario:
    """r=1, k=10, n1=90, n2=10, effect=0.05, var=0.0004, m=100, level=0.01."""

    def test_standard_deviation(self, result):
        assert result.sd == pytest.approx(math.sqrt((0.1 + 10 / 90) * 0.0004))
        assert result.df == 9

    def test_widest_interval(self, result):
        widest = result.widest
        assert widest.alpha == pytest.approx(0.01)
        t_crit = stats.t.ppf(0.995, 9)
        assert t_crit == pytest.approx(3.2498, abs=1e-4)
        assert widest.lower == pytest.approx(0.05 - t_crit * result.sd)
        assert widest.upper == pytest.approx(0.05 + t_crit * result.sd)
        assert widest.lower == pytest.approx(0.0201, abs=2e-4)
        assert widest.upper == pytest.approx(0.0799, abs=2e-4)

    def test_narrowest_interval_collapses(self, result):
        narrowest = result.narrowest
        assert narrowest.alpha == pytest.approx(1.0)
        assert narrowest.lower == pytest.approx(0.05, abs=1e-12)
        assert narrowest.upper == pytest.approx(0.05, abs=1e-12)

    def test_aucc(self, result):
        assert result.aucc == pytest.approx(4 / math.sqrt(2 * math.pi) * result.sd)
        assert result.aucc == pytest.approx(0.01466, abs=1e-5)

    def test_default_config_does_not_warn(self, design, estimate):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            build(design, estimate)


# =============================================================================
# Curve Properties
# =============================================================================


class TestCurveProperties:
    """Test invariants of the nested interval family."""

    @pytest.mark.parametrize("m", [1, 37, 100, 250], ids=["one", "odd", "default", "large"])
    def test_exactly_m_intervals(self, design, estimate, m):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            result = build(design, estimate, CurveConfig(m=m, level=0.001))
        assert len(result) == m
        assert len(result.alphas) == len(result.lowers) == len(result.uppers) == m

    def test_alphas_linearly_spaced(self, result):
        expected = 0.01 + np.arange(100) / 100
        np.testing.assert_allclose(result.alphas, expected)
        assert np.all(np.diff(result.alphas) > 0)

    def test_bounds_contain_effect(self, result):
        assert np.all(result.lowers <= result.effect_size)
        assert np.all(result.uppers >= result.effect_size)

    def test_symmetric_around_effect(self, result):
        np.testing.assert_allclose(
            result.uppers - result.effect_size,
            result.effect_size - result.lowers,
            atol=1e-15,
        )

    def test_widths_non_increasing(self, result):
        widths = result.uppers - result.lowers
        assert np.all(np.diff(widths) <= 0)

    def test_intervals_match_arrays(self, result):
        for i, ci in enumerate(result):
            assert ci.alpha == result.alphas[i]
            assert ci.lower == result.lowers[i]
            assert ci.upper == result.uppers[i]
            assert ci.confidence == pytest.approx(1 - ci.alpha)
            assert ci.width == pytest.approx(ci.upper - ci.lower)

    def test_deterministic(self, design, estimate):
        assert build(design, estimate) == build(design, estimate)

    def test_column_views_are_read_only(self, result):
        for column in (result.alphas, result.lowers, result.uppers):
            with pytest.raises(ValueError):
                column[0] = 99.0
        assert result.lowers[0] == result.widest.lower

    def test_intervals_are_immutable(self, result):
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.widest.lower = 99.0
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.intervals = ()

    def test_arrays_rebuilt_from_intervals(self, result):
        rebuilt = ConfidenceCurveResult(
            intervals=list(result.intervals),
            aucc=result.aucc,
            effect_size=result.effect_size,
            sd=result.sd,
            df=result.df,
        )
        assert rebuilt == result
        np.testing.assert_array_equal(rebuilt.lowers, result.lowers)


    def test_zero_variance_degenerates(self, design):
        result = build(design, EffectEstimate(effect_size=0.1, variance=0.0))
        assert result.sd == 0.0
        assert result.aucc == 0.0
        np.testing.assert_array_equal(result.lowers, 0.1)
        np.testing.assert_array_equal(result.uppers, 0.1)


class TestAUCCDependence:
    """AUCC depends on the SD only."""

    def test_independent_of_effect_size(self, design):
        a = build(design, EffectEstimate(effect_size=0.0, variance=0.001))
        b = build(design, EffectEstimate(effect_size=0.3, variance=0.001))
        assert a.aucc == pytest.approx(b.aucc, rel=1e-14)

    def test_independent_of_m(self, design, estimate):
        a = build(design, estimate, CurveConfig(m=20, level=0.01))
        b = build(design, estimate, CurveConfig(m=100, level=0.01))
        assert a.aucc == b.aucc

    @pytest.mark.parametrize("c", [0.25, 4.0, 10.0], ids=["quarter", "four", "ten"])
    def test_scales_with_root_variance(self, design, c):
        base = build(design, EffectEstimate(effect_size=0.05, variance=0.001))
        scaled = build(design, EffectEstimate(effect_size=0.05, variance=0.001 * c))
        assert scaled.sd == pytest.approx(base.sd * math.sqrt(c))
        assert scaled.aucc == pytest.approx(base.aucc * math.sqrt(c))

    def test_more_repetitions_shrink_sd(self, estimate):
        one = build(CrossValidationDesign(r=1, k=10, n1=90, n2=10), estimate)
        ten = build(CrossValidationDesign(r=10, k=10, n1=90, n2=10), estimate)
        assert ten.sd < one.sd
        assert ten.aucc < one.aucc


# =============================================================================
# Warnings and Errors
# =============================================================================


class TestDiagnostics:
    """Test advisories and domain errors."""

    @pytest.mark.parametrize("m", [2, 10], ids=["two", "ten"])
    def test_small_m_warns_but_builds(self, design, estimate, m):
        with pytest.warns(ConfigurationWarning, match=f"{m} intervals"):
            result = build(design, estimate, CurveConfig(m=m, level=0.01))
        assert len(result) == m

    def test_m_eleven_does_not_warn(self, design, estimate):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            build(design, estimate, CurveConfig(m=11, level=0.01))

    def test_alpha_above_one_is_collapsed(self, design, estimate):
        with pytest.warns(RangeAdvisory):
            result = build(design, estimate, CurveConfig(m=100, level=0.05))

        # Alphas are kept as computed, beyond 1
        assert result.alphas[-1] == pytest.approx(1.04)
        assert np.all(np.diff(result.alphas) > 0)

        over = result.alphas > 1
        np.testing.assert_allclose(result.lowers[over], estimate.effect_size)
        np.testing.assert_allclose(result.uppers[over], estimate.effect_size)
        assert np.all(np.diff(result.uppers - result.lowers) <= 0)

    def test_flat_api_rejects_zero_df(self):
        with pytest.raises(DomainError, match="df=0"):
            confidence_curve(r=1, k=1, n1=90, n2=10, effect_size=0.05, variance=0.0004)

    def test_flat_api_rejects_fractional_folds(self):
        with pytest.raises(DomainError, match="k must be an integer"):
            confidence_curve(r=1, k=2.5, n1=90, n2=10, effect_size=0.05, variance=0.1)

    def test_flat_api_rejects_vector_inputs(self):
        with pytest.raises(DomainError, match="variance must be a scalar"):
            confidence_curve(1, 10, 90, 10, 0.05, np.array([0.1, 0.2]))

    def test_infinite_sd_raises_instead_of_nan_bounds(self):
        with pytest.raises(DomainError, match="r=1, k=10, n1=1e-320, n2=10"):
            confidence_curve(1, 10, 1e-320, 10, 0.05, 0.0004)

    def test_negative_validation_size_raises(self):
        with pytest.raises(DomainError, match="n2=-100"):
            confidence_curve(1, 10, 90, -100, 0.05, 0.0004)



# =============================================================================
# Flat API
# =============================================================================


class TestConfidenceCurve:
    """Test the flat-argument entry point."""

    def test_matches_build(self, design, estimate):
        flat = confidence_curve(1, 10, 90, 10, 0.05, 0.0004, m=100, level=0.01)
        assert isinstance(flat, ConfidenceCurveResult)
        assert flat == build(design, estimate)

    def test_verbose_prints_rounded_aucc(self, capsys):
        confidence_curve(1, 10, 90, 10, 0.05, 0.0004, verbose=True)
        out = capsys.readouterr().out
        assert out.strip() == "AUCC = 0.0147"

    def test_silent_by_default(self, capsys):
        confidence_curve(1, 10, 90, 10, 0.05, 0.0004)
        assert capsys.readouterr().out == ""

    def test_accepts_numpy_scalars(self):
        result = confidence_curve(
            np.int64(1), np.int64(10), np.float32(90), 10, np.array(0.05), 0.0004
        )
        assert result.df == 9
        assert result.effect_size == pytest.approx(0.05)

    def test_accepts_torch_tensors(self, design, estimate):
        result = confidence_curve(
            r=torch.tensor(1),
            k=torch.tensor(10),
            n1=torch.tensor(90.0),
            n2=torch.tensor(10.0),
            effect_size=torch.tensor([0.05], dtype=torch.float64),
            variance=torch.tensor(0.0004, dtype=torch.float64),
        )
        expected = build(design, estimate)
        np.testing.assert_allclose(result.lowers, expected.lowers)
        np.testing.assert_allclose(result.uppers, expected.uppers)
        assert result.aucc == pytest.approx(expected.aucc)

    def test_accepts_bfloat16_tensors(self):
        result = confidence_curve(
            1, 10, 90, 10,
            effect_size=torch.tensor(0.05, dtype=torch.bfloat16),
            variance=torch.tensor(0.0004, dtype=torch.bfloat16),
        )
        assert result.effect_size == pytest.approx(0.05, rel=1e-2)
        assert len(result) == 100
