"""Tests for the equivalent lateral force method."""

from __future__ import annotations

import pytest

from seismic_dynamic.analysis.compliance import minimum_base_shear_coefficient
from seismic_dynamic.analysis.static_force import (
    EquivalentLateralForceAnalyzer,
    approximate_period,
    dynamic_scaling,
    seismic_response_coefficient,
    upper_limit_coefficient,
)
from seismic_dynamic.data.seismic_data import DirectionalValues


class TestApproximatePeriod:
    def test_high_strength_concrete(self) -> None:
        """f'c >= 25 MPa uses Ct = 0.0466."""
        assert approximate_period(15.0, 25.0) == pytest.approx(0.0466 * 15.0 ** 0.9)

    def test_regular_concrete(self) -> None:
        assert approximate_period(15.0, 20.0) == pytest.approx(0.0488 * 15.0 ** 0.9)


class TestUpperLimitCoefficient:
    @pytest.mark.parametrize("sd1, cu", [(0.5, 1.4), (0.4, 1.4), (0.35, 1.5), (0.25, 1.6),
                                         (0.1, 1.7)])
    def test_table(self, sd1: float, cu: float) -> None:
        assert upper_limit_coefficient(sd1) == pytest.approx(cu)


class TestSeismicResponseCoefficient:
    def test_upper_bound_governs(self) -> None:
        """Cs is capped by SD1 I/(T R)."""
        cs, cs_min, cs_max = seismic_response_coefficient(0.8, 0.4, 0.6, 8.0, 1.0, 8.0)
        assert cs_max == pytest.approx(0.4 / (0.6 * 8.0))
        assert cs == pytest.approx(cs_max)
        assert cs_min == pytest.approx(0.0352)

    def test_long_period_minimum(self) -> None:
        """Beyond TL the minimum governs."""
        cs, cs_min, cs_max = seismic_response_coefficient(0.8, 0.4, 10.0, 8.0, 1.0, 8.0)
        assert cs_max == pytest.approx(0.004)
        assert cs == pytest.approx(cs_min)

    def test_within_bounds(self) -> None:
        """Cs stays between the minimum and the cap."""
        for period in (0.1, 0.3, 0.8, 2.0, 5.0, 9.0):
            cs, cs_min, cs_max = seismic_response_coefficient(0.8, 0.4, period, 8.0, 1.25, 8.0)
            assert cs >= cs_min
            assert cs <= max(cs_max, cs_min)
            assert cs <= 0.8 * 1.25 / 8.0


class TestEquivalentLateralForceAnalyzer:
    def test_base_shear(self, building, profile, spectrum) -> None:
        """V = Cs W with Ta from the building height."""
        result = EquivalentLateralForceAnalyzer().analyze(building, profile, spectrum)
        ta = 0.0466 * 15.0 ** 0.9
        assert result.approximate_period == pytest.approx(ta)
        assert result.cu == pytest.approx(1.4)
        assert result.max_period == pytest.approx(1.4 * ta)
        assert result.response_modification == pytest.approx(8.0)
        assert result.cs == pytest.approx(0.4 / (ta * 8.0))
        assert result.weight == pytest.approx(9.81e6)
        assert result.base_shear.x == pytest.approx(result.cs * result.weight)
        assert result.base_shear.y == pytest.approx(result.base_shear.x)

    def test_stories(self, building, profile, spectrum) -> None:
        """Story forces add up to the base shear."""
        result = EquivalentLateralForceAnalyzer().analyze(building, profile, spectrum)
        assert len(result.stories) == 5
        assert sum(s.force_x for s in result.stories) == pytest.approx(result.base_shear.x)
        assert result.stories[-1].displacement > 0


class TestDynamicScaling:
    def test_scale_up_regular(self) -> None:
        """Dynamic shear is raised to 80% of the static shear."""
        scaling = dynamic_scaling(DirectionalValues(1000.0, 1000.0), DirectionalValues(500.0, 900.0))
        assert scaling.scale_factor.x == pytest.approx(1.6)
        assert scaling.scale_factor.y == pytest.approx(1.0)
        assert scaling.requires_scaling

    def test_irregular_fraction(self) -> None:
        """Irregular buildings need 90%."""
        scaling = dynamic_scaling(DirectionalValues(1000.0, 1000.0),
                                  DirectionalValues(500.0, 500.0), irregular=True)
        assert scaling.minimum_fraction == pytest.approx(0.9)
        assert scaling.scale_factor.x == pytest.approx(1.8)

    def test_never_scales_down(self) -> None:
        scaling = dynamic_scaling(DirectionalValues(100.0, 100.0), DirectionalValues(500.0, 500.0))
        assert scaling.scale_factor == DirectionalValues(1.0, 1.0)
        assert not scaling.requires_scaling

    def test_zero_dynamic_shear(self) -> None:
        scaling = dynamic_scaling(DirectionalValues(100.0, 100.0), DirectionalValues(0.0, 0.0))
        assert scaling.scale_factor.x == 1.0

    def test_zero_dynamic_design_shear(self) -> None:
        """A zero dynamic shear falls back to the static floor."""
        scaling = dynamic_scaling(DirectionalValues(1000.0, 1000.0), DirectionalValues(0.0, 500.0))
        design = scaling.design_base_shear
        assert design.x == pytest.approx(800.0)
        assert design.y == pytest.approx(800.0)

    def test_design_shear_is_scaled_dynamic(self) -> None:
        scaling = dynamic_scaling(DirectionalValues(1000.0, 1000.0), DirectionalValues(500.0, 900.0))
        design = scaling.design_base_shear
        assert design.x == pytest.approx(800.0)
        assert design.y == pytest.approx(900.0)


class TestMinimumCoefficientWithImportance:
    def test_absolute_floor_scaled_by_importance(self) -> None:
        """The 0.01 floor is multiplied by I like the 0.044 SDS term."""
        cs, cs_min, _ = seismic_response_coefficient(0.12, 0.032, 3.5, 8.0, 1.5, 8.0)
        assert cs_min == pytest.approx(0.015)
        assert cs == pytest.approx(cs_min)

    def test_matches_minimum_base_shear_rule(self) -> None:
        for sds in (0.0, 0.1, 0.5, 1.2):
            _, cs_min, _ = seismic_response_coefficient(sds, 0.4, 1.0, 8.0, 1.25, 8.0)
            assert cs_min == pytest.approx(minimum_base_shear_coefficient(sds) * 1.25)


class TestComputedPeriod:
    def test_capped_at_upper_limit(self, building, profile, spectrum) -> None:
        """A long computed period is limited to Cu Ta."""
        result = EquivalentLateralForceAnalyzer().analyze(building, profile, spectrum,
                                                          computed_period=10.0)
        assert result.design_period == pytest.approx(result.max_period)

    def test_below_limit_is_used(self, building, profile, spectrum) -> None:
        result = EquivalentLateralForceAnalyzer().analyze(building, profile, spectrum,
                                                          computed_period=0.6)
        assert result.design_period == pytest.approx(0.6)
        assert result.cs == pytest.approx(0.4 / (0.6 * 8.0))

    def test_default_is_approximate_period(self, building, profile, spectrum) -> None:
        result = EquivalentLateralForceAnalyzer().analyze(building, profile, spectrum)
        assert result.design_period == pytest.approx(result.approximate_period)
