"""Tests for the heuristic modal analysis."""

from __future__ import annotations

import math

import numpy as np
import pytest

from seismic_dynamic.analysis.modal import (
    HeuristicModalAnalyzer,
    fundamental_period,
    is_converged,
)
from seismic_dynamic.core.config import AnalysisConfig
from seismic_dynamic.data.seismic_data import AxisValues
from seismic_dynamic.utils.validators import ConvergenceWarning, InvalidInput

from .conftest import make_building


class TestConvergence:
    def test_all_axes_required(self) -> None:
        """Participation of 0.92/0.91/0.85 is not converged at 90%."""
        assert not is_converged(AxisValues(0.92, 0.91, 0.85), 0.90)

    def test_threshold_inclusive(self) -> None:
        """Reaching the threshold exactly counts as converged."""
        assert is_converged(AxisValues(0.90, 0.95, 0.90), 0.90)


class TestHeuristicModalAnalyzer:
    def test_fundamental_period(self, building) -> None:
        """T1 = 0.0488 H^0.9 for a regular building."""
        modal = HeuristicModalAnalyzer().analyze(building)
        assert modal.fundamental_period == pytest.approx(0.0488 * 15.0 ** 0.9)
        assert fundamental_period(15.0, irregular=True) == pytest.approx(0.0466 * 15.0 ** 0.9)

    def test_number_of_modes(self, building) -> None:
        """Three modes per floor, capped at 30."""
        assert HeuristicModalAnalyzer().analyze(building).total_modes == 15
        tall = make_building(number_of_floors=20)
        assert HeuristicModalAnalyzer().number_of_modes(tall) == 30

    def test_minimum_modes(self) -> None:
        """Requested modes raise the count above the default."""
        analyzer = HeuristicModalAnalyzer(AnalysisConfig(min_modes=10))
        assert analyzer.number_of_modes(make_building(number_of_floors=1)) == 10

    def test_periods_decreasing(self, building) -> None:
        """Modes are ordered by decreasing period."""
        modal = HeuristicModalAnalyzer().analyze(building)
        periods = np.array([m.period for m in modal.modes])
        assert np.all(np.diff(periods) < 0)
        np.testing.assert_allclose([m.frequency for m in modal.modes], 1.0 / periods)

    def test_cumulative_mass_monotone(self, building) -> None:
        """Cumulative participation never decreases and never exceeds 1."""
        modal = HeuristicModalAnalyzer().analyze(building)
        cumulative = np.array([m.cumulative_mass_fraction.as_tuple() for m in modal.modes])
        assert np.all(np.diff(cumulative, axis=0) >= 0)
        assert np.all(cumulative <= 1.0)

    def test_effective_mass_sums_to_participation(self, building) -> None:
        """Effective masses add up to the participating fraction of M."""
        modal = HeuristicModalAnalyzer().analyze(building)
        total_x = sum(m.effective_mass.x for m in modal.modes)
        assert total_x / modal.total_mass == pytest.approx(modal.participating_mass.x)

    def test_first_mode_values(self, building) -> None:
        """First mode carries 75% of the mass in X and a quarter-sine shape."""
        first = HeuristicModalAnalyzer().analyze(building).modes[0]
        assert first.effective_mass.x == pytest.approx(0.75e6)
        assert first.participation_factor.x == pytest.approx(math.sqrt(0.75e6 * 1.0e6))
        assert first.shape[-1] == pytest.approx(1.0)
        assert first.damping_ratio == pytest.approx(0.05)

    def test_converged(self, building) -> None:
        """A five-story building reaches 90% in all axes."""
        modal = HeuristicModalAnalyzer().analyze(building)
        assert modal.converged
        assert modal.convergence_warning is None

    def test_not_converged(self) -> None:
        """An irregular one-story building stops short in torsion."""
        building = make_building(number_of_floors=1, irregular=True)
        with pytest.warns(ConvergenceWarning):
            modal = HeuristicModalAnalyzer().analyze(building)
        assert not modal.converged
        assert modal.participating_mass.rz == pytest.approx(1.0 - 0.55 ** 3)
        assert modal.participating_mass.x >= 0.90
        assert 'RZ' in modal.convergence_warning

    def test_more_modes_converge(self) -> None:
        """Requesting more modes resolves the torsional shortfall."""
        building = make_building(number_of_floors=1, irregular=True)
        modal = HeuristicModalAnalyzer(AnalysisConfig(min_modes=10)).analyze(building)
        assert modal.converged

    def test_invalid_building(self) -> None:
        """A building without mass is rejected."""
        with pytest.raises(InvalidInput):
            HeuristicModalAnalyzer().analyze(make_building(total_mass=0.0))
