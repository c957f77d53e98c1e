"""Tests for modal response combination."""

from __future__ import annotations

import math

import pytest

from seismic_dynamic.analysis.combination import ModalResponseCombiner, modal_response, srss
from seismic_dynamic.analysis.modal import HeuristicModalAnalyzer
from seismic_dynamic.core.config import AnalysisConfig
from seismic_dynamic.data.seismic_data import GRAVITY, AxisValues, Mode


@pytest.fixture
def modal(building):
    return HeuristicModalAnalyzer().analyze(building)


class TestModalResponse:
    def test_first_mode(self, modal, spectrum) -> None:
        """Base shear is Meff Sa g and Sd = Sa g T^2/4pi^2."""
        mode = modal.modes[0]
        response = modal_response(mode, spectrum)
        sa = spectrum.interpolate(mode.period)
        assert response.spectral_acceleration == pytest.approx(sa)
        assert response.spectral_displacement == pytest.approx(
            sa * GRAVITY * mode.period ** 2 / (4 * math.pi ** 2))
        assert response.base_shear.x == pytest.approx(mode.effective_mass.x * sa * GRAVITY)
        assert response.displacement.x == pytest.approx(
            response.spectral_displacement * math.sqrt(0.75))

    def test_single_mode_shear(self, spectrum) -> None:
        """One full-mass mode at T=0.6 s with SDS=0.8 and SD1=0.4 uses Sa = 0.667 g."""
        mass = 1.0e6
        full = AxisValues(mass, mass, mass)
        mode = Mode(index=1, period=0.6, frequency=1 / 0.6, damping_ratio=0.05,
                    modal_mass=full, participation_factor=full, effective_mass=full,
                    cumulative_mass_fraction=AxisValues(1.0, 1.0, 1.0), shape=(1.0,))
        response = modal_response(mode, spectrum)
        assert response.spectral_acceleration == pytest.approx(0.6667, rel=1e-3)
        assert response.base_shear.x == pytest.approx(mass * 0.6667 * GRAVITY, rel=1e-3)
        assert response.acceleration.y == pytest.approx(0.6667 * GRAVITY, rel=1e-3)


class TestSrss:
    def test_values(self) -> None:
        """SRSS of 3 and 4 is 5."""
        assert srss([3.0, 4.0]) == pytest.approx(5.0)

    def test_empty(self) -> None:
        assert srss([]) == 0.0


class TestModalResponseCombiner:
    def test_srss_combination(self, modal, spectrum) -> None:
        """SRSS combines the per-mode base shears."""
        combination = ModalResponseCombiner().combine(modal, spectrum)
        expected = math.sqrt(sum(r.base_shear.x ** 2 for r in combination.modal_responses))
        assert combination.srss.base_shear.x == pytest.approx(expected)
        assert len(combination.modal_responses) == modal.total_modes

    def test_cqc_scales_srss(self, modal, spectrum) -> None:
        """CQC is the SRSS value times 1.10."""
        combination = ModalResponseCombiner().combine(modal, spectrum)
        assert combination.cqc.base_shear.x == pytest.approx(1.10 * combination.srss.base_shear.x)
        assert combination.cqc.displacement.y == pytest.approx(
            1.10 * combination.srss.displacement.y)
        assert combination.base_shear == combination.cqc.base_shear

    def test_cqc_not_below_srss(self, modal, spectrum) -> None:
        """CQC never falls below SRSS."""
        combination = ModalResponseCombiner().combine(modal, spectrum)
        for attribute in ('base_shear', 'displacement', 'acceleration'):
            cqc = getattr(combination.cqc, attribute)
            srss_value = getattr(combination.srss, attribute)
            assert cqc.x >= srss_value.x
            assert cqc.y >= srss_value.y

    def test_methods(self, modal, spectrum) -> None:
        combination = ModalResponseCombiner().combine(modal, spectrum)
        assert combination.srss.method == 'SRSS'
        assert combination.cqc.method == 'CQC'

    def test_parallel_matches_serial(self, modal, spectrum, building) -> None:
        """Worker count does not change the combined values."""
        serial = ModalResponseCombiner(AnalysisConfig(max_workers=1)).combine(modal, spectrum)
        parallel = ModalResponseCombiner(AnalysisConfig(max_workers=4)).combine(
            modal, spectrum, building)
        assert parallel.cqc == serial.cqc
        assert parallel.modal_responses == serial.modal_responses
