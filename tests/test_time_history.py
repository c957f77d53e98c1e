"""Tests for synthetic ground motions and the time-history estimate."""

from __future__ import annotations

import numpy as np
import pytest

from seismic_dynamic.analysis.time_history import (
    SYNTHETIC_RECORD_NAMES,
    SyntheticGroundMotionGenerator,
    TimeHistorySimulator,
    envelope,
)
from seismic_dynamic.core.config import AnalysisConfig
from seismic_dynamic.data.seismic_data import GRAVITY
from seismic_dynamic.data.standards.common_parameters import GroundMotionSource
from seismic_dynamic.utils.validators import InvalidInput


class TestEnvelope:
    def test_shape(self) -> None:
        """Rises to 1 by 5 s, holds, and decays after 20 s."""
        values = envelope(np.array([0.0, 2.5, 5.0, 15.0, 30.0]))
        np.testing.assert_allclose(values, [0.0, 0.5, 1.0, 1.0, np.exp(-1.0)])


class TestSyntheticGroundMotionGenerator:
    def test_record_set(self) -> None:
        """Seven 30 s records sampled at 0.02 s."""
        records = SyntheticGroundMotionGenerator(seed=1).generate(0.4)
        assert len(records) == 7
        assert [r.name for r in records] == list(SYNTHETIC_RECORD_NAMES)
        assert [r.id for r in records] == [f"GM{i}" for i in range(1, 8)]
        assert all(len(r.acceleration) == 1500 for r in records)
        assert all(r.timestep == pytest.approx(0.02) for r in records)

    def test_reproducible(self) -> None:
        """The same seed yields identical records."""
        first = SyntheticGroundMotionGenerator(seed=7).generate(0.4)
        second = SyntheticGroundMotionGenerator(seed=7).generate(0.4)
        for a, b in zip(first, second):
            np.testing.assert_array_equal(a.acceleration, b.acceleration)
            assert a.magnitude == b.magnitude

    def test_seed_changes_records(self) -> None:
        first = SyntheticGroundMotionGenerator(seed=7).generate(0.4)
        second = SyntheticGroundMotionGenerator(seed=8).generate(0.4)
        assert not np.array_equal(first[0].acceleration, second[0].acceleration)

    def test_amplitude_bounded_by_pga(self) -> None:
        """Accelerations never exceed PGA g and start from rest."""
        records = SyntheticGroundMotionGenerator(seed=3).generate(0.4)
        for record in records:
            assert np.max(np.abs(record.acceleration)) <= 0.4 * GRAVITY
            assert record.acceleration[0] == 0.0

    def test_metadata_ranges(self) -> None:
        for record in SyntheticGroundMotionGenerator(seed=5).generate(0.3):
            assert 6.5 <= record.magnitude <= 8.5
            assert 10.0 <= record.distance <= 50.0

    def test_seed_required(self) -> None:
        with pytest.raises(InvalidInput):
            SyntheticGroundMotionGenerator(seed=None)

    def test_invalid_timestep(self) -> None:
        with pytest.raises(InvalidInput):
            SyntheticGroundMotionGenerator(seed=1, timestep=0.0)


class TestTimeHistorySimulator:
    def test_integration(self, short_record) -> None:
        """Trapezoidal double integration of the pulse."""
        np.testing.assert_allclose(short_record.velocity, [0.0, 0.05, 0.0, -0.05, 0.0],
                                   atol=1e-12)
        np.testing.assert_allclose(short_record.displacement, [0.0, 0.0025, 0.005, 0.0025, 0.0],
                                   atol=1e-12)

    def test_floor_peaks(self, building, short_record) -> None:
        """Peaks scale linearly with height and use absolute values."""
        trace = TimeHistorySimulator().simulate(building, short_record,
                                                source=GroundMotionSource.RECORDED)
        roof = trace.floor_peaks[-1]
        assert roof.displacement_x == pytest.approx(0.005)
        assert roof.displacement_y == pytest.approx(0.0045)
        assert roof.displacement_time == pytest.approx(0.2)
        assert roof.acceleration_x == pytest.approx(3.0)
        assert trace.floor_peaks[0].displacement_x == pytest.approx(0.001)
        assert trace.source == 'recorded'
        assert trace.seed is None

    def test_story_drifts(self, building, short_record) -> None:
        """Uniform stories share the same drift ratio."""
        trace = TimeHistorySimulator().simulate(building, short_record)
        np.testing.assert_allclose([d.drift for d in trace.story_drifts], 0.001 / 3.0)
        assert trace.max_drift == pytest.approx(0.001 / 3.0)

    def test_base_shear_history(self, building, short_record) -> None:
        """Base shear follows a M in X and 85% of it in Y."""
        trace = TimeHistorySimulator().simulate(building, short_record)
        np.testing.assert_allclose(trace.base_shear_x, np.array([0, 1, -2, 1, 0]) * 1.0e6)
        np.testing.assert_allclose(trace.base_shear_y, trace.base_shear_x * 0.85)
        assert trace.peak_base_shear.x == pytest.approx(2.0e6)
        np.testing.assert_allclose(trace.time, [0.0, 0.1, 0.2, 0.3, 0.4])

    def test_energy_balance(self, building, short_record) -> None:
        """Viscous plus hysteretic energy equals the total."""
        energy = TimeHistorySimulator().simulate(building, short_record).energy
        assert energy.total == pytest.approx(0.4)
        assert energy.viscous == pytest.approx(0.24)
        assert energy.viscous + energy.hysteretic == pytest.approx(energy.total)

    def test_parallel_matches_serial(self, building, short_record) -> None:
        serial = TimeHistorySimulator(AnalysisConfig(max_workers=1)).simulate(building,
                                                                             short_record)
        parallel = TimeHistorySimulator(AnalysisConfig(max_workers=4)).simulate(building,
                                                                               short_record)
        assert parallel.floor_peaks == serial.floor_peaks

    def test_trace_arrays_read_only(self, building, short_record) -> None:
        trace = TimeHistorySimulator().simulate(building, short_record)
        with pytest.raises(ValueError):
            trace.base_shear_x[0] = 1.0
