"""Tests for result aggregation and recommendations."""

from __future__ import annotations

import dataclasses

import pytest

from seismic_dynamic.analysis.aggregator import (
    RECOMMENDATION_BASE_SHEAR,
    RECOMMENDATION_COLLAPSE,
    RECOMMENDATION_CONVERGENCE,
    RECOMMENDATION_DRIFT,
    RECOMMENDATION_HIGH_SDC,
    RECOMMENDATION_SATISFACTORY,
    RECOMMENDATION_TIME_HISTORY,
    ResultsAggregator,
    check_combination_consistency,
    check_modal_consistency,
    check_story_consistency,
    check_time_history_consistency,
)
from seismic_dynamic.analysis.combination import ModalResponseCombiner
from seismic_dynamic.analysis.compliance import ComplianceEvaluator
from seismic_dynamic.analysis.modal import HeuristicModalAnalyzer
from seismic_dynamic.analysis.performance import PerformanceAssessor
from seismic_dynamic.analysis.site import SeismicParameterResolver
from seismic_dynamic.analysis.time_history import TimeHistorySimulator
from seismic_dynamic.data.seismic_data import DirectionalValues, EnergyDissipation, SiteInput
from seismic_dynamic.utils.validators import AnalysisConsistencyError, ConvergenceWarning

from .conftest import make_building, make_stories


@pytest.fixture
def low_hazard_compliance(building):
    """Category A site with comfortable margins."""
    profile = SeismicParameterResolver().resolve(SiteInput(site_class='SB', ss=0.1, s1=0.04))
    return ComplianceEvaluator().evaluate(building, profile, DirectionalValues(2.0e5, 2.0e5),
                                          make_stories([0.001] * 5))


@pytest.fixture
def modal(building):
    return HeuristicModalAnalyzer().analyze(building)


class TestRecommendations:
    def test_satisfactory(self, low_hazard_compliance) -> None:
        """Nothing to flag yields the conformity message."""
        assert low_hazard_compliance.sdc == 'A'
        performance = PerformanceAssessor().assess(0.001 / 3.0, 0.02)
        assert ResultsAggregator.recommendations(low_hazard_compliance, performance) == (
            RECOMMENDATION_SATISFACTORY,)

    def test_fixed_order(self, building, profile) -> None:
        """Convergence, drift, base shear, collapse, then high category."""
        with pytest.warns(ConvergenceWarning):
            modal = HeuristicModalAnalyzer().analyze(
                make_building(number_of_floors=1, irregular=True))
        compliance = ComplianceEvaluator().evaluate(building, profile,
                                                    DirectionalValues(1.0e5, 1.0e5),
                                                    make_stories([0.07] * 5))
        performance = PerformanceAssessor().assess(0.07 / 3.0, 0.02)
        assert ResultsAggregator.recommendations(compliance, performance, modal) == (
            RECOMMENDATION_CONVERGENCE,
            RECOMMENDATION_DRIFT,
            RECOMMENDATION_BASE_SHEAR,
            RECOMMENDATION_COLLAPSE,
            RECOMMENDATION_HIGH_SDC,
        )

    def test_time_history_drift(self, building, short_record, low_hazard_compliance) -> None:
        """Time-history drifts 20% above the spectral drifts are flagged."""
        stories = make_stories([0.0003] * 5)
        trace = TimeHistorySimulator().simulate(building, short_record)
        performance = PerformanceAssessor().assess(0.0001, 0.02)
        assert ResultsAggregator.recommendations(low_hazard_compliance, performance,
                                                 stories=stories, time_history=trace) == (
            RECOMMENDATION_TIME_HISTORY,)


class TestConsistencyChecks:
    def test_modal_flag(self, modal) -> None:
        """A convergence flag contradicting the participation is rejected."""
        check_modal_consistency(modal)
        with pytest.raises(AnalysisConsistencyError):
            check_modal_consistency(dataclasses.replace(modal, converged=False))

    def test_combination(self, modal, spectrum) -> None:
        """CQC below SRSS is rejected."""
        combination = ModalResponseCombiner().combine(modal, spectrum)
        check_combination_consistency(combination)
        broken = dataclasses.replace(
            combination,
            cqc=dataclasses.replace(combination.srss, base_shear=DirectionalValues(0.0, 0.0)))
        with pytest.raises(AnalysisConsistencyError):
            check_combination_consistency(broken)

    def test_story_count(self) -> None:
        with pytest.raises(AnalysisConsistencyError):
            check_story_consistency(make_stories([0.001] * 3), 5)

    def test_negative_drift(self) -> None:
        stories = make_stories([0.001, -0.001])
        with pytest.raises(AnalysisConsistencyError):
            check_story_consistency(stories, 2)

    def test_energy_balance(self, building, short_record) -> None:
        trace = TimeHistorySimulator().simulate(building, short_record)
        check_time_history_consistency(trace, 5)
        broken = dataclasses.replace(trace, energy=EnergyDissipation(1.0, 0.5, 0.2))
        with pytest.raises(AnalysisConsistencyError) as excinfo:
            check_time_history_consistency(broken, 5)
        assert excinfo.value.field == 'energy'


class TestAggregateStatic:
    def test_metadata_without_time_history(self, building, profile, spectrum) -> None:
        from seismic_dynamic.analysis.static_force import EquivalentLateralForceAnalyzer

        static = EquivalentLateralForceAnalyzer().analyze(building, profile, spectrum)
        compliance = ComplianceEvaluator().evaluate(building, profile, static.base_shear,
                                                    static.stories)
        performance = PerformanceAssessor().assess(0.001, compliance.allowable_drift_ratio)
        result = ResultsAggregator().aggregate_static(building, profile, spectrum, static,
                                                      compliance, performance)
        assert result.metadata.ground_motion_seed is None
        assert result.metadata.normative == 'SNI 1726:2019'
        assert result.stories == static.stories
