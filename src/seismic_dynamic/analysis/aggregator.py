"""
Agregación de resultados
========================

Reúne los registros de todas las etapas en un único resultado inmutable,
valida su consistencia interna y genera las recomendaciones.

Esta etapa no recalcula ninguna magnitud física: solo agrega y valida.
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

from ..core import __version__
from ..data.seismic_data import (
    AnalysisMetadata,
    BuildingModel,
    CombinedAnalysisResult,
    ComplianceReport,
    DesignSpectrum,
    DynamicAnalysisResult,
    DynamicScaling,
    ModalAnalysisResult,
    PerformanceAssessment,
    ResponseCombination,
    SiteSeismicProfile,
    StaticAnalysisResult,
    StaticForceResult,
    StoryResponse,
    TimeHistoryTrace,
    max_drift_ratio,
)
from ..data.standards import sni1726
from ..data.standards.common_parameters import ComplianceStatus, PerformanceLevel
from ..utils.validators import AnalysisConsistencyError
from .modal import is_converged

logger = logging.getLogger(__name__)

TOLERANCE = 1e-9
TIME_HISTORY_DRIFT_FACTOR = 1.2

RECOMMENDATION_CONVERGENCE = 'Increase number of modes to achieve 90% mass participation'
RECOMMENDATION_DRIFT = ('Story drift exceeds limits - consider adding lateral force '
                        'resisting elements')
RECOMMENDATION_BASE_SHEAR = 'Base shear below minimum required - scale up lateral forces'
RECOMMENDATION_COLLAPSE = 'Structure at Collapse Prevention level - consider strengthening'
RECOMMENDATION_TIME_HISTORY = ('Time history analysis shows higher drifts - consider '
                               'nonlinear effects')
RECOMMENDATION_HIGH_SDC = 'High seismic zone - ensure special detailing requirements are met'
RECOMMENDATION_SATISFACTORY = 'Dynamic analysis results are satisfactory'


# ============================================================================
# VALIDACIONES DE CONSISTENCIA
# ============================================================================

def check_modal_consistency(modal: ModalAnalysisResult) -> None:
    """Bandera de convergencia y masa acumulada monótona y <= 1"""
    expected = is_converged(modal.participating_mass, modal.mass_threshold)
    if modal.converged != expected:
        raise AnalysisConsistencyError(
            "Bandera de convergencia inconsistente con la participación de masa",
            field='converged', value=modal.converged)

    previous = (0.0, 0.0, 0.0)
    for mode in modal.modes:
        current = mode.cumulative_mass_fraction.as_tuple()
        if any(c < p - TOLERANCE for c, p in zip(current, previous)):
            raise AnalysisConsistencyError(
                f"Masa acumulada decreciente en el modo {mode.index}",
                field='cumulative_mass_fraction', value=current)
        if any(c > 1.0 + TOLERANCE for c in current):
            raise AnalysisConsistencyError(
                f"Masa acumulada mayor a 1 en el modo {mode.index}",
                field='cumulative_mass_fraction', value=current)
        previous = current


def check_combination_consistency(combination: ResponseCombination) -> None:
    """La combinación CQC no puede ser menor a la SRSS"""
    for attribute in ('base_shear', 'displacement', 'acceleration'):
        cqc = getattr(combination.cqc, attribute)
        srss = getattr(combination.srss, attribute)
        if cqc.x < srss.x - TOLERANCE or cqc.y < srss.y - TOLERANCE:
            raise AnalysisConsistencyError(f"CQC menor a SRSS en {attribute}",
                                           field=attribute, value=(cqc.x, cqc.y))


def check_story_consistency(stories: Sequence[StoryResponse], number_of_floors: int) -> None:
    """Un registro por piso y derivas no negativas"""
    if len(stories) != number_of_floors:
        raise AnalysisConsistencyError(
            f"Número de pisos en la respuesta ({len(stories)}) distinto al del edificio "
            f"({number_of_floors})", field='stories', value=len(stories))
    for story in stories:
        if story.drift_ratio < 0:
            raise AnalysisConsistencyError(f"Deriva negativa en el piso {story.floor}",
                                           field='drift_ratio', value=story.drift_ratio)


def check_time_history_consistency(trace: TimeHistoryTrace, number_of_floors: int) -> None:
    """Derivas no negativas y balance de energía"""
    if len(trace.floor_peaks) != number_of_floors:
        raise AnalysisConsistencyError("Máximos de piso incompletos en tiempo-historia",
                                       field='floor_peaks', value=len(trace.floor_peaks))
    if any(d.drift < 0 for d in trace.story_drifts):
        raise AnalysisConsistencyError("Deriva negativa en tiempo-historia",
                                       field='story_drifts')
    energy = trace.energy
    if not math.isclose(energy.total, energy.viscous + energy.hysteretic,
                        rel_tol=1e-9, abs_tol=TOLERANCE):
        raise AnalysisConsistencyError("Energía total distinta a viscosa + histerética",
                                       field='energy', value=energy.total)


# ============================================================================
# AGREGADOR
# ============================================================================

class ResultsAggregator:
    """Ensambla y valida el resultado final del análisis"""

    def aggregate_dynamic(self, building: BuildingModel, site: SiteSeismicProfile,
                          spectrum: DesignSpectrum, modal: ModalAnalysisResult,
                          combination: ResponseCombination, stories: Sequence[StoryResponse],
                          time_history: TimeHistoryTrace, compliance: ComplianceReport,
                          performance: PerformanceAssessment) -> DynamicAnalysisResult:
        """
        Ensambla el resultado dinámico

        Raises
        ------
        AnalysisConsistencyError
            Si los registros de las etapas son inconsistentes entre sí
        """
        self._check_dynamic(building, modal, combination, stories, time_history)

        result = DynamicAnalysisResult(
            site=site,
            spectrum=spectrum,
            compliance=compliance,
            performance=performance,
            recommendations=self.recommendations(compliance, performance, modal,
                                                 stories, time_history),
            warnings=self._warnings(compliance, modal),
            metadata=self._metadata(time_history),
            modal=modal,
            combination=combination,
            stories=tuple(stories),
            time_history=time_history,
        )
        logger.info(f"Resultado dinámico ensamblado: SDC={result.sdc}, "
                    f"{len(result.recommendations)} recomendaciones")
        return result

    def aggregate_static(self, building: BuildingModel, site: SiteSeismicProfile,
                         spectrum: DesignSpectrum, static: StaticForceResult,
                         compliance: ComplianceReport,
                         performance: PerformanceAssessment) -> StaticAnalysisResult:
        """Ensambla el resultado estático"""
        check_story_consistency(static.stories, building.number_of_floors)

        result = StaticAnalysisResult(
            site=site,
            spectrum=spectrum,
            compliance=compliance,
            performance=performance,
            recommendations=self.recommendations(compliance, performance,
                                                 stories=static.stories),
            warnings=self._warnings(compliance),
            metadata=self._metadata(),
            static=static,
        )
        logger.info(f"Resultado estático ensamblado: SDC={result.sdc}")
        return result

    def aggregate_combined(self, building: BuildingModel, site: SiteSeismicProfile,
                           spectrum: DesignSpectrum, modal: ModalAnalysisResult,
                           combination: ResponseCombination, stories: Sequence[StoryResponse],
                           time_history: TimeHistoryTrace, static: StaticForceResult,
                           scaling: DynamicScaling, compliance: ComplianceReport,
                           performance: PerformanceAssessment) -> CombinedAnalysisResult:
        """Ensambla el resultado combinado (dinámico + estático)"""
        self._check_dynamic(building, modal, combination, stories, time_history)
        check_story_consistency(static.stories, building.number_of_floors)

        warnings = list(self._warnings(compliance, modal))
        if scaling.requires_scaling:
            warnings.append(f"Dynamic base shear scaled: FE_x={scaling.scale_factor.x:.3f}, "
                            f"FE_y={scaling.scale_factor.y:.3f}")

        result = CombinedAnalysisResult(
            site=site,
            spectrum=spectrum,
            compliance=compliance,
            performance=performance,
            recommendations=self.recommendations(compliance, performance, modal,
                                                 stories, time_history),
            warnings=tuple(warnings),
            metadata=self._metadata(time_history),
            modal=modal,
            combination=combination,
            stories=tuple(stories),
            time_history=time_history,
            static=static,
            scaling=scaling,
        )
        logger.info(f"Resultado combinado ensamblado: SDC={result.sdc}")
        return result

    @staticmethod
    def recommendations(compliance: ComplianceReport, performance: PerformanceAssessment,
                        modal: Optional[ModalAnalysisResult] = None,
                        stories: Sequence[StoryResponse] = (),
                        time_history: Optional[TimeHistoryTrace] = None) -> Tuple[str, ...]:
        """
        Genera las recomendaciones en orden fijo

        Parameters
        ----------
        compliance : ComplianceReport
            Reporte normativo
        performance : PerformanceAssessment
            Evaluación de desempeño
        modal : ModalAnalysisResult, optional
            Resultado modal (análisis dinámico)
        stories : Sequence[StoryResponse]
            Respuesta espectral por piso
        time_history : TimeHistoryTrace, optional
            Respuesta tiempo-historia

        Returns
        -------
        Tuple[str, ...]
            Recomendaciones; un mensaje de conformidad si no hay ninguna
        """
        recommendations: List[str] = []

        if modal is not None and not modal.converged:
            recommendations.append(RECOMMENDATION_CONVERGENCE)

        drift_failed = any(v.status == ComplianceStatus.FAIL
                           for v in compliance.by_rule(sni1726.RULE_DRIFT_LIMIT))
        if drift_failed:
            recommendations.append(RECOMMENDATION_DRIFT)

        shear_failed = any(v.status == ComplianceStatus.FAIL
                           for v in compliance.by_rule(sni1726.RULE_MIN_BASE_SHEAR))
        if shear_failed:
            recommendations.append(RECOMMENDATION_BASE_SHEAR)

        if performance.level == PerformanceLevel.COLLAPSE_PREVENTION:
            recommendations.append(RECOMMENDATION_COLLAPSE)

        # Los registros sintéticos no tienen corrección de línea base
        if time_history is not None and time_history.story_drifts:
            spectral_drift = max_drift_ratio(stories)
            if time_history.max_drift > spectral_drift * TIME_HISTORY_DRIFT_FACTOR:
                recommendations.append(RECOMMENDATION_TIME_HISTORY)

        if compliance.sdc in sni1726.HIGH_SDC:
            recommendations.append(RECOMMENDATION_HIGH_SDC)

        if not recommendations:
            recommendations.append(RECOMMENDATION_SATISFACTORY)

        return tuple(recommendations)

    @staticmethod
    def _check_dynamic(building: BuildingModel, modal: ModalAnalysisResult,
                       combination: ResponseCombination, stories: Sequence[StoryResponse],
                       time_history: TimeHistoryTrace) -> None:
        check_modal_consistency(modal)
        check_combination_consistency(combination)
        check_story_consistency(stories, building.number_of_floors)
        check_time_history_consistency(time_history, building.number_of_floors)

    @staticmethod
    def _warnings(compliance: ComplianceReport,
                  modal: Optional[ModalAnalysisResult] = None) -> Tuple[str, ...]:
        warnings = []
        if modal is not None and modal.convergence_warning:
            warnings.append(modal.convergence_warning)
        for verdict in compliance.by_rule(sni1726.RULE_PDELTA):
            if verdict.status == ComplianceStatus.WARNING:
                warnings.append(f"P-Delta effects significant: theta={verdict.actual:.4f}")
        return tuple(warnings)

    @staticmethod
    def _metadata(time_history: Optional[TimeHistoryTrace] = None) -> AnalysisMetadata:
        if time_history is None:
            return AnalysisMetadata(version=__version__, normative=sni1726.NORMATIVE_NAME)
        return AnalysisMetadata(
            version=__version__,
            normative=sni1726.NORMATIVE_NAME,
            ground_motion_seed=time_history.seed,
            ground_motion_source=time_history.source,
            ground_motion_record=time_history.record_id,
        )
