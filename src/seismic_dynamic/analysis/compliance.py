"""
Verificación normativa SNI 1726:2019
====================================

Produce los veredictos normativos del análisis: cortante basal mínimo,
derivas de entrepiso, efectos P-Delta y factor de redundancia. Determina
además la categoría de diseño sísmico (SDC), sus requisitos de análisis y
detallado, y una verificación simplificada de irregularidades.

Los incumplimientos se reportan como datos (veredicto FAIL); nunca se
lanzan como excepciones.
"""

import logging
import math
from typing import List, Optional, Sequence

from ..core.config import AnalysisConfig
from ..data.seismic_data import (
    BuildingModel,
    ComplianceReport,
    ComplianceVerdict,
    DesignRequirements,
    DirectionalValues,
    IrregularityCheck,
    SiteSeismicProfile,
    StoryResponse,
)
from ..data.standards import sni1726
from ..data.standards.common_parameters import SEISMIC_CONSTANTS, ComplianceStatus

logger = logging.getLogger(__name__)


# ============================================================================
# CATEGORÍA DE DISEÑO SÍSMICO
# ============================================================================

def sdc_from_sds(sds: float, risk_category: str) -> str:
    """Categoría de diseño sísmico según SDS"""
    if sds < 0.167:
        return 'A'
    if sds < 0.33:
        return 'B' if risk_category == 'I' else 'C'
    if sds < 0.5:
        return 'D' if risk_category == 'IV' else 'C'
    if sds < 0.75:
        return 'D'
    return 'F' if risk_category == 'IV' else 'E'


def sdc_from_sd1(sd1: float, risk_category: str) -> str:
    """Categoría de diseño sísmico según SD1"""
    if sd1 < 0.067:
        return 'A'
    if sd1 < 0.133:
        return 'C' if risk_category == 'IV' else 'B'
    if sd1 < 0.20:
        return 'D' if risk_category == 'IV' else 'C'
    return 'D'


def determine_sdc(sds: float, sd1: float, risk_category: str) -> str:
    """
    Determina la categoría de diseño sísmico

    Se adopta la más severa entre la categoría por SDS y la categoría por SD1.

    Parameters
    ----------
    sds, sd1 : float
        Aceleraciones espectrales de diseño (g)
    risk_category : str
        Categoría de riesgo ('I'..'IV')

    Returns
    -------
    str
        Categoría 'A'..'F'
    """
    by_sds = sdc_from_sds(sds, risk_category)
    by_sd1 = sdc_from_sd1(sd1, risk_category)
    return max(by_sds, by_sd1, key=sni1726.SDC_ORDER.index)


def minimum_base_shear_coefficient(sds: float) -> float:
    """Coeficiente de cortante basal mínimo max(0.044·SDS, 0.01)"""
    return max(SEISMIC_CONSTANTS['MIN_BASE_SHEAR'] * sds,
               SEISMIC_CONSTANTS['MIN_BASE_SHEAR_ABSOLUTE'])


def check_irregularities(building: BuildingModel) -> IrregularityCheck:
    """
    Verificación simplificada de irregularidades

    Parameters
    ----------
    building : BuildingModel
        Modelo del edificio

    Returns
    -------
    IrregularityCheck
        Irregularidad en planta, vertical, torsional y necesidad de
        análisis dinámico
    """
    geometry = building.geometry
    aspect_ratio = geometry.aspect_ratio
    height = geometry.height
    slenderness = height / min(geometry.length, geometry.width)

    plan = aspect_ratio > sni1726.PLAN_ASPECT_RATIO_LIMIT or geometry.irregular
    vertical = slenderness > sni1726.SLENDERNESS_LIMIT
    torsional = (aspect_ratio > sni1726.TORSIONAL_ASPECT_RATIO_LIMIT
                 and height > sni1726.TALL_BUILDING_HEIGHT)
    requires_dynamic = plan or vertical or height > sni1726.TALL_BUILDING_HEIGHT

    return IrregularityCheck(
        plan=plan,
        vertical=vertical,
        torsional=torsional,
        requires_dynamic=requires_dynamic,
        aspect_ratio=aspect_ratio,
        slenderness=slenderness,
    )


def design_requirements(sdc: str, irregularity: IrregularityCheck) -> DesignRequirements:
    """Requisitos de análisis y detallado para la categoría y las irregularidades"""
    table = sni1726.DESIGN_REQUIREMENTS[sdc]
    penalties = []
    if irregularity.plan:
        penalties.append('Plan irregularity factor applied')
    if irregularity.vertical:
        penalties.append('Vertical irregularity factor applied')

    return DesignRequirements(
        analysis=tuple(table['analysis']),
        detailing=tuple(table['detailing']),
        irregularity_penalties=tuple(penalties),
    )


def pdelta_ratio(weight: float, max_displacement: float, base_shear: float,
                 height: float) -> float:
    """Índice de estabilidad θ = W·δmax / (V·H)"""
    if base_shear <= 0 or height <= 0:
        return 0.0 if max_displacement == 0 else math.inf
    return weight * max_displacement / (base_shear * height)


# ============================================================================
# EVALUADOR
# ============================================================================

class ComplianceEvaluator:
    """Evalúa los requisitos normativos sobre la respuesta del edificio"""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    def evaluate(self, building: BuildingModel, profile: SiteSeismicProfile,
                 base_shear: DirectionalValues,
                 stories: Sequence[StoryResponse]) -> ComplianceReport:
        """
        Genera el reporte de cumplimiento normativo

        Parameters
        ----------
        building : BuildingModel
            Modelo del edificio
        profile : SiteSeismicProfile
            Perfil sísmico de sitio
        base_shear : DirectionalValues
            Cortante basal de diseño (N)
        stories : Sequence[StoryResponse]
            Respuesta por piso

        Returns
        -------
        ComplianceReport
            Veredictos, SDC, requisitos e irregularidades
        """
        risk = sni1726.RISK_CATEGORIES[profile.risk_category]
        allowable_ratio = risk['drift_limit']
        sdc = determine_sdc(profile.sds, profile.sd1, profile.risk_category)
        irregularity = check_irregularities(building)
        requirements = design_requirements(sdc, irregularity)

        verdicts: List[ComplianceVerdict] = []
        verdicts.append(self._minimum_base_shear(building, profile, base_shear))
        verdicts.extend(self._story_drifts(stories, allowable_ratio))

        max_displacement = max((s.displacement for s in stories), default=0.0)
        theta = pdelta_ratio(building.weight, max_displacement, base_shear.maximum(),
                             building.height)
        verdicts.append(self._pdelta(theta))

        redundancy = (sni1726.REDUNDANCY_FACTOR_HIGH_SDC if sdc in sni1726.HIGH_SDC
                      else sni1726.REDUNDANCY_FACTOR_DEFAULT)
        verdicts.append(ComplianceVerdict(
            rule_id=sni1726.RULE_REDUNDANCY,
            description="Redundancy factor",
            required=redundancy,
            actual=redundancy,
            unit="-",
            status=ComplianceStatus.PASS,
        ))

        failures = sum(1 for v in verdicts if v.status == ComplianceStatus.FAIL)
        logger.info(f"Verificación normativa: SDC={sdc}, {len(verdicts)} veredictos, "
                    f"{failures} incumplimientos")
        if irregularity.requires_dynamic:
            logger.debug("La geometría del edificio requiere análisis dinámico")

        return ComplianceReport(
            verdicts=tuple(verdicts),
            sdc=sdc,
            requirements=requirements,
            irregularity=irregularity,
            allowable_drift_ratio=allowable_ratio,
            redundancy_factor=redundancy,
            pdelta_ratio=theta,
        )

    def _minimum_base_shear(self, building: BuildingModel, profile: SiteSeismicProfile,
                            base_shear: DirectionalValues) -> ComplianceVerdict:
        required = (minimum_base_shear_coefficient(profile.sds)
                    * profile.importance_factor * building.weight)
        provided = base_shear.maximum()
        status = ComplianceStatus.FAIL if provided < required else ComplianceStatus.PASS
        logger.debug(f"Cortante basal mínimo: requerido={required:.1f}N, provisto={provided:.1f}N")

        return ComplianceVerdict(
            rule_id=sni1726.RULE_MIN_BASE_SHEAR,
            description="Minimum base shear",
            required=required,
            actual=provided,
            unit="N",
            status=status,
        )

    def _story_drifts(self, stories: Sequence[StoryResponse],
                      allowable_ratio: float) -> List[ComplianceVerdict]:
        warning_fraction = self.config.drift_warning_fraction
        verdicts = []
        previous_elevation = 0.0

        for story in stories:
            height = story.elevation - previous_elevation
            previous_elevation = story.elevation
            allowable = allowable_ratio * height

            if story.drift > allowable:
                status = ComplianceStatus.FAIL
            elif story.drift > warning_fraction * allowable:
                status = ComplianceStatus.WARNING
            else:
                status = ComplianceStatus.PASS

            verdicts.append(ComplianceVerdict(
                rule_id=sni1726.RULE_DRIFT_LIMIT,
                description=f"Story drift (story {story.floor})",
                required=allowable,
                actual=story.drift,
                unit="m",
                status=status,
                story=story.floor,
            ))

        statuses = {v.status for v in verdicts}
        if ComplianceStatus.FAIL in statuses:
            overall = ComplianceStatus.FAIL
        elif ComplianceStatus.WARNING in statuses:
            overall = ComplianceStatus.WARNING
        else:
            overall = ComplianceStatus.PASS

        verdicts.append(ComplianceVerdict(
            rule_id=sni1726.RULE_DRIFT_LIMIT,
            description="Maximum story drift ratio",
            required=allowable_ratio,
            actual=max((s.drift_ratio for s in stories), default=0.0),
            unit="-",
            status=overall,
        ))
        return verdicts

    def _pdelta(self, theta: float) -> ComplianceVerdict:
        threshold = self.config.pdelta_threshold
        status = ComplianceStatus.WARNING if theta > threshold else ComplianceStatus.PASS
        if status == ComplianceStatus.WARNING:
            logger.warning(f"Efectos P-Delta significativos: θ={theta:.4f} > {threshold}")

        return ComplianceVerdict(
            rule_id=sni1726.RULE_PDELTA,
            description="P-Delta stability ratio",
            required=threshold,
            actual=theta,
            unit="-",
            status=status,
        )
