"""
Evaluación de desempeño
=======================

Clasifica la deriva máxima en un nivel de desempeño (IO, LS, CP), calcula
relaciones demanda/capacidad ilustrativas para elementos críticos y curvas
de fragilidad log-normales por estado de daño.
"""

import logging
import math
from typing import Optional, Sequence, Tuple

from ..data.seismic_data import (
    DemandCapacityRatio,
    FragilityCurve,
    PerformanceAssessment,
)
from ..data.standards import sni1726
from ..data.standards.common_parameters import PerformanceLevel

logger = logging.getLogger(__name__)


def performance_level(max_drift_ratio: float) -> PerformanceLevel:
    """Nivel de desempeño según la deriva máxima"""
    for limit, level in sni1726.PERFORMANCE_DRIFT_LIMITS:
        if max_drift_ratio < limit:
            return PerformanceLevel(level)
    return PerformanceLevel.COLLAPSE_PREVENTION


def demand_capacity_label(ratio: float) -> str:
    """Calificación de la relación demanda/capacidad"""
    for limit, label in sni1726.DEMAND_CAPACITY_LABELS:
        if ratio < limit:
            return label
    return 'Inadequate'


def lognormal_probability(intensity: float, median: float, dispersion: float) -> float:
    """
    Probabilidad de excedencia log-normal P = Φ(ln(IM/median)/β)

    Parameters
    ----------
    intensity : float
        Medida de intensidad (g)
    median : float
        Mediana del estado de daño (g)
    dispersion : float
        Dispersión logarítmica β

    Returns
    -------
    float
        Probabilidad entre 0 y 1
    """
    if intensity <= 0:
        return 0.0
    z = math.log(intensity / median) / dispersion
    return 0.5 * (1.0 + math.erf(z / math.sqrt(2.0)))


class PerformanceAssessor:
    """Evaluación de desempeño a partir de la deriva máxima"""

    def __init__(self, intensities: Optional[Sequence[float]] = None):
        if intensities is None:
            intensities = sni1726.FRAGILITY_INTENSITIES
        self.intensities = tuple(float(im) for im in intensities)

    def assess(self, max_drift_ratio: float, allowable_drift_ratio: float) -> PerformanceAssessment:
        """
        Evalúa el desempeño del edificio

        Parameters
        ----------
        max_drift_ratio : float
            Relación de deriva máxima del edificio
        allowable_drift_ratio : float
            Relación de deriva admisible

        Returns
        -------
        PerformanceAssessment
            Nivel de desempeño, relaciones D/C y curvas de fragilidad
        """
        level = performance_level(max_drift_ratio)
        demand_capacity = self.demand_capacity(max_drift_ratio, allowable_drift_ratio)
        curves = self.fragility_curves()

        logger.info(f"Desempeño: nivel={level.value}, deriva máxima={max_drift_ratio:.5f}")
        return PerformanceAssessment(
            level=level,
            max_drift_ratio=max_drift_ratio,
            demand_capacity=demand_capacity,
            fragility_curves=curves,
        )

    @staticmethod
    def demand_capacity(max_drift_ratio: float,
                        allowable_drift_ratio: float) -> Tuple[DemandCapacityRatio, ...]:
        """Relaciones D/C deterministas escaladas por la utilización de deriva"""
        utilization = max_drift_ratio / allowable_drift_ratio if allowable_drift_ratio > 0 else 0.0
        capacity = 1.0
        ratios = []
        for element, factor in sni1726.CRITICAL_ELEMENTS:
            demand = utilization * factor
            ratio = demand / capacity
            ratios.append(DemandCapacityRatio(
                element=element,
                demand=demand,
                capacity=capacity,
                ratio=ratio,
                performance=demand_capacity_label(ratio),
            ))
        return tuple(ratios)

    def fragility_curves(self) -> Tuple[FragilityCurve, ...]:
        """Curvas de fragilidad por estado de daño"""
        return tuple(
            FragilityCurve(
                damage_state=state,
                median=median,
                dispersion=beta,
                intensities=self.intensities,
                probabilities=tuple(lognormal_probability(im, median, beta)
                                    for im in self.intensities),
            )
            for state, median, beta in sni1726.FRAGILITY_PARAMETERS
        )
