"""
Análisis modal
==============

Estimación de los modos de vibración del edificio. ``ModalAnalyzer`` define
la interfaz de la etapa para que un solucionador de valores propios real
pueda reemplazar la aproximación heurística sin cambiar las etapas
posteriores.

``HeuristicModalAnalyzer`` NO resuelve el problema de valores propios: el
periodo fundamental se estima con Ct·H^x, los periodos superiores decaen
como T1/i^0.8 y la masa efectiva por eje decae geométricamente con el
índice del modo.
"""

import logging
import math
import warnings
from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np

from ..core.config import AnalysisConfig
from ..data.seismic_data import AxisValues, BuildingModel, ModalAnalysisResult, Mode
from ..data.standards import sni1726
from ..data.standards.common_parameters import SEISMIC_CONSTANTS
from ..utils.validators import (
    ConvergenceWarning,
    InvalidInput,
    raise_if_invalid,
    validate_building_model,
)

logger = logging.getLogger(__name__)

# Razones de decaimiento geométrico de la masa efectiva por eje
DECAY_RATIO_X = 0.25
DECAY_RATIO_Y = 0.30
DECAY_RATIO_RZ_REGULAR = 0.40
DECAY_RATIO_RZ_IRREGULAR = 0.55

HIGHER_MODE_EXPONENT = 0.8


def is_converged(participating_mass: AxisValues, threshold: float) -> bool:
    """
    Verifica la participación de masa en los tres ejes

    Parameters
    ----------
    participating_mass : AxisValues
        Fracción de masa acumulada por eje (x, y, rz)
    threshold : float
        Umbral mínimo de participación (0.90)

    Returns
    -------
    bool
        True solo si los tres ejes alcanzan el umbral
    """
    return all(value >= threshold for value in participating_mass.as_tuple())


def fundamental_period(height: float, irregular: bool = False) -> float:
    """Periodo fundamental aproximado T1 = Ct·H^x"""
    ct = sni1726.PERIOD_CT_IRREGULAR if irregular else sni1726.PERIOD_CT_REGULAR
    return ct * height ** sni1726.PERIOD_X


class ModalAnalyzer(ABC):
    """Interfaz de la etapa de análisis modal"""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    @abstractmethod
    def analyze(self, building: BuildingModel) -> ModalAnalysisResult:
        """
        Calcula los modos de vibración ordenados por periodo decreciente

        Parameters
        ----------
        building : BuildingModel
            Modelo del edificio

        Returns
        -------
        ModalAnalysisResult
            Modos y participación de masa
        """

    def number_of_modes(self, building: BuildingModel) -> int:
        """Número de modos: max(solicitados, min(3·pisos, 30))"""
        per_floor = SEISMIC_CONSTANTS['MODES_PER_FLOOR'] * building.number_of_floors
        return max(self.config.min_modes, min(per_floor, SEISMIC_CONSTANTS['MAX_MODES']))

    def _finish(self, modes: List[Mode], total_mass: float) -> ModalAnalysisResult:
        """Evalúa la convergencia y construye el resultado"""
        threshold = self.config.mass_participation_threshold
        participating = modes[-1].cumulative_mass_fraction
        converged = is_converged(participating, threshold)

        message = None
        if not converged:
            message = (f"Participación de masa menor a {threshold:.0%}: "
                       f"X={participating.x:.1%}, Y={participating.y:.1%}, "
                       f"RZ={participating.rz:.1%} con {len(modes)} modos")
            logger.warning(message)
            warnings.warn(message, ConvergenceWarning, stacklevel=3)

        return ModalAnalysisResult(
            modes=tuple(modes),
            total_mass=total_mass,
            participating_mass=participating,
            mass_threshold=threshold,
            converged=converged,
            convergence_warning=message,
        )


class HeuristicModalAnalyzer(ModalAnalyzer):
    """
    Análisis modal por fórmulas cerradas

    Para el modo i:
    - Ti = T1 / i^0.8
    - fracción de masa efectiva f_i = (1 - r)·r^(i-1) por eje
    - masa generalizada M_i = M / i, factor de participación Γ = √(Meff·M_i)
    - forma modal φ_i(z) = sin((2i - 1)·π·z / (2H))
    """

    def analyze(self, building: BuildingModel) -> ModalAnalysisResult:
        raise_if_invalid(validate_building_model(building), InvalidInput)

        geometry = building.geometry
        height = building.height
        total_mass = building.total_mass
        n_modes = self.number_of_modes(building)

        t1 = fundamental_period(height, geometry.irregular)
        rz_ratio = DECAY_RATIO_RZ_IRREGULAR if geometry.irregular else DECAY_RATIO_RZ_REGULAR
        ratios = np.array([DECAY_RATIO_X, DECAY_RATIO_Y, rz_ratio])

        elevations = building.floor_elevations()
        damping_ratio = building.damping.ratio

        logger.info(f"Análisis modal heurístico: H={height:.2f}m, T1={t1:.4f}s, "
                    f"{n_modes} modos")

        modes = []
        for i in range(1, n_modes + 1):
            period = t1 / i ** HIGHER_MODE_EXPONENT
            fractions = (1.0 - ratios) * ratios ** (i - 1)
            cumulative = 1.0 - ratios ** i
            effective_mass = fractions * total_mass
            generalized_mass = total_mass / i
            participation = np.sqrt(effective_mass * generalized_mass)
            shape = np.sin((2 * i - 1) * math.pi * elevations / (2.0 * height))

            modes.append(Mode(
                index=i,
                period=period,
                frequency=1.0 / period,
                damping_ratio=damping_ratio,
                modal_mass=AxisValues(generalized_mass, generalized_mass, generalized_mass),
                participation_factor=AxisValues(*(float(v) for v in participation)),
                effective_mass=AxisValues(*(float(v) for v in effective_mass)),
                cumulative_mass_fraction=AxisValues(*(float(v) for v in cumulative)),
                shape=tuple(float(v) for v in shape),
            ))
            logger.debug(f"Modo {i}: T={period:.4f}s, masa acumulada "
                         f"X={cumulative[0]:.3f} Y={cumulative[1]:.3f} RZ={cumulative[2]:.3f}")

        return self._finish(modes, total_mass)
