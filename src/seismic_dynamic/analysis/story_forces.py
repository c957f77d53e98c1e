"""
Distribución de fuerzas por piso
================================

Convierte el cortante basal combinado en fuerzas de piso, cortantes de
entrepiso, desplazamientos, derivas y aceleraciones.

Distribución vertical:
    Fx = Cvx·V,   Cvx = m_x·h_x^k / Σ(m_i·h_i^k)

con k = 1 para T <= 0.5 s, k = 2 para T >= 2.5 s e interpolación lineal
entre ambos.
"""

import logging
from typing import Sequence, Tuple

import numpy as np

from ..data.seismic_data import BuildingModel, DirectionalValues, StoryResponse

logger = logging.getLogger(__name__)

SHORT_PERIOD_LIMIT = 0.5
LONG_PERIOD_LIMIT = 2.5


def distribution_exponent(period: float) -> float:
    """
    Exponente de distribución vertical k

    Parameters
    ----------
    period : float
        Periodo fundamental (s)

    Returns
    -------
    float
        Exponente k entre 1.0 y 2.0
    """
    if period <= SHORT_PERIOD_LIMIT:
        return 1.0
    if period >= LONG_PERIOD_LIMIT:
        return 2.0
    return 1.0 + (period - SHORT_PERIOD_LIMIT) / (LONG_PERIOD_LIMIT - SHORT_PERIOD_LIMIT)


def vertical_distribution_factors(masses: Sequence[float], elevations: Sequence[float],
                                  k: float) -> np.ndarray:
    """Factores Cvx normalizados (suman 1)"""
    weights = np.asarray(masses, dtype=float) * np.asarray(elevations, dtype=float) ** k
    total = weights.sum()
    if total <= 0:
        return np.zeros_like(weights)
    return weights / total


def story_shears(forces: Sequence[float]) -> np.ndarray:
    """Cortante de entrepiso V_i = Σ_{j>=i} F_j"""
    return np.cumsum(np.asarray(forces, dtype=float)[::-1])[::-1]


def compute_story_drifts(displacements: Sequence[float],
                         story_heights: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Calcula derivas de entrepiso a partir de desplazamientos de piso

    El desplazamiento previo del piso 1 es la base (0).

    Parameters
    ----------
    displacements : Sequence[float]
        Desplazamientos acumulados por piso (m)
    story_heights : Sequence[float]
        Alturas de entrepiso (m)

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        (derivas en m, relaciones de deriva)
    """
    u = np.asarray(displacements, dtype=float)
    heights = np.asarray(story_heights, dtype=float)
    if u.shape != heights.shape:
        raise ValueError(f"Desplazamientos ({u.size}) y alturas ({heights.size}) "
                         f"deben tener la misma longitud")

    drifts = np.abs(np.diff(u, prepend=0.0))
    return drifts, drifts / heights


class StoryForceDistributor:
    """Distribuye el cortante basal en los pisos del edificio"""

    def distribute(self, building: BuildingModel, base_shear: DirectionalValues,
                   period: float, roof_displacement: float = 0.0) -> Tuple[StoryResponse, ...]:
        """
        Calcula la respuesta por piso

        Con rigideces de entrepiso la deriva es Δ_i = V_i/k_i. Sin ellas el
        desplazamiento de techo objetivo se reparte proporcional al cortante
        de entrepiso (rigidez uniforme).

        Parameters
        ----------
        building : BuildingModel
            Modelo del edificio
        base_shear : DirectionalValues
            Cortante basal combinado (N)
        period : float
            Periodo fundamental (s)
        roof_displacement : float
            Desplazamiento de techo objetivo (m), usado sin rigideces

        Returns
        -------
        Tuple[StoryResponse, ...]
            Respuesta de cada piso, del 1 al N
        """
        masses = building.floor_mass_array()
        elevations = building.floor_elevations()
        heights = building.story_height_array()

        k = distribution_exponent(period)
        cvx = vertical_distribution_factors(masses, elevations, k)
        forces_x = cvx * base_shear.x
        forces_y = cvx * base_shear.y
        shears_x = story_shears(forces_x)
        shears_y = story_shears(forces_y)
        governing_shear = np.maximum(shears_x, shears_y)

        if building.story_stiffness is not None:
            stiffness = np.asarray(building.story_stiffness, dtype=float)
            interstory = governing_shear / stiffness
        else:
            total_shear = governing_shear.sum()
            if total_shear > 0:
                interstory = roof_displacement * governing_shear / total_shear
            else:
                interstory = np.zeros_like(governing_shear)

        displacements = np.cumsum(interstory)
        drifts, drift_ratios = compute_story_drifts(displacements, heights)
        accelerations = np.maximum(forces_x, forces_y) / masses

        logger.info(f"Distribución de fuerzas: k={k:.3f}, desplazamiento de techo="
                    f"{displacements[-1] * 1000:.2f}mm, deriva máxima={drift_ratios.max():.5f}")

        return tuple(
            StoryResponse(
                floor=i + 1,
                elevation=float(elevations[i]),
                force_x=float(forces_x[i]),
                force_y=float(forces_y[i]),
                story_shear_x=float(shears_x[i]),
                story_shear_y=float(shears_y[i]),
                displacement=float(displacements[i]),
                drift=float(drifts[i]),
                drift_ratio=float(drift_ratios[i]),
                acceleration=float(accelerations[i]),
            )
            for i in range(len(masses))
        )
