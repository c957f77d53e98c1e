"""
Método de fuerza lateral equivalente
====================================

Cálculo estático del cortante basal V = Cs·W y su distribución en altura,
junto con el escalamiento del cortante dinámico respecto al estático.

Coeficiente sísmico:
- Cs = SDS·I/R
- Cs_max = SD1·I/(T·R) para T <= TL, SD1·TL·I/(T²·R) para T > TL
- Cs_min = max(0.044·SDS, 0.01)·I

El periodo de diseño es Ta, o el periodo calculado (p. ej. T1 modal)
limitado a Cu·Ta cuando se proporciona.
"""

import logging
import math
from typing import Optional

from ..data.seismic_data import (
    GRAVITY,
    BuildingModel,
    DesignSpectrum,
    DirectionalValues,
    DynamicScaling,
    SiteSeismicProfile,
    StaticForceResult,
)
from ..data.standards import sni1726
from ..data.standards.common_parameters import SEISMIC_CONSTANTS, get_reduction_factor
from .compliance import minimum_base_shear_coefficient
from .story_forces import StoryForceDistributor, distribution_exponent

logger = logging.getLogger(__name__)


def approximate_period(height: float, fc: float) -> float:
    """
    Periodo fundamental aproximado Ta = Ct·hn^x

    Parameters
    ----------
    height : float
        Altura del edificio hn (m)
    fc : float
        Resistencia del concreto f'c (MPa)

    Returns
    -------
    float
        Periodo Ta (s)
    """
    if fc >= sni1726.HIGH_STRENGTH_FC:
        ct = sni1726.PERIOD_CT_HIGH_STRENGTH
    else:
        ct = sni1726.PERIOD_CT_REGULAR
    return ct * height ** sni1726.PERIOD_X


def upper_limit_coefficient(sd1: float) -> float:
    """Coeficiente Cu del límite superior del periodo"""
    for threshold, cu in sni1726.CU_TABLE:
        if sd1 >= threshold:
            return cu
    return sni1726.CU_TABLE[-1][1]


def seismic_response_coefficient(sds: float, sd1: float, period: float, tl: float,
                                 importance: float, r_factor: float):
    """
    Coeficiente de respuesta sísmica acotado

    Returns
    -------
    Tuple[float, float, float]
        (Cs, Cs_min, Cs_max)
    """
    cs = sds * importance / r_factor
    if period <= 0:
        cs_max = cs
    elif period <= tl:
        cs_max = sd1 * importance / (period * r_factor)
    else:
        cs_max = sd1 * tl * importance / (period ** 2 * r_factor)
    cs_min = minimum_base_shear_coefficient(sds) * importance

    # Cs_min gobierna cuando ambos límites se cruzan
    return max(min(cs, cs_max), cs_min), cs_min, cs_max


class EquivalentLateralForceAnalyzer:
    """Análisis estático por fuerza lateral equivalente (ELF)"""

    def __init__(self, distributor: StoryForceDistributor = None):
        self.distributor = distributor or StoryForceDistributor()

    def analyze(self, building: BuildingModel, profile: SiteSeismicProfile,
                spectrum: DesignSpectrum,
                computed_period: Optional[float] = None) -> StaticForceResult:
        """
        Calcula el cortante basal estático y las fuerzas de piso

        Parameters
        ----------
        building : BuildingModel
            Modelo del edificio
        profile : SiteSeismicProfile
            Perfil sísmico de sitio
        spectrum : DesignSpectrum
            Espectro de diseño (TL y desplazamiento de techo)
        computed_period : float, optional
            Periodo fundamental calculado (s). Se limita a Cu·Ta; si no se
            proporciona se usa Ta.

        Returns
        -------
        StaticForceResult
            Parámetros del método y respuesta por piso
        """
        ta = approximate_period(building.height, building.materials.fc)
        cu = upper_limit_coefficient(profile.sd1)
        t_max = cu * ta
        if computed_period is not None and computed_period > 0:
            period = min(computed_period, t_max)
            if computed_period > t_max:
                logger.info(f"Periodo calculado {computed_period:.3f}s limitado a "
                            f"Cu·Ta={t_max:.3f}s")
        else:
            period = ta

        r_factor = get_reduction_factor(building.materials.structural_system)
        importance = profile.importance_factor
        cs, cs_min, cs_max = seismic_response_coefficient(
            profile.sds, profile.sd1, period, spectrum.tl, importance, r_factor)

        weight = building.weight
        shear = cs * weight
        base_shear = DirectionalValues(shear, shear)

        sa = spectrum.acceleration_at(period)
        roof_displacement = sa * GRAVITY * period ** 2 / (4.0 * math.pi ** 2)
        stories = self.distributor.distribute(building, base_shear, period, roof_displacement)

        logger.info(f"Fuerza lateral equivalente: Ta={ta:.3f}s, T={period:.3f}s, Cu={cu:.2f}, "
                    f"R={r_factor:.1f}, Cs={cs:.4f}, V={shear:.1f}N")

        return StaticForceResult(
            approximate_period=ta,
            max_period=t_max,
            cu=cu,
            design_period=period,
            cs=cs,
            cs_min=cs_min,
            cs_max=cs_max,
            response_modification=r_factor,
            importance_factor=importance,
            weight=weight,
            base_shear=base_shear,
            distribution_exponent=distribution_exponent(period),
            stories=stories,
        )


def dynamic_scaling(static_shear: DirectionalValues, dynamic_shear: DirectionalValues,
                    irregular: bool = False) -> DynamicScaling:
    """
    Factores de escala del cortante dinámico

    El cortante dinámico debe alcanzar al menos 80% (regular) o 90%
    (irregular) del cortante estático. Un cortante dinámico nulo conserva
    factor 1.0; el cortante de diseño pasa entonces a la fracción mínima del
    estático (ver DynamicScaling.design_base_shear).

    Parameters
    ----------
    static_shear : DirectionalValues
        Cortante basal estático (N)
    dynamic_shear : DirectionalValues
        Cortante basal dinámico CQC (N)
    irregular : bool
        Estructura irregular

    Returns
    -------
    DynamicScaling
        Factores de escala por dirección (>= 1)
    """
    if irregular:
        fraction = SEISMIC_CONSTANTS['MIN_DYNAMIC_SCALE_IRREGULAR']
    else:
        fraction = SEISMIC_CONSTANTS['MIN_DYNAMIC_SCALE_REGULAR']

    def _factor(static: float, dynamic: float) -> float:
        if dynamic <= 0:
            if static > 0:
                logger.warning("Cortante dinámico nulo; se adopta "
                               f"{fraction:.0%} del cortante estático como diseño")
            return 1.0
        return max(1.0, fraction * static / dynamic)

    scale = DirectionalValues(_factor(static_shear.x, dynamic_shear.x),
                              _factor(static_shear.y, dynamic_shear.y))
    if scale.maximum() > 1.0:
        logger.info(f"Cortante dinámico escalado: FE_x={scale.x:.3f}, FE_y={scale.y:.3f}")

    return DynamicScaling(
        static_base_shear=static_shear,
        dynamic_base_shear=dynamic_shear,
        minimum_fraction=fraction,
        scale_factor=scale,
    )
