"""
Construcción del espectro de respuesta de diseño
================================================

Genera la curva periodo → aceleración espectral a partir del perfil de
sitio resuelto, junto con los espectros de velocidad y desplazamiento
derivados.

Regiones del espectro:
- T <= T0:        Sa = SDS·(0.4 + 0.6·T/T0)
- T0 < T <= TS:   Sa = SDS
- TS < T <= TL:   Sa = SD1/T
- T > TL:         Sa = SD1·TL/T²
"""

import logging
import math
from typing import Optional, Union

import numpy as np

from ..core.config import AnalysisConfig
from ..data.seismic_data import DesignSpectrum, SiteSeismicProfile
from ..utils.validators import InvalidInput

logger = logging.getLogger(__name__)

ArrayLike = Union[float, np.ndarray]


def design_spectral_acceleration(periods: ArrayLike, sds: float, sd1: float,
                                 t0: float, ts: float, tl: float) -> ArrayLike:
    """
    Evalúa la aceleración espectral de diseño Sa(T)

    Parameters
    ----------
    periods : float or np.ndarray
        Periodo(s) en segundos
    sds, sd1 : float
        Aceleraciones espectrales de diseño (g)
    t0, ts, tl : float
        Periodos de quiebre (s)

    Returns
    -------
    float or np.ndarray
        Aceleración espectral (g), del mismo tipo que la entrada
    """
    t = np.asarray(periods, dtype=float)
    scalar = t.ndim == 0
    t = np.atleast_1d(t)

    if sds == 0.0:
        sa = np.zeros_like(t)
    else:
        if t0 > 0:
            ramp = sds * (0.4 + 0.6 * t / t0)
        else:
            ramp = np.full_like(t, sds)
        with np.errstate(divide='ignore', invalid='ignore'):
            descending = np.where(t > 0, sd1 / t, 0.0)
            long_period = np.where(t > 0, sd1 * tl / t ** 2, 0.0)
        sa = np.select(
            [t <= t0, t <= ts, t <= tl],
            [ramp, np.full_like(t, sds), descending],
            default=long_period,
        )

    return float(sa[0]) if scalar else sa


class ResponseSpectrumBuilder:
    """
    Construye el espectro de diseño muestreado

    El espectro se muestrea desde 0 hasta ``spectrum_max_period`` con paso
    ``spectrum_step``. Un sitio degenerado (SDS = 0) produce un espectro
    plano nulo.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    def build(self, profile: SiteSeismicProfile) -> DesignSpectrum:
        """
        Construye el espectro de diseño

        Parameters
        ----------
        profile : SiteSeismicProfile
            Perfil sísmico de sitio resuelto

        Returns
        -------
        DesignSpectrum
            Espectro muestreado con sus periodos de quiebre

        Raises
        ------
        InvalidInput
            Si SDS o SD1 son negativos
        """
        sds, sd1 = profile.sds, profile.sd1
        if sds < 0:
            raise InvalidInput("Aceleración espectral de diseño SDS no puede ser negativa",
                               field='sds', value=sds)
        if sd1 < 0:
            raise InvalidInput("Aceleración espectral de diseño SD1 no puede ser negativa",
                               field='sd1', value=sd1)

        tl = self.config.long_period_transition
        if sds == 0.0:
            logger.warning("SDS = 0: se genera un espectro nulo")
            t0 = ts = 0.0
        else:
            t0 = 0.2 * sd1 / sds
            ts = sd1 / sds

        periods = self.sample_periods()
        accelerations = design_spectral_acceleration(periods, sds, sd1, t0, ts, tl)
        velocities = accelerations * periods / (2.0 * math.pi)
        displacements = accelerations * periods ** 2 / (4.0 * math.pi ** 2)

        logger.info(f"Espectro de diseño: T0={t0:.3f}s, TS={ts:.3f}s, TL={tl:.1f}s, "
                    f"{len(periods)} muestras")

        return DesignSpectrum(
            periods=periods,
            accelerations=accelerations,
            velocities=velocities,
            displacements=displacements,
            sds=sds,
            sd1=sd1,
            t0=t0,
            ts=ts,
            tl=tl,
        )

    def sample_periods(self) -> np.ndarray:
        """Periodos de muestreo entre 0 y el periodo máximo"""
        step = self.config.spectrum_step
        count = int(round(self.config.spectrum_max_period / step)) + 1
        return np.arange(count) * step
