"""
Resolución de parámetros sísmicos de sitio
==========================================

Deriva los coeficientes espectrales ajustados por sitio (SMS, SM1, SDS, SD1)
a partir de las aceleraciones mapeadas Ss, S1, la clase de sitio y la
categoría de riesgo.

Ejemplo de uso:
    ```python
    from seismic_dynamic.analysis.site import SeismicParameterResolver
    from seismic_dynamic.data.seismic_data import SiteInput

    resolver = SeismicParameterResolver()
    profile = resolver.resolve(SiteInput(site_class='SC', ss=1.0, s1=0.4))
    print(profile.sds, profile.sd1)
    ```
"""

import logging
from typing import Optional, Sequence, Tuple

import numpy as np

from ..core.config import AnalysisConfig
from ..data.seismic_data import SiteInput, SiteSeismicProfile
from ..data.standards import sni1726
from ..utils.validators import (
    InvalidSiteParameter,
    raise_if_invalid,
    validate_site_input,
)

logger = logging.getLogger(__name__)


def normalize_site_class(site_class: str) -> Optional[str]:
    """
    Normaliza la clase de sitio a la forma 'SA'..'SF'

    Parameters
    ----------
    site_class : str
        Clase de sitio ('SC', 'C', 'sc', ...)

    Returns
    -------
    str or None
        Clase normalizada, o None si no se reconoce
    """
    key = str(site_class).strip().upper()
    if key in sni1726.SITE_CLASSES:
        return key
    if len(key) == 1 and f"S{key}" in sni1726.SITE_CLASSES:
        return f"S{key}"
    return None


def _interpolate_coefficient(value: float, grid: Sequence[float],
                             table: Sequence[float]) -> float:
    return float(np.interp(value, grid, table))


class SeismicParameterResolver:
    """
    Resuelve el perfil sísmico de sitio

    Los coeficientes de sitio (Fa, Fv) se obtienen de una tabla fija por
    clase de sitio, reducidos en 10% cuando Ss > 1.5 o S1 > 0.75. Con
    ``interpolate_site_coefficients`` se interpolan sobre las tablas Fa(Ss)
    y Fv(S1). Los valores explícitos en SiteInput tienen prioridad.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    def resolve(self, site: SiteInput) -> SiteSeismicProfile:
        """
        Resuelve los parámetros de sitio

        Parameters
        ----------
        site : SiteInput
            Parámetros sísmicos sin procesar

        Returns
        -------
        SiteSeismicProfile
            Perfil sísmico inmutable

        Raises
        ------
        InvalidSiteParameter
            Si Ss o S1 son negativos, la categoría de riesgo no existe o la
            clase de sitio no se reconoce sin permiso explícito de respaldo
        """
        report = validate_site_input(site, known_site_classes=list(sni1726.SITE_CLASSES),
                                     allow_fallback=self.config.allow_site_class_fallback)
        raise_if_invalid(report, InvalidSiteParameter)

        site_class = self._resolve_site_class(site.site_class)
        risk_category = str(site.risk_category).upper()
        class_info = sni1726.SITE_CLASSES[site_class]

        if site_class == 'SF':
            logger.warning("Clase de sitio SF requiere estudio específico de sitio; "
                           "se usan coeficientes unitarios")

        fa, fv = self._site_coefficients(site_class, site.ss, site.s1)
        if site.fa is not None:
            fa = float(site.fa)
        if site.fv is not None:
            fv = float(site.fv)

        sms = site.ss * fa
        sm1 = site.s1 * fv
        sds = (2.0 / 3.0) * sms
        sd1 = (2.0 / 3.0) * sm1

        profile = SiteSeismicProfile(
            site_class=site_class,
            site_class_ordinal=class_info['ordinal'],
            risk_category=risk_category,
            latitude=site.latitude,
            longitude=site.longitude,
            ss=site.ss,
            s1=site.s1,
            fa=fa,
            fv=fv,
            sms=sms,
            sm1=sm1,
            sds=sds,
            sd1=sd1,
            pga=0.4 * site.ss,
            pgv=100.0 * site.s1,
            pgd=50.0 * site.s1,
            vs30=class_info['vs30'],
            soil_profile=class_info['description'],
            importance_factor=sni1726.RISK_CATEGORIES[risk_category]['importance_factor'],
        )

        logger.info(f"Perfil de sitio resuelto: clase={site_class}, Fa={fa:.3f}, Fv={fv:.3f}, "
                    f"SDS={sds:.3f}g, SD1={sd1:.3f}g")
        return profile

    def _resolve_site_class(self, site_class: str) -> str:
        normalized = normalize_site_class(site_class)
        if normalized is not None:
            return normalized

        if not self.config.allow_site_class_fallback:
            raise InvalidSiteParameter(f"Clase de sitio no reconocida: {site_class}",
                                       field='site_class', value=site_class)

        fallback = normalize_site_class(self.config.fallback_site_class)
        if fallback is None:
            raise InvalidSiteParameter(
                f"Clase de sitio de respaldo no reconocida: {self.config.fallback_site_class}",
                field='fallback_site_class', value=self.config.fallback_site_class)

        logger.warning(f"Clase de sitio '{site_class}' no reconocida, se usa '{fallback}'")
        return fallback

    def _site_coefficients(self, site_class: str, ss: float, s1: float) -> Tuple[float, float]:
        """Obtiene (Fa, Fv) por tabla fija o por interpolación"""
        if self.config.interpolate_site_coefficients:
            fa = _interpolate_coefficient(ss, sni1726.SS_GRID, sni1726.FA_TABLE[site_class])
            fv = _interpolate_coefficient(s1, sni1726.S1_GRID, sni1726.FV_TABLE[site_class])
            logger.debug(f"Coeficientes interpolados: Fa={fa:.3f}, Fv={fv:.3f}")
            return fa, fv

        fa = sni1726.SITE_CLASSES[site_class]['fa']
        fv = sni1726.SITE_CLASSES[site_class]['fv']

        # Menor sensibilidad del suelo ante movimientos intensos
        if ss > sni1726.HIGH_SS_LIMIT:
            fa *= sni1726.HIGH_INTENSITY_REDUCTION
        if s1 > sni1726.HIGH_S1_LIMIT:
            fv *= sni1726.HIGH_INTENSITY_REDUCTION

        return fa, fv
