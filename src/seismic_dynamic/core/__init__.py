"""
Seismic Dynamic Core Module

Configuración central del paquete de análisis sísmico dinámico.
Proporciona la configuración por defecto, el sistema de logging y la
clase de configuración inmutable que comparten todas las etapas del
análisis.

Modules included:
- config: Configuración inmutable del análisis (AnalysisConfig)
"""

import copy
import logging
from typing import Dict, Any

from ..data.standards.common_parameters import SEISMIC_CONSTANTS

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Información del módulo
__version__ = "1.0.0"
__author__ = "Seismic Dynamic Project"


# Configuración global por defecto del sistema
DEFAULT_CONFIG = {
    'analysis': {
        'max_workers': 1,
        'allow_site_class_fallback': False,
        'fallback_site_class': 'SC',
        'interpolate_site_coefficients': False
    },
    'spectrum': {
        'step': SEISMIC_CONSTANTS['SPECTRUM_STEP'],
        'max_period': SEISMIC_CONSTANTS['SPECTRUM_MAX_PERIOD'],
        'long_period_transition': SEISMIC_CONSTANTS['LONG_PERIOD_TRANSITION']
    },
    'modal': {
        'mass_participation_threshold': SEISMIC_CONSTANTS['MIN_MASS_PARTICIPATION'],
        'min_modes': 0,
        'cqc_factor': SEISMIC_CONSTANTS['CQC_FACTOR']
    },
    'time_history': {
        'seed': 0
    },
    'compliance': {
        'drift_warning_fraction': 0.8,
        'pdelta_threshold': SEISMIC_CONSTANTS['PDELTA_THRESHOLD']
    }
}


def get_version() -> str:
    """
    Obtiene la versión del módulo core

    Returns
    -------
    str
        Versión del módulo
    """
    return __version__


def get_config() -> Dict[str, Any]:
    """
    Obtiene la configuración por defecto del sistema

    Returns
    -------
    Dict[str, Any]
        Copia profunda de la configuración por defecto
    """
    return copy.deepcopy(DEFAULT_CONFIG)


def setup_logging(level: str = 'INFO') -> None:
    """
    Configura el sistema de logging

    Parameters
    ----------
    level : str
        Nivel de logging ('DEBUG', 'INFO', 'WARNING', 'ERROR')
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


from .config import AnalysisConfig  # noqa: E402

__all__ = [
    'DEFAULT_CONFIG',
    'AnalysisConfig',
    'get_version',
    'get_config',
    'setup_logging',
]
