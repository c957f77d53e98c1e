"""
Parámetros sísmicos comunes del análisis dinámico
=================================================

Este módulo define constantes, enumeraciones y tablas de sistemas
estructurales compartidas por todas las etapas del pipeline.

Ejemplo de uso:
    ```python
    from seismic_dynamic.data.standards.common_parameters import (
        SEISMIC_CONSTANTS,
        STRUCTURAL_SYSTEMS,
        get_reduction_factor
    )

    gravity = SEISMIC_CONSTANTS['GRAVITY']
    r_factor = get_reduction_factor('concrete_moment_frame')
    ```
"""

# Metadatos del módulo
__version__ = "1.0.0"
__author__ = "Proyecto Seismic Dynamic"
__description__ = "Parámetros sísmicos comunes del análisis dinámico"
__license__ = "MIT"
__status__ = "Production"

import logging
from enum import Enum

# Configurar logging
logger = logging.getLogger(__name__)


# Enumeraciones básicas

class AnalysisKind(Enum):
    """Variantes del resultado del análisis"""
    STATIC = "static"
    DYNAMIC = "dynamic"
    COMBINED = "combined"


class ComplianceStatus(Enum):
    """Estado de una verificación normativa"""
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"


class PerformanceLevel(Enum):
    """Niveles de desempeño ordinales"""
    IMMEDIATE_OCCUPANCY = "IO"
    LIFE_SAFETY = "LS"
    COLLAPSE_PREVENTION = "CP"


class GroundMotionSource(Enum):
    """Origen de los registros sísmicos"""
    SYNTHETIC = "synthetic"
    RECORDED = "recorded"


# Constantes sísmicas fundamentales

SEISMIC_CONSTANTS = {
    # Constantes físicas
    'GRAVITY': 9.81,                        # m/s²
    'DEFAULT_DAMPING': 0.05,                # 5%

    # Participación de masa
    'MIN_MASS_PARTICIPATION': 0.90,         # 90%

    # Espectro
    'LONG_PERIOD_TRANSITION': 8.0,          # TL (s)
    'SPECTRUM_STEP': 0.01,                  # s
    'SPECTRUM_MAX_PERIOD': 10.0,            # s

    # Cortante basal mínimo
    'MIN_BASE_SHEAR': 0.044,                # 4.4% SDS
    'MIN_BASE_SHEAR_ABSOLUTE': 0.01,        # Cs mínimo absoluto

    # Escalamiento del análisis dinámico
    'MIN_DYNAMIC_SCALE_REGULAR': 0.80,      # 80%
    'MIN_DYNAMIC_SCALE_IRREGULAR': 0.90,    # 90%

    # Combinación modal
    'CQC_FACTOR': 1.10,

    # Modos
    'MAX_MODES': 30,
    'MODES_PER_FLOOR': 3,

    # P-Delta
    'PDELTA_THRESHOLD': 0.10,
}


# Sistemas estructurales y sus factores R básicos

STRUCTURAL_SYSTEMS = {
    # Sistemas de concreto armado
    'concrete_moment_frame': {
        'name_es': 'Pórticos Especiales de Concreto Armado',
        'name_en': 'Special Reinforced Concrete Moment Frames',
        'R': 8.0,
        'Cd': 5.5,
        'material': 'concrete'
    },
    'concrete_dual': {
        'name_es': 'Sistema Dual de Concreto Armado',
        'name_en': 'Reinforced Concrete Dual System',
        'R': 7.0,
        'Cd': 5.5,
        'material': 'concrete'
    },
    'concrete_shear_wall': {
        'name_es': 'Muros Especiales de Concreto Armado',
        'name_en': 'Special Reinforced Concrete Shear Walls',
        'R': 6.0,
        'Cd': 5.0,
        'material': 'concrete'
    },
    'concrete_ordinary_frame': {
        'name_es': 'Pórticos Ordinarios de Concreto Armado',
        'name_en': 'Ordinary Reinforced Concrete Moment Frames',
        'R': 3.0,
        'Cd': 2.5,
        'material': 'concrete'
    },

    # Sistemas de acero
    'steel_smf': {
        'name_es': 'Pórticos Especiales de Acero Resistentes a Momento',
        'name_en': 'Special Steel Moment Frames (SMF)',
        'R': 8.0,
        'Cd': 5.5,
        'material': 'steel'
    },
    'steel_imf': {
        'name_es': 'Pórticos Intermedios de Acero Resistentes a Momento',
        'name_en': 'Intermediate Steel Moment Frames (IMF)',
        'R': 4.5,
        'Cd': 4.0,
        'material': 'steel'
    },
    'steel_omf': {
        'name_es': 'Pórticos Ordinarios de Acero Resistentes a Momento',
        'name_en': 'Ordinary Steel Moment Frames (OMF)',
        'R': 3.5,
        'Cd': 3.0,
        'material': 'steel'
    },
    'steel_scbf': {
        'name_es': 'Pórticos de Acero Concéntricamente Arriostrados Especiales',
        'name_en': 'Special Concentrically Braced Frames (SCBF)',
        'R': 6.0,
        'Cd': 5.0,
        'material': 'steel'
    },
    'steel_ebf': {
        'name_es': 'Pórticos de Acero Excéntricamente Arriostrados',
        'name_en': 'Eccentrically Braced Frames (EBF)',
        'R': 8.0,
        'Cd': 4.0,
        'material': 'steel'
    },
}

DEFAULT_STRUCTURAL_SYSTEM = 'concrete_moment_frame'


def get_reduction_factor(system: str) -> float:
    """
    Obtiene el factor de modificación de respuesta R

    Parameters
    ----------
    system : str
        Clave del sistema estructural

    Returns
    -------
    float
        Factor R del sistema (el del sistema por defecto si no se reconoce)
    """
    if system not in STRUCTURAL_SYSTEMS:
        logger.warning(f"Sistema estructural '{system}' no reconocido, "
                       f"se usa '{DEFAULT_STRUCTURAL_SYSTEM}'")
        system = DEFAULT_STRUCTURAL_SYSTEM
    return STRUCTURAL_SYSTEMS[system]['R']
