"""
Tablas normativas SNI 1726:2019
===============================

Tablas estáticas de consulta usadas por el pipeline: coeficientes de sitio,
categorías de riesgo, categoría de diseño sísmico (SDC), requisitos de
diseño, límites de deriva, niveles de desempeño y parámetros de fragilidad.

Las tablas son de solo lectura; ninguna etapa las modifica.
"""

import logging
from types import MappingProxyType

logger = logging.getLogger(__name__)

NORMATIVE_NAME = "SNI 1726:2019"

# Identificadores de cláusula para los veredictos
RULE_MIN_BASE_SHEAR = "SNI1726:2019-7.8.1.1"
RULE_DRIFT_LIMIT = "SNI1726:2019-7.12.1"
RULE_PDELTA = "SNI1726:2019-7.8.7"
RULE_REDUNDANCY = "SNI1726:2019-7.3.4"


# Clases de sitio (ordinal A-F)
SITE_CLASSES = MappingProxyType({
    'SA': {'ordinal': 0, 'fa': 0.8, 'fv': 0.8, 'vs30': 1500.0,
           'description': 'Hard rock with Vs30 > 1500 m/s'},
    'SB': {'ordinal': 1, 'fa': 1.0, 'fv': 1.0, 'vs30': 800.0,
           'description': 'Rock with 750 < Vs30 <= 1500 m/s'},
    'SC': {'ordinal': 2, 'fa': 1.2, 'fv': 1.5, 'vs30': 350.0,
           'description': 'Very dense soil/soft rock with 350 < Vs30 <= 750 m/s'},
    'SD': {'ordinal': 3, 'fa': 1.4, 'fv': 2.0, 'vs30': 200.0,
           'description': 'Stiff soil with 175 < Vs30 <= 350 m/s'},
    'SE': {'ordinal': 4, 'fa': 1.7, 'fv': 2.8, 'vs30': 150.0,
           'description': 'Soft clay soil with Vs30 < 175 m/s'},
    'SF': {'ordinal': 5, 'fa': 1.0, 'fv': 1.0, 'vs30': 100.0,
           'description': 'Special study required'},
})

# Reducción de coeficientes para movimientos intensos
HIGH_SS_LIMIT = 1.5
HIGH_S1_LIMIT = 0.75
HIGH_INTENSITY_REDUCTION = 0.9

# Tablas de interpolación Fa(Ss) y Fv(S1)
SS_GRID = (0.25, 0.5, 0.75, 1.0, 1.25)
S1_GRID = (0.1, 0.2, 0.3, 0.4, 0.5)

FA_TABLE = MappingProxyType({
    'SA': (0.8, 0.8, 0.8, 0.8, 0.8),
    'SB': (0.9, 0.9, 0.9, 0.9, 0.9),
    'SC': (1.2, 1.2, 1.1, 1.0, 1.0),
    'SD': (1.6, 1.4, 1.2, 1.1, 1.0),
    'SE': (2.5, 1.7, 1.2, 0.9, 0.8),
    'SF': (1.0, 1.0, 1.0, 1.0, 1.0),
})

FV_TABLE = MappingProxyType({
    'SA': (0.8, 0.8, 0.8, 0.8, 0.8),
    'SB': (0.9, 0.9, 0.9, 0.9, 0.9),
    'SC': (1.7, 1.6, 1.5, 1.4, 1.3),
    'SD': (2.4, 2.2, 2.0, 1.9, 1.8),
    'SE': (3.5, 3.2, 2.8, 2.4, 2.4),
    'SF': (1.0, 1.0, 1.0, 1.0, 1.0),
})


# Categorías de riesgo y factores de importancia
RISK_CATEGORIES = MappingProxyType({
    'I': {'importance_factor': 1.0, 'drift_limit': 0.020},
    'II': {'importance_factor': 1.0, 'drift_limit': 0.020},
    'III': {'importance_factor': 1.25, 'drift_limit': 0.020},
    'IV': {'importance_factor': 1.5, 'drift_limit': 0.015},
})


# Periodo fundamental aproximado Ta = Ct * hn^x
PERIOD_CT_REGULAR = 0.0488
PERIOD_CT_IRREGULAR = 0.0466
PERIOD_CT_HIGH_STRENGTH = 0.0466     # f'c >= 25 MPa
PERIOD_X = 0.9
HIGH_STRENGTH_FC = 25.0

# Coeficiente Cu para el límite superior del periodo (SD1 descendente)
CU_TABLE = (
    (0.4, 1.4),
    (0.3, 1.5),
    (0.2, 1.6),
    (0.0, 1.7),
)


# Categoría de diseño sísmico
SDC_ORDER = ('A', 'B', 'C', 'D', 'E', 'F')
HIGH_SDC = ('D', 'E', 'F')

DESIGN_REQUIREMENTS = MappingProxyType({
    'A': {'analysis': (), 'detailing': ()},
    'B': {'analysis': ('Equivalent lateral force analysis permitted',),
          'detailing': ('Ordinary moment frame detailing',)},
    'C': {'analysis': ('Equivalent lateral force analysis permitted',),
          'detailing': ('Intermediate moment frame detailing',)},
    'D': {'analysis': ('Dynamic analysis required',),
          'detailing': ('Special moment frame detailing', 'Enhanced column-beam joints')},
    'E': {'analysis': ('Dynamic analysis required',),
          'detailing': ('Special moment frame detailing', 'Enhanced column-beam joints')},
    'F': {'analysis': ('Dynamic analysis required',),
          'detailing': ('Special moment frame detailing', 'Enhanced column-beam joints')},
})

REDUNDANCY_FACTOR_HIGH_SDC = 1.3
REDUNDANCY_FACTOR_DEFAULT = 1.0


# Niveles de desempeño por deriva máxima
PERFORMANCE_DRIFT_LIMITS = (
    (0.005, 'IO'),
    (0.015, 'LS'),
)

# Elementos críticos y su fracción de la utilización por deriva
CRITICAL_ELEMENTS = (
    ('Beam-Critical', 0.85),
    ('Column-Critical', 0.75),
    ('Wall-Critical', 0.65),
)

DEMAND_CAPACITY_LABELS = (
    (0.6, 'Excellent'),
    (0.8, 'Good'),
    (1.0, 'Fair'),
)

# Curvas de fragilidad: (estado de daño, mediana [g], dispersión)
FRAGILITY_PARAMETERS = (
    ('Slight', 0.2, 0.4),
    ('Moderate', 0.4, 0.4),
    ('Extensive', 0.6, 0.4),
    ('Complete', 0.8, 0.4),
)

FRAGILITY_INTENSITIES = (0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8)


# Límites simplificados de irregularidad
PLAN_ASPECT_RATIO_LIMIT = 3.0
SLENDERNESS_LIMIT = 3.0
TORSIONAL_ASPECT_RATIO_LIMIT = 2.0
TALL_BUILDING_HEIGHT = 40.0
