"""
Tablas normativas y parámetros sísmicos comunes

Modules included:
- common_parameters: Constantes, enumeraciones y sistemas estructurales
- sni1726: Tablas de consulta SNI 1726:2019
"""

from . import sni1726
from .common_parameters import (
    SEISMIC_CONSTANTS,
    STRUCTURAL_SYSTEMS,
    DEFAULT_STRUCTURAL_SYSTEM,
    AnalysisKind,
    ComplianceStatus,
    GroundMotionSource,
    PerformanceLevel,
    get_reduction_factor,
)

__all__ = [
    'sni1726',
    'SEISMIC_CONSTANTS',
    'STRUCTURAL_SYSTEMS',
    'DEFAULT_STRUCTURAL_SYSTEM',
    'AnalysisKind',
    'ComplianceStatus',
    'GroundMotionSource',
    'PerformanceLevel',
    'get_reduction_factor',
]
