"""
Módulo de validadores para el análisis sísmico dinámico
=======================================================

Este módulo centraliza las excepciones y funciones de validación de datos
de entrada utilizadas por todas las etapas del pipeline.

Tipos de validadores incluidos:
- Validadores de geometría y masa del edificio
- Validadores de amortiguamiento
- Validadores de parámetros de sitio
- Conversión de reportes de validación en excepciones
"""

import logging
import math
from typing import Dict, List, Any, Optional, Type

# Configurar logger
logger = logging.getLogger(__name__)

VALID_RISK_CATEGORIES = ('I', 'II', 'III', 'IV')
MAX_DAMPING_RATIO = 0.20


class ValidationError(Exception):
    """Excepción personalizada para errores de validación"""
    def __init__(self, message: str, field: str = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(self.message)


class InvalidInput(ValidationError):
    """Entrada inválida: aborta el análisis antes de cualquier cálculo"""


class InvalidSiteParameter(InvalidInput):
    """Parámetro de sitio inválido (Ss, S1, clase de sitio o categoría de riesgo)"""


class AnalysisConsistencyError(ValidationError):
    """Resultados de etapas inconsistentes entre sí"""


class ConvergenceWarning(UserWarning):
    """Participación de masa modal menor al umbral en algún eje"""


class ValidationReport:
    """Clase para reportes de validación estructurados"""

    def __init__(self):
        self.is_valid = True
        self.errors = []
        self.warnings = []
        self.field_validations = {}

    def add_error(self, message: str, field: str = None, value: Any = None):
        """Añade un error al reporte"""
        self.is_valid = False
        error_info = {'message': message, 'field': field, 'value': value}
        self.errors.append(error_info)

        if field:
            self.field_validations[field] = {'status': 'error', 'message': message}

    def add_warning(self, message: str, field: str = None, value: Any = None):
        """Añade una advertencia al reporte"""
        warning_info = {'message': message, 'field': field, 'value': value}
        self.warnings.append(warning_info)

        if field and field not in self.field_validations:
            self.field_validations[field] = {'status': 'warning', 'message': message}

    def add_success(self, field: str, message: str = "Válido"):
        """Marca un campo como válido"""
        self.field_validations[field] = {'status': 'valid', 'message': message}

    def merge(self, other: 'ValidationReport') -> 'ValidationReport':
        """Incorpora los resultados de otro reporte"""
        for error in other.errors:
            self.add_error(error['message'], error['field'], error['value'])
        for warning in other.warnings:
            self.add_warning(warning['message'], warning['field'], warning['value'])
        for field, info in other.field_validations.items():
            self.field_validations.setdefault(field, info)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convierte el reporte a diccionario"""
        return {
            'is_valid': self.is_valid,
            'errors': self.errors,
            'warnings': self.warnings,
            'field_validations': self.field_validations,
            'summary': {
                'total_errors': len(self.errors),
                'total_warnings': len(self.warnings),
                'total_fields': len(self.field_validations)
            }
        }


def raise_if_invalid(report: ValidationReport,
                     exc_class: Type[ValidationError] = InvalidInput) -> None:
    """
    Lanza una excepción si el reporte contiene errores

    Parameters
    ----------
    report : ValidationReport
        Reporte de validación
    exc_class : type
        Clase de excepción a lanzar

    Raises
    ------
    ValidationError
        Con todos los mensajes de error concatenados
    """
    if report.is_valid:
        return

    messages = [error['message'] for error in report.errors]
    first = report.errors[0]
    logger.error(f"Validación de entrada fallida: {'; '.join(messages)}")
    raise exc_class("Validación de entrada fallida:\n" + "\n".join(messages),
                    field=first['field'], value=first['value'])


# ============================================================================
# VALIDADORES DEL MODELO DEL EDIFICIO
# ============================================================================

def _is_finite_number(value: Any) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def validate_damping(ratio: float) -> ValidationReport:
    """
    Valida la razón de amortiguamiento

    Parameters
    ----------
    ratio : float
        Razón de amortiguamiento crítico

    Returns
    -------
    ValidationReport
        Reporte de validación
    """
    report = ValidationReport()

    if not _is_finite_number(ratio):
        report.add_error("Razón de amortiguamiento debe ser numérica", "damping_ratio", ratio)
    elif not (0.0 <= ratio <= MAX_DAMPING_RATIO):
        report.add_error(f"Razón de amortiguamiento debe estar entre 0 y {MAX_DAMPING_RATIO}",
                         "damping_ratio", ratio)
    else:
        if ratio == 0.0:
            report.add_warning("Estructura sin amortiguamiento", "damping_ratio", ratio)
        report.add_success("damping_ratio", f"Amortiguamiento válido: {ratio:.1%}")

    return report


def validate_building_model(building: Any) -> ValidationReport:
    """
    Valida geometría, masas y amortiguamiento del edificio

    Parameters
    ----------
    building : BuildingModel
        Modelo del edificio

    Returns
    -------
    ValidationReport
        Reporte de validación
    """
    report = ValidationReport()
    geometry = building.geometry
    masses = building.masses

    # Geometría
    if geometry.number_of_floors < 1:
        report.add_error("Número de pisos debe ser al menos 1",
                         "number_of_floors", geometry.number_of_floors)
    if geometry.floor_height <= 0:
        report.add_error("Altura de entrepiso debe ser mayor a 0",
                         "floor_height", geometry.floor_height)
    if geometry.length <= 0 or geometry.width <= 0:
        report.add_error("Dimensiones en planta deben ser mayores a 0",
                         "plan_dimensions", (geometry.length, geometry.width))
    if geometry.story_heights is not None:
        if len(geometry.story_heights) != geometry.number_of_floors:
            report.add_error("Cantidad de alturas de entrepiso no coincide con el número de pisos",
                             "story_heights", len(geometry.story_heights))
        elif any(h <= 0 for h in geometry.story_heights):
            report.add_error("Alturas de entrepiso deben ser mayores a 0",
                             "story_heights", geometry.story_heights)

    # Masas
    if not _is_finite_number(masses.total_mass) or masses.total_mass <= 0:
        report.add_error("Masa total debe ser mayor a 0", "total_mass", masses.total_mass)
    if masses.floor_masses is not None:
        if len(masses.floor_masses) != geometry.number_of_floors:
            report.add_error("Cantidad de masas por piso no coincide con el número de pisos",
                             "floor_masses", len(masses.floor_masses))
        elif any(m <= 0 for m in masses.floor_masses):
            report.add_error("Masas por piso deben ser mayores a 0",
                             "floor_masses", masses.floor_masses)
        elif masses.total_mass > 0:
            mass_sum = sum(masses.floor_masses)
            if abs(mass_sum - masses.total_mass) > 0.01 * masses.total_mass:
                report.add_warning(
                    f"Suma de masas por piso ({mass_sum:.1f}) difiere de la masa total "
                    f"({masses.total_mass:.1f})", "floor_masses", mass_sum)

    # Rigidez de entrepiso opcional
    if building.story_stiffness is not None:
        if len(building.story_stiffness) != geometry.number_of_floors:
            report.add_error("Cantidad de rigideces no coincide con el número de pisos",
                             "story_stiffness", len(building.story_stiffness))
        elif any(k <= 0 for k in building.story_stiffness):
            report.add_error("Rigideces de entrepiso deben ser mayores a 0",
                             "story_stiffness", building.story_stiffness)

    report.merge(validate_damping(building.damping.ratio))

    if report.is_valid:
        report.add_success("building", "Modelo del edificio válido")

    return report


# ============================================================================
# VALIDADORES DE PARÁMETROS DE SITIO
# ============================================================================

def validate_site_input(site: Any, known_site_classes: Optional[List[str]] = None,
                        allow_fallback: bool = False) -> ValidationReport:
    """
    Valida parámetros sísmicos de sitio

    Parameters
    ----------
    site : SiteInput
        Datos de sitio
    known_site_classes : List[str], optional
        Clases de sitio reconocidas
    allow_fallback : bool
        Si una clase de sitio desconocida se reporta como advertencia

    Returns
    -------
    ValidationReport
        Reporte de validación
    """
    report = ValidationReport()

    if not _is_finite_number(site.ss) or site.ss < 0:
        report.add_error("Aceleración espectral Ss no puede ser negativa", "ss", site.ss)
    elif site.ss > 3.0:
        report.add_warning(f"Ss muy alto ({site.ss:.2f}g), verificar", "ss", site.ss)
    else:
        report.add_success("ss", f"Ss válido: {site.ss:.3f}g")

    if not _is_finite_number(site.s1) or site.s1 < 0:
        report.add_error("Aceleración espectral S1 no puede ser negativa", "s1", site.s1)
    elif site.s1 > 1.5:
        report.add_warning(f"S1 muy alto ({site.s1:.2f}g), verificar", "s1", site.s1)
    else:
        report.add_success("s1", f"S1 válido: {site.s1:.3f}g")

    if str(site.risk_category).upper() not in VALID_RISK_CATEGORIES:
        report.add_error(f"Categoría de riesgo no reconocida: {site.risk_category}",
                         "risk_category", site.risk_category)

    if known_site_classes is not None:
        site_class = str(site.site_class).strip().upper()
        aliases = set(known_site_classes) | {c[-1] for c in known_site_classes}
        if site_class not in aliases:
            if allow_fallback:
                report.add_warning(f"Clase de sitio no reconocida: {site.site_class}",
                                   "site_class", site.site_class)
            else:
                report.add_error(f"Clase de sitio no reconocida: {site.site_class}",
                                 "site_class", site.site_class)

    for name in ('fa', 'fv'):
        value = getattr(site, name)
        if value is not None and (not _is_finite_number(value) or value < 0):
            report.add_error(f"Coeficiente de sitio {name} no puede ser negativo", name, value)

    if not (-90.0 <= site.latitude <= 90.0) or not (-180.0 <= site.longitude <= 180.0):
        report.add_warning("Coordenadas fuera de rango", "coordinates",
                           (site.latitude, site.longitude))

    return report


__all__ = [
    'ValidationError',
    'InvalidInput',
    'InvalidSiteParameter',
    'AnalysisConsistencyError',
    'ConvergenceWarning',
    'ValidationReport',
    'raise_if_invalid',
    'validate_damping',
    'validate_building_model',
    'validate_site_input',
    'VALID_RISK_CATEGORIES',
    'MAX_DAMPING_RATIO',
]
