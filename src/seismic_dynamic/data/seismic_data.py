"""
Registros de datos del análisis sísmico dinámico
================================================

Este módulo define los registros inmutables que se transmiten entre las
etapas del pipeline. Cada etapa recibe registros de las etapas previas y
produce uno nuevo; ningún registro se modifica después de creado.

Unidades:
- Masa en kg, longitudes en m, fuerzas en N
- Aceleraciones espectrales en g
- Aceleraciones de registros sísmicos en m/s²
- Tiempo y periodos en s

Registros principales:
- Entradas: BuildingGeometry, MaterialSummary, MassDistribution, Damping,
  BuildingModel, SiteInput, GroundMotionRecord
- Etapas: SiteSeismicProfile, DesignSpectrum, Mode, ModalAnalysisResult,
  ModalResponse, ResponseCombination, StoryResponse, StaticForceResult,
  TimeHistoryTrace, ComplianceVerdict, ComplianceReport, PerformanceAssessment
- Resultado: StaticAnalysisResult, DynamicAnalysisResult, CombinedAnalysisResult
"""

# Metadatos del módulo
__version__ = "1.0.0"
__author__ = "Proyecto Seismic Dynamic"
__description__ = "Registros inmutables del análisis sísmico dinámico"
__license__ = "MIT"
__status__ = "Production"

import logging
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Sequence, Tuple

import numpy as np

from .standards.common_parameters import (
    SEISMIC_CONSTANTS,
    DEFAULT_STRUCTURAL_SYSTEM,
    AnalysisKind,
    ComplianceStatus,
    PerformanceLevel,
)

# Configurar logging
logger = logging.getLogger(__name__)

GRAVITY = SEISMIC_CONSTANTS['GRAVITY']


def _to_serializable(value: Any) -> Any:
    """Convierte recursivamente registros, arreglos y enumeraciones a tipos JSON"""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_serializable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, (np.integer,)):
        return int(value)
    if isinstance(value, (np.floating,)):
        return float(value)
    if isinstance(value, dict):
        return {str(k): _to_serializable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_serializable(v) for v in value]
    return value


def _frozen_array(values: Sequence[float]) -> np.ndarray:
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


class SerializableRecord:
    """Mixin para registros convertibles a diccionario"""

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario serializable a JSON"""
        return _to_serializable(self)


@dataclass(frozen=True)
class AxisValues(SerializableRecord):
    """Valores por eje (traslación X, traslación Y, torsión)"""
    x: float
    y: float
    rz: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.rz)

    def minimum(self) -> float:
        return min(self.as_tuple())


@dataclass(frozen=True)
class DirectionalValues(SerializableRecord):
    """Valores por dirección horizontal"""
    x: float
    y: float

    def maximum(self) -> float:
        return max(self.x, self.y)


# ============================================================================
# REGISTROS DE ENTRADA
# ============================================================================

@dataclass(frozen=True)
class BuildingGeometry(SerializableRecord):
    """Descriptor geométrico del edificio"""
    length: float
    width: float
    floor_height: float
    number_of_floors: int
    bay_spacing_x: float = 6.0
    bay_spacing_y: float = 6.0
    irregular: bool = False
    story_heights: Optional[Tuple[float, ...]] = None

    def __post_init__(self):
        if self.story_heights is not None:
            object.__setattr__(self, 'story_heights',
                               tuple(float(h) for h in self.story_heights))

    @property
    def height(self) -> float:
        """Altura total del edificio"""
        if self.story_heights is not None:
            return float(sum(self.story_heights))
        return self.floor_height * self.number_of_floors

    @property
    def aspect_ratio(self) -> float:
        """Relación largo/ancho en planta"""
        return max(self.length, self.width) / min(self.length, self.width)

    def story_height_array(self) -> np.ndarray:
        """Alturas de entrepiso (piso 1..N)"""
        if self.story_heights is not None:
            return np.array(self.story_heights, dtype=float)
        return np.full(self.number_of_floors, float(self.floor_height))

    def floor_elevations(self) -> np.ndarray:
        """Elevaciones de cada piso sobre la base"""
        return np.cumsum(self.story_height_array())


@dataclass(frozen=True)
class MaterialSummary(SerializableRecord):
    """Resumen de materiales (solo para dimensionamiento ilustrativo)"""
    fc: float = 25.0            # MPa
    fy: float = 420.0           # MPa
    es: float = 200000.0        # MPa
    ec: float = 23500.0         # MPa
    structural_system: str = DEFAULT_STRUCTURAL_SYSTEM


@dataclass(frozen=True)
class MassDistribution(SerializableRecord):
    """Distribución de masas del edificio"""
    total_mass: float
    floor_masses: Optional[Tuple[float, ...]] = None
    centers_of_mass: Optional[Tuple[Tuple[float, float], ...]] = None

    def __post_init__(self):
        if self.floor_masses is not None:
            object.__setattr__(self, 'floor_masses',
                               tuple(float(m) for m in self.floor_masses))
        if self.centers_of_mass is not None:
            object.__setattr__(self, 'centers_of_mass',
                               tuple((float(x), float(y)) for x, y in self.centers_of_mass))


@dataclass(frozen=True)
class Damping(SerializableRecord):
    """Amortiguamiento de la estructura"""
    ratio: float = SEISMIC_CONSTANTS['DEFAULT_DAMPING']
    damping_type: str = "proportional"


@dataclass(frozen=True)
class BuildingModel(SerializableRecord):
    """Modelo completo del edificio consumido por el pipeline"""
    geometry: BuildingGeometry
    masses: MassDistribution
    materials: MaterialSummary = field(default_factory=MaterialSummary)
    damping: Damping = field(default_factory=Damping)
    story_stiffness: Optional[Tuple[float, ...]] = None     # N/m por entrepiso

    def __post_init__(self):
        if self.story_stiffness is not None:
            object.__setattr__(self, 'story_stiffness',
                               tuple(float(k) for k in self.story_stiffness))

    @property
    def number_of_floors(self) -> int:
        return self.geometry.number_of_floors

    @property
    def height(self) -> float:
        return self.geometry.height

    @property
    def total_mass(self) -> float:
        return self.masses.total_mass

    @property
    def weight(self) -> float:
        """Peso sísmico W = M·g (N)"""
        return self.masses.total_mass * GRAVITY

    def floor_mass_array(self) -> np.ndarray:
        """Masas por piso; distribución uniforme si no se especifican"""
        if self.masses.floor_masses is not None:
            return np.array(self.masses.floor_masses, dtype=float)
        n = self.geometry.number_of_floors
        return np.full(n, self.masses.total_mass / n)

    def floor_elevations(self) -> np.ndarray:
        return self.geometry.floor_elevations()

    def story_height_array(self) -> np.ndarray:
        return self.geometry.story_height_array()


@dataclass(frozen=True)
class SiteInput(SerializableRecord):
    """Parámetros sísmicos de sitio sin procesar"""
    site_class: str
    ss: float
    s1: float
    risk_category: str = "II"
    latitude: float = 0.0
    longitude: float = 0.0
    fa: Optional[float] = None
    fv: Optional[float] = None


@dataclass(frozen=True, eq=False)
class GroundMotionRecord(SerializableRecord):
    """Registro de aceleración del suelo (m/s²)"""
    id: str
    name: str
    timestep: float
    acceleration: np.ndarray
    velocity: np.ndarray
    displacement: np.ndarray
    magnitude: float = 0.0
    distance: float = 0.0
    earthquake: str = ""
    station: str = ""

    def __post_init__(self):
        for name in ('acceleration', 'velocity', 'displacement'):
            object.__setattr__(self, name, _frozen_array(getattr(self, name)))

    @property
    def duration(self) -> float:
        return self.timestep * len(self.acceleration)

    @property
    def time(self) -> np.ndarray:
        return np.arange(len(self.acceleration)) * self.timestep

    @classmethod
    def from_acceleration(cls, id: str, name: str, acceleration: Sequence[float],
                          timestep: float, **kwargs) -> 'GroundMotionRecord':
        """
        Crea un registro integrando la aceleración (regla del trapecio)

        Parameters
        ----------
        id : str
            Identificador del registro
        name : str
            Nombre descriptivo
        acceleration : Sequence[float]
            Serie de aceleraciones (m/s²)
        timestep : float
            Paso de tiempo (s)

        Returns
        -------
        GroundMotionRecord
            Registro con velocidad y desplazamiento integrados
        """
        acc = np.asarray(acceleration, dtype=float)
        velocity = _integrate_trapezoid(acc, timestep)
        displacement = _integrate_trapezoid(velocity, timestep)
        return cls(id=id, name=name, timestep=timestep, acceleration=acc,
                   velocity=velocity, displacement=displacement, **kwargs)


def _integrate_trapezoid(values: np.ndarray, dt: float) -> np.ndarray:
    result = np.zeros_like(values)
    if len(values) > 1:
        result[1:] = np.cumsum((values[1:] + values[:-1]) * dt / 2.0)
    return result


# ============================================================================
# REGISTROS DE SITIO Y ESPECTRO
# ============================================================================

@dataclass(frozen=True)
class SiteSeismicProfile(SerializableRecord):
    """Parámetros de sitio resueltos (inmutable)"""
    site_class: str
    site_class_ordinal: int
    risk_category: str
    latitude: float
    longitude: float
    ss: float
    s1: float
    fa: float
    fv: float
    sms: float
    sm1: float
    sds: float
    sd1: float
    pga: float              # g
    pgv: float              # cm/s
    pgd: float              # cm
    vs30: float             # m/s
    soil_profile: str
    importance_factor: float


@dataclass(frozen=True, eq=False)
class DesignSpectrum(SerializableRecord):
    """Espectro de diseño muestreado (aceleración en g)"""
    periods: np.ndarray
    accelerations: np.ndarray
    velocities: np.ndarray
    displacements: np.ndarray
    sds: float
    sd1: float
    t0: float
    ts: float
    tl: float

    def __post_init__(self):
        for name in ('periods', 'accelerations', 'velocities', 'displacements'):
            object.__setattr__(self, name, _frozen_array(getattr(self, name)))

    @property
    def is_degenerate(self) -> bool:
        """Espectro nulo (SDS = 0)"""
        return self.sds == 0.0

    def acceleration_at(self, period: float) -> float:
        """Aceleración espectral exacta Sa(T) por la función por tramos (g)"""
        from ..analysis.spectrum import design_spectral_acceleration
        return design_spectral_acceleration(period, self.sds, self.sd1,
                                            self.t0, self.ts, self.tl)

    def interpolate(self, period: float) -> float:
        """
        Aceleración espectral por interpolación lineal sobre las muestras

        Los periodos fuera del dominio muestreado se acotan a los extremos.

        Parameters
        ----------
        period : float
            Periodo (s)

        Returns
        -------
        float
            Aceleración espectral (g)
        """
        return float(np.interp(period, self.periods, self.accelerations))


# ============================================================================
# REGISTROS MODALES
# ============================================================================

@dataclass(frozen=True)
class Mode(SerializableRecord):
    """Modo de vibración"""
    index: int
    period: float
    frequency: float
    damping_ratio: float
    modal_mass: AxisValues
    participation_factor: AxisValues
    effective_mass: AxisValues
    cumulative_mass_fraction: AxisValues
    shape: Tuple[float, ...]


@dataclass(frozen=True)
class ModalAnalysisResult(SerializableRecord):
    """Resultado del análisis modal"""
    modes: Tuple[Mode, ...]
    total_mass: float
    participating_mass: AxisValues
    mass_threshold: float
    converged: bool
    convergence_warning: Optional[str] = None

    @property
    def fundamental_period(self) -> float:
        return self.modes[0].period

    @property
    def total_modes(self) -> int:
        return len(self.modes)


@dataclass(frozen=True)
class ModalResponse(SerializableRecord):
    """Respuesta espectral de un modo"""
    mode: int
    period: float
    spectral_acceleration: float        # g
    spectral_displacement: float        # m
    base_shear: DirectionalValues       # N
    displacement: DirectionalValues     # m
    acceleration: DirectionalValues     # m/s²


@dataclass(frozen=True)
class CombinedResponse(SerializableRecord):
    """Respuesta combinada según una regla de combinación modal"""
    method: str
    displacement: DirectionalValues
    acceleration: DirectionalValues
    base_shear: DirectionalValues


@dataclass(frozen=True)
class ResponseCombination(SerializableRecord):
    """Respuestas modales y sus combinaciones SRSS y CQC"""
    modal_responses: Tuple[ModalResponse, ...]
    srss: CombinedResponse
    cqc: CombinedResponse

    @property
    def base_shear(self) -> DirectionalValues:
        """Cortante basal de diseño (CQC)"""
        return self.cqc.base_shear

    @property
    def roof_displacement(self) -> float:
        return self.cqc.displacement.maximum()


# ============================================================================
# REGISTROS DE FUERZAS DE PISO
# ============================================================================

@dataclass(frozen=True)
class StoryResponse(SerializableRecord):
    """Respuesta de un piso"""
    floor: int
    elevation: float
    force_x: float
    force_y: float
    story_shear_x: float
    story_shear_y: float
    displacement: float         # m
    drift: float                # m
    drift_ratio: float
    acceleration: float         # m/s²


@dataclass(frozen=True)
class StaticForceResult(SerializableRecord):
    """Resultado del método de fuerza lateral equivalente"""
    approximate_period: float       # Ta
    max_period: float               # Cu·Ta
    cu: float
    design_period: float
    cs: float
    cs_min: float
    cs_max: float
    response_modification: float    # R
    importance_factor: float
    weight: float
    base_shear: DirectionalValues
    distribution_exponent: float
    stories: Tuple[StoryResponse, ...]


@dataclass(frozen=True)
class DynamicScaling(SerializableRecord):
    """Escalamiento del cortante dinámico respecto al estático"""
    static_base_shear: DirectionalValues
    dynamic_base_shear: DirectionalValues
    minimum_fraction: float
    scale_factor: DirectionalValues

    @property
    def requires_scaling(self) -> bool:
        return self.scale_factor.maximum() > 1.0

    @property
    def design_base_shear(self) -> DirectionalValues:
        """
        Cortante basal de diseño por dirección

        Un cortante dinámico nulo no puede escalarse; en ese caso se adopta
        la fracción mínima del cortante estático.
        """
        def _design(static: float, dynamic: float, factor: float) -> float:
            if dynamic <= 0:
                return self.minimum_fraction * static
            return dynamic * factor

        return DirectionalValues(
            _design(self.static_base_shear.x, self.dynamic_base_shear.x, self.scale_factor.x),
            _design(self.static_base_shear.y, self.dynamic_base_shear.y, self.scale_factor.y),
        )


# ============================================================================
# REGISTROS TIEMPO-HISTORIA
# ============================================================================

@dataclass(frozen=True)
class FloorPeak(SerializableRecord):
    """Respuestas máximas de un piso"""
    floor: int
    displacement_x: float
    displacement_y: float
    displacement_time: float
    acceleration_x: float
    acceleration_y: float
    acceleration_time: float


@dataclass(frozen=True)
class StoryDriftPeak(SerializableRecord):
    """Deriva máxima de un entrepiso"""
    story: int
    drift: float
    time: float


@dataclass(frozen=True)
class EnergyDissipation(SerializableRecord):
    """Energía disipada (viscosa + histerética = total)"""
    total: float
    viscous: float
    hysteretic: float


@dataclass(frozen=True, eq=False)
class TimeHistoryTrace(SerializableRecord):
    """Respuesta tiempo-historia aproximada"""
    record_id: str
    record_name: str
    source: str
    seed: Optional[int]
    floor_peaks: Tuple[FloorPeak, ...]
    story_drifts: Tuple[StoryDriftPeak, ...]
    time: np.ndarray
    base_shear_x: np.ndarray
    base_shear_y: np.ndarray
    energy: EnergyDissipation

    def __post_init__(self):
        for name in ('time', 'base_shear_x', 'base_shear_y'):
            object.__setattr__(self, name, _frozen_array(getattr(self, name)))

    @property
    def max_drift(self) -> float:
        if not self.story_drifts:
            return 0.0
        return max(d.drift for d in self.story_drifts)

    @property
    def peak_base_shear(self) -> DirectionalValues:
        if len(self.time) == 0:
            return DirectionalValues(0.0, 0.0)
        return DirectionalValues(float(np.max(np.abs(self.base_shear_x))),
                                 float(np.max(np.abs(self.base_shear_y))))


# ============================================================================
# REGISTROS DE VERIFICACIÓN NORMATIVA
# ============================================================================

@dataclass(frozen=True)
class ComplianceVerdict(SerializableRecord):
    """Resultado de una verificación normativa"""
    rule_id: str
    description: str
    required: float
    actual: float
    unit: str
    status: ComplianceStatus
    story: Optional[int] = None

    @property
    def passed(self) -> bool:
        return self.status != ComplianceStatus.FAIL


@dataclass(frozen=True)
class DesignRequirements(SerializableRecord):
    """Requisitos de análisis y detallado por categoría sísmica"""
    analysis: Tuple[str, ...]
    detailing: Tuple[str, ...]
    irregularity_penalties: Tuple[str, ...]


@dataclass(frozen=True)
class IrregularityCheck(SerializableRecord):
    """Verificación simplificada de irregularidades"""
    plan: bool
    vertical: bool
    torsional: bool
    requires_dynamic: bool
    aspect_ratio: float
    slenderness: float


@dataclass(frozen=True)
class ComplianceReport(SerializableRecord):
    """Conjunto de veredictos normativos"""
    verdicts: Tuple[ComplianceVerdict, ...]
    sdc: str
    requirements: DesignRequirements
    irregularity: IrregularityCheck
    allowable_drift_ratio: float
    redundancy_factor: float
    pdelta_ratio: float

    def by_rule(self, rule_id: str) -> Tuple[ComplianceVerdict, ...]:
        return tuple(v for v in self.verdicts if v.rule_id == rule_id)

    @property
    def failures(self) -> Tuple[ComplianceVerdict, ...]:
        return tuple(v for v in self.verdicts if v.status == ComplianceStatus.FAIL)


@dataclass(frozen=True)
class DemandCapacityRatio(SerializableRecord):
    """Relación demanda/capacidad de un elemento crítico"""
    element: str
    demand: float
    capacity: float
    ratio: float
    performance: str


@dataclass(frozen=True)
class FragilityCurve(SerializableRecord):
    """Curva de fragilidad por estado de daño"""
    damage_state: str
    median: float
    dispersion: float
    intensities: Tuple[float, ...]
    probabilities: Tuple[float, ...]


@dataclass(frozen=True)
class PerformanceAssessment(SerializableRecord):
    """Evaluación de desempeño"""
    level: PerformanceLevel
    max_drift_ratio: float
    demand_capacity: Tuple[DemandCapacityRatio, ...]
    fragility_curves: Tuple[FragilityCurve, ...]


# ============================================================================
# RESULTADO DEL ANÁLISIS
# ============================================================================

@dataclass(frozen=True)
class AnalysisMetadata(SerializableRecord):
    """Metadatos de reproducibilidad del análisis"""
    version: str
    normative: str
    ground_motion_seed: Optional[int] = None
    ground_motion_source: Optional[str] = None
    ground_motion_record: Optional[str] = None
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())


@dataclass(frozen=True, eq=False)
class AnalysisResult(SerializableRecord):
    """Base común de las variantes del resultado"""
    kind: ClassVar[AnalysisKind]

    site: SiteSeismicProfile
    spectrum: DesignSpectrum
    compliance: ComplianceReport
    performance: PerformanceAssessment
    recommendations: Tuple[str, ...]
    warnings: Tuple[str, ...]
    metadata: AnalysisMetadata

    @property
    def sdc(self) -> str:
        return self.compliance.sdc

    @property
    def verdicts(self) -> Tuple[ComplianceVerdict, ...]:
        return self.compliance.verdicts

    def to_dict(self) -> Dict[str, Any]:
        data = _to_serializable(self)
        data['kind'] = self.kind.value
        return data


@dataclass(frozen=True, eq=False)
class StaticAnalysisResult(AnalysisResult):
    """Resultado del análisis estático (fuerza lateral equivalente)"""
    kind: ClassVar[AnalysisKind] = AnalysisKind.STATIC

    static: StaticForceResult

    @property
    def stories(self) -> Tuple[StoryResponse, ...]:
        return self.static.stories


@dataclass(frozen=True, eq=False)
class DynamicAnalysisResult(AnalysisResult):
    """Resultado del análisis dinámico (modal espectral + tiempo-historia)"""
    kind: ClassVar[AnalysisKind] = AnalysisKind.DYNAMIC

    modal: ModalAnalysisResult
    combination: ResponseCombination
    stories: Tuple[StoryResponse, ...]
    time_history: TimeHistoryTrace

    @property
    def converged(self) -> bool:
        return self.modal.converged


@dataclass(frozen=True, eq=False)
class CombinedAnalysisResult(AnalysisResult):
    """Resultado combinado (dinámico y estático con escalamiento)"""
    kind: ClassVar[AnalysisKind] = AnalysisKind.COMBINED

    modal: ModalAnalysisResult
    combination: ResponseCombination
    stories: Tuple[StoryResponse, ...]
    time_history: TimeHistoryTrace
    static: StaticForceResult
    scaling: DynamicScaling

    @property
    def converged(self) -> bool:
        return self.modal.converged


def max_drift_ratio(stories: Sequence[StoryResponse]) -> float:
    """Deriva máxima de un conjunto de pisos"""
    if not stories:
        return 0.0
    return max(s.drift_ratio for s in stories)
