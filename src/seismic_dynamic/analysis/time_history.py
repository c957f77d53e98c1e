"""
Análisis tiempo-historia aproximado
===================================

Genera registros sísmicos sintéticos reproducibles y estima la respuesta
tiempo-historia del edificio.

IMPORTANTE: esta etapa es una aproximación. No integra la ecuación de
movimiento: el cortante basal es a_g·M, los desplazamientos y aceleraciones
de piso escalan los máximos del registro por la relación de altura, y la
energía se estima como Σ|a|·dt repartida 60/40 entre amortiguamiento
viscoso e histerético. Los registros sintéticos son ilustrativos y no
representan la sismicidad real del sitio.

Velocidad y desplazamiento se integran dos veces desde la aceleración sin
corrección de línea base. En registros sintéticos la deriva acumulada
produce desplazamientos del orden de 1 m por piso, de modo que la
recomendación "Time history analysis shows higher drifts" aparece en casi
toda corrida sintética y no debe leerse como un hallazgo estructural. Solo
con registros medidos (ya corregidos) la comparación con la deriva
espectral es significativa.

Ejemplo de uso:
    ```python
    generator = SyntheticGroundMotionGenerator(seed=7)
    records = generator.generate(pga=0.4)
    trace = TimeHistorySimulator().simulate(building, records[0], seed=7)
    ```
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Tuple

import numpy as np

from ..core.config import AnalysisConfig
from ..data.seismic_data import (
    GRAVITY,
    BuildingModel,
    EnergyDissipation,
    FloorPeak,
    GroundMotionRecord,
    StoryDriftPeak,
    TimeHistoryTrace,
)
from ..data.standards.common_parameters import GroundMotionSource
from ..utils.validators import InvalidInput

logger = logging.getLogger(__name__)

# Registros sísmicos de referencia (Indonesia)
SYNTHETIC_RECORD_NAMES = (
    'Yogyakarta 2006',
    'Sumatra 2004',
    'Bengkulu 2007',
    'West Java 2009',
    'Lombok 2018',
    'Palu 2018',
    'Pidie 2016',
)

SYNTHETIC_DURATION = 30.0       # s
SYNTHETIC_TIMESTEP = 0.02       # s

# Envolvente: crecimiento lineal hasta 5 s, decaimiento exponencial desde 20 s
ENVELOPE_RISE_TIME = 5.0
ENVELOPE_DECAY_START = 20.0
ENVELOPE_DECAY_CONSTANT = 10.0

HIGH_FREQUENCY = 10.0           # Hz
LOW_FREQUENCY = 2.0             # Hz
HIGH_FREQUENCY_WEIGHT = 0.3
LOW_FREQUENCY_WEIGHT = 0.7

# Factores de la respuesta aproximada
SHEAR_COUPLING_Y = 0.85
RESPONSE_COUPLING_Y = 0.9
ACCELERATION_AMPLIFICATION = 1.5
VISCOUS_ENERGY_FRACTION = 0.6


def envelope(time: np.ndarray) -> np.ndarray:
    """Envolvente de intensidad del registro sintético"""
    t = np.asarray(time, dtype=float)
    rise = np.clip(t / ENVELOPE_RISE_TIME, 0.0, 1.0)
    decay = np.where(t > ENVELOPE_DECAY_START,
                     np.exp(-(t - ENVELOPE_DECAY_START) / ENVELOPE_DECAY_CONSTANT), 1.0)
    return rise * decay


class SyntheticGroundMotionGenerator:
    """
    Generador determinista de registros sintéticos

    La semilla es obligatoria; la misma semilla produce los mismos registros.

    Parameters
    ----------
    seed : int
        Semilla del generador numpy
    duration : float
        Duración de cada registro (s)
    timestep : float
        Paso de tiempo (s)
    """

    def __init__(self, seed: int, duration: float = SYNTHETIC_DURATION,
                 timestep: float = SYNTHETIC_TIMESTEP):
        if seed is None:
            raise InvalidInput("El generador sintético requiere una semilla", field='seed')
        if timestep <= 0 or duration <= 0:
            raise InvalidInput("Duración y paso de tiempo deben ser mayores a 0",
                               field='timestep', value=timestep)
        self.seed = int(seed)
        self.duration = duration
        self.timestep = timestep

    def generate(self, pga: float) -> Tuple[GroundMotionRecord, ...]:
        """
        Genera el conjunto de registros sintéticos

        Parameters
        ----------
        pga : float
            Aceleración máxima del suelo (g)

        Returns
        -------
        Tuple[GroundMotionRecord, ...]
            Registros con aceleración en m/s²
        """
        rng = np.random.default_rng(self.seed)
        points = int(math.floor(self.duration / self.timestep + 1e-9))
        time = np.arange(points) * self.timestep
        shape = envelope(time)
        amplitude = pga * GRAVITY

        records = []
        for index, name in enumerate(SYNTHETIC_RECORD_NAMES, start=1):
            high = (np.sin(2 * math.pi * HIGH_FREQUENCY * time)
                    * rng.random(points) * HIGH_FREQUENCY_WEIGHT)
            low = (np.sin(2 * math.pi * LOW_FREQUENCY * time)
                   * rng.random(points) * LOW_FREQUENCY_WEIGHT)
            sign = (rng.random(points) - 0.5) * 2.0
            acceleration = amplitude * shape * (high + low) * sign

            records.append(GroundMotionRecord.from_acceleration(
                id=f"GM{index}",
                name=name,
                acceleration=acceleration,
                timestep=self.timestep,
                magnitude=float(rng.uniform(6.5, 8.5)),
                distance=float(rng.uniform(10.0, 50.0)),
                earthquake=name.split(' ')[0],
                station=f"Station {index}",
            ))

        logger.info(f"{len(records)} registros sintéticos generados (semilla={self.seed}, "
                    f"PGA={pga:.3f}g, {points} puntos)")
        return tuple(records)


class TimeHistorySimulator:
    """Respuesta tiempo-historia aproximada a partir de un registro"""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    def simulate(self, building: BuildingModel, record: GroundMotionRecord,
                 seed: Optional[int] = None,
                 source: GroundMotionSource = GroundMotionSource.SYNTHETIC) -> TimeHistoryTrace:
        """
        Estima la respuesta tiempo-historia

        Parameters
        ----------
        building : BuildingModel
            Modelo del edificio
        record : GroundMotionRecord
            Registro sísmico (m/s²)
        seed : int, optional
            Semilla con la que se generó el registro sintético
        source : GroundMotionSource
            Origen del registro

        Returns
        -------
        TimeHistoryTrace
            Máximos por piso, derivas, historia del cortante basal y energía
        """
        acceleration = record.acceleration
        displacement = record.displacement
        n_floors = building.number_of_floors
        heights = building.story_height_array()

        shear_x = acceleration * building.total_mass
        shear_y = shear_x * SHEAR_COUPLING_Y

        if len(acceleration) == 0:
            peak_disp, disp_time, peak_acc, acc_time = 0.0, 0.0, 0.0, 0.0
        else:
            abs_disp = np.abs(displacement)
            abs_acc = np.abs(acceleration)
            disp_index = int(np.argmax(abs_disp))
            acc_index = int(np.argmax(abs_acc))
            peak_disp = float(abs_disp[disp_index])
            peak_acc = float(abs_acc[acc_index])
            disp_time = disp_index * record.timestep
            acc_time = acc_index * record.timestep

        def _floor_peak(floor: int) -> FloorPeak:
            ratio = floor / n_floors
            disp_x = peak_disp * ratio
            acc_x = peak_acc * ratio * ACCELERATION_AMPLIFICATION
            return FloorPeak(
                floor=floor,
                displacement_x=disp_x,
                displacement_y=disp_x * RESPONSE_COUPLING_Y,
                displacement_time=disp_time,
                acceleration_x=acc_x,
                acceleration_y=acc_x * RESPONSE_COUPLING_Y,
                acceleration_time=acc_time,
            )

        floors = range(1, n_floors + 1)
        if self.config.max_workers > 1 and n_floors > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                floor_peaks = tuple(executor.map(_floor_peak, floors))
        else:
            floor_peaks = tuple(_floor_peak(f) for f in floors)

        story_drifts = []
        previous_x, previous_y = 0.0, 0.0
        for peak, height in zip(floor_peaks, heights):
            drift_x = abs(peak.displacement_x - previous_x) / height
            drift_y = abs(peak.displacement_y - previous_y) / height
            story_drifts.append(StoryDriftPeak(story=peak.floor, drift=max(drift_x, drift_y),
                                               time=peak.displacement_time))
            previous_x, previous_y = peak.displacement_x, peak.displacement_y

        total_energy = float(np.sum(np.abs(acceleration)) * record.timestep)
        viscous = total_energy * VISCOUS_ENERGY_FRACTION
        energy = EnergyDissipation(total=total_energy, viscous=viscous,
                                   hysteretic=total_energy - viscous)

        logger.info(f"Tiempo-historia '{record.name}': PGA={peak_acc:.3f}m/s², "
                    f"desplazamiento máximo={peak_disp * 1000:.2f}mm, energía={total_energy:.3f}")

        return TimeHistoryTrace(
            record_id=record.id,
            record_name=record.name,
            source=source.value,
            seed=seed,
            floor_peaks=floor_peaks,
            story_drifts=tuple(story_drifts),
            time=record.time,
            base_shear_x=shear_x,
            base_shear_y=shear_y,
            energy=energy,
        )
