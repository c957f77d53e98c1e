"""
Configuración inmutable del análisis sísmico
============================================

Agrupa todos los parámetros ajustables del pipeline en un único registro
inmutable que se entrega a cada etapa al construirla. No existe estado
global mutable: cada invocación del pipeline recibe su propia configuración.

Ejemplo de uso:
    ```python
    from seismic_dynamic.core import AnalysisConfig

    config = AnalysisConfig(max_workers=4, ground_motion_seed=7)
    config = AnalysisConfig.from_json('analisis.json')
    ```
"""

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Dict, Any, Union

from ..data.standards.common_parameters import SEISMIC_CONSTANTS

logger = logging.getLogger(__name__)

# Mapeo de secciones de DEFAULT_CONFIG a campos de AnalysisConfig
_SECTION_KEYS = {
    'analysis': {
        'max_workers': 'max_workers',
        'allow_site_class_fallback': 'allow_site_class_fallback',
        'fallback_site_class': 'fallback_site_class',
        'interpolate_site_coefficients': 'interpolate_site_coefficients',
    },
    'spectrum': {
        'step': 'spectrum_step',
        'max_period': 'spectrum_max_period',
        'long_period_transition': 'long_period_transition',
    },
    'modal': {
        'mass_participation_threshold': 'mass_participation_threshold',
        'min_modes': 'min_modes',
        'cqc_factor': 'cqc_factor',
    },
    'time_history': {
        'seed': 'ground_motion_seed',
    },
    'compliance': {
        'drift_warning_fraction': 'drift_warning_fraction',
        'pdelta_threshold': 'pdelta_threshold',
    },
}


@dataclass(frozen=True)
class AnalysisConfig:
    """Parámetros de configuración del pipeline de análisis"""
    # Espectro de diseño
    spectrum_step: float = SEISMIC_CONSTANTS['SPECTRUM_STEP']
    spectrum_max_period: float = SEISMIC_CONSTANTS['SPECTRUM_MAX_PERIOD']
    long_period_transition: float = SEISMIC_CONSTANTS['LONG_PERIOD_TRANSITION']  # TL

    # Análisis modal y combinación
    cqc_factor: float = SEISMIC_CONSTANTS['CQC_FACTOR']
    mass_participation_threshold: float = SEISMIC_CONSTANTS['MIN_MASS_PARTICIPATION']
    min_modes: int = 0

    # Parámetros de sitio
    allow_site_class_fallback: bool = False
    fallback_site_class: str = 'SC'
    interpolate_site_coefficients: bool = False

    # Ejecución
    max_workers: int = 1
    ground_motion_seed: int = 0

    # Verificaciones normativas
    drift_warning_fraction: float = 0.8
    pdelta_threshold: float = SEISMIC_CONSTANTS['PDELTA_THRESHOLD']

    def __post_init__(self):
        if self.spectrum_step <= 0:
            raise ValueError(f"Paso del espectro debe ser mayor a 0: {self.spectrum_step}")
        if self.spectrum_max_period <= self.spectrum_step:
            raise ValueError("Periodo máximo del espectro debe ser mayor al paso")
        if self.long_period_transition <= 0:
            raise ValueError("Periodo de transición TL debe ser mayor a 0")
        if self.cqc_factor < 1.0:
            raise ValueError("Factor CQC no puede ser menor a 1.0")
        if not (0.0 < self.mass_participation_threshold <= 1.0):
            raise ValueError("Umbral de participación de masa debe estar entre 0 y 1")
        if self.max_workers < 1:
            raise ValueError("max_workers debe ser al menos 1")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnalysisConfig':
        """
        Crea la configuración desde un diccionario

        Acepta tanto la estructura anidada de DEFAULT_CONFIG como un
        diccionario plano con los nombres de los campos.

        Parameters
        ----------
        data : Dict[str, Any]
            Diccionario de configuración

        Returns
        -------
        AnalysisConfig
            Configuración creada
        """
        valid_fields = {f.name for f in fields(cls)}
        kwargs = {}

        for key, value in data.items():
            if key in _SECTION_KEYS and isinstance(value, dict):
                mapping = _SECTION_KEYS[key]
                for sub_key, sub_value in value.items():
                    if sub_key in mapping:
                        kwargs[mapping[sub_key]] = sub_value
                    else:
                        logger.warning(f"Clave de configuración desconocida: {key}.{sub_key}")
            elif key in valid_fields:
                kwargs[key] = value
            else:
                logger.warning(f"Clave de configuración desconocida: {key}")

        return cls(**kwargs)

    @classmethod
    def from_json(cls, filepath: Union[str, Path]) -> 'AnalysisConfig':
        """
        Carga la configuración desde un archivo JSON

        Parameters
        ----------
        filepath : str or Path
            Ruta del archivo JSON

        Returns
        -------
        AnalysisConfig
            Configuración cargada
        """
        filepath = Path(filepath)
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)

        logger.info(f"Configuración cargada desde {filepath}")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario plano"""
        return asdict(self)
