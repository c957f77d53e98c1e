"""
Manejadores de archivos del análisis sísmico
============================================

Lectura de registros sísmicos desde CSV y escritura de resultados en JSON.

Tipos de manejadores incluidos:
- Importación de registros de aceleración (.csv)
- Exportación de resultados y configuraciones (.json)
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np
import pandas as pd

from ..data.seismic_data import GRAVITY, GroundMotionRecord
from .validators import InvalidInput

# Configurar logger
logger = logging.getLogger(__name__)

COMMON_SEPARATORS = [',', ';', '\t', '|']


def _detect_separator(filepath: Path, encoding: str) -> str:
    """Detecta el separador a partir de la primera línea"""
    with open(filepath, 'r', encoding=encoding) as f:
        first_line = f.readline()
    counts = {sep: first_line.count(sep) for sep in COMMON_SEPARATORS}
    separator = max(counts, key=counts.get)
    return separator if counts[separator] > 0 else ','


def load_ground_motion_csv(filepath: Union[str, Path], timestep: Optional[float] = None,
                           acceleration_column: str = 'acceleration',
                           time_column: str = 'time', units: str = 'm/s2',
                           record_id: Optional[str] = None, name: Optional[str] = None,
                           encoding: str = 'utf-8', **kwargs) -> GroundMotionRecord:
    """
    Lee un registro sísmico desde un archivo CSV

    Parameters
    ----------
    filepath : str or Path
        Ruta del archivo CSV
    timestep : float, optional
        Paso de tiempo (s); si se omite se deduce de la columna de tiempo
    acceleration_column : str
        Columna de aceleraciones
    time_column : str
        Columna de tiempos
    units : str
        Unidades de la aceleración ('m/s2' o 'g')
    record_id, name : str, optional
        Identificador y nombre del registro (por defecto el nombre del archivo)
    encoding : str
        Codificación del archivo
    **kwargs
        Metadatos adicionales del registro (magnitude, distance, ...)

    Returns
    -------
    GroundMotionRecord
        Registro con velocidad y desplazamiento integrados

    Raises
    ------
    InvalidInput
        Si el archivo no existe, falta la columna de aceleración o no se
        puede determinar el paso de tiempo
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise InvalidInput(f"Archivo no encontrado: {filepath}", field='filepath',
                           value=str(filepath))

    separator = _detect_separator(filepath, encoding)
    data = pd.read_csv(filepath, sep=separator, encoding=encoding)
    data.columns = [str(c).strip().lower() for c in data.columns]

    acc_key = acceleration_column.lower()
    if acc_key not in data.columns:
        raise InvalidInput(f"Columna '{acceleration_column}' no encontrada en {filepath.name}",
                           field='acceleration_column', value=list(data.columns))

    acceleration = data[acc_key].to_numpy(dtype=float)
    if units == 'g':
        acceleration = acceleration * GRAVITY
    elif units != 'm/s2':
        raise InvalidInput(f"Unidades de aceleración no soportadas: {units}",
                           field='units', value=units)

    if timestep is None:
        time_key = time_column.lower()
        if time_key not in data.columns or len(data) < 2:
            raise InvalidInput("No se puede determinar el paso de tiempo del registro",
                               field='timestep')
        timestep = float(np.median(np.diff(data[time_key].to_numpy(dtype=float))))
    if timestep <= 0:
        raise InvalidInput("Paso de tiempo debe ser mayor a 0", field='timestep', value=timestep)

    record = GroundMotionRecord.from_acceleration(
        id=record_id or filepath.stem,
        name=name or filepath.stem,
        acceleration=acceleration,
        timestep=timestep,
        **kwargs,
    )
    logger.info(f"Registro sísmico leído: {filepath.name} ({len(acceleration)} puntos, "
                f"dt={timestep}s)")
    return record


def _json_serializer(obj: Any) -> Any:
    """Serializador para tipos numpy y registros"""
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if hasattr(obj, 'to_dict'):
        return obj.to_dict()
    if hasattr(obj, 'value'):
        return obj.value
    raise TypeError(f"Tipo no serializable: {type(obj).__name__}")


def save_result_json(result: Any, filepath: Union[str, Path], indent: int = 2) -> Path:
    """
    Guarda un resultado (o cualquier registro con to_dict) en JSON

    Parameters
    ----------
    result : Any
        Resultado del análisis o registro serializable
    filepath : str or Path
        Ruta del archivo de salida
    indent : int
        Indentación del JSON

    Returns
    -------
    Path
        Ruta del archivo escrito
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    data = result.to_dict() if hasattr(result, 'to_dict') else result
    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=False, default=_json_serializer)

    logger.info(f"Resultado guardado en JSON: {filepath}")
    return filepath


def load_json(filepath: Union[str, Path]) -> Any:
    """Lee un archivo JSON"""
    filepath = Path(filepath)
    with open(filepath, 'r', encoding='utf-8') as f:
        return json.load(f)


__all__ = [
    'load_ground_motion_csv',
    'save_result_json',
    'load_json',
]
