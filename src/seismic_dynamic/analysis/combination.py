"""
Combinación de respuestas modales
=================================

Obtiene la aceleración espectral de cada modo por interpolación sobre el
espectro de diseño y combina las respuestas modales por SRSS y CQC.

La CQC se aproxima como SRSS multiplicada por un factor de correlación fijo
(1.10 por defecto); no se calculan coeficientes de correlación entre modos.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

import numpy as np

from ..core.config import AnalysisConfig
from ..data.seismic_data import (
    GRAVITY,
    BuildingModel,
    CombinedResponse,
    DesignSpectrum,
    DirectionalValues,
    ModalAnalysisResult,
    ModalResponse,
    Mode,
    ResponseCombination,
)

logger = logging.getLogger(__name__)


def modal_response(mode: Mode, spectrum: DesignSpectrum) -> ModalResponse:
    """
    Respuesta espectral de un modo

    Parameters
    ----------
    mode : Mode
        Modo de vibración
    spectrum : DesignSpectrum
        Espectro de diseño

    Returns
    -------
    ModalResponse
        Cortante, desplazamiento y aceleración modales por dirección
    """
    sa = spectrum.interpolate(mode.period)
    sd = sa * GRAVITY * mode.period ** 2 / (4.0 * math.pi ** 2)

    def _directional(effective_mass: float, modal_mass: float):
        participation = math.sqrt(effective_mass / modal_mass) if modal_mass > 0 else 0.0
        return (effective_mass * sa * GRAVITY,
                sd * participation,
                sa * GRAVITY * participation)

    shear_x, disp_x, acc_x = _directional(mode.effective_mass.x, mode.modal_mass.x)
    shear_y, disp_y, acc_y = _directional(mode.effective_mass.y, mode.modal_mass.y)

    return ModalResponse(
        mode=mode.index,
        period=mode.period,
        spectral_acceleration=sa,
        spectral_displacement=sd,
        base_shear=DirectionalValues(shear_x, shear_y),
        displacement=DirectionalValues(disp_x, disp_y),
        acceleration=DirectionalValues(acc_x, acc_y),
    )


def srss(values: Sequence[float]) -> float:
    """Raíz cuadrada de la suma de cuadrados"""
    array = np.asarray(values, dtype=float)
    return float(np.sqrt(np.sum(array ** 2)))


class ModalResponseCombiner:
    """
    Combina las respuestas modales

    El cálculo por modo puede distribuirse en hilos cuando
    ``max_workers > 1``; la reducción siempre se realiza en el orden de los
    modos, por lo que el resultado no depende del número de hilos.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    def combine(self, modal: ModalAnalysisResult, spectrum: DesignSpectrum,
                building: Optional[BuildingModel] = None) -> ResponseCombination:
        """
        Calcula las respuestas modales y sus combinaciones

        Parameters
        ----------
        modal : ModalAnalysisResult
            Resultado del análisis modal
        spectrum : DesignSpectrum
            Espectro de diseño
        building : BuildingModel, optional
            Modelo del edificio (solo para el registro de progreso)

        Returns
        -------
        ResponseCombination
            Respuestas por modo, SRSS y CQC
        """
        modes = modal.modes
        if self.config.max_workers > 1 and len(modes) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                responses = tuple(executor.map(lambda m: modal_response(m, spectrum), modes))
        else:
            responses = tuple(modal_response(m, spectrum) for m in modes)

        srss_response = self._combine_srss(responses)
        cqc_response = self._scale(srss_response, 'CQC', self.config.cqc_factor)

        floors = f" ({building.number_of_floors} pisos)" if building is not None else ""
        logger.info(f"Combinación modal{floors}: {len(responses)} modos, "
                    f"V_CQC X={cqc_response.base_shear.x:.1f}N, "
                    f"Y={cqc_response.base_shear.y:.1f}N")

        return ResponseCombination(
            modal_responses=responses,
            srss=srss_response,
            cqc=cqc_response,
        )

    @staticmethod
    def _combine_srss(responses: Sequence[ModalResponse]) -> CombinedResponse:
        def _combined(attribute: str) -> DirectionalValues:
            values = [getattr(r, attribute) for r in responses]
            return DirectionalValues(srss([v.x for v in values]), srss([v.y for v in values]))

        return CombinedResponse(
            method='SRSS',
            displacement=_combined('displacement'),
            acceleration=_combined('acceleration'),
            base_shear=_combined('base_shear'),
        )

    @staticmethod
    def _scale(response: CombinedResponse, method: str, factor: float) -> CombinedResponse:
        def _times(values: DirectionalValues) -> DirectionalValues:
            return DirectionalValues(values.x * factor, values.y * factor)

        return CombinedResponse(
            method=method,
            displacement=_times(response.displacement),
            acceleration=_times(response.acceleration),
            base_shear=_times(response.base_shear),
        )
