"""
Tablas del resultado del análisis
=================================

Convierte el resultado inmutable del análisis en DataFrames de pandas para
los consumidores (reportes, vistas, exportación) y genera un resumen en
texto plano.

Ejemplo de uso:
    ```python
    from seismic_dynamic.data.tables import SeismicTables, generate_text_report

    tables = SeismicTables.from_result(result)
    print(tables.modal.head())
    print(generate_text_report(result))
    ```
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import pandas as pd

from .seismic_data import (
    AnalysisResult,
    CombinedAnalysisResult,
    DynamicAnalysisResult,
    StaticAnalysisResult,
)

logger = logging.getLogger(__name__)


def _modal_table(result: AnalysisResult) -> Optional[pd.DataFrame]:
    modal = getattr(result, 'modal', None)
    if modal is None:
        return None
    rows = []
    for mode in modal.modes:
        rows.append({
            'Mode': mode.index,
            'Period': mode.period,
            'Frequency': mode.frequency,
            'Meff_X': mode.effective_mass.x,
            'Meff_Y': mode.effective_mass.y,
            'Meff_RZ': mode.effective_mass.rz,
            'SumUX': mode.cumulative_mass_fraction.x,
            'SumUY': mode.cumulative_mass_fraction.y,
            'SumRZ': mode.cumulative_mass_fraction.rz,
        })
    return pd.DataFrame(rows)


def _story_table(result: AnalysisResult) -> pd.DataFrame:
    if isinstance(result, StaticAnalysisResult):
        stories = result.static.stories
    else:
        stories = result.stories
    return pd.DataFrame([
        {
            'Story': s.floor,
            'Elevation': s.elevation,
            'Fx': s.force_x,
            'Fy': s.force_y,
            'Vx': s.story_shear_x,
            'Vy': s.story_shear_y,
            'Displacement': s.displacement,
            'Drift': s.drift,
            'DriftRatio': s.drift_ratio,
            'Acceleration': s.acceleration,
        }
        for s in stories
    ])


def _verdict_table(result: AnalysisResult) -> pd.DataFrame:
    return pd.DataFrame([
        {
            'Rule': v.rule_id,
            'Description': v.description,
            'Story': v.story,
            'Required': v.required,
            'Actual': v.actual,
            'Unit': v.unit,
            'Status': v.status.value,
        }
        for v in result.verdicts
    ])


def _time_history_table(result: AnalysisResult) -> Optional[pd.DataFrame]:
    trace = getattr(result, 'time_history', None)
    if trace is None:
        return None
    return pd.DataFrame({
        'Time': trace.time,
        'BaseShearX': trace.base_shear_x,
        'BaseShearY': trace.base_shear_y,
    })


@dataclass(frozen=True, eq=False)
class SeismicTables:
    """Tablas pandas derivadas de un resultado del análisis"""
    spectrum: pd.DataFrame
    stories: pd.DataFrame
    verdicts: pd.DataFrame
    modal: Optional[pd.DataFrame] = None
    time_history: Optional[pd.DataFrame] = None

    @classmethod
    def from_result(cls, result: AnalysisResult) -> 'SeismicTables':
        """
        Construye las tablas a partir del resultado

        Parameters
        ----------
        result : AnalysisResult
            Resultado estático, dinámico o combinado

        Returns
        -------
        SeismicTables
            Tablas del espectro, pisos, veredictos y, si existen, modal y
            tiempo-historia
        """
        spectrum = result.spectrum
        tables = cls(
            spectrum=pd.DataFrame({
                'Period': spectrum.periods,
                'Sa': spectrum.accelerations,
                'Sv': spectrum.velocities,
                'Sd': spectrum.displacements,
            }),
            stories=_story_table(result),
            verdicts=_verdict_table(result),
            modal=_modal_table(result),
            time_history=_time_history_table(result),
        )
        logger.debug(f"Tablas generadas para resultado '{result.kind.value}'")
        return tables

    def get_table_summary(self) -> Dict[str, Any]:
        """Resumen de filas por tabla"""
        summary = {}
        for name in ('spectrum', 'stories', 'verdicts', 'modal', 'time_history'):
            table = getattr(self, name)
            summary[name] = {
                'has_data': table is not None and not table.empty,
                'row_count': 0 if table is None else len(table),
            }
        return summary


def generate_text_report(result: AnalysisResult) -> str:
    """
    Genera el resumen del análisis en texto plano

    Parameters
    ----------
    result : AnalysisResult
        Resultado del análisis

    Returns
    -------
    str
        Reporte formateado
    """
    site = result.site
    lines = []

    lines.append("=" * 60)
    lines.append("REPORTE DE ANÁLISIS SÍSMICO")
    lines.append("=" * 60)
    lines.append("")

    lines.append("INFORMACIÓN DEL ANÁLISIS:")
    lines.append(f"  Tipo: {result.kind.value}")
    lines.append(f"  Normativa: {result.metadata.normative}")
    lines.append(f"  Versión: {result.metadata.version}")
    lines.append(f"  Fecha: {result.metadata.created_at}")
    lines.append("")

    lines.append("PARÁMETROS DE SITIO:")
    lines.append(f"  Clase de sitio: {site.site_class} ({site.soil_profile})")
    lines.append(f"  Categoría de riesgo: {site.risk_category} (Ie = {site.importance_factor})")
    lines.append(f"  Ss = {site.ss:.3f}g, S1 = {site.s1:.3f}g, Fa = {site.fa:.3f}, Fv = {site.fv:.3f}")
    lines.append(f"  SDS = {site.sds:.3f}g, SD1 = {site.sd1:.3f}g")
    lines.append(f"  Categoría de diseño sísmico: {result.sdc}")
    lines.append("")

    if isinstance(result, (DynamicAnalysisResult, CombinedAnalysisResult)):
        modal = result.modal
        mass = modal.participating_mass
        lines.append("ANÁLISIS MODAL:")
        lines.append(f"  Modos: {modal.total_modes}")
        lines.append(f"  Periodo fundamental: {modal.fundamental_period:.4f} s")
        lines.append(f"  Masa participante: X={mass.x:.1%}, Y={mass.y:.1%}, RZ={mass.rz:.1%}")
        lines.append(f"  Convergencia: {'SÍ' if modal.converged else 'NO'}")
        shear = result.combination.base_shear
        lines.append(f"  Cortante basal CQC: X={shear.x:.1f} N, Y={shear.y:.1f} N")
        if result.time_history.seed is not None:
            lines.append(f"  Registro tiempo-historia: {result.time_history.record_name} "
                         f"(semilla {result.time_history.seed})")
        else:
            lines.append(f"  Registro tiempo-historia: {result.time_history.record_name}")
        lines.append("")

    if isinstance(result, (StaticAnalysisResult, CombinedAnalysisResult)):
        static = result.static
        lines.append("FUERZA LATERAL EQUIVALENTE:")
        lines.append(f"  Ta = {static.approximate_period:.4f} s, Cu = {static.cu:.2f}")
        lines.append(f"  Cs = {static.cs:.4f}, R = {static.response_modification:.1f}")
        lines.append(f"  Cortante basal: {static.base_shear.x:.1f} N")
        lines.append("")

    lines.append("VERIFICACIONES NORMATIVAS:")
    for verdict in result.verdicts:
        if verdict.story is not None:
            continue
        lines.append(f"  [{verdict.status.value.upper()}] {verdict.description} ({verdict.rule_id}): "
                     f"{verdict.actual:.4g} / {verdict.required:.4g} {verdict.unit}")
    lines.append(f"  Nivel de desempeño: {result.performance.level.value}")
    lines.append("")

    lines.append("RECOMENDACIONES:")
    for recommendation in result.recommendations:
        lines.append(f"  - {recommendation}")
    if result.warnings:
        lines.append("")
        lines.append("ADVERTENCIAS:")
        for warning in result.warnings:
            lines.append(f"  - {warning}")

    lines.append("")
    lines.append("=" * 60)
    return "\n".join(lines)
