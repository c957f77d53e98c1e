"""
Registros de datos y tablas del análisis sísmico

Modules included:
- seismic_data: Registros inmutables de entrada, etapas y resultado
- tables: DataFrames de pandas y reporte en texto del resultado
- standards: Tablas normativas
"""

from .seismic_data import (
    AnalysisMetadata,
    AnalysisResult,
    AxisValues,
    BuildingGeometry,
    BuildingModel,
    CombinedAnalysisResult,
    ComplianceReport,
    ComplianceVerdict,
    Damping,
    DesignSpectrum,
    DirectionalValues,
    DynamicAnalysisResult,
    GroundMotionRecord,
    MassDistribution,
    MaterialSummary,
    ModalAnalysisResult,
    Mode,
    PerformanceAssessment,
    ResponseCombination,
    SiteInput,
    SiteSeismicProfile,
    StaticAnalysisResult,
    StaticForceResult,
    StoryResponse,
    TimeHistoryTrace,
)
from .tables import SeismicTables, generate_text_report

__all__ = [
    'AnalysisMetadata',
    'AnalysisResult',
    'AxisValues',
    'BuildingGeometry',
    'BuildingModel',
    'CombinedAnalysisResult',
    'ComplianceReport',
    'ComplianceVerdict',
    'Damping',
    'DesignSpectrum',
    'DirectionalValues',
    'DynamicAnalysisResult',
    'GroundMotionRecord',
    'MassDistribution',
    'MaterialSummary',
    'ModalAnalysisResult',
    'Mode',
    'PerformanceAssessment',
    'ResponseCombination',
    'SiteInput',
    'SiteSeismicProfile',
    'StaticAnalysisResult',
    'StaticForceResult',
    'StoryResponse',
    'TimeHistoryTrace',
    'SeismicTables',
    'generate_text_report',
]
