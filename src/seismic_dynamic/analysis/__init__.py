"""
Etapas del análisis sísmico

Modules included:
- site: Resolución de parámetros de sitio
- spectrum: Espectro de respuesta de diseño
- modal: Análisis modal (interfaz y aproximación heurística)
- combination: Combinación modal SRSS/CQC
- story_forces: Fuerzas, cortantes y derivas de piso
- static_force: Fuerza lateral equivalente y escalamiento dinámico
- time_history: Registros sintéticos y respuesta tiempo-historia
- compliance: Verificaciones SNI 1726:2019
- performance: Nivel de desempeño y fragilidad
- aggregator: Ensamblado y validación del resultado
- pipeline: Orquestador del análisis
"""

from .aggregator import ResultsAggregator
from .combination import ModalResponseCombiner
from .compliance import ComplianceEvaluator, check_irregularities, determine_sdc
from .modal import HeuristicModalAnalyzer, ModalAnalyzer
from .performance import PerformanceAssessor
from .pipeline import SeismicAnalysisPipeline, run_analysis
from .site import SeismicParameterResolver
from .spectrum import ResponseSpectrumBuilder, design_spectral_acceleration
from .static_force import EquivalentLateralForceAnalyzer, dynamic_scaling
from .story_forces import StoryForceDistributor, compute_story_drifts, distribution_exponent
from .time_history import SyntheticGroundMotionGenerator, TimeHistorySimulator

__all__ = [
    'ResultsAggregator',
    'ModalResponseCombiner',
    'ComplianceEvaluator',
    'check_irregularities',
    'determine_sdc',
    'HeuristicModalAnalyzer',
    'ModalAnalyzer',
    'PerformanceAssessor',
    'SeismicAnalysisPipeline',
    'run_analysis',
    'SeismicParameterResolver',
    'ResponseSpectrumBuilder',
    'design_spectral_acceleration',
    'EquivalentLateralForceAnalyzer',
    'dynamic_scaling',
    'StoryForceDistributor',
    'compute_story_drifts',
    'distribution_exponent',
    'SyntheticGroundMotionGenerator',
    'TimeHistorySimulator',
]
