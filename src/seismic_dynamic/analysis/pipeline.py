"""
Pipeline de análisis sísmico
============================

Encadena las etapas del análisis a partir de una configuración inmutable:

    sitio → espectro → modal → combinación → fuerzas de piso →
    tiempo-historia → verificación normativa → desempeño → agregación

Cada etapa recibe los registros de las anteriores y produce uno nuevo. Las
entradas se validan antes de cualquier cálculo; un error de validación
detiene el análisis sin producir resultados parciales.

Ejemplo de uso:
    ```python
    from seismic_dynamic import SeismicAnalysisPipeline, AnalysisConfig

    pipeline = SeismicAnalysisPipeline(AnalysisConfig(ground_motion_seed=42))
    result = pipeline.run_dynamic(building, site)
    print(result.sdc, result.recommendations)
    ```
"""

import logging
from typing import Optional, Sequence, Tuple

from ..core.config import AnalysisConfig
from ..data.seismic_data import (
    BuildingModel,
    CombinedAnalysisResult,
    DesignSpectrum,
    DynamicAnalysisResult,
    GroundMotionRecord,
    ModalAnalysisResult,
    ResponseCombination,
    SiteInput,
    SiteSeismicProfile,
    StaticAnalysisResult,
    StoryResponse,
    TimeHistoryTrace,
    max_drift_ratio,
)
from ..data.standards import sni1726
from ..data.standards.common_parameters import GroundMotionSource
from ..utils.validators import (
    InvalidInput,
    InvalidSiteParameter,
    raise_if_invalid,
    validate_building_model,
    validate_site_input,
)
from .aggregator import ResultsAggregator
from .combination import ModalResponseCombiner
from .compliance import ComplianceEvaluator
from .modal import HeuristicModalAnalyzer, ModalAnalyzer
from .performance import PerformanceAssessor
from .site import SeismicParameterResolver
from .spectrum import ResponseSpectrumBuilder
from .static_force import EquivalentLateralForceAnalyzer, dynamic_scaling
from .story_forces import StoryForceDistributor
from .time_history import SyntheticGroundMotionGenerator, TimeHistorySimulator

logger = logging.getLogger(__name__)


class SeismicAnalysisPipeline:
    """
    Orquestador de las etapas del análisis

    Parameters
    ----------
    config : AnalysisConfig, optional
        Configuración del análisis
    modal_analyzer : ModalAnalyzer, optional
        Implementación del análisis modal (heurística por defecto)
    """

    def __init__(self, config: Optional[AnalysisConfig] = None,
                 modal_analyzer: Optional[ModalAnalyzer] = None):
        self.config = config or AnalysisConfig()
        self.resolver = SeismicParameterResolver(self.config)
        self.spectrum_builder = ResponseSpectrumBuilder(self.config)
        self.modal_analyzer = modal_analyzer or HeuristicModalAnalyzer(self.config)
        self.combiner = ModalResponseCombiner(self.config)
        self.distributor = StoryForceDistributor()
        self.static_analyzer = EquivalentLateralForceAnalyzer(self.distributor)
        self.simulator = TimeHistorySimulator(self.config)
        self.compliance = ComplianceEvaluator(self.config)
        self.assessor = PerformanceAssessor()
        self.aggregator = ResultsAggregator()

    # ------------------------------------------------------------------
    # Puntos de entrada
    # ------------------------------------------------------------------

    def run_dynamic(self, building: BuildingModel, site: SiteInput,
                    records: Optional[Sequence[GroundMotionRecord]] = None) -> DynamicAnalysisResult:
        """
        Análisis dinámico: modal espectral + tiempo-historia

        Parameters
        ----------
        building : BuildingModel
            Modelo del edificio
        site : SiteInput
            Parámetros de sitio
        records : Sequence[GroundMotionRecord], optional
            Registros sísmicos; si se omiten se generan registros sintéticos
            con la semilla de la configuración

        Returns
        -------
        DynamicAnalysisResult
            Resultado inmutable del análisis
        """
        logger.info("Iniciando análisis dinámico")
        self._validate_inputs(building, site)

        profile = self.resolver.resolve(site)
        spectrum = self.spectrum_builder.build(profile)
        modal, combination, stories = self._spectral_response(building, spectrum)
        trace = self._time_history(building, profile, records)

        compliance = self.compliance.evaluate(building, profile, combination.base_shear, stories)
        performance = self.assessor.assess(max_drift_ratio(stories),
                                           compliance.allowable_drift_ratio)

        result = self.aggregator.aggregate_dynamic(building, profile, spectrum, modal,
                                                   combination, stories, trace,
                                                   compliance, performance)
        logger.info("Análisis dinámico completado")
        return result

    def run_static(self, building: BuildingModel, site: SiteInput) -> StaticAnalysisResult:
        """
        Análisis estático por fuerza lateral equivalente

        Parameters
        ----------
        building : BuildingModel
            Modelo del edificio
        site : SiteInput
            Parámetros de sitio

        Returns
        -------
        StaticAnalysisResult
            Resultado inmutable del análisis
        """
        logger.info("Iniciando análisis estático")
        self._validate_inputs(building, site)

        profile = self.resolver.resolve(site)
        spectrum = self.spectrum_builder.build(profile)
        static = self.static_analyzer.analyze(building, profile, spectrum)

        compliance = self.compliance.evaluate(building, profile, static.base_shear,
                                              static.stories)
        performance = self.assessor.assess(max_drift_ratio(static.stories),
                                           compliance.allowable_drift_ratio)

        result = self.aggregator.aggregate_static(building, profile, spectrum, static,
                                                  compliance, performance)
        logger.info("Análisis estático completado")
        return result

    def run_combined(self, building: BuildingModel, site: SiteInput,
                     records: Optional[Sequence[GroundMotionRecord]] = None
                     ) -> CombinedAnalysisResult:
        """
        Análisis combinado: dinámico escalado respecto al estático

        El cortante estático usa T1 modal limitado a Cu·Ta. La verificación
        normativa usa el cortante dinámico CQC multiplicado por los factores
        de escala.

        Parameters
        ----------
        building : BuildingModel
            Modelo del edificio
        site : SiteInput
            Parámetros de sitio
        records : Sequence[GroundMotionRecord], optional
            Registros sísmicos

        Returns
        -------
        CombinedAnalysisResult
            Resultado inmutable del análisis
        """
        logger.info("Iniciando análisis combinado")
        self._validate_inputs(building, site)

        profile = self.resolver.resolve(site)
        spectrum = self.spectrum_builder.build(profile)
        modal, combination, _ = self._spectral_response(building, spectrum)
        static = self.static_analyzer.analyze(building, profile, spectrum,
                                              modal.fundamental_period)

        scaling = dynamic_scaling(static.base_shear, combination.base_shear,
                                  building.geometry.irregular)
        design_shear = scaling.design_base_shear
        roof = combination.roof_displacement * scaling.scale_factor.maximum()
        stories = self.distributor.distribute(building, design_shear,
                                              modal.fundamental_period, roof)
        trace = self._time_history(building, profile, records)

        compliance = self.compliance.evaluate(building, profile, design_shear, stories)
        performance = self.assessor.assess(max_drift_ratio(stories),
                                           compliance.allowable_drift_ratio)

        result = self.aggregator.aggregate_combined(building, profile, spectrum, modal,
                                                    combination, stories, trace, static,
                                                    scaling, compliance, performance)
        logger.info("Análisis combinado completado")
        return result

    # ------------------------------------------------------------------
    # Etapas internas
    # ------------------------------------------------------------------

    def _validate_inputs(self, building: BuildingModel, site: SiteInput) -> None:
        building_report = validate_building_model(building)
        site_report = validate_site_input(site, known_site_classes=list(sni1726.SITE_CLASSES),
                                          allow_fallback=self.config.allow_site_class_fallback)
        for warning in building_report.warnings + site_report.warnings:
            logger.warning(warning["message"])
        raise_if_invalid(building_report, InvalidInput)
        raise_if_invalid(site_report, InvalidSiteParameter)

    def _spectral_response(self, building: BuildingModel, spectrum: DesignSpectrum
                           ) -> Tuple[ModalAnalysisResult, ResponseCombination,
                                      Tuple[StoryResponse, ...]]:
        modal = self.modal_analyzer.analyze(building)
        combination = self.combiner.combine(modal, spectrum, building)
        stories = self.distributor.distribute(building, combination.base_shear,
                                              modal.fundamental_period,
                                              combination.roof_displacement)
        return modal, combination, stories

    def _time_history(self, building: BuildingModel, profile: SiteSeismicProfile,
                      records: Optional[Sequence[GroundMotionRecord]]) -> TimeHistoryTrace:
        if records:
            record = records[0]
            logger.info(f"Tiempo-historia con registro provisto: {record.name}")
            return self.simulator.simulate(building, record, seed=None,
                                           source=GroundMotionSource.RECORDED)

        seed = self.config.ground_motion_seed
        generator = SyntheticGroundMotionGenerator(seed)
        synthetic = generator.generate(profile.pga)
        return self.simulator.simulate(building, synthetic[0], seed=seed,
                                       source=GroundMotionSource.SYNTHETIC)


def run_analysis(building: BuildingModel, site: SiteInput,
                 config: Optional[AnalysisConfig] = None,
                 records: Optional[Sequence[GroundMotionRecord]] = None
                 ) -> DynamicAnalysisResult:
    """Atajo para un análisis dinámico con la configuración dada"""
    return SeismicAnalysisPipeline(config).run_dynamic(building, site, records)
