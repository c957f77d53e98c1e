"""
Seismic Dynamic
===============

Calculadora de demanda sísmica para edificios según SNI 1726:2019:
parámetros de sitio, espectro de diseño, análisis modal, combinación
modal, fuerzas y derivas de piso, respuesta tiempo-historia aproximada,
verificaciones normativas y evaluación de desempeño.

Ejemplo de uso:
    ```python
    from seismic_dynamic import (
        BuildingGeometry, BuildingModel, MassDistribution, SiteInput,
        SeismicAnalysisPipeline, setup_logging
    )

    setup_logging('INFO')
    building = BuildingModel(
        geometry=BuildingGeometry(length=30, width=20, floor_height=3.5,
                                  number_of_floors=8),
        masses=MassDistribution(total_mass=2.4e6),
    )
    site = SiteInput(site_class='SD', ss=1.0, s1=0.4, risk_category='II')
    result = SeismicAnalysisPipeline().run_dynamic(building, site)
    ```
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .core import (  # noqa: E402
    DEFAULT_CONFIG,
    AnalysisConfig,
    get_config,
    get_version,
    setup_logging,
)
from .data import *  # noqa: E402,F401,F403
from .data import __all__ as data_all  # noqa: E402
from .analysis import *  # noqa: E402,F401,F403
from .analysis import __all__ as analysis_all  # noqa: E402
from .utils.validators import (  # noqa: E402
    AnalysisConsistencyError,
    ConvergenceWarning,
    InvalidInput,
    InvalidSiteParameter,
    ValidationError,
)

__version__ = get_version()
__author__ = "Seismic Dynamic Project"

__all__ = [
    'DEFAULT_CONFIG',
    'AnalysisConfig',
    'get_config',
    'get_version',
    'setup_logging',
    'AnalysisConsistencyError',
    'ConvergenceWarning',
    'InvalidInput',
    'InvalidSiteParameter',
    'ValidationError',
]
__all__.extend(data_all)
__all__.extend(analysis_all)
