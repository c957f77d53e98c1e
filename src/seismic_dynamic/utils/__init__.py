"""
Módulo de utilidades del análisis sísmico dinámico
==================================================

Componentes disponibles:
- validators: Excepciones y validadores de entrada
- file_handlers: Lectura de registros CSV y escritura de resultados JSON
"""

import logging

from .validators import *  # noqa: F401,F403
from .validators import __all__ as validators_all
from .file_handlers import *  # noqa: F401,F403
from .file_handlers import __all__ as file_handlers_all

# Configurar logger
logger = logging.getLogger(__name__)

# Información del módulo
__version__ = "1.0.0"

__all__ = []
__all__.extend(validators_all)
__all__.extend(file_handlers_all)
