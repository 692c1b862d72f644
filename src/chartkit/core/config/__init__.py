# src/chartkit/core/config/__init__.py

"""
Camada de configuração do chartkit.

Responsabilidades do pacote:
    - Defaults embutidos do loader (profundidade máxima, regras de ignore)
    - Resolução de overrides locais via deep-merge determinístico
    - Validação estrutural da configuração

Limites explícitos:
    - Não carrega charts
    - Não depende de I/O além do arquivo de override
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)
from .loader import DEFAULT_CONFIG, LoaderConfig, load_config  # noqa: F401
from .merge import deep_merge  # noqa: F401
