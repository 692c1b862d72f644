# src/chartkit/core/config/errors.py
"""
Exceções canônicas da camada de configuração do chartkit.

As exceções aqui definidas representam falhas estruturais na resolução da
`LoaderConfig` (defaults embutidos + override opcional em arquivo).

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de carregamento de chart

Limites explícitos:
    - Não realiza fallback ou recovery
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do loader.

    Esta hierarquia permite distinguir falhas de configuração das falhas
    de carregamento de chart (`chartkit.core.errors.ChartError`).
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato do arquivo de override não suportado.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo de override não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"loader": {"max_depth": 32}}
        - override: {"loader": "deep"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidConfigValueError(ConfigError):
    """Chave desconhecida ou valor fora do domínio aceito (ex.: max_depth < 1)."""
