# src/chartkit/core/config/loader.py
"""
Loader da configuração do chartkit.

A configuração efetiva é resolvida a partir de:
    - defaults embutidos (`DEFAULT_CONFIG`, sempre presentes)
    - um arquivo local de overrides (opcional, YAML ou JSON)

Estrutura:

    loader:
      max_depth: 32            # profundidade máxima de subcharts
      nested_archive_ext: .tgz
    ignore:
      file_name: .helmignore   # arquivo de regras na raiz do diretório
      defaults:                # regras embutidas, sempre aplicadas
        - "templates/.?*"

Invariantes:
    - Defaults nunca são ignorados
    - Overrides nunca mutam os defaults
    - O resultado é sempre uma `LoaderConfig` imutável

Limites explícitos:
    - Não carrega charts
    - Não persiste configuração
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml  # PyYAML

from ..ignore.rules import HELMIGNORE
from .errors import (
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge

DEFAULT_CONFIG: Dict[str, Any] = {
    "loader": {
        "max_depth": 32,
        "nested_archive_ext": ".tgz",
    },
    "ignore": {
        "file_name": HELMIGNORE,
        "defaults": ["templates/.?*"],
    },
}


@dataclass(frozen=True)
class LoaderConfig:
    """Configuração efetiva e imutável do carregamento."""

    max_depth: int = 32
    nested_archive_ext: str = ".tgz"
    ignore_file: str = HELMIGNORE
    default_ignore: Tuple[str, ...] = ("templates/.?*",)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoaderConfig":
        """Constrói a config a partir de um dicionário já resolvido.

        Raises:
            InvalidConfigValueError: chave desconhecida ou valor inválido.
        """
        unknown = set(data) - set(DEFAULT_CONFIG)
        if unknown:
            raise InvalidConfigValueError(f"Seções desconhecidas: {sorted(unknown)}")

        loader = data.get("loader", {})
        ignore = data.get("ignore", {})
        for section, known, values in (
            ("loader", DEFAULT_CONFIG["loader"], loader),
            ("ignore", DEFAULT_CONFIG["ignore"], ignore),
        ):
            extra = set(values) - set(known)
            if extra:
                raise InvalidConfigValueError(f"Chaves desconhecidas em '{section}': {sorted(extra)}")

        max_depth = loader.get("max_depth", cls.max_depth)
        if not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < 1:
            raise InvalidConfigValueError(f"loader.max_depth deve ser inteiro >= 1, recebido: {max_depth!r}")

        ext = loader.get("nested_archive_ext", cls.nested_archive_ext)
        if not isinstance(ext, str) or not ext.startswith("."):
            raise InvalidConfigValueError(f"loader.nested_archive_ext deve começar com '.', recebido: {ext!r}")

        file_name = ignore.get("file_name", cls.ignore_file)
        if not isinstance(file_name, str) or not file_name or "/" in file_name:
            raise InvalidConfigValueError(f"ignore.file_name inválido: {file_name!r}")

        patterns = ignore.get("defaults", list(cls.default_ignore))
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            raise InvalidConfigValueError("ignore.defaults deve ser uma lista de strings")

        return cls(
            max_depth=max_depth,
            nested_archive_ext=ext,
            ignore_file=file_name,
            default_ignore=tuple(patterns),
        )


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de override e valida sua estrutura básica.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(*, local_path: Optional[str] = None) -> LoaderConfig:
    """
    Resolve a configuração efetiva do loader.

    Política de resolução:
        - Os defaults embutidos são sempre a base
        - O arquivo local é opcional; se não existir, é ignorado
        - Quando presente, o local tem prioridade via `deep_merge`

    Args:
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        LoaderConfig: Configuração final resolvida.

    Raises:
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
        InvalidConfigValueError: Se chaves ou valores forem inválidos.
    """
    effective = DEFAULT_CONFIG

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(DEFAULT_CONFIG, _load_file(local_file))

    return LoaderConfig.from_dict(effective)
