# src/chartkit/core/chart/chartfile.py
"""Desserialização do Chart.yaml em `Metadata`.

Notas:
- YAML é lido com `yaml.safe_load` (sem tags arbitrárias).
- Documento vazio produz `Metadata()` vazio; quem valida o nome é o montador.
- Estruturas inválidas geram `FormatError`.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

import yaml

from ..errors import FormatError
from .types import Maintainer, Metadata

CHARTFILE_NAME = "Chart.yaml"

# chave YAML -> campo de Metadata
_STRING_FIELDS = {
    "name": "name",
    "version": "version",
    "description": "description",
    "home": "home",
    "engine": "engine",
    "icon": "icon",
    "apiVersion": "api_version",
    "appVersion": "app_version",
    "tillerVersion": "tiller_version",
    "kubeVersion": "kube_version",
}
_LIST_FIELDS = {"sources": "sources", "keywords": "keywords"}


def _as_text(key: str, value: Any) -> str:
    if value is None:
        return ""
    # `version: 1.0` chega como float; normaliza para texto
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    raise FormatError(
        f"Chart.yaml field '{key}' must be a string, got {type(value).__name__}",
        details={"field": key},
    )


def _as_text_list(key: str, value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise FormatError(
            f"Chart.yaml field '{key}' must be a list, got {type(value).__name__}",
            details={"field": key},
        )
    return tuple(_as_text(key, v) for v in value)


def _maintainers(value: Any) -> Tuple[Maintainer, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise FormatError("Chart.yaml field 'maintainers' must be a list", details={"field": "maintainers"})

    out = []
    for item in value:
        if not isinstance(item, dict):
            raise FormatError(
                "Chart.yaml maintainer entries must be mappings",
                details={"field": "maintainers"},
            )
        out.append(
            Maintainer(
                name=_as_text("maintainers.name", item.get("name")),
                email=_as_text("maintainers.email", item.get("email")),
                url=_as_text("maintainers.url", item.get("url")),
            )
        )
    return tuple(out)


def _annotations(value: Any) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise FormatError("Chart.yaml field 'annotations' must be a mapping", details={"field": "annotations"})
    return {str(k): _as_text(f"annotations.{k}", v) for k, v in value.items()}


def parse_chartfile(data: bytes) -> Metadata:
    """Converte o conteúdo bruto de um Chart.yaml em `Metadata`.

    Args:
        data: bytes do arquivo.

    Raises:
        FormatError: YAML malformado, raiz que não é mapping ou campos
            conhecidos com tipo incompatível.
    """
    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise FormatError(f"malformed {CHARTFILE_NAME}: {e}") from e

    if raw is None:
        return Metadata()

    if not isinstance(raw, dict):
        raise FormatError(
            f"{CHARTFILE_NAME} root must be a mapping, got {type(raw).__name__}"
        )

    fields: Dict[str, Any] = {}
    extra: Dict[str, Any] = {}

    for key, value in raw.items():
        key = str(key)
        if key in _STRING_FIELDS:
            fields[_STRING_FIELDS[key]] = _as_text(key, value)
        elif key in _LIST_FIELDS:
            fields[_LIST_FIELDS[key]] = _as_text_list(key, value)
        elif key == "maintainers":
            fields["maintainers"] = _maintainers(value)
        elif key == "annotations":
            fields["annotations"] = _annotations(value)
        elif key == "deprecated":
            if value is not None and not isinstance(value, bool):
                raise FormatError("Chart.yaml field 'deprecated' must be a boolean", details={"field": key})
            fields["deprecated"] = bool(value)
        else:
            extra[key] = value

    return Metadata(extra=extra, **fields)
