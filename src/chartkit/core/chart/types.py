# src/chartkit/core/chart/types.py
"""
Tipos canônicos da árvore de charts.

Este módulo define as estruturas produzidas pelo carregamento:

    - Entry      → blob nomeado lido de uma fonte, antes da classificação
    - Maintainer → mantenedor declarado no Chart.yaml
    - Metadata   → registro descritivo do chart (Chart.yaml)
    - Template   → template (nome = caminho completo, ex.: `templates/a.yaml`)
    - File       → arquivo opaco, identificado pelo próprio caminho
    - Chart      → a árvore montada (metadata, values, templates, files,
                   dependencies)

Invariantes:
    - Caminhos usam sempre `/` como separador
    - Dados são `bytes` imutáveis
    - Um `Chart` é construído de baixo para cima e não é mutado depois
      de retornado

Limites explícitos:
    - Não valida sintaxe de templates
    - Não interpreta o conteúdo de `values.yaml`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Entry:
    """Blob nomeado lido de um archive ou diretório."""

    path: str
    data: bytes


@dataclass(frozen=True)
class Maintainer:
    name: str = ""
    email: str = ""
    url: str = ""


@dataclass(frozen=True)
class Metadata:
    """
    Registro descritivo de um chart, desserializado do Chart.yaml.

    `name` é obrigatório para que o chart seja válido; a validação fica a
    cargo do montador (ver `assemble_chart`). Chaves desconhecidas são
    preservadas em `extra`.

    Os campos não podem ser reatribuídos, mas `annotations` e `extra` são
    dicts: o registro não é hashable.
    """

    name: str = ""
    version: str = ""
    description: str = ""
    home: str = ""
    sources: Tuple[str, ...] = ()
    keywords: Tuple[str, ...] = ()
    maintainers: Tuple[Maintainer, ...] = ()
    engine: str = ""
    icon: str = ""
    api_version: str = ""
    app_version: str = ""
    deprecated: bool = False
    tiller_version: str = ""
    kube_version: str = ""
    annotations: Dict[str, str] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class Template:
    name: str
    data: bytes


@dataclass(frozen=True)
class File:
    """Arquivo opaco (inclui sidecars de proveniência `.prov`)."""

    name: str
    data: bytes


@dataclass
class Chart:
    """
    Árvore de chart carregada.

    Campos:
        - metadata: registro obrigatório (nome não vazio)
        - values: conteúdo bruto de `values.yaml`, se presente
        - templates: templates em ordem de descoberta
        - files: arquivos opacos em ordem de descoberta
        - dependencies: subcharts em ordem de descoberta do grupo
    """

    metadata: Optional[Metadata] = None
    values: Optional[bytes] = None
    templates: List[Template] = field(default_factory=list)
    files: List[File] = field(default_factory=list)
    dependencies: List["Chart"] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.metadata.name if self.metadata is not None else ""

    def find_dependency(self, name: str) -> Optional["Chart"]:
        for dep in self.dependencies:
            if dep.name == name:
                return dep
        return None

    def walk(self):
        """Percorre a árvore em pré-ordem, produzindo `(profundidade, chart)`."""
        stack = [(0, self)]
        while stack:
            depth, chart = stack.pop()
            yield depth, chart
            for dep in reversed(chart.dependencies):
                stack.append((depth + 1, dep))
