# src/chartkit/core/loader/assemble.py
"""
Classificação de entradas e montagem da árvore de charts.

Este é o ponto único onde archive e diretório convergem: recebe uma
sequência ordenada de `Entry` (caminhos relativos à raiz do chart, com `/`)
e produz um `Chart`, recursando para cada subchart em `charts/`.

Classificação (uma vez por entrada, da regra mais específica à mais geral):

    Chart.yaml            → METADATA
    values.toml           → LEGACY_VALUES (sempre erro)
    values.yaml           → VALUES
    templates/*           → TEMPLATE
    charts/**.prov        → PROVENANCE (arquivo opaco do chart pai, em
                            qualquer nível, inclusive `.prov` puro)
    charts/.x, charts/_x  → IGNORED
    charts/<nome>[/...]   → SUBCHART, agrupado por <nome>
    qualquer outro        → FILE

Resolução de subcharts, por grupo (na ordem de descoberta):
    - `<nome>.tgz`: o grupo deve ter exatamente um membro com caminho igual
      a `<nome>.tgz`; o conteúdo é lido como archive e montado
    - diretório: o primeiro segmento é removido de cada membro e o
      resultado é montado recursivamente

Erros de um subchart são re-embrulhados com o nome do subchart e do chart
pai; nenhuma árvore parcial é retornada.
"""

from __future__ import annotations

import io
import posixpath
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from ..chart.chartfile import CHARTFILE_NAME, parse_chartfile
from ..chart.types import Chart, Entry, File, Template
from ..context import LoadContext
from ..errors import ChartError, MissingMetadataError, StructureError, UnsupportedFormatError
from .archive import read_archive

VALUES_NAME = "values.yaml"
LEGACY_VALUES_NAME = "values.toml"
TEMPLATES_DIR = "templates/"
CHARTS_DIR = "charts/"
PROVENANCE_EXT = ".prov"


class EntryKind(str, Enum):
    METADATA = "metadata"
    LEGACY_VALUES = "legacy_values"
    VALUES = "values"
    TEMPLATE = "template"
    PROVENANCE = "provenance"
    IGNORED = "ignored"
    SUBCHART = "subchart"
    FILE = "file"


@dataclass(frozen=True)
class Classified:
    """Resultado da classificação de uma entrada.

    Para `SUBCHART`, `group` é o nome do subchart e `child` é a entrada com
    o prefixo `charts/` removido.
    """

    kind: EntryKind
    entry: Entry
    group: Optional[str] = None
    child: Optional[Entry] = None


def _is_hidden(name: str) -> bool:
    return name[:1] in (".", "_")


def classify(entry: Entry) -> Classified:
    name = entry.path

    if name == CHARTFILE_NAME:
        return Classified(EntryKind.METADATA, entry)
    if name == LEGACY_VALUES_NAME:
        return Classified(EntryKind.LEGACY_VALUES, entry)
    if name == VALUES_NAME:
        return Classified(EntryKind.VALUES, entry)
    if name.startswith(TEMPLATES_DIR):
        return Classified(EntryKind.TEMPLATE, entry)
    if name.startswith(CHARTS_DIR):
        if name.endswith(PROVENANCE_EXT):
            return Classified(EntryKind.PROVENANCE, entry)
        child_path = name[len(CHARTS_DIR):]
        group = child_path.split("/", 1)[0]
        if _is_hidden(child_path):
            return Classified(EntryKind.IGNORED, entry, group=group)
        return Classified(EntryKind.SUBCHART, entry, group=group, child=Entry(child_path, entry.data))
    return Classified(EntryKind.FILE, entry)


def assemble_chart(entries: Iterable[Entry], *, ctx: LoadContext, depth: int = 0) -> Chart:
    """Monta um `Chart` a partir de entradas já normalizadas.

    Args:
        entries: entradas relativas à raiz do chart.
        ctx: contexto do carregamento (config e eventos).
        depth: profundidade do chart na árvore (0 = raiz).

    Raises:
        FormatError: Chart.yaml malformado (ou subchart .tgz ilegível).
        UnsupportedFormatError: `values.toml` presente.
        MissingMetadataError: Chart.yaml ausente ou sem `name`.
        StructureError: subchart .tgz inconsistente ou profundidade acima
            de `max_depth`.
    """
    if depth > ctx.config.max_depth:
        raise StructureError(
            f"chart nesting exceeds maximum depth of {ctx.config.max_depth}",
            details={"depth": depth, "max_depth": ctx.config.max_depth},
        )

    chart = Chart()
    groups: Dict[str, List[Entry]] = {}
    hidden: Dict[str, None] = {}

    for item in map(classify, entries):
        entry = item.entry

        if item.kind is EntryKind.METADATA:
            chart.metadata = parse_chartfile(entry.data)
        elif item.kind is EntryKind.LEGACY_VALUES:
            raise UnsupportedFormatError(
                "values.toml is illegal as of 2.0.0-alpha.2",
                details={"path": entry.path},
            )
        elif item.kind is EntryKind.VALUES:
            chart.values = entry.data
        elif item.kind is EntryKind.TEMPLATE:
            chart.templates.append(Template(name=entry.path, data=entry.data))
        elif item.kind is EntryKind.SUBCHART:
            groups.setdefault(item.group, []).append(item.child)
        elif item.kind in (EntryKind.PROVENANCE, EntryKind.FILE):
            chart.files.append(File(name=entry.path, data=entry.data))
        else:
            hidden[item.group] = None

    if chart.metadata is None or not chart.metadata.name:
        raise MissingMetadataError(
            "chart metadata (Chart.yaml) missing",
            details={"depth": depth},
        )

    parent = chart.metadata.name
    for name in hidden:
        ctx.add_warning(chart=parent, message=f"ignoring subchart {name}")

    for name, members in groups.items():
        if _is_hidden(name):
            continue

        is_archive = posixpath.splitext(name)[1] == ctx.config.nested_archive_ext
        if is_archive and (len(members) != 1 or members[0].path != name):
            got = ", ".join(m.path for m in members)
            raise StructureError(
                f"error unpacking tar in {parent}: expected {name}, got {got}",
                details={"chart": parent, "subchart": name, "member": got},
            )

        try:
            sub = _load_group(name, members, ctx=ctx, depth=depth + 1)
        except ChartError as e:
            raise e.wrap(f"error unpacking {name} in {parent}", chart=parent, subchart=name) from e

        chart.dependencies.append(sub)
        ctx.log(level="DEBUG", message="subchart loaded", chart=parent, subchart=sub.name, depth=depth + 1)

    ctx.log(
        level="INFO" if depth == 0 else "DEBUG",
        message="chart assembled",
        chart=parent,
        templates=len(chart.templates),
        files=len(chart.files),
        dependencies=len(chart.dependencies),
    )
    return chart


def _load_group(name: str, members: List[Entry], *, ctx: LoadContext, depth: int) -> Chart:
    if posixpath.splitext(name)[1] == ctx.config.nested_archive_ext:
        entries = read_archive(io.BytesIO(members[0].data), ctx=ctx)
        return assemble_chart(entries, ctx=ctx, depth=depth)

    stripped = []
    for member in members:
        parts = member.path.split("/", 1)
        if len(parts) < 2:
            continue
        stripped.append(Entry(path=parts[1], data=member.data))
    return assemble_chart(stripped, ctx=ctx, depth=depth)
