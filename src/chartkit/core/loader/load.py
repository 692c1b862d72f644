# src/chartkit/core/loader/load.py
"""
Pontos de entrada do carregamento de charts.

    load(name)          → descobre se `name` é diretório ou archive
    load_file(name)     → archive .tgz em disco
    load_archive(fp)    → qualquer stream binário com um archive
    load_dir(path)      → diretório (respeita `.helmignore`)
    load_entries(seq)   → montador compartilhado, para produtores próprios

Todos aceitam um `LoadContext` opcional (eventos e warnings) e uma
`LoaderConfig` opcional, usada apenas quando nenhum contexto é passado.
Cada chamada retorna um `Chart` completo e válido ou levanta um único
`ChartError`.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Union

from ..chart.types import Chart, Entry
from ..config import LoaderConfig
from ..context import LoadContext, ensure_context
from ..errors import ChartIOError
from .archive import read_archive
from .assemble import assemble_chart
from .directory import read_dir

PathLike = Union[str, "os.PathLike[str]"]


def _stat(name: PathLike) -> os.stat_result:
    try:
        return os.stat(name)
    except OSError as e:
        raise ChartIOError(f"unable to stat {name}: {e}", details={"path": str(name)}) from e


def load(
    name: PathLike,
    *,
    ctx: Optional[LoadContext] = None,
    config: Optional[LoaderConfig] = None,
) -> Chart:
    """Resolve `name` para diretório ou arquivo e carrega o chart.

    `.helmignore` só é avaliado na leitura de diretórios.
    """
    ctx = ensure_context(ctx, config)
    if stat.S_ISDIR(_stat(name).st_mode):
        return load_dir(name, ctx=ctx)
    return load_file(name, ctx=ctx)


def load_file(
    name: PathLike,
    *,
    ctx: Optional[LoadContext] = None,
    config: Optional[LoaderConfig] = None,
) -> Chart:
    """Carrega um chart a partir de um archive em disco."""
    ctx = ensure_context(ctx, config)
    if stat.S_ISDIR(_stat(name).st_mode):
        raise ChartIOError("cannot load a directory", details={"path": str(name)})

    try:
        fp = open(name, "rb")
    except OSError as e:
        raise ChartIOError(f"unable to open {name}: {e}", details={"path": str(name)}) from e

    with fp:
        ctx.log(level="DEBUG", message="archive opened", path=str(name))
        return load_archive(fp, ctx=ctx)


def load_archive(
    stream: BinaryIO,
    *,
    ctx: Optional[LoadContext] = None,
    config: Optional[LoaderConfig] = None,
) -> Chart:
    """Carrega um chart a partir de um stream com um tar.gz."""
    ctx = ensure_context(ctx, config)
    entries = read_archive(stream, ctx=ctx)
    return assemble_chart(entries, ctx=ctx)


def load_dir(
    path: PathLike,
    *,
    ctx: Optional[LoadContext] = None,
    config: Optional[LoaderConfig] = None,
) -> Chart:
    """Carrega um chart a partir de um diretório."""
    ctx = ensure_context(ctx, config)
    entries = read_dir(Path(path), ctx=ctx)
    return assemble_chart(entries, ctx=ctx)


def load_entries(
    entries: Iterable[Entry],
    *,
    ctx: Optional[LoadContext] = None,
    config: Optional[LoaderConfig] = None,
) -> Chart:
    """Monta um chart a partir de entradas já relativas à raiz."""
    ctx = ensure_context(ctx, config)
    return assemble_chart(entries, ctx=ctx)
