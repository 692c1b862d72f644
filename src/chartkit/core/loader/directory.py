# src/chartkit/core/loader/directory.py
"""
Leitura de charts a partir de um diretório.

A árvore é percorrida em pré-ordem, em ordem lexical de nomes. Cada
diretório (exceto a raiz) e cada arquivo é submetido às regras de
exclusão: um diretório excluído tem a subárvore inteira podada (nada
abaixo dele é visitado ou lido).

As regras são os defaults da configuração somados ao `.helmignore`
da raiz, quando presente.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Union

from ..chart.types import Entry
from ..context import LoadContext
from ..errors import ChartIOError
from ..ignore import IgnoreRules


def load_rules(topdir: Path, *, ctx: LoadContext) -> IgnoreRules:
    """Resolve as regras de exclusão de `topdir`.

    Raises:
        FormatError: `.helmignore` com padrão inválido.
        ChartIOError: `.helmignore` presente mas ilegível.
    """
    rules = IgnoreRules.empty()
    ifile = topdir / ctx.config.ignore_file
    if ifile.is_file():
        rules = IgnoreRules.parse_file(ifile)
        ctx.log(level="DEBUG", message="ignore file loaded", path=str(ifile), rules=len(rules.patterns))
    rules.add_defaults(ctx.config.default_ignore)
    return rules


class _Walker:
    def __init__(self, rules: IgnoreRules) -> None:
        self.rules = rules
        self.entries: List[Entry] = []
        self.skipped = 0

    def walk(self, current: Path, rel: str) -> None:
        try:
            with os.scandir(current) as it:
                children = sorted(it, key=lambda d: d.name)
        except OSError as e:
            raise ChartIOError(f"error reading {rel or '.'}: {e}", details={"path": rel}) from e

        for child in children:
            name = f"{rel}/{child.name}" if rel else child.name
            try:
                is_dir = child.is_dir(follow_symlinks=False)
            except OSError as e:
                raise ChartIOError(f"error reading {name}: {e}", details={"path": name}) from e

            if self.rules.ignores(name, is_dir):
                self.skipped += 1
                continue

            if is_dir:
                self.walk(Path(child.path), name)
                continue

            try:
                data = Path(child.path).read_bytes()
            except OSError as e:
                raise ChartIOError(f"error reading {name}: {e}", details={"path": name}) from e
            self.entries.append(Entry(path=name, data=data))


def read_dir(path: Union[str, Path], *, ctx: LoadContext) -> List[Entry]:
    """Percorre `path` e retorna as entradas relativas à raiz.

    Raises:
        ChartIOError: falha de stat, listagem ou leitura, identificando o
            caminho relativo problemático.
        FormatError: `.helmignore` inválido.
    """
    topdir = Path(os.path.abspath(path))
    if not topdir.is_dir():
        raise ChartIOError(f"{path} is not a directory", details={"path": str(path)})

    rules = load_rules(topdir, ctx=ctx)
    walker = _Walker(rules)
    walker.walk(topdir, "")

    ctx.log(
        level="DEBUG",
        message="directory read",
        path=str(topdir),
        entries=len(walker.entries),
        skipped=walker.skipped,
    )
    return walker.entries
