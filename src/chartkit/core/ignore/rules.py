# src/chartkit/core/ignore/rules.py
"""
Regras de exclusão (`.helmignore`) usadas na leitura de diretórios.

As regras são padrões no estilo gitignore, avaliados com `pathspec`:
    - linhas vazias e comentários (`#`) são ignorados
    - `!padrão` reinclui o que uma regra anterior excluiu
    - `dir/` só casa com diretórios
    - a última regra que casar decide

Diretórios são consultados com barra final, de forma que um padrão como
`secrets/` exclua o diretório inteiro (a poda da subárvore é feita pelo
walker).

Limites explícitos:
    - Não é consultado na leitura de archives
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Union

import pathspec

from ..errors import ChartIOError, FormatError

HELMIGNORE = ".helmignore"


def _clean(lines: Iterable[str]) -> List[str]:
    out = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        out.append(line)
    return out


def _compile(patterns: List[str]) -> pathspec.PathSpec:
    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", patterns)
    except ValueError as e:
        raise FormatError(f"invalid ignore pattern: {e}") from e


class IgnoreRules:
    """Conjunto ordenado de regras de exclusão."""

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self._patterns: List[str] = _clean(patterns)
        self._spec = _compile(self._patterns)

    @classmethod
    def empty(cls) -> "IgnoreRules":
        return cls()

    @classmethod
    def parse(cls, text: str) -> "IgnoreRules":
        """Lê regras a partir do texto de um `.helmignore`.

        Raises:
            FormatError: padrão inválido.
        """
        return cls(text.splitlines())

    @classmethod
    def parse_file(cls, path: Union[str, Path]) -> "IgnoreRules":
        p = Path(path)
        try:
            raw = p.read_bytes()
        except OSError as e:
            raise ChartIOError(f"error reading {p.name}: {e}", details={"path": str(p)}) from e

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FormatError(f"{p.name} is not valid UTF-8", details={"path": str(p)}) from e

        try:
            return cls.parse(text)
        except FormatError as e:
            raise e.wrap(f"error parsing {p.name}", path=str(p)) from e

    @property
    def patterns(self) -> List[str]:
        return list(self._patterns)

    def add_defaults(self, patterns: Iterable[str]) -> None:
        """Acrescenta as regras embutidas (sempre aplicadas)."""
        extra = _clean(patterns)
        if not extra:
            return
        self._patterns.extend(extra)
        self._spec = _compile(self._patterns)

    def ignores(self, path: str, is_dir: bool) -> bool:
        """Decide se `path` (relativo à raiz, com `/`) deve ser omitido."""
        path = path.strip("/")
        if path in ("", "."):
            return False
        if is_dir:
            path += "/"
        return self._spec.match_file(path)
