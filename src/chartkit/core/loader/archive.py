# src/chartkit/core/loader/archive.py
"""
Leitura de archives de chart (tar comprimido com gzip).

O archive é lido em modo streaming e reduzido a uma sequência ordenada de
`Entry`. Diretórios são ignorados. Todas as entradas devem compartilhar
um primeiro segmento comum (o diretório raiz do chart), que é removido do
caminho efetivo de cada entrada.

Regras:
    - falha de descompressão ou bloco ilegível → FormatError
    - `Chart.yaml` como primeiro segmento → MisplacedMetadataError
      (archive empacotado sem o diretório raiz)
    - nenhuma entrada de arquivo → EmptyArchiveError

Limites explícitos:
    - Não consulta regras de `.helmignore`
    - Não classifica as entradas
"""

from __future__ import annotations

import tarfile
import zlib
from typing import BinaryIO, List

from ..chart.chartfile import CHARTFILE_NAME
from ..chart.types import Entry
from ..context import LoadContext
from ..errors import EmptyArchiveError, FormatError, MisplacedMetadataError


def _strip_root(name: str) -> str:
    parts = name.split("/")
    return "/".join(parts[1:])


def read_archive(stream: BinaryIO, *, ctx: LoadContext) -> List[Entry]:
    """Descomprime `stream` e retorna as entradas com a raiz removida.

    O stream não é fechado aqui; o leitor tar/gzip é liberado em qualquer
    caminho de saída.

    Raises:
        FormatError: stream não é gzip/tar válido ou está truncado.
        MisplacedMetadataError: `Chart.yaml` fora do diretório raiz.
        EmptyArchiveError: nenhuma entrada de arquivo no archive.
    """
    entries: List[Entry] = []

    try:
        with tarfile.open(fileobj=stream, mode="r|gz") as tar:
            for member in tar:
                if member.isdir():
                    continue

                if member.name.split("/")[0] == CHARTFILE_NAME:
                    raise MisplacedMetadataError(
                        "chart yaml not in base directory",
                        details={"path": member.name},
                    )

                data = b""
                if member.isreg():
                    f = tar.extractfile(member)
                    if f is not None:
                        data = f.read()

                entries.append(Entry(path=_strip_root(member.name), data=data))
    except (tarfile.TarError, zlib.error, EOFError, OSError) as e:
        raise FormatError(f"unable to read chart archive: {e}") from e

    if not entries:
        raise EmptyArchiveError("no files in chart archive")

    ctx.log(level="DEBUG", message="archive read", entries=len(entries))
    return entries
