# src/chartkit/core/errors.py
"""
Exceções canônicas do carregamento de charts.

Este módulo define a hierarquia oficial de exceções levantadas durante a
leitura de uma fonte (archive ou diretório), a classificação das entradas
e a montagem da árvore de charts.

Todas as falhas são fatais para a chamada que as detecta e para todas as
chamadas ancestrais: nenhuma árvore parcial é retornada.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Cada exceção carrega `details` estruturados (serializáveis)
    - Ao subir pela recursão, o erro é re-embrulhado com contexto
      preservando o tipo e a causa original

Limites explícitos:
    - Não realiza retry ou fallback
    - Não depende de loader, config ou I/O
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ChartError(Exception):
    """
    Exceção base de todas as falhas de carregamento de chart.

    Atributos:
        message: mensagem curta e humana.
        details: dados estruturados relevantes para diagnóstico
            (ex.: `chart`, `subchart`, `path`).
    """

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        return self.message

    def wrap(self, context: str, **details: Any) -> "ChartError":
        """Retorna um novo erro do mesmo tipo com `context` prefixado.

        Os `details` são mesclados (os novos têm precedência) e a causa
        original é preservada em `__cause__`.
        """
        merged = dict(self.details)
        merged.update(details)
        wrapped = type(self)(f"{context}: {self.message}", details=merged)
        wrapped.__cause__ = self
        return wrapped

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "message": self.message,
            "details": dict(self.details),
        }


class ChartIOError(ChartError, OSError):
    """Fonte não pode ser aberta, lida ou inspecionada (stat)."""


class FormatError(ChartError):
    """Descompressão, bloco de archive, Chart.yaml ou .helmignore malformados."""


class UnsupportedFormatError(ChartError):
    """Formato legado explicitamente rejeitado (values.toml)."""


class EmptyArchiveError(ChartError):
    """Archive sem nenhuma entrada de arquivo utilizável."""


class MissingMetadataError(ChartError):
    """Chart.yaml ausente ou sem `name` após a classificação completa."""


class StructureError(ChartError):
    """
    Estrutura do chart inconsistente.

    Exemplos:
        - subchart em formato archive cujo membro não bate com o nome do grupo
        - Chart.yaml como primeiro segmento do archive (diretório raiz ausente)
        - profundidade de subcharts acima do limite configurado
    """


class MisplacedMetadataError(StructureError, FormatError):
    """Chart.yaml encontrado como primeiro segmento de um archive.

    O archive foi empacotado sem o diretório raiz esperado; é ao mesmo
    tempo um erro de estrutura e de formato do archive.
    """
