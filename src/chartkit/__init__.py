# src/chartkit/__init__.py
"""
chartkit — carregamento de charts em uma árvore validada em memória.

Um chart é lido de um archive (`.tgz`) ou de um diretório e montado em um
`Chart` com metadata, values, templates, arquivos opacos e subcharts
(dependências) carregados recursivamente.

Exemplo:

    from chartkit import load

    chart = load("path/to/mychart")
    print(chart.metadata.name, [d.name for d in chart.dependencies])

Limites explícitos:
    - Não valida sintaxe de templates
    - Não resolve restrições de versão entre dependências
    - Não faz download de charts
"""

from .core.chart import Chart, Entry, File, Maintainer, Metadata, Template, parse_chartfile
from .core.config import LoaderConfig, load_config
from .core.context import LoadContext
from .core.errors import (
    ChartError,
    ChartIOError,
    EmptyArchiveError,
    FormatError,
    MisplacedMetadataError,
    MissingMetadataError,
    StructureError,
    UnsupportedFormatError,
)
from .core.ignore import IgnoreRules
from .core.loader import load, load_archive, load_dir, load_entries, load_file

__all__ = [
    "Chart",
    "Entry",
    "File",
    "Maintainer",
    "Metadata",
    "Template",
    "parse_chartfile",
    "LoaderConfig",
    "load_config",
    "LoadContext",
    "ChartError",
    "ChartIOError",
    "EmptyArchiveError",
    "FormatError",
    "MisplacedMetadataError",
    "MissingMetadataError",
    "StructureError",
    "UnsupportedFormatError",
    "IgnoreRules",
    "load",
    "load_archive",
    "load_dir",
    "load_entries",
    "load_file",
]
