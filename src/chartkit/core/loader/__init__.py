"""
Carregamento de charts (archive ou diretório) em uma árvore `Chart`.

Fontes distintas (archive, diretório) produzem a mesma sequência de
`Entry`, consumida por um único montador.
"""

from .archive import read_archive  # noqa: F401
from .assemble import Classified, EntryKind, assemble_chart, classify  # noqa: F401
from .directory import read_dir  # noqa: F401
from .load import load, load_archive, load_dir, load_entries, load_file  # noqa: F401
