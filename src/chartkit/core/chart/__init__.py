"""chartkit — tipos da árvore de charts e leitura do Chart.yaml."""

from .chartfile import CHARTFILE_NAME, parse_chartfile  # noqa: F401
from .types import Chart, Entry, File, Maintainer, Metadata, Template  # noqa: F401
