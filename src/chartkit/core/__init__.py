"""
Core do chartkit.

Este pacote reúne a implementação do carregamento de charts:
    - core.chart   → tipos da árvore e leitura do Chart.yaml
    - core.ignore  → regras de exclusão (.helmignore)
    - core.loader  → leitura de archive/diretório e montagem da árvore
    - core.config  → configuração do loader (defaults + override)
    - core.context → eventos estruturados e warnings de um carregamento

O core é síncrono, sem estado global e não depende de CLI, renderização
ou instalação de charts.
"""
