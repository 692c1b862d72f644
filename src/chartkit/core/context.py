# src/chartkit/core/context.py
"""
Contexto de um carregamento de chart.

Este módulo define o `LoadContext`, a estrutura compartilhada por todas as
etapas de uma chamada de carregamento (top-level e subcharts recursivos).

O LoadContext concentra:
    - identidade do carregamento (`load_id`, `created_at`)
    - a configuração efetiva (`LoaderConfig`)
    - log estruturado de eventos, espelhado no logger `chartkit`
    - warnings não fatais agrupados por chart

Princípios fundamentais:
    - Isolamento por carregamento (cada chamada pode ter seu contexto)
    - Ausência de estado global compartilhado
    - Eventos são estruturados, não texto livre

Limites explícitos:
    - Não lê fontes nem classifica entradas
    - Não persiste eventos
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .config import LoaderConfig

logger = logging.getLogger("chartkit")

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


@dataclass
class LoadContext:
    """
    Contexto de um carregamento de chart.

    Invariantes:
        - Eventos sempre incluem `load_id`, `level`, `message` e `timestamp`
        - A ordem de `events` reflete a ordem real do carregamento
        - Warnings são agrupados pelo nome do chart que os originou
    """

    config: LoaderConfig = field(default_factory=LoaderConfig)
    load_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, level: str, message: str, **extra: Any) -> None:
        event = {
            "load_id": self.load_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)
        logger.log(_LEVELS.get(level, logging.INFO), "%s %s", message, extra or "")

    def add_warning(self, *, chart: str, message: str) -> None:
        if chart not in self.warnings:
            self.warnings[chart] = []
        self.warnings[chart].append(message)
        self.log(level="WARNING", message=message, chart=chart)


def ensure_context(ctx: Optional[LoadContext], config: Optional[LoaderConfig] = None) -> LoadContext:
    """Retorna `ctx` ou um contexto novo com `config` (ou os defaults)."""
    if ctx is not None:
        return ctx
    return LoadContext(config=config or LoaderConfig())
