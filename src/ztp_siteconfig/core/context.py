# src/ztp_siteconfig/core/context.py
"""
Contexto de geração compartilhado do pipeline de manifests.

Este módulo define o `GenerationContext`, a estrutura que acompanha uma
única requisição de geração de manifests. Ele é o meio canônico de:
    - registrar eventos estruturados de execução (logging)
    - coletar warnings não fatais por estágio
    - carregar a configuração base entregue à capacidade externa de merge

Princípios fundamentais:
    - Isolamento por requisição (cada geração possui seu próprio contexto)
    - Logs são eventos estruturados, não strings livres
    - Ausência de estado global compartilhado

Invariantes:
    - Eventos sempre incluem `run_id` e `stage`
    - Warnings são agrupados por `stage`

Limites explícitos:
    - Não executa merges nem transformações
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass
class GenerationContext:
    """
    Contexto de uma requisição de geração de manifests.

    Campos canônicos:
    - run_id: identificador único da requisição
    - created_at: timestamp UTC de criação do contexto
    - config: settings efetivos (defaults + overrides locais)
    - base_config: configuração base repassada ao merger externo
      (equivalente ao controller config usado pelo merge de MachineConfigs)
    - events: log estruturado de eventos
    - warnings: warnings por estágio
    """

    run_id: str
    created_at: datetime
    config: Dict[str, Any] = field(default_factory=dict)
    base_config: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, stage: str, message: str) -> None:
        if stage not in self.warnings:
            self.warnings[stage] = []
        self.warnings[stage].append(message)

    def events_for(self, stage: str) -> List[Dict[str, Any]]:
        return [ev for ev in self.events if ev["stage"] == stage]


def new_context(
    config: Optional[Dict[str, Any]] = None,
    base_config: Optional[Dict[str, Any]] = None,
) -> GenerationContext:
    """Cria um contexto novo com `run_id` aleatório e timestamp UTC."""
    return GenerationContext(
        run_id=uuid.uuid4().hex,
        created_at=datetime.now(timezone.utc),
        config=dict(config or {}),
        base_config=dict(base_config or {}),
    )
