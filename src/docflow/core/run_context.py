# src/docflow/core/run_context.py
"""
RunContext: contexto canônico de uma execução de workflow.

O RunContext é criado pelo Executor no início de cada run e concentra a
observabilidade da execução:
- identidade da run (`run_id`, `created_at`)
- configuração efetiva usada
- log estruturado de eventos (run, nós, progresso, cancelamento)
- warnings não fatais agrupados por nó (ou `"workflow"` para avisos globais)

Princípios fundamentais:
- Isolamento por execução (cada run possui seu próprio contexto)
- Logs são eventos estruturados, não strings livres
- Nenhum estado global compartilhado
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


WORKFLOW_SCOPE = "workflow"


def new_run_id() -> str:
    return f"run_{uuid.uuid4().hex[:12]}"


@dataclass
class RunContext:
    """
    Contexto de execução de uma run do workflow.

    Campos canônicos:
    - run_id: identificador único da execução
    - created_at: timestamp UTC de criação do contexto
    - config: configuração efetiva (embutido + defaults + local)
    - meta: metadados livres (ex.: nome do workflow)
    - events: log estruturado de eventos, em ordem de emissão
    - warnings: warnings por node_id
    """

    run_id: str
    created_at: datetime
    config: Dict[str, Any]
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def create(cls, config: Optional[Dict[str, Any]] = None, **meta: Any) -> "RunContext":
        return cls(
            run_id=new_run_id(),
            created_at=datetime.now(timezone.utc),
            config=dict(config or {}),
            meta=dict(meta),
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, level: str, message: str, node_id: Optional[str] = None, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "node_id": node_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, message: str, node_id: Optional[str] = None) -> None:
        key = node_id or WORKFLOW_SCOPE
        if key not in self.warnings:
            self.warnings[key] = []
        self.warnings[key].append(message)

    def events_for(self, node_id: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("node_id") == node_id]
