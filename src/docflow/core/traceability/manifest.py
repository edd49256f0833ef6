# src/docflow/core/traceability/manifest.py
"""
Manifest v1: registro forense de uma execução de workflow no DocFlow.

O Manifest consolida, de forma determinística e auditável:
    - metadados da run (run_id, started_at, engine_version, status final)
    - hashes das entradas (configuração efetiva e estrutura do workflow)
    - estado incremental de cada nó executado
    - Event Log ordenado de eventos explícitos

Princípios fundamentais:
    - Nenhum evento é emitido implicitamente
    - Toda mutação ocorre por chamadas explícitas da API
    - A ordem do Event Log reflete a ordem real de execução
    - O Manifest é serializável e reconstruível (round-trip JSON)

Decisões arquiteturais:
    - UTC é o timezone canônico para todos os timestamps
    - Artefatos não entram no Manifest; apenas sua contagem e formas
    - O Manifest é independente do Executor e do editor

Limites explícitos:
    - Não executa workflows
    - Não decide políticas de execução
    - Não realiza migração de versões de schema
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """
    Normaliza um timestamp para timezone-aware em UTC.

    Timestamps timezone-naive são assumidos como UTC; timestamps com
    timezone são convertidos preservando o instante.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _iso(dt: datetime) -> str:
    return _ensure_tzaware_utc(dt).isoformat()


def _ms_between(start: datetime, end: datetime) -> int:
    """Duração em milissegundos, nunca negativa."""
    s = _ensure_tzaware_utc(start)
    e = _ensure_tzaware_utc(end)
    return max(0, int((e - s).total_seconds() * 1000))


@dataclass
class RunManifest:
    """
    Estrutura canônica do Manifest de uma run.

    Campos principais:
        - run: metadados da execução (run_id, started_at, engine_version,
          e, ao final, status/finished_at/duration_ms)
        - inputs: config_hash e workflow_hash
        - nodes: estado incremental por node_id
        - events: Event Log ordenado

    Invariantes:
        - `nodes` é sempre um dicionário indexado por node_id
        - `events` é sempre uma lista ordenada
        - A estrutura completa é serializável
    """

    run: Dict[str, Any]
    inputs: Dict[str, Any]
    nodes: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Cópia serializável e independente do estado interno."""
        return {
            "run": dict(self.run),
            "inputs": dict(self.inputs),
            "nodes": {k: dict(v) for k, v in self.nodes.items()},
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunManifest":
        """Reconstrução estrutural permissiva; campos ausentes iniciam vazios."""
        return cls(
            run=dict(data.get("run", {})),
            inputs=dict(data.get("inputs", {})),
            nodes={k: dict(v) for k, v in (data.get("nodes", {}) or {}).items()},
            events=[dict(e) for e in (data.get("events", []) or [])],
        )


def create_manifest(
    *,
    run_id: str,
    started_at: datetime,
    engine_version: str,
    config_hash: str,
    workflow_hash: str,
) -> RunManifest:
    """
    Cria o Manifest inicial de uma run.

    Esta função **não emite eventos**: o Event Log inicia vazio e só é
    preenchido por `add_event`, `node_started`, `node_finished`,
    `node_failed` ou `run_finished`.

    Args:
        run_id: identificador único da run.
        started_at: timestamp de início (normalizado para UTC).
        engine_version: versão do DocFlow utilizada.
        config_hash: hash da configuração efetiva.
        workflow_hash: hash estrutural do workflow executado.

    Returns:
        RunManifest: Manifest com `nodes` e `events` vazios.
    """
    return RunManifest(
        run={
            "run_id": run_id,
            "started_at": _iso(started_at),
            "engine_version": engine_version,
        },
        inputs={
            "config_hash": config_hash,
            "workflow_hash": workflow_hash,
        },
    )


def add_event(
    manifest: RunManifest,
    *,
    event_type: str,
    ts: datetime,
    node_id: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Adiciona um evento explícito ao Event Log.

    Cada chamada adiciona exatamente um evento; eventos nunca são
    reordenados nem deduplicados. O payload não é validado.
    """
    ev: Dict[str, Any] = {"event_type": event_type, "timestamp": _iso(ts)}
    if node_id is not None:
        ev["node_id"] = node_id
    if payload is not None:
        ev["payload"] = payload
    manifest.events.append(ev)


def node_started(manifest: RunManifest, *, node_id: str, tool_id: str, ts: datetime, input_count: int) -> None:
    n = manifest.nodes.setdefault(node_id, {})
    n.update(
        {
            "node_id": node_id,
            "tool_id": tool_id,
            "status": "processing",
            "started_at": _iso(ts),
            "input_count": input_count,
        }
    )
    add_event(manifest, event_type="node_started", ts=ts, node_id=node_id, payload={"tool_id": tool_id})


def node_finished(
    manifest: RunManifest,
    *,
    node_id: str,
    ts: datetime,
    output_kinds: List[str],
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Registra a conclusão bem-sucedida de um nó.

    `output_kinds` lista a forma de cada artefato produzido
    (`raw`/`named`), na ordem de saída.
    """
    n = manifest.nodes.setdefault(node_id, {"node_id": node_id})
    started_iso = n.get("started_at")
    try:
        started_dt = datetime.fromisoformat(started_iso) if started_iso else ts
    except ValueError:
        started_dt = ts

    n.update(
        {
            "status": "complete",
            "finished_at": _iso(ts),
            "duration_ms": _ms_between(started_dt, ts),
            "output_count": len(output_kinds),
            "output_kinds": list(output_kinds),
            "metadata": dict(metadata or {}),
        }
    )
    add_event(
        manifest,
        event_type="node_finished",
        ts=ts,
        node_id=node_id,
        payload={"output_count": len(output_kinds), "duration_ms": n["duration_ms"]},
    )


def node_failed(manifest: RunManifest, *, node_id: str, ts: datetime, error: Dict[str, Any]) -> None:
    n = manifest.nodes.setdefault(node_id, {"node_id": node_id})
    n.update({"status": "error", "finished_at": _iso(ts), "error": dict(error)})
    add_event(manifest, event_type="node_failed", ts=ts, node_id=node_id, payload={"error": error.get("message")})


def run_finished(manifest: RunManifest, *, status: str, ts: datetime, error: Optional[Dict[str, Any]] = None) -> None:
    """Fecha o Manifest com o status final da run (complete, error, cancelled)."""
    started_iso = manifest.run.get("started_at")
    started_dt = datetime.fromisoformat(started_iso) if started_iso else ts
    manifest.run.update(
        {
            "status": status,
            "finished_at": _iso(ts),
            "duration_ms": _ms_between(started_dt, ts),
        }
    )
    payload: Dict[str, Any] = {"status": status}
    if error is not None:
        manifest.run["error"] = dict(error)
        payload["error_type"] = error.get("type")
    add_event(manifest, event_type="run_finished", ts=ts, payload=payload)


def save_manifest(manifest: RunManifest, path: Path) -> None:
    """Persiste o Manifest em JSON determinístico (chaves ordenadas)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(manifest.to_dict(), ensure_ascii=False, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def load_manifest(path: Path) -> RunManifest:
    data = json.loads(path.read_text(encoding="utf-8"))
    return RunManifest.from_dict(data)
