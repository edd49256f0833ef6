# src/docflow/core/traceability/history.py
"""
Histórico de execuções de workflows.

Cada run do Executor pode ser registrada em um `ExecutionHistory`,
que mantém um registro por execução (snapshot do grafo, contagem de
arquivos, status, duração, nó que falhou) e calcula estatísticas
agregadas.

Decisões arquiteturais:
    - Retenção limitada: apenas os `max_records` registros mais recentes
      são mantidos (padrão 50, configurável em `history.max_records`)
    - Persistência opcional em JSON via `save`/`load`
    - O snapshot do grafo contém apenas estrutura, nunca artefatos

Limites explícitos:
    - Não armazena workflows salvos
    - Não executa workflows
"""

from __future__ import annotations

import json
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from docflow.core.config.loader import history_max_records
from docflow.core.workflow.schema import Workflow, workflow_to_dict
from docflow.core.workflow.types import Edge, Node


class RecordStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


FINAL_STATUSES = (RecordStatus.COMPLETED, RecordStatus.FAILED, RecordStatus.CANCELLED)


@dataclass
class ExecutionRecord:
    """Registro de uma execução de workflow."""

    id: str
    workflow: Dict[str, Any]
    file_count: int
    started_at: datetime
    total_nodes: int
    status: RecordStatus = RecordStatus.RUNNING
    successful_nodes: int = 0
    workflow_name: Optional[str] = None
    workflow_id: Optional[str] = None
    finished_at: Optional[datetime] = None
    duration_ms: Optional[int] = None
    error_message: Optional[str] = None
    failed_node_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["status"] = self.status.value
        out["started_at"] = self.started_at.isoformat()
        out["finished_at"] = self.finished_at.isoformat() if self.finished_at else None
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExecutionRecord":
        finished = data.get("finished_at")
        return cls(
            id=data["id"],
            workflow=dict(data.get("workflow") or {}),
            file_count=int(data.get("file_count", 0)),
            started_at=datetime.fromisoformat(data["started_at"]),
            total_nodes=int(data.get("total_nodes", 0)),
            status=RecordStatus(data.get("status", RecordStatus.RUNNING.value)),
            successful_nodes=int(data.get("successful_nodes", 0)),
            workflow_name=data.get("workflow_name"),
            workflow_id=data.get("workflow_id"),
            finished_at=datetime.fromisoformat(finished) if finished else None,
            duration_ms=data.get("duration_ms"),
            error_message=data.get("error_message"),
            failed_node_id=data.get("failed_node_id"),
        )


@dataclass(frozen=True)
class ExecutionStatistics:
    total: int
    completed: int
    failed: int
    cancelled: int
    avg_duration_ms: float
    success_rate: float


def new_execution_id() -> str:
    return f"exec_{uuid.uuid4().hex[:12]}"


@dataclass
class ExecutionHistory:
    """Coleção ordenada (mais antigo primeiro) de registros de execução."""

    max_records: int = 50
    _records: List[ExecutionRecord] = field(default_factory=list, repr=False)

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> "ExecutionHistory":
        return cls(max_records=history_max_records(config))

    @property
    def records(self) -> List[ExecutionRecord]:
        return list(self._records)

    def create_record(
        self,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        *,
        file_count: int,
        workflow_name: Optional[str] = None,
        workflow_id: Optional[str] = None,
        started_at: Optional[datetime] = None,
    ) -> ExecutionRecord:
        """Cria (sem adicionar) um registro `running` com snapshot do grafo."""
        snapshot = workflow_to_dict(Workflow(nodes=list(nodes), edges=list(edges)))
        return ExecutionRecord(
            id=new_execution_id(),
            workflow=snapshot,
            file_count=file_count,
            started_at=started_at or datetime.now(timezone.utc),
            total_nodes=len(nodes),
            workflow_name=workflow_name,
            workflow_id=workflow_id,
        )

    def add(self, record: ExecutionRecord) -> None:
        self._records.append(record)
        self._trim()

    def get(self, record_id: str) -> Optional[ExecutionRecord]:
        for r in self._records:
            if r.id == record_id:
                return r
        return None

    def update(self, record_id: str, **changes: Any) -> bool:
        record = self.get(record_id)
        if record is None:
            return False
        for key, value in changes.items():
            if not hasattr(record, key):
                raise AttributeError(f"ExecutionRecord has no field '{key}'")
            setattr(record, key, value)
        return True

    def complete(
        self,
        record_id: str,
        *,
        status: RecordStatus,
        successful_nodes: int,
        error_message: Optional[str] = None,
        failed_node_id: Optional[str] = None,
        finished_at: Optional[datetime] = None,
    ) -> bool:
        """Fecha um registro com status final, horário de término e duração."""
        if status not in FINAL_STATUSES:
            raise ValueError(f"status final inválido: {status!r}")
        record = self.get(record_id)
        if record is None:
            return False
        end = finished_at or datetime.now(timezone.utc)
        record.status = status
        record.finished_at = end
        record.duration_ms = max(0, int((end - record.started_at).total_seconds() * 1000))
        record.successful_nodes = successful_nodes
        record.error_message = error_message
        record.failed_node_id = failed_node_id
        return True

    def delete(self, record_id: str) -> bool:
        before = len(self._records)
        self._records = [r for r in self._records if r.id != record_id]
        return len(self._records) != before

    def clear(self) -> None:
        self._records = []

    def statistics(self) -> ExecutionStatistics:
        total = len(self._records)
        completed = [r for r in self._records if r.status == RecordStatus.COMPLETED]
        failed = sum(1 for r in self._records if r.status == RecordStatus.FAILED)
        cancelled = sum(1 for r in self._records if r.status == RecordStatus.CANCELLED)

        timed = [r.duration_ms for r in completed if r.duration_ms]
        avg = sum(timed) / len(timed) if timed else 0.0

        return ExecutionStatistics(
            total=total,
            completed=len(completed),
            failed=failed,
            cancelled=cancelled,
            avg_duration_ms=avg,
            success_rate=(len(completed) / total) * 100 if total else 0.0,
        )

    # -----------------------------
    # Persistência
    # -----------------------------
    def save(self, path: Path) -> None:
        self._trim()
        data = {
            "max_records": self.max_records,
            "records": [r.to_dict() for r in self._records],
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: Path, *, max_records: Optional[int] = None) -> "ExecutionHistory":
        """Lê o histórico; arquivo ausente resulta em histórico vazio."""
        if not path.exists():
            return cls(max_records=max_records or 50)
        data = json.loads(path.read_text(encoding="utf-8"))
        history = cls(max_records=max_records or int(data.get("max_records", 50)))
        history._records = [ExecutionRecord.from_dict(r) for r in data.get("records", [])]
        history._trim()
        return history

    def _trim(self) -> None:
        if len(self._records) > self.max_records:
            self._records = self._records[-self.max_records:]
