# src/docflow/core/traceability/__init__.py
"""
Pacote de rastreabilidade do DocFlow.

Responsabilidades principais:
    - Manter o Manifest de cada run (estado por nó + Event Log ordenado)
    - Persistir e restaurar o Manifest de forma determinística
    - Manter o histórico de execuções e suas estatísticas

API pública exposta:
    - RunManifest, create_manifest, add_event
    - node_started, node_finished, node_failed, run_finished
    - save_manifest, load_manifest
    - ExecutionHistory, ExecutionRecord, ExecutionStatistics, RecordStatus

Invariantes:
    - Nenhum evento é emitido implicitamente
    - Eventos nunca são reordenados
"""

from .manifest import (
    RunManifest,
    create_manifest,
    add_event,
    node_started,
    node_finished,
    node_failed,
    run_finished,
    save_manifest,
    load_manifest,
)
from .history import ExecutionHistory, ExecutionRecord, ExecutionStatistics, RecordStatus

__all__ = [
    "RunManifest",
    "create_manifest",
    "add_event",
    "node_started",
    "node_finished",
    "node_failed",
    "run_finished",
    "save_manifest",
    "load_manifest",
    "ExecutionHistory",
    "ExecutionRecord",
    "ExecutionStatistics",
    "RecordStatus",
]
