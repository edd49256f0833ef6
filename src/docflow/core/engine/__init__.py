# src/docflow/core/engine/__init__.py
"""
Engine do DocFlow.

Componentes:
    - graph        → lista de adjacência, grau de entrada, pais/filhos
    - planner      → ordenação topológica (Kahn) e detecção de ciclos
    - validation   → compatibilidade de conexões e relatório do workflow
    - progress     → agregação de progresso da run
    - cancellation → token de cancelamento cooperativo
    - executor     → execução sequencial dos nós via tool adapters
"""

from .cancellation import CancellationToken
from .graph import (
    Graph,
    UnknownNodeError,
    build_graph,
    find_input_nodes,
    find_output_nodes,
    get_child_nodes,
    get_parent_nodes,
)
from .planner import CycleDetectedError, plan_execution, topological_sort
from .progress import calculate_progress
from .validation import (
    ConnectionCheck,
    IssueType,
    ValidationIssue,
    ValidationReport,
    validate_connection,
    validate_workflow,
)
from .executor import (
    ExecutionState,
    Executor,
    RunResult,
    RunStatus,
    collect_input_files,
    create_execution_state,
)

__all__ = [
    "CancellationToken",
    "Graph",
    "UnknownNodeError",
    "build_graph",
    "find_input_nodes",
    "find_output_nodes",
    "get_child_nodes",
    "get_parent_nodes",
    "CycleDetectedError",
    "plan_execution",
    "topological_sort",
    "calculate_progress",
    "ConnectionCheck",
    "IssueType",
    "ValidationIssue",
    "ValidationReport",
    "validate_connection",
    "validate_workflow",
    "ExecutionState",
    "Executor",
    "RunResult",
    "RunStatus",
    "collect_input_files",
    "create_execution_state",
]
