# src/docflow/core/engine/executor.py
"""
Executor canônico do DocFlow (planner + execução sequencial de nós).

O Executor percorre a ordem topológica do workflow e, para cada nó:
    1. verifica o token de cancelamento
    2. coleta os artefatos de entrada (arquivos do usuário ou saídas dos pais)
    3. resolve o tool adapter pelo `tool_id` no ToolRegistry
    4. invoca o adapter com configuração, callback de progresso e token
    5. registra saídas, status, progresso, Manifest e log da run

Decisões arquiteturais:
    - Execução estritamente sequencial: no máximo um nó por vez
    - Uma falha de nó interrompe a run inteira; nós seguintes ficam `idle`
    - Cancelamento não é erro: a run termina com status `cancelled`
    - Exceções de adapters viram `ErrorPayload`, nunca stack trace
    - `node_outputs` é um dicionário novo a cada run (sem cache)

Invariantes:
    - Workflows cíclicos ou inválidos nunca executam nenhum nó
    - Todo nó inicia a run em `idle`, com progresso 0 e sem erro
    - `Executor.state` é atualizado por atribuições discretas entre passos
    - `input_files` da run nunca é gravado nos nós do chamador

Limites explícitos:
    - Não interpreta a semântica das ferramentas
    - Não converte artefatos entre formas
    - Não executa ramos independentes em paralelo
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from docflow import __version__
from docflow.core.config.hashing import compute_config_hash
from docflow.core.config.loader import engine_option, tool_settings
from docflow.core.config.merge import deep_merge
from docflow.core.errors import (
    ErrorPayload,
    TOOL_EXECUTION_ERROR,
    tool_configuration_error,
    tool_execution_error,
    tool_not_found,
    workflow_cycle,
    workflow_invalid,
)
from docflow.core.exceptions import DocflowException, OperationCancelled
from docflow.core.run_context import RunContext
from docflow.core.tools.adapter import ToolResult
from docflow.core.tools.registry import ToolNotFoundError, ToolRegistry
from docflow.core.traceability.history import ExecutionHistory, RecordStatus
from docflow.core.traceability.manifest import (
    RunManifest,
    create_manifest,
    node_failed,
    node_finished,
    node_started,
    run_finished,
)
from docflow.core.workflow.hashing import compute_workflow_hash
from docflow.core.workflow.types import Artifact, Edge, Node, NodeStatus, is_artifact

from .cancellation import CancellationToken
from .graph import find_input_nodes, get_parent_nodes
from .planner import topological_sort
from .progress import calculate_progress
from .validation import validate_workflow


class RunStatus(str, Enum):
    """Estado agregado de uma run; uma run finalizada é complete, error ou cancelled."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"
    ERROR = "error"
    CANCELLED = "cancelled"


_HISTORY_STATUS = {
    RunStatus.COMPLETE: RecordStatus.COMPLETED,
    RunStatus.ERROR: RecordStatus.FAILED,
    RunStatus.CANCELLED: RecordStatus.CANCELLED,
}


@dataclass
class ExecutionState:
    """
    Estado observável de uma run em andamento.

    Um observador (ex.: barra de progresso) pode ler este objeto entre
    nós; cada campo é atualizado por uma atribuição discreta antes do
    início do nó seguinte.
    """

    status: RunStatus = RunStatus.IDLE
    current_node_id: Optional[str] = None
    executed_nodes: List[str] = field(default_factory=list)
    pending_nodes: List[str] = field(default_factory=list)
    progress: int = 0
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    error: Optional[ErrorPayload] = None


def create_execution_state(nodes: Sequence[Node], edges: Sequence[Edge]) -> ExecutionState:
    """Estado inicial: todos os nós pendentes, na ordem de execução (vazio se cíclico)."""
    order = topological_sort(nodes, edges)
    return ExecutionState(pending_nodes=list(order or []))


def collect_input_files(
    node_id: str,
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    node_outputs: Dict[str, List[Artifact]],
    *,
    root_inputs: Optional[Sequence[Artifact]] = None,
) -> List[Artifact]:
    """
    Monta a lista de artefatos de entrada de um nó.

    Nós raiz (sem pais) recebem `root_inputs` quando informado; caso
    contrário, seus próprios `input_files` (lista vazia se ausente).
    Demais nós recebem a concatenação das saídas de cada pai, na ordem
    de `get_parent_nodes`; um pai sem saída registrada não contribui com
    nada. Artefatos são repassados sem normalização.
    """
    parents = get_parent_nodes(node_id, edges)

    if not parents:
        if root_inputs is not None:
            return list(root_inputs)
        for node in nodes:
            if node.id == node_id:
                return list(node.input_files or [])
        return []

    collected: List[Artifact] = []
    for parent_id in parents:
        collected.extend(node_outputs.get(parent_id, []))
    return collected


def _root_file_count(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    input_files: Optional[Sequence[Artifact]],
) -> int:
    """Quantidade de artefatos distintos entregues às raízes (o mesmo objeto conta uma vez)."""
    given: Dict[int, Artifact] = {}
    for root in find_input_nodes(nodes, edges):
        source = input_files if input_files is not None else (root.input_files or [])
        for artifact in source:
            given[id(artifact)] = artifact
    return len(given)


@dataclass(frozen=True)
class RunResult:
    """Resultado agregado de uma run do workflow."""

    status: RunStatus
    error: Optional[ErrorPayload]
    node_outputs: Dict[str, List[Artifact]]
    executed_nodes: List[str]
    final_outputs: List[Artifact]
    progress: int
    manifest: RunManifest
    context: RunContext

    @property
    def succeeded(self) -> bool:
        return self.status == RunStatus.COMPLETE


class _NodeFailed(Exception):
    """Sinal interno: o nó corrente falhou com o payload informado."""

    def __init__(self, error: ErrorPayload):
        super().__init__(error.message)
        self.error = error


class Executor:
    """Executor canônico do DocFlow."""

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        config: Optional[Dict[str, Any]] = None,
        history: Optional[ExecutionHistory] = None,
    ):
        self.registry = registry
        self.config: Dict[str, Any] = dict(config or {})
        self.history = history
        self.state = ExecutionState()
        self._active_run_id: Optional[str] = None

    # ------------------------------------------------------------------
    # Guardrails: exceção -> ErrorPayload
    # ------------------------------------------------------------------

    def _exception_to_error(self, node_id: str, exc: Exception) -> ErrorPayload:
        """Converte exceções de adapters em ErrorPayload (serializável, acionável).

        Regras:
        - DocflowException: preserva message/details/hint do adapter.
        - Outras exceções: TOOL_EXECUTION_ERROR sem expor stack trace.
        """
        if isinstance(exc, DocflowException):
            details = dict(exc.details or {})
            details["node_id"] = node_id
            details["exc_type"] = exc.__class__.__name__
            return ErrorPayload(
                type=TOOL_EXECUTION_ERROR,
                message=exc.message or "Processing failed",
                details=details,
                hint=exc.hint,
            )

        return tool_execution_error(
            node_id=node_id,
            message=str(exc) or "Processing failed",
            exc_type=exc.__class__.__name__,
        )

    def _progress_callback(
        self, node: Node, nodes: Sequence[Node], ctx: RunContext
    ) -> Callable[..., None]:
        log_progress = bool(engine_option(self.config, "log_progress", False))

        def on_progress(percent: float, message: Optional[str] = None) -> None:
            # Reports tardios (após o fim do nó ou da run) são descartados.
            if self._active_run_id != ctx.run_id or node.status != NodeStatus.PROCESSING:
                return
            node.progress = int(round(max(0.0, min(100.0, float(percent)))))
            self.state.progress = calculate_progress(nodes)
            if log_progress:
                ctx.log(
                    level="debug",
                    message=message or "progress",
                    node_id=node.id,
                    event="progress",
                    percent=node.progress,
                )

        return on_progress

    def _execute_node(
        self,
        node: Node,
        inputs: List[Artifact],
        nodes: Sequence[Node],
        token: CancellationToken,
        ctx: RunContext,
    ) -> ToolResult:
        """
        Invoca o adapter do nó e valida o retorno.

        Returns:
            ToolResult: resultado bem-sucedido, com saídas válidas.

        Raises:
            OperationCancelled: propagado sem conversão.
            _NodeFailed: para qualquer outra falha do nó.
        """
        try:
            adapter = self.registry.get(node.tool_id)
        except ToolNotFoundError:
            raise _NodeFailed(tool_not_found(node_id=node.id, tool_id=node.tool_id))

        on_progress = self._progress_callback(node, nodes, ctx)

        try:
            adapter_config = deep_merge(tool_settings(self.config, node.tool_id), dict(node.settings))
            result = adapter.run(inputs, adapter_config, on_progress, token)
        except OperationCancelled:
            raise
        except Exception as exc:
            raise _NodeFailed(self._exception_to_error(node.id, exc))

        if not isinstance(result, ToolResult):
            raise _NodeFailed(
                tool_configuration_error(
                    node_id=node.id,
                    expected="ToolResult",
                    received=type(result).__name__,
                )
            )

        if not result.success:
            raise _NodeFailed(tool_execution_error(node_id=node.id, message=result.error or "Processing failed"))

        for output in result.outputs:
            if not is_artifact(output):
                raise _NodeFailed(
                    tool_configuration_error(
                        node_id=node.id,
                        expected="RawArtifact | NamedArtifact",
                        received=type(output).__name__,
                    )
                )

        return result

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(
        self,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        *,
        input_files: Optional[Sequence[Artifact]] = None,
        cancel_token: Optional[CancellationToken] = None,
        workflow_name: Optional[str] = None,
    ) -> RunResult:
        token = cancel_token or CancellationToken()
        ctx = RunContext.create(config=self.config, workflow_name=workflow_name)

        for node in nodes:
            node.reset()

        node_outputs: Dict[str, List[Artifact]] = {}
        manifest = create_manifest(
            run_id=ctx.run_id,
            started_at=ctx.created_at,
            engine_version=__version__,
            config_hash=compute_config_hash(self.config),
            workflow_hash=compute_workflow_hash(nodes, edges),
        )

        self.state = create_execution_state(nodes, edges)
        self._active_run_id = ctx.run_id
        self.state.status = RunStatus.RUNNING
        self.state.started_at = ctx.created_at

        record_id: Optional[str] = None
        if self.history is not None:
            record = self.history.create_record(
                nodes,
                edges,
                file_count=_root_file_count(nodes, edges, input_files),
                workflow_name=workflow_name,
                started_at=ctx.created_at,
            )
            self.history.add(record)
            record_id = record.id

        ctx.log(level="info", message="run started", node_count=len(nodes), edge_count=len(edges))

        def finish(status: RunStatus, error: Optional[ErrorPayload] = None) -> RunResult:
            return self._finish(
                status=status,
                error=error,
                nodes=nodes,
                order=order or [],
                node_outputs=node_outputs,
                manifest=manifest,
                ctx=ctx,
                record_id=record_id,
            )

        order = topological_sort(nodes, edges)
        if order is None:
            return finish(RunStatus.ERROR, workflow_cycle(node_count=len(nodes)))

        report = validate_workflow(nodes, edges)
        for warning in report.warnings:
            ctx.add_warning(message=warning.message)
            ctx.log(level="warning", message=warning.message, issue_type=warning.type.value)

        if not report.is_valid:
            return finish(
                RunStatus.ERROR,
                workflow_invalid(
                    errors=[e.to_dict() for e in report.errors],
                    warnings=[w.to_dict() for w in report.warnings],
                ),
            )

        root_inputs = list(input_files) if input_files is not None else None

        by_id = {n.id: n for n in nodes}

        for node_id in order:
            if token.cancelled:
                ctx.log(level="info", message="run cancelled", reason=token.reason)
                return finish(RunStatus.CANCELLED)

            node = by_id[node_id]
            self.state.current_node_id = node_id

            inputs = collect_input_files(node_id, nodes, edges, node_outputs, root_inputs=root_inputs)
            node.status = NodeStatus.PROCESSING
            node.progress = 0

            started = datetime.now(timezone.utc)
            node_started(manifest, node_id=node_id, tool_id=node.tool_id, ts=started, input_count=len(inputs))
            ctx.log(level="info", message="node started", node_id=node_id, tool_id=node.tool_id, input_count=len(inputs))

            try:
                result = self._execute_node(node, inputs, nodes, token, ctx)
            except OperationCancelled as exc:
                ctx.log(level="info", message="run cancelled", node_id=node_id, reason=exc.message)
                return finish(RunStatus.CANCELLED)
            except _NodeFailed as failure:
                node.status = NodeStatus.ERROR
                node.error = failure.error.message
                node_failed(manifest, node_id=node_id, ts=datetime.now(timezone.utc), error=failure.error.to_dict())
                ctx.log(level="error", message=failure.error.message, node_id=node_id, error_type=failure.error.type)
                return finish(RunStatus.ERROR, failure.error)

            node_outputs[node_id] = list(result.outputs)
            node.status = NodeStatus.COMPLETE
            node.progress = 100

            node_finished(
                manifest,
                node_id=node_id,
                ts=datetime.now(timezone.utc),
                output_kinds=[a.kind for a in result.outputs],
                metadata=result.metadata,
            )
            ctx.log(level="info", message="node finished", node_id=node_id, output_count=len(result.outputs))

            self.state.executed_nodes.append(node_id)
            self.state.pending_nodes.remove(node_id)
            self.state.progress = calculate_progress(nodes)

        return finish(RunStatus.COMPLETE)

    def _finish(
        self,
        *,
        status: RunStatus,
        error: Optional[ErrorPayload],
        nodes: Sequence[Node],
        order: List[str],
        node_outputs: Dict[str, List[Artifact]],
        manifest: RunManifest,
        ctx: RunContext,
        record_id: Optional[str],
    ) -> RunResult:
        ended = datetime.now(timezone.utc)
        progress = calculate_progress(nodes)
        executed = list(self.state.executed_nodes)

        self._active_run_id = None
        self.state.status = status
        self.state.current_node_id = None
        self.state.progress = progress
        self.state.finished_at = ended
        self.state.error = error

        run_finished(
            manifest,
            status=status.value,
            ts=ended,
            error=error.to_dict() if error is not None else None,
        )
        ctx.log(level="error" if error is not None else "info", message=f"run {status.value}", status=status.value)

        if self.history is not None and record_id is not None:
            self.history.complete(
                record_id,
                status=_HISTORY_STATUS[status],
                successful_nodes=len(executed),
                error_message=error.message if error is not None else None,
                failed_node_id=error.node_id if error is not None else None,
                finished_at=ended,
            )

        final_outputs = list(node_outputs.get(order[-1], [])) if order else []

        return RunResult(
            status=status,
            error=error,
            node_outputs=node_outputs,
            executed_nodes=executed,
            final_outputs=final_outputs,
            progress=progress,
            manifest=manifest,
            context=ctx,
        )
