# src/docflow/core/engine/validation.py
"""
Validação estrutural e semântica de workflows.

Este módulo implementa a checagem de compatibilidade entre dois nós
conectados e o protocolo de validação do workflow inteiro, produzindo um
relatório estruturado consumido pelo editor e pelo Executor.

Taxonomia:
    - erro estrutural: `cycle`
    - erros semânticos: `format`, `missing-input`
    - aviso: `multiple-inputs` (não bloqueia execução)

Ordem de avaliação de `validate_workflow`:
    1. workflow vazio → um único erro `missing-input`, sem outras checagens
    2. ciclo → erro `cycle`; checagem de formatos é pulada
    3. sem ciclo → um erro `format` por aresta incompatível, na ordem das arestas
    4. sempre → aviso `multiple-inputs` quando há mais de um nó de entrada

Invariantes:
    - `is_valid` é verdadeiro se e somente se não há erros
    - Avisos nunca afetam `is_valid`
    - Erros e avisos preservam a ordem em que foram detectados

Limites explícitos:
    - Não formata nem traduz mensagens para a UI
    - Não executa nós
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from docflow.core.workflow.types import Edge, Node

from .graph import find_input_nodes
from .planner import topological_sort


class IssueType(str, Enum):
    MISSING_INPUT = "missing-input"
    CYCLE = "cycle"
    FORMAT = "format"
    MULTIPLE_INPUTS = "multiple-inputs"


@dataclass(frozen=True)
class ValidationIssue:
    """Erro ou aviso de validação, opcionalmente associado a um nó ou aresta."""

    type: IssueType
    message: str
    node_id: Optional[str] = None
    edge_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type.value, "message": self.message}
        if self.node_id is not None:
            out["nodeId"] = self.node_id
        if self.edge_id is not None:
            out["edgeId"] = self.edge_id
        return out


@dataclass(frozen=True)
class ValidationReport:
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        """Forma `{isValid, errors, warnings}` consumida pelo editor."""
        return {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass(frozen=True)
class ConnectionCheck:
    is_valid: bool
    message: Optional[str] = None


def validate_connection(source: Node, target: Node) -> ConnectionCheck:
    """
    Verifica se a saída de `source` pode alimentar a entrada de `target`.

    A compatibilidade é uma correspondência exata de string entre
    `source.output_format` e algum item de `target.accepted_formats`.
    Usada tanto pelo editor (antes de desenhar a aresta) quanto pela
    validação do workflow (sobre arestas existentes).
    """
    if source.output_format in set(target.accepted_formats):
        return ConnectionCheck(is_valid=True)

    accepted = ", ".join(target.accepted_formats) or "(none)"
    return ConnectionCheck(
        is_valid=False,
        message=(
            f'Output format "{source.output_format}" is not compatible '
            f"with accepted formats: {accepted}"
        ),
    )


def validate_workflow(nodes: Sequence[Node], edges: Sequence[Edge]) -> ValidationReport:
    """
    Executa o protocolo completo de validação do workflow.

    Returns:
        ValidationReport: erros e avisos na ordem de detecção.

    Raises:
        UnknownNodeError: se alguma aresta referenciar um nó inexistente.
    """
    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []

    if not nodes:
        errors.append(
            ValidationIssue(
                type=IssueType.MISSING_INPUT,
                message="Workflow is empty. Add at least one tool node.",
            )
        )
        return ValidationReport(errors=errors, warnings=warnings)

    if topological_sort(nodes, edges) is None:
        errors.append(
            ValidationIssue(
                type=IssueType.CYCLE,
                message="Workflow contains a cycle. Remove circular connections.",
            )
        )
    else:
        by_id = {n.id: n for n in nodes}
        for edge in edges:
            check = validate_connection(by_id[edge.source], by_id[edge.target])
            if not check.is_valid:
                errors.append(
                    ValidationIssue(
                        type=IssueType.FORMAT,
                        message=check.message or "Invalid connection",
                        edge_id=edge.id,
                    )
                )

    input_nodes = find_input_nodes(nodes, edges)
    if len(input_nodes) > 1:
        names = ", ".join(f'"{n.display_name}"' for n in input_nodes)
        warnings.append(
            ValidationIssue(
                type=IssueType.MULTIPLE_INPUTS,
                message=(
                    f"Workflow has {len(input_nodes)} input nodes ({names}). "
                    "All selected files will be sent to each input node."
                ),
            )
        )

    return ValidationReport(errors=errors, warnings=warnings)
