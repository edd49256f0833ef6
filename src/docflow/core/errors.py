"""
DocFlow: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros de execução do DocFlow.
Erros de run são artefatos do engine e fazem parte do contrato consumido
pelo editor e pelo histórico de execuções, devendo ser:

- explícitos
- serializáveis
- associados ao nó que falhou (quando houver)
- acionáveis

Problemas de validação (cycle, format, missing-input) possuem estrutura
própria em `core.engine.validation`; este módulo cobre o resultado de uma
run recusada ou interrompida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do DocFlow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico (ex.: node_id)
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    @property
    def node_id(self) -> Optional[str]:
        return self.details.get("node_id")

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Workflow (pré-execução)
WORKFLOW_CYCLE = "WORKFLOW_CYCLE"
WORKFLOW_INVALID = "WORKFLOW_INVALID"

# Ferramentas / Execução
TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
TOOL_EXECUTION_ERROR = "TOOL_EXECUTION_ERROR"
TOOL_CONFIGURATION_ERROR = "TOOL_CONFIGURATION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def workflow_cycle(
    *,
    node_count: int,
    hint: str = "Remova as conexões circulares do workflow antes de executá-lo.",
) -> ErrorPayload:
    return ErrorPayload(
        type=WORKFLOW_CYCLE,
        message="Workflow contains a cycle. Remove circular connections.",
        details={"issue_type": "cycle", "node_count": node_count},
        hint=hint,
    )


def workflow_invalid(
    *,
    errors: List[Dict[str, Any]],
    warnings: Optional[List[Dict[str, Any]]] = None,
    hint: str = "Corrija os erros de validação reportados antes de reexecutar o workflow.",
) -> ErrorPayload:
    first = errors[0]["message"] if errors else "Workflow is not valid"
    return ErrorPayload(
        type=WORKFLOW_INVALID,
        message=first,
        details={"errors": errors, "warnings": list(warnings or [])},
        hint=hint,
    )


def tool_not_found(
    *,
    node_id: str,
    tool_id: str,
    hint: str = "Registre um tool adapter para este tool_id no ToolRegistry.",
) -> ErrorPayload:
    return ErrorPayload(
        type=TOOL_NOT_FOUND,
        message=f'No tool adapter registered for "{tool_id}"',
        details={"node_id": node_id, "tool_id": tool_id},
        hint=hint,
    )


def tool_execution_error(
    *,
    node_id: str,
    message: str,
    exc_type: Optional[str] = None,
    hint: str = "Verifique os arquivos de entrada e as configurações do nó. Nenhum fallback é aplicado.",
) -> ErrorPayload:
    details: Dict[str, Any] = {"node_id": node_id}
    if exc_type is not None:
        details["exc_type"] = exc_type
    return ErrorPayload(
        type=TOOL_EXECUTION_ERROR,
        message=message or "Processing failed",
        details=details,
        hint=hint,
    )


def tool_configuration_error(
    *,
    node_id: str,
    expected: str,
    received: str,
    hint: str = "Ajuste o tool adapter para retornar ToolResult com artefatos válidos.",
) -> ErrorPayload:
    return ErrorPayload(
        type=TOOL_CONFIGURATION_ERROR,
        message="Tool adapter returned an invalid result",
        details={"node_id": node_id, "expected": expected, "received": received},
        hint=hint,
    )
