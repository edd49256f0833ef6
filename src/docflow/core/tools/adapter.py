# src/docflow/core/tools/adapter.py
"""
Contrato canônico de tool adapter do DocFlow.

Este módulo define o protocolo formal que qualquer ferramenta de
documento deve satisfazer para ser executável por um nó do workflow,
além do resultado que ela devolve ao Executor.

Um tool adapter é a única ponte entre o engine e as operações concretas
(merge, split, compress, encrypt, conversões). O engine não conhece a
semântica da ferramenta: apenas entrega artefatos e configuração, e
recebe artefatos ou uma mensagem de erro.

Princípios fundamentais:
    - Adapters não conhecem o grafo, o planner nem outros nós
    - Adapters não controlam a ordem de execução
    - Progresso é reportado via callback, cancelamento via token
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - Não define operações de documento
    - Não registra eventos de rastreabilidade
    - Não decide políticas de execução (halt, retry)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from docflow.core.workflow.types import Artifact

if TYPE_CHECKING:
    from docflow.core.engine.cancellation import CancellationToken


class ProgressCallback(Protocol):
    def __call__(self, percent: float, message: Optional[str] = None) -> None:
        ...


@dataclass(frozen=True)
class ToolResult:
    """
    Resultado imutável da execução de um tool adapter.

    Campos:
        - success: indica se a ferramenta concluiu com sucesso
        - outputs: artefatos produzidos (um ou mais em caso de sucesso)
        - error: mensagem humana em caso de falha
        - metadata: dados livres (ex.: pageCount) registrados no Manifest

    Invariantes:
        - `error` só é relevante quando `success` é falso
        - `outputs` preserva a ordem produzida pela ferramenta
    """

    success: bool
    outputs: List[Artifact] = field(default_factory=list)
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, outputs: Sequence[Artifact], **metadata: Any) -> "ToolResult":
        return cls(success=True, outputs=list(outputs), metadata=dict(metadata))

    @classmethod
    def fail(cls, message: str, **metadata: Any) -> "ToolResult":
        return cls(success=False, error=message, metadata=dict(metadata))


@runtime_checkable
class ToolAdapter(Protocol):
    """
    Contrato canônico de uma ferramenta executável por um nó.

    Atributos obrigatórios:
        - tool_id: chave estável usada pelo ToolRegistry e por `Node.tool_id`

    Decisões arquiteturais:
        - O protocolo não impõe herança, apenas conformidade estrutural
        - Falhas podem ser sinalizadas por `ToolResult.fail` ou por exceção;
          o Executor trata ambas como falha do nó
        - `OperationCancelled` sinaliza cancelamento cooperativo, não erro

    Invariantes:
        - `run` é chamado no máximo uma vez por nó por run
        - O retorno de `run` é sempre um `ToolResult`
    """

    tool_id: str

    def run(
        self,
        inputs: List[Artifact],
        config: Dict[str, Any],
        on_progress: ProgressCallback,
        cancel_token: "CancellationToken",
    ) -> ToolResult:
        """Processa os artefatos de entrada e devolve os artefatos de saída."""
        ...
