# src/docflow/core/workflow/types.py
"""
Tipos canônicos do workflow do DocFlow.

Este módulo define as estruturas fundamentais lidas e mutadas pelo
engine durante validação e execução de um workflow.

Os tipos aqui definidos representam:
    - estado de processamento de um nó
    - nós (ferramentas) e arestas (fluxo de arquivos) do grafo
    - artefatos produzidos e consumidos pelos nós

Componentes principais:
    - NodeStatus    → enum de estados do nó (idle, processing, complete, error)
    - Node          → nó de ferramenta, identificado por `id`
    - Edge          → aresta dirigida `source → target`
    - RawArtifact   → artefato binário sem nome sugerido
    - NamedArtifact → artefato binário com nome de arquivo sugerido

Invariantes:
    - A identidade de um nó é o seu `id`, nunca a igualdade estrutural
    - Arestas são imutáveis
    - Artefatos são imutáveis e nunca são inspecionados pelo engine

Limites explícitos:
    - Não valida o grafo
    - Não executa nós
    - Não converte artefatos entre as duas formas
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class NodeStatus(str, Enum):
    """
    Estados de processamento de um nó.

    Máquina de estados por run:
        IDLE → PROCESSING → (COMPLETE | ERROR)

    Os valores são strings para facilitar:
        - serialização em JSON
        - persistência em Manifest e histórico
        - exibição no editor

    Invariantes:
        - Todo nó inicia uma run em IDLE
        - Apenas o Executor altera o status durante uma run
    """
    IDLE = "idle"
    PROCESSING = "processing"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass(frozen=True)
class RawArtifact:
    """Artefato binário bruto produzido por um nó."""

    blob: bytes

    @property
    def kind(self) -> str:
        return "raw"


@dataclass(frozen=True)
class NamedArtifact:
    """Artefato binário acompanhado de um nome de arquivo sugerido."""

    blob: bytes
    filename: str

    @property
    def kind(self) -> str:
        return "named"


# Variante com exatamente dois casos; consumidores tratam ambos explicitamente.
Artifact = Union[RawArtifact, NamedArtifact]
ARTIFACT_TYPES = (RawArtifact, NamedArtifact)


def is_artifact(value: Any) -> bool:
    return isinstance(value, ARTIFACT_TYPES)


@dataclass(eq=False)
class Node:
    """
    Nó de ferramenta de um workflow.

    Um nó representa a aplicação de uma única ferramenta de documento
    (identificada por `tool_id`) sobre os artefatos recebidos.

    Campos:
        - id: identificador único dentro do workflow
        - tool_id: chave do tool adapter no ToolRegistry
        - accepted_formats: formatos aceitos como entrada (ex.: ".pdf")
        - output_format: formato produzido (ex.: ".pdf", ".zip")
        - label: nome de exibição usado em mensagens (padrão: `id`)
        - settings: configuração específica da ferramenta
        - status / progress / error: estado mutado pelo Executor
        - input_files: artefatos fornecidos pelo usuário (apenas nós raiz)

    Decisões arquiteturais:
        - `eq=False`: dois nós com os mesmos campos continuam distintos
        - `accepted_formats` é tratado como conjunto apenas na checagem
          de pertinência; a ordem declarada é preservada para mensagens

    Limites explícitos:
        - Não conhece suas arestas
        - Não executa a ferramenta
    """

    id: str
    tool_id: str
    accepted_formats: List[str]
    output_format: str
    label: Optional[str] = None
    settings: Dict[str, Any] = field(default_factory=dict)
    status: NodeStatus = NodeStatus.IDLE
    progress: int = 0
    error: Optional[str] = None
    input_files: Optional[List[Artifact]] = None

    @property
    def display_name(self) -> str:
        return self.label or self.id

    def reset(self) -> None:
        """Retorna o nó ao estado inicial de uma run."""
        self.status = NodeStatus.IDLE
        self.progress = 0
        self.error = None


@dataclass(frozen=True)
class Edge:
    """Aresta dirigida: a saída de `source` alimenta a entrada de `target`."""

    id: str
    source: str
    target: str
