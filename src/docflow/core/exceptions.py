"""
DocFlow: Canonical Exceptions (v1)

Este módulo define exceções tipadas que tool adapters e o engine podem
levantar durante a execução de um nó.

Objetivo:
- Permitir que adapters sinalizem falhas semânticas com dados estruturados
- Facilitar o mapeamento determinístico para ErrorPayload
- Separar cancelamento cooperativo de falha de execução

Regras:
- Não contém lógica de processamento de documentos.
- Exceções devem carregar apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DocflowException(Exception):
    """Base class para exceções internas do DocFlow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ToolExecutionError(DocflowException):
    """Falha reportada por um tool adapter (ex.: PDF corrompido, senha inválida)."""


@dataclass(frozen=True)
class MissingInputError(DocflowException):
    """O adapter recebeu menos artefatos de entrada do que precisa."""


@dataclass(frozen=True)
class OperationCancelled(DocflowException):
    """Cancelamento cooperativo observado dentro de um tool adapter.

    Não é um erro: o Executor encerra a run com status `cancelled`.
    """
