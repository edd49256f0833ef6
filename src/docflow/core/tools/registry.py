# src/docflow/core/tools/registry.py
"""
Registro de tool adapters por `tool_id`.

Este módulo define o `ToolRegistry`, a tabela de lookup que resolve o
adapter de cada nó a partir de `node.tool_id`, sem reflexão em runtime.

Responsabilidades do módulo:
    - Validar unicidade de `tool_id`
    - Preservar ordem de registro dos adapters
    - Expor acesso controlado aos adapters registrados

Invariantes:
    - Cada adapter registrado possui um `tool_id` único e não vazio
    - `list()` reflete exatamente a ordem de registro

Limites explícitos:
    - Não executa adapters
    - Não valida compatibilidade de formatos
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .adapter import ToolAdapter


class DuplicateToolIdError(ValueError):
    """
    Exceção levantada quando dois adapters são registrados com o mesmo `tool_id`.

    A duplicidade é tratada como erro fatal de configuração no momento
    do registro, antes de qualquer execução.
    """


class ToolNotFoundError(KeyError):
    """Nenhum adapter registrado para o `tool_id` solicitado."""


@dataclass
class ToolRegistry:
    """
    Tabela canônica `tool_id → ToolAdapter`.

    Decisões arquiteturais:
        - A ordem de inserção é preservada separadamente
        - A estrutura interna não é exposta diretamente
        - Erros de registro são tratados como falhas fatais
    """

    _tools: Dict[str, ToolAdapter] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, adapter: ToolAdapter) -> None:
        tool_id = getattr(adapter, "tool_id", None)
        if not isinstance(tool_id, str) or not tool_id.strip():
            raise ValueError("adapter.tool_id must be a non-empty string")

        if not callable(getattr(adapter, "run", None)):
            raise TypeError(f"adapter '{tool_id}' must define run(inputs, config, on_progress, cancel_token)")

        if tool_id in self._tools:
            raise DuplicateToolIdError(f"Duplicate tool id: {tool_id}")

        self._tools[tool_id] = adapter
        self._order.append(tool_id)

    def has(self, tool_id: str) -> bool:
        return tool_id in self._tools

    def get(self, tool_id: str) -> ToolAdapter:
        if tool_id not in self._tools:
            raise ToolNotFoundError(tool_id)
        return self._tools[tool_id]

    def list(self) -> List[ToolAdapter]:
        return [self._tools[tid] for tid in self._order]
