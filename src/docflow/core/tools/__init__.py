# src/docflow/core/tools/__init__.py
"""
# Tools (DocFlow)

Este pacote define o **contrato de integração** entre o engine e as
ferramentas concretas de processamento de documentos.

## Componentes

- **adapter**
  - `ToolAdapter` (Protocol): `run(inputs, config, on_progress, cancel_token)`
  - `ToolResult`: sucesso com artefatos, ou falha com mensagem
  - `ProgressCallback`: `(percent, message=None) -> None`

- **registry**
  - `ToolRegistry`: lookup por `tool_id`, unicidade garantida no registro

## Limites Explícitos

- Não contém implementações de ferramentas
- Não executa workflows
"""

from .adapter import ProgressCallback, ToolAdapter, ToolResult
from .registry import DuplicateToolIdError, ToolNotFoundError, ToolRegistry

__all__ = [
    "ProgressCallback",
    "ToolAdapter",
    "ToolResult",
    "DuplicateToolIdError",
    "ToolNotFoundError",
    "ToolRegistry",
]
