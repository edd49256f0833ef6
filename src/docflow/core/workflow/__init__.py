# src/docflow/core/workflow/__init__.py
"""
# Workflow Core (DocFlow)

Este pacote define o **modelo de dados** de um workflow e o seu
**documento persistível**.

## Componentes

- **types**
  - `NodeStatus`: estados de processamento de um nó
  - `Node`, `Edge`: vértices e arestas do DAG
  - `RawArtifact`, `NamedArtifact`: os dois casos de artefato

- **schema / loader**
  - `Workflow`, `workflow_from_dict`, `workflow_to_dict`
  - `load_workflow`: leitura de YAML/JSON

- **hashing**
  - `compute_workflow_hash`: identidade estrutural para rastreabilidade

## Limites Explícitos

- Não valida ciclos nem compatibilidade de formatos (ver `core.engine`)
- Não armazena workflows salvos
"""

from .types import (
    ARTIFACT_TYPES,
    Artifact,
    Edge,
    NamedArtifact,
    Node,
    NodeStatus,
    RawArtifact,
    is_artifact,
)
from .schema import Workflow, workflow_from_dict, workflow_to_dict
from .loader import load_workflow
from .hashing import compute_workflow_hash

__all__ = [
    "ARTIFACT_TYPES",
    "Artifact",
    "Edge",
    "NamedArtifact",
    "Node",
    "NodeStatus",
    "RawArtifact",
    "is_artifact",
    "Workflow",
    "workflow_from_dict",
    "workflow_to_dict",
    "load_workflow",
    "compute_workflow_hash",
]
