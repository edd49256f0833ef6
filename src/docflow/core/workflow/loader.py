"""Loader canônico de documento de workflow (YAML/JSON).

Notas:
- YAML é preferencial, JSON é alternativo (formato exportado pelo editor).
- O formato é inferido pela extensão do arquivo.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

import yaml

from .errors import (
    UnsupportedWorkflowFormatError,
    WorkflowFileNotFoundError,
    WorkflowParseError,
)
from .schema import Workflow, workflow_from_dict


def load_workflow(path: Union[str, Path]) -> Workflow:
    """Carrega um workflow a partir de YAML/JSON.

    Args:
        path: caminho para o documento de workflow.

    Raises:
        WorkflowFileNotFoundError: se arquivo não existir.
        UnsupportedWorkflowFormatError: se extensão não suportada.
        WorkflowParseError: se parsing falhar ou o arquivo estiver vazio.
        WorkflowSchemaError: se o documento não respeitar o schema v1.
    """
    p = Path(path)
    if not p.exists():
        raise WorkflowFileNotFoundError(f"workflow file not found: {p}")

    suffix = p.suffix.lower()
    raw = p.read_text(encoding="utf-8")

    try:
        if suffix in {".yml", ".yaml"}:
            data = yaml.safe_load(raw)
        elif suffix == ".json":
            data = json.loads(raw)
        else:
            raise UnsupportedWorkflowFormatError(f"unsupported workflow format: {suffix}")
    except UnsupportedWorkflowFormatError:
        raise
    except Exception as e:
        raise WorkflowParseError(str(e) or "failed to parse workflow") from e

    if data is None:
        raise WorkflowParseError("workflow file is empty")

    return workflow_from_dict(data)
