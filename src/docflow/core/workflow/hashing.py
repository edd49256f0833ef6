"""Hash canônico da estrutura de um workflow.

Apenas a estrutura participa do hash (nós, formatos, settings e arestas);
estado de execução e artefatos ficam de fora, de modo que o mesmo grafo
produz o mesmo hash antes e depois de uma run.
"""

from __future__ import annotations

import hashlib
import json
from typing import Sequence

from .types import Edge, Node


def compute_workflow_hash(nodes: Sequence[Node], edges: Sequence[Edge]) -> str:
    payload = {
        "nodes": [
            {
                "id": n.id,
                "tool_id": n.tool_id,
                "accepted_formats": list(n.accepted_formats),
                "output_format": n.output_format,
                "settings": n.settings,
            }
            for n in nodes
        ],
        "edges": [[e.id, e.source, e.target] for e in edges],
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
