"""Schema canônico do documento de workflow (v1).

Formato:

    name: Compress and protect
    description: opcional
    nodes:
      - id: n1
        tool_id: merge-pdf
        accepted_formats: [".pdf"]
        output_format: ".pdf"
        label: Merge PDF          # opcional
        settings: {}              # opcional
    edges:
      - id: e1
        source: n1
        target: n2

Notas:
- Chaves camelCase exportadas pelo editor (`toolId`, `acceptedFormats`,
  `outputFormat`) também são aceitas na leitura.
- Estado de execução (status, progress, error) e artefatos não fazem parte
  do documento.
- A validação aqui é estrutural; referências de arestas a nós inexistentes
  e ciclos são responsabilidade do engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import WorkflowSchemaError
from .types import Edge, Node


_NODE_ALIASES = {
    "tool_id": "toolId",
    "accepted_formats": "acceptedFormats",
    "output_format": "outputFormat",
}


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise WorkflowSchemaError(msg)


def _is_non_empty_str(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


def _field(raw: Dict[str, Any], key: str) -> Any:
    if key in raw:
        return raw[key]
    alias = _NODE_ALIASES.get(key)
    return raw.get(alias) if alias else None


@dataclass
class Workflow:
    """Workflow materializado: nós e arestas prontos para o engine."""

    nodes: List[Node]
    edges: List[Edge]
    name: Optional[str] = None
    description: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)


def _node_from_dict(raw: Any, i: int) -> Node:
    _expect(isinstance(raw, dict), f"nodes[{i}] must be a mapping")

    node_id = raw.get("id")
    _expect(_is_non_empty_str(node_id), f"nodes[{i}].id is required")

    tool_id = _field(raw, "tool_id")
    _expect(_is_non_empty_str(tool_id), f"nodes[{i}].tool_id is required")

    accepted = _field(raw, "accepted_formats")
    _expect(isinstance(accepted, list), f"nodes[{i}].accepted_formats must be a list")
    for fmt in accepted:
        _expect(_is_non_empty_str(fmt), f"nodes[{i}].accepted_formats must contain strings")

    output = _field(raw, "output_format")
    _expect(_is_non_empty_str(output), f"nodes[{i}].output_format is required")

    label = raw.get("label")
    _expect(label is None or isinstance(label, str), f"nodes[{i}].label must be a string")

    settings = raw.get("settings") or {}
    _expect(isinstance(settings, dict), f"nodes[{i}].settings must be a mapping")

    return Node(
        id=node_id,
        tool_id=tool_id,
        accepted_formats=list(accepted),
        output_format=output,
        label=label,
        settings=dict(settings),
    )


def _edge_from_dict(raw: Any, i: int) -> Edge:
    _expect(isinstance(raw, dict), f"edges[{i}] must be a mapping")
    for key in ("id", "source", "target"):
        _expect(_is_non_empty_str(raw.get(key)), f"edges[{i}].{key} is required")
    return Edge(id=raw["id"], source=raw["source"], target=raw["target"])


def workflow_from_dict(data: Any) -> Workflow:
    """Valida e materializa um documento de workflow v1."""
    _expect(isinstance(data, dict), "workflow must be a mapping/dict")

    raw_nodes = data.get("nodes")
    _expect(isinstance(raw_nodes, list), "nodes must be a list")
    raw_edges = data.get("edges") or []
    _expect(isinstance(raw_edges, list), "edges must be a list")

    nodes = [_node_from_dict(n, i) for i, n in enumerate(raw_nodes)]
    seen: set[str] = set()
    for n in nodes:
        _expect(n.id not in seen, f"duplicate node id: {n.id}")
        seen.add(n.id)

    edges = [_edge_from_dict(e, i) for i, e in enumerate(raw_edges)]
    seen_edges: set[str] = set()
    for e in edges:
        _expect(e.id not in seen_edges, f"duplicate edge id: {e.id}")
        _expect(e.source in seen, f"edge {e.id}: unknown source node '{e.source}'")
        _expect(e.target in seen, f"edge {e.id}: unknown target node '{e.target}'")
        seen_edges.add(e.id)

    name = data.get("name")
    description = data.get("description")
    meta = data.get("meta") or {}
    _expect(isinstance(meta, dict), "meta must be a mapping")

    return Workflow(
        nodes=nodes,
        edges=edges,
        name=name if isinstance(name, str) else None,
        description=description if isinstance(description, str) else None,
        meta=dict(meta),
    )


def workflow_to_dict(workflow: Workflow) -> Dict[str, Any]:
    """Serializa o workflow no formato canônico (snake_case, sem estado de run)."""
    out: Dict[str, Any] = {
        "nodes": [
            {
                "id": n.id,
                "tool_id": n.tool_id,
                "accepted_formats": list(n.accepted_formats),
                "output_format": n.output_format,
                "label": n.label,
                "settings": dict(n.settings),
            }
            for n in workflow.nodes
        ],
        "edges": [{"id": e.id, "source": e.source, "target": e.target} for e in workflow.edges],
    }
    if workflow.name is not None:
        out["name"] = workflow.name
    if workflow.description is not None:
        out["description"] = workflow.description
    if workflow.meta:
        out["meta"] = dict(workflow.meta)
    return out
