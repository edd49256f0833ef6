# src/docflow/core/engine/graph.py
"""
Estruturas de grafo e consultas de relacionamento entre nós.

Este módulo deriva, a partir de `(nodes, edges)`, as estruturas usadas
pelo planner, pela validação e pelo executor:

    - lista de adjacência (node_id → alvos, na ordem das arestas)
    - grau de entrada (node_id → número de arestas que chegam ao nó)
    - consultas de pais, filhos, nós de entrada e nós de saída

Invariantes:
    - Todo nó aparece como chave em `adjacency_list` e `in_degree`,
      inclusive nós isolados
    - A ordem das listas retornadas segue a ordem dos arrays de entrada
    - Nenhuma função muta `nodes` ou `edges`

Limites explícitos:
    - Não detecta ciclos (ver `planner`)
    - Não valida formatos (ver `validation`)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from docflow.core.workflow.types import Edge, Node


class UnknownNodeError(ValueError):
    """
    Exceção levantada quando uma aresta referencia um nó inexistente.

    Arestas cujo `source` ou `target` não correspondem a nenhum `node.id`
    violam uma pré-condição do engine. Não se trata de um problema de
    validação reportável ao usuário: o editor nunca deve produzir esse grafo.
    """


@dataclass(frozen=True)
class Graph:
    adjacency_list: Dict[str, List[str]]
    in_degree: Dict[str, int]


def build_graph(nodes: Sequence[Node], edges: Sequence[Edge]) -> Graph:
    """
    Constrói lista de adjacência e grau de entrada para o workflow.

    Args:
        nodes: nós do workflow.
        edges: arestas dirigidas `source → target`.

    Returns:
        Graph: `adjacency_list` e `in_degree` com cobertura total dos nós.

    Raises:
        UnknownNodeError: se alguma aresta referenciar um nó inexistente.
    """
    adjacency: Dict[str, List[str]] = {n.id: [] for n in nodes}
    in_degree: Dict[str, int] = {n.id: 0 for n in nodes}

    for e in edges:
        if e.source not in adjacency:
            raise UnknownNodeError(f"Edge '{e.id}' references unknown source node '{e.source}'")
        if e.target not in in_degree:
            raise UnknownNodeError(f"Edge '{e.id}' references unknown target node '{e.target}'")
        adjacency[e.source].append(e.target)
        in_degree[e.target] += 1

    return Graph(adjacency_list=adjacency, in_degree=in_degree)


def find_input_nodes(nodes: Sequence[Node], edges: Sequence[Edge]) -> List[Node]:
    """Nós sem arestas de entrada (raízes), na ordem original."""
    in_degree = build_graph(nodes, edges).in_degree
    return [n for n in nodes if in_degree[n.id] == 0]


def find_output_nodes(nodes: Sequence[Node], edges: Sequence[Edge]) -> List[Node]:
    """Nós que nunca aparecem como `source` de uma aresta, na ordem original."""
    sources = {e.source for e in edges}
    return [n for n in nodes if n.id not in sources]


def get_parent_nodes(node_id: str, edges: Sequence[Edge]) -> List[str]:
    return [e.source for e in edges if e.target == node_id]


def get_child_nodes(node_id: str, edges: Sequence[Edge]) -> List[str]:
    return [e.target for e in edges if e.source == node_id]
