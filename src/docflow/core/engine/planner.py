# src/docflow/core/engine/planner.py
"""
Planejador de execução do workflow (DAG).

Este módulo produz a ordem de execução topológica determinística dos
nós de um workflow, ou sinaliza que o grafo contém um ciclo.

Decisões arquiteturais:
    - Utiliza o algoritmo de Kahn com fila FIFO
    - Empates são resolvidos exclusivamente pela ordem do array de nós:
      a fila é semeada com os nós de grau 0 nessa ordem, e filhos entram
      no fim da fila na ordem da lista de adjacência
    - Um ciclo é um resultado esperado de validação: `topological_sort`
      retorna `None` em vez de levantar exceção

Invariantes:
    - Para um DAG, toda aresta aponta de um nó anterior para um posterior
    - Todos os nós aparecem exatamente uma vez na ordem final
    - A mesma entrada sempre produz a mesma ordem

Limites explícitos:
    - Não executa nós
    - Não valida formatos
    - Não decide políticas de execução
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Sequence

from docflow.core.workflow.types import Edge, Node

from .graph import build_graph


class CycleDetectedError(ValueError):
    """
    Exceção levantada por `plan_execution` quando o grafo contém um ciclo.

    Invariantes:
        - Nenhuma ordem topológica válida pode ser produzida
        - Nenhuma execução parcial é permitida em presença de ciclos
    """


def topological_sort(nodes: Sequence[Node], edges: Sequence[Edge]) -> Optional[List[str]]:
    """
    Retorna os ids dos nós em ordem topológica, ou `None` se houver ciclo.

    Args:
        nodes: nós do workflow (a ordem define o desempate).
        edges: arestas dirigidas do workflow.

    Returns:
        Optional[List[str]]: ordem de execução, ou `None` para grafo cíclico.

    Raises:
        UnknownNodeError: se alguma aresta referenciar um nó inexistente.
    """
    graph = build_graph(nodes, edges)
    in_degree = dict(graph.in_degree)

    queue: Deque[str] = deque(n.id for n in nodes if in_degree[n.id] == 0)
    order: List[str] = []

    while queue:
        current = queue.popleft()
        order.append(current)
        for child in graph.adjacency_list[current]:
            in_degree[child] -= 1
            if in_degree[child] == 0:
                queue.append(child)

    if len(order) < len(nodes):
        return None

    return order


def plan_execution(nodes: Sequence[Node], edges: Sequence[Edge]) -> List[str]:
    """
    Variante de `topological_sort` que trata ciclo como erro fatal.

    Raises:
        CycleDetectedError: se houver ciclo no grafo.
        UnknownNodeError: se alguma aresta referenciar um nó inexistente.
    """
    order = topological_sort(nodes, edges)
    if order is None:
        raise CycleDetectedError("Cycle detected in workflow graph")
    return order
