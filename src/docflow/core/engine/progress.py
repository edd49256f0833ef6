# src/docflow/core/engine/progress.py
"""Agregação do progresso dos nós em um percentual único da run."""

from __future__ import annotations

from typing import Sequence

from docflow.core.workflow.types import Node


def calculate_progress(nodes: Sequence[Node]) -> int:
    """
    Média aritmética de `node.progress`, arredondada para o inteiro mais
    próximo (meio para cima). Lista vazia resulta em 0.

    O status não é ponderado: um nó `complete` já carrega `progress=100`.
    """
    if not nodes:
        return 0
    total = sum(int(n.progress) for n in nodes)
    count = len(nodes)
    # half-up em aritmética inteira: floor(total / count + 1/2)
    return (2 * total + count) // (2 * count)
