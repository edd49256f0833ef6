# tests/core/engine/test_progress.py
"""Testes da agregação de progresso (média arredondada meio-para-cima)."""

from docflow.core.engine.progress import calculate_progress
from docflow.core.workflow.types import NodeStatus


def _nodes(make_node, values):
    out = []
    for i, v in enumerate(values):
        n = make_node(f"n{i}")
        n.progress = v
        out.append(n)
    return out


def test_empty_is_zero():
    assert calculate_progress([]) == 0


def test_all_idle_is_zero(make_node):
    assert calculate_progress(_nodes(make_node, [0, 0, 0])) == 0


def test_all_complete_is_hundred(make_node):
    nodes = _nodes(make_node, [100, 100])
    for n in nodes:
        n.status = NodeStatus.COMPLETE
    assert calculate_progress(nodes) == 100


def test_mixed_values(make_node):
    assert calculate_progress(_nodes(make_node, [100, 50, 0])) == 50


def test_half_rounds_up(make_node):
    assert calculate_progress(_nodes(make_node, [1, 0])) == 1
    assert calculate_progress(_nodes(make_node, [25, 50])) == 38


def test_trusts_progress_field_not_status(make_node):
    nodes = _nodes(make_node, [0, 100])
    nodes[0].status = NodeStatus.COMPLETE
    nodes[1].status = NodeStatus.IDLE
    assert calculate_progress(nodes) == 50
