# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do DocFlow.

Este módulo contém testes mínimos cujo único objetivo é garantir que:
- o ambiente de testes (pytest) está funcional
- o pacote e seus subpacotes públicos são importáveis

Invariantes:
    - Estes testes devem sempre passar em um setup correto
    - Não executam workflows nem realizam I/O

Limites explícitos:
    - Não testar lógica de negócio
    - Não acumular asserts funcionais
"""


def test_smoke():
    """Sentinela mínima: o pytest descobre e executa testes."""
    assert True


def test_public_packages_import():
    import docflow
    from docflow.core import config, engine, tools, traceability, workflow

    assert docflow.__version__
    assert engine.Executor is not None
    assert tools.ToolRegistry is not None
    assert workflow.Node is not None
    assert config.load_config is not None
    assert traceability.ExecutionHistory is not None
