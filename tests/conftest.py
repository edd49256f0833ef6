# tests/conftest.py
"""
Fixtures compartilhados para testes do DocFlow.

Este módulo define fixtures reutilizáveis que fornecem:
- factories de nós e arestas com defaults determinísticos
- artefatos mínimos (raw e named)
- tool adapters falsos, configuráveis por teste
- ToolRegistry montado a partir desses adapters
- YAMLs de configuração semelhantes ao uso real

O objetivo destas fixtures é permitir testes do core
(workflow, engine, tools, config e traceability) sem depender de:
- operações reais de documento (merge, compress, ...)
- editor visual
- estado global

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Tool adapters falsos utilizam duck typing em vez de herança
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture executa um workflow
    - Nenhuma fixture realiza I/O
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica de domínio de documentos
"""

import pytest


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de configuração padrão (defaults) semelhante ao uso real.

    Representa o conteúdo típico de um `docflow.defaults.yaml`, servindo
    como base canônica sobre a qual configurações locais são aplicadas
    via deep-merge.

    Returns:
        str: Conteúdo YAML representando configuração padrão.
    """
    return """\
engine:
  log_progress: false
tools:
  compress:
    settings:
      level: medium
      keep_metadata: true
history:
  max_records: 50
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de overrides locais (apenas as chaves que mudam)."""
    return """\
engine:
  log_progress: true
tools:
  compress:
    settings:
      level: high
"""


# =====================================================
# Workflow fixtures (Node, Edge, Artifact)
# =====================================================

@pytest.fixture
def make_node():
    """
    Factory de nós com defaults de um pipeline PDF → PDF.

    Decisões arquiteturais:
        - `tool_id` padrão é `"echo"`, registrado por `make_registry`
        - formatos padrão (`.pdf` → `.pdf`) tornam qualquer cadeia válida
        - campos adicionais são repassados diretamente para `Node`

    Returns:
        Callable[..., Node]
    """
    from docflow.core.workflow.types import Node

    def _make(node_id, *, tool_id="echo", accepted=(".pdf",), output=".pdf", **kwargs):
        return Node(
            id=node_id,
            tool_id=tool_id,
            accepted_formats=list(accepted),
            output_format=output,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_edge():
    """Factory de arestas; o id padrão é `"<source>-<target>"`."""
    from docflow.core.workflow.types import Edge

    def _make(source, target, edge_id=None):
        return Edge(id=edge_id or f"{source}-{target}", source=source, target=target)

    return _make


@pytest.fixture
def linear_workflow(make_node, make_edge):
    """Workflow linear `node1 → node2 → node3`."""
    nodes = [make_node("node1"), make_node("node2"), make_node("node3")]
    edges = [make_edge("node1", "node2"), make_edge("node2", "node3")]
    return nodes, edges


@pytest.fixture
def sample_files():
    from docflow.core.workflow.types import NamedArtifact, RawArtifact

    return [
        NamedArtifact(blob=b"%PDF-1 first", filename="first.pdf"),
        RawArtifact(blob=b"%PDF-1 second"),
    ]


# =====================================================
# Tool adapter fixtures
# =====================================================

@pytest.fixture
def FakeTool():
    """
    Fixture factory que fornece um tool adapter duck-typed e configurável.

    O adapter retornado:
    - registra cada chamada (`inputs`, `config`) em `calls`
    - reporta os percentuais de `progress` via callback, em ordem
    - executa `on_run(cancel_token)` antes de produzir o resultado
    - levanta `raises`, devolve `result` bruto, falha com `fail`
      ou devolve `outputs` (nesta ordem de precedência)

    Sem `outputs`, produz um único `NamedArtifact` cujo blob é o
    `tool_id` e cujo nome é `"<tool_id>.pdf"`.

    Invariantes:
        - Não executa I/O
        - Não depende do grafo nem de outros nós

    Returns:
        type: Classe _FakeTool que pode ser instanciada pelos testes.
    """
    from docflow.core.tools.adapter import ToolResult
    from docflow.core.workflow.types import NamedArtifact

    class _FakeTool:
        def __init__(
            self,
            tool_id="echo",
            *,
            outputs=None,
            fail=None,
            raises=None,
            result=None,
            progress=(),
            on_run=None,
        ):
            self.tool_id = tool_id
            self.outputs = outputs
            self.fail = fail
            self.raises = raises
            self.result = result
            self.progress = list(progress)
            self.on_run = on_run
            self.calls = []
            self.callbacks = []

        def run(self, inputs, config, on_progress, cancel_token):
            self.calls.append({"inputs": list(inputs), "config": dict(config)})
            self.callbacks.append(on_progress)
            for pct in self.progress:
                on_progress(pct, f"{self.tool_id} at {pct}")
            if self.on_run is not None:
                self.on_run(cancel_token)
            if self.raises is not None:
                raise self.raises
            if self.result is not None:
                return self.result
            if self.fail is not None:
                return ToolResult.fail(self.fail)
            if self.outputs is not None:
                return ToolResult.ok(self.outputs)
            return ToolResult.ok(
                [NamedArtifact(blob=self.tool_id.encode("utf-8"), filename=f"{self.tool_id}.pdf")],
                pages=1,
            )

    return _FakeTool


@pytest.fixture
def make_registry(FakeTool):
    """
    Factory de ToolRegistry.

    Sempre registra um `FakeTool("echo")` padrão, a menos que um adapter
    com o mesmo `tool_id` seja informado.
    """
    from docflow.core.tools.registry import ToolRegistry

    def _make(*tools):
        registry = ToolRegistry()
        ids = {t.tool_id for t in tools}
        if "echo" not in ids:
            registry.add(FakeTool("echo"))
        for t in tools:
            registry.add(t)
        return registry

    return _make
