# src/docflow/__init__.py
"""
DocFlow: engine de workflows de processamento de documentos.

Este pacote raiz define o namespace público do DocFlow, um engine que
compõe ferramentas independentes de processamento de documentos
(merge, split, compress, encrypt, conversões...) em um pipeline
representado como um DAG explícito de nós.

Princípios centrais:
    - O workflow é um DAG explícito de nós e arestas
    - A validação estrutural e semântica precede qualquer execução
    - A ordem de execução é determinística para o mesmo grafo
    - Ferramentas concretas são adapters opacos resolvidos por `tool_id`

Arquitetura em alto nível:
    - core.workflow     → modelo de dados (Node, Edge, Artifact) e documento de workflow
    - core.engine       → grafo, ordenação topológica, validação, progresso e execução
    - core.tools        → contrato de tool adapter e registry por `tool_id`
    - core.config       → carregamento, merge e hashing de configuração
    - core.traceability → Manifest de execução e histórico de runs

Limites explícitos:
    - Não implementa as operações de documento em si
    - Não interpreta a semântica das ferramentas
    - Não executa nós em paralelo nem em múltiplos processos
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
