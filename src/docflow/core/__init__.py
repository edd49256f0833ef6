# src/docflow/core/__init__.py
"""
Core do DocFlow.

Este pacote reúne a implementação canônica do engine de workflows,
independente de editor visual, UI ou armazenamento.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de dependências de UI ou frameworks de front-end
    - orientado a contratos explícitos (Node, Edge, ToolAdapter)

Componentes principais:
    - workflow     → tipos do grafo, artefatos e documento de workflow
    - engine       → construção do grafo, planner, validação, progresso e executor
    - tools        → contrato de tool adapter e registry
    - config       → resolução de configuração (merge, validação estrutural, hashing)
    - traceability → Manifest de run e histórico de execuções

Limites explícitos:
    - Não contém operações concretas de documento
    - Não persiste workflows salvos
    - Não depende de editor, CLI ou serviços externos
"""
