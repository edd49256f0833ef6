# src/docflow/core/config/__init__.py
"""
Camada de configuração do DocFlow.

Este pacote carrega, mescla e identifica a configuração do engine.

A configuração no DocFlow é:
    - declarativa (YAML ou JSON)
    - determinística
    - separada do documento de workflow

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução da configuração final via deep-merge determinístico
    - Acesso tipado às chaves lidas pelo engine
    - Geração de hash canônico para o Manifest

Limites explícitos:
    - Não valida settings específicas de ferramentas
    - Não executa workflows
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import DEFAULT_CONFIG, engine_option, history_max_records, load_config, tool_settings
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidConfigValueError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "DEFAULT_CONFIG",
    "engine_option",
    "history_max_records",
    "load_config",
    "tool_settings",
    "deep_merge",
]
