# src/docflow/core/config/errors.py
"""
Exceções canônicas da camada de configuração do DocFlow.

As exceções aqui definidas representam violações estruturais explícitas
durante carregamento e resolução de configuração, e não falhas de
execução de nós.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa falha de tool adapter
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do DocFlow.

    Permite captura genérica de erros de configuração, distinta de
    erros de validação de workflow e de falhas de execução.
    """


class DefaultsNotFoundError(ConfigError):
    """
    O arquivo de configuração base informado não existe.

    Um caminho de defaults explicitamente informado nunca é ignorado:
    sua ausência invalida a configuração.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo de configuração não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo não é um mapa chave-valor (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"history": {"max_records": 50}}
        - override: {"history": "off"}

    Nenhum merge parcial é produzido e nenhuma coerção é tentada.
    """


class InvalidConfigValueError(ConfigError):
    """Uma chave lida pelo engine possui valor fora do domínio aceito."""
