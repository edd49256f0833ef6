# src/docflow/core/config/merge.py
"""
Deep-merge canônico de configuração.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (ex.: `accepted_formats` nunca é concatenado)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito

A mesma política é usada em dois pontos:
    - resolução de configuração (embutido → defaults → local)
    - settings efetivos de um nó (`tools.<tool_id>.settings` → `node.settings`)

Invariantes:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma saída
    - Chaves não sobrescritas são preservadas
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _same_kind(a: Any, b: Any) -> bool:
    # bool é subclasse de int; tratá-los como iguais esconderia erros de digitação.
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool)
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return True
    return type(a) is type(b)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any], *, path: str = "") -> Dict[str, Any]:
    """
    Combina `base` com `override`, produzindo um novo dicionário.

    Args:
        base: configuração base.
        override: valores que têm precedência.
        path: prefixo da chave atual, usado apenas em mensagens de erro.

    Returns:
        Dict[str, Any]: novo dicionário resultante.

    Raises:
        ConfigTypeConflictError: se uma mesma chave tiver tipos incompatíveis.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, value in override.items():
        where = f"{path}.{key}" if path else str(key)

        if key not in result or result[key] is None or value is None:
            result[key] = deepcopy(value)
            continue

        current = result[key]

        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value, path=where)
            continue

        if isinstance(value, list) and isinstance(current, list):
            result[key] = deepcopy(value)
            continue

        if not _same_kind(current, value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{where}': "
                f"{type(current).__name__} vs {type(value).__name__}"
            )

        result[key] = deepcopy(value)

    return result
