# src/docflow/core/config/hashing.py
"""
Hash canônico da configuração efetiva.

O hash identifica a configuração usada por uma run e é gravado em
`inputs.config_hash` do Manifest.

Política (v1):
    - JSON canônico com chaves ordenadas e separadores compactos
    - UTF-8
    - SHA-256 (64 caracteres hexadecimais)
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera o hash determinístico de uma configuração.

    Raises:
        TypeError: se `config` não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
