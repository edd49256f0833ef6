# src/docflow/core/config/loader.py
"""
Loader canônico de configuração do DocFlow.

A configuração efetiva é resolvida em três camadas, nesta precedência
(a última vence):
    1. `DEFAULT_CONFIG` embutido no pacote
    2. arquivo de defaults do projeto (opcional; se informado, deve existir)
    3. arquivo local de overrides (opcional; ignorado se não existir)

Chaves lidas pelo engine:
    - engine.log_progress (bool): registrar cada report de progresso como evento
    - tools.<tool_id>.settings (dict): settings padrão de uma ferramenta
    - history.max_records (int): retenção do histórico de execuções

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam as camadas anteriores
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Não valida semântica das settings de ferramentas
    - Não persiste configuração nem hash
"""

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)


DEFAULT_CONFIG: Dict[str, Any] = {
    "engine": {
        "log_progress": False,
    },
    "tools": {},
    "history": {
        "max_records": 50,
    },
}


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo YAML/JSON e valida que a raiz é um dicionário.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        DefaultsNotFoundError: se o arquivo não existir.
        UnsupportedConfigFormatError: se a extensão não for suportada.
        InvalidConfigRootTypeError: se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: Optional[Union[str, Path]] = None,
    local_path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva do engine.

    Args:
        defaults_path: arquivo de defaults do projeto. Se informado, deve existir.
        local_path: arquivo local de overrides. Ignorado se não existir.

    Returns:
        Dict[str, Any]: configuração final resolvida.

    Raises:
        DefaultsNotFoundError: se `defaults_path` for informado e não existir.
        UnsupportedConfigFormatError: se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: se o conteúdo não for um dicionário.
        ConfigTypeConflictError: se ocorrer conflito estrutural durante o merge.
    """
    effective = deepcopy(DEFAULT_CONFIG)

    if defaults_path is not None:
        effective = deep_merge(effective, _load_file(Path(defaults_path)))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective


# -----------------------------
# Acesso às chaves do engine
# -----------------------------

def engine_option(config: Optional[Dict[str, Any]], key: str, default: Any = None) -> Any:
    engine_cfg = (config or {}).get("engine", {}) or {}
    if key in engine_cfg:
        return engine_cfg[key]
    return DEFAULT_CONFIG["engine"].get(key, default)


def tool_settings(config: Optional[Dict[str, Any]], tool_id: str) -> Dict[str, Any]:
    tools_cfg = (config or {}).get("tools", {}) or {}
    tool_cfg = tools_cfg.get(tool_id, {}) or {}
    return dict(tool_cfg.get("settings", {}) or {})


def history_max_records(config: Optional[Dict[str, Any]]) -> int:
    history_cfg = (config or {}).get("history", {}) or {}
    value = history_cfg.get("max_records", DEFAULT_CONFIG["history"]["max_records"])
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidConfigValueError(
            f"history.max_records deve ser inteiro positivo, recebido: {value!r}"
        )
    return value
