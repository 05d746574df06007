# src/ztp_siteconfig/core/config/merge.py
"""
Deep-merge de settings de geração.

Política de merge (v1):
    - dict + dict → merge recursivo por chave
    - list        → sobrescrita total
    - escalar     → sobrescrita direta
    - tipos diferentes → `ConfigTypeConflictError`, com o caminho completo
      da chave (ex.: `merge.output_format`)

Uma chave com `None` nos defaults é um slot em aberto e aceita override de
qualquer tipo. Nenhum input é mutado; o resultado é sempre um novo dict.

Este merge é exclusivo da configuração do pipeline. O merge de overrides
de install-config (chave `networking`) segue outra política e vive em
`core.overrides`.
"""

from copy import deepcopy
from typing import Any, Dict, Tuple

from .errors import ConfigTypeConflictError


def _merge_at(path: Tuple[str, ...], base: Any, override: Any) -> Any:
    if isinstance(base, dict) and isinstance(override, dict):
        merged = {key: deepcopy(value) for key, value in base.items()}
        for key, value in override.items():
            if key in merged:
                merged[key] = _merge_at(path + (str(key),), merged[key], value)
            else:
                merged[key] = deepcopy(value)
        return merged

    if isinstance(override, list) or base is None:
        return deepcopy(override)

    if type(base) is not type(override):
        raise ConfigTypeConflictError(
            f"type conflict at '{'.'.join(path)}': "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return deepcopy(override)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Mescla `override` sobre `base` e devolve um novo dicionário.

    Raises:
        ConfigTypeConflictError: se algum dos lados não for dict, ou se uma
            chave tiver tipos incompatíveis.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"deep_merge requires dicts at the root, got: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return _merge_at((), base, override)
