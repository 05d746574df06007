# src/ztp_siteconfig/core/config/loader.py
"""
Loader de settings de geração.

Os settings efetivos são resolvidos a partir de:
    - `DEFAULT_SETTINGS`, embutidos no código (sempre presentes)
    - um arquivo local de overrides (opcional), em YAML ou JSON

O arquivo local sempre tem prioridade sobre os defaults. A resolução usa
`deep_merge`, portanto conflitos de tipo interrompem o carregamento.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from ..constants import FORMAT_YAML, MERGED_NAME_PREFIX, PROVENANCE_ANNOTATION_VALUE
from .errors import (
    InvalidConfigRootTypeError,
    SettingsFileNotFoundError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge


DEFAULT_SETTINGS: Dict[str, Any] = {
    "merge": {
        "name_prefix": MERGED_NAME_PREFIX,
        "output_format": FORMAT_YAML,
    },
    "annotations": {
        "provenance_value": PROVENANCE_ANNOTATION_VALUE,
    },
}


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo de settings e valida o tipo raiz.

    Arquivos vazios são interpretados como `{}`.

    Raises:
        SettingsFileNotFoundError: se o arquivo não existir.
        UnsupportedConfigFormatError: se a extensão não for suportada.
        InvalidConfigRootTypeError: se a raiz não for um dicionário.
    """
    if not path.exists():
        raise SettingsFileNotFoundError(f"settings file not found: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"unsupported settings format: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"settings root must be a dict, got: {type(data).__name__}"
        )

    return data


def load_settings(local_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Carrega os settings efetivos de geração.

    Args:
        local_path: caminho opcional para um arquivo de overrides.

    Returns:
        Dict[str, Any]: defaults embutidos mesclados com os overrides.

    Raises:
        SettingsFileNotFoundError: se `local_path` for informado e não existir.
        UnsupportedConfigFormatError: se o formato não for suportado.
        InvalidConfigRootTypeError: se o conteúdo não for um dicionário.
        ConfigTypeConflictError: se ocorrer conflito de tipo no merge.
    """
    if local_path is None:
        return deep_merge(DEFAULT_SETTINGS, {})

    local = _load_file(Path(local_path))
    return deep_merge(DEFAULT_SETTINGS, local)
