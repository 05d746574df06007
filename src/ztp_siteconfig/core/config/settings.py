# src/ztp_siteconfig/core/config/settings.py
"""Materialização tipada dos settings de geração."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..constants import (
    FORMAT_YAML,
    MERGED_NAME_PREFIX,
    PROVENANCE_ANNOTATION_VALUE,
    SUPPORTED_FORMATS,
)
from .errors import InvalidSettingsError
from .loader import load_settings


@dataclass(frozen=True)
class GenerationSettings:
    """Settings efetivos de uma geração (imutáveis)."""

    name_prefix: str = MERGED_NAME_PREFIX
    output_format: str = FORMAT_YAML
    provenance_value: str = PROVENANCE_ANNOTATION_VALUE


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise InvalidSettingsError(f"settings.{name} must be a mapping")
    return section


def resolve_settings(data: Optional[Dict[str, Any]]) -> GenerationSettings:
    """Valida um dicionário de settings (ver `load_settings`) e o materializa."""
    if data is None:
        return GenerationSettings()
    if not isinstance(data, dict):
        raise InvalidSettingsError("settings must be a mapping")

    merge = _section(data, "merge")
    annotations = _section(data, "annotations")

    prefix = merge.get("name_prefix", MERGED_NAME_PREFIX)
    if not isinstance(prefix, str) or not prefix.strip():
        raise InvalidSettingsError("settings.merge.name_prefix must be a non-empty string")

    output_format = str(merge.get("output_format", FORMAT_YAML)).lower()
    if output_format == "yml":
        output_format = FORMAT_YAML
    if output_format not in SUPPORTED_FORMATS:
        raise InvalidSettingsError(
            f"settings.merge.output_format must be one of {list(SUPPORTED_FORMATS)}"
        )

    provenance_value = annotations.get("provenance_value", PROVENANCE_ANNOTATION_VALUE)
    if not isinstance(provenance_value, str):
        raise InvalidSettingsError("settings.annotations.provenance_value must be a string")

    return GenerationSettings(
        name_prefix=prefix,
        output_format=output_format,
        provenance_value=provenance_value,
    )


def load_generation_settings(local_path: Optional[Union[str, Path]] = None) -> GenerationSettings:
    """Carrega defaults + arquivo local opcional e materializa os settings."""
    return resolve_settings(load_settings(local_path))
