# src/ztp_siteconfig/core/config/__init__.py
"""
Camada de configuração do pipeline de manifests.

A configuração de geração é declarativa: defaults embutidos no código,
opcionalmente sobrescritos por um arquivo local (YAML ou JSON), resolvidos
via deep-merge determinístico e materializados em `GenerationSettings`.

Invariantes:
    - A mesma entrada sempre produz os mesmos settings
    - Overrides nunca mutam os defaults
    - Conflitos estruturais são tratados como erro
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    InvalidSettingsError,
    SettingsFileNotFoundError,
    UnsupportedConfigFormatError,
)
from .loader import DEFAULT_SETTINGS, load_settings  # noqa: F401
from .merge import deep_merge  # noqa: F401
from .settings import GenerationSettings, load_generation_settings, resolve_settings  # noqa: F401
