# src/ztp_siteconfig/core/config/errors.py
"""
Exceções da camada de configuração.

Todas herdam de `ConfigError` e representam falhas estruturais no
carregamento ou na resolução dos settings de geração, nunca falhas do
pipeline de manifests em si.
"""


class ConfigError(Exception):
    """Exceção base para erros de configuração do pipeline."""


class SettingsFileNotFoundError(ConfigError):
    """
    O arquivo de overrides informado explicitamente não existe.

    Um caminho informado e ausente é erro: não há fallback silencioso
    para os defaults.
    """


class UnsupportedConfigFormatError(ConfigError):
    """Extensão do arquivo de settings não suportada (v1: .yaml, .yml, .json)."""


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo de settings não é um mapa."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos entre base e override durante o deep-merge.

    Exemplo:
        - base:     {"merge": {"output_format": "yaml"}}
        - override: {"merge": "json"}

    Nenhum merge parcial é produzido.
    """


class InvalidSettingsError(ConfigError):
    """Settings resolvidos contêm valores inválidos (ex.: formato desconhecido)."""
