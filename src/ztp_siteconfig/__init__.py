# src/ztp_siteconfig/__init__.py
"""
ZTP SiteConfig — pipeline de transformação de manifests de cluster.

Este pacote raiz define o namespace público do pipeline que, a cada
requisição de geração:
    - agrupa e mescla fragmentos MachineConfig por role
    - anota todo CR gerado com proveniência e warnings de deprecação
    - combina a configuração de rede derivada com overrides do usuário
    - aplica reescritas pontuais em anotações de BareMetalHost

Arquitetura em alto nível:
    - core.documents   → codec YAML/JSON e normalização
    - core.merge       → agrupamento por role e orquestração do merge
    - core.annotations → registry de warnings e aplicação de proveniência
    - core.overrides   → merge de overrides de install-config
    - core.rewriters   → reescritas de anotações
    - core.config      → settings de geração (defaults + overrides)

Limites explícitos:
    - Não implementa o algoritmo de merge de MachineConfigs (injetado)
    - Não faz I/O além do arquivo opcional de settings
"""

from .core import *  # noqa: F401,F403
from .core import __all__  # noqa: F401
