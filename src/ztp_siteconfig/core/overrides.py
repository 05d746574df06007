# src/ztp_siteconfig/core/overrides.py
"""
Merge de overrides de install-config.

O AgentClusterInstall recebe uma anotação JSON de install-config que
combina a configuração de rede derivada do SiteConfig com um documento de
overrides fornecido pelo usuário (`installConfigOverrides`).

Política de merge (v1):
    - Sem overrides → somente o objeto de rede
    - Overrides com a chave `networking` → merge estrutural nessa chave;
      os valores derivados (ex.: `networkType`) vencem campo a campo e os
      demais campos dos overrides passam intactos
    - Overrides sem `networking` → splice textual dos dois objetos,
      preservando ordem e formatação dos overrides; o resultado é validado.
      `{}` ou espaço antes da `{` produzem JSON inválido e falham

Todas as falhas de JSON são reportadas como `InvalidJSONError`, sem saída
parcial.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from .cluster import ClusterSpec
from .constants import CPU_PARTITIONING_ALL_NODES, CPU_PARTITIONING_KEY, NETWORKING_KEY, NETWORK_TYPE_KEY
from .errors import InvalidJSONError


def _dumps(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def _load_object(text: str, what: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise InvalidJSONError(
            f"invalid json in {what}: {e}",
            details={"source": what},
            hint="Fix the JSON document before regenerating the manifests.",
        ) from e
    if not isinstance(data, dict):
        raise InvalidJSONError(
            f"{what} must be a JSON object, got {type(data).__name__}",
            details={"source": what},
        )
    return data


def _is_valid_json(text: str) -> bool:
    try:
        json.loads(text)
    except ValueError:
        return False
    return True


def merge_json_at_key(a: str, b: str, key: str) -> str:
    """
    Mescla os objetos JSON `a` e `b` na chave comum `key`.

    O objeto resultante em `key` recebe primeiro os campos de `b[key]` e
    depois os de `a[key]`, que vencem em caso de colisão. Os outros campos
    de topo de `b` são preservados; os de `a` fora de `key` são ignorados.

    Returns:
        str: `b` re-serializado com `key` mesclada (JSON compacto, chaves ordenadas).

    Raises:
        InvalidJSONError: se `a` ou `b` não forem objetos JSON válidos, ou
            se o valor em `key` não for um objeto.
    """
    derived = _load_object(a, "derived document")
    target = _load_object(b, "override document")

    merged: Dict[str, Any] = {}
    for source, name in ((target, "override document"), (derived, "derived document")):
        if key not in source:
            continue
        value = source[key]
        if not isinstance(value, dict):
            raise InvalidJSONError(
                f"'{key}' in {name} must be a JSON object",
                details={"source": name, "key": key},
            )
        merged.update(value)

    target[key] = merged
    return _dumps(target)


def build_network_annotation(network_type: str, overrides: str) -> str:
    """
    Constrói a anotação de install-config do AgentClusterInstall.

    Args:
        network_type: tipo de rede do cluster (ex.: `OVNKubernetes`).
        overrides: JSON de overrides do usuário (pode ser vazio).

    Returns:
        str: JSON final da anotação.

    Raises:
        InvalidJSONError: se `overrides` for inválido ou o splice produzir
            JSON inválido.
    """
    network = _dumps({NETWORKING_KEY: {NETWORK_TYPE_KEY: network_type}})

    if overrides == "":
        return network

    parsed = _load_object(overrides, "installConfigOverrides")

    if NETWORKING_KEY in parsed:
        return merge_json_at_key(network, overrides, NETWORKING_KEY)

    body = overrides[1:] if overrides.startswith("{") else overrides
    spliced = network[:-1] + "," + body
    if not _is_valid_json(spliced):
        raise InvalidJSONError(
            "could not build install-config annotation for AgentClusterInstall",
            details={"source": "installConfigOverrides"},
        )
    return spliced


def apply_workload_pinning_override(spec: ClusterSpec) -> str:
    """
    Força `cpuPartitioningMode: AllNodes` nos overrides quando o cluster pede.

    O valor explícito do cluster sempre sobrescreve o que houver nos
    overrides. Sem particionamento, os overrides voltam inalterados
    (inclusive vazios).
    """
    if not spec.wants_all_nodes_partitioning:
        return spec.install_config_overrides

    values: Dict[str, Any] = {}
    if spec.install_config_overrides != "":
        values = _load_object(spec.install_config_overrides, "installConfigOverrides")

    values[CPU_PARTITIONING_KEY] = CPU_PARTITIONING_ALL_NODES
    return _dumps(values)
