# src/ztp_siteconfig/core/cluster.py
"""
Especificação de cluster (somente leitura).

Representa a parte da especificação de um cluster do SiteConfig que o
pipeline consome: predicados de deprecação e overrides de install-config.

Esta implementação evita dependências externas (ex.: Pydantic); a
validação é estrutural e explícita, no mesmo estilo do resto do core.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import CPU_PARTITIONING_ALL_NODES, DEFAULT_NETWORK_TYPE
from .errors import ClusterSpecValidationError


_ALLOWED_CPU_PARTITIONING = {"None", CPU_PARTITIONING_ALL_NODES}


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise ClusterSpecValidationError(msg)


def _optional_str(data: Dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    _expect(isinstance(value, str), f"{where}.{key} must be a string")
    return value


@dataclass(frozen=True)
class NodeSpec:
    """Nó de um cluster."""

    host_name: str
    role: str = ""
    cpuset: str = ""
    node_labels: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ClusterSpec:
    """Especificação de cluster consumida pelo pipeline."""

    cluster_name: str
    network_type: str = DEFAULT_NETWORK_TYPE
    install_config_overrides: str = ""
    cpu_partitioning: Optional[str] = None
    extra_manifest_path: str = ""
    nodes: Tuple[NodeSpec, ...] = ()

    @property
    def wants_all_nodes_partitioning(self) -> bool:
        return self.cpu_partitioning == CPU_PARTITIONING_ALL_NODES


def validate_cluster_spec(data: Any) -> ClusterSpec:
    """
    Valida e materializa uma especificação de cluster.

    As chaves seguem a grafia do SiteConfig (camelCase):
    `clusterName`, `networkType`, `installConfigOverrides`,
    `cpuPartitioningMode`, `extraManifestPath`, `nodes[].hostName`,
    `nodes[].role`, `nodes[].cpuset`, `nodes[].nodeLabels`.
    """
    _expect(isinstance(data, dict), "cluster spec must be a mapping")

    name = data.get("clusterName")
    _expect(isinstance(name, str) and bool(name.strip()), "clusterName is required")

    network_type = data.get("networkType") or DEFAULT_NETWORK_TYPE
    _expect(isinstance(network_type, str), "networkType must be a string")

    cpu_partitioning = data.get("cpuPartitioningMode")
    if cpu_partitioning is not None:
        _expect(
            cpu_partitioning in _ALLOWED_CPU_PARTITIONING,
            f"cpuPartitioningMode must be one of {sorted(_ALLOWED_CPU_PARTITIONING)}",
        )

    raw_nodes = data.get("nodes") or []
    _expect(isinstance(raw_nodes, list), "nodes must be a list")

    nodes: List[NodeSpec] = []
    for i, node in enumerate(raw_nodes):
        where = f"nodes[{i}]"
        _expect(isinstance(node, dict), f"{where} must be a mapping")
        host_name = node.get("hostName")
        _expect(isinstance(host_name, str) and bool(host_name.strip()), f"{where}.hostName is required")

        labels = node.get("nodeLabels") or {}
        _expect(isinstance(labels, dict), f"{where}.nodeLabels must be a mapping")
        for k, v in labels.items():
            _expect(
                isinstance(k, str) and isinstance(v, str),
                f"{where}.nodeLabels must map strings to strings",
            )

        nodes.append(
            NodeSpec(
                host_name=host_name,
                role=_optional_str(node, "role", where),
                cpuset=_optional_str(node, "cpuset", where),
                node_labels=dict(labels),
            )
        )

    return ClusterSpec(
        cluster_name=name,
        network_type=network_type,
        install_config_overrides=_optional_str(data, "installConfigOverrides", "cluster"),
        cpu_partitioning=cpu_partitioning,
        extra_manifest_path=_optional_str(data, "extraManifestPath", "cluster"),
        nodes=tuple(nodes),
    )
