# src/ztp_siteconfig/core/constants.py
"""
Constantes canônicas do pipeline de manifests do ZTP SiteConfig.

Estes valores atravessam a fronteira do core: são lidos por quem gera os
CRs e pelos controllers que consomem os manifests produzidos. Alterá-los
muda o contrato externo do pipeline.
"""

# Fragmentos mescláveis (MachineConfig)
FRAGMENT_KIND = "MachineConfig"
FRAGMENT_API_VERSION = "machineconfiguration.openshift.io/v1"
ROLE_LABEL_KEY = "machineconfiguration.openshift.io/role"
MERGED_NAME_PREFIX = "predefined-extra-manifests"

# Proveniência
PROVENANCE_ANNOTATION = "ran.openshift.io/ztp-gitops-generated"
PROVENANCE_ANNOTATION_VALUE = "{}"

# Warnings
WARNING_ANNOTATION = "ran.openshift.io/ztp-warning"
DEPRECATION_WARNING_POSTFIX = "field-deprecation"

# BareMetalHost
NODE_LABEL_PREFIX = "bmac.agent-install.openshift.io.node-label"
INSPECT_ANNOTATION = "inspect.metal3.io"
INSPECT_DISABLED = "disabled"

# AgentClusterInstall / install-config overrides
NETWORKING_KEY = "networking"
NETWORK_TYPE_KEY = "networkType"
CPU_PARTITIONING_KEY = "cpuPartitioningMode"
CPU_PARTITIONING_ALL_NODES = "AllNodes"
DEFAULT_NETWORK_TYPE = "OVNKubernetes"

# Formatos de serialização suportados
FORMAT_YAML = "yaml"
FORMAT_JSON = "json"
SUPPORTED_FORMATS = (FORMAT_YAML, FORMAT_JSON)
