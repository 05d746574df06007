# src/ztp_siteconfig/core/__init__.py
"""
Core do pipeline de manifests.

Implementação pura e síncrona: cada chamada transforma um conjunto de
documentos em memória, sem persistência e sem estado entre chamadas. O
único recurso compartilhado é o `AnnotationRegistry`, protegido por lock.
"""

from .annotations import (
    DEPRECATION_RULES,
    AnnotationRegistry,
    AnnotationRule,
    FieldWarning,
    apply_provenance,
    apply_provenance_to_documents,
    apply_provenance_to_text,
    build_deprecation_warnings,
)
from .cluster import ClusterSpec, NodeSpec, validate_cluster_spec
from .config import (
    DEFAULT_SETTINGS,
    ConfigError,
    GenerationSettings,
    deep_merge,
    load_generation_settings,
    load_settings,
    resolve_settings,
)
from .context import GenerationContext, new_context
from .documents import decode_document, encode_document, strip_empty
from .errors import (
    ClusterSpecValidationError,
    DecodeError,
    EmptyResultError,
    EncodeError,
    ErrorPayload,
    InvalidJSONError,
    ManifestError,
    MergeDelegationError,
    TypeProjectionError,
    UnsupportedFormatError,
)
from .fragments import ConfigFragment, FragmentMerger
from .merge import group_by_role, merge_manifests
from .overrides import apply_workload_pinning_override, build_network_annotation, merge_json_at_key
from .rewriters import drop_stale_inspection_annotation, expand_node_label_annotation

__all__ = [
    "DEPRECATION_RULES",
    "AnnotationRegistry",
    "AnnotationRule",
    "FieldWarning",
    "apply_provenance",
    "apply_provenance_to_documents",
    "apply_provenance_to_text",
    "build_deprecation_warnings",
    "ClusterSpec",
    "NodeSpec",
    "validate_cluster_spec",
    "DEFAULT_SETTINGS",
    "ConfigError",
    "GenerationSettings",
    "deep_merge",
    "load_generation_settings",
    "load_settings",
    "resolve_settings",
    "GenerationContext",
    "new_context",
    "decode_document",
    "encode_document",
    "strip_empty",
    "ClusterSpecValidationError",
    "DecodeError",
    "EmptyResultError",
    "EncodeError",
    "ErrorPayload",
    "InvalidJSONError",
    "ManifestError",
    "MergeDelegationError",
    "TypeProjectionError",
    "UnsupportedFormatError",
    "ConfigFragment",
    "FragmentMerger",
    "group_by_role",
    "merge_manifests",
    "apply_workload_pinning_override",
    "build_network_annotation",
    "merge_json_at_key",
    "drop_stale_inspection_annotation",
    "expand_node_label_annotation",
]
