# src/ztp_siteconfig/core/rewriters.py
"""Reescritas estruturais pontuais em anotações de BareMetalHost."""

from __future__ import annotations

from typing import Any, Dict

from .constants import INSPECT_ANNOTATION, INSPECT_DISABLED, NODE_LABEL_PREFIX
from .documents import get_annotations
from .errors import TypeProjectionError


def drop_stale_inspection_annotation(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Remove a anotação de inspeção, exceto quando ela desabilita a inspeção.

    Qualquer valor diferente de `disabled` é considerado obsoleto.
    """
    annotations = get_annotations(document)
    if annotations is None:
        return document

    if INSPECT_ANNOTATION in annotations and annotations[INSPECT_ANNOTATION] != INSPECT_DISABLED:
        del annotations[INSPECT_ANNOTATION]
    return document


def expand_node_label_annotation(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Expande o mapa de node-labels em uma anotação por label.

    Para aplicar `node-role.kubernetes.io/environment: production` em um
    nó, o BMH precisa da anotação
    `bmac.agent-install.openshift.io.node-label.node-role.kubernetes.io/environment: production`.
    O mapa original é removido.
    """
    annotations = get_annotations(document)
    if annotations is None or NODE_LABEL_PREFIX not in annotations:
        return document

    labels = annotations[NODE_LABEL_PREFIX]
    if not isinstance(labels, dict):
        raise TypeProjectionError(
            f"annotation '{NODE_LABEL_PREFIX}' must be a mapping of label to value",
            details={"annotation": NODE_LABEL_PREFIX},
        )

    for key, value in labels.items():
        annotations[f"{NODE_LABEL_PREFIX}.{key}"] = value

    del annotations[NODE_LABEL_PREFIX]
    return document
