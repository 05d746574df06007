# tests/core/rewriters/test_rewriters.py
"""Testes das reescritas de anotações de BareMetalHost."""

import pytest

from ztp_siteconfig.core.constants import INSPECT_ANNOTATION, NODE_LABEL_PREFIX
from ztp_siteconfig.core.errors import TypeProjectionError
from ztp_siteconfig.core.rewriters import (
    drop_stale_inspection_annotation,
    expand_node_label_annotation,
)


def _bmh(annotations):
    return {"kind": "BareMetalHost", "metadata": {"name": "node-1", "annotations": annotations}}


@pytest.mark.parametrize("value", ["enabled", "", "Disabled"])
def test_inspection_annotation_removed_when_not_disabled(value):
    doc = _bmh({INSPECT_ANNOTATION: value, "keep": "me"})

    out = drop_stale_inspection_annotation(doc)

    assert out is doc
    assert doc["metadata"]["annotations"] == {"keep": "me"}


def test_inspection_annotation_kept_when_disabled():
    doc = _bmh({INSPECT_ANNOTATION: "disabled"})

    drop_stale_inspection_annotation(doc)

    assert doc["metadata"]["annotations"] == {INSPECT_ANNOTATION: "disabled"}


def test_inspection_noop_without_annotations():
    doc = {"kind": "BareMetalHost", "metadata": {"name": "node-1"}}
    assert drop_stale_inspection_annotation(doc) == {"kind": "BareMetalHost", "metadata": {"name": "node-1"}}
    assert drop_stale_inspection_annotation({}) == {}


def test_node_label_bag_is_expanded():
    doc = _bmh({NODE_LABEL_PREFIX: {"env": "prod", "node-role.kubernetes.io/infra": ""}})

    expand_node_label_annotation(doc)

    assert doc["metadata"]["annotations"] == {
        f"{NODE_LABEL_PREFIX}.env": "prod",
        f"{NODE_LABEL_PREFIX}.node-role.kubernetes.io/infra": "",
    }


def test_node_label_noop_without_bag():
    doc = _bmh({"other": "x"})
    expand_node_label_annotation(doc)
    assert doc["metadata"]["annotations"] == {"other": "x"}
    assert expand_node_label_annotation({}) == {}


def test_node_label_bag_must_be_mapping():
    with pytest.raises(TypeProjectionError):
        expand_node_label_annotation(_bmh({NODE_LABEL_PREFIX: "env=prod"}))
