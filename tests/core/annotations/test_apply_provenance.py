# tests/core/annotations/test_apply_provenance.py
"""Testes da aplicação de proveniência e warnings em documentos."""

import copy

import pytest
import yaml

from ztp_siteconfig.core.annotations import (
    AnnotationRegistry,
    apply_provenance,
    apply_provenance_to_documents,
    apply_provenance_to_text,
)
from ztp_siteconfig.core.constants import PROVENANCE_ANNOTATION
from ztp_siteconfig.core.errors import TypeProjectionError


CPUSET_KEY = "ran.openshift.io/ztp-warning-field-deprecation-cpuset"


@pytest.fixture
def registry():
    reg = AnnotationRegistry("field-deprecation")
    reg.add("AgentClusterInstall", "cpuset", "cpuset is deprecated")
    return reg


def test_creates_metadata_and_annotations():
    doc = {"kind": "Namespace"}

    apply_provenance(doc)

    assert doc["metadata"]["annotations"] == {PROVENANCE_ANNOTATION: "{}"}


def test_keeps_existing_annotations():
    doc = {"kind": "Namespace", "metadata": {"name": "x", "annotations": {"a": "b"}}}

    apply_provenance(doc)

    assert doc["metadata"]["annotations"] == {"a": "b", PROVENANCE_ANNOTATION: "{}"}
    assert doc["metadata"]["name"] == "x"


def test_applies_matching_warnings(registry):
    doc = {"kind": "AgentClusterInstall", "metadata": {"name": "aci"}}

    apply_provenance(doc, registry)

    annotations = doc["metadata"]["annotations"]
    assert annotations[CPUSET_KEY] == "cpuset is deprecated"
    assert annotations[PROVENANCE_ANNOTATION] == "{}"


def test_other_kinds_get_only_provenance(registry):
    doc = {"kind": "ClusterDeployment"}

    apply_provenance(doc, registry)

    assert doc["metadata"]["annotations"] == {PROVENANCE_ANNOTATION: "{}"}


@pytest.mark.parametrize("kind", [None, 42, ["AgentClusterInstall"]])
def test_missing_or_non_string_kind_skips_warnings(registry, kind):
    doc = {} if kind is None else {"kind": kind}

    apply_provenance(doc, registry)

    assert doc["metadata"]["annotations"] == {PROVENANCE_ANNOTATION: "{}"}


def test_registry_without_warnings_is_ignored():
    empty = AnnotationRegistry("field-deprecation")
    doc = {"kind": "AgentClusterInstall"}

    apply_provenance(doc, empty)

    assert doc["metadata"]["annotations"] == {PROVENANCE_ANNOTATION: "{}"}


def test_is_idempotent(registry):
    doc = {"kind": "AgentClusterInstall", "metadata": {"annotations": {"x": "y"}}}

    apply_provenance(doc, registry)
    once = copy.deepcopy(doc)
    apply_provenance(doc, registry)

    assert doc == once


def test_multiple_registries(registry):
    other = AnnotationRegistry("other")
    other.add("AgentClusterInstall", "networkType", "check network")
    doc = {"kind": "AgentClusterInstall"}

    apply_provenance(doc, registry, other)

    annotations = doc["metadata"]["annotations"]
    assert annotations[CPUSET_KEY] == "cpuset is deprecated"
    assert annotations["ran.openshift.io/ztp-warning-other-networkType"] == "check network"


def test_wrong_shaped_metadata_raises():
    with pytest.raises(TypeProjectionError):
        apply_provenance({"kind": "Namespace", "metadata": ["not", "a", "map"]})


def test_batch_form(registry):
    docs = [{"kind": "AgentClusterInstall"}, {"kind": "ConfigMap"}]

    out = apply_provenance_to_documents(docs, registry)

    assert out == docs
    assert CPUSET_KEY in docs[0]["metadata"]["annotations"]
    assert CPUSET_KEY not in docs[1]["metadata"]["annotations"]


def test_batch_form_rejects_non_mapping():
    with pytest.raises(TypeProjectionError):
        apply_provenance_to_documents([{"kind": "ConfigMap"}, "kind: ConfigMap"])


def test_text_form(config_map_yaml):
    out = apply_provenance_to_text(config_map_yaml)

    data = yaml.safe_load(out)
    assert data["metadata"]["annotations"] == {PROVENANCE_ANNOTATION: "{}"}
    assert data["data"] == {"key": "value"}
