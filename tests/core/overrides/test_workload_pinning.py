# tests/core/overrides/test_workload_pinning.py
"""Testes do override de particionamento de CPU (workload pinning)."""

import json

import pytest

from ztp_siteconfig.core.cluster import validate_cluster_spec
from ztp_siteconfig.core.errors import InvalidJSONError
from ztp_siteconfig.core.overrides import apply_workload_pinning_override


def _spec(cluster_spec_dict, **extra):
    data = dict(cluster_spec_dict)
    data.update(extra)
    return validate_cluster_spec(data)


def test_without_partitioning_returns_overrides_unchanged(cluster_spec_dict):
    raw = '{ "fips": true }'
    assert apply_workload_pinning_override(_spec(cluster_spec_dict, installConfigOverrides=raw)) == raw


def test_without_partitioning_and_no_overrides_returns_empty(cluster_spec):
    assert apply_workload_pinning_override(cluster_spec) == ""


def test_all_nodes_without_overrides(cluster_spec_dict):
    spec = _spec(cluster_spec_dict, cpuPartitioningMode="AllNodes")
    assert apply_workload_pinning_override(spec) == '{"cpuPartitioningMode":"AllNodes"}'


def test_all_nodes_overwrites_existing_value(cluster_spec_dict):
    spec = _spec(
        cluster_spec_dict,
        cpuPartitioningMode="AllNodes",
        installConfigOverrides='{"cpuPartitioningMode":"None","fips":true}',
    )

    out = json.loads(apply_workload_pinning_override(spec))

    assert out == {"cpuPartitioningMode": "AllNodes", "fips": True}


def test_all_nodes_with_invalid_overrides_raises(cluster_spec_dict):
    spec = _spec(cluster_spec_dict, cpuPartitioningMode="AllNodes", installConfigOverrides="{bad")
    with pytest.raises(InvalidJSONError):
        apply_workload_pinning_override(spec)
