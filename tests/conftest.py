# tests/conftest.py
"""
Fixtures compartilhados para testes do pipeline de manifests.

Este módulo define fixtures reutilizáveis que fornecem:
- contexto de geração determinístico (GenerationContext)
- um merger falso, duck-typed, no lugar da capacidade externa de merge
- fábrica de manifests MachineConfig em YAML
- especificações de cluster mínimas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture depende de estado global
    - Dados retornados são determinísticos e isolados

Limites explícitos:
    - O merger falso não reproduz as regras reais de merge de MachineConfig
"""

from datetime import datetime, timezone

import pytest
import yaml


@pytest.fixture
def gen_ctx():
    """
    Fixture que fornece um GenerationContext determinístico.

    `run_id` e `created_at` são fixos; `base_config` carrega um valor
    observável pelo merger falso.
    """
    from ztp_siteconfig.core.context import GenerationContext

    return GenerationContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        config={},
        base_config={"osImageURL": "quay.io/example/os@sha256:abc"},
    )


@pytest.fixture
def FakeMerger():
    """
    Fixture factory que fornece uma implementação duck-typed de FragmentMerger.

    O merger falso:
    - concatena `spec.config.storage.files` de todos os fragmentos
    - mescla os demais campos de `spec` com "último vence"
    - copia `metadata` do primeiro fragmento
    - registra cada chamada em `calls`
    - pode ser configurado para falhar (`fail_with`) ou devolver outro objeto
    """
    from ztp_siteconfig.core.fragments import ConfigFragment

    class _FakeMerger:
        def __init__(self, fail_with=None, returns=None):
            self.fail_with = fail_with
            self.returns = returns
            self.calls = []

        def merge(self, fragments, context):
            self.calls.append(([f.name for f in fragments], context))
            if self.fail_with is not None:
                raise self.fail_with
            if self.returns is not None:
                return self.returns

            files = []
            spec = {}
            for fragment in fragments:
                files.extend(
                    fragment.spec.get("config", {}).get("storage", {}).get("files", [])
                )
                spec.update({k: v for k, v in fragment.spec.items() if k != "config"})
            if files:
                spec["config"] = {"ignition": {"version": "3.2.0"}, "storage": {"files": files}}
            spec["osImageURL"] = context.base_config.get("osImageURL", "")
            return ConfigFragment(
                api_version="",
                kind="",
                metadata=dict(fragments[0].metadata),
                spec=spec,
            )

    return _FakeMerger


@pytest.fixture
def machine_config_yaml():
    """
    Fixture factory que produz o texto YAML de um MachineConfig.

    Args (da função retornada):
        name: nome do MachineConfig.
        role: valor do label de role (None omite o label).
        path: caminho do arquivo declarado em `spec.config.storage.files`.
        extra_spec: campos adicionais em `spec`.
    """
    from ztp_siteconfig.core.constants import ROLE_LABEL_KEY

    def _make(name, role="master", path=None, extra_spec=None):
        metadata = {"name": name}
        if role is not None:
            metadata["labels"] = {ROLE_LABEL_KEY: role}
        spec = {
            "config": {
                "ignition": {"version": "3.2.0"},
                "storage": {"files": [{"path": path or f"/etc/{name}.conf", "mode": 420}]},
            }
        }
        spec.update(extra_spec or {})
        doc = {
            "apiVersion": "machineconfiguration.openshift.io/v1",
            "kind": "MachineConfig",
            "metadata": metadata,
            "spec": spec,
        }
        return yaml.safe_dump(doc, sort_keys=False)

    return _make


@pytest.fixture
def config_map_yaml() -> str:
    return (
        "apiVersion: v1\n"
        "kind: ConfigMap\n"
        "metadata:\n"
        "  name: extra-manifests\n"
        "data:\n"
        "  key: value\n"
    )


@pytest.fixture
def cluster_spec_dict() -> dict:
    """Especificação de cluster mínima, sem nenhum campo deprecado."""
    return {
        "clusterName": "sno-1",
        "networkType": "OVNKubernetes",
        "nodes": [
            {"hostName": "node-1.example.com", "role": "master"},
        ],
    }


@pytest.fixture
def cluster_spec(cluster_spec_dict):
    from ztp_siteconfig.core.cluster import validate_cluster_spec

    return validate_cluster_spec(cluster_spec_dict)
