# src/ztp_siteconfig/core/fragments.py
"""
Fragmentos de configuração mescláveis e o contrato do merger externo.

Um `ConfigFragment` é a projeção tipada de um documento do kind alvo
(`MachineConfig`). Ele existe apenas durante uma chamada de merge: é
decodificado do documento genérico, entregue ao merger externo e lido de
volta. O documento genérico continua sendo a forma durável.

O algoritmo de merge em si é uma capacidade externa (`FragmentMerger`),
injetada pelo chamador. Este módulo define apenas o contrato.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, Sequence, runtime_checkable

from .constants import FRAGMENT_API_VERSION, FRAGMENT_KIND, ROLE_LABEL_KEY
from .context import GenerationContext
from .documents import as_mapping, as_str_mapping
from .errors import TypeProjectionError


@dataclass
class ConfigFragment:
    """
    Projeção tipada de um documento do kind alvo.

    Campos:
        - api_version: `apiVersion` do documento
        - kind: `kind` do documento
        - metadata: mapa de metadados (name, labels, annotations, ...)
        - spec: conteúdo de configuração repassado ao merger

    Invariantes:
        - `metadata` e `spec` são sempre mapas
        - `labels` e `annotations`, quando presentes, mapeiam str -> str
    """

    api_version: str = FRAGMENT_API_VERSION
    kind: str = FRAGMENT_KIND
    metadata: Dict[str, Any] = field(default_factory=dict)
    spec: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> "ConfigFragment":
        """Projeta um documento genérico; shapes inválidos geram `TypeProjectionError`."""
        kind = data.get("kind")
        if not isinstance(kind, str) or not kind:
            raise TypeProjectionError("fragment kind must be a non-empty string")

        api_version = data.get("apiVersion") or ""
        if not isinstance(api_version, str):
            raise TypeProjectionError(
                "fragment apiVersion must be a string",
                details={"kind": kind},
            )

        metadata = as_mapping(data.get("metadata") or {}, "metadata")
        for key in ("labels", "annotations"):
            if metadata.get(key) is not None:
                as_str_mapping(metadata[key], f"metadata.{key}")

        spec = as_mapping(data.get("spec") or {}, "spec")

        return cls(
            api_version=api_version,
            kind=kind,
            metadata=copy.deepcopy(metadata),
            spec=copy.deepcopy(spec),
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": copy.deepcopy(self.metadata),
            "spec": copy.deepcopy(self.spec),
        }

    @property
    def name(self) -> Optional[str]:
        return self.metadata.get("name")

    @property
    def labels(self) -> Dict[str, str]:
        return self.metadata.get("labels") or {}

    @property
    def role(self) -> str:
        # Fragmentos sem role formam o grupo "".
        return self.labels.get(ROLE_LABEL_KEY, "")


@runtime_checkable
class FragmentMerger(Protocol):
    """
    Capacidade externa que combina fragmentos de um mesmo role em um só.

    O chamador fornece a implementação. Espera-se que seja determinística;
    o core não conhece nem reimplementa suas regras de merge.
    """

    def merge(
        self,
        fragments: Sequence[ConfigFragment],
        context: GenerationContext,
    ) -> ConfigFragment:
        """Combina `fragments` usando `context.base_config` como base."""
        ...
