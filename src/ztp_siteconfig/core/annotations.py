# src/ztp_siteconfig/core/annotations.py
"""
Registro de warnings de anotação e aplicação de proveniência.

Este módulo reúne duas responsabilidades ligadas à anotação dos CRs gerados:

1. `AnnotationRegistry`: store concorrente de warnings (campo, mensagem)
   indexados pelo kind alvo. É populado uma vez por especificação de
   cluster, a partir de uma tabela declarativa de regras
   (`DEPRECATION_RULES`), e depois apenas lido durante a geração.

2. Aplicação: `apply_provenance` carimba a anotação fixa de proveniência
   em qualquer documento e, para cada registry com warnings, uma anotação
   `<namespace>-<campo>` por warning aplicável ao kind do documento.

Decisões arquiteturais:
    - Disciplina de lock explícita: `add` exclusivo, leituras compartilhadas
    - O lock prefere escritores: leitores novos esperam um escritor pendente
    - Regras são avaliadas na ordem de declaração e são aditivas
    - Kind ausente (ou não string) apenas pula os warnings; a proveniência
      é sempre aplicada

Invariantes:
    - Kind ausente do registry não tem warnings
    - A ordem dos warnings de um kind é a ordem de inserção
    - Aplicar duas vezes produz o mesmo conjunto de anotações
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Sequence, Tuple

from .cluster import ClusterSpec
from .constants import (
    DEPRECATION_WARNING_POSTFIX,
    FORMAT_YAML,
    PROVENANCE_ANNOTATION,
    PROVENANCE_ANNOTATION_VALUE,
    WARNING_ANNOTATION,
)
from .documents import as_mapping, decode_document, encode_document, get_annotations, get_kind


class _ReadWriteLock:
    """Lock leitores/escritor com preferência para escritores."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


@dataclass(frozen=True)
class FieldWarning:
    """Warning associado a um campo de um kind."""

    field: str
    message: str


class AnnotationRegistry:
    """
    Store concorrente de warnings por kind.

    O namespace das anotações produzidas é `"<WARNING_ANNOTATION>-<namespace_key>"`;
    cada warning vira a anotação `"<namespace>-<field>"`.
    """

    def __init__(self, namespace_key: str) -> None:
        self.namespace = f"{WARNING_ANNOTATION}-{namespace_key}"
        self._values: Dict[str, List[FieldWarning]] = {}
        self._lock = _ReadWriteLock()

    def add(self, kind: str, field: str, message: str) -> None:
        with self._lock.write():
            self._values.setdefault(kind, []).append(FieldWarning(field, message))

    def get_warnings(self, kind: str) -> Tuple[Tuple[FieldWarning, ...], bool]:
        """Retorna `(warnings, found)`; kinds ausentes retornam `((), False)`."""
        with self._lock.read():
            if kind not in self._values:
                return (), False
            return tuple(self._values[kind]), True

    def has_warnings(self) -> bool:
        with self._lock.read():
            return any(self._values.values())

    def kinds(self) -> List[str]:
        with self._lock.read():
            return list(self._values)

    def annotation_key(self, warning: FieldWarning) -> str:
        return f"{self.namespace}-{warning.field}"


# ---------------------------------------------------------------------------
# Regras declarativas
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AnnotationRule:
    """Regra (kind, campo, mensagem) aplicada quando `should_apply(spec)` é verdadeiro."""

    kind: str
    field: str
    message: str
    should_apply: Callable[[ClusterSpec], bool]


def _any_node_has_cpuset(spec: ClusterSpec) -> bool:
    return any(node.cpuset for node in spec.nodes)


def _has_extra_manifest_path(spec: ClusterSpec) -> bool:
    return len(spec.extra_manifest_path) > 0


DEPRECATION_RULES: Tuple[AnnotationRule, ...] = (
    AnnotationRule(
        kind="AgentClusterInstall",
        field="cpuset",
        message=(
            "cpuset will be deprecated after OCP 4.15, please use "
            "cpuPartitioningMode for OCP versions >= 4.14"
        ),
        should_apply=_any_node_has_cpuset,
    ),
    AnnotationRule(
        kind="ConfigMap",
        field="extraManifestPath",
        message=(
            "extraManifestPath will be deprecated after OCP 4.15, please use "
            "ExtraManifests.SearchPaths for OCP versions >= 4.14"
        ),
        should_apply=_has_extra_manifest_path,
    ),
)


def build_deprecation_warnings(
    spec: ClusterSpec,
    rules: Sequence[AnnotationRule] = DEPRECATION_RULES,
) -> AnnotationRegistry:
    """Avalia `rules` em ordem contra `spec` e devolve o registry populado."""
    registry = AnnotationRegistry(DEPRECATION_WARNING_POSTFIX)
    for rule in rules:
        if rule.should_apply(spec):
            registry.add(rule.kind, rule.field, rule.message)
    return registry


# ---------------------------------------------------------------------------
# Aplicação
# ---------------------------------------------------------------------------

def apply_provenance(
    document: Dict[str, Any],
    *registries: AnnotationRegistry,
    provenance_value: str = PROVENANCE_ANNOTATION_VALUE,
) -> Dict[str, Any]:
    """
    Carimba proveniência e warnings aplicáveis em `document` (in-place).

    Cria `metadata` e `metadata.annotations` quando ausentes.

    Raises:
        TypeProjectionError: se `metadata` ou `annotations` existirem com
            shape diferente de mapa.
    """
    annotations = get_annotations(document, create=True)
    annotations[PROVENANCE_ANNOTATION] = provenance_value

    kind = get_kind(document)
    for registry in registries:
        if not registry.has_warnings() or kind is None:
            continue
        warnings, found = registry.get_warnings(kind)
        if not found:
            continue
        for warning in warnings:
            annotations[registry.annotation_key(warning)] = warning.message

    return document


def apply_provenance_to_documents(
    documents: Iterable[Dict[str, Any]],
    *registries: AnnotationRegistry,
    provenance_value: str = PROVENANCE_ANNOTATION_VALUE,
) -> List[Dict[str, Any]]:
    out = []
    for i, document in enumerate(documents):
        as_mapping(document, f"documents[{i}]")
        out.append(apply_provenance(document, *registries, provenance_value=provenance_value))
    return out


def apply_provenance_to_text(
    text: str,
    fmt: str = FORMAT_YAML,
    *,
    provenance_value: str = PROVENANCE_ANNOTATION_VALUE,
) -> str:
    """Decodifica um manifest, aplica apenas a proveniência e re-serializa."""
    data = decode_document(text, fmt)
    apply_provenance(data, provenance_value=provenance_value)
    return encode_document(data, fmt)
