# src/ztp_siteconfig/core/merge.py
"""
Agrupamento por role e orquestração do merge de fragmentos.

Este módulo recebe o conjunto completo de manifests gerados (nome -> texto),
separa os fragmentos do kind alvo (`MachineConfig`) que não estão excluídos,
agrupa-os pelo label de role e substitui cada grupo por um único manifest
mesclado.

Pipeline por role:
    decode → merger externo → carimbo de identidade → normalização → encode

Decisões arquiteturais:
    - A varredura é pura: falhas de decode abortam antes de qualquer mutação
    - Os originais consumidos só são removidos depois da varredura completa
    - Roles são processados em ordem alfabética (logs determinísticos);
      a saída de cada role é independente das demais
    - Um role com um único fragmento também passa pelo merger, para que
      carimbo e normalização sejam uniformes
    - Falha de merge é fail-fast e pode deixar o mapa parcialmente mutado;
      quem precisa de atomicidade deve passar uma cópia

Limites explícitos:
    - Não implementa o algoritmo de merge (ver `FragmentMerger`)
    - Não valida a semântica dos fragmentos
"""

from __future__ import annotations

from typing import AbstractSet, Dict, List, MutableMapping, Optional, Tuple

from .constants import (
    FORMAT_YAML,
    FRAGMENT_API_VERSION,
    FRAGMENT_KIND,
    PROVENANCE_ANNOTATION,
    ROLE_LABEL_KEY,
)
from .config.settings import GenerationSettings
from .context import GenerationContext, new_context
from .documents import decode_document, encode_document, format_extension, get_kind, strip_empty
from .errors import DecodeError, EmptyResultError, MergeDelegationError, TypeProjectionError
from .fragments import ConfigFragment, FragmentMerger


STAGE = "merge.manifests"

RoleGroups = Dict[str, List[ConfigFragment]]


def group_by_role(
    documents: MutableMapping[str, str],
    excluded: AbstractSet[str],
    fmt: str = FORMAT_YAML,
) -> Tuple[RoleGroups, List[str]]:
    """
    Agrupa os fragmentos mescláveis por role sem mutar `documents`.

    Returns:
        (groups, consumed): fragmentos por role e nomes dos documentos que
        foram consumidos (na ordem de varredura).

    Raises:
        DecodeError: se algum documento não excluído não puder ser decodificado.
        TypeProjectionError: se um documento do kind alvo tiver shape inválido.
    """
    groups: RoleGroups = {}
    consumed: List[str] = []

    for name, text in documents.items():
        if name in excluded:
            continue

        try:
            data = decode_document(text, fmt)
            if get_kind(data) != FRAGMENT_KIND:
                continue
            fragment = ConfigFragment.from_document(data)
        except (DecodeError, TypeProjectionError) as e:
            e.details.setdefault("document", name)
            raise

        groups.setdefault(fragment.role, []).append(fragment)
        consumed.append(name)

    return groups, consumed


def stamp_identity(
    fragment: ConfigFragment,
    role: str,
    settings: GenerationSettings,
) -> ConfigFragment:
    """Sobrescreve name, labels, annotations, kind e apiVersion do fragmento mesclado."""
    fragment.metadata["name"] = f"{settings.name_prefix}-{role}"
    fragment.metadata["labels"] = {ROLE_LABEL_KEY: role}
    fragment.metadata["annotations"] = {PROVENANCE_ANNOTATION: settings.provenance_value}
    fragment.api_version = FRAGMENT_API_VERSION
    fragment.kind = FRAGMENT_KIND
    return fragment


def _merge_role(
    role: str,
    fragments: List[ConfigFragment],
    merger: FragmentMerger,
    context: GenerationContext,
    settings: GenerationSettings,
) -> Tuple[str, str]:
    try:
        merged = merger.merge(fragments, context)
    except Exception as e:
        raise MergeDelegationError(
            f"merge failed for role '{role}': {e}",
            details={"role": role, "fragments": len(fragments)},
        ) from e

    if not isinstance(merged, ConfigFragment):
        raise TypeProjectionError(
            f"merger must return a ConfigFragment, got {type(merged).__name__}",
            details={"role": role},
        )

    stamp_identity(merged, role, settings)

    normalized = strip_empty(merged.to_document())
    if normalized is None:
        raise EmptyResultError(
            f"empty merged fragment for role '{role}'",
            details={"role": role},
        )

    fmt = settings.output_format
    file_name = f"{merged.name}.{format_extension(fmt)}"
    return file_name, encode_document(normalized, fmt)


def merge_manifests(
    documents: MutableMapping[str, str],
    excluded: AbstractSet[str],
    merger: FragmentMerger,
    *,
    context: Optional[GenerationContext] = None,
    settings: Optional[GenerationSettings] = None,
    fmt: str = FORMAT_YAML,
) -> MutableMapping[str, str]:
    """
    Substitui os fragmentos de cada role por um único manifest mesclado.

    Args:
        documents: mapa nome -> texto; é mutado in-place e devolvido.
        excluded: nomes que passam intactos, independente do kind.
        merger: capacidade externa de merge.
        context: contexto de geração (criado se ausente); é repassado ao
            merger e recebe os eventos estruturados.
        settings: settings de geração (defaults se ausente); ver
            `load_generation_settings`.
        fmt: formato de entrada dos documentos.

    Returns:
        O próprio `documents`, com os originais de cada role substituídos
        por `<prefix>-<role>.<ext>`.

    Raises:
        DecodeError: documento ilegível; `documents` permanece intacto.
        TypeProjectionError: fragmento com shape inválido, ou merger que não
            devolve `ConfigFragment`.
        MergeDelegationError: o merger falhou.
        EmptyResultError: o resultado normalizado de um role ficou vazio.
        EncodeError: o resultado não pôde ser serializado.
    """
    settings = settings or GenerationSettings()
    context = context or new_context()

    groups, consumed = group_by_role(documents, excluded, fmt)

    for name in consumed:
        del documents[name]

    context.log(
        stage=STAGE,
        level="INFO",
        message="grouped mergeable fragments",
        roles=sorted(groups),
        consumed=len(consumed),
        excluded=len(excluded),
    )

    for role in sorted(groups):
        fragments = groups[role]
        file_name, text = _merge_role(role, fragments, merger, context, settings)
        documents[file_name] = text
        context.log(
            stage=STAGE,
            level="INFO",
            message="merged role",
            role=role,
            fragments=len(fragments),
            output=file_name,
        )

    return documents
