# src/ztp_siteconfig/core/documents.py
"""
Codec canônico de documentos (YAML/JSON).

Este módulo é a primitiva folha do pipeline: converte texto bruto em um
mapa genérico (`dict`) e de volta, para as serializações YAML e JSON.
Também concentra as projeções checadas sobre a árvore genérica e a
normalização que remove campos vazios de um documento.

Decisões arquiteturais:
    - YAML é lido com `yaml.safe_load` e escrito com `yaml.safe_dump`
    - A ordem de inserção das chaves é preservada na escrita
    - Texto vazio é interpretado como documento vazio (`{}`)
    - Raiz que não é mapa é rejeitada explicitamente
    - Acesso a `metadata`/`annotations` passa por projeções checadas:
      um valor presente com shape errado gera `TypeProjectionError`

Limites explícitos:
    - Não trata streams multi-documento
    - Não valida schema de nenhum kind
    - Não lê nem escreve arquivos
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

import yaml  # PyYAML

from .constants import FORMAT_JSON, FORMAT_YAML, SUPPORTED_FORMATS
from .errors import DecodeError, EncodeError, TypeProjectionError, UnsupportedFormatError


def _check_format(fmt: str) -> str:
    fmt = (fmt or "").lower()
    if fmt == "yml":
        fmt = FORMAT_YAML
    if fmt not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(
            f"unsupported document format: {fmt!r}",
            details={"format": fmt, "supported": list(SUPPORTED_FORMATS)},
        )
    return fmt


def decode_document(text: str, fmt: str = FORMAT_YAML) -> Dict[str, Any]:
    """
    Decodifica um documento textual em um mapa genérico.

    Args:
        text: conteúdo bruto do documento.
        fmt: `yaml` (padrão) ou `json`.

    Returns:
        Dict[str, Any]: o documento decodificado (`{}` para texto vazio).

    Raises:
        UnsupportedFormatError: se `fmt` não for suportado.
        DecodeError: se o parsing falhar ou a raiz não for um mapa.
    """
    fmt = _check_format(fmt)
    if not isinstance(text, str):
        raise DecodeError(
            f"document content must be text, got {type(text).__name__}",
            details={"format": fmt},
        )

    try:
        if fmt == FORMAT_YAML:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text) if text.strip() else None
    except (yaml.YAMLError, ValueError) as e:
        raise DecodeError(
            f"could not decode {fmt} document: {e}",
            details={"format": fmt},
        ) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise DecodeError(
            f"document root must be a mapping, got {type(data).__name__}",
            details={"format": fmt},
        )

    return data


def encode_document(data: Mapping[str, Any], fmt: str = FORMAT_YAML) -> str:
    """Serializa um mapa genérico em YAML (block style) ou JSON compacto."""
    fmt = _check_format(fmt)
    try:
        if fmt == FORMAT_YAML:
            return yaml.safe_dump(
                dict(data),
                sort_keys=False,
                default_flow_style=False,
                allow_unicode=True,
            )
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    except (yaml.YAMLError, TypeError, ValueError) as e:
        raise EncodeError(
            f"could not encode {fmt} document: {e}",
            details={"format": fmt},
        ) from e


def format_extension(fmt: str) -> str:
    return _check_format(fmt)


def strip_empty(value: Any) -> Any:
    """
    Remove recursivamente campos vazios de uma árvore genérica.

    São considerados vazios: `None`, string vazia, mapa vazio e lista vazia.
    Zero numérico e `False` são valores significativos e permanecem.
    Um mapa ou lista que fica vazio após a limpeza também é removido.

    Returns:
        Uma nova árvore normalizada, ou `None` se tudo for vazio.
        O input nunca é mutado.
    """
    if isinstance(value, dict):
        out = {}
        for key, item in value.items():
            stripped = strip_empty(item)
            if stripped is not None:
                out[key] = stripped
        return out or None

    if isinstance(value, list):
        items = [s for s in (strip_empty(item) for item in value) if s is not None]
        return items or None

    if value is None or (isinstance(value, str) and value == ""):
        return None

    return value


# ---------------------------------------------------------------------------
# Projeções checadas
# ---------------------------------------------------------------------------

def as_mapping(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeProjectionError(
            f"{where} must be a mapping, got {type(value).__name__}",
            details={"field": where},
        )
    return value


def as_str_mapping(value: Any, where: str) -> Dict[str, str]:
    mapping = as_mapping(value, where)
    for key, item in mapping.items():
        if not isinstance(key, str) or not isinstance(item, str):
            raise TypeProjectionError(
                f"{where} must map strings to strings (offending key: {key!r})",
                details={"field": where, "key": str(key)},
            )
    return mapping


def get_metadata(document: Dict[str, Any], *, create: bool = False) -> Optional[Dict[str, Any]]:
    """Retorna `document["metadata"]`, criando-o quando `create=True`."""
    metadata = document.get("metadata")
    if metadata is None:
        if not create:
            return None
        metadata = {}
        document["metadata"] = metadata
    return as_mapping(metadata, "metadata")


def get_annotations(document: Dict[str, Any], *, create: bool = False) -> Optional[Dict[str, Any]]:
    """Retorna `document["metadata"]["annotations"]`, criando os mapas quando `create=True`."""
    metadata = get_metadata(document, create=create)
    if metadata is None:
        return None
    annotations = metadata.get("annotations")
    if annotations is None:
        if not create:
            return None
        annotations = {}
        metadata["annotations"] = annotations
    return as_mapping(annotations, "metadata.annotations")


def get_kind(document: Mapping[str, Any]) -> Optional[str]:
    kind = document.get("kind")
    return kind if isinstance(kind, str) else None
