# src/ztp_siteconfig/core/errors.py
"""
ZTP SiteConfig — Canonical Errors (v1)

Este módulo define as exceções tipadas do pipeline de manifests e o
payload canônico usado para reportá-las.

Erros fazem parte do contrato operacional do pipeline, devendo ser:
- explícitos
- serializáveis
- rastreáveis
- acionáveis

Política de propagação:
- Toda falha é fail-fast e devolvida ao chamador imediato
- Não existe retry interno (o core não faz I/O)
- Exceções de bibliotecas são encadeadas com `raise ... from`
- Nenhum erro é silenciado; "documento sem kind/role aplicável" não é erro
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do pipeline.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

DOCUMENT_DECODE_ERROR = "DOCUMENT_DECODE_ERROR"
DOCUMENT_UNSUPPORTED_FORMAT = "DOCUMENT_UNSUPPORTED_FORMAT"
DOCUMENT_ENCODE_ERROR = "DOCUMENT_ENCODE_ERROR"
TYPE_PROJECTION_ERROR = "TYPE_PROJECTION_ERROR"
MERGE_DELEGATION_ERROR = "MERGE_DELEGATION_ERROR"
MERGE_EMPTY_RESULT = "MERGE_EMPTY_RESULT"
OVERRIDE_INVALID_JSON = "OVERRIDE_INVALID_JSON"
CLUSTER_SPEC_INVALID = "CLUSTER_SPEC_INVALID"


# ---------------------------------------------------------------------------
# Exceções
# ---------------------------------------------------------------------------

class ManifestError(Exception):
    """Base class para exceções do pipeline de manifests.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    code = "MANIFEST_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.hint = hint

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> ErrorPayload:
        return ErrorPayload(
            type=self.code,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


class DecodeError(ManifestError):
    """Texto de entrada não pôde ser decodificado em um mapa genérico."""

    code = DOCUMENT_DECODE_ERROR


class UnsupportedFormatError(DecodeError):
    """Formato de serialização desconhecido (v1: yaml/json)."""

    code = DOCUMENT_UNSUPPORTED_FORMAT


class EncodeError(ManifestError):
    """Resultado não pôde ser serializado."""

    code = DOCUMENT_ENCODE_ERROR


class TypeProjectionError(ManifestError):
    """Documento não possui o shape exigido pelo seu kind declarado."""

    code = TYPE_PROJECTION_ERROR


class MergeDelegationError(ManifestError):
    """A capacidade externa de merge falhou para um role."""

    code = MERGE_DELEGATION_ERROR


class EmptyResultError(ManifestError):
    """O merge produziu um fragmento sem campos após normalização."""

    code = MERGE_EMPTY_RESULT


class InvalidJSONError(ManifestError):
    """JSON malformado ou inesperado durante o merge de overrides."""

    code = OVERRIDE_INVALID_JSON


class ClusterSpecValidationError(ManifestError):
    """Especificação de cluster não é estruturalmente válida."""

    code = CLUSTER_SPEC_INVALID
