# tests/core/test_errors.py
"""Testes do payload canônico de erros."""

from ztp_siteconfig.core.errors import (
    DecodeError,
    InvalidJSONError,
    ManifestError,
    UnsupportedFormatError,
)


def test_payload_is_serializable():
    err = InvalidJSONError("bad json", details={"source": "installConfigOverrides"}, hint="fix it")

    payload = err.to_payload().to_dict()

    assert payload == {
        "type": "OVERRIDE_INVALID_JSON",
        "message": "bad json",
        "details": {"source": "installConfigOverrides"},
        "hint": "fix it",
    }
    assert str(err) == "bad json"


def test_hierarchy():
    err = UnsupportedFormatError("toml")
    assert isinstance(err, DecodeError)
    assert isinstance(err, ManifestError)
    assert err.details == {}
