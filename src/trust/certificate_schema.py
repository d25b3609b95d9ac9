"""Certificate spec validation and loading.

This module validates raw certificate specs once, before any file is
read, and loads YAML certificate spec files.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, cast

import yaml

from core.errors import NoCertificatesProvidedError
from core.types import CertificateSpec, CertificateSpecValidation, SignerKeySpec

_FIELD_ALIASES = {
    "wwdr": "wwdr",
    "signerCert": "signerCert",
    "signer_cert": "signerCert",
    "signerKey": "signerKey",
    "signer_key": "signerKey",
}
_SIGNER_KEY_ALIASES = {
    "keyFile": "keyFile",
    "key_file": "keyFile",
    "passphrase": "passphrase",
}
_REQUIRED_FIELDS = ("wwdr", "signerCert", "signerKey")


def validate_certificate_spec(value: object) -> CertificateSpecValidation:
    """Validate a certificate spec without reading any file.

    Args:
        value: ``CertificateSpec`` or mapping with ``wwdr``, ``signerCert``
            and ``signerKey`` keys (snake_case aliases accepted).

    Returns:
        Validation result with a normalized spec when valid.
    """
    if isinstance(value, CertificateSpec):
        value = {
            "wwdr": value.wwdr,
            "signerCert": value.signer_cert,
            "signerKey": value.signer_key,
        }
    if not isinstance(value, Mapping) or not value:
        return CertificateSpecValidation(
            errors=(f"expected a non-empty certificate mapping, got {type(value).__name__}",)
        )
    errors: list[str] = []
    fields = _normalize_keys(value, _FIELD_ALIASES, "certificates", errors)
    for field_name in _REQUIRED_FIELDS:
        if field_name not in fields:
            errors.append(f"missing required field '{field_name}'")
    wwdr = _document_value(fields.get("wwdr"), "wwdr", errors)
    signer_cert = _document_value(fields.get("signerCert"), "signerCert", errors)
    signer_key = _signer_key_value(fields.get("signerKey"), errors)
    if errors or wwdr is None or signer_cert is None or signer_key is None:
        return CertificateSpecValidation(errors=tuple(errors))
    spec = CertificateSpec(wwdr=wwdr, signer_cert=signer_cert, signer_key=signer_key)
    return CertificateSpecValidation(errors=(), spec=spec)


def require_certificate_spec(value: object) -> CertificateSpec:
    """Return a validated spec or raise ``NoCertificatesProvidedError``."""
    validation = validate_certificate_spec(value)
    if validation.spec is None or not validation.is_valid:
        raise NoCertificatesProvidedError(
            "No valid certificates provided: " + "; ".join(validation.errors) + ". "
            "Provide 'wwdr', 'signerCert' and 'signerKey' as PEM text or file paths."
        )
    return validation.spec


def load_certificate_spec(spec_path: str) -> CertificateSpec:
    """Load and validate a YAML certificate spec from disk.

    Args:
        spec_path: File path to YAML certificate spec.

    Returns:
        Validated certificate spec.

    Raises:
        NoCertificatesProvidedError: If the file is missing, unreadable,
            malformed or fails validation.
    """
    spec_file = Path(spec_path).expanduser().resolve()
    if not spec_file.exists():
        raise NoCertificatesProvidedError(
            f"Certificate spec file does not exist at {spec_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(spec_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise NoCertificatesProvidedError(
            f"Failed to read certificate spec at {spec_file}: {error}. "
            "Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise NoCertificatesProvidedError(
            f"Failed to parse YAML certificate spec at {spec_file}: {error}. "
            "Fix YAML syntax and retry."
        ) from error
    return require_certificate_spec(payload)


def _normalize_keys(
    mapping: Mapping[object, object],
    aliases: Mapping[str, str],
    context: str,
    errors: list[str],
) -> dict[str, object]:
    normalized: dict[str, object] = {}
    for key, payload in mapping.items():
        if not isinstance(key, str) or key not in aliases:
            errors.append(f"unknown {context} field '{key}'")
            continue
        canonical_key = aliases[key]
        if canonical_key in normalized:
            errors.append(f"duplicate {context} field '{canonical_key}'")
            continue
        normalized[canonical_key] = payload
    return normalized


def _document_value(value: object, field_name: str, errors: list[str]) -> str | None:
    if value is None:
        return None
    if isinstance(value, os.PathLike):
        value = os.fspath(value)
    if isinstance(value, str) and value.strip():
        return value
    errors.append(f"field '{field_name}' must be a non-empty string or path")
    return None


def _signer_key_value(value: object, errors: list[str]) -> str | SignerKeySpec | None:
    if isinstance(value, SignerKeySpec):
        value = {"keyFile": value.key_file, "passphrase": value.passphrase}
    if not isinstance(value, Mapping):
        return _document_value(value, "signerKey", errors)
    key_fields = _normalize_keys(value, _SIGNER_KEY_ALIASES, "signerKey", errors)
    if "keyFile" not in key_fields:
        errors.append("field 'signerKey.keyFile' is required")
        return None
    key_file = _document_value(key_fields["keyFile"], "signerKey.keyFile", errors)
    passphrase = key_fields.get("passphrase")
    if passphrase is not None and not isinstance(passphrase, str):
        errors.append("field 'signerKey.passphrase' must be a string")
        return None
    if key_file is None:
        return None
    return SignerKeySpec(key_file=key_file, passphrase=passphrase)
