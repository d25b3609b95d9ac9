"""Unit tests for PEM certificate and key parsing."""

from __future__ import annotations

import pytest
from cryptography import x509

from core.errors import InvalidCertificateError
from tests.pem_fixtures import certificate_pair, encrypted_key_pem
from trust.pem_parsing import parse_certificate, parse_private_key


def test_parse_certificate_returns_x509_certificate() -> None:
    """Valid PEM certificates should parse."""
    certificate_pem, _ = certificate_pair("Parse Test")

    certificate = parse_certificate("wwdr", certificate_pem)

    assert isinstance(certificate, x509.Certificate)


def test_parse_certificate_rejects_private_key_text() -> None:
    """Key PEM passed as a certificate should fail with the field name."""
    _, key_pem = certificate_pair("Parse Test")

    with pytest.raises(InvalidCertificateError) as error_info:
        parse_certificate("signerCert", key_pem)

    assert error_info.value.field_name == "signerCert"


def test_parse_private_key_reads_unencrypted_key() -> None:
    """Unencrypted keys should parse without a passphrase."""
    _, key_pem = certificate_pair("Parse Test")

    private_key = parse_private_key("signerKey", key_pem)

    assert private_key.key_size == 2048


def test_parse_private_key_decrypts_with_passphrase() -> None:
    """Encrypted keys should parse with the right passphrase."""
    private_key = parse_private_key(
        "signerKey", encrypted_key_pem("Parse Test", "s3cret"), "s3cret"
    )

    assert private_key.key_size == 2048


@pytest.mark.parametrize("passphrase", [None, "wrong"])
def test_parse_private_key_rejects_bad_passphrase(passphrase: str | None) -> None:
    """Missing or wrong passphrases should fail as invalid certificates."""
    with pytest.raises(InvalidCertificateError, match="signerKey"):
        parse_private_key("signerKey", encrypted_key_pem("Parse Test", "s3cret"), passphrase)


def test_parse_private_key_rejects_garbage() -> None:
    """Non-PEM text should fail as invalid certificates."""
    with pytest.raises(InvalidCertificateError):
        parse_private_key("signerKey", "not a key")
