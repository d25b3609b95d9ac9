"""PEM parsing for certificates and signer keys.

Every parse failure is reported as ``InvalidCertificateError`` naming the
certificate spec field, never as a raw cryptography error.
"""

from __future__ import annotations

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes

from core.errors import InvalidCertificateError


def parse_certificate(field_name: str, pem_text: str) -> x509.Certificate:
    """Parse PEM text into an X.509 certificate.

    Args:
        field_name: Spec field used in error messages.
        pem_text: PEM encoded certificate.

    Returns:
        Parsed certificate.

    Raises:
        InvalidCertificateError: If the text is not a PEM certificate.
    """
    try:
        return x509.load_pem_x509_certificate(pem_text.encode("utf-8"))
    except (ValueError, UnsupportedAlgorithm) as error:
        raise InvalidCertificateError(field_name) from error


def parse_private_key(
    field_name: str,
    pem_text: str,
    passphrase: str | None = None,
) -> PrivateKeyTypes:
    """Parse PEM text into a private key, decrypting it when a passphrase is set.

    Args:
        field_name: Spec field used in error messages.
        pem_text: PEM encoded private key.
        passphrase: Passphrase of an encrypted key.

    Returns:
        Parsed private key.

    Raises:
        InvalidCertificateError: For malformed PEM, a wrong or missing
            passphrase, or a passphrase given for an unencrypted key.
    """
    password = passphrase.encode("utf-8") if passphrase else None
    try:
        return serialization.load_pem_private_key(pem_text.encode("utf-8"), password=password)
    except (ValueError, TypeError, UnsupportedAlgorithm) as error:
        raise InvalidCertificateError(field_name) from error
