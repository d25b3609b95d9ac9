"""Trust material resolution.

This module turns a certificate spec into parsed WWDR certificate,
signer certificate and signer key. Values that look like file paths are
read concurrently through storage; literal PEM text is used as is.
"""

from __future__ import annotations

from pathlib import Path

from core.config import PassKitConfig
from core.constants import PEM_BEGIN_MARKER
from core.errors import InvalidCertificateError, InvalidCertificatePathError
from core.logging_config import get_logger
from core.storage import BundleStorage, LocalStorage
from core.task_fanout import gather_or_cancel
from core.types import ResolvedTrustMaterial, SignerKeySpec
from trust.certificate_schema import require_certificate_spec
from trust.pem_parsing import parse_certificate, parse_private_key

_LOGGER = get_logger(__name__)


async def resolve_trust_material(
    spec: object,
    storage: BundleStorage | None = None,
    config: PassKitConfig | None = None,
) -> ResolvedTrustMaterial:
    """Resolve and parse certificates and signer key.

    Args:
        spec: ``CertificateSpec`` or raw certificate mapping.
        storage: Storage used for path values, local files by default.
        config: Runtime config, read from environment when omitted.

    Returns:
        Parsed trust material.

    Raises:
        NoCertificatesProvidedError: If the spec is empty or invalid.
        InvalidCertificatePathError: If a certificate file cannot be read.
        InvalidCertificateError: If a value cannot be parsed.
    """
    certificate_spec = require_certificate_spec(spec)
    key_content, passphrase = normalize_signer_key(certificate_spec.signer_key)
    runtime_config = config or PassKitConfig.from_env()
    documents = {
        "wwdr": certificate_spec.wwdr,
        "signerCert": certificate_spec.signer_cert,
        "signerKey": key_content,
    }
    resolver = _DocumentResolver(storage or LocalStorage(), runtime_config.certificates_root)
    texts = await gather_or_cancel(
        *(resolver.resolve(field_name, value) for field_name, value in documents.items())
    )
    resolved_texts = dict(zip(documents, texts))
    material = ResolvedTrustMaterial(
        wwdr=parse_certificate("wwdr", resolved_texts["wwdr"]),
        signer_cert=parse_certificate("signerCert", resolved_texts["signerCert"]),
        signer_key=parse_private_key("signerKey", resolved_texts["signerKey"], passphrase),
    )
    _LOGGER.info(
        "trust_material_resolved",
        files_read=sorted(name for name, value in documents.items() if is_document_path(value)),
        encrypted_key=bool(passphrase),
    )
    return material


def normalize_signer_key(signer_key: str | SignerKeySpec) -> tuple[str, str | None]:
    """Split a signer key spec into key content/path and passphrase."""
    if isinstance(signer_key, SignerKeySpec):
        return signer_key.key_file, signer_key.passphrase
    return signer_key, None


def is_document_path(value: str) -> bool:
    """Return whether a value is a file path rather than literal PEM text."""
    if PEM_BEGIN_MARKER in value:
        return False
    return bool(Path(value.strip()).suffix)


class _DocumentResolver:
    """Read path values as UTF-8 text, translating read failures."""

    def __init__(self, storage: BundleStorage, certificates_root: Path) -> None:
        self._storage = storage
        self._certificates_root = certificates_root

    async def resolve(self, field_name: str, value: str) -> str:
        if not is_document_path(value):
            return value
        document_path = self._certificates_root / Path(value.strip()).expanduser()
        try:
            return await self._storage.read_text(document_path)
        except OSError as error:
            raise InvalidCertificatePathError(document_path.name) from error
        except UnicodeDecodeError as error:
            raise InvalidCertificateError(field_name) from error
