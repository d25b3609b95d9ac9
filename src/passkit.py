"""Public SDK surface for PassKit.

This module provides a stable import path for pass input assembly.
It re-exports the entry point, the pipelines and typed models.
"""

from __future__ import annotations

from bundle.source_normalizer import normalize_bundle_source
from core.config import PassKitConfig
from core.errors import (
    InitializationFailedError,
    InvalidCertificateError,
    InvalidCertificatePathError,
    MissingRequiredBundleFileError,
    ModelFileNotFoundError,
    ModelFileOpenError,
    ModelNotValidError,
    ModelUninitializedError,
    NoCertificatesProvidedError,
    NoOptionsProvidedError,
    PassKitError,
)
from core.storage import BundleStorage, LocalStorage
from core.types import (
    BufferSource,
    CertificateSpec,
    DirectorySource,
    PartitionedBundle,
    PassDraft,
    PassOptions,
    ResolvedTrustMaterial,
    SignerKeySpec,
    bundle_source_from_value,
)
from factory.pass_factory import create_pass, create_pass_sync
from trust.certificate_schema import load_certificate_spec, validate_certificate_spec
from trust.trust_resolver import resolve_trust_material

__all__ = [
    "BufferSource",
    "BundleStorage",
    "CertificateSpec",
    "DirectorySource",
    "InitializationFailedError",
    "InvalidCertificateError",
    "InvalidCertificatePathError",
    "LocalStorage",
    "MissingRequiredBundleFileError",
    "ModelFileNotFoundError",
    "ModelFileOpenError",
    "ModelNotValidError",
    "ModelUninitializedError",
    "NoCertificatesProvidedError",
    "NoOptionsProvidedError",
    "PartitionedBundle",
    "PassDraft",
    "PassKitConfig",
    "PassKitError",
    "PassOptions",
    "ResolvedTrustMaterial",
    "SignerKeySpec",
    "bundle_source_from_value",
    "create_pass",
    "create_pass_sync",
    "load_certificate_spec",
    "normalize_bundle_source",
    "resolve_trust_material",
    "validate_certificate_spec",
]
