"""Shared typed models.

This module defines immutable data models used by the bundle, trust
and factory layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any, Literal, Mapping, Union

from core.errors import ModelNotValidError

BundleUnit = Mapping[str, bytes]
RawFileSet = Mapping[str, bytes]


@dataclass(frozen=True)
class DirectorySource:
    """Bundle source backed by a model directory.

    Attributes:
        path: Directory path, with or without the ``.pass`` extension.
    """

    path: str
    kind: Literal["directory"] = field(default="directory", init=False)


@dataclass(frozen=True)
class BufferSource:
    """Bundle source backed by an in-memory file map.

    Attributes:
        files: Relative file name to content. Locale files use
            ``<code>.lproj/<name>`` keys.
    """

    files: Mapping[str, bytes]
    kind: Literal["buffers"] = field(default="buffers", init=False)


BundleSource = Union[DirectorySource, BufferSource]


@dataclass(frozen=True)
class PartitionedBundle:
    """Model files split into base bundle and localization folders.

    Attributes:
        bundle: Base bundle file name to content.
        l10n_bundle: Locale folder name (``fr.lproj``) to its files.
    """

    bundle: Mapping[str, bytes]
    l10n_bundle: Mapping[str, Mapping[str, bytes]]


@dataclass(frozen=True)
class SignerKeySpec:
    """Signer key location with optional passphrase.

    Attributes:
        key_file: PEM text or path of the private key.
        passphrase: Passphrase for an encrypted key.
    """

    key_file: str
    passphrase: str | None = None


@dataclass(frozen=True)
class CertificateSpec:
    """Caller supplied trust material, as PEM text or file paths.

    Attributes:
        wwdr: Apple WWDR root certificate.
        signer_cert: Pass type signer certificate.
        signer_key: Signer private key text/path, or a key spec.
    """

    wwdr: str
    signer_cert: str
    signer_key: str | SignerKeySpec


@dataclass(frozen=True)
class CertificateSpecValidation:
    """Structured result of certificate spec validation.

    Attributes:
        errors: Human readable validation errors, empty when valid.
        spec: Normalized spec when validation succeeded.
    """

    errors: tuple[str, ...]
    spec: CertificateSpec | None = None

    @property
    def is_valid(self) -> bool:
        """Return whether validation produced a usable spec."""
        return not self.errors and self.spec is not None


@dataclass(frozen=True)
class ResolvedTrustMaterial:
    """Parsed certificates and key ready for signing.

    Attributes:
        wwdr: Parsed WWDR certificate.
        signer_cert: Parsed signer certificate.
        signer_key: Parsed signer private key.
    """

    wwdr: Any
    signer_cert: Any
    signer_key: Any


@dataclass(frozen=True)
class PassOptions:
    """Top-level pass creation options.

    Attributes:
        model: Bundle source or raw directory path / file mapping.
        certificates: Certificate spec or raw mapping.
        overrides: Opaque pass field overrides, passed through untouched.
    """

    model: object
    certificates: object
    overrides: Mapping[str, object] | None = None


@dataclass(frozen=True)
class PassDraft:
    """Validated input handed to the pass construction step.

    Attributes:
        model: Partitioned model bundle.
        certificates: Resolved trust material.
        overrides: Opaque pass field overrides.
    """

    model: PartitionedBundle
    certificates: ResolvedTrustMaterial
    overrides: Mapping[str, object] | None = None


def bundle_source_from_value(value: object) -> BundleSource:
    """Convert raw model input into a tagged bundle source.

    Args:
        value: Existing source, directory path, or file mapping.

    Returns:
        Directory or buffer source.

    Raises:
        ModelNotValidError: If the value is empty or of an unsupported type.
    """
    if isinstance(value, (DirectorySource, BufferSource)):
        return value
    if isinstance(value, (str, os.PathLike)):
        path_value = os.fspath(value)
        if isinstance(path_value, str) and path_value:
            return DirectorySource(path=path_value)
    if isinstance(value, Mapping) and value:
        return BufferSource(files=dict(value))
    raise ModelNotValidError(
        f"Invalid model of type {type(value).__name__}: expected a model directory path "
        "or a non-empty mapping of file names to bytes."
    )
