"""PassKit exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability, and
errors that point at an offending file or field keep it as an attribute.
"""

from __future__ import annotations


class PassKitError(Exception):
    """Base exception for all PassKit failures."""


class PassKitConfigError(PassKitError):
    """Raised for invalid runtime configuration."""


class NoOptionsProvidedError(PassKitError):
    """Raised when pass creation is called without any options."""

    def __init__(self) -> None:
        super().__init__(
            "Cannot create a pass without options. "
            "Provide at least 'model' and 'certificates'."
        )


class PassKitModelError(PassKitError):
    """Base class for bundle source and model failures."""


class ModelNotValidError(PassKitModelError):
    """Raised when the model is neither a directory path nor a file mapping."""


class ModelUninitializedError(PassKitModelError):
    """Raised when a model has no files or no icon to start from."""

    def __init__(self, model_name: str) -> None:
        self.model_name = model_name
        super().__init__(
            f"Model '{model_name}' is uninitialized: it is empty or has no icon file. "
            "Add an icon (e.g. icon.png) and retry."
        )


class ModelFileNotFoundError(PassKitModelError):
    """Raised when a model directory or locale folder cannot be listed."""

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(
            f"Model folder '{file_name}' could not be listed. "
            "Check that it exists and is a readable directory."
        )


class ModelFileOpenError(PassKitModelError):
    """Raised when a base bundle file cannot be opened or read."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Failed to open model file at {path}. Check file permissions and retry.")


class MissingRequiredBundleFileError(PassKitModelError):
    """Raised when pass.json or an icon is missing after partitioning."""

    def __init__(self, missing_files: tuple[str, ...]) -> None:
        self.missing_files = missing_files
        super().__init__(
            f"Model bundle is missing required non-empty files: {', '.join(missing_files)}."
        )


class PassKitCertificateError(PassKitError):
    """Base class for trust material failures."""


class NoCertificatesProvidedError(PassKitCertificateError):
    """Raised when the certificate spec is empty or fails validation."""


class InvalidCertificatePathError(PassKitCertificateError):
    """Raised when a certificate or key file cannot be read."""

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(
            f"Certificate file '{file_name}' could not be read. "
            "Check the path and file permissions."
        )


class InvalidCertificateError(PassKitCertificateError):
    """Raised when certificate or key text cannot be parsed."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(
            f"Invalid certificate material for '{field_name}'. "
            "Provide valid PEM content and, for encrypted keys, the right passphrase."
        )


class InitializationFailedError(PassKitError):
    """Raised when pass initialization fails for any reason."""

    def __init__(self) -> None:
        super().__init__(
            "Pass initialization failed. Check the logs for the underlying model "
            "or certificate error."
        )
