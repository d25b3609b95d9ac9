"""Core constants used across PassKit modules.

This module centralizes bundle naming conventions and runtime defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

BUNDLE_EXTENSION = ".pass"
LOCALE_FOLDER_SUFFIX = ".lproj"
PASS_JSON_FILE_NAME = "pass.json"
ICON_NAME_MARKER = "icon"
GENERATED_ARTIFACT_PATTERN = r"(manifest|signature)"
HIDDEN_NAME_PREFIX = "."
BUFFER_SOURCE_LABEL = "Buffers"
DEFAULT_MAX_CONCURRENT_READS = 64
CERTIFICATE_FIELD_NAMES = ("wwdr", "signerCert", "signerKey")
PEM_BEGIN_MARKER = "-----BEGIN"
