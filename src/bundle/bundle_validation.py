"""Structural gates for model bundles.

This module holds the two checks every model passes through: the
initialization gate on raw entry names and the final gate on the
partitioned bundle contents.
"""

from __future__ import annotations

from typing import Collection, Mapping

from bundle.file_filters import has_icon_name
from core.constants import ICON_NAME_MARKER, PASS_JSON_FILE_NAME
from core.errors import MissingRequiredBundleFileError, ModelUninitializedError


def ensure_model_initialized(candidate_names: Collection[str], model_name: str) -> None:
    """Require a non-empty candidate set with at least one icon name.

    Args:
        candidate_names: Filtered entry names.
        model_name: Identifying label for error messages.

    Raises:
        ModelUninitializedError: If the set is empty or has no icon.
    """
    if not candidate_names or not has_icon_name(candidate_names):
        raise ModelUninitializedError(model_name)


def ensure_required_files(bundle: Mapping[str, bytes]) -> None:
    """Require non-empty ``pass.json`` and icon files in the base bundle.

    Raises:
        MissingRequiredBundleFileError: Naming every missing requirement.
    """
    missing_files: list[str] = []
    if not bundle.get(PASS_JSON_FILE_NAME):
        missing_files.append(PASS_JSON_FILE_NAME)
    has_icon = any(
        ICON_NAME_MARKER in name.lower() and len(content) > 0
        for name, content in bundle.items()
    )
    if not has_icon:
        missing_files.append(ICON_NAME_MARKER)
    if missing_files:
        raise MissingRequiredBundleFileError(tuple(missing_files))
