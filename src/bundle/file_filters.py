"""Name filters for model bundle entries.

This module decides which entry names take part in a bundle and which
of them are localization folders.
"""

from __future__ import annotations

import re
from typing import Iterable

from core.constants import (
    GENERATED_ARTIFACT_PATTERN,
    HIDDEN_NAME_PREFIX,
    ICON_NAME_MARKER,
    LOCALE_FOLDER_SUFFIX,
)

_GENERATED_ARTIFACT_RE = re.compile(GENERATED_ARTIFACT_PATTERN, re.IGNORECASE)


def remove_hidden(names: Iterable[str]) -> list[str]:
    """Drop names that start with a dot, keeping input order."""
    return [name for name in names if not is_hidden(name)]


def is_hidden(name: str) -> bool:
    """Return whether any path segment of a name is hidden."""
    return any(segment.startswith(HIDDEN_NAME_PREFIX) for segment in _segments(name))


def is_generated_artifact(name: str) -> bool:
    """Return whether a name looks like a previously generated manifest or signature."""
    return _GENERATED_ARTIFACT_RE.search(name) is not None


def filter_candidate_names(names: Iterable[str]) -> list[str]:
    """Apply hidden and generated-artifact filters to entry names.

    Args:
        names: Raw directory listing or file map keys.

    Returns:
        Names eligible for the bundle, sorted for deterministic output.
    """
    return sorted(name for name in remove_hidden(names) if not is_generated_artifact(name))


def has_icon_name(names: Iterable[str]) -> bool:
    """Return whether any name contains the icon marker, ignoring case."""
    return any(ICON_NAME_MARKER in name.lower() for name in names)


def is_locale_folder(name: str) -> bool:
    """Return whether a path segment names a localization folder.

    Only a segment ending with ``.lproj`` counts, so ``my.lproj-notes.txt``
    stays in the base bundle.
    """
    return name.endswith(LOCALE_FOLDER_SUFFIX) and len(name) > len(LOCALE_FOLDER_SUFFIX)


def split_locale_path(name: str) -> tuple[str, str] | None:
    """Split ``fr.lproj/pass.strings`` into folder and relative file name.

    Args:
        name: File map key.

    Returns:
        Locale folder and inner name, or None for base bundle names.
    """
    segments = _segments(name)
    if len(segments) < 2 or not is_locale_folder(segments[0]):
        return None
    return segments[0], "/".join(segments[1:])


def locale_folder_name(name: str) -> str | None:
    """Return the locale folder a key belongs to, or None for base bundle names."""
    segments = _segments(name)
    if segments and is_locale_folder(segments[0]):
        return segments[0]
    return None


def _segments(name: str) -> list[str]:
    return [segment for segment in name.replace("\\", "/").split("/") if segment]
