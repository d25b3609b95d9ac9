"""Model source normalization.

This module turns a directory or in-memory model source into a
``PartitionedBundle``. Base bundle reads are fail-fast while locale
file reads are best-effort: a missing translation never aborts a build.
"""

from __future__ import annotations

import asyncio
from enum import Enum
import os
from pathlib import Path
from typing import Literal, Mapping, Union

from bundle.bundle_validation import ensure_model_initialized, ensure_required_files
from bundle.file_filters import (
    filter_candidate_names,
    is_hidden,
    is_locale_folder,
    locale_folder_name,
    remove_hidden,
    split_locale_path,
)
from core.config import PassKitConfig
from core.constants import BUFFER_SOURCE_LABEL, BUNDLE_EXTENSION
from core.errors import ModelFileNotFoundError, ModelFileOpenError, ModelNotValidError
from core.logging_config import get_logger
from core.storage import BundleStorage, LocalStorage
from core.task_fanout import gather_or_cancel
from core.types import BufferSource, BundleSource, DirectorySource, PartitionedBundle

_LOGGER = get_logger(__name__)


class ReadStatus(Enum):
    """Marker for a locale file that could not be read."""

    ABSENT = "absent"


ReadOutcome = Union[bytes, Literal[ReadStatus.ABSENT]]


async def normalize_bundle_source(
    source: BundleSource,
    storage: BundleStorage | None = None,
    config: PassKitConfig | None = None,
) -> PartitionedBundle:
    """Read and partition a model source.

    Args:
        source: Directory or buffer source.
        storage: Storage used for directory sources, local files by default.
        config: Runtime config, read from environment when omitted.

    Returns:
        Partitioned bundle that passed every structural gate.

    Raises:
        PassKitModelError: For unreadable, uninitialized or incomplete models.
    """
    if source.kind == "buffers":
        partitioned = partition_buffer_source(source)
    elif source.kind == "directory":
        runtime_config = config or PassKitConfig.from_env()
        reader = _BundleReader(storage or LocalStorage(), runtime_config.max_concurrent_reads)
        partitioned = await read_directory_source(source, reader)
    else:
        raise ModelNotValidError(f"Unsupported model source kind '{source.kind}'.")
    _LOGGER.info(
        "bundle_normalized",
        source_kind=source.kind,
        bundle_files=len(partitioned.bundle),
        locale_folders=sorted(partitioned.l10n_bundle),
    )
    return partitioned


def resolve_model_path(model_path: str) -> Path:
    """Make a model path absolute, appending ``.pass`` when it has no extension.

    The extension check uses the given path and symlinks are not followed,
    so a ``Model`` link is read as ``Model.pass`` rather than its target.
    """
    absolute_path = Path(os.path.abspath(os.path.expanduser(model_path)))
    if Path(model_path).suffix:
        return absolute_path
    return absolute_path.with_name(absolute_path.name + BUNDLE_EXTENSION)


async def read_directory_source(
    source: DirectorySource,
    reader: _BundleReader,
) -> PartitionedBundle:
    """Read a model directory into a partitioned bundle.

    Args:
        source: Directory source.
        reader: Bounded storage reader.

    Returns:
        Partitioned bundle.
    """
    model_path = resolve_model_path(source.path)
    candidate_names = filter_candidate_names(await reader.list_entries(model_path))
    ensure_model_initialized(candidate_names, model_path.stem)
    base_names = [name for name in candidate_names if not is_locale_folder(name)]
    l10n_folders = [name for name in candidate_names if is_locale_folder(name)]
    base_contents = await gather_or_cancel(
        *(reader.read_required(model_path / name) for name in base_names)
    )
    bundle = dict(zip(base_names, base_contents))
    folder_contents = await gather_or_cancel(
        *(_read_locale_folder(reader, model_path / folder) for folder in l10n_folders)
    )
    l10n_bundle = dict(zip(l10n_folders, folder_contents))
    ensure_required_files(bundle)
    return PartitionedBundle(bundle=bundle, l10n_bundle=l10n_bundle)


def partition_buffer_source(source: BufferSource) -> PartitionedBundle:
    """Partition an in-memory file map without touching storage.

    Args:
        source: Buffer source with ``name -> bytes`` entries. Locale files
            use ``fr.lproj/pass.strings`` keys; a ``fr.lproj`` key may also
            map to a nested ``name -> bytes`` mapping.

    Returns:
        Partitioned bundle.

    Raises:
        ModelUninitializedError: If no usable entries or no icon remain.
        ModelNotValidError: If a value is not bytes-like, or a bare locale
            folder key holds bytes instead of folder files.
    """
    candidate_names = filter_candidate_names(source.files)
    ensure_model_initialized(candidate_names, BUFFER_SOURCE_LABEL)
    bundle: dict[str, bytes] = {}
    l10n_bundle: dict[str, dict[str, bytes]] = {}
    for name in candidate_names:
        content = source.files[name]
        folder_name = locale_folder_name(name)
        if folder_name is None:
            bundle[name] = _as_bytes(name, content)
            continue
        folder_files = l10n_bundle.setdefault(folder_name, {})
        locale_path = split_locale_path(name)
        if locale_path is not None:
            _add_locale_file(folder_files, locale_path[1], content)
        elif isinstance(content, Mapping):
            for file_name, file_content in content.items():
                if not is_hidden(file_name):
                    _add_locale_file(folder_files, file_name, file_content)
        else:
            raise ModelNotValidError(
                f"Invalid locale folder entry '{name}': expected '{folder_name}/<file>' keys "
                "or a mapping of file names to bytes."
            )
    ensure_required_files(bundle)
    return PartitionedBundle(bundle=bundle, l10n_bundle=l10n_bundle)


async def _read_locale_folder(reader: _BundleReader, folder_path: Path) -> dict[str, bytes]:
    file_names = sorted(remove_hidden(await reader.list_entries(folder_path)))
    outcomes = await gather_or_cancel(
        *(reader.read_optional(folder_path / file_name) for file_name in file_names)
    )
    return {
        file_name: outcome
        for file_name, outcome in zip(file_names, outcomes)
        if outcome is not ReadStatus.ABSENT and len(outcome) > 0
    }


def _add_locale_file(folder_files: dict[str, bytes], file_name: str, content: object) -> None:
    file_content = _as_bytes(file_name, content)
    if file_content:
        folder_files[file_name] = file_content


def _as_bytes(name: str, content: object) -> bytes:
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content)
    raise ModelNotValidError(
        f"Invalid model file '{name}': expected bytes content, got {type(content).__name__}."
    )


class _BundleReader:
    """Storage wrapper that bounds in-flight reads and translates OS errors."""

    def __init__(self, storage: BundleStorage, max_concurrent_reads: int) -> None:
        self._storage = storage
        self._semaphore = asyncio.Semaphore(max_concurrent_reads)

    async def list_entries(self, folder_path: Path) -> list[str]:
        try:
            async with self._semaphore:
                return await self._storage.list_entries(folder_path)
        except OSError as error:
            raise ModelFileNotFoundError(folder_path.name) from error

    async def read_required(self, file_path: Path) -> bytes:
        try:
            async with self._semaphore:
                return await self._storage.read_bytes(file_path)
        except OSError as error:
            raise ModelFileOpenError(str(file_path)) from error

    async def read_optional(self, file_path: Path) -> ReadOutcome:
        try:
            async with self._semaphore:
                return await self._storage.read_bytes(file_path)
        except OSError as error:
            _LOGGER.debug("l10n_file_skipped", path=str(file_path), reason=type(error).__name__)
            return ReadStatus.ABSENT
