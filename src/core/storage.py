"""Async read-only storage access.

This module is the only place that touches the filesystem. Bundle and
certificate readers depend on the ``BundleStorage`` protocol so tests
can swap in in-memory or failing storages.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import aiofiles
import aiofiles.os


class BundleStorage(Protocol):
    """Read-only async storage used by bundle and certificate readers."""

    async def list_entries(self, path: Path) -> list[str]:
        """Return entry names inside a directory."""
        ...

    async def read_bytes(self, path: Path) -> bytes:
        """Return file content as bytes."""
        ...

    async def read_text(self, path: Path) -> str:
        """Return file content decoded as UTF-8."""
        ...


class LocalStorage:
    """Local filesystem storage backed by aiofiles.

    All methods raise ``OSError`` subclasses unchanged; callers translate
    them into domain errors at their own boundary.
    """

    async def list_entries(self, path: Path) -> list[str]:
        return list(await aiofiles.os.listdir(path))

    async def read_bytes(self, path: Path) -> bytes:
        async with aiofiles.open(path, "rb") as handle:
            return await handle.read()

    async def read_text(self, path: Path) -> str:
        async with aiofiles.open(path, "r", encoding="utf-8") as handle:
            return await handle.read()
