"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ENVIRONMENT_KEYS = ("PASSKIT_MAX_CONCURRENT_READS", "PASSKIT_CERTIFICATES_ROOT")


def pytest_sessionstart() -> None:
    """Add src and project root to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    for import_root in (project_root / "src", project_root):
        if str(import_root) not in sys.path:
            sys.path.insert(0, str(import_root))


@pytest.fixture(autouse=True)
def _clear_passkit_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer PASSKIT_* variables out of test runs."""
    for key in _ENVIRONMENT_KEYS:
        monkeypatch.delenv(key, raising=False)
