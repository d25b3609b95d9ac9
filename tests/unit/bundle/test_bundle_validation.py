"""Unit tests for bundle structural gates."""

from __future__ import annotations

import pytest

from bundle.bundle_validation import ensure_model_initialized, ensure_required_files
from core.errors import MissingRequiredBundleFileError, ModelUninitializedError


def test_ensure_model_initialized_rejects_empty_set() -> None:
    """An empty candidate set should be uninitialized."""
    with pytest.raises(ModelUninitializedError) as error_info:
        ensure_model_initialized([], "Model")

    assert error_info.value.model_name == "Model"


def test_ensure_model_initialized_requires_icon() -> None:
    """A candidate set without icon names should be uninitialized."""
    with pytest.raises(ModelUninitializedError, match="Buffers"):
        ensure_model_initialized(["pass.json", "logo.png"], "Buffers")


def test_ensure_required_files_accepts_complete_bundle() -> None:
    """A bundle with pass.json and an icon should pass."""
    ensure_required_files({"pass.json": b"{}", "ICON.png": b"png"})


def test_ensure_required_files_reports_empty_pass_json() -> None:
    """A zero-length pass.json should count as missing."""
    with pytest.raises(MissingRequiredBundleFileError) as error_info:
        ensure_required_files({"pass.json": b"", "icon.png": b"png"})

    assert error_info.value.missing_files == ("pass.json",)


def test_ensure_required_files_reports_empty_icon() -> None:
    """Zero-length icons should not satisfy the icon requirement."""
    with pytest.raises(MissingRequiredBundleFileError) as error_info:
        ensure_required_files({"pass.json": b"{}", "icon.png": b""})

    assert error_info.value.missing_files == ("icon",)
