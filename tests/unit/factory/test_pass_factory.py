"""Unit tests for pass creation orchestration."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from core.config import PassKitConfig
from core.errors import (
    InitializationFailedError,
    ModelUninitializedError,
    NoCertificatesProvidedError,
    NoOptionsProvidedError,
)
from core.types import PassDraft, PassOptions
from factory.pass_factory import create_pass, create_pass_sync
from tests.bundle_fixtures import MemoryStorage, write_model
from tests.pem_fixtures import literal_certificate_spec


def _config(tmp_path: Path) -> PassKitConfig:
    return PassKitConfig(max_concurrent_reads=8, certificates_root=tmp_path)


def _buffer_model() -> dict[str, bytes]:
    return {
        "pass.json": b'{"formatVersion": 1}',
        "icon.png": b"png",
        "it.lproj/pass.strings": b"it",
    }


def test_create_pass_returns_draft_by_default(tmp_path: Path) -> None:
    """The default builder should return the validated draft."""
    overrides = {"serialNumber": "A-1"}
    options = {
        "model": _buffer_model(),
        "certificates": literal_certificate_spec(),
        "overrides": overrides,
    }

    draft = create_pass_sync(options, config=_config(tmp_path))

    assert isinstance(draft, PassDraft)
    assert draft.overrides is overrides
    assert draft.model.l10n_bundle == {"it.lproj": {"pass.strings": b"it"}}


def test_create_pass_reads_model_directory(tmp_path: Path) -> None:
    """Directory models should be read and handed to the builder."""
    model_dir = write_model(
        tmp_path / "Coupon.pass",
        {"pass.json": b"{}", "icon.png": b"png", "en.lproj/pass.strings": b"en"},
    )
    options = PassOptions(model=str(model_dir), certificates=literal_certificate_spec())

    draft = create_pass_sync(options, config=_config(tmp_path))

    assert sorted(draft.model.bundle) == ["icon.png", "pass.json"]


def test_create_pass_calls_async_builder(tmp_path: Path) -> None:
    """Awaitable builder results should be awaited."""

    async def build(draft: PassDraft) -> str:
        return f"pass with {len(draft.model.bundle)} files"

    options = PassOptions(model=_buffer_model(), certificates=literal_certificate_spec())

    built = asyncio.run(create_pass(options, config=_config(tmp_path), builder=build))

    assert built == "pass with 2 files"


@pytest.mark.parametrize("options", [None, {}])
def test_create_pass_rejects_missing_options(options: object, tmp_path: Path) -> None:
    """Empty options should fail before either pipeline runs."""
    storage = MemoryStorage()

    with pytest.raises(NoOptionsProvidedError):
        create_pass_sync(options, storage=storage, config=_config(tmp_path))

    assert storage.listed_paths == []


def test_create_pass_wraps_model_errors(tmp_path: Path) -> None:
    """Model failures should surface as InitializationFailedError."""
    options = {"model": {"pass.json": b"{}"}, "certificates": literal_certificate_spec()}

    with pytest.raises(InitializationFailedError) as error_info:
        create_pass_sync(options, config=_config(tmp_path))

    assert isinstance(error_info.value.__cause__, ModelUninitializedError)


def test_create_pass_wraps_certificate_errors(tmp_path: Path) -> None:
    """Certificate failures should surface as InitializationFailedError."""
    options = {"model": _buffer_model(), "certificates": {}}

    with pytest.raises(InitializationFailedError) as error_info:
        create_pass_sync(options, config=_config(tmp_path))

    assert isinstance(error_info.value.__cause__, NoCertificatesProvidedError)


def test_create_pass_wraps_builder_errors(tmp_path: Path) -> None:
    """Unexpected builder exceptions should also be wrapped."""

    def explode(draft: PassDraft) -> None:
        raise RuntimeError("builder exploded")

    options = PassOptions(model=_buffer_model(), certificates=literal_certificate_spec())

    with pytest.raises(InitializationFailedError) as error_info:
        create_pass_sync(options, config=_config(tmp_path), builder=explode)

    assert str(error_info.value.__cause__) == "builder exploded"


class _BlockingCertificateStorage:
    """Storage whose certificate reads never finish unless cancelled."""

    def __init__(self) -> None:
        self.cancelled_paths: list[Path] = []

    async def list_entries(self, path: Path) -> list[str]:
        raise FileNotFoundError(2, "No such file or directory", str(path))

    async def read_bytes(self, path: Path) -> bytes:
        raise FileNotFoundError(2, "No such file or directory", str(path))

    async def read_text(self, path: Path) -> str:
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled_paths.append(path)
            raise
        return ""


def test_create_pass_cancels_trust_reads_when_model_fails(tmp_path: Path) -> None:
    """A failing model should cancel in-flight certificate reads before raising."""
    storage = _BlockingCertificateStorage()
    certificates = literal_certificate_spec()
    certificates["wwdr"] = "wwdr.pem"
    options = {"model": {"pass.json": b"{}"}, "certificates": certificates}

    async def run() -> list[Path]:
        with pytest.raises(InitializationFailedError):
            await create_pass(options, storage=storage, config=_config(tmp_path))
        return list(storage.cancelled_paths)

    assert asyncio.run(run()) == [tmp_path / "wwdr.pem"]
