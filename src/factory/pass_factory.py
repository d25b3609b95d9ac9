"""Pass creation orchestration.

Both input pipelines run concurrently and any failure is surfaced as a
single ``InitializationFailedError`` chained to its cause.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Mapping, cast

from bundle.source_normalizer import normalize_bundle_source
from core.config import PassKitConfig
from core.errors import InitializationFailedError, NoOptionsProvidedError
from core.logging_config import get_logger
from core.storage import BundleStorage
from core.task_fanout import gather_or_cancel
from core.types import PassDraft, PassOptions, bundle_source_from_value
from trust.trust_resolver import resolve_trust_material

_LOGGER = get_logger(__name__)

PassBuilder = Callable[[PassDraft], Any]


async def create_pass(
    options: PassOptions | Mapping[str, object] | None,
    storage: BundleStorage | None = None,
    config: PassKitConfig | None = None,
    builder: PassBuilder | None = None,
) -> Any:
    """Validate pass inputs and build a pass from them.

    Args:
        options: Typed options or a mapping with ``model``, ``certificates``
            and optional ``overrides``.
        storage: Storage shared by both pipelines, local files by default.
        config: Runtime config, read from environment when omitted.
        builder: Pass construction callable, sync or async. Defaults to
            returning the ``PassDraft`` itself.

    Returns:
        Whatever the builder returns.

    Raises:
        NoOptionsProvidedError: If options are missing or empty.
        InitializationFailedError: If any step fails.
    """
    pass_options = _coerce_options(options)
    try:
        runtime_config = config or PassKitConfig.from_env()
        source = bundle_source_from_value(pass_options.model)
        model, certificates = await gather_or_cancel(
            normalize_bundle_source(source, storage, runtime_config),
            resolve_trust_material(pass_options.certificates, storage, runtime_config),
        )
        draft = PassDraft(model=model, certificates=certificates, overrides=pass_options.overrides)
        built_pass = (builder or _return_draft)(draft)
        if inspect.isawaitable(built_pass):
            built_pass = await built_pass
    except Exception as error:
        _LOGGER.error(
            "pass_initialization_failed",
            error_type=type(error).__name__,
            error=str(error),
        )
        raise InitializationFailedError() from error
    _LOGGER.info(
        "pass_initialized",
        bundle_files=len(model.bundle),
        locale_folders=len(model.l10n_bundle),
    )
    return built_pass


def create_pass_sync(
    options: PassOptions | Mapping[str, object] | None,
    storage: BundleStorage | None = None,
    config: PassKitConfig | None = None,
    builder: PassBuilder | None = None,
) -> Any:
    """Run ``create_pass`` on a fresh event loop."""
    return asyncio.run(create_pass(options, storage=storage, config=config, builder=builder))


def _coerce_options(options: object) -> PassOptions:
    if isinstance(options, PassOptions):
        return options
    if not isinstance(options, Mapping) or not options:
        raise NoOptionsProvidedError()
    return PassOptions(
        model=options.get("model"),
        certificates=options.get("certificates"),
        overrides=cast("Mapping[str, object] | None", options.get("overrides")),
    )


def _return_draft(draft: PassDraft) -> PassDraft:
    return draft
