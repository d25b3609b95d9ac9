"""Runtime configuration model for PassKit.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_MAX_CONCURRENT_READS
from core.errors import PassKitConfigError


@dataclass(frozen=True)
class PassKitConfig:
    """Validated runtime configuration.

    Attributes:
        max_concurrent_reads: Upper bound of in-flight file reads per fan-out.
        certificates_root: Base directory for relative certificate paths.
    """

    max_concurrent_reads: int
    certificates_root: Path

    @classmethod
    def from_env(cls) -> "PassKitConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            PassKitConfigError: If environment values are invalid.
        """
        max_reads_value = os.getenv(
            "PASSKIT_MAX_CONCURRENT_READS", str(DEFAULT_MAX_CONCURRENT_READS)
        )
        certificates_root_value = os.getenv("PASSKIT_CERTIFICATES_ROOT", ".")
        return cls(
            max_concurrent_reads=_parse_max_concurrent_reads(max_reads_value),
            certificates_root=Path(certificates_root_value).expanduser().resolve(),
        )


def _parse_max_concurrent_reads(raw_value: str) -> int:
    """Parse the read concurrency environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive integer.

    Raises:
        PassKitConfigError: If value is not a positive integer.
    """
    try:
        parsed_value = int(raw_value)
    except ValueError as error:
        raise PassKitConfigError(
            "Invalid PASSKIT_MAX_CONCURRENT_READS value: "
            f"expected integer, got '{raw_value}'. "
            "Set PASSKIT_MAX_CONCURRENT_READS to a numeric value."
        ) from error
    if parsed_value < 1:
        raise PassKitConfigError(
            "Invalid PASSKIT_MAX_CONCURRENT_READS value: "
            f"expected at least 1, got {parsed_value}."
        )
    return parsed_value
