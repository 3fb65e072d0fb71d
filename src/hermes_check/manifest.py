"""Input Monitoring usage-description check for an opened bundle."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from hermes_check.bundle import AppBundle

INPUT_MONITORING_USAGE_KEY = "NSInputMonitoringUsageDescription"


@dataclass(frozen=True, slots=True)
class ManifestCheck:
    ok: bool
    key: str
    value: str | None
    message: str | None = None


def missing_key_message(key: str) -> str:
    return f"Info.plist must define {key}."


def usage_description(info: Mapping[str, Any], key: str = INPUT_MONITORING_USAGE_KEY) -> str | None:
    """Return the manifest value at ``key`` when it is a string, else None."""
    value = info.get(key)
    return value if isinstance(value, str) else None


def validate_usage_description(
    bundle: AppBundle,
    key: str = INPUT_MONITORING_USAGE_KEY,
) -> ManifestCheck:
    # Absent, non-string and empty all fail the same way; whitespace passes.
    value = usage_description(bundle.info, key)
    if value:
        return ManifestCheck(ok=True, key=key, value=value)
    return ManifestCheck(ok=False, key=key, value=value, message=missing_key_message(key))


def require_usage_description(
    bundle: AppBundle,
    key: str = INPUT_MONITORING_USAGE_KEY,
) -> str:
    """Assert-style variant for harnesses that report failures by raising."""
    result = validate_usage_description(bundle, key)
    if not result.ok or result.value is None:
        raise AssertionError(result.message)
    return result.value
