"""Tests for hermes_check.manifest: NSInputMonitoringUsageDescription check."""
from __future__ import annotations

from pathlib import Path

import pytest

from hermes_check.bundle import AppBundle
from hermes_check.manifest import (
    INPUT_MONITORING_USAGE_KEY,
    require_usage_description,
    usage_description,
    validate_usage_description,
)

DESCRIPTION = "Allows Hermes to monitor global keyboard input."


def _bundle(info: dict[str, object]) -> AppBundle:
    return AppBundle(path=Path("/build/Hermes.app"), info=info)


def test_key_constant() -> None:
    assert INPUT_MONITORING_USAGE_KEY == "NSInputMonitoringUsageDescription"


def test_usage_description_only_returns_strings() -> None:
    assert usage_description({INPUT_MONITORING_USAGE_KEY: DESCRIPTION}) == DESCRIPTION
    assert usage_description({INPUT_MONITORING_USAGE_KEY: 42}) is None
    assert usage_description({}) is None


def test_present_passes() -> None:
    result = validate_usage_description(_bundle({INPUT_MONITORING_USAGE_KEY: DESCRIPTION}))
    assert result.ok is True
    assert result.value == DESCRIPTION
    assert result.message is None


def test_whitespace_only_passes() -> None:
    assert validate_usage_description(_bundle({INPUT_MONITORING_USAGE_KEY: "  "})).ok is True


@pytest.mark.parametrize(
    "info",
    [
        {},
        {INPUT_MONITORING_USAGE_KEY: ""},
        {INPUT_MONITORING_USAGE_KEY: ["not", "a", "string"]},
        {INPUT_MONITORING_USAGE_KEY: True},
        {"NSMicrophoneUsageDescription": DESCRIPTION},
    ],
)
def test_missing_empty_or_wrong_type_fails_identically(info: dict[str, object]) -> None:
    result = validate_usage_description(_bundle(info))
    assert result.ok is False
    assert result.message == "Info.plist must define NSInputMonitoringUsageDescription."


def test_require_raises_assertion() -> None:
    with pytest.raises(AssertionError, match="NSInputMonitoringUsageDescription"):
        require_usage_description(_bundle({INPUT_MONITORING_USAGE_KEY: ""}))
    assert require_usage_description(_bundle({INPUT_MONITORING_USAGE_KEY: DESCRIPTION})) == DESCRIPTION
