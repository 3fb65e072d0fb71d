"""End-to-end Input Monitoring usage-description check.

Runs the bundle locator, then the manifest check on the resolved bundle.
A resolution failure ends the run before the manifest is inspected.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hermes_check.bundle import BundleOpener, open_bundle
from hermes_check.locator import (
    BundleResolutionError,
    candidate_paths,
    current_executable,
    locate_bundle,
)
from hermes_check.manifest import INPUT_MONITORING_USAGE_KEY, validate_usage_description

STAGE_RESOLUTION = "resolution"
STAGE_VALIDATION = "validation"


@dataclass(frozen=True, slots=True)
class CheckVerdict:
    """Outcome of one check run."""

    ok: bool
    stage: str
    message: str | None
    bundle_path: Path | None = None
    candidates: tuple[Path, ...] = field(default_factory=tuple)
    key: str = INPUT_MONITORING_USAGE_KEY
    value: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "status": "pass" if self.ok else "fail",
            "ok": self.ok,
            "stage": self.stage,
            "message": self.message,
            "key": self.key,
            "value": self.value,
            "bundle_path": str(self.bundle_path) if self.bundle_path is not None else None,
            "candidates": [str(p) for p in self.candidates],
        }


def run_check(
    environ: Mapping[str, str] | None = None,
    executable: Path | None = None,
    *,
    opener: BundleOpener = open_bundle,
) -> CheckVerdict:
    env = os.environ if environ is None else environ
    exe = current_executable() if executable is None else Path(executable)
    try:
        bundle = locate_bundle(env, exe, opener=opener)
    except BundleResolutionError as exc:
        return CheckVerdict(
            ok=False,
            stage=STAGE_RESOLUTION,
            message=str(exc),
            bundle_path=exc.selected,
            candidates=exc.candidates,
        )

    result = validate_usage_description(bundle)
    return CheckVerdict(
        ok=result.ok,
        stage=STAGE_VALIDATION,
        message=result.message,
        bundle_path=bundle.path,
        candidates=tuple(candidate_paths(env, exe)),
        key=result.key,
        value=result.value,
    )
