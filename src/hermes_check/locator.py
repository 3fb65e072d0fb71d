"""Resolve the built Hermes.app bundle from the current execution context.

Candidates, in priority order:
- ``$BUILT_PRODUCTS_DIR/$FULL_PRODUCT_NAME`` when a build pipeline exports both
- ``Hermes.app`` beside the bundle (or binary) that is currently running

The first candidate that exists is the only one opened.
"""
from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from hermes_check.bundle import AppBundle, BundleOpener, BundleOpenError, open_bundle

log = logging.getLogger(__name__)

TARGET_APP_NAME = "Hermes.app"
BUILT_PRODUCTS_DIR_VAR = "BUILT_PRODUCTS_DIR"
FULL_PRODUCT_NAME_VAR = "FULL_PRODUCT_NAME"
BUNDLE_SUFFIXES = frozenset({".app", ".xctest", ".bundle", ".framework", ".appex", ".plugin"})

NOT_FOUND_MESSAGE = (
    f"Unable to locate {TARGET_APP_NAME} to inspect Info.plist "
    "for Input Monitoring usage description."
)


class BundleResolutionError(LookupError):
    """Raised when no candidate bundle exists or the selected one cannot be opened."""

    def __init__(
        self,
        message: str,
        *,
        candidates: Sequence[Path] = (),
        selected: Path | None = None,
    ) -> None:
        super().__init__(message)
        self.candidates = tuple(candidates)
        self.selected = selected


def env_candidate(environ: Mapping[str, str]) -> Path | None:
    products_dir = str(environ.get(BUILT_PRODUCTS_DIR_VAR) or "")
    product_name = str(environ.get(FULL_PRODUCT_NAME_VAR) or "")
    if not products_dir or not product_name:
        return None
    return Path(products_dir) / product_name


def current_executable() -> Path:
    """Return the running binary: the frozen executable, else the launched script."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable)
    return Path(sys.argv[0] or sys.executable)


def main_bundle_path(executable: Path) -> Path:
    """Return the nearest enclosing bundle of ``executable``, or the executable itself."""
    resolved = Path(os.path.abspath(executable))
    for ancestor in (resolved, *resolved.parents):
        if ancestor.suffix in BUNDLE_SUFFIXES:
            return ancestor
    return resolved


def sibling_candidate(executable: Path) -> Path:
    return main_bundle_path(executable).parent / TARGET_APP_NAME


def candidate_paths(environ: Mapping[str, str], executable: Path) -> list[Path]:
    """Return candidate bundle locations, highest priority first."""
    candidates: list[Path] = []
    from_env = env_candidate(environ)
    if from_env is not None:
        candidates.append(from_env)
    candidates.append(sibling_candidate(executable))
    return candidates


def first_existing(
    candidates: Sequence[Path],
    *,
    exists: Callable[[Path], bool] = Path.exists,
) -> Path | None:
    for candidate in candidates:
        if exists(candidate):
            log.debug("Candidate exists: %s", candidate)
            return candidate
        log.debug("Candidate missing: %s", candidate)
    return None


def locate_bundle(
    environ: Mapping[str, str] | None = None,
    executable: Path | None = None,
    *,
    opener: BundleOpener = open_bundle,
) -> AppBundle:
    """Open the highest-priority existing candidate.

    Raises ``BundleResolutionError`` when nothing exists or the selected
    candidate fails to open. Later candidates are not tried after an open
    failure.
    """
    env = os.environ if environ is None else environ
    exe = current_executable() if executable is None else Path(executable)
    candidates = candidate_paths(env, exe)
    selected = first_existing(candidates)
    if selected is None:
        raise BundleResolutionError(NOT_FOUND_MESSAGE, candidates=candidates)
    try:
        bundle = opener(selected)
    except BundleOpenError as exc:
        log.warning("Failed to open bundle %s: %s", selected, exc)
        raise BundleResolutionError(
            NOT_FOUND_MESSAGE, candidates=candidates, selected=selected,
        ) from exc
    log.info("Resolved bundle %s", bundle.path)
    return bundle
