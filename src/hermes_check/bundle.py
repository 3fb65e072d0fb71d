"""Application bundle handle and the plist-backed opener.

A bundle is a directory whose manifest (``Info.plist``) holds key/value
declarations. macOS apps keep it under ``Contents/``; shallow bundles keep it
at the top level. Both XML and binary property lists are read via ``plistlib``.
"""
from __future__ import annotations

import logging
import plistlib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol
from xml.parsers.expat import ExpatError

log = logging.getLogger(__name__)

INFO_PLIST_NAME = "Info.plist"
MANIFEST_LOCATIONS: tuple[tuple[str, ...], ...] = (
    ("Contents", INFO_PLIST_NAME),
    (INFO_PLIST_NAME,),
)


class BundleOpenError(OSError):
    """Raised when a path cannot be opened as an application bundle."""


@dataclass(frozen=True, slots=True)
class AppBundle:
    """An opened bundle: its location plus the parsed manifest dictionary."""

    path: Path
    info: Mapping[str, Any] = field(default_factory=dict)
    manifest_path: Path | None = None

    def object_for_info_key(self, key: str) -> Any:
        return self.info.get(key)


class BundleOpener(Protocol):
    def __call__(self, path: Path) -> AppBundle: ...


def manifest_path_for(bundle_path: Path) -> Path | None:
    """Return the first manifest file present inside ``bundle_path``."""
    for parts in MANIFEST_LOCATIONS:
        candidate = bundle_path.joinpath(*parts)
        if candidate.is_file():
            return candidate
    return None


def load_info_plist(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            payload = plistlib.load(f)
    except (OSError, plistlib.InvalidFileException, ExpatError, ValueError) as exc:
        raise BundleOpenError(f"Unreadable manifest {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise BundleOpenError(
            f"Expected dictionary at root of {path}, got {type(payload).__name__}"
        )
    return payload


def open_bundle(path: Path) -> AppBundle:
    """Open ``path`` as a bundle.

    A bundle directory without a manifest opens with an empty ``info`` so a
    missing key surfaces from the manifest check rather than here.
    """
    path = Path(path)
    if not path.is_dir():
        raise BundleOpenError(f"Not a bundle directory: {path}")
    manifest = manifest_path_for(path)
    if manifest is None:
        log.warning("No %s found in %s", INFO_PLIST_NAME, path)
        return AppBundle(path=path, info={}, manifest_path=None)
    info = load_info_plist(manifest)
    log.debug("Loaded %d manifest keys from %s", len(info), manifest)
    return AppBundle(path=path, info=info, manifest_path=manifest)
