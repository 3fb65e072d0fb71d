"""JSON output helpers for check reports, backed by orjson."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import orjson


def dumps_json(obj: Any, *, pretty: bool = True) -> bytes:
    opts = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS if pretty else orjson.OPT_SORT_KEYS
    return orjson.dumps(obj, option=opts, default=str)


def dump_json(obj: Any, *, pretty: bool = True) -> None:
    """Write ``obj`` as JSON to stdout followed by a newline."""
    sys.stdout.buffer.write(dumps_json(obj, pretty=pretty))
    sys.stdout.buffer.write(b"\n")
    sys.stdout.buffer.flush()


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dumps_json(obj, pretty=pretty) + b"\n")


def load_json(path: Path) -> Any:
    return orjson.loads(path.read_bytes())
