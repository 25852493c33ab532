from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
from pydantic import BaseModel

_DUMP_OPTIONS = orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE | orjson.OPT_NON_STR_KEYS


def load_json(path: Path) -> Any:
    return orjson.loads(path.read_bytes())


def _encode_extra(value: Any) -> Any:
    # Events read from files are pydantic records; anything else is a caller bug.
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Cannot serialize {type(value).__name__} to JSON")


def dump_json_bytes(payload: Any) -> bytes:
    return orjson.dumps(payload, default=_encode_extra, option=_DUMP_OPTIONS)


def write_json_atomic(path: Path, payload: Any) -> None:
    """Write ``payload`` next to ``path`` first so readers never see a partial file."""
    data = dump_json_bytes(payload)
    path.parent.mkdir(parents=True, exist_ok=True)
    staging = path.with_name(f".{path.name}.partial")
    staging.write_bytes(data)
    staging.replace(path)
