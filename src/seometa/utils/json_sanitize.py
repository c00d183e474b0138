from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping


def json_sanitize(x: Any) -> Any:
    """
    Convert report objects and common non-JSON types into JSON-safe types.
    - dataclass instances (PageMetadata, Finding, ...) -> dict
    - datetime/date -> ISO string
    - Path -> str
    - set/frozenset/tuple -> list
    - mappings/sequences -> recursively sanitized
    - unknown objects -> str(x)
    """
    if x is None or isinstance(x, (str, int, float, bool)):
        return x

    if is_dataclass(x) and not isinstance(x, type):
        return json_sanitize(asdict(x))

    if isinstance(x, (datetime, date)):
        return x.isoformat()

    if isinstance(x, Path):
        return str(x)

    if isinstance(x, (set, frozenset)):
        return [json_sanitize(v) for v in sorted(x, key=lambda v: str(v))]

    if isinstance(x, (tuple, list)):
        return [json_sanitize(v) for v in x]

    if isinstance(x, Mapping):
        return {str(k): json_sanitize(v) for k, v in x.items()}

    return str(x)
