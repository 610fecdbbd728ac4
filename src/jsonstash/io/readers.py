"""Strict JSON decoding for request bodies and item files."""

from pathlib import Path
from typing import Any, Union
import json


def _reject_constant(name: str):
    # NaN, Infinity and -Infinity are Python extensions, not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def loads_strict(raw: Union[str, bytes]) -> Any:
    """Decode standard JSON only. Raises ValueError for anything else."""
    return json.loads(raw, parse_constant=_reject_constant)


def read_json(path: Path) -> Any:
    """Load an item file. A missing file raises FileNotFoundError from open()."""
    with open(path, "r", encoding="utf-8") as f:
        return loads_strict(f.read())
