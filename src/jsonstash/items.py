"""
Item construction helpers.

An item is the client's JSON document plus a server-assigned ``createdAt``.
Object bodies carry the stamp directly; any other JSON value is wrapped as
``{"value": <body>}`` first.
"""

import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

CREATED_AT = "createdAt"
WRAPPED_VALUE = "value"

_ITEM_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")

Item = Dict[str, Any]


def new_item_id() -> str:
    """Random UUID4 string, safe to use as a file name."""
    return str(uuid.uuid4())


def is_valid_item_id(item_id: str) -> bool:
    return bool(_ITEM_ID_RE.match(item_id))


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T10:00:00.000Z"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_item(body: Any, created_at: Optional[str] = None) -> Item:
    """Turn a request body into a stored item stamped with ``createdAt``."""
    item = dict(body) if isinstance(body, dict) else {WRAPPED_VALUE: body}
    item[CREATED_AT] = created_at or utc_timestamp()
    return item


def replace_item(existing: Item, body: Any, restamp: bool = False) -> Item:
    """Full replacement. Keeps the original ``createdAt`` unless ``restamp``."""
    created_at = None if restamp else existing.get(CREATED_AT)
    return build_item(body, created_at)


def merge_item(existing: Item, updates: Dict[str, Any], restamp: bool = False) -> Item:
    """
    Shallow merge: top-level keys of ``updates`` overwrite those of ``existing``.

    Nested objects are replaced wholesale, never merged recursively.
    """
    merged = {**existing, **updates}
    created_at = None if restamp else existing.get(CREATED_AT)
    merged[CREATED_AT] = created_at or utc_timestamp()
    return merged
