from pathlib import Path
from typing import Any
import json
import os
import uuid

def dump_json(data: Any) -> str:
    """Canonical on-disk encoding: pretty-printed, non-ASCII kept as-is."""
    return json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False)

def atomic_write_json(data: Any, out: Path) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    # unique per writer so concurrent writes to one ID never share a temp file
    tmp = out.with_name(f".{out.name}.{uuid.uuid4().hex}.tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(dump_json(data))
        os.replace(tmp, out)     # atomic replace on same filesystem
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
