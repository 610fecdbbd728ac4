"""
Local File Repository - One JSON file per item

Items live at <data_dir>/<item_id>.json, pretty-printed.
Environment-agnostic: the directory is configured via settings (config.yml / env).
"""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonstash.errors import ItemNotFoundError, StorageError
from jsonstash.io.readers import read_json
from jsonstash.io.writers import atomic_write_json
from jsonstash.items import is_valid_item_id
from api.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

ITEM_FILE_SUFFIX = ".json"


class LocalFileRepository(BaseRepository):
    """Repository implementation using local file storage"""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.ensure_data_dir()
        logger.info(f"LocalFileRepository initialized with data_dir: {self.data_dir}")

    def ensure_data_dir(self) -> None:
        """Create the data directory if needed (idempotent)"""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, item_id: str) -> Path:
        """Item file path. IDs that are not a plain path segment never map to a file."""
        if not is_valid_item_id(item_id):
            raise ItemNotFoundError(item_id)
        return self.data_dir / f"{item_id}{ITEM_FILE_SUFFIX}"

    def write(self, item_id: str, item: Dict[str, Any]) -> None:
        """Write the item via a temp file so readers never see half a document"""
        path = self.path_for(item_id)
        self.ensure_data_dir()
        atomic_write_json(item, path)
        logger.debug(f"Wrote item file {path}")

    def read(self, item_id: str) -> Dict[str, Any]:
        path = self.path_for(item_id)
        try:
            return read_json(path)
        except FileNotFoundError:
            raise ItemNotFoundError(item_id)
        except ValueError as e:
            raise StorageError(item_id, str(e)) from e

    def delete(self, item_id: str) -> None:
        """Delete the item file; a file that is already gone counts as deleted"""
        path = self.path_for(item_id)
        try:
            path.unlink()
            logger.debug(f"Deleted item file {path}")
        except FileNotFoundError:
            logger.debug(f"Item file already absent: {path}")

    def list_ids(self) -> List[str]:
        """
        IDs recovered from file names in the data directory.

        Files without the .json suffix, or whose stem is not a valid ID
        (temp files, editor backups, ...), are ignored.
        """
        if not self.data_dir.is_dir():
            logger.warning(f"Data directory missing: {self.data_dir}")
            return []

        ids = []
        for entry in self.data_dir.iterdir():
            if not entry.name.endswith(ITEM_FILE_SUFFIX):
                continue
            item_id = entry.name[: -len(ITEM_FILE_SUFFIX)]
            if is_valid_item_id(item_id) and entry.is_file():
                ids.append(item_id)
        return sorted(ids)

    def stat_age(self, item_id: str, now: Optional[datetime] = None) -> timedelta:
        path = self.path_for(item_id)
        try:
            mtime = path.stat().st_mtime
        except FileNotFoundError:
            raise ItemNotFoundError(item_id)
        now = now or datetime.now(timezone.utc)
        return now - datetime.fromtimestamp(mtime, tz=timezone.utc)
