"""
In-memory item store.

Primary read source for the API. Not persisted: every process starts with an
empty store and it is never hydrated from the data directory.
"""

import copy
import threading
from typing import Any, Dict, Optional

Item = Dict[str, Any]


class ItemStore:
    """
    Mapping of item ID to item, safe for concurrent use.

    Request handlers and the retention sweeper (running in a worker thread)
    share one instance, so every access goes through a single lock. Items are
    copied in and out; mutate an item by putting it back.
    """

    def __init__(self):
        self._items: Dict[str, Item] = {}
        self._lock = threading.Lock()

    def get(self, item_id: str) -> Optional[Item]:
        with self._lock:
            item = self._items.get(item_id)
            return copy.deepcopy(item) if item is not None else None

    def put(self, item_id: str, item: Item) -> None:
        with self._lock:
            self._items[item_id] = copy.deepcopy(item)

    def delete(self, item_id: str) -> bool:
        """Remove an item. Returns False if it was not present."""
        with self._lock:
            return self._items.pop(item_id, None) is not None

    def list_all(self) -> Dict[str, Item]:
        """Snapshot of every item currently held in memory."""
        with self._lock:
            return copy.deepcopy(self._items)

    def __contains__(self, item_id: object) -> bool:
        with self._lock:
            return item_id in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
