"""
Base Repository - Abstract interface for durable item storage

This defines the contract that all repository implementations must follow.
Allows swapping local files (current) for another backend without changing
the handlers or the retention sweeper.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional


class BaseRepository(ABC):
    """Abstract base class for item repositories"""

    @abstractmethod
    def write(self, item_id: str, item: Dict[str, Any]) -> None:
        """
        Create or overwrite the stored copy of an item.

        Raises:
            OSError: if the backend cannot persist the item
        """
        pass

    @abstractmethod
    def read(self, item_id: str) -> Dict[str, Any]:
        """
        Load an item.

        Raises:
            ItemNotFoundError: if no item is stored under item_id
            StorageError: if the stored item cannot be decoded
        """
        pass

    @abstractmethod
    def delete(self, item_id: str) -> None:
        """
        Remove an item. Removing an item that is already gone is not an error.
        """
        pass

    @abstractmethod
    def list_ids(self) -> List[str]:
        """
        List the IDs of every stored item.
        """
        pass

    @abstractmethod
    def stat_age(self, item_id: str, now: Optional[datetime] = None) -> timedelta:
        """
        Time elapsed since the item was last modified.

        Args:
            item_id: Item to inspect
            now: Reference time (defaults to the current time)
        """
        pass
