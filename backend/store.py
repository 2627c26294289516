"""In-memory item store, one per running instance."""

from __future__ import annotations

import logging
import threading
from typing import Any

from .metrics import ITEMS_CREATED, ITEMS_REJECTED, ITEMS_STORED
from .models import Item

logger = logging.getLogger(__name__)

SEED_TEXT = "Welcome! served by {instance}"


class ValidationError(ValueError):
    """Raised when an item cannot be created from the given input."""


class ItemStore:
    """Ordered, append-only list of items living for the process lifetime.

    Sync FastAPI endpoints run on a thread pool, so reads and appends go
    through a lock. The count-then-append in add_item is one critical
    section, which keeps ids unique.
    """

    def __init__(self, instance_id: str) -> None:
        self._lock = threading.Lock()
        self._items: list[Item] = [
            Item(id=1, text=SEED_TEXT.format(instance=instance_id))
        ]
        ITEMS_STORED.set(len(self._items))
        logger.info("Item store seeded for instance %s", instance_id)

    def list_items(self) -> list[Item]:
        """Return every stored item in insertion order."""
        with self._lock:
            return list(self._items)

    def add_item(self, text: Any) -> Item:
        """Append a new item and return it.

        Raises:
            ValidationError: if text is not a non-empty string.
        """
        if not isinstance(text, str) or not text:
            ITEMS_REJECTED.inc()
            logger.warning("Rejected item with text=%r", text)
            raise ValidationError("text required")

        with self._lock:
            item = Item(id=len(self._items) + 1, text=text)
            self._items.append(item)
            ITEMS_STORED.set(len(self._items))

        ITEMS_CREATED.inc()
        logger.info("Added item %d", item.id)
        return item

    @property
    def count(self) -> int:
        """Number of stored items."""
        with self._lock:
            return len(self._items)
