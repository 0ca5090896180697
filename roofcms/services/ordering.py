"""Drag-and-drop ordering for sortable dashboard lists.

A drop moves one item inside the displayed list and renumbers the whole list
``0..N-1``. The new order is shown immediately and then persisted; if any
single write fails the list is reloaded from the database instead of being
patched up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from roofcms.core.notify import NotificationQueue, Notifier
from roofcms.db.store import PartialBatchFailure, RelationalStore, StoreError
from roofcms.services.registry import SortableCollection

logger = logging.getLogger("roofcms.ordering")

Row = Dict[str, Any]


@dataclass(frozen=True)
class OrderUpdate:
    id: Any
    order: int


def reorder(
    current_list: Sequence[Mapping[str, Any]],
    source_index: int,
    destination_index: Optional[int],
) -> Tuple[List[Row], List[OrderUpdate]]:
    """Move the item at ``source_index`` to ``destination_index`` and renumber.

    Returns the new list and one update per item. A drop without a
    destination changes nothing and yields no updates.
    """
    items = [dict(item) for item in current_list]
    if destination_index is None:
        return items, []

    size = len(items)
    if not 0 <= source_index < size:
        raise IndexError(f"source_index {source_index} outside list of {size} items")
    if not 0 <= destination_index < size:
        raise IndexError(f"destination_index {destination_index} outside list of {size} items")

    moved = items.pop(source_index)
    items.insert(destination_index, moved)
    for position, item in enumerate(items):
        item["order"] = position
    return items, [OrderUpdate(item["id"], item["order"]) for item in items]


class SortableList:
    """The rows of one ordering scope as the dashboard currently displays them."""

    def __init__(
        self,
        store: RelationalStore,
        collection: SortableCollection,
        scope: Optional[Mapping[str, Any]] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.store = store
        self.collection = collection
        self.filters = collection.scope_filters(scope)
        self.notifier = notifier if notifier is not None else NotificationQueue()
        self.items: List[Row] = []

    def load(self) -> List[Row]:
        self.items = self.store.fetch_ordered(
            self.collection.model, self.filters, self.collection.extra_criteria()
        )
        return self.items

    def next_order(self) -> int:
        return self.store.next_order(self.collection.model, self.filters, self.collection.extra_criteria())

    def append(self, values: Mapping[str, Any]) -> Row:
        """Insert a new row at the end of this scope."""
        row = self.store.insert(
            self.collection.model,
            {**values, **{k: v for k, v in self.filters.items() if v is not None}, "order": self.next_order()},
        )
        self.items.append(row)
        return row

    def reorder(self, source_index: int, destination_index: Optional[int]) -> bool:
        before = self.items
        new_items, updates = reorder(before, source_index, destination_index)
        if not updates:
            return True

        self.items = new_items
        try:
            self.store.batch_update(
                self.collection.model,
                [(update.id, {"order": update.order}) for update in updates],
            )
        except StoreError as exc:
            failed = exc.failed_ids if isinstance(exc, PartialBatchFailure) else None
            logger.error(
                "order_persist_failed",
                extra={
                    "collection": self.collection.name,
                    "scope": self.filters,
                    "failed_ids": failed,
                    "error": str(exc),
                },
            )
            self.notifier.error(f"Failed to update {self.collection.label.lower()} order")
            self._reload(fallback=before)
            return False

        logger.info(
            "order_persisted",
            extra={"collection": self.collection.name, "scope": self.filters, "count": len(updates)},
        )
        self.notifier.success(f"{self.collection.label} order updated successfully")
        return True

    def _reload(self, fallback: List[Row]) -> None:
        try:
            self.load()
        except StoreError as exc:
            logger.error(
                "order_reload_failed",
                extra={"collection": self.collection.name, "scope": self.filters, "error": str(exc)},
            )
            self.items = fallback
