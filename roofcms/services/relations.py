"""Many-to-many assignment (certificates, badges, project categories).

Saving an assignment dialog replaces the owner's whole relation set: every
junction row for the owner is deleted, then one row per selected id is
inserted. The two steps are separate store calls. If the insert fails after
the delete committed, the owner is left with no relations and the caller is
told so.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from roofcms.core.notify import NotificationQueue, Notifier
from roofcms.db.store import RelationalStore, Row, StoreError
from roofcms.services.ordering import SortableList
from roofcms.services.registry import RelationSet, SortableCollection

logger = logging.getLogger("roofcms.relations")


class OwnerNotYetPersisted(LookupError):
    """Relations were synchronized for an owner row that does not exist."""

    def __init__(self, relation: str, owner_id: Any):
        super().__init__(f"Cannot assign {relation} before owner {owner_id!r} is saved.")
        self.relation = relation
        self.owner_id = owner_id


def _unique(ids: Iterable[Any]) -> List[Any]:
    return list(dict.fromkeys(ids))


def current_relations(store: RelationalStore, relation: RelationSet, owner_id: Any) -> List[Any]:
    return store.fetch_column(relation.model, relation.related_column, {relation.owner_column: owner_id})


def sync_relations(
    store: RelationalStore,
    relation: RelationSet,
    owner_id: Any,
    related_ids: Iterable[Any],
    notifier: Optional[Notifier] = None,
) -> bool:
    """Make the stored relation set of ``owner_id`` equal ``related_ids``.

    Returns True on full success. Store failures are logged and reported
    through ``notifier``; they are never raised.
    """
    notifier = notifier if notifier is not None else NotificationQueue()
    desired = _unique(related_ids)
    context = {"relation": relation.name, "owner_id": owner_id}

    try:
        owner_exists = store.exists(relation.owner_model, owner_id)
    except StoreError as exc:
        logger.error("relations_owner_lookup_failed", extra={**context, "error": str(exc)})
        notifier.error(f"Failed to update {relation.label.lower()}")
        return False
    if not owner_exists:
        raise OwnerNotYetPersisted(relation.name, owner_id)

    try:
        removed = store.delete_where(relation.model, relation.owner_column, owner_id)
    except StoreError as exc:
        logger.error("relations_delete_failed", extra={**context, "error": str(exc)})
        notifier.error(f"Failed to update {relation.label.lower()}")
        return False

    if desired:
        try:
            store.bulk_insert(relation.model, relation.rows_for(owner_id, desired))
        except StoreError as exc:
            logger.error(
                "relations_insert_failed",
                extra={**context, "removed": removed, "related_ids": desired, "error": str(exc)},
            )
            notifier.error(f"Failed to update {relation.label.lower()}")
            return False

    logger.info("relations_synced", extra={**context, "removed": removed, "inserted": len(desired)})
    notifier.success(f"{relation.label} updated successfully")
    return True


@dataclass
class PendingRelations:
    """Assignments chosen on a create form before the owner row has an id."""

    selections: Dict[str, Tuple[RelationSet, List[Any]]] = field(default_factory=dict)

    def select(self, relation: RelationSet, related_ids: Iterable[Any]) -> None:
        self.selections[relation.name] = (relation, _unique(related_ids))

    def selected(self, relation: RelationSet) -> List[Any]:
        return list(self.selections.get(relation.name, (relation, []))[1])

    def apply(self, store: RelationalStore, owner_id: Any, notifier: Notifier) -> bool:
        results = [
            sync_relations(store, relation, owner_id, related_ids, notifier)
            for relation, related_ids in self.selections.values()
        ]
        return all(results)


def create_with_relations(
    store: RelationalStore,
    collection: SortableCollection,
    values: Mapping[str, Any],
    pending: PendingRelations,
    notifier: Notifier,
) -> Tuple[Row, bool]:
    """Append the owner row to its ordering scope, then assign the relations held in ``pending``.

    Every sync reports into the one ``notifier``. Store errors while
    inserting the owner propagate; nothing has been assigned at that point.
    """
    for relation, _ in pending.selections.values():
        if relation.owner_model is not collection.model:
            raise ValueError(f"{relation.name} does not belong to {collection.name}")

    owner = SortableList(store, collection, collection.scope_of(values), notifier).append(values)
    return owner, pending.apply(store, owner["id"], notifier)
