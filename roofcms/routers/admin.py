import logging
from typing import Any, Dict, List, Mapping, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from roofcms.core.notify import NotificationQueue
from roofcms.core.permissions import AuthorizationContext, get_authorization_context
from roofcms.db.session import get_store
from roofcms.db.store import RelationalStore
from roofcms.services.ordering import SortableList
from roofcms.services.registry import (
    COLLECTIONS,
    RELATION_SETS,
    RelationSet,
    SortableCollection,
    UnknownScopeKey,
)
from roofcms.services.relations import OwnerNotYetPersisted, current_relations, sync_relations

router = APIRouter(prefix="/admin/api", tags=["Admin"])

logger = logging.getLogger("roofcms.admin")


class ReorderRequest(BaseModel):
    scope: Dict[str, Optional[str]] = Field(default_factory=dict)
    source_index: int = Field(..., ge=0)
    destination_index: Optional[int] = Field(default=None, ge=0)


class RelationsRequest(BaseModel):
    related_ids: List[str] = Field(default_factory=list)


def _get_collection(name: str, auth: AuthorizationContext) -> SortableCollection:
    collection = COLLECTIONS.get(name)
    if not collection:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown collection {name}.")
    auth.require(collection.menu_key)
    return collection


def _get_relation(name: str, auth: AuthorizationContext) -> RelationSet:
    relation = RELATION_SETS.get(name)
    if not relation:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown relation {name}.")
    auth.require(relation.menu_key)
    return relation


def _open_list(
    store: RelationalStore,
    collection: SortableCollection,
    scope: Mapping[str, Any],
    notifier: Optional[NotificationQueue] = None,
) -> SortableList:
    try:
        sortable = SortableList(store, collection, scope, notifier)
    except UnknownScopeKey as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    sortable.load()
    return sortable


@router.get("/collections/{name}")
def list_collection(
    name: str,
    request: Request,
    auth: AuthorizationContext = Depends(get_authorization_context),
    store: RelationalStore = Depends(get_store),
):
    collection = _get_collection(name, auth)
    sortable = _open_list(store, collection, dict(request.query_params))
    return {"items": sortable.items}


@router.post("/collections/{name}/reorder")
def reorder_collection(
    name: str,
    payload: ReorderRequest,
    auth: AuthorizationContext = Depends(get_authorization_context),
    store: RelationalStore = Depends(get_store),
):
    collection = _get_collection(name, auth)
    notifications = NotificationQueue()
    sortable = _open_list(store, collection, payload.scope, notifications)

    try:
        ok = sortable.reorder(payload.source_index, payload.destination_index)
    except IndexError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    if payload.destination_index is not None:
        logger.info(
            "collection_reorder_requested",
            extra={"collection": name, "user_id": auth.user_id, "ok": ok},
        )
    return {"ok": ok, "items": sortable.items, "notifications": notifications.as_payload()}


@router.get("/relations/{name}/{owner_id}")
def get_relations(
    name: str,
    owner_id: str,
    auth: AuthorizationContext = Depends(get_authorization_context),
    store: RelationalStore = Depends(get_store),
):
    relation = _get_relation(name, auth)
    if not store.exists(relation.owner_model, owner_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Owner not found.")
    return {"related_ids": current_relations(store, relation, owner_id)}


@router.put("/relations/{name}/{owner_id}")
def put_relations(
    name: str,
    owner_id: str,
    payload: RelationsRequest,
    auth: AuthorizationContext = Depends(get_authorization_context),
    store: RelationalStore = Depends(get_store),
):
    relation = _get_relation(name, auth)
    notifications = NotificationQueue()
    try:
        ok = sync_relations(store, relation, owner_id, payload.related_ids, notifications)
    except OwnerNotYetPersisted as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    logger.info(
        "relations_save_requested",
        extra={"relation": name, "owner_id": owner_id, "user_id": auth.user_id, "ok": ok},
    )
    # on failure the stored set is unknown to the client; it must re-read it
    related_ids = list(dict.fromkeys(payload.related_ids)) if ok else None
    return {"ok": ok, "related_ids": related_ids, "notifications": notifications.as_payload()}
