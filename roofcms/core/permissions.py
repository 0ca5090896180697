"""Menu permissions of the signed-in dashboard user.

The permissions are resolved once per session from the user's role, cached in
the signed session cookie and handed to endpoints as an explicit
``AuthorizationContext`` dependency.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from roofcms.db.models import DashboardUser, RoleMenuPermission
from roofcms.db.session import get_db

SESSION_USER_KEY = "dashboard_user_id"
SESSION_MENUS_KEY = "menu_permissions"

MENU_KEYS = (
    "dashboard",
    "home",
    "products",
    "projects",
    "articles",
    "files",
    "contacts",
    "users",
)


@dataclass(frozen=True)
class AuthorizationContext:
    user_id: str
    menus: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "menus", MappingProxyType(dict(self.menus)))

    def allows(self, menu_key: str) -> bool:
        return bool(self.menus.get(menu_key, False))

    def require(self, menu_key: str) -> None:
        if not self.allows(menu_key):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"No access to {menu_key}.")


def resolve_menu_permissions(db: Session, user: DashboardUser) -> Dict[str, bool]:
    if not user.role_id:
        return {}
    rows = db.execute(
        select(RoleMenuPermission.menu_key, RoleMenuPermission.allowed).where(
            RoleMenuPermission.role_id == user.role_id
        )
    ).all()
    return {menu_key: bool(allowed) for menu_key, allowed in rows}


def get_authorization_context(request: Request, db: Session = Depends(get_db)) -> AuthorizationContext:
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not signed in.")

    cached = request.session.get(SESSION_MENUS_KEY)
    if cached and cached.get("user_id") == user_id:
        return AuthorizationContext(user_id, cached.get("menus", {}))

    user = db.get(DashboardUser, user_id)
    if not user or not user.is_active:
        request.session.pop(SESSION_USER_KEY, None)
        request.session.pop(SESSION_MENUS_KEY, None)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not signed in.")

    menus = resolve_menu_permissions(db, user)
    request.session[SESSION_MENUS_KEY] = {"user_id": user_id, "menus": menus}
    return AuthorizationContext(user_id, menus)
