from __future__ import annotations

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from sqlalchemy import select
from starlette.middleware.sessions import SessionMiddleware

from roofcms.core.permissions import (
    SESSION_USER_KEY,
    AuthorizationContext,
    get_authorization_context,
)
from roofcms.db.models import DashboardUser, Role, RoleMenuPermission
from roofcms.db.session import get_db


@pytest.fixture
def client(session_factory) -> TestClient:
    """A minimal app whose sign-in route stands in for the external auth layer."""
    app = FastAPI()
    app.add_middleware(SessionMiddleware, secret_key="permissions-test-secret-0123456789abcdef")

    @app.post("/sign-in/{user_id}")
    def sign_in(user_id: str, request: Request):
        request.session[SESSION_USER_KEY] = user_id
        return {"ok": True}

    @app.get("/menus")
    def menus(auth: AuthorizationContext = Depends(get_authorization_context)):
        return {"user_id": auth.user_id, "menus": dict(auth.menus)}

    @app.get("/projects")
    def projects(auth: AuthorizationContext = Depends(get_authorization_context)):
        auth.require("projects")
        return {"ok": True}

    def _db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _db
    return TestClient(app)


@pytest.fixture
def editor(session_factory):
    with session_factory() as session, session.begin():
        role = Role(id="editor", name="Editor")
        role.menu_permissions = [
            RoleMenuPermission(menu_key="products", allowed=True),
            RoleMenuPermission(menu_key="projects", allowed=False),
        ]
        session.add(role)
        session.add(DashboardUser(id="u1", email="editor@example.com", role_id="editor"))
        session.add(DashboardUser(id="u2", email="gone@example.com", role_id="editor", is_active=False))
    return "u1"


def test_context_is_read_only() -> None:
    auth = AuthorizationContext("u1", {"home": True})

    with pytest.raises(TypeError):
        auth.menus["users"] = True
    assert auth.allows("home") is True
    assert auth.allows("users") is False


def test_anonymous_request_is_unauthorized(client) -> None:
    assert client.get("/menus").status_code == 401


def test_menus_resolved_from_role(client, editor) -> None:
    client.post(f"/sign-in/{editor}")

    response = client.get("/menus")

    assert response.json() == {"user_id": "u1", "menus": {"products": True, "projects": False}}


def test_denied_menu_is_forbidden(client, editor) -> None:
    client.post(f"/sign-in/{editor}")

    assert client.get("/projects").status_code == 403


def test_menus_are_cached_for_the_session(client, editor, session_factory) -> None:
    client.post(f"/sign-in/{editor}")
    client.get("/menus")
    with session_factory() as session, session.begin():
        permission = session.execute(
            select(RoleMenuPermission).where(
                RoleMenuPermission.role_id == "editor", RoleMenuPermission.menu_key == "projects"
            )
        ).scalar_one()
        permission.allowed = True

    assert client.get("/menus").json()["menus"]["projects"] is False


def test_inactive_user_is_unauthorized(client, editor) -> None:
    client.post("/sign-in/u2")

    assert client.get("/menus").status_code == 401
