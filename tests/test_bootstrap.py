from __future__ import annotations

from sqlalchemy import select

from roofcms.core.permissions import MENU_KEYS
from roofcms.db.models import DashboardUser
from scripts.bootstrap import ensure_role, ensure_user, parse_args


def test_role_gets_every_menu_key(session_factory) -> None:
    with session_factory() as session, session.begin():
        role, created = ensure_role(session, "editor", ["products", "projects"])
        granted = {p.menu_key: p.allowed for p in role.menu_permissions}

    assert created is True
    assert set(granted) == set(MENU_KEYS)
    assert {key for key, allowed in granted.items() if allowed} == {"products", "projects"}


def test_rerun_updates_grants_and_user(session_factory) -> None:
    with session_factory() as session, session.begin():
        role, _ = ensure_role(session, "editor", ["products"])
        ensure_user(session, "editor@example.com", role, None)

    with session_factory() as session, session.begin():
        role, created = ensure_role(session, "editor", ["home"])
        user, user_created = ensure_user(session, "editor@example.com", role, "Editor")
        granted = {p.menu_key for p in role.menu_permissions if p.allowed}
        permission_count = len(role.menu_permissions)

    assert created is False
    assert user_created is False
    assert granted == {"home"}
    with session_factory() as session:
        user = session.execute(select(DashboardUser).where(DashboardUser.email == "editor@example.com")).scalar_one()
        assert user.full_name == "Editor"
    assert permission_count == len(MENU_KEYS)


def test_menus_default_to_all() -> None:
    args = parse_args(["--email", "admin@example.com"])

    assert args.menus is None
    assert args.role == "admin"
