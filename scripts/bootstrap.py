"""Create the dashboard schema and seed a role and a user with menu access.

Run any time after configuring your .env, e.g.:
    python scripts/bootstrap.py --email admin@example.com --role admin --full-name "Site Admin"

Without --menus the role is granted every dashboard menu.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

# Ensure the project root is on sys.path so `roofcms` imports resolve
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from roofcms.core.config import get_settings
from roofcms.core.permissions import MENU_KEYS
from roofcms.db.models import Base, DashboardUser, Role, RoleMenuPermission


def create_tables(engine) -> None:
    """Create all database tables defined on the metadata."""
    Base.metadata.create_all(bind=engine, checkfirst=True)


def ensure_role(session: Session, name: str, menus: Iterable[str]) -> Tuple[Role, bool]:
    """Create the role if needed and grant exactly ``menus``.

    Returns the role and a flag indicating whether it was newly created.
    """
    role = session.execute(select(Role).where(Role.name == name)).scalar_one_or_none()
    created = role is None
    if created:
        role = Role(name=name)
        session.add(role)
        session.flush()

    granted = set(menus)
    existing = {permission.menu_key: permission for permission in role.menu_permissions}
    for menu_key in MENU_KEYS:
        allowed = menu_key in granted
        if menu_key in existing:
            existing[menu_key].allowed = allowed
        else:
            role.menu_permissions.append(RoleMenuPermission(menu_key=menu_key, allowed=allowed))
    session.flush()
    return role, created


def ensure_user(session: Session, email: str, role: Role, full_name: Optional[str]) -> Tuple[DashboardUser, bool]:
    user = session.execute(select(DashboardUser).where(DashboardUser.email == email)).scalar_one_or_none()
    if user:
        user.role_id = role.id
        if full_name:
            user.full_name = full_name
        session.flush()
        return user, False

    user = DashboardUser(email=email, full_name=full_name, role_id=role.id)
    session.add(user)
    session.flush()
    return user, True


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Setup database tables and seed a dashboard role and user.")
    parser.add_argument("--email", required=True, help="Email of the dashboard user.")
    parser.add_argument("--role", default="admin", help="Role to create or update (default: admin).")
    parser.add_argument(
        "--menus",
        nargs="*",
        choices=MENU_KEYS,
        default=None,
        help="Menus the role may open (default: all).",
    )
    parser.add_argument("--full-name", default=None, help="Optional display name for the user.")
    parser.add_argument(
        "--skip-tables",
        action="store_true",
        help="Skip creating tables (useful when they already exist).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    args = parse_args(argv)

    # Ensure settings are loaded so environment variables are validated early.
    settings = get_settings()
    print(f"Using database: {settings.database_url}")

    from roofcms.db.session import SessionLocal, database_engine

    if not args.skip_tables:
        print("Creating database tables (no-op if already present)...")
        create_tables(database_engine)
        print("Tables ensured.")
    else:
        print("Skipping table creation.")

    menus = MENU_KEYS if args.menus is None else args.menus
    with SessionLocal() as session, session.begin():
        role, role_created = ensure_role(session, args.role, menus)
        user, user_created = ensure_user(session, args.email, role, args.full_name)
        print(f"Role {role.name} {'created' if role_created else 'updated'}: {', '.join(menus) or 'no menus'}")
        print(f"User {user.email} {'created' if user_created else 'updated'}.")

    print("Bootstrap complete.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
