# src/nicolas_qui_paie/scripts/seed.py
"""Create tables, seed default categories and optionally issue a user token."""
from __future__ import annotations

import argparse
import asyncio
import sys

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nicolas_qui_paie.core.security import create_access_token
from nicolas_qui_paie.db.session import SessionLocal, create_tables, drop_tables, engine
from nicolas_qui_paie.models import Category, User
from nicolas_qui_paie.repositories.user_repo import UserRepository

DEFAULT_CATEGORIES: tuple[dict[str, str], ...] = (
    {
        "name": "Fiscalité",
        "description": "Propositions concernant les impôts et taxes",
        "color": "#FF6B6B",
        "icon_class": "fas fa-coins",
    },
    {
        "name": "Dépenses Publiques",
        "description": "Propositions sur l'utilisation des deniers publics",
        "color": "#4ECDC4",
        "icon_class": "fas fa-hand-holding-usd",
    },
    {
        "name": "Social",
        "description": "Propositions sociales et de solidarité",
        "color": "#45B7D1",
        "icon_class": "fas fa-users",
    },
    {
        "name": "Économie",
        "description": "Propositions économiques et de relance",
        "color": "#FFA07A",
        "icon_class": "fas fa-chart-line",
    },
    {
        "name": "Environnement",
        "description": "Propositions écologiques et environnementales",
        "color": "#98D8C8",
        "icon_class": "fas fa-leaf",
    },
)


async def seed_categories(session: AsyncSession) -> int:
    """Insert the default categories that are missing and return how many were added."""
    result = await session.execute(select(Category.name))
    existing = set(result.scalars())
    added = 0
    for order, data in enumerate(DEFAULT_CATEGORIES, start=1):
        if data["name"] in existing:
            continue
        session.add(Category(sort_order=order, is_active=True, **data))
        added += 1
    await session.commit()
    return added


async def ensure_user(session: AsyncSession, email: str, display_name: str) -> User:
    users = UserRepository(session)
    user = await users.get_by_email(email)
    if user is None:
        user = await users.add(User(email=email, display_name=display_name))
        await session.commit()
    return user


async def run(args: argparse.Namespace) -> None:
    if args.drop_tables:
        await drop_tables()
        print("[seed] dropped all tables")
    await create_tables()

    async with SessionLocal() as session:
        added = await seed_categories(session)
        print(f"[seed] {added} categories added")

        if args.user_email:
            user = await ensure_user(session, args.user_email, args.display_name)
            print(f"[seed] user {user.id}")
            print(f"[seed] token {create_access_token(user.id)}")

    await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Prepare the configured database")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop every table before recreating the schema.",
    )
    parser.add_argument(
        "--user-email",
        default=None,
        help="Create (or reuse) a user with this email and print a bearer token.",
    )
    parser.add_argument(
        "--display-name",
        default="Nicolas",
        help="Display name for a newly created user.",
    )
    args = parser.parse_args()

    try:
        asyncio.run(run(args))
    except Exception as exc:
        print(f"[seed] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
