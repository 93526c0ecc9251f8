"""
Create Greffier tables from the SQLAlchemy models and seed role names.

Meant for local development and throwaway databases; real deployments
run ``alembic upgrade head``.

Usage:
    python scripts/init_database.py
    python scripts/init_database.py --recreate --roles admin support
"""

import argparse
import asyncio
from typing import List

from sqlalchemy import select

from greffier.config.settings import get_settings
from greffier.infrastructure.persistence.database import Database
from greffier.infrastructure.persistence.models import Base, RoleModel


async def init_database(recreate: bool, roles: List[str]) -> None:
    """Create the schema, then insert any missing roles."""
    settings = get_settings()
    target = settings.DATABASE_URL.rsplit("@", 1)[-1]

    print(f"Target database: {target}")

    if recreate:
        answer = input("All Greffier tables will be dropped. Type 'YES' to go on: ")
        if answer != "YES":
            print("Nothing changed")
            return

    db = Database(settings.DATABASE_URL, statement_timeout=settings.DATABASE_TIMEOUT)
    await db.connect()

    try:
        await db.create_schema(Base.metadata, drop_first=recreate)
        print("Schema ready" + (" (recreated)" if recreate else ""))

        async with db.session() as session:
            known = set((await session.execute(select(RoleModel.name))).scalars())
            missing = [name for name in roles if name not in known]
            session.add_all(RoleModel(name=name) for name in missing)

        for name in missing:
            print(f"  + role {name}")
    finally:
        await db.disconnect()


def main() -> None:
    parser = argparse.ArgumentParser(description="Initialize the Greffier database")
    parser.add_argument("--recreate", action="store_true", help="Drop tables first")
    parser.add_argument(
        "--roles", nargs="*", default=["admin", "user"], help="Role names to seed"
    )
    args = parser.parse_args()
    asyncio.run(init_database(recreate=args.recreate, roles=args.roles))


if __name__ == "__main__":
    main()
