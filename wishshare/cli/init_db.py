"""Create the database schema, optionally seeding a first account.

The service ships no migrations, so this is the deploy step that brings up
the ``users``, ``wishlists``, ``items`` and ``wishlist_collaborators``
tables. Run it with ``python -m wishshare.cli.init_db``.
"""

import argparse
import sys

from pydantic import ValidationError
from sqlalchemy import inspect, select

import wishshare.models  # noqa: F401
from wishshare.database import Base, SessionLocal, engine
from wishshare.models.user import User
from wishshare.schemas.auth import SignupRequest


def create_schema() -> list[str]:
    """Create missing tables and return the names of those that were added."""
    existing = set(inspect(engine).get_table_names())
    Base.metadata.create_all(bind=engine)
    return [name for name in Base.metadata.tables if name not in existing]


def seed_user() -> None:
    signup = {
        "email": input("Email: ").strip(),
        "full_name": input("Full name: ").strip(),
        "password": input("Password: ").strip(),
    }
    try:
        request = SignupRequest(**signup)
    except ValidationError as exc:
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"])
            print(f"{field}: {error['msg']}")
        sys.exit(1)

    db = SessionLocal()
    try:
        existing = db.execute(
            select(User).where(User.email == request.email)
        ).scalar_one_or_none()
        if existing:
            print(f"User with email {request.email} already exists.")
            sys.exit(1)

        user = User(email=request.email, full_name=request.full_name, password_hash="")
        user.set_password(request.password)
        db.add(user)
        db.commit()
        print(f"User '{request.full_name}' created.")
    finally:
        db.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="wishshare-init-db", description="Create the Wishshare tables."
    )
    parser.add_argument(
        "--seed-user",
        action="store_true",
        help="prompt for an account to create once the tables exist",
    )
    args = parser.parse_args(argv)

    created = create_schema()
    if created:
        print(f"Created tables: {', '.join(created)}")
    else:
        print("All tables already exist.")

    if args.seed_user:
        seed_user()


if __name__ == "__main__":
    main()
