"""
Create the back-office administrator account.

- Does nothing if an admin with the email already exists
- With --check, only reports whether the admin exists

Usage:
  python -m seed.seed_admin --db sqlite:///./wedding.db --email admin@example.com --password '...'
"""
import argparse
import logging

from weddingapp import crud
from weddingapp.db import Store
from weddingapp.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def seed_admin(store: Store, email: str, password: str, name: str = "Administrator", role: str = "admin") -> bool:
    """Return True when a new admin row was created."""
    db = store.session_factory()
    try:
        if crud.get_admin_by_email(db, email):
            logger.info("admin %s already exists", email)
            return False
        crud.create_admin(db, name, email, password, role)
        logger.info("admin %s created", email)
        return True
    finally:
        db.close()


def check_admin(store: Store, email: str) -> dict | None:
    db = store.session_factory()
    try:
        admin = crud.get_admin_by_email(db, email)
        if not admin:
            return None
        return {"id": admin.id, "name": admin.name, "email": admin.email, "role": admin.role}
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--db", default="sqlite:///./wedding.db", help="SQLAlchemy database URL")
    parser.add_argument("--email", default="admin@example.com")
    parser.add_argument("--password", help="Required unless --check is given")
    parser.add_argument("--name", default="Administrator")
    parser.add_argument("--check", action="store_true", help="Only report whether the admin exists")
    args = parser.parse_args()

    setup_logging()
    store = Store(args.db)
    store.open()
    try:
        if args.check:
            admin = check_admin(store, args.email)
            print(admin if admin else "Admin user does not exist")
            return
        if not args.password:
            parser.error("--password is required")
        seed_admin(store, args.email, args.password, args.name)
    finally:
        store.close()


if __name__ == "__main__":
    main()
