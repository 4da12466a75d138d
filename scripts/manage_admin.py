#!/usr/bin/env python3
"""Create or reset an admin account.

Usage:
  python3 scripts/manage_admin.py --email admin@example.com --password s3cret

Creates the tables when they are missing. Without --email/--password the
ADMIN_EMAIL / ADMIN_PASSWORD settings are used.
"""
import sys
from pathlib import Path
import argparse

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roaster.db import SessionLocal, Base, engine
from roaster import crud
from roaster.config.settings import settings


def main():
    parser = argparse.ArgumentParser(description='Create or reset an admin account')
    parser.add_argument("--email", default=settings.ADMIN_EMAIL)
    parser.add_argument("--password", default=settings.ADMIN_PASSWORD)
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        if crud.ensure_admin(db, args.email, args.password):
            print(f"Admin created: {args.email}")
        else:
            print(f"Password reset for existing user: {args.email}")


if __name__ == '__main__':
    main()
