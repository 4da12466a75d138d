#!/usr/bin/env python3
"""Give every customer without a customer code the next free code.

Usage:
  python3 scripts/assign_customer_codes.py
"""
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roaster.db import SessionLocal
from roaster import crud


def main():
    with SessionLocal() as db:
        updated = crud.assign_missing_customer_codes(db)
        for user in updated:
            print(f"{user.customer_code:04d}  {user.email}")
        print(f"{len(updated)} customers updated")


if __name__ == '__main__':
    main()
