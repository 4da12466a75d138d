"""
Database entry point.

Re-exports the pieces of `roaster.database` that scripts and tests use.
"""

from .database.connection import engine, get_db, Base, SessionLocal

__all__ = ["engine", "get_db", "Base", "SessionLocal"]
