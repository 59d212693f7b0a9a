"""
Database module - SQLAlchemy engine, sessions and declarative base.
"""
from portal.db.database import Base, get_db, get_db_session, init_db, test_database_connection

__all__ = [
    "Base",
    "get_db",
    "get_db_session",
    "init_db",
    "test_database_connection",
]
