# site_api/db/__init__.py
"""
Database package for SQLAlchemy setup, session management, and base models.
"""

from site_api.db.base import Base
from site_api.db.session import (
    create_database_engine,
    dispose_engine,
    get_session,
    transaction_session,
)

__all__ = [
    "Base",
    "create_database_engine",
    "dispose_engine",
    "get_session",
    "transaction_session",
]
