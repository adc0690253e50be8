"""
Database package for SQLAlchemy models and repository pattern.

This package provides:
- Async database connection management
- SQLAlchemy ORM models
- Repository pattern for clean data access
"""

from liora.database.connection import (
    Base,
    DatabaseManager,
    get_db,
    init_db,
    close_db,
    db_manager
)

from liora.database.models import UserRecord

from liora.database.repositories import UserRepository

__all__ = [
    # Connection
    'Base',
    'DatabaseManager',
    'get_db',
    'init_db',
    'close_db',
    'db_manager',
    # Models
    'UserRecord',
    # Repositories
    'UserRepository',
]
