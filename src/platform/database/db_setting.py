"""
Database configuration

Re-exports the SQLAlchemy pieces models and repositories depend on.
"""

from src.platform.database.orm_db_setting import Base, Database

__all__ = [
    'Base',
    'Database',
]
