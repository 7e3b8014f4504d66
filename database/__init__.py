from database.connection import DatabasePool, build_dsn_from_env, db
from database.db_manager import DatabaseManager
from database.repositories import (
    BaselineRepositoryDB,
    InsightsRepositoryDB,
    RoundRepositoryDB,
    UserRepositoryDB,
)
from database.exceptions import DatabaseError, NotFoundError, RowMappingError

__all__ = [
    "DatabasePool",
    "build_dsn_from_env",
    "db",
    "DatabaseManager",
    "BaselineRepositoryDB",
    "InsightsRepositoryDB",
    "RoundRepositoryDB",
    "UserRepositoryDB",
    "DatabaseError",
    "NotFoundError",
    "RowMappingError",
]
