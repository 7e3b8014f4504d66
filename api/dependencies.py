"""Request-scoped access to the repositories opened in the app lifespan."""

from fastapi import Depends, HTTPException, Request

from database.db_manager import DatabaseManager
from database.repositories import BaselineRepositoryDB, RoundRepositoryDB


def get_db(request: Request) -> DatabaseManager:
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise HTTPException(503, "Database is not available")
    return manager


def get_rounds(db: DatabaseManager = Depends(get_db)) -> RoundRepositoryDB:
    return db.rounds


def get_baselines(db: DatabaseManager = Depends(get_db)) -> BaselineRepositoryDB:
    return db.baselines
