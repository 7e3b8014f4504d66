from __future__ import annotations

import asyncpg

from database.repositories import (
    BaselineRepositoryDB,
    InsightsRepositoryDB,
    RoundRepositoryDB,
    UserRepositoryDB,
)


class DatabaseManager:
    """
    One pool, one repository per table group.

    Route handlers receive this through the ``get_db`` dependency and never
    touch the pool directly.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        self.pool = pool
        self.rounds = RoundRepositoryDB(pool)
        self.baselines = BaselineRepositoryDB(pool)
        self.users = UserRepositoryDB(pool)
        self.insights = InsightsRepositoryDB(pool)
