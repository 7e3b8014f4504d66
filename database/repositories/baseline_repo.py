"""The handicap-tier baseline table."""

import asyncpg
from typing import Iterable, List

from models import HandicapTierBaseline
from database.converters import baseline_from_row, baseline_to_row


class BaselineRepositoryDB:

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_baseline_table(self) -> List[HandicapTierBaseline]:
        """All anchors, ascending by handicap. Empty when the table was never seeded."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT handicap, score, fir_pct, gir_pct, putts, penalties
                   FROM analytics.handicap_baselines
                   ORDER BY handicap"""
            )
        return [baseline_from_row(row) for row in rows]

    async def replace_baseline_table(self, rows: Iterable[HandicapTierBaseline]) -> int:
        """Swap the whole table in one transaction. Returns the number of anchors written."""
        values = [baseline_to_row(row) for row in rows]
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                await conn.execute("DELETE FROM analytics.handicap_baselines")
                await conn.executemany(
                    """INSERT INTO analytics.handicap_baselines
                       (handicap, score, fir_pct, gir_pct, putts, penalties)
                       VALUES ($1, $2, $3, $4, $5, $6)""",
                    values,
                )
        return len(values)
