"""Cached overall-insights payloads, one row per user."""

import asyncpg
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from database.converters import cached_insights_from_row


class InsightsRepositoryDB:

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_cached_overall(self, user_id: str) -> Optional[Dict[str, Any]]:
        """{payload, data_hash, variant_offset, generated_at} or None."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """SELECT payload, data_hash, variant_offset, generated_at
                   FROM users.overall_insights WHERE user_id = $1""",
                UUID(user_id),
            )
            return cached_insights_from_row(row) if row else None

    async def save_overall(
        self,
        user_id: str,
        payload: Dict[str, Any],
        data_hash: str,
        variant_offset: int,
        generated_at: Optional[datetime] = None,
    ) -> None:
        """Upsert the cached payload for a user."""
        generated_at = generated_at or datetime.now(timezone.utc)
        async with self._pool.acquire() as conn:
            await conn.execute(
                """INSERT INTO users.overall_insights
                       (user_id, payload, data_hash, variant_offset, generated_at)
                   VALUES ($1, $2::jsonb, $3, $4, $5)
                   ON CONFLICT (user_id) DO UPDATE SET
                       payload = EXCLUDED.payload,
                       data_hash = EXCLUDED.data_hash,
                       variant_offset = EXCLUDED.variant_offset,
                       generated_at = EXCLUDED.generated_at""",
                UUID(user_id), json.dumps(payload), data_hash, variant_offset, generated_at,
            )
