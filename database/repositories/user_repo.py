"""Player profile reads from the users.users table."""

import asyncpg
from typing import Optional
from uuid import UUID

from models import PlayerProfile
from database.converters import player_profile_from_row


class UserRepositoryDB:
    """Async reads of the profile fields analytics depends on."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_player_profile(self, user_id: str) -> Optional[PlayerProfile]:
        """Name, current handicap index and premium flag, or None."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """SELECT id, name, handicap_index, is_premium, created_at
                   FROM users.users WHERE id = $1""",
                UUID(user_id),
            )
            return player_profile_from_row(row) if row else None
