"""Reads of analytics round records and writes of their strokes-gained breakdown."""

import asyncpg
import logging
from typing import Dict, List, Optional
from uuid import UUID

from models import RoundRecord, StrokesGainedResult, TeeDefinition
from database.converters import round_record_from_row, strokes_gained_to_row, tee_definition_from_rows
from database.exceptions import NotFoundError

logger = logging.getLogger(__name__)

# Played ratings are only set when the round stores its own values; otherwise
# the tee (loaded separately) is resolved for r.tee_segment.
_ROUND_RECORD_SELECT = """
    SELECT r.id, r.round_date, r.holes_played, r.total_score, r.to_par,
           r.non_par3_holes, r.fir_hit, r.fir_possible, r.gir_hit,
           r.putts, r.penalties, r.handicap_at_round, r.tee_id, r.tee_segment,
           r.course_rating, r.slope_rating, r.par_played AS par,
           r.sg_total, r.sg_off_tee, r.sg_approach, r.sg_putting,
           r.sg_penalties, r.sg_residual, r.sg_confidence, r.sg_partial_analysis
    FROM users.rounds r
"""

_TEE_SELECT = """
    SELECT t.id, t.course_id, t.number_of_holes, t.course_rating, t.slope_rating,
           COALESCE(t.par_total, c.par) AS par_total,
           t.front_course_rating, t.front_slope_rating,
           t.back_course_rating, t.back_slope_rating
    FROM courses.tees t
    LEFT JOIN courses.courses c ON c.id = t.course_id
    WHERE t.id = ANY($1::uuid[])
"""


class RoundRepositoryDB:
    """Async access to the round fields the analytics layer uses."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def _load_tees(self, conn, rows) -> Dict[UUID, TeeDefinition]:
        """Tees (with their course's hole pars) referenced by the given round rows."""
        tee_ids = list({row["tee_id"] for row in rows if row["tee_id"] is not None})
        if not tee_ids:
            return {}
        tee_rows = await conn.fetch(_TEE_SELECT, tee_ids)

        course_ids = list({t["course_id"] for t in tee_rows if t["course_id"] is not None})
        holes_by_course: Dict[UUID, list] = {}
        if course_ids:
            hole_rows = await conn.fetch(
                """SELECT course_id, hole_number, par, handicap FROM courses.holes
                   WHERE course_id = ANY($1::uuid[]) ORDER BY hole_number""",
                course_ids,
            )
            for h in hole_rows:
                holes_by_course.setdefault(h["course_id"], []).append(h)

        return {
            t["id"]: tee_definition_from_rows(t, holes_by_course.get(t["course_id"], []))
            for t in tee_rows
        }

    async def get_round_records(self, user_id: str) -> List[RoundRecord]:
        """All scored rounds for a user, newest first."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                _ROUND_RECORD_SELECT
                + """ WHERE r.user_id = $1 AND r.total_score IS NOT NULL
                      ORDER BY r.round_date DESC, r.id""",
                UUID(user_id),
            )
            tees = await self._load_tees(conn, rows)
        return [round_record_from_row(row, tees.get(row["tee_id"])) for row in rows]

    async def get_round_record(self, round_id: str) -> Optional[RoundRecord]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                _ROUND_RECORD_SELECT + " WHERE r.id = $1",
                UUID(round_id),
            )
            if not row:
                return None
            tees = await self._load_tees(conn, [row])
        return round_record_from_row(row, tees.get(row["tee_id"]))

    async def get_round_owner(self, round_id: str) -> Optional[str]:
        async with self._pool.acquire() as conn:
            user_id = await conn.fetchval(
                "SELECT user_id FROM users.rounds WHERE id = $1", UUID(round_id)
            )
        return str(user_id) if user_id else None

    # ================================================================
    # Update
    # ================================================================

    async def update_strokes_gained(self, round_id: str, result: StrokesGainedResult) -> None:
        """Overwrite the stored breakdown. Safe to repeat with the same result."""
        async with self._pool.acquire() as conn:
            status = await conn.execute(
                """UPDATE users.rounds
                   SET sg_total = $2, sg_off_tee = $3, sg_approach = $4,
                       sg_putting = $5, sg_penalties = $6, sg_residual = $7,
                       sg_confidence = $8, sg_partial_analysis = $9
                   WHERE id = $1""",
                UUID(round_id), *strokes_gained_to_row(result),
            )
            if status == "UPDATE 0":
                raise NotFoundError(f"Round {round_id} not found")
        logger.debug("Stored strokes gained for round %s: total=%s", round_id, result.total)
