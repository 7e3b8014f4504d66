"""Deterministic variant selection.

Indexes come from SHA-256 of the seed string, never from a PRNG, so the
same seed picks the same paraphrase on any interpreter or machine.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any, Optional, Sequence, Tuple

from analytics.stats import to_count

logger = logging.getLogger(__name__)


def seed_index(seed: str, namespace: str) -> int:
    digest = hashlib.sha256(f"{seed}|{namespace}".encode("utf-8")).hexdigest()
    return int(digest[:8], 16)


def pick_variant(
    pool: Sequence[str],
    seed: str,
    namespace: str,
    offset: int = 0,
    fixed_index: Optional[int] = None,
) -> Tuple[str, int]:
    """(template, index) from pool. fixed_index wins over the seed."""
    if not pool:
        raise ValueError(f"Empty variant pool for {namespace}")
    if fixed_index is not None:
        index = fixed_index % len(pool)
    else:
        index = (seed_index(seed, namespace) + to_count(offset)) % len(pool)
    logger.debug("Variant %s -> %d/%d", namespace, index, len(pool))
    return pool[index], index


def resolve_variant_offset(
    previous: Any = None,
    *,
    force_regenerate: bool = False,
    bump_variant: bool = False,
) -> int:
    """Offset for the next generation: the stored one, bumped on an explicit regenerate."""
    offset = to_count(previous)
    if force_regenerate and bump_variant:
        return offset + 1
    return offset
