from .drills import DRILL_LIBRARY, pick_drill
from .guard import validate_overall_cards, validate_post_round_messages
from .overall_cards import build_overall_card_plan, build_overall_cards
from .pipeline import (
    build_overall_insights_payload,
    generate_overall_cards,
    generate_post_round_insights,
)
from .post_round import build_post_round_plan, render_post_round_messages
from .refresh import should_refresh
from .variants import pick_variant, resolve_variant_offset

__all__ = [
    "DRILL_LIBRARY",
    "pick_drill",
    "validate_overall_cards",
    "validate_post_round_messages",
    "build_overall_card_plan",
    "build_overall_cards",
    "build_overall_insights_payload",
    "generate_overall_cards",
    "generate_post_round_insights",
    "build_post_round_plan",
    "render_post_round_messages",
    "should_refresh",
    "pick_variant",
    "resolve_variant_offset",
]
