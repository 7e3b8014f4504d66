"""Copy validation for rendered narrative text.

The checks look only at the rendered strings and the plan, never at which
template produced them, so hand-written fallback copy is validated the same
way as generated copy.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Set

from models.insights import SGComponent
from models.narrative import (
    ActionType,
    GuardResult,
    NarrativeCard,
    OverallCardPlan,
    PostRoundMessage,
    PostRoundPlan,
    PresentStats,
)

from .selection import AREA_STATS, STAT_LABELS

MAX_MESSAGE_CHARS = 320

AREA_PATTERNS: Dict[SGComponent, re.Pattern] = {
    SGComponent.OFF_TEE: re.compile(
        r"\b(off the tee|tee shots?|tee-shot|driver|driving|drives?|fairways?|fir)\b", re.I
    ),
    SGComponent.APPROACH: re.compile(
        r"\b(approach(es)?|iron play|irons?|greens? in regulation|gir)\b", re.I
    ),
    SGComponent.PUTTING: re.compile(
        r"\b(putts?|putting|putter|on the greens?)\b", re.I
    ),
    SGComponent.PENALTIES: re.compile(
        r"\b(penalt(y|ies)|hazards?|ob|out of bounds)\b", re.I
    ),
    SGComponent.SHORT_GAME: re.compile(
        r"\b(short game|around the greens?|chips?|chipping|pitch(es|ing)?|up-and-downs?)\b", re.I
    ),
}

SUPPORT_COUNTS: Dict[str, re.Pattern] = {
    "fir": re.compile(r"\b\d+\s+(?:fairways? hit|fairways?|fir)\b", re.I),
    "gir": re.compile(r"\b\d+\s+(?:greens? in regulation|gir)\b", re.I),
    "putts": re.compile(r"\b\d+\s+putts?\b", re.I),
    "penalties": re.compile(r"\b\d+\s+penalt(?:y|ies)\b", re.I),
}

EMOJI_RE = re.compile(
    "[ℹ←-⇿⌀-⏿☀-➿⬀-⯿️\U0001f000-\U0001faff]"
)
SECOND_PERSON_RE = re.compile(r"\b(you|your|you're|yourself)\b", re.I)
THIRD_PERSON_RE = re.compile(r"\b(the player|players?|player's|golfers?|he|she|his|her|him)\b", re.I)
VAGUE_RE = re.compile(
    r"\b(ball striking|ball-striking|overall performance|competitive edge|room for improvement)\b", re.I
)
PLACEHOLDER_RE = re.compile(r"\b(that area|tracked data|tracked stats)\b", re.I)
SG_TERMS_RE = re.compile(r"\b(strokes gained|strokes-gained|residual|breakdown|sg)\b", re.I)
INTERNAL_KEY_RE = re.compile(r"to_par|score_display|par_phrase|[{}]")
TEMPLATE_LABEL_RE = re.compile(
    r"\b(primary opportunity|secondary focus|handicap milestone|round summary)\b", re.I
)
LEADING_SCORE_RE = re.compile(r"^\d+\s*\(\s*[+-]?\d+")

WEAKNESS_RE = re.compile(
    r"\b(cost|costs|costing|lost|loss|losses|leak|leaks|leaking|drag|drags|hurt|hurts|missed strokes)\b",
    re.I,
)
NEGATIVE_RE = re.compile(
    r"\b(weak|weakness|weaknesses|struggle[sd]?|struggling|needs work)\b", re.I
)
UNCERTAINTY_RE = re.compile(r"\b(likely|suggests?|may|probably|perhaps)\b", re.I)
DECIMAL_RE = re.compile(r"\d+\.\d+")
MULTI_DECIMAL_RE = re.compile(r"\d+\.\d{2,}")
ABOUT_STROKES_RE = re.compile(r"\babout (\d+) strokes?\b", re.I)

TRACK_VERB_RE = re.compile(r"\b(track|record|log|capture|count|enter|note)\b", re.I)
DRILL_VERB_RE = re.compile(r"\b(practice|drill|run|hit|repeat|use|aim|start)\b", re.I)
BENEFIT_RE = re.compile(r"\b(help|improve|reduce|lower|protect|build|stabilize|tighten)\b", re.I)
SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")

BANNED_TOKENS = (
    "consider",
    "could",
    "might",
    "seems",
    "challenge",
    "needs more focus",
    "significant impact",
    "crucial",
    "moving forward",
    "opportunity for success",
    "enhance scoring",
    "improve your efficiency",
    "keep a close eye on",
    "round context",
    "—",
    "–",
    "&mdash;",
)

DRILL_STOPWORDS = {
    "next", "round", "focus", "the", "and", "with", "that", "this", "from",
    "your", "into", "then", "for", "more", "over", "goal", "every", "each",
}
# Tokens come from the drill's action only; the goal line is shared boilerplate
MIN_DRILL_OVERLAP = 2
MIN_DRILL_COVERAGE = 0.6


# ================================================================
# Text helpers
# ================================================================

def split_sentences(text: str) -> List[str]:
    return [s for s in SENTENCE_SPLIT_RE.split(text.strip()) if s]


def mentioned_areas(text: str) -> Set[SGComponent]:
    return {area for area, pattern in AREA_PATTERNS.items() if pattern.search(text)}


def absent_areas(present: PresentStats) -> Set[SGComponent]:
    """Areas whose underlying stat was not recorded."""
    missing = present.missing()
    return {area for area, stat in AREA_STATS.items() if stat is not None and missing[stat]}


def _drill_tokens(text: str) -> Set[str]:
    return {
        token for token in re.findall(r"[a-z0-9'-]+", text.lower())
        if len(token) >= 4 and token not in DRILL_STOPWORDS
    }


def banned_token(text: str) -> Optional[str]:
    lower = text.lower()
    return next((token for token in BANNED_TOKENS if token in lower), None)


def _copy_violation(text: str, allow_sg_language: bool) -> Optional[str]:
    """Checks shared by every post-round message."""
    if not SECOND_PERSON_RE.search(text):
        return "missing second-person phrasing"
    if THIRD_PERSON_RE.search(text):
        return "third-person phrasing"
    token = banned_token(text)
    if token:
        return f"banned token {token!r}"
    if VAGUE_RE.search(text):
        return "vague wording"
    if PLACEHOLDER_RE.search(text):
        return "placeholder wording"
    if not allow_sg_language and SG_TERMS_RE.search(text):
        return "strokes-gained jargon"
    if INTERNAL_KEY_RE.search(text):
        return "internal key or unrendered placeholder"
    if TEMPLATE_LABEL_RE.search(text):
        return "template label"
    if LEADING_SCORE_RE.search(text):
        return "leading score fragment"
    return None


# ================================================================
# Post-round messages
# ================================================================

def _check_insight1(plan: PostRoundPlan, text: str) -> Optional[str]:
    if UNCERTAINTY_RE.search(text):
        return "insight1 uses uncertainty language for a measured area"
    best = plan.focus.best_name
    if best is None:
        return None
    areas = mentioned_areas(text)
    if best not in areas:
        return f"insight1 does not mention {best.value}"
    if areas - {best}:
        return "insight1 mentions an area other than the best one"
    stat = AREA_STATS.get(best)
    if stat and not SUPPORT_COUNTS[stat].search(text):
        return f"insight1 lacks {stat} evidence"
    return None


def _check_insight2(plan: PostRoundPlan, text: str) -> Optional[str]:
    focus = plan.focus
    if focus.opportunity_name is None:
        if UNCERTAINTY_RE.search(text):
            return "insight2 uses uncertainty language without an inferred area"
        return None

    if focus.opportunity_name not in mentioned_areas(text):
        return f"insight2 does not mention {focus.opportunity_name.value}"

    if focus.short_game_inferred and not UNCERTAINTY_RE.search(text):
        return "insight2 states an inferred area without uncertainty language"
    if not focus.short_game_inferred and UNCERTAINTY_RE.search(text):
        return "insight2 hedges a measured area"

    if focus.opportunity_is_weak:
        if not WEAKNESS_RE.search(text):
            return "insight2 lacks cost wording for a weak area"
        impact = focus.opportunity_impact_strokes_rounded
        if impact is not None and str(impact) not in ABOUT_STROKES_RE.findall(text):
            return f"insight2 does not state about {impact} strokes"
    return None


def _check_insight3(plan: PostRoundPlan, text: str) -> Optional[str]:
    action = plan.action
    if action.type == ActionType.TRACK:
        if not TRACK_VERB_RE.search(text):
            return "tracking action without a tracking verb"
        label = STAT_LABELS.get(action.stat or "", action.stat or "")
        if not label or not re.search(rf"\b{re.escape(label)}\b", text, re.I):
            return "tracking action does not name the stat"
        return None

    if action.type == ActionType.DRILL:
        if action.drill is None:
            return "drill action without a planned drill"
        if "focus" not in text.lower():
            return "drill action without focus framing"
        if not DRILL_VERB_RE.search(text):
            return "drill action without an action verb"
        planned = _drill_tokens(action.drill.action)
        shared = planned & _drill_tokens(text)
        if len(shared) < MIN_DRILL_OVERLAP or len(shared) < MIN_DRILL_COVERAGE * len(planned):
            return "drill action does not match the planned drill"
        sentences = split_sentences(text)
        if len(sentences) < 2 or not BENEFIT_RE.search(sentences[1]):
            return "drill action lacks a benefit sentence"
    return None


def validate_post_round_messages(
    plan: PostRoundPlan, messages: Sequence[PostRoundMessage]
) -> GuardResult:
    """Pass, or fail with the first violated rule."""
    if [m.key for m in messages] != list(plan.insights):
        return GuardResult.failed("message keys do not match the plan")

    absent = absent_areas(plan.present)
    score_only = plan.present.score_only()
    by_key = {m.key: m for m in messages}

    for message in messages:
        slot = plan.insights[message.key]
        text = message.text
        if message.emoji != slot.emoji:
            return GuardResult.failed(f"{message.key} emoji does not match the plan")
        if message.level != slot.level:
            return GuardResult.failed(f"{message.key} level does not match the plan")
        if EMOJI_RE.search(text):
            return GuardResult.failed(f"{message.key} has an emoji in its text")
        if not text.strip():
            return GuardResult.failed(f"{message.key} is empty")
        if len(text) > MAX_MESSAGE_CHARS:
            return GuardResult.failed(f"{message.key} is longer than {MAX_MESSAGE_CHARS} characters")
        if len(split_sentences(text)) > slot.max_sentences:
            return GuardResult.failed(f"{message.key} has too many sentences")

        reason = _copy_violation(text, plan.allow_sg_language)
        if reason:
            return GuardResult.failed(f"{message.key}: {reason}")

        if not plan.focus.opportunity_is_weak and (WEAKNESS_RE.search(text) or NEGATIVE_RE.search(text)):
            return GuardResult.failed(f"{message.key} uses weakness wording without a weak area")

        areas = mentioned_areas(text)
        names_missing_stat = message.key == "insight3" and plan.action.type == ActionType.TRACK
        if not names_missing_stat and areas & absent:
            return GuardResult.failed(f"{message.key} mentions an area that was not tracked")

        if message.key in ("insight1", "insight2"):
            if DECIMAL_RE.search(text):
                return GuardResult.failed(f"{message.key} has a decimal number")
            if score_only and areas:
                return GuardResult.failed(f"{message.key} attributes a skill area in a score-only round")

    checks = (
        ("insight1", _check_insight1),
        ("insight2", _check_insight2),
        ("insight3", _check_insight3),
    )
    for key, check in checks:
        if key in by_key:
            reason = check(plan, by_key[key].text)
            if reason:
                return GuardResult.failed(reason)
    return GuardResult.passed()


# ================================================================
# Overall cards
# ================================================================

def validate_overall_cards(plan: OverallCardPlan, cards: Sequence[NarrativeCard]) -> GuardResult:
    """Pass, or fail with the first violated rule."""
    if len(cards) != len(plan.prefixes):
        return GuardResult.failed(f"expected {len(plan.prefixes)} cards, got {len(cards)}")

    absent = absent_areas(plan.present)
    for index, (prefix, card) in enumerate(zip(plan.prefixes, cards)):
        text = card.text
        if card.prefix != prefix or not text.startswith(prefix):
            return GuardResult.failed(f"card {index + 1} does not start with {prefix!r}")
        if not text[len(prefix):].strip():
            return GuardResult.failed(f"card {index + 1} is empty")
        if EMOJI_RE.search(text):
            return GuardResult.failed(f"card {index + 1} has an emoji")
        if not SECOND_PERSON_RE.search(text):
            return GuardResult.failed(f"card {index + 1} is missing second-person phrasing")
        if THIRD_PERSON_RE.search(text):
            return GuardResult.failed(f"card {index + 1} uses third-person phrasing")
        token = banned_token(text)
        if token:
            return GuardResult.failed(f"card {index + 1} has banned token {token!r}")
        if INTERNAL_KEY_RE.search(text):
            return GuardResult.failed(f"card {index + 1} has an unrendered placeholder")
        if MULTI_DECIMAL_RE.search(text):
            return GuardResult.failed(f"card {index + 1} has a number with two or more decimals")
        if not plan.opportunity_is_weak and (WEAKNESS_RE.search(text) or NEGATIVE_RE.search(text)):
            return GuardResult.failed(f"card {index + 1} uses weakness wording without a weak area")
        if index in (1, 2) and mentioned_areas(text) & absent:
            return GuardResult.failed(f"card {index + 1} mentions an area that was not tracked")
    return GuardResult.passed()
