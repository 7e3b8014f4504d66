"""Round and summary scenarios covering each narrative outcome."""

from datetime import datetime, timezone

from analytics import compute_overall_summaries
from factories import make_round
from models import ScoringMode

SG_ATTRS = ("sg_off_tee", "sg_approach", "sg_putting", "sg_penalties", "sg_residual")


def sg_round(breakdown, **stats):
    """18-hole round at handicap 10 carrying a stored breakdown.

    breakdown is (off_tee, approach, putting, penalties, residual); None
    leaves a component unmeasured.
    """
    fields = dict(zip(SG_ATTRS, breakdown))
    fields["sg_total"] = round(sum(v for v in breakdown if v is not None), 2)
    fields["handicap_at_round"] = 10.0
    fields.update(stats)
    return make_round(**fields)


FULL_STATS = {"fir_hit": 7, "gir_hit": 4, "putts": 33, "penalties": 2}

# name -> (round, recent average score)
SCENARIOS = {
    "score_only_first": (make_round(score=90), None),
    "score_only_worse": (make_round(score=95, to_par=23), 90.0),
    "score_only_better": (make_round(score=85, to_par=13), 90.0),
    "leak": (sg_round((0.6, -1.8, 0.9, 0.4, -0.5), **FULL_STATS), None),
    "positive": (sg_round((0.8, 0.5, 1.2, 0.6, 2.0), **FULL_STATS), None),
    "neutral": (sg_round((0.9, -0.1, 0.4, 0.2, -0.2), **FULL_STATS), None),
    "trailing": (
        sg_round((-0.2, -0.6, 0.1, 1.1, 0.0), fir_hit=7, gir_hit=4, putts=33, penalties=0),
        None,
    ),
    "best_negative": (sg_round((-0.5, -1.5, -0.8, -0.4, -0.8), **FULL_STATS), None),
    "short_game_inferred": (sg_round((0.2, 0.1, -0.3, 0.0, -3.0), **FULL_STATS), None),
    "missing_putts": (
        sg_round((0.5, -1.2, None, 0.3, -0.4), fir_hit=7, gir_hit=8, penalties=2),
        None,
    ),
    "single": (sg_round((None, None, 0.4, None, -2.0), putts=32), None),
    "score_only_near": (make_round(score=91, to_par=19), 90.0),
    "score_only_tracked": (make_round(score=88, to_par=16, **FULL_STATS), 90.0),
    "penalties_best": (sg_round((0.1, -1.4, 0.2, 1.0, -0.3), **FULL_STATS), None),
    "best_neutral": (sg_round((0.2, -0.2, 0.1, 0.0, -0.4), **FULL_STATS), None),
    "leak_penalties": (sg_round((0.5, 0.2, 0.3, -1.6, -0.2), **FULL_STATS), None),
    "unmeasured_gain": (sg_round((0.4, -1.3, 0.2, 0.1, 1.8), **FULL_STATS), None),
    "unmeasured_loss": (sg_round((0.5, -2.2, 0.3, 0.2, -1.6), **FULL_STATS), None),
}


# ================================================================
# Overall summaries
# ================================================================

IMPROVING = [100] * 5 + [90] * 5
WORSENING = [90] * 5 + [100] * 5


def _history(scores, **stats):
    return [make_round(day, score=s, to_par=s - 72, **stats) for day, s in enumerate(scores)]


def _summary(rounds, is_premium):
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    return compute_overall_summaries(rounds, is_premium=is_premium, now=now)[ScoringMode.COMBINED]


def free_summary():
    """Ten score-only rounds, improving by five strokes."""
    return _summary(_history(IMPROVING), False)


def premium_summary():
    return _summary(_history(IMPROVING), True)


def _breakdown_round(day, breakdown, stats):
    fields = dict(zip(SG_ATTRS, breakdown))
    fields["sg_total"] = round(sum(breakdown), 2)
    return make_round(day, handicap_at_round=12.0, **fields, **stats)


def component_summary(recent=(0.5, -1.0, 0.2, 0.0, -0.2), measured_recent=5, stats=FULL_STATS):
    """Premium, ten rounds at handicap 12: five older rounds at zero, then five recent ones.

    Only the newest measured_recent rounds carry the recent breakdown. With the
    defaults, off the tee is the strength and approach the weak area.
    """
    rounds = [_breakdown_round(day, (0.0,) * 5, stats) for day in range(5)]
    for day in range(5, 10):
        if day >= 10 - measured_recent:
            rounds.append(_breakdown_round(day, recent, stats))
        else:
            rounds.append(make_round(day, handicap_at_round=12.0, **stats))
    return _summary(rounds, True)


# name -> (summary builder, card outcomes in prefix order)
CARD_SCENARIOS = {
    "free": (free_summary, ["C", "A", "A", "A", "track_first", "A"]),
    "premium": (premium_summary, ["C", "A", "A", "A", "track_first", "B_score"]),
    "components": (component_summary, ["B", "C", "B", "B", "approach", "B"]),
    "empty": (lambda: _summary([], False), ["empty", "A", "A", "A", "track_first", "A"]),
    "two_rounds": (lambda: _summary(_history([92, 90]), False), ["A", "A", "A", "A", "track_first", "A"]),
    "flat": (lambda: _summary(_history([90] * 10), False), ["B", "A", "A", "A", "track_first", "A"]),
    "worsening": (lambda: _summary(_history(WORSENING), False), ["D", "A", "A", "A", "track_first", "A"]),
    "premium_three_rounds": (
        lambda: _summary(_history([95, 92, 90]), True), ["B", "A", "A", "A", "track_first", "C"],
    ),
    "sparse_weak": (
        lambda: component_summary(measured_recent=2), ["B", "D", "D", "B", "approach", "B"],
    ),
    "sparse_steady": (
        lambda: component_summary((0.8, 0.2, 0.3, 0.1, 0.0), measured_recent=2),
        ["B", "D", "E", "B", "penalties", "B"],
    ),
    "all_gaining": (
        lambda: component_summary((1.4, 0.4, 0.6, 0.2, 0.0)), ["B", "B", "C", "B", "penalties", "B"],
    ),
    "off_tee_leak": (
        lambda: component_summary((-1.0, 0.5, 0.2, 0.0, -0.2)), ["B", "C", "B", "B", "off_tee", "B"],
    ),
    "putting_leak": (
        lambda: component_summary((0.3, 0.2, -1.2, 0.0, 0.0)), ["B", "C", "B", "B", "putting", "B"],
    ),
    "putts_untracked": (
        lambda: component_summary(stats={"fir_hit": 7, "gir_hit": 4, "penalties": 2}),
        ["B", "C", "B", "C", "approach", "B"],
    ),
    "stats_without_breakdown": (
        lambda: _summary(_history([90] * 10, **FULL_STATS), True), ["B", "A", "A", "B", "general", "B_score"],
    ),
}
