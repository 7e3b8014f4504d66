"""Paraphrase tables for every narrative outcome.

Each outcome maps to an ordered list of interchangeable templates; the
variant picker chooses one by seed and offset. Adding a paraphrase is a data
change only. Placeholders are filled with ``str.format``.
"""

from __future__ import annotations

import re
from typing import Dict, List, Tuple

# ================================================================
# Post-round: insight 1 (best area)
# ================================================================

POST_ROUND_INSIGHT1: Dict[str, List[str]] = {
    "score_only": [
        "Your scorecard for this round does not separate one part of your game from another yet.",
        "This one goes into your scoring history as a total, which keeps your trend up to date.",
        "Your total is logged, so this round already counts toward your scoring trend.",
        "With just the total on your card, this round feeds your scoring trend rather than one part of your game.",
        "Your score is in the books and adds another data point to your trend.",
    ],
    "best_positive": [
        "{label} was your strongest area, worth about {n} {strokes}{evidence}.",
        "Your best work came from {label_lower}, which picked up about {n} {strokes}{evidence}.",
        "{label} led your round, adding about {n} {strokes}{evidence}.",
        "{label} gave you the biggest boost at about {n} {strokes}{evidence}.",
        "You got the most out of {label_lower}, gaining about {n} {strokes}{evidence}.",
    ],
    "best_positive_penalties": [
        "You kept penalties off your card and saved about {n} {strokes}{evidence}.",
        "Your penalty avoidance was the bright spot, saving about {n} {strokes}{evidence}.",
        "Staying clear of penalties saved you about {n} {strokes}{evidence}.",
        "Your risk control held up, with penalty avoidance worth about {n} {strokes}{evidence}.",
        "You protected your card from penalties and picked up about {n} {strokes}{evidence}.",
    ],
    "best_neutral": [
        "{label} finished close to even for you{evidence}.",
        "{label} held steady for you right around even{evidence}.",
        "{label} landed near even for you{evidence}, which gives you a solid base.",
        "{label} was your steadiest area, finishing about even{evidence}.",
        "{label} came in right at your usual level{evidence}.",
    ],
    "best_negative": [
        "{label} held up best for you, finishing about {n} {strokes} under your usual level{evidence}.",
        "{label} was your steadiest area even at about {n} {strokes} below your usual level{evidence}.",
        "Your best area was {label_lower}, which came in about {n} {strokes} short of your usual level{evidence}.",
        "{label} gave up the least for you, about {n} {strokes} below your norm{evidence}.",
        "{label} stayed closest to your usual level at about {n} {strokes} under it{evidence}.",
    ],
    "single": [
        "{label} was the one area measured for you this round{evidence}.",
        "You have {label_lower} measured for this round{evidence}, and nothing else to compare it with.",
        "Only {label_lower} was measured for you this round{evidence}.",
        "Your card for this round measures {label_lower}{evidence} and no other area.",
        "{label} is the single area with numbers for you this round{evidence}.",
    ],
}

# ================================================================
# Post-round: insight 2 (opportunity)
# ================================================================

POST_ROUND_INSIGHT2: Dict[str, List[str]] = {
    "score_only_first": [
        "This is your first round in this format, so you have no recent average to compare it with yet.",
        "You have no recent average in this format yet, so this round sets your starting point.",
        "This round gives you a starting point, and your next rounds will show where your scoring is heading.",
        "You are just getting started in this format, so your recent average builds from here.",
        "Your scoring trend starts with this round, and each new one sharpens the picture.",
    ],
    "score_only_better": [
        "You came in about {n} {strokes} under your recent average. Keep logging your rounds to see where the gain came from.",
        "Your score beat your recent average by about {n} {strokes}.",
        "You finished about {n} {strokes} better than your recent average, a clear step forward for you.",
        "This round came in about {n} {strokes} below your recent average, so your scoring moved the right way.",
        "You improved on your recent average by about {n} {strokes} this round.",
    ],
    "score_only_near": [
        "Your score landed right around your recent average.",
        "You finished in line with your recent scoring.",
        "This round sits inside your normal scoring range, close to your recent average.",
        "Your scoring held steady against your recent average.",
        "You matched your recent average closely this round.",
    ],
    "score_only_worse": [
        "You finished about {n} {strokes} over your recent average.",
        "Your score came in about {n} {strokes} above your recent average.",
        "This round ran about {n} {strokes} higher than your recent average for you.",
        "You were about {n} {strokes} above your usual scoring this round.",
        "Your total sat about {n} {strokes} over your recent average.",
    ],
    "single": [
        "You only have one area measured this round, so there is nothing to rank it against yet.",
        "With one measured area, you do not have a second one to compare it with yet.",
        "Your round has a single measured area, so no clear focus stands out yet.",
        "You need at least two measured areas before one can be ranked as your focus.",
        "One measured area gives you a start, and a second one will let you compare them.",
    ],
    "neutral": [
        "{label} finished close to even for you this round.",
        "{label} came in near your usual level this round.",
        "{label} stayed right around even for you.",
        "{label} held steady for you at about your normal level.",
        "{label} was your lowest area, and it still landed near even for you.",
    ],
    "trailing": [
        "{label} trailed the rest of your game slightly, about {n} {strokes} under your usual level.",
        "{label} came in a little below your norm, about {n} {strokes} under.",
        "Your lowest area was {label_lower}, slightly under your usual level by about {n} {strokes}.",
        "{label} slipped a touch for you, landing about {n} {strokes} below your usual level.",
        "{label} sat just under your normal level this round, by about {n} {strokes}.",
    ],
    "positive": [
        "{label} was your lowest area and still came out ahead for you by about {n} {strokes}.",
        "Even your lowest area, {label_lower}, finished about {n} {strokes} on the plus side for you.",
        "{label} ranked last for you and still gained about {n} {strokes}.",
        "Every measured area helped you, and {label_lower} still added about {n} {strokes}.",
        "{label} trailed your other areas but stayed positive for you at about {n} {strokes}.",
    ],
    "leak": [
        "{label} cost you the most this round, about {n} {strokes}{evidence}.",
        "Your biggest leak was {label_lower} at about {n} {strokes}{evidence}.",
        "{label} was where you lost the most, about {n} {strokes}{evidence}.",
        "{label} was the biggest drag on your score at about {n} {strokes}{evidence}.",
        "The largest loss for you came from {label_lower}, about {n} {strokes}{evidence}.",
    ],
    "leak_penalties": [
        "Penalties cost you the most this round, about {n} {strokes}{evidence}.",
        "Your biggest leak was penalties at about {n} {strokes}{evidence}.",
        "Penalty strokes were your largest loss at about {n} {strokes}{evidence}.",
        "You lost the most to penalties, about {n} {strokes}{evidence}.",
        "Penalties were the biggest drag on your card at about {n} {strokes}{evidence}.",
    ],
    "short_game_inferred": [
        "Your short game most likely cost you about {n} {strokes} that your other numbers do not account for.",
        "About {n} {strokes} slipped away outside your measured areas, which suggests your short game cost you.",
        "Your other numbers do not explain about {n} {strokes}, so your short game likely lost you those.",
        "Your short game may be where you lost about {n} {strokes}, since your measured areas do not show them.",
        "The gap your numbers leave points to your short game, which likely cost you about {n} {strokes}.",
    ],
}

RESIDUAL_SUFFIX: Dict[str, List[str]] = {
    "positive": [
        "You also picked up about {n} strokes in parts of your game your numbers do not capture.",
        "Another {n} strokes or so came your way from shots your numbers do not capture.",
        "Your numbers miss about {n} strokes you gained elsewhere in the round.",
        "About {n} more strokes went your way outside the measured areas.",
        "You gained roughly {n} more strokes in places your numbers do not show.",
    ],
    "negative": [
        "About {n} more strokes came from parts of your game your numbers do not capture.",
        "Another {n} strokes or so slipped by outside your measured areas.",
        "Your numbers do not explain about {n} more strokes from this round.",
        "Roughly {n} extra strokes came from shots your numbers do not show.",
        "About {n} more strokes sit outside what your numbers capture.",
    ],
}

# ================================================================
# Post-round: insight 3 (next-round action)
# ================================================================

TRACK_CLAUSES: List[str] = [
    "Next round, track {stats} so you can see where your strokes come from.",
    "Next round, log {stats} so your strengths and gaps show up clearly.",
    "Next round, record {stats} to give your next review more detail.",
    "Next round, enter {stats} on your card so you get a clearer read on your game.",
    "Next round, capture {stats} so your feedback matches how you played.",
    "Next round, note {stats} on your card so you can spot what helped most.",
]

GENERAL_ACTIONS: List[str] = [
    "Pick the widest target on every full swing and commit to your start line.",
    "Make your decision early and swing to one specific target without second guessing.",
    "When a shot feels tight, widen your target until a miss still leaves you a playable next shot.",
    "Treat each hole as a two-shot plan where your first job is keeping the ball in play.",
    "Choose the line that keeps your common miss playable, even if it leaves a longer next shot.",
    "Stick to your full routine on every swing and let the result be what it is.",
]

DRILL_MESSAGES: List[str] = [
    "Next round focus: {action} That will help you {benefit}. Goal: {goal}",
    "Your focus before next round: {action} This will help you {benefit}. Goal: {goal}",
    "Next round focus for you: {action} Doing this will help you {benefit}. Goal: {goal}",
    "Put your focus here before next round: {action} It will help you {benefit}. Goal: {goal}",
    "Practice focus for your next round: {action} The payoff is that it will help you {benefit}. Goal: {goal}",
]

POST_ROUND_FALLBACK: Dict[str, str] = {
    "insight1": "{score_sentence} Your round is saved and counts toward your trends.",
    "insight2": "You can review this round alongside your recent ones to see how your scoring is moving.",
    "insight3": "Next round: Stick to your full routine on every swing and let the result be what it is.",
}

# ================================================================
# Overall cards
# ================================================================

CARD_PREFIXES: Tuple[str, ...] = (
    "Scoring trend:",
    "Strength:",
    "Opportunity:",
    "Priority first:",
    "On-course strategy:",
    "Projection:",
)

CARD1: Dict[str, List[str]] = {
    "empty": [
        "log your first round to start your scoring trend.",
        "your trend starts once you log your first round.",
        "add your first round and your scoring trend begins.",
        "you have no rounds logged yet, so your trend starts with the next one.",
        "your first logged round sets the starting point for your trend.",
    ],
    "A": [
        "your latest round was {latest}. Keep logging rounds so your average reflects your true scoring.",
        "your latest round was {latest}. A few more rounds will give you a reliable average.",
        "you posted {latest} last time out. Add more rounds so your recent and overall scoring can be compared.",
        "your most recent score was {latest}. Keep building your history so your trend settles.",
        "you shot {latest} in your latest round. More rounds will turn your trend into a clear signal.",
    ],
    "B": [
        "your latest round was {latest}, and your recent scoring is level with your overall average.",
        "you shot {latest} last time out, and your recent rounds are matching your overall average.",
        "your latest round was {latest}. Your recent scoring is holding steady against your overall average.",
        "you posted {latest} most recently, right in step with your overall average.",
        "your latest score was {latest}, and your recent pace is in line with your overall average.",
    ],
    "C": [
        "your latest round was {latest}, and your recent average is {delta} strokes better than your overall average.",
        "you shot {latest} last time out, and your recent scoring is running {delta} strokes under your overall average.",
        "your latest round was {latest}. Your recent rounds are beating your overall average by {delta} strokes.",
        "you posted {latest} most recently, and your recent average sits {delta} strokes below your overall average.",
        "your latest score was {latest}, with your recent scoring {delta} strokes ahead of your overall average.",
    ],
    "D": [
        "your latest round was {latest}, and your recent average is {delta} strokes above your overall average.",
        "you shot {latest} last time out, and your recent scoring is running {delta} strokes over your overall average.",
        "your latest round was {latest}. Your recent rounds are {delta} strokes higher than your overall average.",
        "you posted {latest} most recently, and your recent average sits {delta} strokes above your overall average.",
        "your latest score was {latest}, with your recent scoring {delta} strokes behind your overall average.",
    ],
}

CARD2: Dict[str, List[str]] = {
    "A": [
        "log a few more rounds with your full stats so your strongest area can be named.",
        "your strongest area shows up once a few more rounds include your full stats.",
        "you need a few more rounds with complete stats before your top area stands out.",
        "keep recording your full stats and your best area will surface in a few rounds.",
        "your best area is not clear yet, so keep logging complete rounds.",
    ],
    "B": [
        "{label} is your clearest edge over your overall average right now. Keep leaning on it.",
        "{label} is giving you the biggest scoring advantage in your recent rounds.",
        "{label} is where you are winning the most strokes against your overall average.",
        "{label} is separating your recent scores from your overall average. Protect it under pressure.",
        "{label} is your most dependable scoring asset in your recent stretch.",
    ],
    "C": [
        "{label} leads your other areas against your overall average, even if the gap is small.",
        "{label} is slightly ahead of your other areas in your recent rounds.",
        "{label} is your front-runner right now. Keep it steady and repeatable.",
        "{label} ranks first for you in your recent stretch.",
        "{label} is your best area relative to your overall average so far.",
    ],
    "D": [
        "{label} leads so far for you, based on a small number of recent rounds.",
        "{label} is your early leader. Keep logging to confirm it.",
        "{label} is on top in your current sample, which is still small.",
        "{label} is your early edge. Repeat the same process next round.",
        "{label} ranks first for you so far, but your recent sample is still small.",
    ],
}

CARD3: Dict[str, List[str]] = {
    "A": [
        "log a few more rounds with your full stats so your biggest gap can be named.",
        "your main area to work on shows up once a few more rounds include your full stats.",
        "you need a few more complete rounds before your lowest area stands out.",
        "keep recording your full stats and your next area to work on will surface.",
        "your lowest area is not clear yet, so keep logging complete rounds.",
    ],
    "B": [
        "{label} is your main leak against your overall average right now. Simplify it first.",
        "{label} is where your strokes are getting away in recent rounds.",
        "{label} is the biggest drag on your recent scores. Make the safe choice there.",
        "{label} is costing you the most against your overall average.",
        "{label} is your clearest leak. Reduce mistakes there before chasing upside.",
    ],
    "C": [
        "{label} has the most upside for you in your current stretch.",
        "{label} is your lowest-ranked area, even without a clear gap.",
        "{label} is the next area for you to push forward.",
        "{label} is where tighter execution pays off most for you right now.",
        "{label} offers your clearest path to lower scores right now.",
    ],
    "D": [
        "{label} looks like your early leak, based on a small number of recent rounds.",
        "{label} is your early gap. Keep logging to confirm it.",
        "{label} is costing you the most so far, but your sample is still small.",
        "{label} ranks last for you so far, with only a few recent rounds behind it.",
        "{label} is your lowest area in a small sample. Keep your decisions simple there.",
    ],
    "E": [
        "{label} ranks lowest for you so far, based on a small number of recent rounds.",
        "{label} sits lowest in your current sample, which is still small.",
        "{label} is your next area to watch. Keep logging to confirm it.",
        "{label} trails your other areas so far, with only a few recent rounds behind it.",
        "{label} is your lowest area in a small sample, without a clear gap yet.",
    ],
}

CARD4: Dict[str, List[str]] = {
    "A": [
        "track {missing} every round so your practice plan is based on complete rounds.",
        "log {missing} each round so your recommendations reflect how you really play.",
        "record {missing} consistently so your scoring gaps show up clearly.",
        "capture {missing} each round so your practice plan stays aligned to your game.",
        "note {missing} on your card each round so your next drill matches what you do on the course.",
    ],
    "B": [
        "{action} Goal: {goal}",
        "start this week's practice here. {action} Goal: {goal}",
        "make this your first practice block. {action} Goal: {goal}",
        "open your next session with this. {action} Goal: {goal}",
        "spend your first ten minutes here. {action} Goal: {goal}",
    ],
    "C": [
        "{action_inline}, then log {missing} each round so your next drill is more precise. Goal: {goal}",
        "{action_inline}, and track {missing} so your recommendations match your game. Goal: {goal}",
        "{action_inline}, then record {missing} so your next focus is sharper. Goal: {goal}",
        "{action_inline}, and log {missing} so your plan stays consistent. Goal: {goal}",
        "{action_inline}, with {missing} tracked each round so your next drill fits better. Goal: {goal}",
    ],
}

CARD5: Dict[str, List[str]] = {
    "track_first": [
        "keep your targets conservative and finish every round with complete stats.",
        "play to wide targets and log your full stats after each round.",
        "use center targets and record your complete stats so your next steps are clearer.",
        "keep your decisions simple and fill in your full stats every round.",
        "commit to safe lines and capture your missing stats across every round.",
    ],
    "off_tee": [
        "choose the tee-shot line that keeps your ball in play, even if it leaves a longer second shot.",
        "favor the widest landing area off the tee and accept your longer second shot.",
        "pick the safe side off the tee and keep your biggest miss out of play.",
        "aim at a conservative tee target and prioritize your in-play starts.",
        "set a fairway corridor for yourself and accept center outcomes.",
    ],
    "approach": [
        "bias your approaches to center targets unless you have a clear scoring number.",
        "default to the middle of the target on your approach shots and accept longer birdie looks.",
        "choose a middle target on your approaches and remove short-side misses.",
        "aim your approaches at the fat side and keep your misses simple.",
        "play your approaches to center targets and skip the tucked pins.",
    ],
    "putting": [
        "prioritize pace on your long putts so every second putt is simple.",
        "on putts outside your make range, roll for a leave inside three feet.",
        "pick a pace target on every long putt and finish close with your first roll.",
        "keep your long putts inside a tight leave zone and clean up.",
        "putt for pace first and keep your second-putt routine simple.",
    ],
    "penalties": [
        "when trouble is in play, take the conservative target that removes your penalty risk.",
        "remove penalty zones from your plan and play to your widest target.",
        "choose the safe line near hazards and accept your longer chances.",
        "when hazards are in play, aim away from them and keep your ball in play.",
        "skip the hero shots near penalty areas and take your simple advance option.",
    ],
    "general": [
        "keep one conservative target rule and apply it to every full swing you make.",
        "pick center targets and take your biggest miss out of play.",
        "choose conservative targets and commit to one routine for your whole round.",
        "aim for wide targets and keep your ball in play all round.",
        "take the safe target on your full shots and repeat it hole after hole.",
    ],
}

CARD6: Dict[str, List[str]] = {
    "A": [
        "your trajectory is {traj}. Upgrade to unlock your projected score and handicap ranges.",
        "your current trajectory is {traj}. Upgrade for your score and handicap projections.",
        "your scoring direction is {traj}. Upgrade to see where your game is headed.",
        "your trend reads {traj}. Upgrade to unlock your projection ranges.",
        "your trajectory is {traj}. Upgrade to view your projected scoring over the next 10 rounds.",
    ],
    "B": [
        "at your current pace, you are on track for about {score} over the next 10 rounds, with your handicap near {hcp}.",
        "your current trend points to about {score} in your next 10 rounds and a handicap around {hcp}.",
        "you are projected to score about {score} over your next 10 rounds, with your handicap near {hcp}.",
        "your scoring pace targets about {score} across the next 10 rounds, with your handicap tracking near {hcp}.",
        "over your next 10 rounds, your trend targets about {score} with your handicap near {hcp}.",
    ],
    "B_score": [
        "at your current pace, you are on track for about {score} over the next 10 rounds.",
        "your current trend points to about {score} in your next 10 rounds.",
        "you are projected to score about {score} over your next 10 rounds.",
        "your scoring pace targets about {score} across the next 10 rounds.",
        "over your next 10 rounds, your trend targets about {score}.",
    ],
    "C": [
        "your trajectory is {traj}. Log at least 10 rounds to unlock your projected ranges.",
        "your trajectory is {traj}. Add rounds to unlock your score and handicap projections.",
        "your trajectory is {traj}. Reach 10 rounds to unlock your projection targets.",
        "your scoring direction is {traj}. Keep logging to unlock your projected score and handicap.",
        "your trend reads {traj}. More rounds will unlock your projection ranges.",
    ],
}

CARD_FALLBACKS: Tuple[str, ...] = (
    "Scoring trend: your rounds are saved, and your trend updates as you log more.",
    "Strength: keep logging your full stats to confirm your strongest area.",
    "Opportunity: keep logging your full stats to confirm your next area to work on.",
    "Priority first: stick to your full routine on every practice swing this week.",
    "On-course strategy: pick wide targets and keep your ball in play.",
    "Projection: keep logging rounds to build your projection.",
)

TRAJECTORY_PHRASES: Dict[str, str] = {
    "improving": "improving",
    "stable": "holding steady",
    "worsening": "trending higher",
    "unknown": "still forming",
}


def clean_text(text: str) -> str:
    """Collapse whitespace and drop spaces before punctuation."""
    text = re.sub(r"\s+([.,!?;:])", r"\1", text)
    text = re.sub(r"\.{2,}", ".", text)
    return re.sub(r"\s+", " ", text).strip()


def render(template: str, **values) -> str:
    return clean_text(template.format(**values))


def inline_sentence(text: str) -> str:
    """Sentence without its closing punctuation, for embedding in another sentence."""
    return clean_text(re.sub(r"[.!?]+$", "", text.strip()))
