"""Practice drills keyed by scoring area. Every drill carries a measurable goal."""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from models.insights import SGComponent
from models.narrative import Drill

from .variants import pick_variant

GENERAL_AREA = "general"

DRILL_LIBRARY: Dict[str, List[Drill]] = {
    SGComponent.OFF_TEE.value: [
        Drill(
            area="off_tee",
            action="Pick a fairway target with a 25-yard corridor and hit 12 drives with your full routine.",
            goal="10 of 12 drives finish inside the corridor.",
        ),
        Drill(
            area="off_tee",
            action="Set a start-line gate with two tees in front of your ball and hit 10 drives through it.",
            goal="7 of 10 drives start through the gate.",
        ),
        Drill(
            area="off_tee",
            action="Alternate your driver and 3-wood to one target line and hit 6 balls with each club.",
            goal="9 of 12 balls finish inside a 30-yard corridor.",
        ),
        Drill(
            area="off_tee",
            action="Hit 9 drives at your normal speed and hold your finish for 3 seconds on every swing.",
            goal="9 balanced finishes in a row.",
        ),
        Drill(
            area="off_tee",
            action="Use an intermediate target a few feet ahead of your ball and hit 10 drives over it.",
            goal="8 of 10 drives start on your intended line.",
        ),
        Drill(
            area="off_tee",
            action="Run a two-ball fairway set by hitting two drives back to back with your full routine, 6 times.",
            goal="4 sets where both drives stay in play.",
        ),
    ],
    SGComponent.APPROACH.value: [
        Drill(
            area="approach",
            action="Use one iron to hit 9 approach shots at 3 targets 10 yards apart, in random order with your full routine.",
            goal="6 of 9 balls finish inside 20 feet of the target.",
        ),
        Drill(
            area="approach",
            action="Hit 10 approach shots at the center of your target with your stock swing and ignore the flag.",
            goal="7 of 10 balls finish inside a 30-foot circle.",
        ),
        Drill(
            area="approach",
            action="Run a club-up set by hitting 8 approach shots with one more club than usual and your smooth tempo.",
            goal="6 of 8 balls finish past the front edge.",
        ),
        Drill(
            area="approach",
            action="Start every approach from a new yardage and use your full pre-shot routine for 10 balls.",
            goal="7 of 10 balls finish pin-high or past it.",
        ),
        Drill(
            area="approach",
            action="Aim 10 iron shots at the fat side of a target and hold your finish until the ball lands.",
            goal="8 of 10 balls finish on the safe side of the target.",
        ),
    ],
    SGComponent.PUTTING.value: [
        Drill(
            area="putting",
            action="Hit 10 lag putts from 30 to 40 feet and keep your attention only on pace.",
            goal="8 of 10 putts finish inside 3 feet.",
        ),
        Drill(
            area="putting",
            action="Use a ladder of tees at 20, 30 and 40 feet and roll 3 putts to each with your putter.",
            goal="every putt finishes inside a 3-foot circle.",
        ),
        Drill(
            area="putting",
            action="Run a gate set by putting 15 balls from 6 feet through two tees just wider than your putter head.",
            goal="13 of 15 putts roll through the gate.",
        ),
        Drill(
            area="putting",
            action="Start 5 feet from the hole and hit 4 putts around it, then repeat from 6 and 7 feet with your full routine.",
            goal="10 of 12 putts holed.",
        ),
        Drill(
            area="putting",
            action="Practice your speed on downhill putts by rolling 10 balls that die at the hole.",
            goal="no second putt longer than 3 feet.",
        ),
    ],
    SGComponent.PENALTIES.value: [
        Drill(
            area="penalties",
            action="Practice your safe-side rule by naming the penalty side before each of 12 full swings.",
            goal="11 of 12 misses finish on the safe side.",
        ),
        Drill(
            area="penalties",
            action="Play 9 imaginary holes on the range and aim away from every hazard you name.",
            goal="9 of 9 balls land on the side away from the hazard.",
        ),
        Drill(
            area="penalties",
            action="Use a layup rule for your next 10 risky range shots and pick the club that stays short of the hazard.",
            goal="10 of 10 shots stay short of the hazard.",
        ),
        Drill(
            area="penalties",
            action="Hit 10 punch-out shots to a wide target so your recovery swing is ready near a penalty area.",
            goal="9 of 10 balls finish in play.",
        ),
        Drill(
            area="penalties",
            action="Run a three-ball set that must stay inside a marked out of bounds line and repeat it 5 times with your full routine.",
            goal="4 of 5 sets with no ball past the line.",
        ),
    ],
    SGComponent.SHORT_GAME.value: [
        Drill(
            area="short_game",
            action="Hit 10 chips from the fringe to one landing spot and let your ball release to the hole.",
            goal="7 of 10 chips finish inside 6 feet.",
        ),
        Drill(
            area="short_game",
            action="Use three different lies around the green and hit 3 pitches from each with your stock swing.",
            goal="6 of 9 pitches finish inside 8 feet.",
        ),
        Drill(
            area="short_game",
            action="Run an up-and-down game from 8 random spots around the green with your favorite wedge.",
            goal="4 of 8 up-and-downs completed.",
        ),
        Drill(
            area="short_game",
            action="Practice your landing spot by chipping 12 balls onto a towel a few steps past the fringe.",
            goal="8 of 12 chips land on the towel.",
        ),
        Drill(
            area="short_game",
            action="Aim 10 pitch shots at a bucket from 20 yards and repeat the set with your lob wedge.",
            goal="5 of 10 pitches finish within one club length.",
        ),
    ],
    GENERAL_AREA: [
        Drill(
            area="general",
            action="Practice your full pre-shot routine on 15 balls and pick a new target for each swing.",
            goal="15 of 15 swings with the complete routine.",
        ),
        Drill(
            area="general",
            action="Hit 10 balls to the widest target on the range and commit to your start line before each swing.",
            goal="8 of 10 balls start on your chosen line.",
        ),
        Drill(
            area="general",
            action="Use a tempo count of three on 12 swings to keep your rhythm steady.",
            goal="10 of 12 swings at the same tempo.",
        ),
        Drill(
            area="general",
            action="Start each practice block with 5 balls at half speed, then hit 10 with your full routine.",
            goal="8 of 10 solid strikes.",
        ),
        Drill(
            area="general",
            action="Repeat one target for 10 swings and hold your finish until each ball lands.",
            goal="9 of 10 balanced finishes.",
        ),
    ],
}

# Second sentence of a drill call-to-action
DRILL_BENEFITS: Dict[str, str] = {
    SGComponent.OFF_TEE.value: "start more holes from the short grass",
    SGComponent.APPROACH.value: "set up more birdie looks",
    SGComponent.PUTTING.value: "cut down on three-putts",
    SGComponent.PENALTIES.value: "keep extra strokes off your card",
    SGComponent.SHORT_GAME.value: "turn more missed greens into pars",
    GENERAL_AREA: "settle into a steady rhythm",
}


def drill_area(area: Union[SGComponent, str, None]) -> str:
    if area is None:
        return GENERAL_AREA
    key = area.value if isinstance(area, SGComponent) else str(area)
    if key == SGComponent.RESIDUAL.value:
        key = SGComponent.SHORT_GAME.value
    return key if key in DRILL_LIBRARY else GENERAL_AREA


def pick_drill(
    area: Union[SGComponent, str, None],
    seed: str,
    offset: int = 0,
    fixed_index: Optional[int] = None,
) -> Drill:
    """Deterministic drill for an area; unknown or missing areas get a general drill."""
    key = drill_area(area)
    pool = DRILL_LIBRARY[key]
    _, index = pick_variant(
        [drill.text for drill in pool], seed, f"drill|{key}", offset, fixed_index
    )
    return pool[index]
