"""
Ball outcome simulation.

One delivery is a contest between the striker's batting rating and the
bowler's bowling rating, plus uniform noise. The sum is bucketed through
fixed descending thresholds. Thresholds and the noise range set the shape of
the outcome distribution, so they are kept exactly as tuned.
"""
import random
from typing import Optional

from powerplay.engine.profile import MatchConditions, PlayerRole, PlayerSkillProfile
from powerplay.engine.rating import contextual_rating
from powerplay.engine.records import BallOutcome

NOISE_RANGE = (-5.0, 5.0)

SIX_THRESHOLD = 6
FOUR_THRESHOLD = 4
RUNS_THRESHOLD = 2
DOT_THRESHOLD = 0
SURVIVAL_THRESHOLD = -3  # at or below this the batter is out

DISMISSAL_TYPES = [
    ("bowled", 0.20),
    ("caught", 0.50),
    ("lbw", 0.15),
    ("caught_behind", 0.10),
    ("run_out", 0.03),
    ("stumped", 0.02),
]


def _dismissal(rng: random.Random) -> str:
    kinds = [d[0] for d in DISMISSAL_TYPES]
    weights = [d[1] for d in DISMISSAL_TYPES]
    return rng.choices(kinds, weights=weights, k=1)[0]


def simulate_ball(
    striker: PlayerSkillProfile,
    bowler: PlayerSkillProfile,
    rng: random.Random,
    conditions: Optional[MatchConditions] = None,
) -> BallOutcome:
    """
    Bowl one ball.

    Args:
        striker: Batsman on strike, rated as a batsman.
        bowler: Bowler of the over, rated as a bowler.
        rng: Random source; a seeded generator makes the ball reproducible.
        conditions: Optional pitch/weather context for both ratings.
    """
    batting_rating = contextual_rating(striker, PlayerRole.BATSMAN, conditions)
    bowling_rating = contextual_rating(bowler, PlayerRole.BOWLER, conditions)

    advantage = batting_rating - bowling_rating
    outcome = advantage + rng.uniform(*NOISE_RANGE)

    batter, bowler_name = striker.name, bowler.name

    if outcome > SIX_THRESHOLD:
        return BallOutcome(
            runs=6, is_boundary=True, batter=batter, bowler=bowler_name,
            commentary=f"{batter} hits it out of the park! SIX!",
        )
    if outcome > FOUR_THRESHOLD:
        return BallOutcome(
            runs=4, is_boundary=True, batter=batter, bowler=bowler_name,
            commentary=f"{batter} finds the gap! FOUR!",
        )
    if outcome > RUNS_THRESHOLD:
        runs = rng.randint(1, 3)
        return BallOutcome(
            runs=runs, batter=batter, bowler=bowler_name,
            commentary=f"{batter} takes {runs} run{'s' if runs > 1 else ''}",
        )
    if outcome > DOT_THRESHOLD:
        return BallOutcome(
            batter=batter, bowler=bowler_name,
            commentary=f"Dot ball. Good bowling by {bowler_name}",
        )
    if outcome > SURVIVAL_THRESHOLD:
        return BallOutcome(
            batter=batter, bowler=bowler_name,
            commentary=f"Close call! {batter} survives",
        )

    return BallOutcome(
        is_wicket=True,
        wicket_type=_dismissal(rng),
        batter=batter,
        bowler=bowler_name,
        commentary=f"OUT! {batter} is dismissed by {bowler_name}",
    )
