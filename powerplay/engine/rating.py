"""
Player performance rating.

contextual_rating() folds a player's attributes, role and the match
conditions into a single 1-100 number. display_band() turns any 1-100 rating
into the star count and colour shown on player cards: stars cycle 1-10 every
20 points and the colour moves up one band per cycle.
"""
import enum
import math
from dataclasses import dataclass
from typing import Optional

from powerplay.engine.profile import (
    MatchConditions,
    PitchType,
    PlayerRole,
    PlayerSkillProfile,
    Weather,
)

MIN_RATING = 1
MAX_RATING = 100

# Pitch weights for the batting blend: (vs spin, vs seam)
BATTING_PITCH_WEIGHTS = {
    PitchType.DUSTY: (1.2, 0.8),
    PitchType.GREEN: (0.8, 1.2),
}

# Bowling sub-rating multipliers: (spin bowler, pace bowler)
BOWLING_PITCH_WEIGHTS = {
    PitchType.DUSTY: (1.2, 0.9),
    PitchType.GREEN: (0.9, 1.2),
}

OVERCAST_SWING_BONUS = 3


class StarColor(enum.Enum):
    YELLOW = "yellow"
    RED = "red"
    ORANGE = "orange"
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"  # above 100, unreachable while ratings are clamped


# Inclusive upper bound of each colour band
COLOR_BANDS = [
    (20, StarColor.YELLOW),
    (40, StarColor.RED),
    (60, StarColor.ORANGE),
    (80, StarColor.BLUE),
    (100, StarColor.GREEN),
]


@dataclass(frozen=True)
class StarBand:
    stars: int
    color: StarColor


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _batting_contribution(profile: PlayerSkillProfile, role: PlayerRole, pitch: PitchType) -> float:
    rating = _clamp(profile.fielding_skill, 1, 100) * 0.1
    if role == PlayerRole.WICKET_KEEPER:
        rating += _clamp(profile.wicket_keeping_skill, 1, 100) * 0.1

    spin_weight, seam_weight = BATTING_PITCH_WEIGHTS.get(pitch, (1.0, 1.0))
    rating += _clamp(profile.batting_vs_spin, 1, 100) * 0.2 * spin_weight
    rating += _clamp(profile.batting_vs_seam, 1, 100) * 0.2 * seam_weight
    return rating


def _bowling_contribution(profile: PlayerSkillProfile, pitch: PitchType) -> float:
    control = _clamp(profile.control, 0, 100)
    spin_mult, pace_mult = BOWLING_PITCH_WEIGHTS.get(pitch, (1.0, 1.0))

    if profile.bowling_type.is_spin:
        sub_rating = _clamp(profile.spin, 0, 100) * 0.3 + control * 0.2
        sub_rating *= spin_mult
    else:
        sub_rating = _clamp(profile.pace, 0, 100) * 0.3 + control * 0.2
        sub_rating *= pace_mult

    return _clamp(profile.bowling_skill, 1, 100) * 0.1 + sub_rating


def contextual_rating(
    profile: PlayerSkillProfile,
    role: Optional[PlayerRole] = None,
    conditions: Optional[MatchConditions] = None,
) -> int:
    """
    Rate a player for a role under the given conditions.

    Args:
        profile: The player's attributes.
        role: Role to rate for; defaults to the player's own role. The ball
            simulator rates strikers as batsmen and bowlers as bowlers.
        conditions: Pitch and weather. Without them the pitch is treated as
            standard and weather is ignored.

    Returns:
        Integer rating in [1, 100].
    """
    role = role or profile.role
    pitch = conditions.pitch_type if conditions else PitchType.STANDARD

    rating = max(0, profile.aggregate_skill_points) * 0.5

    if role.bats:
        rating += _batting_contribution(profile, role, pitch)

    if role.bowls:
        rating += _bowling_contribution(profile, pitch)

    rating += (_clamp(profile.form, 0, 100) / 100) * 10
    rating += (_clamp(profile.fitness, 0, 100) / 100) * 5
    rating += min(max(0, profile.experience) / 50, 1) * 10

    if (
        conditions is not None
        and conditions.weather == Weather.OVERCAST
        and role.bowls
        and not profile.bowling_type.is_spin
    ):
        rating += OVERCAST_SWING_BONUS

    return int(_clamp(_round_half_up(rating), MIN_RATING, MAX_RATING))


def star_color(rating: int) -> StarColor:
    for upper, color in COLOR_BANDS:
        if rating <= upper:
            return color
    return StarColor.PURPLE


def display_band(rating: int) -> StarBand:
    """
    Star count and colour for a rating.

    The first band uses ceil(rating / 2). Every later band uses the position
    within its 20-point cycle, so a multiple of 20 shows the full 10 stars of
    the band it tops (40 is 10 red stars, 41 is 1 orange star).
    """
    color = star_color(rating)

    if color == StarColor.PURPLE:
        stars = 10
    elif color == StarColor.YELLOW:
        stars = math.ceil(rating / 2)
    else:
        position = rating % 20 or 20
        stars = math.ceil(position / 2)

    return StarBand(stars=max(1, stars), color=color)


def star_rating(rating: int) -> StarBand:
    """display_band() for raw attributes that may sit outside 1-100"""
    return display_band(int(_clamp(rating, MIN_RATING, MAX_RATING)))
