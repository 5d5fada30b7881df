from powerplay.engine.match_engine import MatchEngine
from powerplay.engine.profile import (
    BowlingType,
    MatchConditions,
    PitchType,
    PlayerRole,
    PlayerSkillProfile,
    TeamSheet,
    Weather,
)
from powerplay.engine.rating import contextual_rating, display_band

__all__ = [
    "MatchEngine",
    "BowlingType",
    "MatchConditions",
    "PitchType",
    "PlayerRole",
    "PlayerSkillProfile",
    "TeamSheet",
    "Weather",
    "contextual_rating",
    "display_band",
]
