from powerplay.models.player import Player
from powerplay.models.team import Team

__all__ = [
    "Player",
    "Team",
]
