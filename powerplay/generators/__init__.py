from powerplay.generators.player_generator import PlayerGenerator
from powerplay.generators.team_generator import TeamGenerator

__all__ = ["PlayerGenerator", "TeamGenerator"]
