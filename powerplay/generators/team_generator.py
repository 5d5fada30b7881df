"""
Team Generator - fictional T20 franchises with generated squads
"""
import random
from powerplay.engine.profile import TeamSheet
from powerplay.generators.player_generator import PlayerGenerator
from powerplay.models import Player, Team


FRANCHISE_TEAMS = [
    {"name": "Mumbai Titans", "short_name": "MT", "city": "Mumbai", "home_ground": "Wankhede Stadium"},
    {"name": "Chennai Kings", "short_name": "CK", "city": "Chennai", "home_ground": "M.A. Chidambaram Stadium"},
    {"name": "Bangalore Warriors", "short_name": "BW", "city": "Bangalore", "home_ground": "M. Chinnaswamy Stadium"},
    {"name": "Kolkata Knights", "short_name": "KK", "city": "Kolkata", "home_ground": "Eden Gardens"},
    {"name": "Delhi Capitals", "short_name": "DC", "city": "Delhi", "home_ground": "Arun Jaitley Stadium"},
    {"name": "Hyderabad Sunrisers", "short_name": "HS", "city": "Hyderabad", "home_ground": "Rajiv Gandhi Intl. Stadium"},
    {"name": "Rajasthan Royals", "short_name": "RR", "city": "Jaipur", "home_ground": "Sawai Mansingh Stadium"},
    {"name": "Punjab Lions", "short_name": "PL", "city": "Mohali", "home_ground": "PCA Stadium"},
]


class TeamGenerator:
    """Generates franchise teams and their playing XIs"""

    @classmethod
    def create_team(cls, index: int, tier: str = "good", rng=random) -> tuple[Team, list[Player]]:
        """
        Create one franchise and a balanced XI for it.

        Returns:
            (Team, players) - not yet saved to DB
        """
        team = Team(**FRANCHISE_TEAMS[index % len(FRANCHISE_TEAMS)])
        return team, PlayerGenerator.generate_squad(tier=tier, rng=rng)

    @classmethod
    def create_teams(cls, count: int = len(FRANCHISE_TEAMS), rng=random) -> list[tuple[Team, list[Player]]]:
        return [cls.create_team(i, rng=rng) for i in range(count)]

    @classmethod
    def demo_lineups(cls, rng=random) -> tuple[TeamSheet, TeamSheet]:
        """Two random franchises as engine lineups, no database involved"""
        first, second = rng.sample(range(len(FRANCHISE_TEAMS)), 2)
        sheets = []
        for index in (first, second):
            team, players = cls.create_team(index, rng=rng)
            sheets.append(TeamSheet(name=team.name, players=[p.to_profile() for p in players]))
        return sheets[0], sheets[1]
