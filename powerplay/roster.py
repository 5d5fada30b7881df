"""
Roster repository: the only place stored players become engine lineups.

The engine never reads the database. Callers construct a RosterRepository
around a session and hand the resulting TeamSheets to the MatchEngine.
"""
import logging

from sqlalchemy.orm import Session

from powerplay.engine.profile import TeamSheet
from powerplay.exceptions import TeamNotFoundError
from powerplay.models.player import Player
from powerplay.models.team import Team

logger = logging.getLogger(__name__)


class RosterRepository:
    def __init__(self, session: Session):
        self.session = session

    def list_teams(self) -> list[Team]:
        return self.session.query(Team).order_by(Team.id).all()

    def get_team(self, team_id: int) -> Team:
        team = self.session.get(Team, team_id)
        if team is None:
            raise TeamNotFoundError(team_id)
        return team

    def lineup(self, team_id: int) -> TeamSheet:
        """
        The team's playing XI as a TeamSheet.

        Uses the stored batting order when one exists, otherwise falls back
        to the whole squad ordered by batting skill. The engine validates
        the size; nothing is padded here.
        """
        team = self.get_team(team_id)
        players = team.playing_xi
        if not players:
            players = sorted(team.players, key=lambda p: p.batting_average_skill, reverse=True)[:11]
            logger.debug("%s has no stored XI, using top %d batsmen", team.name, len(players))
        return TeamSheet(name=team.name, players=[p.to_profile() for p in players])

    def add_team(self, team: Team, players: list[Player]) -> Team:
        """Save a team and its squad; players keep their batting positions"""
        team.players = list(players)
        self.session.add(team)
        self.session.commit()
        self.session.refresh(team)
        return team
