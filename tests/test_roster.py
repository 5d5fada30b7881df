"""
Tests for the roster repository: stored teams become engine lineups.

Run with: pytest tests/test_roster.py -v
"""

import random

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from powerplay.database import init_db
from powerplay.engine.profile import PlayerSkillProfile, TeamSheet
from powerplay.exceptions import TeamNotFoundError
from powerplay.generators import TeamGenerator
from powerplay.roster import RosterRepository


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    init_db(bind=engine)
    db = sessionmaker(bind=engine)()
    yield db
    db.close()


@pytest.fixture
def repo(session):
    return RosterRepository(session)


def add_generated_team(repo: RosterRepository, index: int = 0, seed: int = 1):
    team, players = TeamGenerator.create_team(index, rng=random.Random(seed))
    return repo.add_team(team, players)


class TestRosterRepository:
    """Teams in, TeamSheets out"""

    def test_list_teams_in_id_order(self, repo):
        add_generated_team(repo, 2)
        add_generated_team(repo, 0)

        names = [t.name for t in repo.list_teams()]
        assert names == ["Bangalore Warriors", "Mumbai Titans"]

    def test_get_missing_team_raises(self, repo):
        with pytest.raises(TeamNotFoundError) as exc_info:
            repo.get_team(42)
        assert exc_info.value.team_id == 42
        assert "42" in str(exc_info.value)

    def test_lineup_follows_batting_order(self, repo):
        team = add_generated_team(repo)
        sheet = repo.lineup(team.id)

        assert isinstance(sheet, TeamSheet)
        assert sheet.name == team.name
        assert len(sheet) == 11
        assert all(isinstance(p, PlayerSkillProfile) for p in sheet.players)

        expected = [p.name for p in sorted(team.players, key=lambda p: p.batting_position)]
        assert [p.name for p in sheet.players] == expected

    def test_lineup_profiles_mirror_rows(self, repo):
        team = add_generated_team(repo)
        by_id = {p.id: p for p in team.players}

        for profile in repo.lineup(team.id).players:
            row = by_id[profile.player_id]
            assert profile.role == row.role
            assert profile.batting_vs_spin == row.batting_vs_spin
            assert profile.bowling_type == row.bowling_type
            assert profile.control == row.control

    def test_lineup_without_batting_order_uses_best_batsmen(self, repo, session):
        team = add_generated_team(repo)
        for player in team.players:
            player.batting_position = None
        session.commit()

        sheet = repo.lineup(team.id)
        skills = [(p.batting_vs_spin + p.batting_vs_seam) // 2 for p in sheet.players]
        assert len(sheet) == 11
        assert skills == sorted(skills, reverse=True)

    def test_lineup_of_missing_team_raises(self, repo):
        with pytest.raises(TeamNotFoundError):
            repo.lineup(7)
