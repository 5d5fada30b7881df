"""
Pydantic schemas for API request/response models
"""
from pydantic import BaseModel
from typing import Optional

from powerplay.engine.profile import (
    BowlingType,
    MatchConditions,
    PitchType,
    PlayerRole,
    PlayerSkillProfile,
    TeamSheet,
    Weather,
)
from powerplay.engine.rating import StarColor


# Player / lineup input
class PlayerProfileIn(BaseModel):
    name: str
    role: PlayerRole
    bowling_skill: int = 1
    fielding_skill: int = 1
    wicket_keeping_skill: int = 1
    batting_vs_spin: int = 1
    batting_vs_seam: int = 1
    bowling_type: BowlingType = BowlingType.NONE
    pace: int = 0
    spin: int = 0
    control: int = 0
    form: int = 50
    fitness: int = 100
    experience: int = 0
    skill_points: Optional[int] = None

    def to_profile(self) -> PlayerSkillProfile:
        return PlayerSkillProfile(**self.model_dump())


class ConditionsIn(BaseModel):
    pitch_type: PitchType = PitchType.STANDARD
    weather: Weather = Weather.SUNNY
    venue: str = ""

    def to_conditions(self) -> MatchConditions:
        return MatchConditions(pitch_type=self.pitch_type, weather=self.weather, venue=self.venue)


class TeamSheetIn(BaseModel):
    name: str
    players: list[PlayerProfileIn]

    def to_sheet(self) -> TeamSheet:
        return TeamSheet(name=self.name, players=[p.to_profile() for p in self.players])


# Ratings
class RatingRequest(BaseModel):
    player: PlayerProfileIn
    role: Optional[PlayerRole] = None  # defaults to the player's own role
    conditions: Optional[ConditionsIn] = None


class RatingResponse(BaseModel):
    name: str
    role: PlayerRole
    rating: int
    stars: int
    color: StarColor


# Simulation
class SimulateRequest(BaseModel):
    team1: TeamSheetIn  # bats first
    team2: TeamSheetIn
    conditions: Optional[ConditionsIn] = None
    seed: Optional[int] = None


class BallResponse(BaseModel):
    runs: int
    is_wicket: bool
    is_boundary: bool
    extras: int
    wicket_type: Optional[str] = None
    commentary: str


class OverResponse(BaseModel):
    number: int
    bowler: str
    batsmen: list[str]
    runs: int
    wickets: int
    balls: list[BallResponse]


class BatterLine(BaseModel):
    name: str
    runs: int
    balls: int
    fours: int
    sixes: int
    is_out: bool
    dismissal: str
    strike_rate: float


class BowlerLine(BaseModel):
    name: str
    overs: str
    runs: int
    wickets: int
    economy: float


class InningsResponse(BaseModel):
    batting_team: str
    bowling_team: str
    runs: int
    wickets: int
    overs: str
    run_rate: float
    target: Optional[int] = None
    over_results: list[OverResponse] = []
    batters: list[BatterLine] = []
    bowlers: list[BowlerLine] = []


class MatchResponse(BaseModel):
    team1: str
    team2: str
    innings: list[InningsResponse]
    winner: Optional[str] = None
    result: str
    margin: str
    summary: str
    is_quick: bool


# Roster
class TeamResponse(BaseModel):
    id: int
    name: str
    short_name: str
    city: str
    home_ground: str
    squad_size: int

    class Config:
        from_attributes = True


class LineupPlayer(BaseModel):
    name: str
    role: PlayerRole
    bowling_type: BowlingType
    rating: int
    stars: int
    color: StarColor


class LineupResponse(BaseModel):
    team: str
    players: list[LineupPlayer]
    valid: bool
    errors: list[str]
    warnings: list[str]
