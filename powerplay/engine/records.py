"""
Engine outputs: ball, over, innings and match records.
"""
import enum
from dataclasses import dataclass, field
from typing import Optional

from powerplay.engine.profile import MatchConditions, PlayerSkillProfile

OVERS_PER_INNINGS = 20
BALLS_PER_OVER = 6
WICKETS_PER_INNINGS = 10


@dataclass(frozen=True)
class BallOutcome:
    """Result of a single ball"""
    runs: int = 0
    is_wicket: bool = False
    is_boundary: bool = False
    extras: int = 0  # not modelled yet
    wicket_type: Optional[str] = None
    commentary: str = ""
    batter: str = ""
    bowler: str = ""

    @property
    def is_six(self) -> bool:
        return self.is_boundary and self.runs == 6

    @property
    def is_four(self) -> bool:
        return self.is_boundary and self.runs == 4

    def __str__(self):
        if self.is_wicket:
            return "W"
        return str(self.runs) if self.runs else "."


@dataclass(frozen=True)
class OverRecord:
    """One over: its balls, totals, bowler and the batsmen who started it"""
    number: int
    balls: tuple[BallOutcome, ...]
    runs: int
    wickets: int
    bowler: str
    batsmen: tuple[str, str]

    @property
    def is_complete(self) -> bool:
        return len(self.balls) == BALLS_PER_OVER

    def __str__(self):
        return " ".join(str(b) for b in self.balls)


@dataclass
class BatterInnings:
    """Tracks a batter's innings"""
    player: PlayerSkillProfile
    runs: int = 0
    balls: int = 0
    fours: int = 0
    sixes: int = 0
    is_out: bool = False
    dismissal: str = ""
    bowler: Optional[str] = None

    @property
    def strike_rate(self) -> float:
        if self.balls == 0:
            return 0.0
        return (self.runs / self.balls) * 100


@dataclass
class BowlerSpell:
    """Tracks a bowler's spell"""
    player: PlayerSkillProfile
    overs: int = 0
    balls: int = 0
    runs: int = 0
    wickets: int = 0

    @property
    def overs_display(self) -> str:
        return f"{self.overs}.{self.balls}"

    @property
    def economy(self) -> float:
        total_balls = self.overs * BALLS_PER_OVER + self.balls
        if total_balls == 0:
            return 0.0
        return (self.runs / total_balls) * BALLS_PER_OVER


@dataclass
class InningsRecord:
    """Running, then final, state of one side's innings"""
    batting_team: str
    bowling_team: str
    runs: int = 0
    wickets: int = 0
    overs: int = 0  # completed overs
    balls: int = 0  # legal balls into a truncated final over
    target: Optional[int] = None
    over_records: list[OverRecord] = field(default_factory=list)
    batters: dict = field(default_factory=dict)  # profile -> BatterInnings
    bowlers: dict = field(default_factory=dict)  # profile -> BowlerSpell

    @property
    def overs_display(self) -> str:
        return f"{self.overs}.{self.balls}" if self.balls else str(self.overs)

    @property
    def total_balls(self) -> int:
        return self.overs * BALLS_PER_OVER + self.balls

    @property
    def run_rate(self) -> float:
        if self.total_balls == 0:
            return 0.0
        return (self.runs / self.total_balls) * BALLS_PER_OVER

    @property
    def all_out(self) -> bool:
        return self.wickets >= WICKETS_PER_INNINGS

    @property
    def chase_won(self) -> bool:
        # target is first innings + 1, so reaching it means strictly exceeding
        return self.target is not None and self.runs >= self.target

    @property
    def is_complete(self) -> bool:
        return self.all_out or self.overs >= OVERS_PER_INNINGS or self.chase_won

    def __str__(self):
        return f"{self.batting_team} {self.runs}/{self.wickets} ({self.overs_display} ov)"


class MatchResultType(enum.Enum):
    WON_BY_RUNS = "won_by_runs"
    WON_BY_WICKETS = "won_by_wickets"
    TIED = "tied"


@dataclass(frozen=True)
class MatchRecord:
    """Final result of a match"""
    team1: str
    team2: str
    innings: tuple[InningsRecord, InningsRecord]
    winner: Optional[str]  # None for a tie
    result: MatchResultType
    margin: str
    summary: str
    conditions: Optional[MatchConditions] = None
    is_quick: bool = False

    @property
    def first_innings(self) -> InningsRecord:
        return self.innings[0]

    @property
    def second_innings(self) -> InningsRecord:
        return self.innings[1]

    @property
    def is_tie(self) -> bool:
        return self.result == MatchResultType.TIED
