"""
Engine inputs: rated player snapshots, lineups and match conditions.

These are read-only for the whole match. Anything that reconciles stored
player data into this shape belongs in the roster layer, not here.
"""
import enum
from dataclasses import dataclass, field
from typing import Optional


class PlayerRole(enum.Enum):
    BATSMAN = "batsman"
    BOWLER = "bowler"
    ALL_ROUNDER = "all_rounder"
    WICKET_KEEPER = "wicket_keeper"

    @property
    def bats(self) -> bool:
        return self in (PlayerRole.BATSMAN, PlayerRole.ALL_ROUNDER, PlayerRole.WICKET_KEEPER)

    @property
    def bowls(self) -> bool:
        return self in (PlayerRole.BOWLER, PlayerRole.ALL_ROUNDER)


class BowlingType(enum.Enum):
    FAST = "fast"
    MEDIUM = "medium"
    OFF_SPIN = "off_spin"
    LEG_SPIN = "leg_spin"
    LEFT_ARM_SPIN = "left_arm_spin"
    NONE = "none"

    @property
    def is_spin(self) -> bool:
        return "spin" in self.value


class PitchType(enum.Enum):
    DUSTY = "dusty"      # favours spin
    GREEN = "green"      # favours seam
    FLAT = "flat"
    STANDARD = "standard"


class Weather(enum.Enum):
    SUNNY = "sunny"
    OVERCAST = "overcast"  # swing for the quicks
    RAINY = "rainy"


@dataclass(frozen=True)
class MatchConditions:
    """Pitch and weather for one match"""
    pitch_type: PitchType = PitchType.STANDARD
    weather: Weather = Weather.SUNNY
    venue: str = ""  # display only


@dataclass(frozen=True)
class PlayerSkillProfile:
    """Snapshot of one player's rated attributes for a match"""
    name: str
    role: PlayerRole

    # Base skills (1-100 scale)
    bowling_skill: int = 1
    fielding_skill: int = 1
    wicket_keeping_skill: int = 1

    # Batting (1-100)
    batting_vs_spin: int = 1
    batting_vs_seam: int = 1

    # Bowling sub-attributes (0-100)
    bowling_type: BowlingType = BowlingType.NONE
    pace: int = 0
    spin: int = 0
    control: int = 0

    # Current state
    form: int = 50  # 0-100
    fitness: int = 100  # 0-100
    experience: int = 0  # matches played, open ended

    player_id: Optional[int] = None
    skill_points: Optional[int] = None  # overrides the base skill sum when set

    @property
    def aggregate_skill_points(self) -> int:
        if self.skill_points is not None:
            return self.skill_points
        skills = (
            self.bowling_skill, self.fielding_skill, self.wicket_keeping_skill,
            self.batting_vs_spin, self.batting_vs_seam,
        )
        return sum(max(1, min(100, s)) for s in skills)

    @property
    def can_bowl(self) -> bool:
        return self.role.bowls

    def __str__(self):
        return self.name



XI_SIZE = 11


@dataclass(frozen=True)
class TeamSheet:
    """A side's name and batting-ordered playing XI"""
    name: str
    players: tuple[PlayerSkillProfile, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any sequence, store a tuple
        object.__setattr__(self, "players", tuple(self.players))

    @property
    def bowling_options(self) -> list[PlayerSkillProfile]:
        return [p for p in self.players if p.can_bowl]

    @property
    def playing_xi(self) -> "TeamSheet":
        """The first eleven named; anyone after them sits out"""
        if len(self.players) <= XI_SIZE:
            return self
        return TeamSheet(name=self.name, players=self.players[:XI_SIZE])

    def __len__(self):
        return len(self.players)
