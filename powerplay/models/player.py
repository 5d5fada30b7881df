from typing import Optional
from sqlalchemy import String, Integer, ForeignKey, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from powerplay.database import Base
from powerplay.engine.profile import BowlingType, PlayerRole, PlayerSkillProfile


class Player(Base):
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    age: Mapped[int] = mapped_column(Integer)
    country: Mapped[str] = mapped_column(String(50))
    role: Mapped[PlayerRole] = mapped_column(Enum(PlayerRole))

    # Basic skills (1-100 scale)
    bowling_skill: Mapped[int] = mapped_column(Integer)
    fielding_skill: Mapped[int] = mapped_column(Integer)
    wicket_keeping_skill: Mapped[int] = mapped_column(Integer, default=1)

    # Batting attributes (1-100)
    batting_vs_spin: Mapped[int] = mapped_column(Integer)
    batting_vs_seam: Mapped[int] = mapped_column(Integer)

    # Bowling attributes (0-100)
    bowling_type: Mapped[BowlingType] = mapped_column(Enum(BowlingType), default=BowlingType.NONE)
    pace: Mapped[int] = mapped_column(Integer, default=0)
    spin: Mapped[int] = mapped_column(Integer, default=0)
    control: Mapped[int] = mapped_column(Integer, default=0)

    # Current state
    form: Mapped[int] = mapped_column(Integer, default=50)  # 0-100
    fitness: Mapped[int] = mapped_column(Integer, default=100)  # 0-100
    experience: Mapped[int] = mapped_column(Integer, default=0)  # matches played

    # Optional override of the base-skill sum used by the rating model
    skill_points: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Team relationship; batting_position orders the XI (None = bench)
    team_id: Mapped[Optional[int]] = mapped_column(ForeignKey("teams.id"), nullable=True)
    team: Mapped["Team"] = relationship("Team", back_populates="players")
    batting_position: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    @property
    def batting_average_skill(self) -> int:
        return (self.batting_vs_spin + self.batting_vs_seam) // 2

    def to_profile(self) -> PlayerSkillProfile:
        """Snapshot this row for the match engine"""
        return PlayerSkillProfile(
            name=self.name,
            role=self.role,
            bowling_skill=self.bowling_skill,
            fielding_skill=self.fielding_skill,
            wicket_keeping_skill=self.wicket_keeping_skill or 1,
            batting_vs_spin=self.batting_vs_spin,
            batting_vs_seam=self.batting_vs_seam,
            bowling_type=self.bowling_type or BowlingType.NONE,
            pace=self.pace or 0,
            spin=self.spin or 0,
            control=self.control or 0,
            form=self.form if self.form is not None else 50,
            fitness=self.fitness if self.fitness is not None else 100,
            experience=self.experience or 0,
            player_id=self.id,
            skill_points=self.skill_points,
        )

    def __repr__(self):
        return f"<Player {self.name} ({self.role.value})>"
