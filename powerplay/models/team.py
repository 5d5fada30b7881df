from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from powerplay.database import Base


class Team(Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    short_name: Mapped[str] = mapped_column(String(5))  # e.g., "MT", "CK"
    city: Mapped[str] = mapped_column(String(50))
    home_ground: Mapped[str] = mapped_column(String(100))

    # Relationships
    players: Mapped[list["Player"]] = relationship("Player", back_populates="team")

    @property
    def squad_size(self) -> int:
        return len(self.players)

    @property
    def playing_xi(self) -> list["Player"]:
        """Players with a batting position, in batting order"""
        picked = [p for p in self.players if p.batting_position is not None]
        return sorted(picked, key=lambda p: p.batting_position)

    def __repr__(self):
        return f"<Team {self.name} ({self.short_name})>"
