"""
Application configuration
"""
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


def _overs_cap(name: str, default: int) -> Optional[int]:
    """Empty or "none" lifts the cap"""
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    if value.lower() in ("", "none"):
        return None
    return int(value)


class Settings:
    """Settings from environment variables"""

    # Roster store
    DATABASE_PATH: str = os.getenv("DATABASE_PATH", "powerplay.db")

    # Live simulation
    OVER_PACING_SECONDS: float = float(os.getenv("OVER_PACING_SECONDS", "60"))  # 1 minute per over
    MAX_OVERS_PER_BOWLER: Optional[int] = _overs_cap("MAX_OVERS_PER_BOWLER", 4)
    MATCH_SEED: Optional[int] = _optional_int("MATCH_SEED")  # unset = unseeded

    # API
    CORS_ORIGINS: list[str] = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()
    ]

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
