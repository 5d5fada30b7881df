"""Exception hierarchy for the match engine.

Exception tree:
    PowerplayError
    +-- ConfigurationError        (the match cannot be set up as given)
    |   +-- InsufficientLineupError  (a side is short of a valid XI)
    |   +-- NoEligibleBowlerError    (nobody left who may bowl the over)
    +-- MatchStateError           (engine driven out of order)
    +-- TeamNotFoundError         (roster lookup failed)

None of these are retryable: simulation is deterministic given its random
source, so a failed precondition stays failed for that invocation.
"""

from typing import Optional


class PowerplayError(Exception):
    """Base exception for all engine errors."""

    def __init__(self, message: str, *, team: Optional[str] = None):
        self.team = team
        super().__init__(message)


class ConfigurationError(PowerplayError):
    """The match was configured in a way the engine refuses to simulate."""

    pass


class InsufficientLineupError(ConfigurationError):
    """A lineup failed validation (fewer than 11 players, no bowlers).

    ``errors`` carries every validation message, not just the first.
    """

    def __init__(self, message: str, *, team: Optional[str] = None, errors: Optional[list[str]] = None):
        self.errors = list(errors or [])
        super().__init__(message, team=team)


class NoEligibleBowlerError(ConfigurationError):
    """No bowling-capable player with overs remaining for this over."""

    def __init__(self, message: str, *, team: Optional[str] = None, over: Optional[int] = None):
        self.over = over
        super().__init__(message, team=team)


class TeamNotFoundError(PowerplayError):
    """The roster repository has no team with the requested id."""

    def __init__(self, team_id: int):
        self.team_id = team_id
        super().__init__(f"Team {team_id} not found")


class MatchStateError(PowerplayError):
    """A MatchEngine runs one match; it was asked to start another."""

    pass
