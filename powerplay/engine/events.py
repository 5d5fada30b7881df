"""
Live match events.

A streamed match emits, in order: one OverCompleted per over, one
InningsCompleted per innings, then exactly one of MatchCompleted or
MatchCancelled.
"""
import enum
from dataclasses import dataclass
from typing import Optional

from powerplay.engine.records import InningsRecord, MatchRecord, OverRecord


class MatchState(enum.Enum):
    NOT_STARTED = "not_started"
    INNINGS1_IN_PROGRESS = "innings1_in_progress"
    INNINGS1_COMPLETE = "innings1_complete"
    INNINGS2_IN_PROGRESS = "innings2_in_progress"
    INNINGS2_COMPLETE = "innings2_complete"
    MATCH_COMPLETE = "match_complete"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (MatchState.MATCH_COMPLETE, MatchState.CANCELLED)


class EventKind(enum.Enum):
    OVER_COMPLETED = "over"
    INNINGS_COMPLETED = "innings"
    MATCH_COMPLETED = "match"
    MATCH_CANCELLED = "cancelled"


@dataclass(frozen=True)
class OverCompleted:
    innings_number: int
    over: OverRecord
    innings_runs: int
    innings_wickets: int
    kind: EventKind = EventKind.OVER_COMPLETED


@dataclass(frozen=True)
class InningsCompleted:
    innings_number: int
    innings: InningsRecord
    kind: EventKind = EventKind.INNINGS_COMPLETED


@dataclass(frozen=True)
class MatchCompleted:
    record: MatchRecord
    kind: EventKind = EventKind.MATCH_COMPLETED


@dataclass(frozen=True)
class MatchCancelled:
    """The match was stopped on request; there is no result"""
    cancelled_during: MatchState
    innings: tuple[InningsRecord, ...] = ()
    reason: Optional[str] = None
    kind: EventKind = EventKind.MATCH_CANCELLED
