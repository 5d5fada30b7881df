import asyncio
import inspect
import logging
import random
from typing import Any, Callable, Optional

from powerplay.engine.events import (
    InningsCompleted,
    MatchCancelled,
    MatchCompleted,
    MatchState,
    OverCompleted,
)
from powerplay.engine.over import DEFAULT_MAX_OVERS_PER_BOWLER, CreaseState, OverAggregator
from powerplay.engine.profile import XI_SIZE, MatchConditions, TeamSheet
from powerplay.engine.records import (
    OVERS_PER_INNINGS,
    WICKETS_PER_INNINGS,
    InningsRecord,
    MatchRecord,
    MatchResultType,
)
from powerplay.exceptions import InsufficientLineupError, MatchStateError
from powerplay.validators.lineup_validator import LineupValidator

logger = logging.getLogger(__name__)

# Headline totals for quick results
QUICK_RUNS_RANGE = (120, 220)
QUICK_WICKETS_RANGE = (2, 10)

DEFAULT_PACING_SECONDS = 60.0

Callback = Optional[Callable[[Any], Any]]


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def decide_result(first: InningsRecord, second: InningsRecord) -> tuple:
    """
    Winner, result type, margin and summary from two innings.

    The side batting first wins by runs; the chasing side wins by the
    wickets it had in hand. Equal scores tie.

    Returns:
        (winner or None, MatchResultType, margin, summary)
    """
    if first.runs > second.runs:
        winner = first.batting_team
        margin = _plural(first.runs - second.runs, "run")
        result = MatchResultType.WON_BY_RUNS
    elif second.runs > first.runs:
        winner = second.batting_team
        margin = _plural(WICKETS_PER_INNINGS - second.wickets, "wicket")
        result = MatchResultType.WON_BY_WICKETS
    else:
        return None, MatchResultType.TIED, "Match tied", "Match tied"

    return winner, result, margin, f"{winner} won by {margin}"


class MatchEngine:
    """
    T20 match orchestrator.

    One engine runs one match. Three ways in:

    - simulate_quick(): headline totals drawn at random, no ball-by-ball play
    - simulate_match(): full ball-by-ball match, returned in one go
    - simulate_live(): the same match streamed over by over with a real-time
      pause before each over, observer callbacks and cancellation

    Randomness comes only from the engine's own generator; pass ``seed`` (or
    a ``random.Random``) to replay a match exactly.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        conditions: Optional[MatchConditions] = None,
        pacing_seconds: float = DEFAULT_PACING_SECONDS,
        max_overs_per_bowler: Optional[int] = DEFAULT_MAX_OVERS_PER_BOWLER,
        aggregator: Optional[OverAggregator] = None,
    ):
        self.rng = rng or random.Random(seed)
        self.conditions = conditions
        self.pacing_seconds = pacing_seconds
        self.max_overs_per_bowler = max_overs_per_bowler
        self.aggregator = aggregator or OverAggregator(self.rng, conditions, max_overs_per_bowler)

        self.state = MatchState.NOT_STARTED
        self.innings1: Optional[InningsRecord] = None
        self.innings2: Optional[InningsRecord] = None
        self.record: Optional[MatchRecord] = None

    # --- setup -----------------------------------------------------------

    def _start(self, team1: TeamSheet, team2: TeamSheet) -> tuple[TeamSheet, TeamSheet]:
        """Validate both sides and return the elevens that will play"""
        if self.state != MatchState.NOT_STARTED:
            raise MatchStateError(f"Match already {self.state.value}")

        for team in (team1, team2):
            if len(team) > XI_SIZE:
                logger.info("%s: %d players named, only the first %d play", team.name, len(team), XI_SIZE)
            report = LineupValidator.validate(list(team.playing_xi.players), self.max_overs_per_bowler)
            if not report["valid"]:
                logger.warning("Refusing to start: %s lineup invalid: %s", team.name, "; ".join(report["errors"]))
                raise InsufficientLineupError(
                    f"{team.name}: " + "; ".join(report["errors"]),
                    team=team.name,
                    errors=report["errors"],
                )
            for warning in report["warnings"]:
                logger.info("%s: %s", team.name, warning)

        return team1.playing_xi, team2.playing_xi

    def _transition(self, state: MatchState):
        logger.info("Match state %s -> %s", self.state.value, state.value)
        self.state = state

    def _finish(self, team1: TeamSheet, team2: TeamSheet, is_quick: bool = False) -> MatchRecord:
        winner, result, margin, summary = decide_result(self.innings1, self.innings2)
        self.record = MatchRecord(
            team1=team1.name,
            team2=team2.name,
            innings=(self.innings1, self.innings2),
            winner=winner,
            result=result,
            margin=margin,
            summary=summary,
            conditions=self.conditions,
            is_quick=is_quick,
        )
        self._transition(MatchState.MATCH_COMPLETE)
        logger.info("%s v %s: %s", team1.name, team2.name, summary)
        return self.record

    # --- quick result ----------------------------------------------------

    def _quick_innings(self, batting: TeamSheet, bowling: TeamSheet) -> InningsRecord:
        return InningsRecord(
            batting_team=batting.name,
            bowling_team=bowling.name,
            runs=self.rng.randint(*QUICK_RUNS_RANGE),
            wickets=self.rng.randint(*QUICK_WICKETS_RANGE),
            overs=OVERS_PER_INNINGS,
        )

    def simulate_quick(self, team1: TeamSheet, team2: TeamSheet) -> MatchRecord:
        """Headline result without ball-by-ball play; team1 bats first"""
        team1, team2 = self._start(team1, team2)

        self._transition(MatchState.INNINGS1_IN_PROGRESS)
        self.innings1 = self._quick_innings(team1, team2)
        self._transition(MatchState.INNINGS1_COMPLETE)

        self._transition(MatchState.INNINGS2_IN_PROGRESS)
        self.innings2 = self._quick_innings(team2, team1)
        self.innings2.target = self.innings1.runs + 1
        self._transition(MatchState.INNINGS2_COMPLETE)

        return self._finish(team1, team2, is_quick=True)

    # --- ball by ball ----------------------------------------------------

    def iter_overs(self, batting: TeamSheet, bowling: TeamSheet, innings: InningsRecord):
        """Yield each over of an innings until it is complete"""
        crease = CreaseState.open(batting.players)
        while not innings.is_complete:
            yield self.aggregator.simulate_over(
                batting, bowling, crease, number=innings.overs + 1, innings=innings
            )

    def simulate_innings(self, batting: TeamSheet, bowling: TeamSheet, target: Optional[int] = None) -> InningsRecord:
        """Play a complete innings: 20 overs, all out, or target reached"""
        innings = InningsRecord(batting_team=batting.name, bowling_team=bowling.name, target=target)
        for _ in self.iter_overs(batting, bowling, innings):
            pass
        logger.info("Innings complete: %s", innings)
        return innings

    def simulate_match(self, team1: TeamSheet, team2: TeamSheet) -> MatchRecord:
        """
        Simulate a complete T20 match ball by ball; team1 bats first.

        Raises:
            InsufficientLineupError: a side has fewer than 11 players or too
                few bowlers. Nothing is simulated.
        """
        team1, team2 = self._start(team1, team2)

        self._transition(MatchState.INNINGS1_IN_PROGRESS)
        self.innings1 = self.simulate_innings(team1, team2)
        self._transition(MatchState.INNINGS1_COMPLETE)

        self._transition(MatchState.INNINGS2_IN_PROGRESS)
        self.innings2 = self.simulate_innings(team2, team1, target=self.innings1.runs + 1)
        self._transition(MatchState.INNINGS2_COMPLETE)

        return self._finish(team1, team2)

    # --- streamed --------------------------------------------------------

    @staticmethod
    async def _emit(callback: Callback, event):
        if callback is None:
            return
        result = callback(event)
        if inspect.isawaitable(result):
            await result

    async def _pause(self, cancel_event: asyncio.Event) -> bool:
        """Wait out the pacing interval. True if cancellation was requested."""
        if cancel_event.is_set():
            return True
        if self.pacing_seconds <= 0:
            await asyncio.sleep(0)
            return cancel_event.is_set()
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=self.pacing_seconds)
        except asyncio.TimeoutError:
            return False
        return True

    async def _live_innings(
        self,
        number: int,
        batting: TeamSheet,
        bowling: TeamSheet,
        target: Optional[int],
        on_over: Callback,
        cancel_event: asyncio.Event,
    ) -> Optional[InningsRecord]:
        innings = InningsRecord(batting_team=batting.name, bowling_team=bowling.name, target=target)
        if number == 1:
            self.innings1 = innings
        else:
            self.innings2 = innings

        overs = self.iter_overs(batting, bowling, innings)
        while not innings.is_complete:
            if await self._pause(cancel_event):
                return None
            over = next(overs)
            await self._emit(on_over, OverCompleted(number, over, innings.runs, innings.wickets))

        if cancel_event.is_set():
            return None
        logger.info("Innings complete: %s", innings)
        return innings

    async def _cancel(self, on_cancel: Callback, reason: str):
        cancelled_during = self.state
        self._transition(MatchState.CANCELLED)
        played = tuple(i for i in (self.innings1, self.innings2) if i is not None)
        logger.info("Match cancelled during %s (%s)", cancelled_during.value, reason)
        await self._emit(on_cancel, MatchCancelled(cancelled_during, played, reason))

    async def simulate_live(
        self,
        team1: TeamSheet,
        team2: TeamSheet,
        on_over: Callback = None,
        on_innings: Callback = None,
        on_match: Callback = None,
        on_cancel: Callback = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Optional[MatchRecord]:
        """
        Stream a ball-by-ball match, pausing ``pacing_seconds`` before each over.

        Callbacks receive OverCompleted, InningsCompleted, MatchCompleted and
        MatchCancelled events respectively, and may be coroutines. Setting
        ``cancel_event`` (or cancelling the task) stops the match at the next
        over boundary, including after the final over: no further over, innings or match events fire, on_cancel fires
        once and the engine ends in the CANCELLED state.

        Returns:
            The MatchRecord, or None if the match was cancelled.
        """
        team1, team2 = self._start(team1, team2)
        cancel_event = cancel_event or asyncio.Event()

        try:
            self._transition(MatchState.INNINGS1_IN_PROGRESS)
            first = await self._live_innings(1, team1, team2, None, on_over, cancel_event)
            if first is None:
                await self._cancel(on_cancel, "cancel requested")
                return None
            self._transition(MatchState.INNINGS1_COMPLETE)
            await self._emit(on_innings, InningsCompleted(1, first))

            self._transition(MatchState.INNINGS2_IN_PROGRESS)
            second = await self._live_innings(2, team2, team1, first.runs + 1, on_over, cancel_event)
            if second is None:
                await self._cancel(on_cancel, "cancel requested")
                return None
            self._transition(MatchState.INNINGS2_COMPLETE)
            await self._emit(on_innings, InningsCompleted(2, second))
            if cancel_event.is_set():
                await self._cancel(on_cancel, "cancel requested")
                return None
        except asyncio.CancelledError:
            if not self.state.is_terminal:
                await self._cancel(on_cancel, "task cancelled")
            raise

        record = self._finish(team1, team2)
        await self._emit(on_match, MatchCompleted(record))
        return record
