"""
Tests for streamed matches: event order, pacing and cancellation.

Run with: pytest tests/test_live_match.py -v
"""

import asyncio
import random
import time

import pytest
from powerplay.engine.events import (
    InningsCompleted,
    MatchCancelled,
    MatchCompleted,
    MatchState,
    OverCompleted,
)
from powerplay.engine.match_engine import MatchEngine
from powerplay.engine.over import OverAggregator
from powerplay.engine.profile import BowlingType, PlayerRole, PlayerSkillProfile, TeamSheet
from powerplay.engine.records import BallOutcome


# (batting, bowling skill, pace, control) by role
ROLE_SKILLS = {
    PlayerRole.BATSMAN: (35, 5, 0, 0),
    PlayerRole.WICKET_KEEPER: (35, 5, 0, 0),
    PlayerRole.ALL_ROUNDER: (25, 25, 25, 25),
    PlayerRole.BOWLER: (10, 35, 45, 35),
}


def create_test_team(name: str) -> TeamSheet:
    """Eleven players, six of whom can bowl"""
    roles = [PlayerRole.BATSMAN] * 4 + [PlayerRole.WICKET_KEEPER] + [PlayerRole.ALL_ROUNDER] * 2 + [PlayerRole.BOWLER] * 4
    players = []
    for i, role in enumerate(roles, start=1):
        batting, bowling, pace, control = ROLE_SKILLS[role]
        players.append(PlayerSkillProfile(
            name=f"{name} {i}",
            role=role,
            bowling_skill=bowling,
            fielding_skill=20,
            batting_vs_spin=batting,
            batting_vs_seam=batting,
            bowling_type=BowlingType.MEDIUM if role.bowls else BowlingType.NONE,
            pace=pace,
            control=control,
            form=60,
            fitness=85,
            experience=60,
        ))
    return TeamSheet(name=name, players=players)


TEAM_A = create_test_team("Falcons")
TEAM_B = create_test_team("Ravens")


class EventLog:
    """Collects every event the engine emits, in order"""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def of(self, kind):
        return [e for e in self.events if isinstance(e, kind)]


@pytest.mark.asyncio
async def test_events_arrive_in_match_order():
    log = EventLog()
    engine = MatchEngine(seed=21, pacing_seconds=0)

    record = await engine.simulate_live(TEAM_A, TEAM_B, on_over=log, on_innings=log, on_match=log, on_cancel=log)

    first_overs = len(record.first_innings.over_records)
    second_overs = len(record.second_innings.over_records)
    kinds = [type(e) for e in log.events]
    assert kinds == (
        [OverCompleted] * first_overs
        + [InningsCompleted]
        + [OverCompleted] * second_overs
        + [InningsCompleted, MatchCompleted]
    )
    assert log.of(MatchCompleted)[0].record is record
    assert log.of(MatchCancelled) == []
    assert engine.state == MatchState.MATCH_COMPLETE


@pytest.mark.asyncio
async def test_over_events_carry_running_score():
    log = EventLog()
    engine = MatchEngine(seed=8, pacing_seconds=0)
    await engine.simulate_live(TEAM_A, TEAM_B, on_over=log)

    first_innings = [e for e in log.events if e.innings_number == 1]
    assert [e.over.number for e in first_innings] == list(range(1, len(first_innings) + 1))
    assert sum(e.over.runs for e in first_innings) == first_innings[-1].innings_runs
    assert first_innings[-1].innings_runs == engine.innings1.runs


@pytest.mark.asyncio
async def test_live_match_matches_batch_match():
    live = await MatchEngine(seed=99, pacing_seconds=0).simulate_live(TEAM_A, TEAM_B)
    batch = MatchEngine(seed=99).simulate_match(TEAM_A, TEAM_B)

    assert live.summary == batch.summary
    assert [i.runs for i in live.innings] == [i.runs for i in batch.innings]
    assert live.first_innings.over_records == batch.first_innings.over_records


@pytest.mark.asyncio
async def test_async_callbacks_are_awaited():
    seen = []

    async def on_over(event):
        await asyncio.sleep(0)
        seen.append(event.over.number)

    engine = MatchEngine(seed=3, pacing_seconds=0)
    record = await engine.simulate_live(TEAM_A, TEAM_B, on_over=on_over)
    assert len(seen) == len(record.first_innings.over_records) + len(record.second_innings.over_records)


@pytest.mark.asyncio
async def test_cancel_event_stops_after_current_over():
    log = EventLog()
    cancel = asyncio.Event()

    def on_over(event):
        log(event)
        if len(log.of(OverCompleted)) == 3:
            cancel.set()

    engine = MatchEngine(seed=4, pacing_seconds=0)
    result = await engine.simulate_live(
        TEAM_A, TEAM_B, on_over=on_over, on_innings=log, on_match=log, on_cancel=log, cancel_event=cancel,
    )

    assert result is None
    assert engine.state == MatchState.CANCELLED
    assert len(log.of(OverCompleted)) == 3
    assert log.of(InningsCompleted) == []
    assert log.of(MatchCompleted) == []

    cancelled = log.of(MatchCancelled)
    assert len(cancelled) == 1
    assert cancelled[0].cancelled_during == MatchState.INNINGS1_IN_PROGRESS
    assert cancelled[0].reason == "cancel requested"
    assert len(cancelled[0].innings) == 1
    assert len(cancelled[0].innings[0].over_records) == 3


@pytest.mark.asyncio
async def test_cancel_before_first_over():
    log = EventLog()
    cancel = asyncio.Event()
    cancel.set()

    engine = MatchEngine(seed=4, pacing_seconds=0)
    result = await engine.simulate_live(TEAM_A, TEAM_B, on_over=log, on_cancel=log, cancel_event=cancel)

    assert result is None
    assert log.of(OverCompleted) == []
    assert len(log.of(MatchCancelled)) == 1


@pytest.mark.asyncio
async def test_cancel_during_second_innings():
    log = EventLog()
    cancel = asyncio.Event()

    def on_over(event):
        if event.innings_number == 2:
            cancel.set()

    engine = MatchEngine(seed=6, pacing_seconds=0)
    await engine.simulate_live(TEAM_A, TEAM_B, on_over=on_over, on_innings=log, on_cancel=log, cancel_event=cancel)

    assert len(log.of(InningsCompleted)) == 1
    cancelled = log.of(MatchCancelled)[0]
    assert cancelled.cancelled_during == MatchState.INNINGS2_IN_PROGRESS
    assert len(cancelled.innings) == 2


@pytest.mark.asyncio
async def test_task_cancellation_fires_on_cancel_and_propagates():
    log = EventLog()
    engine = MatchEngine(seed=4, pacing_seconds=30)

    task = asyncio.create_task(engine.simulate_live(TEAM_A, TEAM_B, on_over=log, on_cancel=log))
    await asyncio.sleep(0.05)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert engine.state == MatchState.CANCELLED
    assert log.of(OverCompleted) == []
    cancelled = log.of(MatchCancelled)
    assert len(cancelled) == 1
    assert cancelled[0].reason == "task cancelled"


@pytest.mark.asyncio
async def test_pacing_waits_between_overs():
    cancel = asyncio.Event()
    overs = []

    def on_over(event):
        overs.append(event)
        if len(overs) == 2:
            cancel.set()

    engine = MatchEngine(seed=4, pacing_seconds=0.05)
    started = time.monotonic()
    await engine.simulate_live(TEAM_A, TEAM_B, on_over=on_over, cancel_event=cancel)

    # Two paced overs before the cancel is seen
    assert time.monotonic() - started >= 0.08
    assert len(overs) == 2


def always_out(striker, bowler, rng, conditions=None):
    return BallOutcome(is_wicket=True, wicket_type="bowled", batter=striker.name, bowler=bowler.name)


def wicket_engine() -> MatchEngine:
    """Every ball a wicket: each innings is all out in 1.4 overs"""
    return MatchEngine(pacing_seconds=0, aggregator=OverAggregator(random.Random(1), deliver=always_out))


@pytest.mark.asyncio
async def test_cancel_during_final_over_skips_result():
    log = EventLog()
    cancel = asyncio.Event()

    def on_over(event):
        log(event)
        if event.innings_number == 2 and event.over.number == 2:
            cancel.set()

    engine = wicket_engine()
    result = await engine.simulate_live(
        TEAM_A, TEAM_B, on_over=on_over, on_innings=log, on_match=log, on_cancel=log, cancel_event=cancel,
    )

    assert result is None
    assert engine.state == MatchState.CANCELLED
    assert len(log.of(InningsCompleted)) == 1
    assert log.of(MatchCompleted) == []

    cancelled = log.of(MatchCancelled)
    assert len(cancelled) == 1
    assert cancelled[0].cancelled_during == MatchState.INNINGS2_IN_PROGRESS
    assert cancelled[0].innings[1].all_out


@pytest.mark.asyncio
async def test_cancel_during_final_over_of_first_innings():
    log = EventLog()
    cancel = asyncio.Event()

    def on_over(event):
        if event.over.number == 2:
            cancel.set()

    engine = wicket_engine()
    await engine.simulate_live(TEAM_A, TEAM_B, on_over=on_over, on_innings=log, on_cancel=log, cancel_event=cancel)

    assert log.of(InningsCompleted) == []
    assert log.of(MatchCancelled)[0].cancelled_during == MatchState.INNINGS1_IN_PROGRESS


@pytest.mark.asyncio
async def test_cancel_from_last_innings_callback_skips_result():
    log = EventLog()
    cancel = asyncio.Event()

    def on_innings(event):
        log(event)
        if event.innings_number == 2:
            cancel.set()

    engine = wicket_engine()
    result = await engine.simulate_live(
        TEAM_A, TEAM_B, on_innings=on_innings, on_match=log, on_cancel=log, cancel_event=cancel,
    )

    assert result is None
    assert log.of(MatchCompleted) == []
    assert log.of(MatchCancelled)[0].cancelled_during == MatchState.INNINGS2_COMPLETE
