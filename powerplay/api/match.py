import asyncio
import json
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from powerplay.config import settings
from powerplay.engine.events import InningsCompleted, MatchCancelled, MatchCompleted, OverCompleted
from powerplay.engine.match_engine import MatchEngine
from powerplay.engine.records import InningsRecord, MatchRecord, OverRecord
from powerplay.exceptions import ConfigurationError, InsufficientLineupError
from powerplay.api.schemas import (
    BallResponse,
    BatterLine,
    BowlerLine,
    InningsResponse,
    MatchResponse,
    OverResponse,
    SimulateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/match", tags=["Match Simulation"])


def _over_response(over: OverRecord) -> OverResponse:
    return OverResponse(
        number=over.number,
        bowler=over.bowler,
        batsmen=list(over.batsmen),
        runs=over.runs,
        wickets=over.wickets,
        balls=[
            BallResponse(
                runs=b.runs,
                is_wicket=b.is_wicket,
                is_boundary=b.is_boundary,
                extras=b.extras,
                wicket_type=b.wicket_type,
                commentary=b.commentary,
            )
            for b in over.balls
        ],
    )


def _innings_response(innings: InningsRecord) -> InningsResponse:
    return InningsResponse(
        batting_team=innings.batting_team,
        bowling_team=innings.bowling_team,
        runs=innings.runs,
        wickets=innings.wickets,
        overs=innings.overs_display,
        run_rate=round(innings.run_rate, 2),
        target=innings.target,
        over_results=[_over_response(o) for o in innings.over_records],
        batters=[
            BatterLine(
                name=bi.player.name,
                runs=bi.runs,
                balls=bi.balls,
                fours=bi.fours,
                sixes=bi.sixes,
                is_out=bi.is_out,
                dismissal=bi.dismissal if bi.is_out else "not out",
                strike_rate=round(bi.strike_rate, 2),
            )
            for bi in innings.batters.values()
        ],
        bowlers=[
            BowlerLine(
                name=spell.player.name,
                overs=spell.overs_display,
                runs=spell.runs,
                wickets=spell.wickets,
                economy=round(spell.economy, 2),
            )
            for spell in innings.bowlers.values()
        ],
    )


def _match_response(record: MatchRecord) -> MatchResponse:
    return MatchResponse(
        team1=record.team1,
        team2=record.team2,
        innings=[_innings_response(i) for i in record.innings],
        winner=record.winner,
        result=record.result.value,
        margin=record.margin,
        summary=record.summary,
        is_quick=record.is_quick,
    )


def _build_engine(request: SimulateRequest, pacing_seconds: Optional[float] = None) -> MatchEngine:
    seed = request.seed if request.seed is not None else settings.MATCH_SEED
    return MatchEngine(
        seed=seed,
        conditions=request.conditions.to_conditions() if request.conditions else None,
        pacing_seconds=settings.OVER_PACING_SECONDS if pacing_seconds is None else pacing_seconds,
        max_overs_per_bowler=settings.MAX_OVERS_PER_BOWLER,
    )


def _configuration_error(exc: ConfigurationError) -> HTTPException:
    detail = {"message": str(exc), "team": exc.team}
    if isinstance(exc, InsufficientLineupError):
        detail["errors"] = exc.errors
    return HTTPException(status_code=422, detail=detail)


@router.post("/quick", response_model=MatchResponse)
def quick_result(request: SimulateRequest):
    """Headline result only: random plausible totals, no ball-by-ball play"""
    engine = _build_engine(request)
    try:
        record = engine.simulate_quick(request.team1.to_sheet(), request.team2.to_sheet())
    except ConfigurationError as exc:
        raise _configuration_error(exc)
    return _match_response(record)


@router.post("/simulate", response_model=MatchResponse)
def simulate_match(request: SimulateRequest):
    """Full ball-by-ball match, returned when complete"""
    engine = _build_engine(request)
    try:
        record = engine.simulate_match(request.team1.to_sheet(), request.team2.to_sheet())
    except ConfigurationError as exc:
        raise _configuration_error(exc)
    return _match_response(record)


@router.websocket("/live")
async def live_match(websocket: WebSocket):
    """
    Stream a match over by over.

    The client sends one SimulateRequest as JSON, then receives messages of
    type "over", "innings" and "match" (or "cancelled", or "error"). Sending
    {"type": "cancel"} or disconnecting stops the match at the next over.
    """
    await websocket.accept()

    try:
        request = SimulateRequest.model_validate(await websocket.receive_json())
    except ValidationError as exc:
        await websocket.send_json({"type": "error", "detail": json.loads(exc.json())})
        await websocket.close()
        return
    except ValueError:
        await websocket.send_json({"type": "error", "detail": "Request must be a JSON object"})
        await websocket.close()
        return

    engine = _build_engine(request)
    cancel_event = asyncio.Event()
    disconnected = False

    async def listen():
        nonlocal disconnected
        try:
            while True:
                try:
                    message = await websocket.receive_json()
                except ValueError:
                    logger.debug("Ignoring non-JSON frame from live match client")
                    continue
                if isinstance(message, dict) and message.get("type") == "cancel":
                    cancel_event.set()
                    return
        except WebSocketDisconnect:
            disconnected = True
            cancel_event.set()

    async def send_over(event: OverCompleted):
        await websocket.send_json({
            "type": event.kind.value,
            "innings": event.innings_number,
            "runs": event.innings_runs,
            "wickets": event.innings_wickets,
            "over": _over_response(event.over).model_dump(mode="json"),
        })

    async def send_innings(event: InningsCompleted):
        await websocket.send_json({
            "type": event.kind.value,
            "number": event.innings_number,
            "innings": _innings_response(event.innings).model_dump(mode="json"),
        })

    async def send_match(event: MatchCompleted):
        await websocket.send_json({
            "type": event.kind.value,
            "result": _match_response(event.record).model_dump(mode="json"),
        })

    async def send_cancelled(event: MatchCancelled):
        if not disconnected:
            await websocket.send_json({"type": event.kind.value, "during": event.cancelled_during.value})

    listener = asyncio.create_task(listen())
    try:
        await engine.simulate_live(
            request.team1.to_sheet(),
            request.team2.to_sheet(),
            on_over=send_over,
            on_innings=send_innings,
            on_match=send_match,
            on_cancel=send_cancelled,
            cancel_event=cancel_event,
        )
    except ConfigurationError as exc:
        await websocket.send_json({"type": "error", "detail": _configuration_error(exc).detail})
    except WebSocketDisconnect:
        disconnected = True
    finally:
        listener.cancel()

    if disconnected:
        logger.info("Live match client went away (%s)", engine.state.value)
    else:
        await websocket.close()
