"""
Teams API endpoints - stored franchises and their playing XIs
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from powerplay.config import settings
from powerplay.database import get_db
from powerplay.engine.rating import contextual_rating, display_band
from powerplay.exceptions import TeamNotFoundError
from powerplay.roster import RosterRepository
from powerplay.validators.lineup_validator import LineupValidator
from powerplay.api.schemas import LineupPlayer, LineupResponse, TeamResponse

router = APIRouter(prefix="/teams", tags=["Teams"])


@router.get("", response_model=List[TeamResponse])
def list_teams(db: Session = Depends(get_db)):
    """All stored teams"""
    return RosterRepository(db).list_teams()


@router.get("/{team_id}/lineup", response_model=LineupResponse)
def get_lineup(team_id: int, db: Session = Depends(get_db)):
    """A team's playing XI with neutral-conditions ratings and a validity report"""
    try:
        sheet = RosterRepository(db).lineup(team_id)
    except TeamNotFoundError:
        raise HTTPException(status_code=404, detail="Team not found")

    players = []
    for profile in sheet.players:
        rating = contextual_rating(profile)
        band = display_band(rating)
        players.append(LineupPlayer(
            name=profile.name,
            role=profile.role,
            bowling_type=profile.bowling_type,
            rating=rating,
            stars=band.stars,
            color=band.color,
        ))

    report = LineupValidator.validate(list(sheet.players), settings.MAX_OVERS_PER_BOWLER)
    return LineupResponse(
        team=sheet.name,
        players=players,
        valid=report["valid"],
        errors=report["errors"],
        warnings=report["warnings"],
    )
