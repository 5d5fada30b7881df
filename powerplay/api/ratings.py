"""
Ratings API endpoints - contextual player ratings and star bands
"""
from fastapi import APIRouter

from powerplay.engine.rating import contextual_rating, display_band
from powerplay.api.schemas import RatingRequest, RatingResponse

router = APIRouter(prefix="/ratings", tags=["Ratings"])


@router.post("", response_model=RatingResponse)
def rate_player(request: RatingRequest):
    """Rate a player for a role under the given match conditions"""
    profile = request.player.to_profile()
    role = request.role or profile.role
    conditions = request.conditions.to_conditions() if request.conditions else None

    rating = contextual_rating(profile, role, conditions)
    band = display_band(rating)
    return RatingResponse(
        name=profile.name,
        role=role,
        rating=rating,
        stars=band.stars,
        color=band.color,
    )
