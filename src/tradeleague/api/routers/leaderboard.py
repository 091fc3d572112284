"""Leaderboard endpoints."""

from fastapi import APIRouter, Depends

from tradeleague.api.deps import get_leaderboard_service
from tradeleague.api.schemas import (
    LeaderboardEntryResponse,
    LeaderboardResponse,
    RefreshResponse,
    RefreshStatusResponse,
)
from tradeleague.services import LeaderboardService

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=LeaderboardResponse)
def get_leaderboard(
    leaderboard: LeaderboardService = Depends(get_leaderboard_service),
) -> LeaderboardResponse:
    """All accounts ranked by net worth."""
    entries = leaderboard.rank()
    return LeaderboardResponse(
        entries=[LeaderboardEntryResponse.model_validate(e) for e in entries],
        count=len(entries),
    )


@router.post("/refresh", response_model=RefreshResponse)
def refresh_quotes(
    leaderboard: LeaderboardService = Depends(get_leaderboard_service),
) -> RefreshResponse:
    """Re-fetch every held symbol now (rate limited by the cooldown)."""
    return RefreshResponse.model_validate(leaderboard.refresh_all_quotes())


@router.get("/refresh-status", response_model=RefreshStatusResponse)
def refresh_status(
    leaderboard: LeaderboardService = Depends(get_leaderboard_service),
) -> RefreshStatusResponse:
    """When the next bulk refresh is allowed."""
    return RefreshStatusResponse.model_validate(leaderboard.refresh_status())
