from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.analytics.aggregates import (
    compute_leaderboard,
    compute_per_game_totals,
    compute_per_user_per_day_totals,
    compute_session_frequency,
    list_game_names,
)
from app.database import get_db
from app.sessions.utils import fetch_all_sessions

router = APIRouter()


@router.get("", summary="Dashboard statistics across all users")
async def get_statistics(db: AsyncSession = Depends(get_db)):
    sessions = await fetch_all_sessions(db)
    return {
        "success": True,
        "data": {
            "games": list_game_names(sessions),
            "leaderboard": compute_leaderboard(sessions),
            "gameTotals": compute_per_game_totals(sessions),
            "dailyTotals": compute_per_user_per_day_totals(sessions),
        },
    }


@router.get("/frequency", summary="Times played and minutes per user for one game")
async def get_session_frequency(game: str = Query(..., min_length=1), db: AsyncSession = Depends(get_db)):
    sessions = await fetch_all_sessions(db)
    return {"success": True, "data": compute_session_frequency(sessions, game)}
