from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.analytics.aggregates import compute_leaderboard
from app.database import get_db
from app.sessions.utils import fetch_all_sessions

router = APIRouter()


@router.get("", summary="Top 10 players by total playtime")
async def get_leaderboard(db: AsyncSession = Depends(get_db)):
    sessions = await fetch_all_sessions(db)
    return {"success": True, "data": compute_leaderboard(sessions)}
