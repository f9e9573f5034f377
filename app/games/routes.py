import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.database import get_db
from app.games import schemas
from app.models import Game

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", summary="Game catalog", response_model=list[schemas.GameOut])
async def list_games(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Game).order_by(Game.id))
    games = result.scalars().all()
    logger.info(f"Fetched {len(games)} games")
    return games
