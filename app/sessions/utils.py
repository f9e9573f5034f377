from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.models import GameSession


async def fetch_sessions_for_user(db, user_id: int):
    """All of one user's sessions, oldest first, with user and game loaded."""
    result = await db.execute(
        select(GameSession)
        .options(selectinload(GameSession.user), selectinload(GameSession.game))
        .where(GameSession.user_id == user_id)
        .order_by(GameSession.id)
    )
    return result.scalars().all()


async def fetch_all_sessions(db):
    """Every session, oldest first, with user and game loaded."""
    result = await db.execute(
        select(GameSession)
        .options(selectinload(GameSession.user), selectinload(GameSession.game))
        .order_by(GameSession.id)
    )
    return result.scalars().all()
