import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app import models
from app.database import get_db
from app.errors import NotFoundError
from app.sessions import schemas
from app.sessions.utils import fetch_all_sessions, fetch_sessions_for_user

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", summary="All sessions with user and game names")
async def list_sessions(
    db: AsyncSession = Depends(get_db),
    user_id: Optional[int] = Query(None, alias="userId"),
):
    if user_id is None:
        rows = await fetch_all_sessions(db)
    else:
        rows = await fetch_sessions_for_user(db, user_id)

    data = [schemas.PopulatedSession.from_row(row).model_dump(mode="json", by_alias=True) for row in rows]
    logger.info(f"Fetched {len(data)} sessions")
    return {"success": True, "data": data}


@router.post("", status_code=status.HTTP_201_CREATED, summary="Record a finished play session")
async def create_session(session: Annotated[
        schemas.SessionCreate,
        Body(
            examples=[
                {
                    "userId": 1,
                    "gameId": 2,
                    "durationSeconds": 95
                }
            ],
        ),
    ], db: AsyncSession = Depends(get_db)):
    if await db.get(models.User, session.user_id) is None:
        raise NotFoundError("User not found")
    if await db.get(models.Game, session.game_id) is None:
        raise NotFoundError("Game not found")

    new_session = models.GameSession(
        user_id=session.user_id,
        game_id=session.game_id,
        duration_seconds=session.duration_seconds,
    )
    db.add(new_session)
    await db.commit()
    await db.refresh(new_session)

    logger.info(f"Session created: {new_session.id} (user {session.user_id}, {session.duration_seconds}s)")
    return {
        "success": True,
        "data": schemas.SessionOut.model_validate(new_session).model_dump(mode="json", by_alias=True),
    }
