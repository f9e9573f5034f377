import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app import models
from app.analytics.aggregates import compute_user_statistics
from app.database import get_db
from app.errors import ConflictError, NotFoundError
from app.sessions.utils import fetch_sessions_for_user
from app.users import schemas
from app.users.utils import check_user_conflict

router = APIRouter()
logger = logging.getLogger(__name__)


def _dump(user: models.User) -> dict:
    return schemas.UserOut.model_validate(user).model_dump(mode="json", by_alias=True)


async def _get_user_or_404(db: AsyncSession, user_id: int) -> models.User:
    user = await db.get(models.User, user_id)
    if user is None:
        logger.warning(f"User not found: {user_id}")
        raise NotFoundError("User not found")
    return user


async def _commit_unique(db: AsyncSession) -> None:
    # Two requests can pass check_user_conflict at once; the unique index settles it.
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Email or nickname already in use")


@router.get("", summary="All users", response_model=list[schemas.UserOut])
async def list_users(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(models.User).order_by(models.User.id))
    users = result.scalars().all()
    logger.info(f"Fetched {len(users)} users")
    return users


@router.get("/{user_id}", summary="User profile with playtime statistics")
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    user = await _get_user_or_404(db, user_id)
    sessions = await fetch_sessions_for_user(db, user_id)

    profile = schemas.UserProfile(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        nickname=user.nickname,
        profile_picture=user.profile_picture,
        statistics=compute_user_statistics(sessions),
    )
    logger.info(f"Fetched user profile: {user_id}")
    return {"success": True, "data": profile.model_dump(mode="json", by_alias=True)}


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a user")
async def create_user(user: Annotated[
        schemas.UserCreate,
        Body(
            examples=[
                {
                    "email": "jane.smith@example.com",
                    "firstName": "Jane",
                    "lastName": "Smith",
                    "nickname": "janesmith",
                    "profilePicture": "🦊"
                }
            ],
        ),
    ], db: AsyncSession = Depends(get_db)):
    try:
        await check_user_conflict(db, email=user.email, nickname=user.nickname)
    except ConflictError as exc:
        logger.warning(f"Duplicate user: {exc.message}")
        raise

    db_user = models.User(
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        nickname=user.nickname,
        profile_picture=user.profile_picture,
    )
    db.add(db_user)
    await _commit_unique(db)
    await db.refresh(db_user)

    logger.info(f"User created: {db_user.id}")
    return {"success": True, "data": _dump(db_user)}


@router.put("/{user_id}", summary="Update some of a user's fields")
async def update_user(user_id: int, changes: schemas.UserUpdate, db: AsyncSession = Depends(get_db)):
    db_user = await _get_user_or_404(db, user_id)
    fields = changes.model_dump(exclude_unset=True, exclude_none=True)

    await check_user_conflict(db, email=fields.get("email"), nickname=fields.get("nickname"), exclude_id=user_id)

    for name, value in fields.items():
        setattr(db_user, name, value)
    await _commit_unique(db)
    await db.refresh(db_user)

    logger.info(f"User updated: {user_id}")
    return {"success": True, "data": _dump(db_user)}


@router.delete("/{user_id}", summary="Delete a user and their sessions")
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db)):
    db_user = await _get_user_or_404(db, user_id)
    await db.delete(db_user)
    await db.commit()

    logger.info(f"User deleted: {user_id}")
    return {"success": True, "message": "User deleted"}
