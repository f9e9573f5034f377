from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field, field_validator

from app.analytics.aggregates import UNKNOWN_GAME, UNKNOWN_USER
from app.schemas import CamelModel


MAX_INT = 2**31 - 1


class SessionCreate(CamelModel):
    user_id: int = Field(gt=0, le=MAX_INT)
    game_id: int = Field(gt=0, le=MAX_INT)
    duration_seconds: int = Field(
        gt=0,
        le=MAX_INT,
        validation_alias=AliasChoices("durationSeconds", "duration", "duration_seconds"),
    )

    @field_validator("duration_seconds", mode="before")
    @classmethod
    def reject_bool(cls, value):
        if isinstance(value, bool):
            raise ValueError("Duration must be a number of seconds")
        return value


class SessionOut(CamelModel):
    id: int
    user_id: int
    game_id: int
    duration_seconds: int
    created_at: Optional[datetime] = None


class SessionUser(CamelModel):
    nickname: str = UNKNOWN_USER
    first_name: str = ""
    last_name: str = ""


class SessionGame(CamelModel):
    name: str = UNKNOWN_GAME


class PopulatedSession(SessionOut):
    user: SessionUser
    game: SessionGame

    @classmethod
    def from_row(cls, session) -> "PopulatedSession":
        return cls(
            id=session.id,
            user_id=session.user_id,
            game_id=session.game_id,
            duration_seconds=session.duration_seconds,
            created_at=session.created_at,
            user=SessionUser.model_validate(session.user) if session.user else SessionUser(),
            game=SessionGame.model_validate(session.game) if session.game else SessionGame(),
        )
