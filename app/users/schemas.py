import re
import unicodedata
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas import CamelModel

NICKNAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")
UPLOAD_PREFIX = "/uploads/"
VARIATION_SELECTOR = "\ufe0f"


def is_emoji(value: str) -> bool:
    """True for a single symbol glyph, optionally followed by a variation selector."""
    glyph = value.removesuffix(VARIATION_SELECTOR)
    return len(glyph) == 1 and unicodedata.category(glyph) == "So"


def _normalize_email(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _check_nickname(value: Optional[str]) -> Optional[str]:
    if value is not None and not NICKNAME_RE.match(value):
        raise ValueError("Nickname can only contain letters, numbers, and underscores")
    return value


def _check_profile_picture(value: Optional[str]) -> Optional[str]:
    if value is not None and not (value.startswith(UPLOAD_PREFIX) or is_emoji(value)):
        raise ValueError("Profile picture must be an emoji or uploaded image path")
    return value


class UserCreate(CamelModel):
    email: EmailStr
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    nickname: str = Field(min_length=1, max_length=30)
    profile_picture: Optional[str] = Field(default=None, min_length=1)

    normalize_email = field_validator("email", mode="before")(_normalize_email)
    check_nickname = field_validator("nickname")(_check_nickname)
    check_profile_picture = field_validator("profile_picture")(_check_profile_picture)


class UserUpdate(CamelModel):
    """Partial update; only the fields present in the body are applied."""

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    nickname: Optional[str] = Field(default=None, min_length=1, max_length=30)
    profile_picture: Optional[str] = Field(default=None, min_length=1)

    normalize_email = field_validator("email", mode="before")(_normalize_email)
    check_nickname = field_validator("nickname")(_check_nickname)
    check_profile_picture = field_validator("profile_picture")(_check_profile_picture)


class UserOut(CamelModel):
    id: int
    email: str
    first_name: str
    last_name: str
    nickname: str
    profile_picture: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GameStat(CamelModel):
    minutes: int
    percentage: int


class UserStatistics(CamelModel):
    game_stats: dict[str, GameStat]
    total_minutes: int
    total_sessions: int


class UserProfile(CamelModel):
    id: int
    email: str
    first_name: str
    last_name: str
    nickname: str
    profile_picture: Optional[str] = None
    statistics: UserStatistics
