from sqlalchemy import or_, select

from app.errors import ConflictError
from app.models import User


async def check_user_conflict(db, email=None, nickname=None, exclude_id=None) -> None:
    """Raise ConflictError if another user already has ``email`` or ``nickname``."""
    clauses = []
    if email is not None:
        clauses.append(User.email == email)
    if nickname is not None:
        clauses.append(User.nickname == nickname)
    if not clauses:
        return

    query = select(User).where(or_(*clauses))
    if exclude_id is not None:
        query = query.where(User.id != exclude_id)
    existing = (await db.execute(query)).scalars().first()

    if existing:
        message = "Email already exists" if existing.email == email else "Nickname already taken"
        raise ConflictError(message)
