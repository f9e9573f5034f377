from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, UTC
from .database import Base


def _now():
    return datetime.now(UTC)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    first_name = Column("firstName", String, nullable=False)
    last_name = Column("lastName", String, nullable=False)
    nickname = Column(String, unique=True, index=True, nullable=False)
    profile_picture = Column("profilePicture", String, nullable=True)
    created_at = Column("createdAt", DateTime, default=_now)
    updated_at = Column("updatedAt", DateTime, default=_now, onupdate=_now)
    sessions = relationship("GameSession", back_populates="user", cascade="all, delete-orphan")


class Game(Base):
    __tablename__ = "games"
    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    image_url = Column("imageUrl", String)
    created_at = Column("createdAt", DateTime, default=_now)
    sessions = relationship("GameSession", back_populates="game")


class GameSession(Base):
    __tablename__ = "game_sessions"
    id = Column(Integer, primary_key=True)
    user_id = Column("userId", Integer, ForeignKey("users.id"), index=True, nullable=False)
    game_id = Column("gameId", Integer, ForeignKey("games.id"), nullable=False)
    duration_seconds = Column("duration", Integer, nullable=False)
    created_at = Column("createdAt", DateTime, default=_now)
    user = relationship("User", back_populates="sessions")
    game = relationship("Game", back_populates="sessions")
