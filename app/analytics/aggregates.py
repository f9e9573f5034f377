"""Playtime aggregation over lists of sessions.

Every function here is pure: it takes sessions already loaded from the
database (ORM rows or any object with the same attributes) and returns plain
dicts ready to be serialized. Sessions are expected to expose
``duration_seconds``, ``created_at``, ``user_id``, ``user`` and ``game``; the
related ``user``/``game`` may be ``None`` when the row they point to is gone.

Playtime is reported in "minutes" where one recorded second counts as one
minute. Callers rely on that convention; do not convert units here.
"""
from datetime import datetime, timezone, tzinfo
from typing import Iterable, Optional, Sequence

from app.utils import round_half_up

UNKNOWN_GAME = "Unknown Game"
UNKNOWN_USER = "Unknown"
LEADERBOARD_SIZE = 10


def game_name(session) -> str:
    game = getattr(session, "game", None)
    return getattr(game, "name", None) or UNKNOWN_GAME


def user_name(session) -> str:
    user = getattr(session, "user", None)
    return getattr(user, "nickname", None) or UNKNOWN_USER


def session_seconds(session) -> Optional[int]:
    """Duration as an int, or None when it cannot be coerced."""
    value = getattr(session, "duration_seconds", None)
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _valid(sessions: Iterable) -> Iterable[tuple[object, int]]:
    for session in sessions:
        seconds = session_seconds(session)
        if seconds is not None:
            yield session, seconds


def compute_user_statistics(sessions: Sequence) -> dict:
    """Per-game playtime and share of total for one user's sessions.

    Percentages are rounded half-up independently per game, so they may not
    add up to exactly 100.
    """
    total_seconds = 0
    per_game: dict[str, int] = {}

    for session, seconds in _valid(sessions):
        total_seconds += seconds
        name = game_name(session)
        per_game[name] = per_game.get(name, 0) + seconds

    game_stats = {}
    for name, minutes in per_game.items():
        percentage = round_half_up(minutes / total_seconds * 100) if total_seconds > 0 else 0
        game_stats[name] = {"minutes": minutes, "percentage": percentage}

    return {
        "gameStats": game_stats,
        "totalMinutes": total_seconds,
        "totalSessions": len(sessions),
    }


def compute_leaderboard(sessions: Iterable, limit: int = LEADERBOARD_SIZE) -> list[dict]:
    """Users ranked by total playtime, ties kept in first-seen order.

    ``favoriteGame`` is the game of the user's first session, not the one they
    played the most.
    """
    per_user: dict = {}
    for session, seconds in _valid(sessions):
        entry = per_user.get(session.user_id)
        if entry is None:
            entry = per_user[session.user_id] = {
                "name": user_name(session),
                "favoriteGame": game_name(session),
                "minutes": 0,
            }
        entry["minutes"] += seconds

    ranked = sorted(per_user.values(), key=lambda entry: entry["minutes"], reverse=True)
    return ranked[:limit]


def compute_per_game_totals(sessions: Iterable) -> list[dict]:
    totals: dict[str, int] = {}
    for session, seconds in _valid(sessions):
        name = game_name(session)
        totals[name] = totals.get(name, 0) + seconds
    return [{"game": name, "minutes": minutes} for name, minutes in totals.items()]


def format_day(created_at: datetime, tz: Optional[tzinfo] = None) -> str:
    """Calendar day as ``M/D/YYYY`` in ``tz`` (server local time when None).

    Naive timestamps are read as UTC, which is how they are stored.
    """
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    local = created_at.astimezone(tz)
    return f"{local.month}/{local.day}/{local.year}"


def compute_per_user_per_day_totals(sessions: Iterable, tz: Optional[tzinfo] = None) -> list[dict]:
    """Minutes per user per day; users with no play on a day are left out of that row."""
    days: dict[str, dict[str, int]] = {}
    for session, seconds in _valid(sessions):
        if session.created_at is None:
            continue
        users = days.setdefault(format_day(session.created_at, tz), {})
        name = user_name(session)
        users[name] = users.get(name, 0) + seconds
    return [{"date": day, **users} for day, users in days.items()]


def compute_session_frequency(sessions: Iterable, game: str) -> list[dict]:
    """How often, and for how long, each user played ``game``."""
    per_user: dict = {}
    for session, seconds in _valid(sessions):
        if game_name(session) != game:
            continue
        entry = per_user.get(session.user_id)
        if entry is None:
            entry = per_user[session.user_id] = {"name": user_name(session), "timesPlayed": 0, "minutes": 0}
        entry["timesPlayed"] += 1
        entry["minutes"] += seconds
    return list(per_user.values())


def list_game_names(sessions: Iterable) -> list[str]:
    """Distinct game names in first-appearance order."""
    return list(dict.fromkeys(game_name(session) for session in sessions))
