"""Reset the database to the demo data set: ``python -m app.seed``."""
import asyncio
import logging

from sqlalchemy import delete

from app import config, database
from app.games.utils import GAME_CATALOG
from app.logger import setup_logging
from app.models import Game, GameSession, User

logger = logging.getLogger("app.seed")

DEMO_USERS = [
    {"email": "john.doe@example.com", "first_name": "John", "last_name": "Doe",
     "nickname": "johndoe", "profile_picture": "👤"},
    {"email": "jane.smith@example.com", "first_name": "Jane", "last_name": "Smith",
     "nickname": "janesmith", "profile_picture": "🦊"},
    {"email": "test.test@example.com", "first_name": "test", "last_name": "test",
     "nickname": "testtest", "profile_picture": "🐻"},
    {"email": "user.name@example.com", "first_name": "name", "last_name": "lastname",
     "nickname": "namelastname", "profile_picture": "🦁"},
]

# (user index, game index, seconds)
DEMO_SESSIONS = [
    (0, 0, 2400), (0, 1, 3180), (0, 2, 1560),
    (1, 0, 1800), (1, 3, 2700),
    (2, 2, 3600), (2, 1, 1200),
    (3, 3, 2100), (3, 0, 1500),
]


async def seed(db) -> None:
    await db.execute(delete(GameSession))
    await db.execute(delete(Game))
    await db.execute(delete(User))

    games = [Game(**entry) for entry in GAME_CATALOG]
    users = [User(**entry) for entry in DEMO_USERS]
    db.add_all(games + users)
    await db.flush()

    db.add_all(
        GameSession(user_id=users[u].id, game_id=games[g].id, duration_seconds=seconds)
        for u, g, seconds in DEMO_SESSIONS
    )
    await db.commit()
    logger.info(f"Seeded {len(games)} games, {len(users)} users, {len(DEMO_SESSIONS)} sessions")


async def main() -> None:
    await database.init_db(config.DATABASE_URL)
    try:
        async with database.SessionLocal() as db:
            await seed(db)
    finally:
        await database.dispose_db()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
