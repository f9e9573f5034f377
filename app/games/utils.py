import logging

from sqlalchemy import func, select

from app.models import Game

logger = logging.getLogger(__name__)

GAME_CATALOG = [
    {"name": "Snowball Showdown", "image_url": "/images/games/snowball.png"},
    {"name": "Bear Panic", "image_url": "/images/games/bear.png"},
    {"name": "Meteor Mayhem", "image_url": "/images/games/meteor.png"},
    {"name": "Tarzan Rumble", "image_url": "/images/games/tarzan.png"},
]


async def ensure_game_catalog(db) -> int:
    """Insert the catalog when the games table is empty; returns rows added."""
    count = (await db.execute(select(func.count(Game.id)))).scalar_one()
    if count:
        return 0

    db.add_all(Game(**entry) for entry in GAME_CATALOG)
    await db.commit()
    logger.info(f"Seeded {len(GAME_CATALOG)} games")
    return len(GAME_CATALOG)
