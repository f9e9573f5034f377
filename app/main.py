from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app import config, database
from app.analytics.routes import router as analytics_router
from app.errors import register_error_handlers
from app.games.routes import router as games_router
from app.games.utils import ensure_game_catalog
from app.leaderboard.routes import router as leaderboard_router
from app.logger import logger, request_logger, setup_logging
from app.sessions.routes import router as sessions_router
from app.uploads.routes import router as uploads_router
from app.users.routes import router as users_router
from app.weather.routes import router as weather_router

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await database.init_db(config.DATABASE_URL)
    async with database.SessionLocal() as db:
        await ensure_game_catalog(db)
    logger.info("Server started")
    yield
    await database.dispose_db()


app = FastAPI(title="Game Time Tracker 🎮", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.CORS_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(request_logger)
register_error_handlers(app)

# Uploaded profile pictures
app.mount("/uploads", StaticFiles(directory=str(config.UPLOAD_DIR), check_dir=False), name="uploads")

# Routes
app.include_router(users_router, prefix="/api/users", tags=["Users"])
app.include_router(games_router, prefix="/api/games", tags=["Games"])
app.include_router(sessions_router, prefix="/api/sessions", tags=["Sessions"])
app.include_router(leaderboard_router, prefix="/api/leaderboard", tags=["Leaderboard"])
app.include_router(analytics_router, prefix="/api/statistics", tags=["Statistics"])
app.include_router(weather_router, prefix="/api/weather", tags=["Weather"])
app.include_router(uploads_router, prefix="/api", tags=["Uploads"])


@app.get("/health")
async def health():
    return {"status": "healthy", "database": "connected" if database.engine is not None else "not_initialized"}
