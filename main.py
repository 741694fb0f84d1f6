"""
Time Capsule Postcards Backend Application Entry Point.
"""
import asyncio
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from app.core.config import settings
from app.core.database import engine, SessionLocal
from app.core.middleware import SessionMiddleware
from app.notification import notification_dispatcher
from app.router.endpoints import api_router
from app.service.time_lock_sweeper import TimeLockSweeper
import logging
import uvicorn

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting application...")

    # Initialize Redis
    from app.session import init_redis, close_redis
    try:
        init_redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
        )
        logger.info("Redis connection initialized")
    except Exception as e:
        logger.error(f"Redis initialization failed: {e}")
    # Check database connection
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection OK")

        # Auto-create tables in debug mode (use Alembic migrations in production)
        if settings.DEBUG:
            from app.core.database import Base
            from app.model import User, Follow, Postcard
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created (DEBUG mode)")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")

    # Sweeper runs in worker threads; notifications hop back onto this loop
    notification_dispatcher.bind_loop(asyncio.get_running_loop())
    sweeper = TimeLockSweeper(
        session_factory=SessionLocal,
        notifier=notification_dispatcher,
        interval_seconds=settings.TIME_LOCK_SWEEP_INTERVAL_SECONDS,
    )
    if settings.TIME_LOCK_SWEEPER_ENABLED:
        sweeper.start()
    app.state.time_lock_sweeper = sweeper

    yield

    logger.info("Shutting down...")
    await sweeper.stop()
    notification_dispatcher.bind_loop(None)
    close_redis()
    engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
)

# Session middleware
app.add_middleware(SessionMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(api_router)


@app.get("/health")
async def health():
    sweeper = getattr(app.state, "time_lock_sweeper", None)
    return {"status": "ok", "time_lock_sweeper": bool(sweeper and sweeper.is_running)}


@app.get("/")
async def root():
    return {"message": "Welcome to the Time Capsule Postcards API!"}


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
