from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import os
from pathlib import Path

from emolink.database import engine, Base
from emolink import models  # Import all models to register them with Base
from emolink.exceptions import (
    EmoLinkException,
    EntryNotFoundException,
    AppointmentNotFoundException,
    GoalNotFoundException,
    SlotUnavailableException,
)
from emolink.routers import appointments, diary, goals, points, streaks
from emolink.services.scheduler_service import StreakRefreshScheduler
from emolink.constants import (
    DEFAULT_LOG_DIRECTORY_PROD, DEFAULT_LOG_DIRECTORY_DEV, CORS_ALLOWED_ORIGINS
)

LOG_DIR = os.getenv("EMOLINK_LOG_DIR", DEFAULT_LOG_DIRECTORY_PROD)
LOG_FILE = os.getenv("EMOLINK_LOG_FILE", "app.log")

# Create log directory if it doesn't exist (for development)
try:
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE
except PermissionError:
    # Fallback to local directory if no permissions for /var/log
    LOG_DIR = DEFAULT_LOG_DIRECTORY_DEV
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(log_path),
        logging.StreamHandler()  # Also log to console
    ]
)

logger = logging.getLogger("emolink")

# Create database tables
Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"EmoLink API started. Logging to: {log_path}")
    app.state.scheduler.start()
    yield
    logger.info("Shutting down EmoLink API")
    app.state.scheduler.stop()


app = FastAPI(
    title="EmoLink API",
    description="Emotion diary, streaks, rewards and appointment scheduling",
    version="1.0.0",
    lifespan=lifespan
)
app.state.scheduler = StreakRefreshScheduler()

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EmoLinkException)
async def emolink_exception_handler(request: Request, exc: EmoLinkException):
    """Map domain exceptions to HTTP responses"""
    if isinstance(exc, (EntryNotFoundException, AppointmentNotFoundException, GoalNotFoundException)):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, SlotUnavailableException):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


# Health check (no auth required)
@app.get("/")
async def root():
    return {"message": "EmoLink API", "status": "active"}


app.include_router(diary.router)
app.include_router(streaks.router)
app.include_router(appointments.router)
app.include_router(points.router)
app.include_router(goals.router)
