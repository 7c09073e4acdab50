import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Import models so every table is registered with SQLAlchemy Base
from . import models  # noqa: F401
from .config import FRONTEND_URL, LOG_LEVEL, RATE_LIMIT_ENABLED
from .database import Base, engine
from .domain.bookings.router import router as bookings_router
from .domain.schedule.router import router as schedule_router
from .exceptions import MaidHubError

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise

    if RATE_LIMIT_ENABLED:
        try:
            from .rate_limiter import get_redis_client

            get_redis_client()  # Connection test
            logger.info("Redis connection established")
        except Exception as e:
            logger.warning(
                f"Redis connection failed - rate-limited endpoints will answer 503: {e}"
            )
    else:
        logger.info("Rate limiting disabled")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="MaidHub API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(MaidHubError)
async def maidhub_exception_handler(request: Request, exc: MaidHubError):
    """Map domain errors to the {success, message} envelope"""
    logger.warning(
        f"{request.method} {request.url.path} -> {exc.status_code} "
        f"{type(exc).__name__}: {exc.message}"
    )
    return JSONResponse(
        status_code=exc.status_code, content={"success": False, "message": exc.message}
    )


# CORS Configuration
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", f"{FRONTEND_URL},http://localhost:5173").split(",")
logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(bookings_router)
app.include_router(schedule_router)


@app.get("/")
def root():
    return {"message": "MaidHub API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
