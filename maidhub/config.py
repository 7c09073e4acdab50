import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./maidhub.db")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Frontend base URL (React client)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# Simple-mode availability window: hourly slots from START up to (excluding) END
SIMPLE_SLOT_START_HOUR = int(os.getenv("SIMPLE_SLOT_START_HOUR", "9"))
SIMPLE_SLOT_END_HOUR = int(os.getenv("SIMPLE_SLOT_END_HOUR", "18"))

# Bookings shorter than this are rejected at the API layer
MIN_BOOKING_DURATION_MINUTES = 30

# Rate limiting (Redis). Set RATE_LIMIT_ENABLED=false for local development/tests
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
REDIS_URL = os.getenv("REDIS_URL")
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD")
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
REDIS_SSL = os.getenv("REDIS_SSL", "false").lower() == "true"

BOOKING_RATE_LIMIT = int(os.getenv("BOOKING_RATE_LIMIT", "20"))  # per window per IP
AVAILABILITY_RATE_LIMIT = int(os.getenv("AVAILABILITY_RATE_LIMIT", "120"))
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))
