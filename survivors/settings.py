"""Service configuration read from the environment (.env supported)."""
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent
PROJECT_DIR = BASE_DIR.parent
load_dotenv(PROJECT_DIR / ".env", override=False)


def _split_csv(raw: str) -> list:
    return [item.strip() for item in raw.split(",") if item.strip()]


# Empty -> in-memory store (development only, state is lost on restart).
REDIS_URL = os.environ.get("REDIS_URL", "").strip()

# Shared with the game client; changing it invalidates every client build.
CHECKSUM_SECRET = os.environ.get("CHECKSUM_SECRET", "dcc_survivors_2024")

ALLOWED_ORIGINS = _split_csv(os.environ.get("ALLOWED_ORIGINS", "")) or ["*"]

AUDIT_LOG_FILE = Path(os.environ.get("AUDIT_LOG_FILE", str(PROJECT_DIR / "logs" / "audit.log")))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------
BURST_LIMIT = 2
BURST_WINDOW_SECONDS = 30
DAILY_LIMIT = 20
DAILY_WINDOW_SECONDS = 86400

RUN_RETENTION_SECONDS = 90 * 86400

LEADERBOARD_DEFAULT_LIMIT = 50
LEADERBOARD_MAX_LIMIT = 100

# Short public cache, longer stale-while-revalidate window for the CDN.
LEADERBOARD_CACHE_CONTROL = "public, s-maxage=10, stale-while-revalidate=30"
