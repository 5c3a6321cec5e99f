"""Per-client submission rate limiting backed by the shared store.

Counters live in the store so every worker sees the same totals. A counter's
expiry is set on its first increment, which makes each window fixed rather
than sliding. Quota is consumed before the body is even looked at, so invalid
submissions still count.
"""
from survivors import settings
from survivors.domain.enums import RateWindow
from survivors.domain.errors import RateLimited

UNKNOWN_IDENTITY = "unknown"

BURST_PREFIX = "rl:"
DAILY_PREFIX = "dl:"


def client_identity(headers) -> str:
    """First forwarded address, else X-Real-IP, else a shared fallback bucket."""
    raw = headers.get("x-forwarded-for") or headers.get("x-real-ip") or UNKNOWN_IDENTITY
    return raw.split(",")[0].strip() or UNKNOWN_IDENTITY


def _hit(store, key: str, window_seconds: int) -> int:
    count = store.increment(key)
    if count == 1:
        store.expire(key, window_seconds)
    return count


def consume(store, identity: str) -> None:
    """Count one submission for ``identity``. Raises RateLimited when over quota."""
    if _hit(store, BURST_PREFIX + identity, settings.BURST_WINDOW_SECONDS) > settings.BURST_LIMIT:
        raise RateLimited(RateWindow.BURST)
    if _hit(store, DAILY_PREFIX + identity, settings.DAILY_WINDOW_SECONDS) > settings.DAILY_LIMIT:
        raise RateLimited(RateWindow.DAILY)
