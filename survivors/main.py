"""Entry point. Wires the store into routes and serves the API.

Persistence strategy:
  - If REDIS_URL is set  -> Redis (shared across workers, survives restarts).
  - Otherwise            -> in-memory store (development only).
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from survivors import settings
from survivors.api.routes.run_routes import router as run_router, init_routes
from survivors.domain.errors import MethodNotAllowed
from survivors.infrastructure.repositories.run_repository import RunRepository

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("survivors.startup")


def build_store():
    """Pick the store backend from configuration."""
    if settings.REDIS_URL:
        from survivors.infrastructure.store.redis_store import RedisStore, build_redis_client
        log.info("Using Redis store.")
        return RedisStore(build_redis_client(settings.REDIS_URL))

    from survivors.infrastructure.store.memory_store import InMemoryStore
    log.warning("REDIS_URL not set; using in-memory store (data is lost on restart).")
    return InMemoryStore()


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error as {"error": message}."""
    if exc.status_code == 405:
        message = MethodNotAllowed().message
    else:
        message = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


def create_app(store=None) -> FastAPI:
    store = store if store is not None else build_store()
    run_repo = RunRepository(store)

    app = FastAPI(
        title="Survivors Leaderboard",
        description="Run submission, anti-cheat verification and global ranking.",
        version="1.0.0",
    )
    app.add_middleware(GZipMiddleware, minimum_size=1024)
    # Credentials stay off: the browser refuses them alongside a wildcard origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    init_routes(store, run_repo, settings.CHECKSUM_SECRET)
    app.include_router(run_router)

    @app.get("/health")
    def health():
        result = {
            "status": "online",
            "system": "Survivors Leaderboard v1.0.0",
            "store": store.backend,
        }
        try:
            result["store_ping"] = "ok" if store.ping() else "failed"
        except Exception as exc:
            result["store_ping"] = f"ERROR: {type(exc).__name__}"
        return result

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "survivors.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
