"""Run API routes -- submit a run, read the leaderboard."""
import json
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request, Response
from starlette.concurrency import run_in_threadpool

from survivors import settings
from survivors.api.schemas import LeaderboardResponse, SubmitResponse
from survivors.application.leaderboard_query import get_leaderboard
from survivors.application.submit_run import submit_run
from survivors.domain.errors import SubmissionError
from survivors.domain.invariant import parse_int
from survivors.infrastructure.audit import log_event as audit_log
from survivors.infrastructure.ratelimit import client_identity

router = APIRouter(prefix="/api", tags=["runs"])

log = logging.getLogger("survivors.submit")
board_log = logging.getLogger("survivors.leaderboard")

INTERNAL_ERROR = "Internal server error"

_store = None
_run_repo = None
_secret = settings.CHECKSUM_SECRET


def init_routes(store, run_repo, checksum_secret: str | None = None):
    global _store, _run_repo, _secret
    _store = store
    _run_repo = run_repo
    _secret = checksum_secret or settings.CHECKSUM_SECRET


def _decode_body(raw: bytes):
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------

@router.options("/submit-score", include_in_schema=False)
def api_submit_preflight():
    return Response(status_code=200)


@router.post("/submit-score", response_model=SubmitResponse)
async def api_submit_score(request: Request):
    """Submit a finished run. Public, rate limited per client address."""
    identity = client_identity(request.headers)
    body = _decode_body(await request.body())
    try:
        result = await run_in_threadpool(
            submit_run, _store, _run_repo, identity, body, _secret,
        )
    except SubmissionError as e:
        log.info("Rejected submission from %s: %s", identity, e.message)
        await run_in_threadpool(
            audit_log, "submission_rejected", identity,
            {"reason": e.message, "status": e.status_code},
        )
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        log.exception("Submit score error")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    await run_in_threadpool(audit_log, "run_submitted", identity, {
        "id": result["id"],
        "score": result["score"],
        "rank": result["rank"],
    })
    return result


# ---------------------------------------------------------------------------
# Leaderboard
# ---------------------------------------------------------------------------

@router.options("/leaderboard", include_in_schema=False)
def api_leaderboard_preflight():
    return Response(status_code=200)


@router.get("/leaderboard", response_model=LeaderboardResponse)
def api_get_leaderboard(
    response: Response,
    limit: Optional[str] = None,
    player: Optional[str] = None,
):
    """Top runs plus an optional personal best. Public, briefly cacheable."""
    response.headers["Cache-Control"] = settings.LEADERBOARD_CACHE_CONTROL
    try:
        return get_leaderboard(_run_repo, parse_int(limit), player)
    except Exception:
        board_log.exception("Leaderboard error")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
