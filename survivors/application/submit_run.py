"""Use case: accept, verify, score and rank a finished run."""
from survivors.domain.checksum import verify_checksum
from survivors.domain.errors import MissingBody
from survivors.domain.invariant import validate_submission
from survivors.domain.scoring import ScoringRules
from survivors.infrastructure import ratelimit


def submit_run(store, run_repo, identity: str, body, secret: str) -> dict:
    """
    Process one run submission.
    Rate limit -> validate -> checksum -> score -> persist.
    Everything before persistence raises without writing anything except the
    rate counters.
    """
    ratelimit.consume(store, identity)

    if not isinstance(body, dict):
        raise MissingBody()

    submission = validate_submission(body)
    verify_checksum(submission, secret)

    score = ScoringRules.score_submission(submission)
    result = run_repo.record(submission, score)
    return {"success": True, **result}
