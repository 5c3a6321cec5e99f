"""Use case: read the ranked leaderboard and a player's personal best."""
from survivors import settings


def clamp_limit(limit: int | None) -> int:
    if limit is None or limit < 1:
        return settings.LEADERBOARD_DEFAULT_LIMIT
    return min(limit, settings.LEADERBOARD_MAX_LIMIT)


def top_entries(run_repo, limit: int | None) -> list:
    """
    Top runs, highest score first.
    Ranking entries whose record has expired are skipped and the remaining
    entries are renumbered 1..n, so ranks are always contiguous.
    """
    entries = []
    for run_id, _score in run_repo.top(clamp_limit(limit)):
        run = run_repo.get(run_id)
        if run is None:
            continue
        entries.append({"rank": len(entries) + 1, **run.to_dict()})
    return entries


def player_best(run_repo, name: str) -> dict | None:
    """The player's highest-scoring run with its raw global rank, or None."""
    if not name or not name.strip():
        return None
    best_id = run_repo.best_of(name)
    if best_id is None:
        return None
    run = run_repo.get(best_id)
    if run is None:
        return None
    return {"rank": run_repo.global_rank(best_id), **run.to_dict()}


def total(run_repo) -> int:
    return run_repo.total()


def get_leaderboard(run_repo, limit: int | None = None, player: str | None = None) -> dict:
    return {
        "entries": top_entries(run_repo, limit),
        "total": total(run_repo),
        "playerBest": player_best(run_repo, player) if player else None,
    }
