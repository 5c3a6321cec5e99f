"""Run persistence and ranking over the key/sorted-set store."""
from typing import List, Optional, Tuple

from survivors import settings
from survivors.domain.run import RunRecord, RunSubmission, normalize_player_name

GLOBAL_RANKING_KEY = "leaderboard"


def run_key(run_id: str) -> str:
    return f"run:{run_id}"


def player_ranking_key(name: str) -> str:
    return f"player:{normalize_player_name(name)}"


class RunRepository:
    """
    Stores run records and keeps the global and per-player rankings.

    The record is written before either ranking insert, so a reader can meet
    a ranking entry whose record is missing (crash in between, or expiry) but
    never the reverse. Readers skip such entries.
    """

    def __init__(self, store):
        self._store = store

    def record(self, submission: RunSubmission, score: int) -> dict:
        """Persist a scored run and return its id, score and 1-based global rank."""
        run = RunRecord.create(submission, score)
        key = run_key(run.id)
        self._store.hash_set(key, run.to_hash())
        self._store.expire(key, settings.RUN_RETENTION_SECONDS)

        self._store.sorted_set_insert(GLOBAL_RANKING_KEY, run.score, run.id)
        self._store.sorted_set_insert(player_ranking_key(run.name), run.score, run.id)

        return {"id": run.id, "score": run.score, "rank": self.global_rank(run.id)}

    def get(self, run_id: str) -> Optional[RunRecord]:
        return RunRecord.from_hash(run_id, self._store.hash_get_all(run_key(run_id)))

    def top(self, count: int) -> List[Tuple[str, float]]:
        """Highest ``count`` (id, score) pairs of the global ranking."""
        if count <= 0:
            return []
        return self._store.sorted_set_range_desc_with_scores(GLOBAL_RANKING_KEY, 0, count - 1)

    def best_of(self, name: str) -> Optional[str]:
        """Id of the player's highest-scoring run, if any."""
        rows = self._store.sorted_set_range_desc_with_scores(player_ranking_key(name), 0, 0)
        return rows[0][0] if rows else None

    def global_rank(self, run_id: str) -> Optional[int]:
        rank = self._store.sorted_set_rev_rank(GLOBAL_RANKING_KEY, run_id)
        return rank + 1 if rank is not None else None

    def total(self) -> int:
        return self._store.sorted_set_cardinality(GLOBAL_RANKING_KEY)
