"""Scoring rules for completed runs."""
import math


class ScoringRules:
    """Point calculation constants and logic."""

    POINTS_PER_FLOOR = 1000
    POINTS_PER_BOSS_KILL = 500
    POINTS_PER_KILL = 2
    POINTS_PER_LEVEL = 50
    VIEWERS_PER_POINT = 100
    VICTORY_BONUS = 5000
    SECONDS_PER_PENALTY_POINT = 10

    @staticmethod
    def compute_score(
        floor: int,
        boss_kills: int,
        kills: int,
        level: int,
        viewers: int,
        time: float,
        victory: bool,
    ) -> int:
        """
        Canonical score of a run. Any score the client sent is ignored.
        Slow runs are penalised, so the result can go negative.
        """
        return (
            floor * ScoringRules.POINTS_PER_FLOOR
            + boss_kills * ScoringRules.POINTS_PER_BOSS_KILL
            + kills * ScoringRules.POINTS_PER_KILL
            + level * ScoringRules.POINTS_PER_LEVEL
            + viewers // ScoringRules.VIEWERS_PER_POINT
            + (ScoringRules.VICTORY_BONUS if victory else 0)
            - math.floor(time / ScoringRules.SECONDS_PER_PENALTY_POINT)
        )

    @staticmethod
    def score_submission(submission) -> int:
        return ScoringRules.compute_score(
            floor=submission.floor,
            boss_kills=submission.boss_kills,
            kills=submission.kills,
            level=submission.level,
            viewers=submission.viewers,
            time=submission.time,
            victory=submission.victory,
        )
