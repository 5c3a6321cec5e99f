"""Run entities -- validated submission and persisted record."""
import math
from datetime import datetime, timezone
from uuid import uuid4


class RunSubmission:
    """A client submission after validation. Values are typed and in range."""

    def __init__(
        self,
        name: str,
        floor: int,
        kills: int,
        level: int,
        time: float,
        boss_kills: int,
        bb_earned: int,
        viewers: int,
        class_id: str,
        race_id: str,
        victory: bool,
        checksum: str,
    ):
        self.name = name
        self.floor = floor
        self.kills = kills
        self.level = level
        self.time = time
        self.boss_kills = boss_kills
        self.bb_earned = bb_earned
        self.viewers = viewers
        self.class_id = class_id
        self.race_id = race_id
        self.victory = victory
        self.checksum = checksum


def normalize_player_name(name: str) -> str:
    return name.strip().lower()


def _to_int(value, default: int = 0) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


class RunRecord:
    """
    Persisted run. Immutable once written.
    The score is the server-computed value and the single source of truth
    for both rankings.
    """

    def __init__(
        self,
        run_id: str,
        name: str,
        score: int,
        floor: int,
        kills: int,
        level: int,
        time: int,
        boss_kills: int,
        bb_earned: int,
        viewers: int,
        class_id: str,
        race_id: str,
        victory: bool,
        timestamp: int,
    ):
        self._id = run_id
        self._name = name
        self._score = score
        self._floor = floor
        self._kills = kills
        self._level = level
        self._time = time
        self._boss_kills = boss_kills
        self._bb_earned = bb_earned
        self._viewers = viewers
        self._class_id = class_id
        self._race_id = race_id
        self._victory = victory
        self._timestamp = timestamp

    @classmethod
    def create(cls, submission: RunSubmission, score: int) -> "RunRecord":
        """Build a fresh record with a new id and the current capture time."""
        now_ms = int(datetime.now(timezone.utc).timestamp() * 1000)
        return cls(
            run_id=str(uuid4()),
            name=submission.name,
            score=score,
            floor=submission.floor,
            kills=submission.kills,
            level=submission.level,
            time=math.floor(submission.time + 0.5),
            boss_kills=submission.boss_kills,
            bb_earned=submission.bb_earned,
            viewers=submission.viewers,
            class_id=submission.class_id,
            race_id=submission.race_id,
            victory=submission.victory,
            timestamp=now_ms,
        )

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def score(self) -> int:
        return self._score

    def to_hash(self) -> dict:
        """Flat string mapping for hash storage."""
        return {
            "id": self._id,
            "name": self._name,
            "score": str(self._score),
            "floor": str(self._floor),
            "kills": str(self._kills),
            "level": str(self._level),
            "time": str(self._time),
            "bossKills": str(self._boss_kills),
            "bbEarned": str(self._bb_earned),
            "viewers": str(self._viewers),
            "classId": self._class_id,
            "raceId": self._race_id,
            "victory": "true" if self._victory else "false",
            "timestamp": str(self._timestamp),
        }

    @classmethod
    def from_hash(cls, run_id: str, data: dict) -> "RunRecord | None":
        """Hydrate from stored fields. Returns None when the record is gone."""
        if not data or not data.get("name"):
            return None
        victory = data.get("victory")
        return cls(
            run_id=run_id,
            name=data["name"],
            score=_to_int(data.get("score")),
            floor=_to_int(data.get("floor"), 1) or 1,
            kills=_to_int(data.get("kills")),
            level=_to_int(data.get("level"), 1) or 1,
            time=_to_int(data.get("time")),
            boss_kills=_to_int(data.get("bossKills")),
            bb_earned=_to_int(data.get("bbEarned")),
            viewers=_to_int(data.get("viewers")),
            class_id=data.get("classId") or "",
            race_id=data.get("raceId") or "",
            victory=victory is True or victory == "true",
            timestamp=_to_int(data.get("timestamp")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "score": self._score,
            "floor": self._floor,
            "kills": self._kills,
            "level": self._level,
            "time": self._time,
            "bossKills": self._boss_kills,
            "bbEarned": self._bb_earned,
            "viewers": self._viewers,
            "classId": self._class_id,
            "raceId": self._race_id,
            "victory": self._victory,
            "timestamp": self._timestamp,
        }
