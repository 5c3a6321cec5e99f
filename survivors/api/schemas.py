"""Response schemas. Field aliases are the camelCase names the game client reads."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmitResponse(BaseModel):
    success: bool = True
    id: str
    score: int
    rank: Optional[int] = None


class LeaderboardEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rank: Optional[int] = None
    id: str
    name: str
    score: int
    floor: int
    kills: int
    level: int
    time: int
    boss_kills: int = Field(alias="bossKills")
    bb_earned: int = Field(alias="bbEarned")
    viewers: int
    class_id: str = Field(alias="classId")
    race_id: str = Field(alias="raceId")
    victory: bool
    timestamp: int


class LeaderboardResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    entries: List[LeaderboardEntry]
    total: int
    player_best: Optional[LeaderboardEntry] = Field(default=None, alias="playerBest")
