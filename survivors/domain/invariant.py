"""Validation guards for run submissions.

Fields are checked in a fixed order and the first failure wins. Numeric
fields follow leading-number parsing: ``"12abc"`` reads as 12, ``"abc"`` is
rejected. Nothing unparseable is ever coerced to zero.
"""
import math
import re

from survivors.domain.enums import CharacterClass, Race
from survivors.domain.errors import InvalidField, InvalidVictoryClaim
from survivors.domain.run import RunSubmission

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 16

MAX_FLOOR = 9
MAX_KILLS = 5000
MAX_LEVEL = 60
MIN_TIME_SECONDS = 20
VICTORY_MIN_BOSS_KILLS = 9

_TAG_RE = re.compile(r"<[^>]*>")
_NAME_DISALLOWED_RE = re.compile(r"[^A-Za-z0-9_\s\-.!]")
_INT_PREFIX_RE = re.compile(r"\s*([+-]?[0-9]+)")
_REAL_PREFIX_RE = re.compile(r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")


def sanitize_name(raw) -> str:
    """Strip markup and odd characters. Returns '' when nothing usable is left."""
    if not isinstance(raw, str):
        return ""
    clean = _NAME_DISALLOWED_RE.sub("", _TAG_RE.sub("", raw)).strip()
    if len(clean) < NAME_MIN_LENGTH:
        return ""
    return clean[:NAME_MAX_LENGTH]


def _representable(number) -> int | None:
    """Integers beyond the double range are rejected: the game client cannot send them."""
    try:
        number = int(number)
        float(number)
    except (OverflowError, ValueError):
        return None
    return number


def parse_int(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return _representable(value)
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _INT_PREFIX_RE.match(value)
        return _representable(match.group(1)) if match else None
    return None


def parse_real(value) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        raw = value
    elif isinstance(value, str):
        match = _REAL_PREFIX_RE.match(value)
        if not match:
            return None
        raw = match.group(1)
    else:
        return None
    try:
        number = float(raw)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _bounded_int(body: dict, field: str, low: int, high: int | None, message: str) -> int:
    value = parse_int(body.get(field))
    if value is None or value < low or (high is not None and value > high):
        raise InvalidField(field, message)
    return value


def validate_victory_claim(victory: bool, floor: int, boss_kills: int) -> None:
    """Raises if a victory is claimed without clearing the final floor."""
    if victory and (floor < MAX_FLOOR or boss_kills < VICTORY_MIN_BOSS_KILLS):
        raise InvalidVictoryClaim()


def validate_submission(body: dict) -> RunSubmission:
    """Turn a raw request body into a typed RunSubmission or raise."""
    name = sanitize_name(body.get("name"))
    if not name:
        raise InvalidField("name", "Invalid name (2-16 characters required)")

    floor = _bounded_int(body, "floor", 1, MAX_FLOOR, "Invalid floor (1-9)")
    kills = _bounded_int(body, "kills", 0, MAX_KILLS, "Invalid kills")
    level = _bounded_int(body, "level", 1, MAX_LEVEL, "Invalid level")

    time = parse_real(body.get("time"))
    if time is None or time < MIN_TIME_SECONDS:
        raise InvalidField("time", "Invalid time")

    # A boss sits on every floor, so kills cannot outnumber floors reached.
    boss_kills = _bounded_int(body, "bossKills", 0, floor, "Invalid boss kills")
    bb_earned = _bounded_int(body, "bbEarned", 0, None, "Invalid BB earned")
    viewers = _bounded_int(body, "viewers", 0, None, "Invalid viewers")

    class_id = body.get("classId")
    if class_id not in CharacterClass.values():
        raise InvalidField("classId", "Invalid class")
    race_id = body.get("raceId")
    if race_id not in Race.values():
        raise InvalidField("raceId", "Invalid race")

    victory = bool(body.get("victory"))
    validate_victory_claim(victory, floor, boss_kills)

    checksum = body.get("checksum")
    return RunSubmission(
        name=name,
        floor=floor,
        kills=kills,
        level=level,
        time=time,
        boss_kills=boss_kills,
        bb_earned=bb_earned,
        viewers=viewers,
        class_id=class_id,
        race_id=race_id,
        victory=victory,
        checksum=str(checksum) if checksum else "",
    )
