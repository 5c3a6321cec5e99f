"""Run integrity checksum shared with the game client.

The client computes the same digest before submitting, so this only deters
casual tampering: anyone who reads the client can forge it.
"""
import math
from decimal import Decimal

from survivors.domain.errors import ChecksumMismatch
from survivors.domain.run import RunSubmission

FIELD_SEPARATOR = "|"
HASH_SEED = 5381
_MASK_32 = 0xFFFFFFFF


def djb2_hex(text: str) -> str:
    """32-bit djb2 over UTF-16 code units, rendered as unsigned hex."""
    value = HASH_SEED
    encoded = text.encode("utf-16-le")
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        value = (value * 33 + unit) & _MASK_32
    return format(value, "x")


def js_integer_str(value: int) -> str:
    """Render an integer the way the client's String(number) does.

    The client holds numbers as doubles: digits past double precision read as
    zeros, and from 1e21 up the exponent form is used.
    """
    as_float = float(value)
    if abs(as_float) >= 1e21:
        return repr(as_float)
    return str(int(Decimal(repr(as_float))))


def checksum_payload(submission: RunSubmission, secret: str) -> str:
    parts = [
        submission.name,
        submission.floor,
        submission.kills,
        submission.level,
        math.floor(submission.time),
        submission.boss_kills,
        submission.bb_earned,
        submission.viewers,
        submission.class_id,
        submission.race_id,
        secret,
    ]
    return FIELD_SEPARATOR.join(p if isinstance(p, str) else js_integer_str(p) for p in parts)


def compute_checksum(submission: RunSubmission, secret: str) -> str:
    return djb2_hex(checksum_payload(submission, secret))


def verify_checksum(submission: RunSubmission, secret: str) -> None:
    """Raises ChecksumMismatch unless the client checksum matches exactly."""
    if submission.checksum != compute_checksum(submission, secret):
        raise ChecksumMismatch()
