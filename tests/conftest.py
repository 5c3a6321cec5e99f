"""
Shared pytest fixtures for the leaderboard test suite.

Strategy:
- Domain tests: pure in-memory, zero I/O.
- Store/repository tests: InMemoryStore driven by a fake clock.
- API tests: FastAPI TestClient over a fresh in-memory store per test.
  REDIS_URL is cleared so the app never reaches a real Redis.
"""
import os
import tempfile

import pytest

# ---------------------------------------------------------------------------
# Environment must be fixed before the survivors package is imported
# ---------------------------------------------------------------------------
os.environ.pop("REDIS_URL", None)
os.environ.setdefault("CHECKSUM_SECRET", "test-secret")
os.environ.setdefault(
    "AUDIT_LOG_FILE",
    os.path.join(tempfile.mkdtemp(prefix="survivors_test_"), "audit.log"),
)

from survivors import settings
from survivors.domain.checksum import compute_checksum
from survivors.domain.invariant import validate_submission
from survivors.infrastructure.repositories.run_repository import RunRepository
from survivors.infrastructure.store.memory_store import InMemoryStore

TEST_SECRET = settings.CHECKSUM_SECRET


# ---------------------------------------------------------------------------
# Helpers (reusable across test modules)
# ---------------------------------------------------------------------------

class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_body(**overrides) -> dict:
    """A plausible floor-3 run. Scores 4771 as submitted."""
    body = {
        "name": "Carl",
        "floor": 3,
        "kills": 120,
        "level": 12,
        "time": 845.6,
        "bossKills": 2,
        "bbEarned": 40,
        "viewers": 1500,
        "classId": "pugilist",
        "raceId": "human",
        "victory": False,
    }
    body.update(overrides)
    return body


def sign_body(body: dict, secret: str = TEST_SECRET) -> dict:
    """Attach the checksum the game client would send."""
    submission = validate_submission(body)
    return {**body, "checksum": compute_checksum(submission, secret)}


def make_signed(**overrides) -> dict:
    return sign_body(make_body(**overrides))


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemoryStore(clock=clock)


@pytest.fixture
def run_repo(store):
    return RunRepository(store)


@pytest.fixture
def audit_file(monkeypatch, tmp_path):
    """Redirect the audit log to a per-test file."""
    import survivors.infrastructure.audit as audit_mod
    path = tmp_path / "audit.log"
    monkeypatch.setattr(audit_mod, "LOG_FILE", path)
    return path


@pytest.fixture
def test_app(store, audit_file):
    from survivors.main import create_app
    return create_app(store)


@pytest.fixture
def client(test_app):
    from fastapi.testclient import TestClient
    return TestClient(test_app)
