"""
Pytest fixtures for exposure risk tests.
"""
import sys
import pytest
from pathlib import Path
from dotenv import load_dotenv

# Ensure src/ and the repo root are on sys.path so tests can import
# exposure_risk and server.dashboard_api.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for path in (SRC, ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Load environment variables
load_dotenv()

from exposure_risk.models import ActivityExposure, ExposureActivity  # noqa: E402
from exposure_risk.storage import HealthRecordStore, InMemoryKeyValueStore  # noqa: E402

MS_PER_MINUTE = 60 * 1000


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance_minutes(self, minutes: float) -> None:
        self.now += int(minutes * MS_PER_MINUTE)


@pytest.fixture
def fake_clock():
    """A clock frozen at a fixed instant."""
    return FakeClock()


@pytest.fixture
def kv_store():
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def record_store(kv_store):
    """Record store backed by the in-memory key-value store."""
    return HealthRecordStore(kv_store)


def make_activity(
    activity_id: str = "a1",
    date: str = "2024-03-01",
    location: str = "Delhi",
    exposure_type: ActivityExposure = ActivityExposure.AIR,
    duration: float = 2.0,
    aqi=None,
    **kwargs,
) -> ExposureActivity:
    """Build an ExposureActivity with sensible defaults."""
    return ExposureActivity(
        id=activity_id,
        date=date,
        location=location,
        exposure_type=exposure_type,
        duration=duration,
        aqi=aqi,
        **kwargs,
    )


@pytest.fixture
def activity_factory():
    """Factory for ExposureActivity records."""
    return make_activity
