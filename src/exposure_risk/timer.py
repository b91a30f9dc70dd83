"""
Exposure Countdown Timer.

A countdown of exposure time in the selected city. The timer is a small
state machine (idle -> running -> paused -> running -> idle) driven by an
injectable millisecond clock. Callers poll tick() once per second while the
timer runs; every read of the state also refreshes it.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from .models import RiskPrediction
from .scoring import round_half_up

logger = logging.getLogger(__name__)

MS_PER_HOUR = 60 * 60 * 1000
POLL_INTERVAL_SECONDS = 1.0
DEFAULT_COUNTDOWN_HOURS = 24
COUNTDOWN_CHOICES_HOURS = (1, 3, 6, 12, 24, 48, 72)
# Risks are shown as "current" this many hours before their predicted onset.
CURRENT_RISK_LEAD_HOURS = 2


def _now_ms() -> int:
    return int(time.time() * 1000)


class TimerPhase(str, Enum):
    """Phase of the countdown."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass
class TimerState:
    """Snapshot of the timer, all times in milliseconds."""

    start_time: int
    elapsed_time: int
    is_running: bool
    total_duration: int
    phase: TimerPhase
    alert_active: bool

    @property
    def remaining(self) -> int:
        return max(0, self.total_duration - self.elapsed_time)

    @property
    def progress_percent(self) -> float:
        if self.total_duration == 0:
            return 0.0
        progress = self.elapsed_time / self.total_duration * 100
        return min(100.0, max(0.0, progress))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "start_time": self.start_time,
            "elapsed_time": self.elapsed_time,
            "is_running": self.is_running,
            "total_duration": self.total_duration,
            "remaining": self.remaining,
            "progress_percent": self.progress_percent,
            "phase": self.phase.value,
            "alert_active": self.alert_active,
        }


class ExposureTimer:
    """
    Countdown of exposure time.

    The "immediate attention" alert latches once the countdown reaches zero
    while running and stays on until reset().
    """

    def __init__(
        self,
        countdown_hours: float = DEFAULT_COUNTDOWN_HOURS,
        clock: Optional[Callable[[], int]] = None,
    ):
        """
        Args:
            countdown_hours: Initial countdown length in hours
            clock: Returns the current time in epoch milliseconds
        """
        self._clock = clock or _now_ms
        self._start_time = 0
        self._elapsed = 0
        self._total = int(countdown_hours * MS_PER_HOUR)
        self._phase = TimerPhase.IDLE
        self._alert = False

    @property
    def is_running(self) -> bool:
        return self._phase is TimerPhase.RUNNING

    @property
    def phase(self) -> TimerPhase:
        return self._phase

    def start(self) -> TimerState:
        """Start from idle, or resume from paused keeping the elapsed time."""
        if self.is_running:
            return self.tick()
        now = self._clock()
        self._start_time = now - self._elapsed
        self._phase = TimerPhase.RUNNING
        logger.info(f"[TIMER] Started: elapsed={self._elapsed}ms, total={self._total}ms")
        return self.tick()

    def pause(self) -> TimerState:
        """Freeze the elapsed time."""
        if not self.is_running:
            return self.snapshot()
        self.tick()
        self._phase = TimerPhase.PAUSED
        logger.info(f"[TIMER] Paused at elapsed={self._elapsed}ms")
        return self.snapshot()

    def reset(self) -> TimerState:
        """Back to idle with no elapsed time and no alert."""
        self._start_time = 0
        self._elapsed = 0
        self._phase = TimerPhase.IDLE
        self._alert = False
        logger.info("[TIMER] Reset")
        return self.snapshot()

    def set_countdown_hours(self, hours: float) -> bool:
        """
        Change the countdown length.

        Returns False (and changes nothing) while the timer is running.
        """
        if hours <= 0:
            raise ValueError(f"Countdown must be positive, got {hours}")
        if self.is_running:
            logger.warning("[TIMER] Countdown change rejected while running")
            return False
        self._total = int(hours * MS_PER_HOUR)
        return True

    def tick(self) -> TimerState:
        """Refresh elapsed time from the clock and latch the alert."""
        if self.is_running:
            self._elapsed = self._clock() - self._start_time
            if self._total - self._elapsed <= 0 and not self._alert:
                self._alert = True
                logger.warning("[TIMER] Countdown expired: immediate attention required")
        return self.snapshot()

    def snapshot(self) -> TimerState:
        return TimerState(
            start_time=self._start_time,
            elapsed_time=self._elapsed,
            is_running=self.is_running,
            total_duration=self._total,
            phase=self._phase,
            alert_active=self._alert,
        )


def current_risks(predictions: Sequence[RiskPrediction], elapsed_ms: int) -> List[RiskPrediction]:
    """Predictions whose onset is within the lead window of the elapsed time."""
    if elapsed_ms <= 0:
        return []
    hours = elapsed_ms / MS_PER_HOUR
    return [p for p in predictions if hours >= p.time_to_risk - CURRENT_RISK_LEAD_HOURS]


def next_risk(predictions: Sequence[RiskPrediction], elapsed_ms: int) -> Optional[RiskPrediction]:
    """First prediction whose onset is still ahead."""
    hours = elapsed_ms / MS_PER_HOUR
    for prediction in predictions:
        if prediction.time_to_risk > hours:
            return prediction
    return None


def hours_until(prediction: RiskPrediction, elapsed_ms: int) -> int:
    return max(0, int(round_half_up(prediction.time_to_risk - elapsed_ms / MS_PER_HOUR)))


def format_clock(milliseconds: int) -> str:
    """Format milliseconds as HH:MM:SS."""
    total_seconds = int(milliseconds) // 1000
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_exposure(milliseconds: int) -> str:
    """Format milliseconds as e.g. '3h 25m'."""
    hours, rest = divmod(int(milliseconds), MS_PER_HOUR)
    return f"{hours}h {rest // 60000}m"
