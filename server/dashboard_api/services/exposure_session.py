"""Thread-safe exposure session shared by the location and timer routes.

Holds the selected city, the prediction settings and the countdown timer.
The dashboard tracks a single session per server process.
"""
import logging
import threading
from typing import Callable, Optional

from exposure_risk.models import City, ExposureFilter, HealthProfile
from exposure_risk.scoring import predict_risk_timeline
from exposure_risk.timer import (
    ExposureTimer,
    current_risks,
    format_clock,
    format_exposure,
    hours_until,
    next_risk,
)

from ..config import get_settings

logger = logging.getLogger(__name__)

ALERT_MESSAGE = (
    "Immediate attention required: your exposure countdown has finished. "
    "Move to a cleaner environment and seek medical advice if you have symptoms."
)


class ExposureSession:
    """Selected city plus exposure countdown.

    All state changes go through the lock so concurrent requests see a
    consistent timer.
    """

    def __init__(
        self,
        countdown_hours: float = 24,
        clock: Optional[Callable[[], int]] = None,
    ):
        """Initialize the session.

        Args:
            countdown_hours: Initial countdown length in hours.
            clock: Millisecond clock passed to the timer (tests use a fake one).
        """
        self.timer = ExposureTimer(countdown_hours=countdown_hours, clock=clock)
        self.city: Optional[City] = None
        self.profile = HealthProfile.HEALTHY
        self.exposure = ExposureFilter.BOTH
        self._lock = threading.Lock()

    def select_city(self, city: City, auto_start: bool = False) -> dict:
        """Select a city, restarting the countdown if auto_start is set.

        Args:
            city: The city the user is in.
            auto_start: Reset and start the timer, as after a detected location.
        """
        with self._lock:
            self.city = city
            if auto_start:
                self.timer.reset()
                self.timer.start()
                logger.info(f"[TIMER] Auto-started for {city.id}")
            return self._status()

    def configure(self, profile: HealthProfile, exposure: ExposureFilter) -> None:
        with self._lock:
            self.profile = HealthProfile.parse(profile)
            self.exposure = ExposureFilter.parse(exposure)

    def start(self) -> dict:
        with self._lock:
            self.timer.start()
            return self._status()

    def pause(self) -> dict:
        with self._lock:
            self.timer.pause()
            return self._status()

    def reset(self) -> dict:
        with self._lock:
            self.timer.reset()
            return self._status()

    def set_countdown_hours(self, hours: float) -> bool:
        with self._lock:
            return self.timer.set_countdown_hours(hours)

    def status(self) -> dict:
        with self._lock:
            return self._status()

    def _status(self) -> dict:
        state = self.timer.tick()
        result = {
            "state": state.to_dict(),
            "remaining_clock": format_clock(state.remaining),
            "exposure_time": format_exposure(state.elapsed_time),
            "city_id": self.city.id if self.city else None,
            "profile": self.profile.value,
            "exposure": self.exposure.value,
            "current_risks": [],
            "next_risk": None,
            "hours_until_next": None,
            "alert_message": ALERT_MESSAGE if state.alert_active else None,
        }
        if self.city is None:
            return result

        predictions = predict_risk_timeline(self.city, self.profile, self.exposure)
        result["current_risks"] = [
            p.to_dict() for p in current_risks(predictions, state.elapsed_time)
        ]
        upcoming = next_risk(predictions, state.elapsed_time)
        if upcoming is not None:
            result["next_risk"] = upcoming.to_dict()
            result["hours_until_next"] = hours_until(upcoming, state.elapsed_time)
        return result


_session: Optional[ExposureSession] = None
_session_lock = threading.Lock()


def get_exposure_session() -> ExposureSession:
    """Global session, created on first use from settings."""
    global _session
    with _session_lock:
        if _session is None:
            _session = ExposureSession(countdown_hours=get_settings().default_countdown_hours)
        return _session
