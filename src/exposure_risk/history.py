"""
Exposure History Analysis.

Summaries over the user's logged exposure activities: how many, how
recent, how many at high AQI, and the trend over the latest entries.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from .guidance import HIGH_AQI_THRESHOLD
from .models import ExposureActivity
from .scoring import round_half_up

RECENT_DAYS = 30
TREND_WINDOW = 7
# More recent exposures than this counts as a high-frequency pattern.
HIGH_FREQUENCY_RECENT = 5


@dataclass
class HistorySummary:
    total: int
    recent: int
    high_risk: int
    average_duration: float
    top_location: str
    pattern: str

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "recent": self.recent,
            "high_risk": self.high_risk,
            "average_duration": self.average_duration,
            "top_location": self.top_location,
            "pattern": self.pattern,
        }


@dataclass
class TrendAnalysis:
    average_duration: float
    risk_trend_percent: int
    total_exposures: int

    def to_dict(self) -> dict:
        return {
            "average_duration": self.average_duration,
            "risk_trend_percent": self.risk_trend_percent,
            "total_exposures": self.total_exposures,
        }


def _activity_date(activity: ExposureActivity) -> Optional[date]:
    try:
        return datetime.strptime(activity.date[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def _is_high_risk(activity: ExposureActivity) -> bool:
    return (activity.aqi or 0) > HIGH_AQI_THRESHOLD


def summarize_exposure_history(
    history: Sequence[ExposureActivity],
    today: Optional[date] = None,
) -> Optional[HistorySummary]:
    """Summary of all logged exposures, or None when nothing is logged."""
    if not history:
        return None

    today = today or date.today()
    cutoff = today - timedelta(days=RECENT_DAYS)
    recent = []
    for activity in history:
        activity_day = _activity_date(activity)
        if activity_day is not None and activity_day >= cutoff:
            recent.append(activity)

    # Counter keeps first-seen order on ties
    top_location = Counter(a.location for a in history).most_common(1)[0][0]

    return HistorySummary(
        total=len(history),
        recent=len(recent),
        high_risk=sum(1 for a in history if _is_high_risk(a)),
        average_duration=round_half_up(sum(a.duration for a in history) / len(history), 1),
        top_location=top_location,
        pattern=(
            "High frequency exposure pattern detected"
            if len(recent) > HIGH_FREQUENCY_RECENT
            else "Moderate exposure frequency"
        ),
    )


def trend_analysis(history: Sequence[ExposureActivity]) -> Optional[TrendAnalysis]:
    """Trend over the latest entries; needs at least two."""
    if len(history) < 2:
        return None

    window = list(history)[-TREND_WINDOW:]
    average_duration = sum(a.duration for a in window) / len(window)
    risk_share = sum(1 for a in window if _is_high_risk(a)) / len(window)

    return TrendAnalysis(
        average_duration=round_half_up(average_duration, 1),
        risk_trend_percent=int(round_half_up(risk_share * 100)),
        total_exposures=len(history),
    )
