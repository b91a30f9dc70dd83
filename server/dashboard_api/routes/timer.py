"""Exposure countdown API routes."""
from fastapi import APIRouter, Depends, HTTPException

from exposure_risk.timer import COUNTDOWN_CHOICES_HOURS

from ..models.timer import DurationRequest, TimerStatus
from ..services.exposure_session import ExposureSession, get_exposure_session

router = APIRouter(prefix="/api/timer", tags=["Timer"])


@router.get("", response_model=TimerStatus)
async def get_timer(session: ExposureSession = Depends(get_exposure_session)):
    """
    Get the countdown state.

    Every read refreshes the elapsed time, so polling this once per second
    drives the countdown and latches the alert when it reaches zero.
    """
    return TimerStatus(**session.status())


@router.get("/choices")
async def get_countdown_choices():
    """Get the preset countdown lengths in hours."""
    return {"hours": list(COUNTDOWN_CHOICES_HOURS)}


@router.post("/start", response_model=TimerStatus)
async def start_timer(session: ExposureSession = Depends(get_exposure_session)):
    """Start the countdown, or resume it after a pause."""
    return TimerStatus(**session.start())


@router.post("/pause", response_model=TimerStatus)
async def pause_timer(session: ExposureSession = Depends(get_exposure_session)):
    """Pause the countdown, keeping the elapsed time."""
    return TimerStatus(**session.pause())


@router.post("/reset", response_model=TimerStatus)
async def reset_timer(session: ExposureSession = Depends(get_exposure_session)):
    """Stop the countdown and clear the elapsed time and alert."""
    return TimerStatus(**session.reset())


@router.put("/duration", response_model=TimerStatus)
async def set_timer_duration(
    request: DurationRequest,
    session: ExposureSession = Depends(get_exposure_session),
):
    """Change the countdown length. Not allowed while the countdown runs."""
    if not session.set_countdown_hours(request.hours):
        raise HTTPException(
            status_code=409,
            detail="Pause or reset the timer before changing its duration",
        )
    return TimerStatus(**session.status())
