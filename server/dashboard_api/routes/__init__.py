"""API route modules."""
from .risks import router as risks_router
from .cities import router as cities_router
from .location import router as location_router
from .timer import router as timer_router
from .assessment import router as assessment_router
from .profile import router as profile_router

__all__ = [
    "risks_router",
    "cities_router",
    "location_router",
    "timer_router",
    "assessment_router",
    "profile_router",
]
