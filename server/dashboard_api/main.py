"""Environmental Health Risk Dashboard API - FastAPI application entry point."""
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from exposure_risk.errors import InvalidEnumError
from exposure_risk.storage import StorageError

from .config import get_settings
from .routes import risks, cities, location, timer, assessment, profile

logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title="Environmental Health Risk Dashboard API",
    description="Exposure risk scoring, onset predictions and exposure tracking for Indian cities",
    version="1.0.0",
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

# Include routers
app.include_router(risks.router)
app.include_router(cities.router)
app.include_router(location.router)
app.include_router(timer.router)
app.include_router(assessment.router)
app.include_router(profile.router)


@app.exception_handler(InvalidEnumError)
async def invalid_enum_handler(request: Request, exc: InvalidEnumError):
    """Unknown category values are client errors."""
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "field": exc.field, "allowed": exc.allowed},
    )


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"[STORE] {request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "risk-dashboard-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server.dashboard_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
