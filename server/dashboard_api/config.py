"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Storage
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
    store_db_name: str = "exposure_records.db"

    @property
    def store_db_path(self) -> str:
        return os.path.join(self.data_path, self.store_db_name)

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8082

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # IP geolocation fallback
    ip_lookup_url: str = "https://ipapi.co"
    ip_lookup_timeout: float = 5.0

    # Nearest-city radius
    match_radius_km: float = 100.0

    # Exposure countdown
    default_countdown_hours: int = 24

    class Config:
        env_prefix = "RISK_DASHBOARD_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
