"""
Application configuration. Loads from environment variables.
Secrets and sensitive config must never be hardcoded.
"""

import os

from dotenv import load_dotenv

load_dotenv()
from functools import lru_cache


@lru_cache(maxsize=1)
def get_settings() -> "Settings":
    """Return cached settings instance."""
    return Settings()


class Settings:
    """Application settings loaded from environment."""

    # App
    app_name: str = "Excelsior Admin"
    debug: bool = False
    log_level: str = "INFO"

    # Database (postgresql+psycopg for psycopg3; sqlite URLs accepted for local runs/tests)
    database_url: str = "postgresql+psycopg://localhost:5432/excelsior_dev"
    db_connect_timeout: int = 10  # seconds

    # Security
    internal_job_token: str = ""  # Required for /internal/* endpoints
    admin_api_token: str = ""  # Bearer token for /api/v1/* admin routes

    # Paging: list endpoints clamp requested size to [1, max_page_size]
    default_page_size: int = 10
    max_page_size: int = 100

    def __init__(self) -> None:
        self.app_name = os.getenv("APP_NAME", self.app_name)
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", self.log_level).upper()

        default_user = os.getenv("PGUSER") or os.getenv("USER") or "postgres"
        default_url = (
            f"postgresql+psycopg://{default_user}:"
            f"{os.getenv('PGPASSWORD', '')}@"
            f"{os.getenv('PGHOST', 'localhost')}:"
            f"{os.getenv('PGPORT', '5432')}/"
            f"{os.getenv('PGDATABASE', 'excelsior_dev')}"
        )
        raw_url = os.getenv("DATABASE_URL", default_url)
        # Ensure psycopg3 driver if URL uses generic postgresql://
        if raw_url.startswith("postgresql://") and not raw_url.startswith("postgresql+psycopg"):
            raw_url = raw_url.replace("postgresql://", "postgresql+psycopg://", 1)
        self.database_url = raw_url
        self.db_connect_timeout = int(os.getenv("DB_CONNECT_TIMEOUT", str(self.db_connect_timeout)))

        self.internal_job_token = os.getenv("INTERNAL_JOB_TOKEN", "")
        self.admin_api_token = os.getenv("ADMIN_API_TOKEN", "")

        self.default_page_size = int(
            os.getenv("DEFAULT_PAGE_SIZE", str(self.default_page_size))
        )
        self.max_page_size = int(os.getenv("MAX_PAGE_SIZE", str(self.max_page_size)))
