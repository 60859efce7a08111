"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Storage settings
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "memory")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./products.db")
    SEED_MOCK_DATA: bool = os.getenv("SEED_MOCK_DATA", "true").lower() == "true"

    # Query settings
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "6"))
    PRICE_SIMULATION_ENABLED: bool = (
        os.getenv("PRICE_SIMULATION_ENABLED", "false").lower() == "true"
    )

    # Live update settings
    LIVE_UPDATE_QUEUE_SIZE: int = int(os.getenv("LIVE_UPDATE_QUEUE_SIZE", "100"))
    WS_SEND_INITIAL_SNAPSHOT: bool = (
        os.getenv("WS_SEND_INITIAL_SNAPSHOT", "true").lower() == "true"
    )

    # Generator settings
    GENERATOR_INTERVAL_SECONDS: float = float(
        os.getenv("GENERATOR_INTERVAL_SECONDS", "3")
    )
    GENERATED_PRICE_MIN: float = float(os.getenv("GENERATED_PRICE_MIN", "10"))
    GENERATED_PRICE_MAX: float = float(os.getenv("GENERATED_PRICE_MAX", "500"))
    GENERATED_CATEGORIES: tuple[str, ...] = (
        "Electronics",
        "Books",
        "Clothing",
        "Shoes",
        "Home",
    )

    # File storage settings
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")
    MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

    # CORS
    CORS_ALLOW_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def uses_sqlite(self) -> bool:
        """Return True when products are persisted in SQLite."""
        return self.STORAGE_BACKEND.lower() == "sqlite"

    def __init__(self):
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with env={self.ENVIRONMENT}, debug={self.debug}, "
            f"storage={self.STORAGE_BACKEND}, log_level={self.log_level}"
        )


# Create a global settings instance for import
settings = Settings()
