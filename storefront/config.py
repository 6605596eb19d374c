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

    # Relational store
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite+aiosqlite:///./storefront.db",
    )
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"

    # Redis / notification stream
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    NOTIFICATIONS_STREAM_KEY: str = os.getenv(
        "NOTIFICATIONS_STREAM_KEY",
        "notifications:emails",
    )

    # Auth: tokens are issued by the authorization server, we only verify them
    JWT_SECRET: str | None = os.getenv("JWT_SECRET")
    JWT_ALGORITHMS: list[str] = [
        alg.strip()
        for alg in os.getenv("JWT_ALGORITHMS", "HS256").split(",")
        if alg.strip()
    ]
    JWT_AUDIENCE: str | None = os.getenv("JWT_AUDIENCE")
    JWT_ISSUER: str | None = os.getenv("JWT_ISSUER")

    # Public URLs
    PUBLIC_BASE_URL: str | None = os.getenv("PUBLIC_BASE_URL")
    PHOTO_BASE_URL: str = os.getenv("PHOTO_BASE_URL", "https://photos.storefront.local")

    # Payment gateways
    PAYPAL_BASE_URL: str = os.getenv("PAYPAL_BASE_URL", "paypal.com")
    PAGSEGURO_BASE_URL: str = os.getenv("PAGSEGURO_BASE_URL", "pagseguro.com")

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def auth_configured(self) -> bool:
        """Indicates whether JWT verification is configured."""
        return bool(self.JWT_SECRET)

    def __init__(self):
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with environment={self.ENVIRONMENT}, "
            f"debug={self.debug}, log_level={self.log_level}"
        )


# Create a global settings instance for import
settings = Settings()
