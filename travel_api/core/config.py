"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, no scattered magic strings.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_default: Default rate limit applied to every endpoint.
        database_url: Full SQLAlchemy URL. Takes precedence over postgres_*.
        auto_create_schema: Create missing tables on startup.
        jwt_secret: Shared secret used to verify bearer tokens.
        jwt_algorithm: Signature algorithm of bearer tokens.
        default_page_size: Page size used when the client sends none.
        max_page_size: Upper bound accepted for the page size.
        notification_webhook_urls: Webhooks receiving lifecycle events.
        notification_queue_size: Backlog bound of the notification queue.
        notification_webhook_timeout: HTTP timeout for webhook delivery.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Corporate Travel API"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_default: str = "60/minute"

    database_url: Optional[str] = None
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "corporate_travel"
    auto_create_schema: bool = True

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"

    default_page_size: int = 20
    max_page_size: int = 100

    notification_webhook_urls: list[str] = []
    notification_queue_size: int = 1000
    notification_webhook_timeout: float = 10.0

    def get_database_dsn(self) -> str:
        """Return the effective database DSN.

        Priority:
        1. Explicit `DATABASE_URL`
        2. Build a psycopg2 DSN from postgres_* values (Docker Compose, local setups)
        """
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
