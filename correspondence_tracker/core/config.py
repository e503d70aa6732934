from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings for the application
    """

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", case_sensitive=False
    )

    environment: str = "development"
    allowed_cors_urls: str = "http://localhost:3000"

    database_url: str = "sqlite:///./correspondence.db"
    db_echo: bool = False

    secret_key: str = "change-me"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    refresh_token_expire_days: int = 7

    app_name: str = "Correspondence Tracker"
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[str] = None

    reference_number_attempts: int = 5

    @property
    def is_sqlite(self) -> bool:
        """
        Whether the configured database is SQLite
        """
        return self.database_url.startswith("sqlite")

    @property
    def cors_origins(self) -> list:
        """
        CORS origins as a list
        """
        return [url.strip() for url in self.allowed_cors_urls.split(",") if url.strip()]


settings = Settings()
