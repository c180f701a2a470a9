from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Local dev: load from .env automatically.
    # In production: you typically inject real env vars instead.
    model_config = SettingsConfigDict(
        env_prefix="", extra="ignore", env_file=".env", env_file_encoding="utf-8", populate_by_name=True
    )

    app_name: str = Field(default="User Management API", validation_alias="APP_NAME")
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")

    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=5000, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # The three fixture users (ids 1-3) the demo deployment starts with.
    seed_demo_users: bool = Field(default=True, validation_alias="SEED_DEMO_USERS")

    def model_post_init(self, __context):  # type: ignore[override]
        # "/api/" and "api" both mean "/api".
        prefix = (self.api_prefix or "").strip().strip("/")
        self.api_prefix = f"/{prefix}" if prefix else ""
        self.log_level = (self.log_level or "INFO").strip().upper()


def get_settings() -> Settings:
    """Load settings from environment.

    Keep this as the single canonical constructor for Settings(). FastAPI
    dependencies and tests can override/monkeypatch this function.
    """
    return Settings()
