"""
Centralized runtime configuration for the backend.

This module uses `python-dotenv` to read a local `.env` file during
development and exposes a Pydantic `Settings` model named `settings`.

Environment variables used:
- `DB_PATH`: SQLite file holding the `stress_logs` table.
- `HOST` / `PORT`: where `python main.py` binds uvicorn.
- `ENVIRONMENT`: `development` or `production`. Production also serves
  the bundled front end from `STATIC_DIR`.
- `CACHE_TTL_SECONDS`: freshness bound for cached list/analytics responses.
- `ANALYTICS_WINDOW`: how many recent entries the analytics sample.
- `DEFAULT_LIST_LIMIT` / `MAX_LIST_LIMIT`: list endpoint limit default and cap.
- `LOG_LEVEL`: structlog/stdlib level name.
- `ALLOWED_ORIGINS`: comma separated CORS origins (`*` for any).

Example `.env`:
DB_PATH=./stress_agent.db
PORT=3001
ENVIRONMENT=development
"""

import os
from typing import List, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

load_dotenv()


def _env_to_literal(val: str) -> Literal["development", "production"]:
    v = val.strip().lower()
    if v in {"prod", "production"}:
        return "production"
    return "development"


class Settings(BaseModel):
    """Where the stress log API keeps its data, listens and how long it caches.

    Each field reads its environment variable when the model is built, so
    `Settings()` inside a test picks up `monkeypatch.setenv`. Application
    code reads the shared `settings` instance.
    """

    model_config = ConfigDict(validate_default=True)

    db_path: str = Field(default_factory=lambda: os.getenv("DB_PATH", "stress_agent.db"))
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "3001")), gt=0, lt=65536)
    environment: Literal["development", "production"] = Field(
        default_factory=lambda: _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    )
    static_dir: str = Field(default_factory=lambda: os.getenv("STATIC_DIR", "build"))
    cache_ttl_seconds: float = Field(
        default_factory=lambda: float(os.getenv("CACHE_TTL_SECONDS", "300")), gt=0.0
    )
    analytics_window: int = Field(
        default_factory=lambda: int(os.getenv("ANALYTICS_WINDOW", "14")), gt=0
    )
    default_list_limit: int = Field(
        default_factory=lambda: int(os.getenv("DEFAULT_LIST_LIMIT", "30")), gt=0
    )
    max_list_limit: int = Field(
        default_factory=lambda: int(os.getenv("MAX_LIST_LIMIT", "1000")), gt=0
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    allowed_origins: List[str] = Field(
        default_factory=lambda: os.getenv("ALLOWED_ORIGINS", "*").split(",")
    )

    @field_validator("log_level")
    def normalize_log_level(cls, v):
        v = v.strip().upper()
        return v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


settings = Settings()
