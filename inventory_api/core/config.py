"""Application configuration loaded from the environment."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # --- API metadata ---
    PROJECT_NAME: str = "Inventory API"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])

    # --- Database ---
    DATABASE_URL: str = "sqlite:///./inventory.db"
    ASYNC_DATABASE_URL: str | None = None
    DB_ECHO: bool = False

    # --- Logging & metrics ---
    LOG_LEVEL: str = "INFO"
    METRICS_ENABLED: bool = True
    METRICS_NAMESPACE: str = "inventory"
    METRICS_LATENCY_BUCKETS: list[float] = Field(default_factory=lambda: [0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0])

    # --- Uploads / import ---
    MAX_REQUEST_SIZE_BYTES: int = 5 * 1024 * 1024  # 5MB
    UPLOAD_DIR: Path = Path("uploads")

    @staticmethod
    def _split_list(value: str | list[str] | None) -> list[str]:
        if not value:
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return [item for item in value if isinstance(item, str) and item.strip()]

    @staticmethod
    def _split_float_list(value: str | list[float] | None) -> list[float]:
        if value is None:
            return []
        items = value.split(",") if isinstance(value, str) else value
        floats: list[float] = []
        for item in items:
            try:
                floats.append(float(item))
            except (TypeError, ValueError):
                continue
        return floats

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def validate_cors_origins(cls, value: str | list[str] | None) -> list[str]:
        return cls._split_list(value) or ["*"]

    @field_validator("METRICS_LATENCY_BUCKETS", mode="before")
    @classmethod
    def validate_metric_buckets(cls, value: str | list[float] | None) -> list[float]:
        return cls._split_float_list(value) or [0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0]

    @field_validator("MAX_REQUEST_SIZE_BYTES")
    @classmethod
    def validate_request_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("MAX_REQUEST_SIZE_BYTES must be positive.")
        return value

    @model_validator(mode="after")
    def ensure_async_database_url(self) -> "Settings":
        """Ensure an async URL is always available."""
        if not self.ASYNC_DATABASE_URL:
            self.ASYNC_DATABASE_URL = self._derive_async_url(self.DATABASE_URL)
        return self

    @staticmethod
    def _derive_async_url(url: str) -> str:
        """Best-effort conversion from sync to async driver."""
        if "+asyncpg" in url or "+aiosqlite" in url:
            return url
        if url.startswith("sqlite:"):
            return url.replace("sqlite:", "sqlite+aiosqlite:", 1)
        if "://" not in url:
            return url

        scheme, rest = url.split("://", 1)
        if scheme.startswith("postgres"):
            return f"postgresql+asyncpg://{rest}"
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()
