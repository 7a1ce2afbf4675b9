"""
Configuration helpers for the persons directory backend.

Settings are read from environment variables once and cached, so that
routers/services never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATABASE_PATH = Path(__file__).resolve().parents[1] / "persons.db"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_path: Path
    seed_on_startup: bool
    api_prefix: str
    cors_origins: tuple[str, ...]
    host: str
    port: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _origins(value: str | None, app_env: str) -> tuple[str, ...]:
        if value is None:
            return () if app_env == "prod" else ("*",)
        return tuple(o.strip() for o in value.split(",") if o.strip())

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    prefix = (os.getenv("API_PREFIX") or "").strip().rstrip("/")
    if prefix and not prefix.startswith("/"):
        prefix = "/" + prefix

    return Settings(
        app_env=app_env,
        database_path=Path(os.getenv("DATABASE_PATH") or DEFAULT_DATABASE_PATH),
        seed_on_startup=_bool(os.getenv("SEED_DATA"), True),
        api_prefix=prefix,
        cors_origins=_origins(os.getenv("CORS_ORIGINS"), app_env),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "3001"), 3001),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
