"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - port is the only option the HTTP surface depends on; the rest are ambient

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - SITEDISPATCH_ prefix so PORT/HOST from unrelated tooling never leak in
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SITEDISPATCH_", env_file=".env", case_sensitive=False,
    )

    # Listener
    host: str = "127.0.0.1"
    port: int = 3000

    # Content
    static_root: Path = Path("public")

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("port")
    @classmethod
    def check_port_range(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError(f"port must be in 1..65535, got {v}")
        return v

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
