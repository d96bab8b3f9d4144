# taskapi/config.py

"""Settings read from environment variables once, then passed to create_app."""

import os
from dataclasses import dataclass, field
from typing import List


def _env(name: str, default: str = "") -> str:
    value = os.getenv(name)
    return default if value is None or value.strip() == "" else value.strip()


def _env_int(name: str, default: int) -> int:
    try:
        return int(_env(name, str(default)))
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = _env(name)
    if not raw:
        return list(default)
    return [part for part in raw.replace(",", " ").split() if part]


@dataclass(frozen=True)
class Config:
    app_env: str = "development"
    db_path: str = "tasks.sqlite3"
    host: str = "127.0.0.1"
    port: int = 5001
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @property
    def production(self) -> bool:
        return self.app_env.lower() == "production"

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            app_env=_env("APP_ENV", "development"),
            db_path=_env("TASKS_DB_PATH", "tasks.sqlite3"),
            host=_env("TASKS_HOST", "127.0.0.1"),
            port=_env_int("TASKS_PORT", 5001),
            cors_origins=_env_list("TASKS_CORS_ORIGINS", ["*"]),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
        )
