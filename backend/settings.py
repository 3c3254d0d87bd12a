import os
from pathlib import Path
from typing import List, Mapping, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL

# Basic settings helper to read environment configuration.

ENV_PATH = Path(__file__).resolve().parent / ".env"

DB_ENV_VARS = ("DB_USER", "DB_PASSWORD", "DB_NAME", "DB_PORT", "DB_HOST")

STORE_DATABASE = "database"
STORE_MEMORY = "memory"


class ConfigError(Exception):
    """Required configuration is missing or invalid."""


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self, env: Optional[Mapping[str, str]] = None) -> None:
        env = os.environ if env is None else env
        self.DB_USER: Optional[str] = env.get("DB_USER")
        self.DB_PASSWORD: Optional[str] = env.get("DB_PASSWORD")
        self.DB_NAME: Optional[str] = env.get("DB_NAME")
        self.DB_PORT: Optional[str] = env.get("DB_PORT")
        self.DB_HOST: Optional[str] = env.get("DB_HOST")
        self.DB_SSLMODE: str = env.get("DB_SSLMODE", "disable")
        self.DB_ECHO: bool = _as_bool(env.get("DB_ECHO"), False)
        self.DATABASE_URL: Optional[str] = env.get("DATABASE_URL") or None
        self.BOOK_STORE: str = env.get("BOOK_STORE", STORE_DATABASE).lower()
        self.HOST: str = env.get("HOST", "0.0.0.0")
        self.PORT: str = env.get("PORT", "8080")
        self.LOG_LEVEL: str = env.get("LOG_LEVEL", "INFO").upper()

    def missing_db_vars(self) -> List[str]:
        return [name for name in DB_ENV_VARS if not getattr(self, name)]

    def database_url(self) -> str | URL:
        """Build the SQLAlchemy URL, preferring DATABASE_URL over the DB_* parts."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        missing = self.missing_db_vars()
        if missing:
            raise ConfigError(f"missing database settings: {', '.join(missing)}")
        try:
            port = int(self.DB_PORT)
        except ValueError:
            raise ConfigError(f"DB_PORT must be an integer, got {self.DB_PORT!r}")
        return URL.create(
            "postgresql+psycopg2",
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=port,
            database=self.DB_NAME,
            query={"sslmode": self.DB_SSLMODE},
        )

    def listen_port(self) -> int:
        try:
            return int(self.PORT)
        except ValueError:
            raise ConfigError(f"PORT must be an integer, got {self.PORT!r}")

    @property
    def address(self) -> str:
        return f"{self.HOST}:{self.PORT}"


def load_settings(env_path: Path = ENV_PATH) -> Settings:
    """Load backend/.env (if present) into the environment, then read settings."""
    load_dotenv(env_path)
    return Settings()
