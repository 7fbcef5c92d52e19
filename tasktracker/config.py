import os
from dataclasses import dataclass

DEFAULT_SECRET_KEY = "TU_SECRET_KEY_TEMPORAL"


@dataclass(frozen=True)
class Settings:
    secret_key: str = DEFAULT_SECRET_KEY
    algorithm: str = "HS256"
    # Default to local SQLite for dev/tests; override via env in Docker/Prod
    database_url: str = "sqlite:///./tasktracker.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_recycle: int = 1800
    db_pool_timeout: float = 30
    token_leeway_seconds: int = 0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            secret_key=os.environ.get("SECRET_KEY", DEFAULT_SECRET_KEY),
            algorithm=os.environ.get("ALGORITHM", "HS256"),
            database_url=os.environ.get("DATABASE_URL", "sqlite:///./tasktracker.db"),
            db_pool_size=int(os.environ.get("DB_POOL_SIZE", 5)),
            db_max_overflow=int(os.environ.get("DB_MAX_OVERFLOW", 10)),
            db_pool_recycle=int(os.environ.get("DB_POOL_RECYCLE", 1800)),
            db_pool_timeout=float(os.environ.get("DB_POOL_TIMEOUT", 30)),
            token_leeway_seconds=int(os.environ.get("TOKEN_LEEWAY_SECONDS", 0)),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def uses_default_secret(self) -> bool:
        return self.secret_key == DEFAULT_SECRET_KEY
