import logging
from dataclasses import dataclass

from tasktracker.config import Settings
from tasktracker.database import Database
from tasktracker.utils.auth import TokenVerifier

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Process-wide shared state, built once at startup."""

    settings: Settings
    database: Database
    verifier: TokenVerifier


def build_context(settings: Settings) -> AppContext:
    if settings.uses_default_secret:
        logger.warning("SECRET_KEY not set; using the development default")
    database = Database(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_recycle=settings.db_pool_recycle,
        pool_timeout=settings.db_pool_timeout,
    )
    verifier = TokenVerifier(
        settings.secret_key,
        algorithm=settings.algorithm,
        leeway=settings.token_leeway_seconds,
    )
    return AppContext(settings=settings, database=database, verifier=verifier)
