import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


def _masked(url) -> str:
    return url.render_as_string(hide_password=True)


class Database:
    """Owns the engine and its connection pool for the lifetime of the process."""

    def __init__(
        self,
        url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_recycle: int = 1800,
        pool_timeout: float = 30,
        echo: bool = False,
    ):
        url_obj = make_url(url)
        kwargs = {"echo": echo}
        if url_obj.get_backend_name() == "sqlite":
            # Only apply sqlite-specific connect_args when using sqlite
            kwargs["connect_args"] = {"check_same_thread": False}
        if url_obj.get_backend_name() == "sqlite" and url_obj.database in (None, "", ":memory:"):
            # a single shared connection, otherwise each checkout sees an empty database
            kwargs["poolclass"] = StaticPool
        else:
            kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=pool_recycle,
                pool_timeout=pool_timeout,
                # Enable pool_pre_ping to avoid stale connections (useful for cloud DBs like Neon)
                pool_pre_ping=True,
            )

        self.engine = create_engine(url_obj, **kwargs)
        self._session_factory = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False, expire_on_commit=False
        )
        logger.info("DB -> %s", _masked(url_obj))

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Check out one pooled connection; released on every exit path."""
        db = self._session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def create_all(self) -> None:
        # models must be imported so their tables are registered on Base
        import tasktracker.models.task  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
