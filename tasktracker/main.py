import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from tasktracker.config import Settings
from tasktracker.context import build_context
from tasktracker.error_handlers import setup_error_handlers
from tasktracker.routers import tasks

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    ctx = app.state.context
    ctx.database.create_all()
    logger.info("startup complete")
    try:
        yield
    finally:
        ctx.database.dispose()
        logger.info("connection pool disposed")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="TaskTracker", lifespan=lifespan)
    app.state.context = build_context(settings)

    app.include_router(tasks.router)
    setup_error_handlers(app)
    return app


app = create_app()
