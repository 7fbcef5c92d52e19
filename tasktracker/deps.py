from typing import Optional

from fastapi import Depends, Header, Request

from tasktracker.context import AppContext
from tasktracker.repositories.task import TaskRepository
from tasktracker.utils.auth import extract_bearer


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_current_owner(
    authorization: Optional[str] = Header(None),
    ctx: AppContext = Depends(get_context),
) -> str:
    """Verified owner id for this request.

    Only the Authorization header is consulted; ids in the path, query or
    body never identify the caller.
    """
    return ctx.verifier.verify(extract_bearer(authorization))


def get_task_repository(ctx: AppContext = Depends(get_context)) -> TaskRepository:
    return TaskRepository(ctx.database)
