import logging
import uuid
from datetime import datetime, UTC
from typing import Callable, List, TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from tasktracker.database import Database
from tasktracker.errors import TaskNotFound, TransientStoreError
from tasktracker.models.task import Task
from tasktracker.schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_transient(exc: Exception) -> bool:
    """Dropped, unreachable or exhausted connections, as opposed to bad SQL or constraint errors."""
    if isinstance(exc, (OperationalError, PoolTimeoutError)):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


def _now() -> datetime:
    return datetime.now(UTC)


class TaskRepository:
    """Owner-scoped access to the tasks table.

    Every method takes the verified owner id first. A task owned by someone
    else is reported exactly like a missing one (TaskNotFound), so callers
    cannot learn anything about other users' rows.

    Reads are retried once on a transient store error; writes never are.
    """

    def __init__(self, database: Database):
        self._database = database

    def _read(self, op: Callable[[Session], T]) -> T:
        for attempt in (1, 2):
            try:
                with self._database.session() as db:
                    return op(db)
            except SQLAlchemyError as exc:
                if not is_transient(exc):
                    raise
                if attempt == 2:
                    raise TransientStoreError() from exc
                logger.warning("transient store error on read, retrying once: %s", exc)

    def _write(self, op: Callable[[Session], T]) -> T:
        try:
            with self._database.session() as db:
                return op(db)
        except SQLAlchemyError as exc:
            if is_transient(exc):
                raise TransientStoreError() from exc
            raise

    @staticmethod
    def _owned(db: Session, owner_id: str, task_id: str) -> Task:
        task = (
            db.query(Task)
            .filter(Task.id == task_id, Task.owner_id == owner_id)
            .first()
        )
        if task is None:
            raise TaskNotFound()
        return task

    def list(self, owner_id: str) -> List[Task]:
        def op(db: Session) -> List[Task]:
            return (
                db.query(Task)
                .filter(Task.owner_id == owner_id)
                .order_by(Task.created_at.desc())
                .all()
            )

        return self._read(op)

    def get(self, owner_id: str, task_id: str) -> Task:
        return self._read(lambda db: self._owned(db, owner_id, task_id))

    def create(self, owner_id: str, draft: TaskCreate) -> Task:
        def op(db: Session) -> Task:
            now = _now()
            task = Task(
                id=str(uuid.uuid4()),
                owner_id=owner_id,
                title=draft.title,
                description=draft.description,
                completed=False,
                created_at=now,
                updated_at=now,
            )
            db.add(task)
            db.commit()
            db.refresh(task)
            return task

        return self._write(op)

    def update(self, owner_id: str, task_id: str, patch: TaskUpdate) -> Task:
        changes = patch.changes()

        def op(db: Session) -> Task:
            task = self._owned(db, owner_id, task_id)
            for field, value in changes.items():
                setattr(task, field, value)
            task.updated_at = _now()
            db.commit()
            db.refresh(task)
            return task

        return self._write(op)

    def toggle(self, owner_id: str, task_id: str) -> Task:
        def op(db: Session) -> Task:
            task = self._owned(db, owner_id, task_id)
            task.completed = not task.completed
            task.updated_at = _now()
            db.commit()
            db.refresh(task)
            return task

        return self._write(op)

    def delete(self, owner_id: str, task_id: str) -> None:
        def op(db: Session) -> None:
            task = self._owned(db, owner_id, task_id)
            db.delete(task)
            db.commit()

        self._write(op)
