from typing import List

from fastapi import APIRouter, Depends, Response, status

from tasktracker.deps import get_current_owner, get_task_repository
from tasktracker.repositories.task import TaskRepository
from tasktracker.schemas.task import TaskCreate, TaskOut, TaskUpdate

# The guard runs before any handler body or request-body validation.
router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    dependencies=[Depends(get_current_owner)],
)


@router.get("", response_model=List[TaskOut])
@router.get("/", response_model=List[TaskOut], include_in_schema=False)
def list_tasks(
    owner: str = Depends(get_current_owner),
    repo: TaskRepository = Depends(get_task_repository),
):
    """Caller's tasks, newest first."""
    return repo.list(owner)


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=TaskOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_task(
    task: TaskCreate,
    owner: str = Depends(get_current_owner),
    repo: TaskRepository = Depends(get_task_repository),
):
    return repo.create(owner, task)


@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    task_id: str,
    owner: str = Depends(get_current_owner),
    repo: TaskRepository = Depends(get_task_repository),
):
    return repo.get(owner, task_id)


@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: str,
    patch: TaskUpdate,
    owner: str = Depends(get_current_owner),
    repo: TaskRepository = Depends(get_task_repository),
):
    return repo.update(owner, task_id, patch)


@router.post("/{task_id}/toggle", response_model=TaskOut)
def toggle_task(
    task_id: str,
    owner: str = Depends(get_current_owner),
    repo: TaskRepository = Depends(get_task_repository),
):
    """Flip the completion flag."""
    return repo.toggle(owner, task_id)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    owner: str = Depends(get_current_owner),
    repo: TaskRepository = Depends(get_task_repository),
):
    repo.delete(owner, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
