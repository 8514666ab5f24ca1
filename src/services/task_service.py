"""Task service: per-user task CRUD.

Every operation is scoped to the calling user; a task owned by someone else
raises PermissionDeniedError.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone

from domain.model.errors import DomainError, NotFoundError, PermissionDeniedError
from domain.model.schemas import TaskSchema, validate
from domain.model.task import Task, TaskPriority, TaskStatus, Tasks
from port.task_repository import TaskRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('title', 'description', 'status', 'priority', 'due_date')


def create_task(
    repo: TaskRepository,
    owner_id: str,
    title: str,
    description: str | None = None,
    status: TaskStatus = TaskStatus.PENDING,
    priority: TaskPriority = TaskPriority.MEDIUM,
    due_date: datetime | None = None,
) -> Task:
    """Validate and persist a new task.

    Raises:
        ValidationError: empty/too long title, too long description, bad enum
    """
    data = validate(TaskSchema, {
        'title': title,
        'owner_id': owner_id,
        'description': description,
        'status': status,
        'priority': priority,
        'due_date': due_date,
    })

    task = Task.create(
        title=data.title,
        owner_id=owner_id,
        description=data.description or None,
        status=data.status,
        priority=data.priority,
        due_date=data.due_date,
    )
    if not repo.save(task):
        raise DomainError("Failed to save task to repository")

    logger.info("Task created", extra={"taskId": task.id, "ownerId": owner_id})
    return task


def list_tasks(
    repo: TaskRepository,
    owner_id: str,
    status: TaskStatus | None = None,
    priority: TaskPriority | None = None,
    skip: int = 0,
    limit: int = 20,
) -> Tasks:
    return repo.find_many(owner_id, skip=skip, limit=limit, status=status, priority=priority)


def get_task(repo: TaskRepository, owner_id: str, task_id: str) -> Task:
    """Raises NotFoundError or PermissionDeniedError."""
    task = repo.get_by_id(task_id)
    if not task:
        raise NotFoundError("Task not found")
    if not task.is_owned_by(owner_id):
        raise PermissionDeniedError("You don't have permission to access this task")
    return task


def update_task(repo: TaskRepository, owner_id: str, task_id: str, patch: dict) -> Task:
    """Apply a partial update. Keys outside UPDATABLE_FIELDS are ignored."""
    task = get_task(repo, owner_id, task_id)

    merged = {field: getattr(task, field) for field in UPDATABLE_FIELDS}
    merged.update({k: v for k, v in patch.items() if k in UPDATABLE_FIELDS})
    data = validate(TaskSchema, {**merged, 'owner_id': owner_id})

    updated = replace(
        task,
        title=data.title,
        description=data.description or None,
        status=data.status,
        priority=data.priority,
        due_date=data.due_date,
        updated_at=datetime.now(timezone.utc),
    )
    if not repo.save(updated):
        raise DomainError("Failed to save task to repository")

    logger.info("Task updated", extra={"taskId": task_id, "fields": sorted(patch)})
    return updated


def delete_task(repo: TaskRepository, owner_id: str, task_id: str) -> None:
    get_task(repo, owner_id, task_id)
    if not repo.delete(task_id):
        raise NotFoundError("Task not found")
    logger.info("Task deleted", extra={"taskId": task_id, "ownerId": owner_id})
