"""Task API routes. All endpoints require a bearer token and only touch the caller's tasks.

Endpoints:
- POST /api/tasks: Create a task
- GET /api/tasks: List tasks (filter by status/priority, paginated)
- GET /api/tasks/{task_id}: Get one task
- PUT /api/tasks/{task_id}: Update a task
- DELETE /api/tasks/{task_id}: Delete a task
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_task_repo
from api.models import (
    MessageResponse,
    TaskCreateRequest,
    TaskEnvelope,
    TaskListResponse,
    TaskMutationResponse,
    TaskResponse,
    TaskUpdateRequest,
)
from api.security import get_current_user_required
from domain.model.task import TaskPriority, TaskStatus
from domain.model.user import User
from port.task_repository import TaskRepository
from services import task_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.post("", response_model=TaskMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    request: TaskCreateRequest,
    current_user: User = Depends(get_current_user_required),
    repo: TaskRepository = Depends(get_task_repo),
):
    task = task_service.create_task(
        repo,
        owner_id=current_user.id,
        title=request.title,
        description=request.description,
        status=request.status,
        priority=request.priority,
        due_date=request.due_date,
    )
    return TaskMutationResponse(message="Task created successfully", task=TaskResponse.from_domain(task))


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    status: Optional[TaskStatus] = Query(None, description="Filter by status"),
    priority: Optional[TaskPriority] = Query(None, description="Filter by priority"),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user_required),
    repo: TaskRepository = Depends(get_task_repo),
):
    """List the current user's tasks, newest first."""
    tasks = task_service.list_tasks(
        repo, current_user.id, status=status, priority=priority, skip=skip, limit=limit,
    )
    return TaskListResponse(
        tasks=[TaskResponse.from_domain(t) for t in tasks.items],
        total=tasks.total,
        skip=skip,
        limit=limit,
    )


@router.get("/{task_id}", response_model=TaskEnvelope)
async def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user_required),
    repo: TaskRepository = Depends(get_task_repo),
):
    task = task_service.get_task(repo, current_user.id, task_id)
    return TaskEnvelope(task=TaskResponse.from_domain(task))


@router.put("/{task_id}", response_model=TaskMutationResponse)
async def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    current_user: User = Depends(get_current_user_required),
    repo: TaskRepository = Depends(get_task_repo),
):
    patch = request.model_dump(exclude_unset=True)
    task = task_service.update_task(repo, current_user.id, task_id, patch)
    return TaskMutationResponse(message="Task updated successfully", task=TaskResponse.from_domain(task))


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user_required),
    repo: TaskRepository = Depends(get_task_repo),
):
    task_service.delete_task(repo, current_user.id, task_id)
    return MessageResponse(message="Task deleted successfully")
