# domain/model/task.py

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class TaskStatus(str, Enum):
    """Lifecycle states of a task."""
    PENDING = 'pending'
    IN_PROGRESS = 'in-progress'
    COMPLETED = 'completed'


class TaskPriority(str, Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


# ── Task Domain Model ────────────────────────────────────


@dataclass
class Task:
    """Domain model representing a user's task."""
    id: str
    title: str
    owner_id: str
    created_at: datetime
    updated_at: datetime

    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None

    # ── factory ───────────────────────────────────────────

    @staticmethod
    def create(
        title: str,
        owner_id: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.PENDING,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: datetime | None = None,
    ) -> 'Task':
        """Create a new Task with a generated ID."""
        now = datetime.now(timezone.utc)
        return Task(
            id=str(uuid.uuid4()),
            title=title,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
            description=description,
            status=status,
            priority=priority,
            due_date=due_date,
        )

    # ── queries ───────────────────────────────────────────

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def is_owned_by(self, user_id: str) -> bool:
        return self.owner_id == user_id


# ── Tasks Collection ─────────────────────────────────────


@dataclass
class Tasks:
    """Collection wrapper for paginated task results."""
    items: list[Task]
    total: int
