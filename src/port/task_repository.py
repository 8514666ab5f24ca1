"""Port definition for TaskRepository."""

from typing import Protocol

from domain.model.task import Task, TaskPriority, TaskStatus, Tasks


class TaskRepository(Protocol):
    def save(self, task: Task) -> bool: ...

    def get_by_id(self, task_id: str) -> Task | None: ...

    def find_many(
        self,
        owner_id: str,
        skip: int = 0,
        limit: int = 20,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
    ) -> Tasks: ...

    def delete(self, task_id: str) -> bool: ...
