"""In-memory implementation of TaskRepository for testing."""

from domain.model.task import Task, TaskPriority, TaskStatus, Tasks


class FakeTaskRepository:
    def __init__(self):
        self.store: dict[str, Task] = {}

    # ── write operations ─────────────────────────────────────

    def save(self, task: Task) -> bool:
        self.store[task.id] = task
        return True

    def delete(self, task_id: str) -> bool:
        return self.store.pop(task_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, task_id: str) -> Task | None:
        return self.store.get(task_id)

    def find_many(
        self,
        owner_id: str,
        skip: int = 0,
        limit: int = 20,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
    ) -> Tasks:
        results = [t for t in self.store.values() if t.owner_id == owner_id]

        if status:
            results = [t for t in results if t.status == status]
        if priority:
            results = [t for t in results if t.priority == priority]

        results.sort(key=lambda t: t.created_at, reverse=True)
        return Tasks(items=results[skip:skip + limit], total=len(results))
