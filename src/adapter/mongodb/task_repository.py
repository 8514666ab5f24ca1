"""MongoDB implementation of TaskRepository."""

from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import TASKS_COLLECTION_NAME
from domain.model.task import Task, TaskPriority, TaskStatus, Tasks

logger = getLogger(__name__)


class MongoTaskRepository:
    def __init__(self, db: Database):
        self.collection = db[TASKS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for tasks collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('owner_id', 1), ('created_at', -1)], 'idx_tasks_owner_created')
            create_index_safe(self.collection, [('owner_id', 1), ('status', 1)], 'idx_tasks_owner_status')
            return True
        except Exception as e:
            logger.error("Failed to create tasks indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Task:
        return Task(
            id=doc['_id'],
            title=doc['title'],
            owner_id=doc['owner_id'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            description=doc.get('description'),
            status=TaskStatus(doc.get('status', TaskStatus.PENDING.value)),
            priority=TaskPriority(doc.get('priority', TaskPriority.MEDIUM.value)),
            due_date=doc.get('due_date'),
        )

    # ── write operations ─────────────────────────────────────

    def save(self, task: Task) -> bool:
        """Save entire Task (upsert)."""
        try:
            doc = {
                'title': task.title,
                'owner_id': task.owner_id,
                'description': task.description,
                'status': task.status.value,
                'priority': task.priority.value,
                'due_date': task.due_date,
                'updated_at': task.updated_at,
            }
            self.collection.update_one(
                {'_id': task.id},
                {
                    '$set': doc,
                    '$setOnInsert': {'created_at': task.created_at, '_id': task.id},
                },
                upsert=True,
            )
            logger.info("Task saved", extra={"taskId": task.id, "ownerId": task.owner_id})
            return True
        except PyMongoError as e:
            logger.error("Failed to save task", extra={"taskId": task.id, "error": str(e)})
            return False

    def delete(self, task_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': task_id})
            if result.deleted_count == 0:
                logger.warning("Task not found for deletion", extra={"taskId": task_id})
                return False
            logger.info("Task deleted", extra={"taskId": task_id})
            return True
        except PyMongoError as e:
            logger.error("Failed to delete task", extra={"taskId": task_id, "error": str(e)})
            return False

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, task_id: str) -> Task | None:
        try:
            doc = self.collection.find_one({'_id': task_id})
            if doc:
                return self._to_domain(doc)
            return None
        except PyMongoError as e:
            logger.error("Failed to retrieve task", extra={"taskId": task_id, "error": str(e)})
            return None

    def find_many(
        self,
        owner_id: str,
        skip: int = 0,
        limit: int = 20,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
    ) -> Tasks:
        """List a user's tasks, newest first."""
        try:
            query: dict = {'owner_id': owner_id}
            if status:
                query['status'] = status.value
            if priority:
                query['priority'] = priority.value

            total_count = self.collection.count_documents(query)
            docs = (
                self.collection.find(query)
                .sort('created_at', -1)
                .skip(skip)
                .limit(limit)
            )

            tasks = [self._to_domain(doc) for doc in docs]
            logger.debug("Listed tasks", extra={"ownerId": owner_id, "count": len(tasks), "total": total_count})
            return Tasks(items=tasks, total=total_count)
        except PyMongoError as e:
            logger.error("Failed to list tasks", extra={"ownerId": owner_id, "error": str(e)})
            return Tasks(items=[], total=0)
