"""Unit tests for task_service module."""

import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from adapter.fake.task_repository import FakeTaskRepository
from domain.model.errors import DomainError, NotFoundError, PermissionDeniedError, ValidationError
from domain.model.task import TaskPriority, TaskStatus
from services import task_service

OWNER = "owner-1"
OTHER = "owner-2"


class TestCreateTask(unittest.TestCase):

    def setUp(self):
        self.repo = FakeTaskRepository()

    def test_create_with_defaults(self):
        task = task_service.create_task(self.repo, OWNER, title="Write report")

        self.assertEqual(task.title, "Write report")
        self.assertEqual(task.owner_id, OWNER)
        self.assertEqual(task.status, TaskStatus.PENDING)
        self.assertEqual(task.priority, TaskPriority.MEDIUM)
        self.assertIn(task.id, self.repo.store)

    def test_title_is_stripped(self):
        task = task_service.create_task(self.repo, OWNER, title="  Trim me  ")
        self.assertEqual(task.title, "Trim me")

    def test_empty_title_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            task_service.create_task(self.repo, OWNER, title="  ")

        self.assertIn("title", ctx.exception.errors)
        self.assertEqual(self.repo.store, {})

    def test_title_too_long_rejected(self):
        with self.assertRaises(ValidationError):
            task_service.create_task(self.repo, OWNER, title="x" * 101)

    def test_description_too_long_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            task_service.create_task(self.repo, OWNER, title="ok", description="d" * 501)

        self.assertIn("description", ctx.exception.errors)

    def test_invalid_status_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            task_service.create_task(self.repo, OWNER, title="ok", status="done")

        self.assertIn("status", ctx.exception.errors)

    def test_save_failure_raises_domain_error(self):
        repo = MagicMock()
        repo.save.return_value = False

        with self.assertRaises(DomainError):
            task_service.create_task(repo, OWNER, title="ok")


class TestTaskAccess(unittest.TestCase):

    def setUp(self):
        self.repo = FakeTaskRepository()
        self.task = task_service.create_task(self.repo, OWNER, title="Mine")

    def test_owner_can_get(self):
        self.assertEqual(task_service.get_task(self.repo, OWNER, self.task.id).id, self.task.id)

    def test_missing_task_not_found(self):
        with self.assertRaises(NotFoundError):
            task_service.get_task(self.repo, OWNER, "missing")

    def test_other_user_denied(self):
        with self.assertRaises(PermissionDeniedError):
            task_service.get_task(self.repo, OTHER, self.task.id)
        with self.assertRaises(PermissionDeniedError):
            task_service.update_task(self.repo, OTHER, self.task.id, {"title": "hijack"})
        with self.assertRaises(PermissionDeniedError):
            task_service.delete_task(self.repo, OTHER, self.task.id)

        self.assertEqual(self.repo.get_by_id(self.task.id).title, "Mine")

    def test_update_applies_only_given_fields(self):
        due = datetime(2030, 1, 1, tzinfo=timezone.utc)

        updated = task_service.update_task(self.repo, OWNER, self.task.id, {
            "status": "completed",
            "due_date": due,
            "owner_id": OTHER,
        })

        self.assertEqual(updated.title, "Mine")
        self.assertTrue(updated.is_completed)
        self.assertEqual(updated.due_date, due)
        self.assertEqual(updated.owner_id, OWNER)
        self.assertGreaterEqual(updated.updated_at, self.task.created_at)

    def test_invalid_update_leaves_task_unchanged(self):
        with self.assertRaises(ValidationError):
            task_service.update_task(self.repo, OWNER, self.task.id, {"title": ""})

        self.assertEqual(self.repo.get_by_id(self.task.id).title, "Mine")

    def test_delete(self):
        task_service.delete_task(self.repo, OWNER, self.task.id)

        self.assertIsNone(self.repo.get_by_id(self.task.id))
        with self.assertRaises(NotFoundError):
            task_service.delete_task(self.repo, OWNER, self.task.id)


class TestListTasks(unittest.TestCase):

    def setUp(self):
        self.repo = FakeTaskRepository()
        task_service.create_task(self.repo, OWNER, title="a", priority=TaskPriority.HIGH)
        task_service.create_task(self.repo, OWNER, title="b", status=TaskStatus.COMPLETED)
        task_service.create_task(self.repo, OWNER, title="c")
        task_service.create_task(self.repo, OTHER, title="not mine")

    def test_lists_only_own_tasks(self):
        tasks = task_service.list_tasks(self.repo, OWNER)

        self.assertEqual(tasks.total, 3)
        self.assertTrue(all(t.owner_id == OWNER for t in tasks.items))

    def test_filters(self):
        completed = task_service.list_tasks(self.repo, OWNER, status=TaskStatus.COMPLETED)
        high = task_service.list_tasks(self.repo, OWNER, priority=TaskPriority.HIGH)

        self.assertEqual([t.title for t in completed.items], ["b"])
        self.assertEqual([t.title for t in high.items], ["a"])

    def test_pagination_keeps_total(self):
        page = task_service.list_tasks(self.repo, OWNER, skip=1, limit=1)

        self.assertEqual(len(page.items), 1)
        self.assertEqual(page.total, 3)


if __name__ == '__main__':
    unittest.main()
