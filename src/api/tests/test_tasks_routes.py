"""Tests for task API routes."""

import unittest

from fastapi.testclient import TestClient

from adapter.fake.task_repository import FakeTaskRepository
from adapter.fake.user_repository import FakeUserRepository
from api.dependencies import get_task_repo, get_user_repo
from api.main import app
from domain.model.user import NewUser

TASKS = "/api/tasks"


class TestTaskRoutes(unittest.TestCase):

    def setUp(self):
        self.user_repo = FakeUserRepository()
        self.task_repo = FakeTaskRepository()
        app.dependency_overrides[get_user_repo] = lambda: self.user_repo
        app.dependency_overrides[get_task_repo] = lambda: self.task_repo
        self.client = TestClient(app)

        self.headers = self._headers_for("owner@example.com")
        self.other_headers = self._headers_for("other@example.com")

    def tearDown(self):
        app.dependency_overrides.clear()

    def _headers_for(self, email: str) -> dict:
        user = self.user_repo.create(NewUser(username="tester", email=email, password_hash="$2b$04$hash"))
        token = app.state.token_issuer.issue(user.id)
        return {"Authorization": f"Bearer {token}"}

    def _create(self, headers=None, **body):
        body.setdefault("title", "Write report")
        return self.client.post(TASKS, json=body, headers=headers or self.headers)

    def test_requires_token(self):
        response = self.client.get(TASKS)

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Access denied. No token provided."})

    def test_create_task(self):
        response = self._create(priority="high", dueDate="2030-01-01T00:00:00Z")

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data["message"], "Task created successfully")
        self.assertEqual(data["task"]["title"], "Write report")
        self.assertEqual(data["task"]["status"], "pending")
        self.assertEqual(data["task"]["priority"], "high")
        self.assertIsNotNone(data["task"]["dueDate"])

    def test_create_task_validation(self):
        response = self._create(title="")

        self.assertEqual(response.status_code, 400)
        self.assertIn("title", response.json()["details"])

    def test_create_task_unknown_status(self):
        response = self._create(status="done")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Validation Error")

    def test_list_only_own_tasks_with_filters(self):
        self._create(title="a", status="in-progress")
        self._create(title="b")
        self._create(headers=self.other_headers, title="not mine")

        everything = self.client.get(TASKS, headers=self.headers).json()
        in_progress = self.client.get(TASKS, headers=self.headers, params={"status": "in-progress"}).json()

        self.assertEqual(everything["total"], 2)
        self.assertEqual(everything["skip"], 0)
        self.assertEqual(everything["limit"], 20)
        self.assertEqual([t["title"] for t in in_progress["tasks"]], ["a"])

    def test_list_limit_bounds(self):
        response = self.client.get(TASKS, headers=self.headers, params={"limit": 0})
        self.assertEqual(response.status_code, 400)

    def test_get_update_delete(self):
        task_id = self._create().json()["task"]["id"]

        got = self.client.get(f"{TASKS}/{task_id}", headers=self.headers)
        self.assertEqual(got.status_code, 200)
        self.assertEqual(got.json()["task"]["id"], task_id)

        updated = self.client.put(f"{TASKS}/{task_id}", headers=self.headers, json={"status": "completed"})
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["message"], "Task updated successfully")
        self.assertEqual(updated.json()["task"]["status"], "completed")
        self.assertEqual(updated.json()["task"]["title"], "Write report")

        deleted = self.client.delete(f"{TASKS}/{task_id}", headers=self.headers)
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.json(), {"message": "Task deleted successfully"})

        missing = self.client.get(f"{TASKS}/{task_id}", headers=self.headers)
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json(), {"error": "Task not found"})

    def test_other_users_task_is_forbidden(self):
        task_id = self._create().json()["task"]["id"]

        for method in ("get", "put", "delete"):
            kwargs = {"json": {"title": "hijack"}} if method == "put" else {}
            response = getattr(self.client, method)(f"{TASKS}/{task_id}", headers=self.other_headers, **kwargs)
            self.assertEqual(response.status_code, 403, method)

        self.assertEqual(self.task_repo.get_by_id(task_id).title, "Write report")


if __name__ == '__main__':
    unittest.main()
