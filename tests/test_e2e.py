import concurrent.futures
from datetime import datetime

from fastapi.testclient import TestClient

from conftest import bearer


class TestE2E:
    def test_complete_user_journey(self, client: TestClient):
        alice = bearer("alice")
        bob = bearer("bob")

        # 1. create
        r = client.post("/tasks", json={"title": "  Buy milk  ", "description": "2 litres"}, headers=alice)
        assert r.status_code == 201
        task = r.json()
        assert task["title"] == "Buy milk"
        assert task["description"] == "2 litres"
        assert task["completed"] is False
        assert task["created_at"] == task["updated_at"]
        assert "owner_id" not in task
        task_id = task["id"]

        # 2. read back
        r = client.get(f"/tasks/{task_id}", headers=alice)
        assert r.status_code == 200
        assert r.json() == task

        # 3. isolation
        r = client.get("/tasks", headers=bob)
        assert r.status_code == 200
        assert r.json() == []

        r = client.get("/tasks", headers=alice)
        assert r.status_code == 200
        assert [t["id"] for t in r.json()] == [task_id]

        # 4. update
        r = client.put(f"/tasks/{task_id}", json={"completed": True}, headers=alice)
        assert r.status_code == 200
        updated = r.json()
        assert updated["completed"] is True
        assert updated["title"] == "Buy milk"
        assert updated["created_at"] == task["created_at"]
        assert datetime.fromisoformat(updated["updated_at"]) >= datetime.fromisoformat(task["updated_at"])

        # 5. delete
        r = client.delete(f"/tasks/{task_id}", headers=alice)
        assert r.status_code == 204
        assert r.content == b""

        r = client.get(f"/tasks/{task_id}", headers=alice)
        assert r.status_code == 404
        r = client.get("/tasks", headers=alice)
        assert r.json() == []

    def test_other_owner_cannot_touch_task(self, client: TestClient):
        alice = bearer("alice")
        bob = bearer("bob")
        task_id = client.post("/tasks", json={"title": "A"}, headers=alice).json()["id"]

        assert client.get(f"/tasks/{task_id}", headers=bob).status_code == 404
        assert client.put(f"/tasks/{task_id}", json={"title": "hijack"}, headers=bob).status_code == 404
        assert client.post(f"/tasks/{task_id}/toggle", headers=bob).status_code == 404
        assert client.delete(f"/tasks/{task_id}", headers=bob).status_code == 404

        r = client.get(f"/tasks/{task_id}", headers=alice)
        assert r.status_code == 200
        assert r.json()["title"] == "A"
        assert r.json()["completed"] is False

    def test_foreign_and_missing_tasks_look_the_same(self, client: TestClient):
        alice = bearer("alice")
        bob = bearer("bob")
        foreign_id = client.post("/tasks", json={"title": "secret"}, headers=alice).json()["id"]
        missing_id = "00000000-0000-4000-8000-000000000000"

        calls = [
            ("GET", None),
            ("PUT", {"title": "x"}),
            ("DELETE", None),
        ]
        for method, body in calls:
            kwargs = {"headers": bob}
            if body is not None:
                kwargs["json"] = body
            foreign = client.request(method, f"/tasks/{foreign_id}", **kwargs)
            missing = client.request(method, f"/tasks/{missing_id}", **kwargs)
            assert foreign.status_code == missing.status_code == 404
            assert foreign.content == missing.content
            assert foreign.headers["content-type"] == missing.headers["content-type"]
        assert missing.json() == {"detail": "Task not found"}

    def test_owner_in_payload_is_ignored(self, client: TestClient):
        r = client.post(
            "/tasks",
            json={"title": "mine", "owner_id": "bob", "id": "chosen-id"},
            headers=bearer("alice"),
        )
        assert r.status_code == 201
        assert r.json()["id"] != "chosen-id"

        assert client.get("/tasks", headers=bearer("bob")).json() == []
        assert len(client.get("/tasks", headers=bearer("alice")).json()) == 1

        task_id = r.json()["id"]
        r = client.put(f"/tasks/{task_id}", json={"owner_id": "bob"}, headers=bearer("alice"))
        assert r.status_code == 200
        assert client.get("/tasks", headers=bearer("bob")).json() == []

    def test_concurrent_operations(self, client: TestClient):
        headers = bearer("carol")

        def create_task(i):
            return client.post("/tasks", json={"title": f"Concurrent Task {i}"}, headers=headers)

        with concurrent.futures.ThreadPoolExecutor(max_workers=3) as executor:
            futures = [executor.submit(create_task, i) for i in range(5)]
            responses = [f.result() for f in futures]

        assert all(r.status_code == 201 for r in responses)

        r = client.get("/tasks", headers=headers)
        assert r.status_code == 200
        tasks = r.json()
        assert len(tasks) == 5
        assert len({t["title"] for t in tasks}) == 5
        assert len({t["id"] for t in tasks}) == 5
