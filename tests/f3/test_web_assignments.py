"""Tests for assignment and subtask endpoints (F3)."""

from studydebt.utils.time_utils import parse_iso

FUTURE = "2099-01-01T00:00:00Z"
PAST = "2020-01-01T00:00:00Z"


def _create(client, headers, **overrides):
    body = {"title": "HW1", "deadlineAt": FUTURE}
    body.update(overrides)
    return client.post("/api/assignments", json=body, headers=headers)


class TestCreateAssignment:
    def test_create_with_subtasks(self, client, headers):
        response = _create(client, headers, subject="OS", subtasks=["read", "code"])
        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "HW1"
        assert data["subject"] == "OS"
        assert data["progressRate"] == 0
        assert data["status"] == "on_track"
        assert [s["content"] for s in data["subtasks"]] == ["read", "code"]
        assert [s["order"] for s in data["subtasks"]] == [0, 1]
        assert parse_iso(data["deadlineAt"]) == parse_iso(FUTURE)

    def test_missing_deadline_rejected(self, client, headers):
        response = client.post("/api/assignments", json={"title": "HW"}, headers=headers)
        assert response.status_code == 422

    def test_past_deadline_is_overdue(self, client, headers):
        assert _create(client, headers, deadlineAt=PAST).json()["status"] == "overdue"


class TestListAssignments:
    def test_list_by_deadline(self, client, headers):
        _create(client, headers, title="Later", deadlineAt="2099-06-01T00:00:00Z")
        _create(client, headers, title="Sooner")
        data = client.get("/api/assignments", headers=headers).json()
        assert data["count"] == 2
        assert [a["title"] for a in data["assignments"]] == ["Sooner", "Later"]

    def test_upcoming_hides_past(self, client, headers):
        _create(client, headers, title="Old", deadlineAt=PAST)
        _create(client, headers, title="New")
        data = client.get(
            "/api/assignments", params={"upcoming": "true"}, headers=headers
        ).json()
        assert [a["title"] for a in data["assignments"]] == ["New"]

    def test_get_single(self, client, headers):
        assignment_id = _create(client, headers).json()["id"]
        response = client.get(f"/api/assignments/{assignment_id}", headers=headers)
        assert response.status_code == 200
        assert response.json()["id"] == assignment_id

    def test_get_missing_is_404(self, client, headers):
        assert client.get("/api/assignments/nope", headers=headers).status_code == 404


class TestUpdateAssignment:
    def test_update_title(self, client, headers):
        assignment_id = _create(client, headers).json()["id"]
        response = client.patch(
            f"/api/assignments/{assignment_id}", json={"title": "Renamed"}, headers=headers
        )
        assert response.status_code == 200
        assert response.json()["title"] == "Renamed"

    def test_delete(self, client, headers):
        assignment_id = _create(client, headers).json()["id"]
        assert client.delete(f"/api/assignments/{assignment_id}", headers=headers).status_code == 204
        assert client.get(f"/api/assignments/{assignment_id}", headers=headers).status_code == 404


class TestSubtasks:
    def test_toggle_recomputes_progress(self, client, headers):
        data = _create(client, headers, subtasks=["a", "b"]).json()
        subtask_id = data["subtasks"][0]["id"]

        response = client.patch(
            f"/api/subtasks/{subtask_id}", json={"isDone": True}, headers=headers
        )
        assert response.status_code == 200
        body = response.json()
        assert body["subtask"]["isDone"] is True
        assert body["assignment"]["progressRate"] == 50

    def test_all_done_marks_completed(self, client, headers):
        data = _create(client, headers, deadlineAt=PAST, subtasks=["only"]).json()
        response = client.patch(
            f"/api/subtasks/{data['subtasks'][0]['id']}", json={"isDone": True}, headers=headers
        )
        assignment = response.json()["assignment"]
        assert assignment["progressRate"] == 100
        assert assignment["status"] == "completed"

    def test_add_subtask(self, client, headers):
        assignment_id = _create(client, headers, subtasks=["a"]).json()["id"]
        response = client.post(
            f"/api/assignments/{assignment_id}/subtasks",
            json={"content": "b"},
            headers=headers,
        )
        assert response.status_code == 201
        assert response.json()["order"] == 1
        assert response.json()["assignmentId"] == assignment_id

    def test_add_subtask_to_missing_assignment(self, client, headers):
        response = client.post(
            "/api/assignments/nope/subtasks", json={"content": "b"}, headers=headers
        )
        assert response.status_code == 404

    def test_delete_subtask(self, client, headers):
        data = _create(client, headers, subtasks=["a", "b"]).json()
        client.patch(
            f"/api/subtasks/{data['subtasks'][0]['id']}", json={"isDone": True}, headers=headers
        )
        response = client.delete(f"/api/subtasks/{data['subtasks'][1]['id']}", headers=headers)
        assert response.status_code == 204

        assignment = client.get(f"/api/assignments/{data['id']}", headers=headers).json()
        assert assignment["progressRate"] == 100

    def test_other_users_subtask_is_404(self, client, headers, other_headers):
        data = _create(client, headers, subtasks=["a"]).json()
        subtask_id = data["subtasks"][0]["id"]
        response = client.patch(
            f"/api/subtasks/{subtask_id}", json={"isDone": True}, headers=other_headers
        )
        assert response.status_code == 404
        assert client.delete(f"/api/subtasks/{subtask_id}", headers=other_headers).status_code == 404
