from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from correspondence_tracker.correspondence.repository import CorrespondenceRepository

from correspondence_tracker.utils.logger import get_logger

logger = get_logger(__name__)


def _payload(**overrides) -> dict:
    payload = {
        "subject": "Zoning variance request",
        "description": "Applicant requests a variance for lot 14",
        "type": "request",
        "sender_name": "Morgan Diaz",
        "sender_email": "morgan@applicant.net",
        "due_date": (datetime.now(timezone.utc) + timedelta(days=5)).isoformat(),
    }
    payload.update(overrides)
    return payload


def _create(client: TestClient, auth_headers, **overrides) -> dict:
    response = client.post("/correspondence/", json=_payload(**overrides), headers=auth_headers("manager"))
    assert response.status_code == 201, response.text
    return response.json()


# --- Auth ---

def test_health_check(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_login_success(client: TestClient, seed_password):
    response = client.post("/login", json={"email_id": "admin@records.org", "password": seed_password})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"] and body["refresh_token"]

    me = client.get("/user", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["role"] == "admin"
    assert me.json()["can_mutate"] is True


def test_login_wrong_password(client: TestClient):
    response = client.post("/login", json={"email_id": "admin@records.org", "password": "nope"})
    assert response.status_code == 401
    assert response.json() == {"detail": "Incorrect email or password."}


def test_login_inactive_user(client: TestClient, seed_password):
    response = client.post("/login", json={"email_id": "inactive@records.org", "password": seed_password})
    assert response.status_code == 401


def test_refresh_issues_new_tokens(client: TestClient, seed_password):
    tokens = client.post("/login", json={"email_id": "staff@records.org", "password": seed_password}).json()

    response = client.post("/refresh", headers={"Authorization": f"Bearer {tokens['refresh_token']}"})
    assert response.status_code == 200

    # An access token is not accepted as a refresh token
    response = client.post("/refresh", headers={"Authorization": f"Bearer {tokens['access_token']}"})
    assert response.status_code == 401


def test_missing_token_is_unauthorized(client: TestClient):
    assert client.get("/correspondence/list").status_code == 401
    assert client.patch("/correspondence/1", json={"status": "completed"}).status_code == 401


def test_invalid_token_is_unauthorized(client: TestClient):
    response = client.get("/correspondence/list", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


# --- Lookups ---

def test_users_lookup_lists_active_users_by_name(client: TestClient, auth_headers):
    response = client.get("/users", headers=auth_headers("staff"))
    assert response.status_code == 200
    names = [user["name"] for user in response.json()["items"]]
    assert names == ["Ada Admin", "Max Manager", "Sam Staff"]


def test_departments_lookup(client: TestClient, auth_headers):
    response = client.get("/departments", headers=auth_headers("staff"))
    assert response.status_code == 200
    assert [d["code"] for d in response.json()["items"]] == ["ADM", "FIN"]


# --- Create / read ---

def test_staff_cannot_create(client: TestClient, auth_headers):
    response = client.post("/correspondence/", json=_payload(), headers=auth_headers("staff"))
    assert response.status_code == 403


def test_create_and_get(client: TestClient, auth_headers, users):
    created = _create(client, auth_headers, assigned_to_id=users["staff"].id)

    assert created["reference_number"].startswith("COR-")
    assert created["status"] == "pending"
    assert created["priority"] == "normal"
    assert created["assigned_to"]["name"] == "Sam Staff"

    response = client.get(f"/correspondence/{created['id']}", headers=auth_headers("staff"))
    assert response.status_code == 200
    assert response.json()["subject"] == "Zoning variance request"


def test_create_duplicate_reference_conflicts(client: TestClient, auth_headers):
    _create(client, auth_headers, reference_number="COR-2024-0042")
    response = client.post(
        "/correspondence/", json=_payload(reference_number="COR-2024-0042"), headers=auth_headers("admin")
    )
    assert response.status_code == 409


def test_create_missing_due_date_is_unprocessable(client: TestClient, auth_headers):
    payload = _payload()
    del payload["due_date"]
    response = client.post("/correspondence/", json=payload, headers=auth_headers("admin"))
    assert response.status_code == 422


def test_get_missing_correspondence(client: TestClient, auth_headers):
    response = client.get("/correspondence/9999", headers=auth_headers("staff"))
    assert response.status_code == 404


# --- Update ---

def test_patch_status_records_activity(client: TestClient, auth_headers):
    created = _create(client, auth_headers)

    response = client.patch(
        f"/correspondence/{created['id']}", json={"status": "completed"}, headers=auth_headers("admin")
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "completed"
    assert body["completed_date"] is not None
    assert body["audit_complete"] is True
    assert [entry["description"] for entry in body["activity"]] == ["Status changed from pending to completed"]

    activity = client.get(f"/correspondence/{created['id']}/activity", headers=auth_headers("staff"))
    assert activity.status_code == 200
    assert activity.json()["total_items"] == 1
    assert activity.json()["items"][0]["user"]["name"] == "Ada Admin"


def test_patch_clears_assignment_with_null(client: TestClient, auth_headers, users):
    created = _create(client, auth_headers, assigned_to_id=users["staff"].id)

    response = client.patch(
        f"/correspondence/{created['id']}", json={"assigned_to_id": None}, headers=auth_headers("manager")
    )

    assert response.status_code == 200
    assert response.json()["assigned_to_id"] is None
    assert response.json()["activity"] == []


def test_staff_cannot_patch(client: TestClient, auth_headers):
    created = _create(client, auth_headers)
    response = client.patch(
        f"/correspondence/{created['id']}", json={"status": "completed"}, headers=auth_headers("staff")
    )
    assert response.status_code == 403


def test_patch_invalid_enum_is_unprocessable(client: TestClient, auth_headers):
    created = _create(client, auth_headers)
    response = client.patch(
        f"/correspondence/{created['id']}", json={"status": "archived"}, headers=auth_headers("admin")
    )
    assert response.status_code == 422


def test_patch_reference_number_is_unprocessable(client: TestClient, auth_headers):
    created = _create(client, auth_headers)
    response = client.patch(
        f"/correspondence/{created['id']}", json={"reference_number": "X"}, headers=auth_headers("admin")
    )
    assert response.status_code == 422


def test_patch_missing_correspondence(client: TestClient, auth_headers):
    response = client.patch("/correspondence/9999", json={"status": "completed"}, headers=auth_headers("admin"))
    assert response.status_code == 404


# --- Comments ---

def test_staff_can_comment(client: TestClient, auth_headers):
    created = _create(client, auth_headers)

    response = client.post(
        f"/correspondence/{created['id']}/comments",
        json={"content": "  Spoke with the applicant  "},
        headers=auth_headers("staff"),
    )

    assert response.status_code == 201
    assert response.json()["content"] == "Spoke with the applicant"
    assert response.json()["user"]["name"] == "Sam Staff"

    listing = client.get(f"/correspondence/{created['id']}/comments", headers=auth_headers("staff"))
    assert listing.json()["total_items"] == 1

    activity = client.get(f"/correspondence/{created['id']}/activity", headers=auth_headers("staff"))
    assert activity.json()["total_items"] == 0


def test_blank_comment_is_bad_request(client: TestClient, auth_headers):
    created = _create(client, auth_headers)
    response = client.post(
        f"/correspondence/{created['id']}/comments", json={"content": "   "}, headers=auth_headers("staff")
    )
    assert response.status_code == 400
    assert response.json() == {"detail": "Comment content is required"}


def test_comments_on_missing_correspondence(client: TestClient, auth_headers):
    response = client.get("/correspondence/9999/comments", headers=auth_headers("staff"))
    assert response.status_code == 404
    response = client.get("/correspondence/9999/activity", headers=auth_headers("staff"))
    assert response.status_code == 404


# --- List / triage / stats ---

def test_list_includes_due_fields(client: TestClient, auth_headers):
    _create(client, auth_headers)

    response = client.get("/correspondence/list", headers=auth_headers("staff"))

    assert response.status_code == 200
    item = response.json()["items"][0]
    assert item["days_until_due"] == 5
    assert item["due_bucket"] == "this_week"
    assert item["due_badge"] == {"label": "5d left", "urgency": "medium"}


def test_list_filters_and_rejects_unknown_status(client: TestClient, auth_headers):
    _create(client, auth_headers, subject="Budget query", priority="urgent")
    _create(client, auth_headers, subject="Parking complaint", type="complaint")

    response = client.get("/correspondence/list", params={"priority": "urgent"}, headers=auth_headers("staff"))
    assert [i["subject"] for i in response.json()["items"]] == ["Budget query"]

    response = client.get("/correspondence/list", params={"search": "parking"}, headers=auth_headers("staff"))
    assert response.json()["total_items"] == 1

    response = client.get("/correspondence/list", params={"status": "archived"}, headers=auth_headers("staff"))
    assert response.status_code == 422


def test_triage_endpoint(client: TestClient, auth_headers):
    now = datetime.now(timezone.utc)
    _create(client, auth_headers, due_date=(now - timedelta(days=3)).isoformat())
    _create(client, auth_headers, due_date=(now + timedelta(days=90)).isoformat())

    response = client.get("/correspondence/triage", headers=auth_headers("staff"))

    assert response.status_code == 200
    body = response.json()
    assert body["total_items"] == 2
    assert [g["bucket"] for g in body["groups"]] == ["overdue", "this_week", "this_month", "beyond", "completed"]
    assert [g["label"] for g in body["groups"]][0] == "Overdue"
    assert body["groups"][0]["items"][0]["due_badge"]["urgency"] == "critical"
    assert body["groups"][3]["total_items"] == 1


def test_stats_endpoint(client: TestClient, auth_headers):
    created = _create(client, auth_headers, priority="high")
    client.patch(f"/correspondence/{created['id']}", json={"status": "in_progress"}, headers=auth_headers("admin"))

    response = client.get("/correspondence/stats", headers=auth_headers("staff"))

    assert response.status_code == 200
    stats = response.json()
    assert stats["total"] == 1
    assert stats["in_progress"] == 1
    assert stats["pending"] == 0
    assert stats["high"] == 1


def test_current_user_reports_mutation_rights(client: TestClient, auth_headers):
    assert client.get("/user", headers=auth_headers("manager")).json()["can_mutate"] is True
    assert client.get("/user", headers=auth_headers("staff")).json()["can_mutate"] is False


def test_patch_unknown_assignee_is_bad_request(client: TestClient, auth_headers):
    created = _create(client, auth_headers)
    response = client.patch(
        f"/correspondence/{created['id']}", json={"assigned_to_id": 4242}, headers=auth_headers("admin")
    )
    assert response.status_code == 400
    assert response.json() == {"detail": "Assigned user or department does not exist"}


def test_activity_lookup_database_error_is_unavailable(client: TestClient, auth_headers, monkeypatch):
    def _unavailable(self, correspondence_id):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(CorrespondenceRepository, "exists", _unavailable)

    response = client.get("/correspondence/1/activity", headers=auth_headers("staff"))
    assert response.status_code == 503
    assert response.json() == {"detail": "Database unavailable"}
