"""
Test delle API JSON: involucro di risposta, sessione e codici di stato.
"""

from taskadmin.extensions import db
from taskadmin.models import ActivityLog
from taskadmin.services.auth_service import INACTIVE_MESSAGE
from tests.helpers import TEST_PASSWORD, task_fields


def login(client, email, password=TEST_PASSWORD):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_unauthenticated_request_is_401(client, permissions):
    response = client.get("/api/tasks/")

    assert response.status_code == 401
    body = response.get_json()
    assert body["success"] is False
    assert body["payload"] is None


def test_bad_credentials_are_422(client, staff):
    response = login(client, staff.email, "sbagliata")

    assert response.status_code == 422
    assert "email" in response.get_json()["payload"]["errors"]


def test_inactive_login_message(client, make_user, staff_role):
    user = make_user(roles=[staff_role], status="inactive")

    response = login(client, user.email)

    assert response.status_code == 422
    assert response.get_json()["payload"]["errors"]["email"] == INACTIVE_MESSAGE


def test_me_lists_effective_permissions(client, regular):
    login(client, regular.email)

    body = client.get("/api/auth/me").get_json()

    assert body["payload"]["email"] == regular.email
    assert body["payload"]["permissions"] == ["task-create", "task-edit", "task-list"]
    assert "password_hash" not in body["payload"]


def test_create_then_list_tasks(client, regular, staff):
    login(client, regular.email)

    created = client.post("/api/tasks/", json=task_fields(regular, name="Via API"))
    assert created.status_code == 201
    assert created.get_json()["payload"]["assigned_to"] == regular.id

    listing = client.get("/api/tasks/").get_json()["payload"]
    assert listing["total"] == 1
    assert listing["items"][0]["name"] == "Via API"

    assert db.session.query(ActivityLog).filter_by(action="create_task").count() == 1


def test_validation_errors_in_payload(client, regular):
    login(client, regular.email)

    response = client.post("/api/tasks/", json={"name": "Incompleto"})

    assert response.status_code == 422
    errors = response.get_json()["payload"]["errors"]
    assert set(errors) == {"detail", "assigned_to", "status", "due_date"}


def test_forbidden_is_403(client, regular):
    login(client, regular.email)

    response = client.get("/api/users/")

    assert response.status_code == 403
    assert response.get_json()["success"] is False


def test_missing_task_is_404(client, admin):
    login(client, admin.email)
    assert client.get("/api/tasks/12345").status_code == 404


def test_logout_ends_session(client, regular):
    login(client, regular.email)
    client.post("/api/auth/logout")

    assert client.get("/api/tasks/").status_code == 401


def test_activity_logs_endpoint(client, admin, staff):
    login(client, admin.email)
    client.post("/api/tasks/", json=task_fields(staff))

    body = client.get("/api/activity-logs/").get_json()

    assert body["success"] is True
    items = body["payload"]["items"]
    assert items[0]["action"] == "create_task"
    assert items[0]["user_name"] == admin.name


def test_roles_permissions_endpoint(client, admin):
    login(client, admin.email)

    payload = client.get("/api/roles/permissions").get_json()["payload"]

    assert "role-create" in [p["name"] for p in payload]


def test_numeric_password_login_is_422(client, staff):
    response = client.post("/api/auth/login", json={"email": staff.email, "password": 123456})

    assert response.status_code == 422
    assert response.get_json()["success"] is False


def test_numeric_password_on_user_create_is_422(client, admin, staff_role):
    login(client, admin.email)

    response = client.post(
        "/api/users/",
        json={
            "name": "Numerico",
            "email": "numerico@example.com",
            "password": 123456,
            "confirm_password": 123456,
            "roles": ["Staff"],
        },
    )

    assert response.status_code == 422
    assert "password" in response.get_json()["payload"]["errors"]
