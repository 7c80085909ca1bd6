"""
Test dei servizi User e dell'autenticazione.
"""

import pytest

from taskadmin.errors import (
    Forbidden,
    NotFound,
    StorageFailure,
    Unauthenticated,
    ValidationFailed,
)
from taskadmin.extensions import db
from taskadmin.models import ActivityLog, User, user_roles
from taskadmin.repositories.user_repo import UserRepository
from taskadmin.services import auth_service, user_service
from taskadmin.services.auth_service import FAILED_MESSAGE, INACTIVE_MESSAGE
from tests.helpers import TEST_PASSWORD, actor_for


def _entries(action):
    return db.session.query(ActivityLog).filter_by(action=action).count()


def user_fields(**overrides):
    fields = {
        "name": "Mario Rossi",
        "email": "mario@example.com",
        "password": "segreta1",
        "confirm_password": "segreta1",
        "roles": ["Staff"],
    }
    fields.update(overrides)
    return fields


class TestCreateUser:
    def test_password_is_stored_hashed(self, admin, staff_role):
        user = user_service.create_user(actor_for(admin), user_fields())

        assert user.password_hash != "segreta1"
        assert user.check_password("segreta1")
        assert user.status == "active"
        assert [r.name for r in user.roles] == ["Staff"]

        entry = db.session.query(ActivityLog).filter_by(action="create_user").one()
        assert entry.user_id == admin.id
        assert "segreta1" not in entry.description

    def test_email_is_normalized_and_unique(self, admin, staff_role):
        user_service.create_user(actor_for(admin), user_fields(email="Mario@Example.com"))

        with pytest.raises(ValidationFailed) as exc_info:
            user_service.create_user(actor_for(admin), user_fields(email="mario@example.com"))

        assert "email" in exc_info.value.errors
        assert db.session.query(User).filter_by(email="mario@example.com").count() == 1

    def test_password_confirmation_must_match(self, admin, staff_role):
        with pytest.raises(ValidationFailed) as exc_info:
            user_service.create_user(
                actor_for(admin), user_fields(confirm_password="diversa")
            )

        assert "password" in exc_info.value.errors

    def test_hyphenated_confirmation_field_is_accepted(self, admin, staff_role):
        fields = user_fields()
        fields["confirm-password"] = fields.pop("confirm_password")

        user = user_service.create_user(actor_for(admin), fields)
        assert user.check_password("segreta1")

    def test_password_required_on_create(self, admin, staff_role):
        with pytest.raises(ValidationFailed) as exc_info:
            user_service.create_user(
                actor_for(admin), user_fields(password="", confirm_password="")
            )

        assert "password" in exc_info.value.errors

    def test_unknown_role_is_rejected(self, admin, staff_role):
        with pytest.raises(ValidationFailed) as exc_info:
            user_service.create_user(actor_for(admin), user_fields(roles=["Fantasma"]))

        assert "roles" in exc_info.value.errors

    def test_invalid_status_is_rejected(self, admin, staff_role):
        with pytest.raises(ValidationFailed) as exc_info:
            user_service.create_user(actor_for(admin), user_fields(status="sospeso"))

        assert "status" in exc_info.value.errors

    def test_requires_user_create(self, regular, staff_role):
        with pytest.raises(Forbidden):
            user_service.create_user(actor_for(regular), user_fields())

        assert db.session.query(User).filter_by(email="mario@example.com").first() is None
        assert _entries("create_user") == 0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"password": 123456, "confirm_password": 123456},
            {"password": "segreta1", "confirm_password": ["segreta1"]},
        ],
    )
    def test_non_text_password_is_rejected(self, admin, staff_role, overrides):
        with pytest.raises(ValidationFailed) as exc_info:
            user_service.create_user(actor_for(admin), user_fields(**overrides))

        assert "password" in exc_info.value.errors
        assert db.session.query(User).filter_by(email="mario@example.com").first() is None

    def test_email_race_becomes_storage_failure(self, admin, staff, staff_role, monkeypatch):
        # Due richieste concorrenti superano entrambe il controllo sull'email
        monkeypatch.setattr(UserRepository, "email_taken", lambda self, email, exclude_id=None: False)

        with pytest.raises(StorageFailure):
            user_service.create_user(actor_for(admin), user_fields(email=staff.email))

        assert db.session.query(User).filter_by(email="staff@example.com").count() == 1
        assert _entries("create_user") == 0


class TestUpdateUser:
    def test_update_appends_exactly_one_entry(self, admin, staff, staff_role):
        user_service.update_user(
            actor_for(admin),
            staff.id,
            {"name": "Staff Rinominato", "email": staff.email, "roles": ["Staff"]},
        )

        entry = db.session.query(ActivityLog).filter_by(action="update_user").one()
        assert entry.user_id == admin.id
        assert entry.subject_id == staff.id
        assert entry.logged_at is not None
        assert "Staff Rinominato" in entry.description

    def test_forbidden_update_appends_nothing(self, regular, staff, staff_role):
        with pytest.raises(Forbidden):
            user_service.update_user(
                actor_for(regular),
                staff.id,
                {"name": "Intruso", "email": staff.email, "roles": ["Staff"]},
            )

        db.session.refresh(staff)
        assert staff.name == "Staff User"
        assert _entries("update_user") == 0

    def test_whitespace_password_keeps_hash(self, admin, staff, staff_role):
        old_hash = staff.password_hash

        user_service.update_user(
            actor_for(admin),
            staff.id,
            {"name": staff.name, "email": staff.email, "roles": ["Staff"], "password": "   "},
        )

        db.session.refresh(staff)
        assert staff.password_hash == old_hash
        assert auth_service.authenticate(staff.email, TEST_PASSWORD).id == staff.id

    def test_non_text_password_on_update_is_rejected(self, admin, staff, staff_role):
        with pytest.raises(ValidationFailed) as exc_info:
            user_service.update_user(
                actor_for(admin),
                staff.id,
                {
                    "name": staff.name,
                    "email": staff.email,
                    "roles": ["Staff"],
                    "password": 123456,
                    "confirm_password": 123456,
                },
            )

        assert "password" in exc_info.value.errors

    def test_blank_password_keeps_hash(self, admin, staff, staff_role):
        old_hash = staff.password_hash

        user_service.update_user(
            actor_for(admin),
            staff.id,
            {"name": "Nuovo Nome", "email": staff.email, "roles": ["Staff"], "password": ""},
        )

        db.session.refresh(staff)
        assert staff.name == "Nuovo Nome"
        assert staff.password_hash == old_hash

    def test_new_password_replaces_old(self, admin, staff, staff_role):
        user_service.update_user(
            actor_for(admin),
            staff.id,
            {
                "name": staff.name,
                "email": staff.email,
                "roles": ["Staff"],
                "password": "nuova-pass",
                "confirm_password": "nuova-pass",
            },
        )

        assert auth_service.authenticate(staff.email, "nuova-pass").id == staff.id
        with pytest.raises(ValidationFailed):
            auth_service.authenticate(staff.email, TEST_PASSWORD)

    def test_roles_are_replaced_not_merged(self, admin, make_role, make_user, staff_role):
        make_role("Revisore", ["log-list"])
        user = make_user(roles=[staff_role])

        user_service.update_user(
            actor_for(admin),
            user.id,
            {"name": user.name, "email": user.email, "roles": ["Revisore"]},
        )

        db.session.refresh(user)
        assert [r.name for r in user.roles] == ["Revisore"]

    def test_email_taken_by_other_user(self, admin, staff, staff_role):
        with pytest.raises(ValidationFailed) as exc_info:
            user_service.update_user(
                actor_for(admin),
                staff.id,
                {"name": staff.name, "email": admin.email, "roles": ["Staff"]},
            )

        assert "email" in exc_info.value.errors

    def test_missing_user_is_not_found(self, admin, staff_role):
        with pytest.raises(NotFound):
            user_service.update_user(
                actor_for(admin), 999, {"name": "X", "email": "x@example.com", "roles": ["Staff"]}
            )


class TestDeleteUser:
    def test_delete_detaches_tasks_logs_and_roles(self, admin, regular, staff, make_task):
        task = make_task("Assegnato", assignee=regular)
        task_id = task.id
        db.session.add(
            ActivityLog(user_id=regular.id, action="update_task", description="prima")
        )
        db.session.commit()
        regular_id = regular.id

        user_service.delete_user(actor_for(admin), regular_id)

        db.session.expire_all()
        assert db.session.get(User, regular_id) is None
        assert db.session.get(type(task), task_id).assigned_to is None
        old_entry = db.session.query(ActivityLog).filter_by(description="prima").one()
        assert old_entry.user_id is None
        remaining_edges = db.session.execute(
            user_roles.select().where(user_roles.c.user_id == regular_id)
        ).fetchall()
        assert remaining_edges == []

        entry = db.session.query(ActivityLog).filter_by(action="delete_user").one()
        assert entry.user_id == admin.id
        assert f"ID {regular_id}" in entry.description

    def test_self_delete_is_rejected(self, admin):
        with pytest.raises(ValidationFailed) as exc_info:
            user_service.delete_user(actor_for(admin), admin.id)

        assert "id" in exc_info.value.errors
        assert db.session.get(User, admin.id) is not None

    def test_deleted_actor_can_no_longer_act(self, admin, make_user, admin_role):
        other_admin = make_user("Altro Admin", roles=[admin_role])
        stale_actor = actor_for(other_admin)

        user_service.delete_user(actor_for(admin), other_admin.id)

        with pytest.raises(Unauthenticated):
            user_service.list_users(stale_actor)


class TestListUsers:
    def test_newest_first(self, admin, regular, staff):
        page = user_service.list_users(actor_for(admin))
        assert [u.id for u in page.items] == [staff.id, regular.id, admin.id]

    def test_requires_a_user_permission(self, regular):
        with pytest.raises(Forbidden):
            user_service.list_users(actor_for(regular))


class TestAuthenticate:
    def test_valid_credentials(self, staff):
        assert auth_service.authenticate("STAFF@example.com ", TEST_PASSWORD).id == staff.id

    def test_wrong_password(self, staff):
        with pytest.raises(ValidationFailed) as exc_info:
            auth_service.authenticate(staff.email, "sbagliata")

        assert exc_info.value.errors == {"email": FAILED_MESSAGE}

    def test_unknown_email(self, permissions):
        with pytest.raises(ValidationFailed) as exc_info:
            auth_service.authenticate("ghost@example.com", TEST_PASSWORD)

        assert exc_info.value.errors == {"email": FAILED_MESSAGE}

    def test_inactive_user_rejected_even_with_correct_password(self, make_user, staff_role):
        user = make_user(roles=[staff_role], status="inactive")

        with pytest.raises(ValidationFailed) as exc_info:
            auth_service.authenticate(user.email, TEST_PASSWORD)

        assert exc_info.value.errors == {"email": INACTIVE_MESSAGE}

    @pytest.mark.parametrize("password", [123456, None, ["password"]])
    def test_non_text_password_is_a_failed_login(self, staff, password):
        with pytest.raises(ValidationFailed) as exc_info:
            auth_service.authenticate(staff.email, password)

        assert exc_info.value.errors == {"email": FAILED_MESSAGE}
