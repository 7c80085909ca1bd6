"""
Test del registro attività: append-only, id univoci, atomicità con la mutazione.
"""

import uuid
from datetime import datetime, timedelta

import pytest

from taskadmin.errors import Forbidden, StorageFailure
from taskadmin.extensions import db
from taskadmin.models import ActivityLog, Task
from taskadmin.repositories.activity_log_repo import ActivityLogRepository, AppendOnlyViolation
from taskadmin.services import activity_log_service, task_service
from taskadmin.services.audit_service import record_activity
from taskadmin.services.unit_of_work import UnitOfWork
from tests.helpers import actor_for, task_fields


class TestAppendOnly:
    def test_repository_refuses_delete(self, admin):
        entry = ActivityLog(user_id=admin.id, action="create_task", description="x")
        db.session.add(entry)
        db.session.commit()

        repo = ActivityLogRepository(db.session)
        with pytest.raises(AppendOnlyViolation):
            repo.delete(entry)

        assert repo.get_by_id(entry.id) is not None

    def test_ids_are_unique_uuids(self, admin):
        with UnitOfWork() as uow:
            for i in range(5):
                record_activity(uow, admin.id, "update_task", f"voce {i}")
            uow.commit()

        ids = [e.id for e in db.session.query(ActivityLog).all()]
        assert len(set(ids)) == 5
        for value in ids:
            assert str(uuid.UUID(value)) == value

    def test_unknown_action_is_rejected(self, admin):
        with UnitOfWork() as uow:
            with pytest.raises(ValueError):
                record_activity(uow, admin.id, "login", "non prevista")


class TestAtomicity:
    def test_failed_log_write_rolls_back_task(self, admin, staff, monkeypatch):
        def broken_record(uow, actor_id, action, description, **kwargs):
            uow.activity_logs.add(ActivityLog(user_id=actor_id, action=None, description=description))

        monkeypatch.setattr(task_service, "record_activity", broken_record)

        with pytest.raises(StorageFailure):
            task_service.create_task(actor_for(admin), task_fields(staff, name="Fantasma"))

        assert db.session.query(Task).filter_by(name="Fantasma").count() == 0
        assert db.session.query(ActivityLog).count() == 0

    def test_database_error_mid_transaction_becomes_storage_failure(self, admin):
        admin_id, admin_email = admin.id, admin.email

        with pytest.raises(StorageFailure):
            with UnitOfWork() as uow:
                uow.activity_logs.add(ActivityLog(user_id=admin_id, action=None, description="x"))
                # autoflush della query successiva
                uow.users.get_by_email(admin_email)

        assert db.session.query(ActivityLog).count() == 0


class TestListActivityLogs:
    def test_requires_log_list(self, regular):
        with pytest.raises(Forbidden):
            activity_log_service.list_activity_logs(actor_for(regular))

    def test_newest_first_with_page_of_ten(self, admin):
        base = datetime(2026, 1, 1, 9, 0)
        with UnitOfWork() as uow:
            for i in range(12):
                record_activity(
                    uow, admin.id, "update_task", f"voce {i}", logged_at=base + timedelta(minutes=i)
                )
            uow.commit()

        page = activity_log_service.list_activity_logs(actor_for(admin))

        assert page.total == 12
        assert [e.description for e in page.items][:2] == ["voce 11", "voce 10"]
        assert len(page.items) == 10
        assert page.items[0].user.name == admin.name


class TestSubjectHistory:
    def test_entries_survive_the_deleted_task(self, admin, regular, staff):
        task = task_service.create_task(actor_for(admin), task_fields(staff, name="Storico"))
        task_id = task.id
        task_service.update_task(actor_for(regular), task_id, task_fields(staff, name="Storico 2"))
        task_service.delete_task(actor_for(admin), task_id)

        history = ActivityLogRepository(db.session).list_for_subject("task", task_id)

        assert [e.action for e in history] == ["create_task", "update_task", "delete_task"]
        assert [e.user_id for e in history] == [admin.id, regular.id, admin.id]
