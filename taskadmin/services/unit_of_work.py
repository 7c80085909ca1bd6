"""
Unit of Work Pattern.
Gestisce la transazione del database atomica e l'accesso ai repository.

Ogni mutazione di un'entità e la relativa voce di ActivityLog passano dalla
stessa UnitOfWork e vengono confermate da un unico commit: o entrambe, o nessuna.
"""
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from taskadmin.errors import StorageFailure
from taskadmin.extensions import db

# Import Repositories
from taskadmin.repositories.activity_log_repo import ActivityLogRepository
from taskadmin.repositories.permission_repo import PermissionRepository
from taskadmin.repositories.role_repo import RoleRepository
from taskadmin.repositories.task_repo import TaskRepository
from taskadmin.repositories.user_repo import UserRepository


class UnitOfWork:
    def __init__(self):
        self.session = db.session
        self._permissions: Optional[PermissionRepository] = None
        self._roles: Optional[RoleRepository] = None
        self._users: Optional[UserRepository] = None
        self._tasks: Optional[TaskRepository] = None
        self._activity_logs: Optional[ActivityLogRepository] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.rollback()
            # Errori DB a metà transazione (autoflush nelle query)
            if isinstance(exc_val, SQLAlchemyError):
                raise StorageFailure() from exc_val
            return False
        # Flask gestisce la chiusura della sessione, non chiudere qui

    @property
    def permissions(self) -> PermissionRepository:
        if self._permissions is None:
            self._permissions = PermissionRepository(self.session)
        return self._permissions

    @property
    def roles(self) -> RoleRepository:
        if self._roles is None:
            self._roles = RoleRepository(self.session)
        return self._roles

    @property
    def users(self) -> UserRepository:
        if self._users is None:
            self._users = UserRepository(self.session)
        return self._users

    @property
    def tasks(self) -> TaskRepository:
        if self._tasks is None:
            self._tasks = TaskRepository(self.session)
        return self._tasks

    @property
    def activity_logs(self) -> ActivityLogRepository:
        if self._activity_logs is None:
            self._activity_logs = ActivityLogRepository(self.session)
        return self._activity_logs

    def commit(self):
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.rollback()
            raise StorageFailure() from exc

    def rollback(self):
        self.session.rollback()
