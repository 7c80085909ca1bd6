"""
Configurazione pytest per il pannello task.

Fornisce:
1. app Flask con TestConfig (SQLite in memoria) e contesto applicativo attivo
2. factory per permessi, ruoli e utenti
3. utenti tipici: admin (tutti i permessi), regular (task-list/create/edit),
   staff (solo task-list), nobody (nessun ruolo)
"""

import pytest

from config import TestConfig
from taskadmin import create_app
from taskadmin.extensions import db
from taskadmin.models import Permission, Role, Task, User
from taskadmin.services.authorization_service import ALL_PERMISSIONS
from tests.helpers import TEST_PASSWORD


# -----------------------------------------------------------------------------
# App e database
# -----------------------------------------------------------------------------
@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


# -----------------------------------------------------------------------------
# Factory
# -----------------------------------------------------------------------------
@pytest.fixture
def permissions(app):
    """Tutti i permessi noti, indicizzati per nome."""
    perms = {name: Permission(name=name) for name in ALL_PERMISSIONS}
    db.session.add_all(perms.values())
    db.session.commit()
    return perms


@pytest.fixture
def make_role(permissions):
    def _make_role(name, permission_names=()):
        role = Role(name=name)
        role.permissions = [permissions[p] for p in permission_names]
        db.session.add(role)
        db.session.commit()
        return role

    return _make_role


@pytest.fixture
def make_user(app):
    counter = {"n": 0}

    def _make_user(name=None, roles=(), status="active", email=None, password=TEST_PASSWORD):
        counter["n"] += 1
        name = name or f"Utente {counter['n']}"
        user = User(
            name=name,
            email=email or f"user{counter['n']}@example.com",
            status=status,
        )
        user.set_password(password)
        user.roles = list(roles)
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def make_task(app):
    def _make_task(name="Task", assignee=None, status="pending", due_date=None, detail="Dettaglio"):
        task = Task(
            name=name,
            detail=detail,
            status=status,
            due_date=due_date,
        )
        task.assignee = assignee
        db.session.add(task)
        db.session.commit()
        return task

    return _make_task


# -----------------------------------------------------------------------------
# Ruoli e utenti tipici
# -----------------------------------------------------------------------------
@pytest.fixture
def admin_role(make_role):
    return make_role("admin", ALL_PERMISSIONS)


@pytest.fixture
def user_role(make_role):
    return make_role("user", ["task-list", "task-create", "task-edit"])


@pytest.fixture
def staff_role(make_role):
    return make_role("Staff", ["task-list"])


@pytest.fixture
def admin(make_user, admin_role):
    return make_user("Admin User", roles=[admin_role], email="admin@example.com")


@pytest.fixture
def regular(make_user, user_role):
    return make_user("Regular User", roles=[user_role], email="regular@example.com")


@pytest.fixture
def staff(make_user, staff_role):
    return make_user("Staff User", roles=[staff_role], email="staff@example.com")


@pytest.fixture
def nobody(make_user, permissions):
    return make_user("Senza Ruoli", roles=[], email="nobody@example.com")

