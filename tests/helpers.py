"""Helper condivisi dai test."""

from datetime import date, timedelta

from taskadmin.services.authorization_service import Actor

TEST_PASSWORD = "password"


def actor_for(user) -> Actor:
    return Actor.from_user(user)


def task_fields(assignee, **overrides):
    """Set completo di campi validi per creare/aggiornare un task."""
    fields = {
        "name": "Preparare report",
        "detail": "Report mensile acquisti",
        "assigned_to": assignee.id,
        "status": "pending",
        "due_date": (date.today() + timedelta(days=7)).isoformat(),
    }
    fields.update(overrides)
    return fields
