"""
Servizi per la gestione dei Task.

Ogni mutazione segue lo stesso schema dentro una UnitOfWork:
autorizzazione -> validazione -> modifica -> voce di ActivityLog -> commit unico.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from taskadmin.errors import NotFound, ValidationFailed
from taskadmin.models import ActivityAction, Task, User
from taskadmin.services.audit_service import record_activity
from taskadmin.services.authorization_service import (
    TASK_CREATE,
    TASK_DELETE,
    TASK_EDIT,
    TASK_VIEW,
    Actor,
    authorize,
)
from taskadmin.services.dto.task_input import TaskInput
from taskadmin.services.logging import log_structured_event
from taskadmin.services.settings_service import get_int_setting, get_setting
from taskadmin.services.unit_of_work import UnitOfWork


def list_tasks_for_owner(actor: Optional[Actor], page: int = 1):
    """Pagina dei task assegnati all'attore, dal più recente."""
    with UnitOfWork() as uow:
        user = authorize(uow, actor, TASK_VIEW)
        per_page = get_int_setting("TASKS_PER_PAGE", 5)
        return uow.tasks.paginate_for_owner(user.id, page, per_page)


def get_task(actor: Optional[Actor], task_id: int) -> Task:
    with UnitOfWork() as uow:
        authorize(uow, actor, TASK_VIEW)
        return _get_or_404(uow, task_id)


def list_assignable_users(actor: Optional[Actor]) -> List[User]:
    """Utenti proponibili come assegnatari nei form (ruolo ASSIGNABLE_ROLE)."""
    with UnitOfWork() as uow:
        authorize(uow, actor, (TASK_CREATE, TASK_EDIT))
        return uow.users.list_with_role(get_setting("ASSIGNABLE_ROLE", "Staff"))


def create_task(actor: Optional[Actor], fields: Mapping[str, Any]) -> Task:
    """Crea un task e registra 'create_task' nella stessa transazione."""
    with UnitOfWork() as uow:
        user = authorize(uow, actor, (TASK_CREATE,))
        data = TaskInput.from_mapping(fields)
        assignee = _resolve_assignee(uow, data.assigned_to)

        task = Task(
            name=data.name,
            detail=data.detail,
            status=data.status,
            due_date=data.due_date,
        )
        task.assignee = assignee
        uow.tasks.add(task)
        uow.tasks.flush()

        record_activity(
            uow,
            user.id,
            ActivityAction.CREATE_TASK,
            f"Creato il task: {task.name} assegnato a {assignee.name}",
            subject_type="task",
            subject_id=task.id,
        )
        uow.commit()

        log_structured_event(
            "create_task", message="Task creato", actor_id=user.id, task_id=task.id
        )
        return task


def update_task(actor: Optional[Actor], task_id: int, fields: Mapping[str, Any]) -> Task:
    """Aggiorna tutti i campi del task (niente aggiornamenti parziali)."""
    with UnitOfWork() as uow:
        user = authorize(uow, actor, (TASK_EDIT,))
        task = _get_or_404(uow, task_id)
        data = TaskInput.from_mapping(fields)
        assignee = _resolve_assignee(uow, data.assigned_to)

        task.name = data.name
        task.detail = data.detail
        task.assignee = assignee
        task.status = data.status
        task.due_date = data.due_date

        record_activity(
            uow,
            user.id,
            ActivityAction.UPDATE_TASK,
            f"Aggiornato il task: {task.name} assegnato a {assignee.name}",
            subject_type="task",
            subject_id=task.id,
        )
        uow.commit()

        log_structured_event(
            "update_task", message="Task aggiornato", actor_id=user.id, task_id=task.id
        )
        return task


def delete_task(actor: Optional[Actor], task_id: int) -> None:
    with UnitOfWork() as uow:
        user = authorize(uow, actor, (TASK_DELETE,))
        task = _get_or_404(uow, task_id)

        # La descrizione va composta prima della cancellazione
        description = f"Eliminato il task: {task.name} assegnato a {task.assignee_name}"

        uow.tasks.delete(task)
        record_activity(
            uow,
            user.id,
            ActivityAction.DELETE_TASK,
            description,
            subject_type="task",
            subject_id=task_id,
        )
        uow.commit()

        log_structured_event(
            "delete_task", message="Task eliminato", actor_id=user.id, task_id=task_id
        )


def _get_or_404(uow: UnitOfWork, task_id: int) -> Task:
    task = uow.tasks.get_by_id(task_id)
    if task is None:
        raise NotFound("Task", task_id)
    return task


def _resolve_assignee(uow: UnitOfWork, user_id: int) -> User:
    assignee = uow.users.get_by_id(user_id)
    if assignee is None:
        raise ValidationFailed({"assigned_to": f"L'utente {user_id} non esiste."})
    return assignee
