"""
Repository specifico per User.
Eredita le funzioni base (add, get, list) da SqlAlchemyRepository.
"""
from typing import List, Optional
import logging

from taskadmin.models import ActivityLog, Role, Task, User
from taskadmin.repositories.base import SqlAlchemyRepository

logger = logging.getLogger(__name__)


class UserRepository(SqlAlchemyRepository[User]):
    def __init__(self, session):
        super().__init__(session, User)

    def get_by_email(self, email: str) -> Optional[User]:
        """Cerca utente per email esatta."""
        if not email:
            return None
        return self.session.query(User).filter_by(email=email).first()

    def email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        """True se l'email è già usata da un altro utente."""
        query = self.session.query(User.id).filter(User.email == email)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    def paginate_latest(self, page: int, per_page: int):
        """Utenti dal più recente al meno recente."""
        query = self.session.query(User).order_by(User.created_at.desc(), User.id.desc())
        return self.paginate(query, page, per_page)

    def list_with_role(self, role_name: str) -> List[User]:
        return (
            self.session.query(User)
            .join(User.roles)
            .filter(Role.name == role_name)
            .order_by(User.name.asc())
            .all()
        )

    def delete_detaching_references(self, user: User) -> None:
        """
        Cancella l'utente senza toccare task e voci di log:
        - tasks.assigned_to -> NULL
        - activity_logs.user_id -> NULL
        - archi utente->ruolo rimossi
        """
        detached_tasks = (
            self.session.query(Task)
            .filter(Task.assigned_to == user.id)
            .update({Task.assigned_to: None}, synchronize_session="fetch")
        )
        detached_logs = (
            self.session.query(ActivityLog)
            .filter(ActivityLog.user_id == user.id)
            .update({ActivityLog.user_id: None}, synchronize_session="fetch")
        )
        user.roles = []
        self.flush()
        logger.debug(
            "Utente %s: %s task e %s voci di log sganciati",
            user.id,
            detached_tasks,
            detached_logs,
        )
        self.delete(user)
