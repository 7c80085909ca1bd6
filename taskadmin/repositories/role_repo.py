"""
Repository specifico per Role.
Eredita le funzioni base (add, get, list) da SqlAlchemyRepository.
"""
from typing import Iterable, List, Optional
import logging

from taskadmin.models import Role
from taskadmin.repositories.base import SqlAlchemyRepository

logger = logging.getLogger(__name__)


class RoleRepository(SqlAlchemyRepository[Role]):
    def __init__(self, session):
        super().__init__(session, Role)

    def get_by_name(self, name: str) -> Optional[Role]:
        """Cerca ruolo per nome esatto."""
        if not name:
            return None
        return self.session.query(Role).filter_by(name=name).first()

    def list_by_names(self, names: Iterable[str]) -> List[Role]:
        names = list(names)
        if not names:
            return []
        return self.session.query(Role).filter(Role.name.in_(names)).all()

    def name_taken(self, name: str, exclude_id: Optional[int] = None) -> bool:
        """True se esiste già un altro ruolo con questo nome."""
        query = self.session.query(Role.id).filter(Role.name == name)
        if exclude_id is not None:
            query = query.filter(Role.id != exclude_id)
        return query.first() is not None

    def list_all_ordered(self) -> List[Role]:
        return self.session.query(Role).order_by(Role.name.asc()).all()

    def paginate_ordered(self, page: int, per_page: int):
        query = self.session.query(Role).order_by(Role.name.asc(), Role.id.asc())
        return self.paginate(query, page, per_page)

    def delete_with_grants(self, role: Role) -> None:
        """
        Cancella il ruolo dopo aver rimosso tutti gli archi che lo referenziano:
        prima utente->ruolo, poi ruolo->permesso, infine il nodo.
        """
        holders = len(role.users)
        role.users = []
        role.permissions = []
        self.flush()
        logger.debug("Ruolo %s rimosso da %s utenti", role.id, holders)
        self.delete(role)
