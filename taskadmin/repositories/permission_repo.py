"""
Repository specifico per Permission (dato di riferimento, sola lettura + seed).
"""
from typing import Iterable, List, Optional

from taskadmin.models import Permission
from taskadmin.repositories.base import SqlAlchemyRepository


class PermissionRepository(SqlAlchemyRepository[Permission]):
    def __init__(self, session):
        super().__init__(session, Permission)

    def get_by_name(self, name: str) -> Optional[Permission]:
        if not name:
            return None
        return self.session.query(Permission).filter_by(name=name).first()

    def list_by_ids(self, ids: Iterable[int]) -> List[Permission]:
        ids = list(ids)
        if not ids:
            return []
        return self.session.query(Permission).filter(Permission.id.in_(ids)).all()

    def list_all_ordered(self) -> List[Permission]:
        return self.session.query(Permission).order_by(Permission.name.asc()).all()

    def get_or_create(self, name: str) -> Permission:
        """Usato dal seed: crea il permesso se non esiste."""
        permission = self.get_by_name(name)
        if permission is None:
            permission = Permission(name=name)
            self.add(permission)
            self.flush()
        return permission
