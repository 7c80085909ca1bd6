"""
Repository generico: operazioni comuni a tutti i modelli del pannello.

I repository non fanno mai commit: la transazione appartiene alla UnitOfWork.
"""
from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from taskadmin.errors import StorageFailure
from taskadmin.extensions import db

T = TypeVar("T", bound=db.Model)


class SqlAlchemyRepository(Generic[T]):
    def __init__(self, session, model_cls: Type[T]):
        self.session = session
        self.model_cls = model_cls

    def add(self, entity: T) -> T:
        self.session.add(entity)
        return entity

    def get_by_id(self, entity_id: int) -> Optional[T]:
        if entity_id is None:
            return None
        return self.session.get(self.model_cls, entity_id)

    def delete(self, entity: T) -> None:
        self.session.delete(entity)

    def flush(self) -> None:
        """
        Allinea la sessione al DB (id disponibili per la voce di log).

        Un errore del DB (es. vincolo di unicità violato) annulla la
        transazione e diventa StorageFailure, come al commit.
        """
        try:
            self.session.flush()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageFailure() from exc

    @staticmethod
    def paginate(query, page: int, per_page: int):
        """
        Pagination di Flask-SQLAlchemy; una pagina fuori range è vuota, non 404.
        """
        page = page if page and page > 0 else 1
        return query.paginate(page=page, per_page=per_page, error_out=False)
