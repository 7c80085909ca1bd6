"""
Modello Role (tabella: roles).

Un ruolo è un insieme nominato di permessi assegnabile agli utenti.
Il nome è univoco. La cancellazione passa sempre da RoleRepository.delete_with_grants,
che rimuove prima gli archi verso utenti e permessi.
"""

from datetime import datetime
from typing import FrozenSet

from taskadmin.extensions import db
from taskadmin.models.permission import role_permissions


# Associazione molti-a-molti utente <-> ruolo
user_roles = db.Table(
    "user_roles",
    db.Column(
        "user_id",
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column(
        "role_id",
        db.Integer,
        db.ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Role(db.Model):
    __tablename__ = "roles"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False, unique=True, index=True)

    # Timestamps
    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relazioni
    permissions = db.relationship(
        "Permission",
        secondary=role_permissions,
        back_populates="roles",
        lazy="selectin",
        order_by="Permission.name",
    )
    users = db.relationship(
        "User",
        secondary=user_roles,
        back_populates="roles",
    )

    @property
    def permission_names(self) -> FrozenSet[str]:
        return frozenset(p.name for p in self.permissions)

    def __repr__(self) -> str:
        return f"<Role id={self.id} name={self.name!r}>"
