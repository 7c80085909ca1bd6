"""
Modello User (tabella: users).

Rappresenta un utente del pannello. La password non viene mai salvata in
chiaro: si conserva solo l'hash prodotto da Werkzeug.

Un utente con status diverso da 'active' viene rifiutato al login anche se la
password è corretta (vedi auth_service.authenticate).
"""

from datetime import datetime

from werkzeug.security import check_password_hash, generate_password_hash

from taskadmin.extensions import db
from taskadmin.models.role import user_roles

USER_STATUS_ACTIVE = "active"
USER_STATUS_INACTIVE = "inactive"
USER_STATUSES = (USER_STATUS_ACTIVE, USER_STATUS_INACTIVE)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(128), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # es. "active", "inactive"
    status = db.Column(
        db.String(16), nullable=False, default=USER_STATUS_ACTIVE, index=True
    )

    # Timestamps
    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relazioni
    roles = db.relationship(
        "Role",
        secondary=user_roles,
        back_populates="users",
        lazy="selectin",
        order_by="Role.name",
    )
    # passive_deletes: i riferimenti vengono azzerati esplicitamente da UserRepository
    assigned_tasks = db.relationship(
        "Task",
        back_populates="assignee",
        lazy="dynamic",
        passive_deletes=True,
    )

    # ---- helper password ----
    def set_password(self, raw_password: str) -> None:
        self.password_hash = generate_password_hash(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return bool(self.password_hash) and check_password_hash(self.password_hash, raw_password)

    @property
    def is_active(self) -> bool:
        return self.status == USER_STATUS_ACTIVE

    def has_role(self, role_name: str) -> bool:
        return any(role.name == role_name for role in self.roles)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
