"""
Modello Permission (tabella: permissions).

Capacità atomica identificata dal nome (es. 'task-create', 'user-delete',
'log-list'). Dato di riferimento: viene creato dal seed e non viene mai
modificato dall'applicazione.
"""

from taskadmin.extensions import db


# Associazione molti-a-molti ruolo <-> permesso
role_permissions = db.Table(
    "role_permissions",
    db.Column(
        "role_id",
        db.Integer,
        db.ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column(
        "permission_id",
        db.Integer,
        db.ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Permission(db.Model):
    __tablename__ = "permissions"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False, unique=True, index=True)

    roles = db.relationship(
        "Role",
        secondary=role_permissions,
        back_populates="permissions",
    )

    def __repr__(self) -> str:
        return f"<Permission id={self.id} name={self.name!r}>"
