"""DTO per i dati in ingresso di creazione/modifica di un User."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from taskadmin.errors import ValidationFailed
from taskadmin.models import USER_STATUSES, USER_STATUS_ACTIVE
from taskadmin.services.dto.form_parsing import as_list, clean_str, collect_missing, is_blank

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass
class UserInput:
    name: str
    email: str
    roles: List[str] = field(default_factory=list)
    # None in modifica = mantieni la password esistente
    password: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, creating: bool) -> "UserInput":
        """
        - in creazione la password è obbligatoria;
        - in modifica una password vuota lascia invariato l'hash salvato;
        - se presente, la password deve coincidere con ``confirm_password``.
        """
        data = data or {}
        required = ["name", "email", "roles"] + (["password"] if creating else [])
        errors: Dict[str, str] = collect_missing(data, required)

        email = clean_str(data.get("email"))
        if "email" not in errors and not EMAIL_RE.match(email):
            errors["email"] = "Indirizzo email non valido."

        password = data.get("password")
        confirmation = data.get("confirm_password", data.get("confirm-password"))
        if is_blank(password):
            password = None

        if password is not None and not isinstance(password, str):
            errors["password"] = "La password deve essere un testo."
        elif confirmation is not None and not isinstance(confirmation, str):
            errors["password"] = "La conferma password deve essere un testo."
        elif password is not None and password != confirmation:
            errors["password"] = "Le password non coincidono."

        status = clean_str(data.get("status"))
        if status is not None and status not in USER_STATUSES:
            errors["status"] = "Stato utente non valido."
        if status is None and creating:
            status = USER_STATUS_ACTIVE

        roles = sorted({str(r).strip() for r in as_list(data.get("roles"))})

        if errors:
            raise ValidationFailed(errors)

        return cls(
            name=clean_str(data.get("name")),
            email=email.lower(),
            roles=roles,
            password=password,
            status=status,
        )
