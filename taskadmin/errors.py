"""
Eccezioni applicative del pannello task.

I servizi sollevano queste eccezioni; il livello web (vedi ``create_app``)
le traduce nella risposta HTTP corrispondente:

- Unauthenticated  -> 401 (login richiesto)
- Forbidden        -> 403 (permesso mancante)
- ValidationFailed -> 422 (mappa campo -> messaggio)
- NotFound         -> 404
- StorageFailure   -> 500 (transazione annullata)
"""

from __future__ import annotations

from typing import Dict, Optional


class TaskAdminError(Exception):
    """Base per tutti gli errori applicativi."""

    status_code = 500
    default_message = "Errore applicativo."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class Unauthenticated(TaskAdminError):
    status_code = 401
    default_message = "Autenticazione richiesta."


class Forbidden(TaskAdminError):
    status_code = 403
    default_message = "Non hai i permessi per eseguire questa operazione."

    def __init__(self, message: Optional[str] = None, required=()):
        super().__init__(message)
        self.required = tuple(required)


class ValidationFailed(TaskAdminError):
    """Uno o più campi mancanti o non validi. ``errors`` contiene tutti i campi in errore."""

    status_code = 422
    default_message = "Dati non validi."

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        super().__init__(message)
        self.errors = dict(errors)


class NotFound(TaskAdminError):
    status_code = 404
    default_message = "Elemento non trovato."

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} con id {entity_id} non trovato.")
        self.entity = entity
        self.entity_id = entity_id


class StorageFailure(TaskAdminError):
    status_code = 500
    default_message = "Errore di salvataggio: operazione annullata."
