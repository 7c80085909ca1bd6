"""
Test suite del pannello task.

- test_authorization    -> motore permessi
- test_task_service     -> task + registro attività
- test_user_service     -> utenti, password, autenticazione
- test_role_service     -> ruoli e sincronizzazione permessi
- test_activity_log     -> registro append-only e atomicità
- test_overdue_service  -> sweep task scaduti
- test_seed             -> dati iniziali
- test_api              -> API JSON
- test_manage           -> comandi CLI
"""
