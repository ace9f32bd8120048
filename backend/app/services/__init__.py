from app.services.audit import AuditActor, audit_event, audited
from app.services.crud import Collection, CrudService, Dependent, Reference

# Domain services register themselves with CrudService on import.
from app.services import (  # noqa: E402
    administration,
    amendment,
    communication,
    consultation,
    contract,
    core,
    document,
    files,
    plan,
    provider,
    security,
)

__all__ = [
    "AuditActor",
    "Collection",
    "CrudService",
    "Dependent",
    "Reference",
    "audit_event",
    "audited",
    "administration",
    "amendment",
    "communication",
    "consultation",
    "contract",
    "core",
    "document",
    "files",
    "plan",
    "provider",
    "security",
]
