from datetime import datetime
from typing import Dict, List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import page_request, require_roles
from app.core.errors import ValidationFailedError
from app.database import get_db
from app.repositories.base import PageResult
from app.schemas.audit import AuditLogRead
from app.schemas.common import Page, PageRequest
from app.services.audit import AuditLogService
from app.services.security import ADMIN_ROLE

router = APIRouter(
    prefix="/audit-logs",
    tags=["audit-logs"],
    dependencies=[Depends(require_roles(ADMIN_ROLE))],
)


def _service(db: Session = Depends(get_db)) -> AuditLogService:
    return AuditLogService(db)


def _page(result: PageResult) -> Page[AuditLogRead]:
    return Page[AuditLogRead](
        content=[AuditLogRead.model_validate(r) for r in result.items],
        total_elements=result.total,
        total_pages=result.total_pages,
        page=result.page,
        size=result.size,
    )


@router.get("", response_model=Page[AuditLogRead], response_model_exclude_none=True)
def list_audit_logs(
    page: PageRequest = Depends(page_request), service: AuditLogService = Depends(_service)
):
    return _page(service.find_all(page))


@router.get("/search", response_model=Page[AuditLogRead], response_model_exclude_none=True)
def search_audit_logs(
    query: str | None = Query(None),
    page: PageRequest = Depends(page_request),
    service: AuditLogService = Depends(_service),
):
    return _page(service.search(query, page))


@router.get("/failed", response_model=Page[AuditLogRead], response_model_exclude_none=True)
def failed_operations(
    page: PageRequest = Depends(page_request), service: AuditLogService = Depends(_service)
):
    return _page(service.failed(page))


@router.get("/range", response_model=Page[AuditLogRead], response_model_exclude_none=True)
def audit_logs_in_range(
    start: datetime = Query(...),
    end: datetime = Query(...),
    page: PageRequest = Depends(page_request),
    service: AuditLogService = Depends(_service),
):
    if end < start:
        raise ValidationFailedError.single("end", "End must not be before start")
    return _page(service.by_date_range(start, end, page))


@router.get(
    "/entity/{entity_name}/{entity_id}",
    response_model=List[AuditLogRead],
    response_model_exclude_none=True,
)
def entity_history(
    entity_name: str, entity_id: int, service: AuditLogService = Depends(_service)
):
    return service.entity_history(entity_name, entity_id)


@router.get("/user/{username}", response_model=Page[AuditLogRead], response_model_exclude_none=True)
def user_history(
    username: str,
    page: PageRequest = Depends(page_request),
    service: AuditLogService = Depends(_service),
):
    return _page(service.user_history(username, page))


@router.get("/summary/{username}", response_model=Dict[str, int])
def activity_summary(
    username: str,
    days: int = Query(30, ge=1, le=3650),
    service: AuditLogService = Depends(_service),
):
    return service.activity_summary(username, days)


@router.get("/{audit_id}", response_model=AuditLogRead, response_model_exclude_none=True)
def get_audit_log(audit_id: int, service: AuditLogService = Depends(_service)):
    return service.get(audit_id)
