import functools
import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app import models
from app.repositories.base import PageResult, Repository
from app.schemas.common import PageRequest

logger = logging.getLogger("raas.audit")


@dataclass(frozen=True)
class AuditActor:
    """Who is acting, and from where. Built once per request in app.api.deps."""

    username: Optional[str] = None
    ip: Optional[str] = None
    user_agent: Optional[str] = None
    request_id: Optional[str] = None


SYSTEM_ACTOR = AuditActor(username="system")


_REDACTED_KEYS = ("password", "token", "secret")


def _redact(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return _redact(value.model_dump())
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    if isinstance(value, dict):
        return {
            k: "***" if any(s in str(k).lower() for s in _REDACTED_KEYS) else _redact(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_redact(v) for v in value]
    return value


def _to_json(value: Any) -> Optional[str]:
    if value is None:
        return None
    try:
        return json.dumps(jsonable_encoder(_redact(value)), ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return json.dumps(str(value))


def audit_event(
    action: models.AuditAction,
    actor: Optional[AuditActor] = None,
    *,
    bind=None,
    entity_name: Optional[str] = None,
    entity_id: Optional[int] = None,
    method_name: Optional[str] = None,
    module: Optional[str] = None,
    description: Optional[str] = None,
    old_values: Any = None,
    new_values: Any = None,
    parameters: Any = None,
    status: models.AuditStatus = models.AuditStatus.SUCCESS,
    error_message: Optional[str] = None,
    duration_ms: Optional[int] = None,
) -> Optional[int]:
    """
    Persist one audit record in its own session; if the DB write fails, fall back to the log.

    The caller's transaction is never touched, so a failed business operation still leaves
    its audit trail. Returns the created audit log id when available.
    """
    actor = actor or SYSTEM_ACTOR
    event = {
        "action": action.value,
        "entity_name": entity_name,
        "entity_id": entity_id,
        "username": actor.username,
        "status": status.value,
    }

    if bind is None:
        from app.database import engine

        bind = engine

    session = Session(bind=bind, future=True)
    try:
        log = models.AuditLog(
            entity_name=entity_name,
            entity_id=entity_id,
            action=action,
            username=actor.username,
            timestamp=datetime.now(timezone.utc),
            ip_address=actor.ip,
            user_agent=(actor.user_agent or "")[:256] or None,
            request_id=actor.request_id,
            method_name=method_name,
            module=module,
            description=description,
            old_values=_to_json(old_values),
            new_values=_to_json(new_values),
            parameters=_to_json(parameters),
            status=status,
            error_message=error_message,
            duration_ms=duration_ms,
        )
        session.add(log)
        session.commit()
        return log.id
    except SQLAlchemyError as e:
        session.rollback()
        logger.warning("audit_write_failed", extra={"event": event, "error": str(e)})
        return None
    finally:
        session.close()


def audited(action: models.AuditAction, method_name: Optional[str] = None) -> Callable:
    """Record an audit entry around a service method.

    The wrapped method must live on a service exposing `db`, `actor`, `entity_name`,
    `module` and `snapshot(entity_id)`. For UPDATE/DELETE the first positional
    argument is taken as the entity id. The business outcome (return value or
    exception) is passed through unchanged.
    """

    def decorator(fn: Callable) -> Callable:
        name = method_name or fn.__name__

        @functools.wraps(fn)
        def wrapper(self, *args, **kwargs):
            entity_id = args[0] if args and action != models.AuditAction.CREATE else None
            old_values = None
            if entity_id is not None and action in (
                models.AuditAction.UPDATE,
                models.AuditAction.DELETE,
            ):
                old_values = self.snapshot(entity_id)

            params: Dict[str, Any] = {"args": list(args), "kwargs": kwargs}
            start = time.perf_counter()
            try:
                result = fn(self, *args, **kwargs)
            except Exception as exc:
                audit_event(
                    action,
                    self.actor,
                    bind=self.db.get_bind(),
                    entity_name=self.entity_name,
                    entity_id=entity_id if isinstance(entity_id, int) else None,
                    method_name=name,
                    module=self.module,
                    old_values=old_values,
                    parameters=params,
                    status=models.AuditStatus.FAILED,
                    error_message=getattr(exc, "message", None) or str(exc),
                    duration_ms=int((time.perf_counter() - start) * 1000),
                )
                raise

            new_values = result
            result_id = getattr(result, "id", None)
            if result_id is None and isinstance(result, dict):
                result_id = result.get("id")
            audit_event(
                action,
                self.actor,
                bind=self.db.get_bind(),
                entity_name=self.entity_name,
                entity_id=result_id if result_id is not None else entity_id,
                method_name=name,
                module=self.module,
                old_values=old_values,
                new_values=new_values,
                parameters=params,
                status=models.AuditStatus.SUCCESS,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            return result

        return wrapper

    return decorator


class AuditLogService:
    """Read side of the audit trail."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = Repository(
            db,
            models.AuditLog,
            label="Audit log",
            search_fields=("entity_name", "username", "method_name", "module"),
            order_by="timestamp",
        )

    def _newest_first(self, page_request: PageRequest) -> PageRequest:
        if page_request.sort_by:
            return page_request
        return page_request.model_copy(update={"sort_by": "timestamp", "sort_dir": "desc"})

    def find_all(self, page_request: PageRequest) -> PageResult:
        return self.repo.find_all(self._newest_first(page_request))

    def get(self, audit_id: int) -> models.AuditLog:
        return self.repo.get_or_raise(audit_id)

    def search(self, term: Optional[str], page_request: PageRequest) -> PageResult:
        return self.repo.search(term, self._newest_first(page_request))

    def entity_history(self, entity_name: str, entity_id: int) -> list[models.AuditLog]:
        return (
            self.repo.query()
            .filter(
                models.AuditLog.entity_name == entity_name,
                models.AuditLog.entity_id == entity_id,
            )
            .order_by(models.AuditLog.timestamp.desc(), models.AuditLog.id.desc())
            .all()
        )

    def user_history(self, username: str, page_request: PageRequest) -> PageResult:
        return self.repo.find_by("username", username, self._newest_first(page_request))

    def by_date_range(
        self, start: datetime, end: datetime, page_request: PageRequest
    ) -> PageResult:
        q = self.repo.query().filter(
            models.AuditLog.timestamp >= start, models.AuditLog.timestamp <= end
        )
        return self.repo.paginate(q, self._newest_first(page_request))

    def failed(self, page_request: PageRequest) -> PageResult:
        return self.repo.find_by(
            "status", models.AuditStatus.FAILED, self._newest_first(page_request)
        )

    def activity_summary(self, username: str, days: int = 30) -> Dict[str, int]:
        since = datetime.now(timezone.utc) - timedelta(days=days)
        rows = (
            self.db.query(models.AuditLog.action, func.count(models.AuditLog.id))
            .filter(models.AuditLog.username == username, models.AuditLog.timestamp >= since)
            .group_by(models.AuditLog.action)
            .all()
        )
        return {action.value: int(count) for action, count in rows}
