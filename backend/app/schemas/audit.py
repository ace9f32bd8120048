from datetime import datetime
from typing import Optional

from app.models.audit import AuditAction, AuditStatus
from app.schemas.common import ReadModel


class AuditLogRead(ReadModel):
    id: int
    entity_name: Optional[str] = None
    entity_id: Optional[int] = None
    action: AuditAction
    username: Optional[str] = None
    timestamp: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    request_id: Optional[str] = None
    method_name: Optional[str] = None
    module: Optional[str] = None
    description: Optional[str] = None
    old_values: Optional[str] = None
    new_values: Optional[str] = None
    parameters: Optional[str] = None
    status: AuditStatus
    error_message: Optional[str] = None
    duration_ms: Optional[int] = None
