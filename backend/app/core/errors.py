"""Typed application errors.

Services raise these; the HTTP boundary (app/core/observability.py) is the only
place that turns them into responses, using `status_code` and `error_code`.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class AppError(Exception):
    status_code: int = 400
    error_code: str = "BUSINESS_VALIDATION_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(AppError):
    status_code = 404
    error_code = "RESOURCE_NOT_FOUND"

    @classmethod
    def for_id(cls, label: str, entity_id: Any) -> "NotFoundError":
        return cls(f"{label} with ID {entity_id} not found")


class ValidationFailedError(AppError):
    error_code = "VALIDATION_ERROR"

    def __init__(self, field_errors: Dict[str, str], message: Optional[str] = None):
        self.field_errors = dict(field_errors)
        if message is None:
            message = "; ".join(self.field_errors.values()) or "Validation failed"
        super().__init__(message, details={"fieldErrors": self.field_errors})

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationFailedError":
        return cls({field: message})


class ConflictError(AppError):
    error_code = "DUPLICATE_RESOURCE"


class RelationMissingError(AppError):
    error_code = "RELATION_MISSING"


class DependentsExistError(AppError):
    error_code = "DEPENDENTS_EXIST"


class BusinessRuleError(AppError):
    error_code = "BUSINESS_VALIDATION_ERROR"


class AuthenticationError(AppError):
    status_code = 401
    error_code = "AUTHENTICATION_FAILED"


class FileStorageError(AppError):
    status_code = 500
    error_code = "FILE_STORAGE_ERROR"
