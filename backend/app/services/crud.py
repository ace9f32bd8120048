"""Declarative CRUD service base.

A concrete service declares its model, writable fields, required fields, natural
keys, foreign references, many-to-many collections and delete guards; this base
turns those declarations into validated create/update/patch/delete operations.

Every mutation:
- validates the merged state before touching the entity,
- commits once on success and rolls back on any error,
- is recorded in the audit log (see app.services.audit.audited).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Mapping, Optional, Sequence, Tuple, Type

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app import models
from app.core.classifier import KeywordClassifier
from app.core.errors import (
    ConflictError,
    DependentsExistError,
    NotFoundError,
    RelationMissingError,
    ValidationFailedError,
)
from app.repositories.base import PageResult, Repository
from app.schemas.common import Page, PageRequest
from app.services.audit import SYSTEM_ACTOR, AuditActor, audited

logger = logging.getLogger("raas")

FIELD_LABELS: Dict[str, str] = {
    "designation_ar": "Arabic designation",
    "designation_en": "English designation",
    "designation_fr": "French designation",
    "designation_lt": "Latin designation",
    "acronym_ar": "Arabic acronym",
    "acronym_en": "English acronym",
    "acronym_fr": "French acronym",
    "acronym_lt": "Latin acronym",
    "code_ar": "Arabic code",
    "code_lt": "Latin code",
}


@dataclass(frozen=True)
class Reference:
    """A many-to-one link stored in `field` and resolved against `model` by id."""

    field: str
    model: Type[Any]
    label: str
    required: bool = False


@dataclass(frozen=True)
class Collection:
    """A many-to-many link: `field` carries ids on the wire, `attr` holds the objects."""

    field: str
    attr: str
    model: Type[Any]
    message: str


@dataclass(frozen=True)
class Dependent:
    model: Type[Any]
    column: str
    message: str


def column_values(entity: Any) -> Dict[str, Any]:
    return {c.key: getattr(entity, c.key) for c in entity.__table__.columns}


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# model -> service, filled as concrete services are defined
_SERVICES: Dict[Type[Any], Type["CrudService"]] = {}


class CrudService:
    model: ClassVar[Type[Any]]
    read_schema: ClassVar[Type[BaseModel]]
    entity_name: ClassVar[str]
    label: ClassVar[str]
    module: ClassVar[str] = "core"

    fields: ClassVar[Tuple[str, ...]] = ("designation_ar", "designation_en", "designation_fr")
    required: ClassVar[Mapping[str, str]] = {"designation_fr": "French designation"}
    unique: ClassVar[Tuple[Tuple[str, ...], ...]] = (("designation_fr",),)
    references: ClassVar[Tuple[Reference, ...]] = ()
    collections: ClassVar[Tuple[Collection, ...]] = ()
    dependents: ClassVar[Tuple[Dependent, ...]] = ()
    nested: ClassVar[Tuple[str, ...]] = ()
    search_fields: ClassVar[Sequence[str]] = ()
    order_by: ClassVar[Optional[str]] = None
    classifier: ClassVar[Optional[KeywordClassifier]] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "model" in cls.__dict__:
            _SERVICES.setdefault(cls.model, cls)

    def __init__(self, db: Session, actor: Optional[AuditActor] = None):
        self.db = db
        self.actor = actor or SYSTEM_ACTOR
        self.incoming: Dict[str, Any] = {}
        self.repo = Repository(
            db,
            self.model,
            label=self.label,
            search_fields=self.search_fields,
            order_by=self.order_by,
        )

    def repo_for(self, model: Type[Any]) -> Repository:
        return Repository(self.db, model)

    # -- hooks -----------------------------------------------------------------

    def prepare(self, state: Dict[str, Any], entity: Any, creating: bool) -> None:
        """Fill server-side defaults into `state` before validation."""

    def validate(self, state: Dict[str, Any], entity: Any, creating: bool) -> None:
        """Entity-specific rules, run after required-field checks.

        `state` is the merged scalar and foreign-key state; the raw payload,
        collections included, is available as `self.incoming`.
        """

    def before_delete(self, entity: Any) -> None:
        pass

    def after_delete(self, values: Dict[str, Any]) -> None:
        """Runs once the delete is committed, with the column values of the removed row."""

    def extra_read_fields(self, entity: Any) -> Dict[str, Any]:
        return {}

    # -- conversion --------------------------------------------------------------

    def to_read(self, entity: Any, with_relations: bool = False) -> BaseModel:
        data = column_values(entity)
        for c in self.collections:
            data[c.field] = sorted(o.id for o in getattr(entity, c.attr))
        if with_relations:
            for attr in self.nested:
                related = getattr(entity, attr)
                data[attr] = self.nested_view(related) if related is not None else None
        data.update(self.extra_read_fields(entity))
        return self.read_schema.model_validate(data)

    def nested_view(self, related: Any) -> Dict[str, Any]:
        service_class = _SERVICES.get(type(related))
        if service_class is None:
            return column_values(related)
        return service_class(self.db, self.actor).to_read(related).model_dump()

    def to_page(self, result: PageResult) -> Page:
        return Page(
            content=[self.to_read(e) for e in result.items],
            total_elements=result.total,
            total_pages=result.total_pages,
            page=result.page,
            size=result.size,
        )

    def snapshot(self, entity_id: Any) -> Optional[Dict[str, Any]]:
        try:
            entity = self.repo.get(entity_id)
        except SQLAlchemyError:
            return None
        return column_values(entity) if entity is not None else None

    # -- reads -------------------------------------------------------------------

    def get_entity(self, entity_id: int) -> Any:
        return self.repo.get_or_raise(entity_id)

    def get(self, entity_id: int, with_relations: bool = False) -> BaseModel:
        return self.to_read(self.get_entity(entity_id), with_relations=with_relations)

    def find_all(self, page_request: PageRequest) -> Page:
        return self.to_page(self.repo.find_all(page_request))

    def search(self, term: Optional[str], page_request: PageRequest) -> Page:
        return self.to_page(self.repo.search(term, page_request))

    def find_by_parent(self, column: str, parent_id: int, page_request: PageRequest) -> Page:
        return self.to_page(self.repo.find_by(column, parent_id, page_request))

    def count_by_parent(self, column: str, parent_id: int) -> int:
        return self.repo.count_by(column, parent_id)

    def categories(self) -> Dict[str, int]:
        if self.classifier is None:
            return {}
        return self.repo.category_counts(self.classifier)

    def by_category(self, category: str, page_request: PageRequest) -> Page:
        if self.classifier is None or category not in self.classifier.labels:
            raise NotFoundError(f"Unknown category '{category}'")
        return self.to_page(self.repo.classify(self.classifier, category, page_request))

    # -- writes ------------------------------------------------------------------

    @audited(models.AuditAction.CREATE)
    def create(self, payload: BaseModel | Dict[str, Any]) -> BaseModel:
        entity = self.model()
        self._apply(entity, self._payload(payload, partial=False), creating=True)
        self.db.add(entity)
        self._commit()
        self.db.refresh(entity)
        logger.info("entity_created", extra={"entity": self.entity_name, "id": entity.id})
        return self.to_read(entity)

    @audited(models.AuditAction.UPDATE)
    def update(self, entity_id: int, payload: BaseModel | Dict[str, Any]) -> BaseModel:
        entity = self.get_entity(entity_id)
        self._apply(entity, self._payload(payload, partial=False), creating=False)
        self._commit()
        self.db.refresh(entity)
        logger.info("entity_updated", extra={"entity": self.entity_name, "id": entity.id})
        return self.to_read(entity)

    @audited(models.AuditAction.UPDATE, method_name="patch")
    def patch(self, entity_id: int, payload: BaseModel | Dict[str, Any]) -> BaseModel:
        entity = self.get_entity(entity_id)
        self._apply(entity, self._payload(payload, partial=True), creating=False)
        self._commit()
        self.db.refresh(entity)
        logger.info("entity_patched", extra={"entity": self.entity_name, "id": entity.id})
        return self.to_read(entity)

    @audited(models.AuditAction.DELETE)
    def delete(self, entity_id: int) -> None:
        entity = self.get_entity(entity_id)
        for dep in self.dependents:
            if self.repo_for(dep.model).exists_by(**{dep.column: entity.id}):
                raise DependentsExistError(dep.message)
        self.before_delete(entity)
        values = column_values(entity)
        self.db.delete(entity)
        self._commit()
        self.after_delete(values)
        logger.info("entity_deleted", extra={"entity": self.entity_name, "id": entity_id})

    # -- internals ---------------------------------------------------------------

    def _payload(self, payload: BaseModel | Dict[str, Any], partial: bool) -> Dict[str, Any]:
        if isinstance(payload, BaseModel):
            return payload.model_dump(exclude_unset=partial)
        return dict(payload)

    def _writable(self) -> Tuple[str, ...]:
        return self.fields + tuple(r.field for r in self.references)

    def _current_state(self, entity: Any) -> Dict[str, Any]:
        return {k: getattr(entity, k, None) for k in self._writable()}

    def _apply(self, entity: Any, data: Dict[str, Any], creating: bool) -> None:
        self.incoming = data
        try:
            state = self._current_state(entity)
            state.update({k: v for k, v in data.items() if k in state})
            self.prepare(state, entity, creating)
            self._check_required(state)
            self.validate(state, entity, creating)
            self._check_unique(state, None if creating else entity.id)
            self._check_references(state, entity, creating)
            resolved = self._resolve_collections(data, creating)

            for key, value in state.items():
                setattr(entity, key, value)
            for attr, objs in resolved.items():
                setattr(entity, attr, objs)
        except Exception:
            self.db.rollback()
            raise

    def _check_required(self, state: Dict[str, Any]) -> None:
        errors: Dict[str, str] = {}
        for name, label in self.required.items():
            if is_blank(state.get(name)):
                errors[name] = f"{label} is required"
        for ref in self.references:
            if ref.required and state.get(ref.field) is None:
                errors.setdefault(ref.field, f"{ref.label} is required")
        if errors:
            raise ValidationFailedError(errors)

    def _field_label(self, name: str) -> str:
        return FIELD_LABELS.get(name, name.replace("_", " "))

    def _check_unique(self, state: Dict[str, Any], entity_id: Optional[int]) -> None:
        for key in self.unique:
            values = {k: state.get(k) for k in key}
            if any(is_blank(v) for v in values.values()):
                continue
            if entity_id is None:
                taken = self.repo.exists_by(**values)
            else:
                taken = self.repo.exists_by_excluding(entity_id, **values)
            if not taken:
                continue
            described = " and ".join(f"{self._field_label(k)} '{v}'" for k, v in values.items())
            if entity_id is None:
                message = f"{self.label} with {described} already exists"
            else:
                message = f"Another {self.label.lower()} with {described} already exists"
            raise ConflictError(message, details={"fields": list(key)})

    def _check_references(self, state: Dict[str, Any], entity: Any, creating: bool) -> None:
        for ref in self.references:
            new_id = state.get(ref.field)
            if new_id is None:
                continue
            if not creating and new_id == getattr(entity, ref.field, None):
                continue
            if self.db.get(ref.model, new_id) is None:
                raise RelationMissingError(
                    f"{ref.label} with ID {new_id} not found",
                    details={"field": ref.field, "id": new_id},
                )

    def _resolve_collections(self, data: Dict[str, Any], creating: bool) -> Dict[str, list]:
        """Resolve `*_ids` lists present in `data`.

        An absent or null list leaves the current links untouched on update,
        for PUT as well as PATCH; an empty list clears them.
        """
        resolved: Dict[str, list] = {}
        for col in self.collections:
            ids = data.get(col.field)
            if ids is None:
                if creating:
                    resolved[col.attr] = []
                continue
            wanted = set(ids)
            objs = self.repo_for(col.model).find_by_ids(wanted)
            if len(objs) != len(wanted):
                missing = sorted(wanted - {o.id for o in objs})
                raise RelationMissingError(col.message, details={"field": col.field, "ids": missing})
            resolved[col.attr] = objs
        return resolved

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(
                "integrity_error",
                extra={"entity": self.entity_name, "error": str(getattr(exc, "orig", exc))},
            )
            raise ConflictError(
                f"{self.label} violates a data integrity constraint"
            ) from exc
        except SQLAlchemyError:
            self.db.rollback()
            raise
