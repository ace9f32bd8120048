"""Generic data access over a single mapped model.

Services build one `Repository` per model they touch; nothing here knows about
validation or DTOs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Query, Session

from app.core.classifier import KeywordClassifier
from app.core.errors import NotFoundError
from app.schemas.common import PageRequest

ModelT = TypeVar("ModelT")


@dataclass
class PageResult(Generic[ModelT]):
    items: List[ModelT] = field(default_factory=list)
    total: int = 0
    page: int = 0
    size: int = 20

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total / self.size)


class Repository(Generic[ModelT]):
    def __init__(
        self,
        db: Session,
        model: Type[ModelT],
        label: Optional[str] = None,
        search_fields: Sequence[str] = (),
        order_by: Optional[str] = None,
    ):
        self.db = db
        self.model = model
        self.label = label or model.__name__
        self.columns = {c.key: c for c in model.__table__.columns}
        self.search_fields = tuple(search_fields) or tuple(
            k
            for k in ("designation_ar", "designation_en", "designation_fr")
            if k in self.columns
        )
        if order_by is None:
            order_by = "designation_fr" if "designation_fr" in self.columns else "id"
        self.order_by = order_by

    def query(self) -> Query:
        return self.db.query(self.model)

    def get(self, entity_id: Any) -> Optional[ModelT]:
        if entity_id is None:
            return None
        return self.db.get(self.model, entity_id)

    def get_or_raise(self, entity_id: Any) -> ModelT:
        entity = self.get(entity_id)
        if entity is None:
            raise NotFoundError.for_id(self.label, entity_id)
        return entity

    def exists_by(self, **values: Any) -> bool:
        q = self.query().filter_by(**values)
        return bool(self.db.query(q.exists()).scalar())

    def exists_by_excluding(self, entity_id: Any, **values: Any) -> bool:
        q = self.query().filter_by(**values).filter(self.model.id != entity_id)
        return bool(self.db.query(q.exists()).scalar())

    def find_by_ids(self, ids: Iterable[int]) -> List[ModelT]:
        wanted = list(dict.fromkeys(ids))
        if not wanted:
            return []
        return self.query().filter(self.model.id.in_(wanted)).all()

    def _ordered(self, query: Query, page_request: Optional[PageRequest] = None) -> Query:
        key = self.order_by
        descending = False
        if page_request is not None:
            if page_request.sort_by and page_request.sort_by in self.columns:
                key = page_request.sort_by
            descending = page_request.descending
        column = self.columns[key]
        primary = column.desc() if descending else column.asc()
        # id tie-break keeps page boundaries stable when the sort key repeats.
        return query.order_by(primary, self.model.id.asc())

    def paginate(self, query: Query, page_request: PageRequest) -> PageResult[ModelT]:
        total = query.order_by(None).count()
        items = (
            self._ordered(query, page_request)
            .offset(page_request.offset)
            .limit(page_request.size)
            .all()
        )
        return PageResult(items=items, total=total, page=page_request.page, size=page_request.size)

    def find_all(self, page_request: PageRequest) -> PageResult[ModelT]:
        return self.paginate(self.query(), page_request)

    def list_all(self) -> List[ModelT]:
        return self._ordered(self.query()).all()

    def list_query(self, query: Query) -> List[ModelT]:
        return self._ordered(query).all()

    def search(self, term: Optional[str], page_request: PageRequest) -> PageResult[ModelT]:
        term = (term or "").strip()
        if not term:
            return self.find_all(page_request)
        like_any = f"%{term}%"
        clauses = []
        for name in self.search_fields:
            column = self.columns[name]
            if isinstance(column.type, String):
                clauses.append(column.ilike(like_any))
            else:
                clauses.append(cast(column, String).ilike(like_any))
        return self.paginate(self.query().filter(or_(*clauses)), page_request)

    def find_by(self, column: str, value: Any, page_request: PageRequest) -> PageResult[ModelT]:
        return self.paginate(self.query().filter(self.columns[column] == value), page_request)

    def count_by(self, column: str, value: Any) -> int:
        return int(self.query().filter(self.columns[column] == value).count())

    def exists_by_parent(self, column: str, value: Any) -> bool:
        return self.exists_by(**{column: value})

    def classify(
        self, classifier: KeywordClassifier, category: str, page_request: PageRequest
    ) -> PageResult[ModelT]:
        rows = [r for r in self.list_all() if classifier.classify_row(r) == category]
        start = page_request.offset
        return PageResult(
            items=rows[start : start + page_request.size],
            total=len(rows),
            page=page_request.page,
            size=page_request.size,
        )

    def category_counts(self, classifier: KeywordClassifier) -> dict[str, int]:
        return classifier.counts(self.list_all())
