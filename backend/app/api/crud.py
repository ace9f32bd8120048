"""Standard REST surface for a CrudService.

Every resource gets the same shape:

    POST   /{resource}                  create (201)
    GET    /{resource}                  page
    GET    /{resource}/search?query=    page
    GET    /{resource}/{id}             one, optionally ?withRelations=true
    PUT    /{resource}/{id}             full replace
    PATCH  /{resource}/{id}             partial update
    DELETE /{resource}/{id}             204

plus optional /by-{parent}/{id}[/count] and /categories, /category/{label}.
Resource-specific reads are added through `extra_routes`, ahead of /{id}.
"""

from typing import Callable, Dict, Mapping, Optional, Sequence, Type

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.deps import get_actor, page_request, require_roles
from app.database import get_db
from app.schemas.common import CountRead, Page, PageRequest
from app.services.audit import AuditActor
from app.services.crud import CrudService


def service_dependency(service_class: Type[CrudService]):
    def dependency(
        db: Session = Depends(get_db), actor: AuditActor = Depends(get_actor)
    ) -> CrudService:
        return service_class(db, actor)

    return dependency


def _add_parent_routes(
    router: APIRouter,
    name: str,
    column: str,
    read_schema: Type[BaseModel],
    get_service,
    reader,
    with_count: bool,
) -> None:
    @router.get(
        f"/by-{name}/{{parent_id}}",
        response_model=Page[read_schema],
        response_model_exclude_none=True,
        dependencies=[reader],
        name=f"list_by_{name.replace('-', '_')}",
    )
    def list_by_parent(
        parent_id: int,
        page: PageRequest = Depends(page_request),
        service: CrudService = Depends(get_service),
    ):
        return service.find_by_parent(column, parent_id, page)

    if with_count:

        @router.get(
            f"/by-{name}/{{parent_id}}/count",
            response_model=CountRead,
            dependencies=[reader],
            name=f"count_by_{name.replace('-', '_')}",
        )
        def count_by_parent(parent_id: int, service: CrudService = Depends(get_service)):
            return CountRead(count=service.count_by_parent(column, parent_id))


def build_crud_router(
    *,
    prefix: str,
    tag: str,
    service_class: Type[CrudService],
    create_schema: Type[BaseModel],
    read_schema: Type[BaseModel],
    read_roles: Sequence[str] = (),
    write_roles: Sequence[str] = (),
    parents: Optional[Mapping[str, str]] = None,
    parent_counts: bool = False,
    categories: bool = False,
    extra_routes: Optional[Callable[[APIRouter, Callable, object], None]] = None,
) -> APIRouter:
    """Build the router; `parents` maps a path segment (e.g. "phase") to the fk column.

    `extra_routes(router, get_service, reader)` registers additional endpoints.
    """

    router = APIRouter(prefix=prefix, tags=[tag])
    get_service = service_dependency(service_class)
    reader = Depends(require_roles(*read_roles))
    writer = Depends(require_roles(*write_roles))

    @router.post(
        "",
        response_model=read_schema,
        response_model_exclude_none=True,
        status_code=status.HTTP_201_CREATED,
        dependencies=[writer],
    )
    def create(payload: create_schema, service: CrudService = Depends(get_service)):
        return service.create(payload)

    @router.get(
        "",
        response_model=Page[read_schema],
        response_model_exclude_none=True,
        dependencies=[reader],
    )
    def find_all(
        page: PageRequest = Depends(page_request),
        service: CrudService = Depends(get_service),
    ):
        return service.find_all(page)

    @router.get(
        "/search",
        response_model=Page[read_schema],
        response_model_exclude_none=True,
        dependencies=[reader],
    )
    def search(
        query: Optional[str] = Query(None, description="Case-insensitive substring."),
        page: PageRequest = Depends(page_request),
        service: CrudService = Depends(get_service),
    ):
        return service.search(query, page)

    if categories:

        @router.get("/categories", response_model=Dict[str, int], dependencies=[reader])
        def category_counts(service: CrudService = Depends(get_service)):
            return service.categories()

        @router.get(
            "/category/{category}",
            response_model=Page[read_schema],
            response_model_exclude_none=True,
            dependencies=[reader],
        )
        def by_category(
            category: str,
            page: PageRequest = Depends(page_request),
            service: CrudService = Depends(get_service),
        ):
            return service.by_category(category.upper(), page)

    for name, column in (parents or {}).items():
        _add_parent_routes(router, name, column, read_schema, get_service, reader, parent_counts)

    if extra_routes is not None:
        extra_routes(router, get_service, reader)

    @router.get(
        "/{entity_id}",
        response_model=read_schema,
        response_model_exclude_none=True,
        dependencies=[reader],
    )
    def get_one(
        entity_id: int,
        with_relations: bool = Query(False, alias="withRelations"),
        service: CrudService = Depends(get_service),
    ):
        return service.get(entity_id, with_relations=with_relations)

    @router.put(
        "/{entity_id}",
        response_model=read_schema,
        response_model_exclude_none=True,
        dependencies=[writer],
    )
    def update(entity_id: int, payload: create_schema, service: CrudService = Depends(get_service)):
        return service.update(entity_id, payload)

    @router.patch(
        "/{entity_id}",
        response_model=read_schema,
        response_model_exclude_none=True,
        dependencies=[writer],
    )
    def patch(entity_id: int, payload: create_schema, service: CrudService = Depends(get_service)):
        return service.patch(entity_id, payload)

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[writer])
    def delete(entity_id: int, service: CrudService = Depends(get_service)):
        service.delete(entity_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
