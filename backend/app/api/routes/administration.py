from app.api.crud import build_crud_router
from app.schemas.administration import (
    CountryCreate,
    CountryRead,
    StateCreate,
    StateRead,
    StructureCreate,
    StructureRead,
    StructureTypeCreate,
    StructureTypeRead,
)
from app.services.administration import (
    CountryService,
    StateService,
    StructureService,
    StructureTypeService,
)

routers = [
    build_crud_router(
        prefix="/countries",
        tag="countries",
        service_class=CountryService,
        create_schema=CountryCreate,
        read_schema=CountryRead,
    ),
    build_crud_router(
        prefix="/states",
        tag="states",
        service_class=StateService,
        create_schema=StateCreate,
        read_schema=StateRead,
    ),
    build_crud_router(
        prefix="/structure-types",
        tag="structure-types",
        service_class=StructureTypeService,
        create_schema=StructureTypeCreate,
        read_schema=StructureTypeRead,
    ),
    build_crud_router(
        prefix="/structures",
        tag="structures",
        service_class=StructureService,
        create_schema=StructureCreate,
        read_schema=StructureRead,
        parents={"type": "structure_type_id", "parent": "structure_up_id"},
    ),
]
