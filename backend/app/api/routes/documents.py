from app.api.crud import build_crud_router
from app.schemas.document import DocumentCreate, DocumentRead, DocumentTypeCreate, DocumentTypeRead
from app.services.document import DocumentService, DocumentTypeService

routers = [
    build_crud_router(
        prefix="/document-types",
        tag="document-types",
        service_class=DocumentTypeService,
        create_schema=DocumentTypeCreate,
        read_schema=DocumentTypeRead,
    ),
    build_crud_router(
        prefix="/documents",
        tag="documents",
        service_class=DocumentService,
        create_schema=DocumentCreate,
        read_schema=DocumentRead,
        parents={"type": "document_type_id"},
    ),
]
