from app.api.crud import build_crud_router
from app.schemas.communication import (
    MailCreate,
    MailNatureCreate,
    MailNatureRead,
    MailRead,
    MailTypeCreate,
    MailTypeRead,
)
from app.services.communication import MailNatureService, MailService, MailTypeService

routers = [
    build_crud_router(
        prefix="/mail-natures",
        tag="mail-natures",
        service_class=MailNatureService,
        create_schema=MailNatureCreate,
        read_schema=MailNatureRead,
    ),
    build_crud_router(
        prefix="/mail-types",
        tag="mail-types",
        service_class=MailTypeService,
        create_schema=MailTypeCreate,
        read_schema=MailTypeRead,
    ),
    build_crud_router(
        prefix="/mails",
        tag="mails",
        service_class=MailService,
        create_schema=MailCreate,
        read_schema=MailRead,
        parents={"structure": "structure_id"},
    ),
]
