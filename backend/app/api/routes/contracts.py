from fastapi import Depends

from app.api.crud import build_crud_router
from app.schemas.contract import (
    ContractCreate,
    ContractItemCreate,
    ContractItemRead,
    ContractItemTotals,
    ContractPhaseCreate,
    ContractPhaseRead,
    ContractRead,
    ContractStepCreate,
    ContractStepRead,
    ContractTypeCreate,
    ContractTypeRead,
)
from app.services.contract import (
    ContractItemService,
    ContractPhaseService,
    ContractService,
    ContractStepService,
    ContractTypeService,
)


def _contract_item_routes(router, get_service, reader):
    @router.get(
        "/by-contract/{contract_id}/totals",
        response_model=ContractItemTotals,
        dependencies=[reader],
    )
    def totals(contract_id: int, service=Depends(get_service)):
        return service.totals(contract_id)


routers = [
    build_crud_router(
        prefix="/contract-types",
        tag="contract-types",
        service_class=ContractTypeService,
        create_schema=ContractTypeCreate,
        read_schema=ContractTypeRead,
    ),
    build_crud_router(
        prefix="/contract-phases",
        tag="contract-phases",
        service_class=ContractPhaseService,
        create_schema=ContractPhaseCreate,
        read_schema=ContractPhaseRead,
        categories=True,
    ),
    build_crud_router(
        prefix="/contract-steps",
        tag="contract-steps",
        service_class=ContractStepService,
        create_schema=ContractStepCreate,
        read_schema=ContractStepRead,
        parents={"phase": "contract_phase_id"},
        parent_counts=True,
    ),
    build_crud_router(
        prefix="/contracts",
        tag="contracts",
        service_class=ContractService,
        create_schema=ContractCreate,
        read_schema=ContractRead,
        parents={
            "provider": "provider_id",
            "consultation": "consultation_id",
            "parent": "contract_up_id",
        },
        parent_counts=True,
    ),
    build_crud_router(
        prefix="/contract-items",
        tag="contract-items",
        service_class=ContractItemService,
        create_schema=ContractItemCreate,
        read_schema=ContractItemRead,
        parents={"contract": "contract_id"},
        parent_counts=True,
        extra_routes=_contract_item_routes,
    ),
]
