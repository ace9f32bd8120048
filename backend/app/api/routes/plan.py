from app.api.crud import build_crud_router
from app.schemas.plan import (
    BudgetModificationCreate,
    BudgetModificationRead,
    BudgetTypeCreate,
    BudgetTypeRead,
    DomainCreate,
    DomainRead,
    FinancialOperationCreate,
    FinancialOperationRead,
    ItemCreate,
    ItemDistributionCreate,
    ItemDistributionRead,
    ItemRead,
    ItemStatusCreate,
    ItemStatusRead,
    PlannedItemCreate,
    PlannedItemRead,
    RubricCreate,
    RubricRead,
)
from app.services.plan import (
    BudgetModificationService,
    BudgetTypeService,
    DomainService,
    FinancialOperationService,
    ItemDistributionService,
    ItemService,
    ItemStatusService,
    PlannedItemService,
    RubricService,
)

routers = [
    build_crud_router(
        prefix="/budget-types",
        tag="budget-types",
        service_class=BudgetTypeService,
        create_schema=BudgetTypeCreate,
        read_schema=BudgetTypeRead,
    ),
    build_crud_router(
        prefix="/domains",
        tag="domains",
        service_class=DomainService,
        create_schema=DomainCreate,
        read_schema=DomainRead,
    ),
    build_crud_router(
        prefix="/rubrics",
        tag="rubrics",
        service_class=RubricService,
        create_schema=RubricCreate,
        read_schema=RubricRead,
        parents={"domain": "domain_id"},
        parent_counts=True,
    ),
    build_crud_router(
        prefix="/items",
        tag="items",
        service_class=ItemService,
        create_schema=ItemCreate,
        read_schema=ItemRead,
        parents={"rubric": "rubric_id"},
        parent_counts=True,
    ),
    build_crud_router(
        prefix="/item-statuses",
        tag="item-statuses",
        service_class=ItemStatusService,
        create_schema=ItemStatusCreate,
        read_schema=ItemStatusRead,
    ),
    build_crud_router(
        prefix="/financial-operations",
        tag="financial-operations",
        service_class=FinancialOperationService,
        create_schema=FinancialOperationCreate,
        read_schema=FinancialOperationRead,
        parents={"budget-type": "budget_type_id"},
    ),
    build_crud_router(
        prefix="/budget-modifications",
        tag="budget-modifications",
        service_class=BudgetModificationService,
        create_schema=BudgetModificationCreate,
        read_schema=BudgetModificationRead,
    ),
    build_crud_router(
        prefix="/planned-items",
        tag="planned-items",
        service_class=PlannedItemService,
        create_schema=PlannedItemCreate,
        read_schema=PlannedItemRead,
        parents={"financial-operation": "financial_operation_id", "item": "item_id"},
        parent_counts=True,
    ),
    build_crud_router(
        prefix="/item-distributions",
        tag="item-distributions",
        service_class=ItemDistributionService,
        create_schema=ItemDistributionCreate,
        read_schema=ItemDistributionRead,
        parents={"planned-item": "planned_item_id", "structure": "structure_id"},
    ),
]
