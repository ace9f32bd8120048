from datetime import date

from sqlalchemy import func

from app import models
from app.core.errors import BusinessRuleError, ValidationFailedError
from app.schemas.plan import (
    BudgetModificationRead,
    BudgetTypeRead,
    DomainRead,
    FinancialOperationRead,
    ItemDistributionRead,
    ItemRead,
    ItemStatusRead,
    PlannedItemRead,
    RubricRead,
)
from app.services.crud import CrudService, Dependent, Reference


def distributed_quantity(db, planned_item_id, exclude_id=None) -> float:
    q = db.query(func.coalesce(func.sum(models.ItemDistribution.quantity), 0.0)).filter(
        models.ItemDistribution.planned_item_id == planned_item_id
    )
    if exclude_id is not None:
        q = q.filter(models.ItemDistribution.id != exclude_id)
    return float(q.scalar() or 0.0)


class BudgetTypeService(CrudService):
    model = models.BudgetType
    read_schema = BudgetTypeRead
    entity_name = "BudgetType"
    label = "Budget type"
    module = "plan"
    fields = (
        "designation_ar",
        "designation_en",
        "designation_fr",
        "acronym_ar",
        "acronym_en",
        "acronym_fr",
    )
    unique = (("designation_fr",), ("acronym_fr",))
    dependents = (
        Dependent(
            models.FinancialOperation,
            "budget_type_id",
            "Cannot delete budget type as it is used by financial operations",
        ),
        Dependent(
            models.Consultation,
            "budget_type_id",
            "Cannot delete budget type as it is used by consultations",
        ),
    )


class DomainService(CrudService):
    model = models.Domain
    read_schema = DomainRead
    entity_name = "Domain"
    label = "Domain"
    module = "plan"
    dependents = (Dependent(models.Rubric, "domain_id", "Cannot delete domain as it has rubrics"),)


class RubricService(CrudService):
    model = models.Rubric
    read_schema = RubricRead
    entity_name = "Rubric"
    label = "Rubric"
    module = "plan"
    references = (Reference("domain_id", models.Domain, "Domain", required=True),)
    dependents = (Dependent(models.Item, "rubric_id", "Cannot delete rubric as it has items"),)
    nested = ("domain",)


class ItemService(CrudService):
    model = models.Item
    read_schema = ItemRead
    entity_name = "Item"
    label = "Item"
    module = "plan"
    references = (Reference("rubric_id", models.Rubric, "Rubric", required=True),)
    dependents = (
        Dependent(models.PlannedItem, "item_id", "Cannot delete item as it has planned items"),
    )
    nested = ("rubric",)


class ItemStatusService(CrudService):
    model = models.ItemStatus
    read_schema = ItemStatusRead
    entity_name = "ItemStatus"
    label = "Item status"
    module = "plan"
    dependents = (
        Dependent(
            models.PlannedItem,
            "item_status_id",
            "Cannot delete item status as it is used by planned items",
        ),
    )


class FinancialOperationService(CrudService):
    model = models.FinancialOperation
    read_schema = FinancialOperationRead
    entity_name = "FinancialOperation"
    label = "Financial operation"
    module = "plan"
    fields = ("operation", "budget_year")
    required = {"operation": "Operation", "budget_year": "Budget year"}
    unique = (("operation",),)
    references = (Reference("budget_type_id", models.BudgetType, "Budget type", required=True),)
    dependents = (
        Dependent(
            models.PlannedItem,
            "financial_operation_id",
            "Cannot delete financial operation as it has planned items",
        ),
    )
    nested = ("budget_type",)
    search_fields = ("operation", "budget_year")
    order_by = "operation"

    def validate(self, state, entity, creating):
        year = str(state["budget_year"]).strip()
        if len(year) != 4 or not year.isdigit():
            raise ValidationFailedError.single("budget_year", "Budget year must have 4 digits")
        upper = date.today().year + 10
        if not 2000 <= int(year) <= upper:
            raise ValidationFailedError.single(
                "budget_year", f"Budget year must be between 2000 and {upper}"
            )
        state["budget_year"] = year


class BudgetModificationService(CrudService):
    model = models.BudgetModification
    read_schema = BudgetModificationRead
    entity_name = "BudgetModification"
    label = "Budget modification"
    module = "plan"
    fields = ("object", "description", "approval_date")
    required = {"object": "Object"}
    unique = (("approval_date", "demande_id"),)
    references = (
        Reference("demande_id", models.Document, "Request document", required=True),
        Reference("response_id", models.Document, "Response document", required=True),
    )
    dependents = (
        Dependent(
            models.PlannedItem,
            "budget_modification_id",
            "Cannot delete budget modification as it is used by planned items",
        ),
    )
    nested = ("demande", "response")
    search_fields = ("object", "description")
    order_by = "approval_date"


class PlannedItemService(CrudService):
    model = models.PlannedItem
    read_schema = PlannedItemRead
    entity_name = "PlannedItem"
    label = "Planned item"
    module = "plan"
    fields = ("designation", "unitair_cost", "planed_quantity", "allocated_amount")
    required = {"designation": "Designation"}
    unique = ()
    references = (
        Reference("item_status_id", models.ItemStatus, "Item status", required=True),
        Reference("item_id", models.Item, "Item", required=True),
        Reference(
            "financial_operation_id", models.FinancialOperation, "Financial operation", required=True
        ),
        Reference("budget_modification_id", models.BudgetModification, "Budget modification"),
    )
    dependents = (
        Dependent(
            models.ItemDistribution,
            "planned_item_id",
            "Cannot delete planned item with existing distributions",
        ),
    )
    nested = ("item_status", "item", "financial_operation", "budget_modification")
    search_fields = ("designation",)
    order_by = "designation"

    def validate(self, state, entity, creating):
        errors = {}
        if state.get("unitair_cost") is not None and state["unitair_cost"] <= 0:
            errors["unitair_cost"] = "Unit cost must be positive"
        if state.get("planed_quantity") is not None and state["planed_quantity"] <= 0:
            errors["planed_quantity"] = "Planned quantity must be positive"
        if state.get("allocated_amount") is not None and state["allocated_amount"] < 0:
            errors["allocated_amount"] = "Allocated amount cannot be negative"
        if errors:
            raise ValidationFailedError(errors)
        if not creating and state.get("planed_quantity") is not None:
            already = distributed_quantity(self.db, entity.id)
            if state["planed_quantity"] < already:
                raise BusinessRuleError(
                    f"Planned quantity cannot be lower than the distributed quantity ({already:g})"
                )

    def extra_read_fields(self, entity):
        return {"distributed_quantity": distributed_quantity(self.db, entity.id)}


class ItemDistributionService(CrudService):
    model = models.ItemDistribution
    read_schema = ItemDistributionRead
    entity_name = "ItemDistribution"
    label = "Item distribution"
    module = "plan"
    fields = ("quantity",)
    required = {"quantity": "Quantity"}
    unique = ()
    references = (
        Reference("planned_item_id", models.PlannedItem, "Planned item", required=True),
        Reference("structure_id", models.Structure, "Structure", required=True),
    )
    nested = ("planned_item", "structure")
    search_fields = ("quantity",)
    order_by = "id"

    def validate(self, state, entity, creating):
        quantity = state["quantity"]
        if quantity <= 0:
            raise ValidationFailedError.single("quantity", "Quantity must be positive")
        planned = self.db.get(models.PlannedItem, state["planned_item_id"])
        if planned is None or planned.planed_quantity is None:
            return
        others = distributed_quantity(
            self.db, planned.id, exclude_id=None if creating else entity.id
        )
        if others + quantity > planned.planed_quantity:
            raise BusinessRuleError(
                f"Total distributed quantity ({others + quantity:g}) exceeds "
                f"planned quantity ({planned.planed_quantity:g})"
            )
