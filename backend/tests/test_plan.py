from datetime import date

import pytest

from app import models
from app.core.errors import BusinessRuleError, ValidationFailedError
from app.schemas.plan import (
    FinancialOperationCreate,
    ItemDistributionCreate,
    PlannedItemCreate,
)
from app.services.plan import (
    FinancialOperationService,
    ItemDistributionService,
    PlannedItemService,
)


@pytest.fixture
def plan_refs(db_session):
    budget_type = models.BudgetType(designation_fr="Fonctionnement", acronym_fr="FCT")
    domain = models.Domain(designation_fr="Informatique")
    item_status = models.ItemStatus(designation_fr="Planifié")
    structure_type = models.StructureType(designation_fr="Direction")
    db_session.add_all([budget_type, domain, item_status, structure_type])
    db_session.flush()
    rubric = models.Rubric(designation_fr="Matériel", domain_id=domain.id)
    db_session.add(rubric)
    db_session.flush()
    item = models.Item(designation_fr="Ordinateurs portables", rubric_id=rubric.id)
    operation = models.FinancialOperation(
        operation="OP-2026-01", budget_year="2026", budget_type_id=budget_type.id
    )
    north = models.Structure(designation_fr="Direction Nord", structure_type_id=structure_type.id)
    south = models.Structure(designation_fr="Direction Sud", structure_type_id=structure_type.id)
    db_session.add_all([item, operation, north, south])
    db_session.commit()
    return {
        "budget_type": budget_type.id,
        "item": item.id,
        "item_status": item_status.id,
        "operation": operation.id,
        "north": north.id,
        "south": south.id,
    }


def _planned(db, refs, quantity=10):
    return PlannedItemService(db).create(
        PlannedItemCreate(
            designation="Laptops",
            unitair_cost=1200,
            planed_quantity=quantity,
            item_status_id=refs["item_status"],
            item_id=refs["item"],
            financial_operation_id=refs["operation"],
        )
    )


def test_distributions_up_to_planned_quantity_are_accepted(db_session, plan_refs):
    planned = _planned(db_session, plan_refs)
    service = ItemDistributionService(db_session)
    service.create(
        ItemDistributionCreate(quantity=6, planned_item_id=planned.id, structure_id=plan_refs["north"])
    )
    service.create(
        ItemDistributionCreate(quantity=4, planned_item_id=planned.id, structure_id=plan_refs["south"])
    )

    assert PlannedItemService(db_session).get(planned.id).distributed_quantity == 10


def test_distribution_beyond_planned_quantity_is_rejected(db_session, plan_refs):
    planned = _planned(db_session, plan_refs)
    service = ItemDistributionService(db_session)
    service.create(
        ItemDistributionCreate(quantity=8, planned_item_id=planned.id, structure_id=plan_refs["north"])
    )
    with pytest.raises(BusinessRuleError) as exc:
        service.create(
            ItemDistributionCreate(
                quantity=3, planned_item_id=planned.id, structure_id=plan_refs["south"]
            )
        )
    assert exc.value.message == "Total distributed quantity (11) exceeds planned quantity (10)"
    assert db_session.query(models.ItemDistribution).count() == 1


def test_updating_a_distribution_excludes_its_own_quantity(db_session, plan_refs):
    planned = _planned(db_session, plan_refs)
    service = ItemDistributionService(db_session)
    dist = service.create(
        ItemDistributionCreate(quantity=8, planned_item_id=planned.id, structure_id=plan_refs["north"])
    )
    updated = service.patch(dist.id, ItemDistributionCreate(quantity=10))
    assert updated.quantity == 10


def test_planned_quantity_cannot_drop_below_distributed(db_session, plan_refs):
    planned = _planned(db_session, plan_refs)
    ItemDistributionService(db_session).create(
        ItemDistributionCreate(quantity=7, planned_item_id=planned.id, structure_id=plan_refs["north"])
    )
    with pytest.raises(BusinessRuleError):
        PlannedItemService(db_session).patch(planned.id, PlannedItemCreate(planed_quantity=5))


def test_financial_operation_budget_year_must_be_four_digits(db_session, plan_refs):
    service = FinancialOperationService(db_session)
    with pytest.raises(ValidationFailedError) as exc:
        service.create(
            FinancialOperationCreate(
                operation="OP-X", budget_year="26", budget_type_id=plan_refs["budget_type"]
            )
        )
    assert exc.value.field_errors == {"budget_year": "Budget year must have 4 digits"}

    too_far = str(date.today().year + 11)
    with pytest.raises(ValidationFailedError):
        service.create(
            FinancialOperationCreate(
                operation="OP-Y", budget_year=too_far, budget_type_id=plan_refs["budget_type"]
            )
        )
