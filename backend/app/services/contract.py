from sqlalchemy import func

from app import models
from app.core import classifier
from app.core.errors import ValidationFailedError
from app.schemas.contract import (
    ContractItemRead,
    ContractItemTotals,
    ContractPhaseRead,
    ContractRead,
    ContractStepRead,
    ContractTypeRead,
)
from app.services.crud import Collection, CrudService, Dependent, Reference


class ContractTypeService(CrudService):
    model = models.ContractType
    read_schema = ContractTypeRead
    entity_name = "ContractType"
    label = "Contract type"
    module = "contract"
    dependents = (
        Dependent(
            models.Contract, "contract_type_id", "Cannot delete contract type as it has contracts"
        ),
    )


class ContractPhaseService(CrudService):
    model = models.ContractPhase
    read_schema = ContractPhaseRead
    entity_name = "ContractPhase"
    label = "Contract phase"
    module = "contract"
    classifier = classifier.PROCUREMENT_PHASE
    dependents = (
        Dependent(
            models.ContractStep,
            "contract_phase_id",
            "Cannot delete contract phase as it has contract steps",
        ),
    )


class ContractStepService(CrudService):
    model = models.ContractStep
    read_schema = ContractStepRead
    entity_name = "ContractStep"
    label = "Contract step"
    module = "contract"
    references = (
        Reference("contract_phase_id", models.ContractPhase, "Contract phase", required=True),
    )
    dependents = (
        Dependent(
            models.Contract,
            "contract_step_id",
            "Cannot delete contract step as it is used by contracts",
        ),
    )
    nested = ("contract_phase",)


class ContractService(CrudService):
    model = models.Contract
    read_schema = ContractRead
    entity_name = "Contract"
    label = "Contract"
    module = "contract"
    fields = (
        "internal_id",
        "contract_year",
        "reference",
        "designation_ar",
        "designation_en",
        "designation_fr",
        "amount",
        "transferable_amount",
        "start_date",
        "approval_reference",
        "approval_date",
        "contract_date",
        "notify_date",
        "contract_duration",
        "observation",
    )
    required = {"internal_id": "Internal ID", "designation_fr": "French designation"}
    unique = (("internal_id",),)
    references = (
        Reference("contract_type_id", models.ContractType, "Contract type", required=True),
        Reference("provider_id", models.Provider, "Provider", required=True),
        Reference("currency_id", models.Currency, "Currency", required=True),
        Reference("realization_status_id", models.RealizationStatus, "Realization status"),
        Reference("contract_step_id", models.ContractStep, "Contract step"),
        Reference("approval_status_id", models.ApprovalStatus, "Approval status"),
        Reference("consultation_id", models.Consultation, "Consultation"),
        Reference("contract_up_id", models.Contract, "Parent contract"),
    )
    collections = (
        Collection("document_ids", "documents", models.Document, "Some documents were not found"),
        Collection(
            "referenced_mail_ids", "referenced_mails", models.Mail, "Some referenced mails were not found"
        ),
        Collection(
            "planned_item_ids", "planned_items", models.PlannedItem, "Some planned items were not found"
        ),
    )
    dependents = (
        Dependent(models.Amendment, "contract_id", "Cannot delete contract as it has amendments"),
        Dependent(
            models.ContractItem, "contract_id", "Cannot delete contract as it has contract items"
        ),
        Dependent(
            models.Contract, "contract_up_id", "Cannot delete contract as it has child contracts"
        ),
    )
    nested = (
        "contract_type",
        "provider",
        "currency",
        "realization_status",
        "contract_step",
        "approval_status",
        "consultation",
        "contract_up",
    )
    search_fields = (
        "internal_id",
        "reference",
        "designation_ar",
        "designation_en",
        "designation_fr",
        "observation",
    )
    order_by = "internal_id"

    def validate(self, state, entity, creating):
        parent_id = state.get("contract_up_id")
        if parent_id is not None and not creating and parent_id == entity.id:
            raise ValidationFailedError.single(
                "contract_up_id", "A contract cannot be its own parent"
            )


class ContractItemService(CrudService):
    model = models.ContractItem
    read_schema = ContractItemRead
    entity_name = "ContractItem"
    label = "Contract item"
    module = "contract"
    fields = ("designation", "reference", "quantity", "unit_price", "observation")
    required = {"designation": "Designation"}
    unique = ()
    references = (Reference("contract_id", models.Contract, "Contract", required=True),)
    nested = ("contract",)
    search_fields = ("designation", "reference", "observation")
    order_by = "designation"

    def totals(self, contract_id: int) -> ContractItemTotals:
        """Item count, summed quantity and summed quantity x unit price for a contract."""
        item = models.ContractItem
        count, quantity, value = (
            self.db.query(
                func.count(item.id),
                func.coalesce(func.sum(item.quantity), 0.0),
                func.coalesce(func.sum(item.quantity * item.unit_price), 0.0),
            )
            .filter(item.contract_id == contract_id)
            .one()
        )
        return ContractItemTotals(
            contract_id=contract_id,
            item_count=count,
            total_quantity=float(quantity),
            total_value=float(value),
        )
