from app import models
from app.core import classifier
from app.schemas.amendment import (
    AmendmentPhaseRead,
    AmendmentRead,
    AmendmentStepRead,
    AmendmentTypeRead,
)
from app.services.crud import Collection, CrudService, Dependent, Reference


class AmendmentTypeService(CrudService):
    model = models.AmendmentType
    read_schema = AmendmentTypeRead
    entity_name = "AmendmentType"
    label = "Amendment type"
    module = "amendment"
    dependents = (
        Dependent(
            models.Amendment,
            "amendment_type_id",
            "Cannot delete amendment type as it is used by amendments",
        ),
    )


class AmendmentPhaseService(CrudService):
    model = models.AmendmentPhase
    read_schema = AmendmentPhaseRead
    entity_name = "AmendmentPhase"
    label = "Amendment phase"
    module = "amendment"
    classifier = classifier.PROCUREMENT_PHASE
    dependents = (
        Dependent(
            models.AmendmentStep,
            "amendment_phase_id",
            "Cannot delete amendment phase as it has amendment steps",
        ),
    )


class AmendmentStepService(CrudService):
    model = models.AmendmentStep
    read_schema = AmendmentStepRead
    entity_name = "AmendmentStep"
    label = "Amendment step"
    module = "amendment"
    references = (
        Reference("amendment_phase_id", models.AmendmentPhase, "Amendment phase", required=True),
    )
    dependents = (
        Dependent(
            models.Amendment,
            "amendment_step_id",
            "Cannot delete amendment step as it is used by amendments",
        ),
    )
    nested = ("amendment_phase",)


class AmendmentService(CrudService):
    model = models.Amendment
    read_schema = AmendmentRead
    entity_name = "Amendment"
    label = "Amendment"
    module = "amendment"
    fields = (
        "internal_id",
        "reference",
        "designation_ar",
        "designation_en",
        "designation_fr",
        "amount",
        "transferable_amount",
        "start_date",
        "approval_date",
        "notify_date",
        "observation",
    )
    required = {
        "internal_id": "Internal ID",
        "reference": "Reference",
        "designation_fr": "French designation",
    }
    unique = (("reference",),)
    references = (
        Reference("contract_id", models.Contract, "Contract", required=True),
        Reference("amendment_type_id", models.AmendmentType, "Amendment type", required=True),
        Reference(
            "realization_status_id", models.RealizationStatus, "Realization status", required=True
        ),
        Reference("amendment_step_id", models.AmendmentStep, "Amendment step", required=True),
        Reference("approval_status_id", models.ApprovalStatus, "Approval status"),
        Reference("currency_id", models.Currency, "Currency", required=True),
    )
    collections = (
        Collection("document_ids", "documents", models.Document, "Some documents were not found"),
        Collection(
            "referenced_mail_ids", "referenced_mails", models.Mail, "Some referenced mails were not found"
        ),
    )
    nested = (
        "contract",
        "amendment_type",
        "realization_status",
        "amendment_step",
        "approval_status",
        "currency",
    )
    search_fields = (
        "reference",
        "designation_ar",
        "designation_en",
        "designation_fr",
        "observation",
    )
    order_by = "reference"
