from app import models
from app.core import classifier
from app.schemas.core import (
    ApprovalStatusRead,
    CurrencyRead,
    RealizationDirectorRead,
    RealizationNatureRead,
    RealizationStatusRead,
)
from app.services.crud import CrudService, Dependent


class CurrencyService(CrudService):
    model = models.Currency
    read_schema = CurrencyRead
    entity_name = "Currency"
    label = "Currency"
    fields = ("designation_ar", "designation_en", "designation_fr", "code_ar", "code_lt")
    required = {
        "designation_ar": "Arabic designation",
        "designation_en": "English designation",
        "designation_fr": "French designation",
        "code_ar": "Arabic code",
        "code_lt": "Latin code",
    }
    unique = (
        ("designation_ar",),
        ("designation_en",),
        ("designation_fr",),
        ("code_ar",),
        ("code_lt",),
    )
    dependents = (
        Dependent(models.Contract, "currency_id", "Cannot delete currency as it is used by contracts"),
        Dependent(
            models.Amendment, "currency_id", "Cannot delete currency as it is used by amendments"
        ),
    )
    search_fields = ("designation_ar", "designation_en", "designation_fr", "code_ar", "code_lt")


class ApprovalStatusService(CrudService):
    model = models.ApprovalStatus
    read_schema = ApprovalStatusRead
    entity_name = "ApprovalStatus"
    label = "Approval status"
    classifier = classifier.APPROVAL_STATUS


class RealizationStatusService(CrudService):
    model = models.RealizationStatus
    read_schema = RealizationStatusRead
    entity_name = "RealizationStatus"
    label = "Realization status"
    classifier = classifier.REALIZATION_STATUS


class RealizationNatureService(CrudService):
    model = models.RealizationNature
    read_schema = RealizationNatureRead
    entity_name = "RealizationNature"
    label = "Realization nature"
    classifier = classifier.REALIZATION_NATURE


class RealizationDirectorService(CrudService):
    model = models.RealizationDirector
    read_schema = RealizationDirectorRead
    entity_name = "RealizationDirector"
    label = "Realization director"
