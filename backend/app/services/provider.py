from datetime import date, timedelta

from sqlalchemy import or_

from app import models
from app.core.errors import BusinessRuleError, DependentsExistError, ValidationFailedError
from app.schemas.provider import (
    ClearanceRead,
    EconomicDomainRead,
    EconomicNatureRead,
    ExclusionTypeRead,
    ProviderExclusionRead,
    ProviderRead,
    ProviderRepresentatorRead,
)
from app.services.crud import Collection, CrudService, Dependent, Reference

_DESIGNATIONS_AND_ACRONYMS = (
    "designation_ar",
    "designation_en",
    "designation_fr",
    "acronym_ar",
    "acronym_en",
    "acronym_fr",
)


EXPIRING_SOON_DAYS = 30


def _check_period(state):
    start, end = state.get("start_date"), state.get("end_date")
    if start and end and end < start:
        raise ValidationFailedError.single("end_date", "End date cannot be before start date")


class PeriodQueries:
    """Date-window reads shared by exclusions and clearances.

    A row is active once started and until its end date, if any, has passed.
    """

    def _active_query(self, today=None):
        today = today or date.today()
        model = self.model
        return self.repo.query().filter(
            model.start_date <= today,
            or_(model.end_date.is_(None), model.end_date > today),
        )

    def active(self, page_request):
        return self.to_page(self.repo.paginate(self._active_query(), page_request))

    def active_for_provider(self, provider_id):
        rows = self.repo.list_query(
            self._active_query().filter(self.model.provider_id == provider_id)
        )
        return [self.to_read(r) for r in rows]

    def count_active_for_provider(self, provider_id):
        return self._active_query().filter(self.model.provider_id == provider_id).count()

    def expiring_soon(self, page_request, days=EXPIRING_SOON_DAYS):
        today = date.today()
        model = self.model
        query = self.repo.query().filter(
            model.end_date.is_not(None),
            model.end_date > today,
            model.end_date <= today + timedelta(days=days),
        )
        return self.to_page(self.repo.paginate(query, page_request))


class EconomicNatureService(CrudService):
    model = models.EconomicNature
    read_schema = EconomicNatureRead
    entity_name = "EconomicNature"
    label = "Economic nature"
    module = "provider"
    fields = _DESIGNATIONS_AND_ACRONYMS
    unique = (("designation_fr",), ("acronym_fr",))
    search_fields = _DESIGNATIONS_AND_ACRONYMS
    dependents = (
        Dependent(
            models.Provider,
            "economic_nature_id",
            "Cannot delete economic nature as it is used by providers",
        ),
    )


class EconomicDomainService(CrudService):
    model = models.EconomicDomain
    read_schema = EconomicDomainRead
    entity_name = "EconomicDomain"
    label = "Economic domain"
    module = "provider"
    fields = ("code", "designation_ar", "designation_en", "designation_fr")
    required = {"code": "Code", "designation_fr": "French designation"}
    unique = (("code",), ("designation_fr",))
    search_fields = ("designation_ar", "designation_en", "designation_fr", "code")
    order_by = "code"

    def before_delete(self, entity):
        used = (
            self.db.query(models.Provider)
            .filter(models.Provider.economic_domains.any(models.EconomicDomain.id == entity.id))
            .first()
        )
        if used is not None:
            raise DependentsExistError("Cannot delete economic domain as it is used by providers")


class ExclusionTypeService(CrudService):
    model = models.ExclusionType
    read_schema = ExclusionTypeRead
    entity_name = "ExclusionType"
    label = "Exclusion type"
    module = "provider"
    dependents = (
        Dependent(
            models.ProviderExclusion,
            "exclusion_type_id",
            "Cannot delete exclusion type as it is used by provider exclusions",
        ),
    )


class ProviderService(CrudService):
    model = models.Provider
    read_schema = ProviderRead
    entity_name = "Provider"
    label = "Provider"
    module = "provider"
    fields = (
        "designation_lt",
        "designation_ar",
        "acronym_lt",
        "acronym_ar",
        "address",
        "capital",
        "comercial_registry_number",
        "comercial_registry_date",
        "taxe_identity_number",
        "stat_identity_number",
        "bank",
        "bank_account",
        "swift_number",
        "phone_numbers",
        "fax_numbers",
        "mail",
        "website",
    )
    required = {}
    unique = (
        ("designation_lt",),
        ("designation_ar",),
        ("comercial_registry_number",),
        ("taxe_identity_number",),
        ("stat_identity_number",),
    )
    references = (
        Reference("logo_id", models.File, "Logo"),
        Reference("economic_nature_id", models.EconomicNature, "Economic nature", required=True),
        Reference("country_id", models.Country, "Country", required=True),
        Reference("state_id", models.State, "State"),
    )
    collections = (
        Collection(
            "economic_domain_ids",
            "economic_domains",
            models.EconomicDomain,
            "Some economic domains were not found",
        ),
    )
    dependents = (
        Dependent(
            models.ProviderExclusion, "provider_id", "Cannot delete provider as it has exclusions"
        ),
        Dependent(
            models.ProviderRepresentator,
            "provider_id",
            "Cannot delete provider as it has representators",
        ),
        Dependent(models.Clearance, "provider_id", "Cannot delete provider as it has clearances"),
        Dependent(models.Submission, "tender_id", "Cannot delete provider as it has submissions"),
        Dependent(models.Contract, "provider_id", "Cannot delete provider as it has contracts"),
    )
    nested = ("logo", "economic_nature", "country", "state")
    search_fields = (
        "designation_lt",
        "designation_ar",
        "acronym_lt",
        "acronym_ar",
        "comercial_registry_number",
        "taxe_identity_number",
        "mail",
    )
    order_by = "designation_lt"

    def validate(self, state, entity, creating):
        if not (state.get("designation_lt") or "").strip() and not (
            state.get("designation_ar") or ""
        ).strip():
            raise ValidationFailedError(
                {
                    "designation_lt": "Latin or Arabic designation is required",
                    "designation_ar": "Latin or Arabic designation is required",
                }
            )


class ProviderExclusionService(PeriodQueries, CrudService):
    model = models.ProviderExclusion
    read_schema = ProviderExclusionRead
    entity_name = "ProviderExclusion"
    label = "Provider exclusion"
    module = "provider"
    fields = ("start_date", "end_date", "cause")
    required = {"start_date": "Start date"}
    unique = ()
    references = (
        Reference("exclusion_type_id", models.ExclusionType, "Exclusion type", required=True),
        Reference("provider_id", models.Provider, "Provider", required=True),
        Reference("reference_id", models.Mail, "Reference mail"),
    )
    nested = ("exclusion_type", "provider")
    search_fields = ("cause",)
    order_by = "start_date"

    def validate(self, state, entity, creating):
        _check_period(state)


class ProviderRepresentatorService(CrudService):
    model = models.ProviderRepresentator
    read_schema = ProviderRepresentatorRead
    entity_name = "ProviderRepresentator"
    label = "Provider representator"
    module = "provider"
    fields = (
        "firstname",
        "lastname",
        "birth_date",
        "birth_place",
        "address",
        "job_title",
        "mobile_phone_number",
        "fix_phone_number",
        "mail",
    )
    required = {"firstname": "First name", "lastname": "Last name"}
    unique = ()
    references = (Reference("provider_id", models.Provider, "Provider", required=True),)
    dependents = (
        Dependent(
            models.Clearance,
            "provider_representator_id",
            "Cannot delete provider representator as it is used by clearances",
        ),
    )
    nested = ("provider",)
    search_fields = ("firstname", "lastname", "job_title", "mail")
    order_by = "lastname"


class ClearanceService(PeriodQueries, CrudService):
    model = models.Clearance
    read_schema = ClearanceRead
    entity_name = "Clearance"
    label = "Clearance"
    module = "provider"
    fields = ("start_date", "end_date")
    required = {"start_date": "Start date"}
    unique = ()
    references = (
        Reference("provider_id", models.Provider, "Provider", required=True),
        Reference("provider_representator_id", models.ProviderRepresentator, "Provider representator"),
        Reference("reference_id", models.Mail, "Reference mail"),
    )
    nested = ("provider", "provider_representator")
    search_fields = ("start_date",)
    order_by = "start_date"

    def validate(self, state, entity, creating):
        _check_period(state)
        representator_id = state.get("provider_representator_id")
        if representator_id is None:
            return
        representator = self.db.get(models.ProviderRepresentator, representator_id)
        if representator is not None and representator.provider_id != state.get("provider_id"):
            raise BusinessRuleError("Provider representator does not belong to this provider")
