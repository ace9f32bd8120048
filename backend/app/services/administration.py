from app import models
from app.core.errors import ValidationFailedError
from app.schemas.administration import CountryRead, StateRead, StructureRead, StructureTypeRead
from app.services.crud import CrudService, Dependent, Reference


class CountryService(CrudService):
    model = models.Country
    read_schema = CountryRead
    entity_name = "Country"
    label = "Country"
    module = "administration"
    dependents = (
        Dependent(models.Provider, "country_id", "Cannot delete country as it is used by providers"),
    )


class StateService(CrudService):
    model = models.State
    read_schema = StateRead
    entity_name = "State"
    label = "State"
    module = "administration"
    fields = ("code", "designation_ar", "designation_lt")
    required = {"code": "Code", "designation_lt": "Latin designation"}
    unique = (("code",), ("designation_lt",))
    search_fields = ("designation_ar", "designation_lt", "code")
    order_by = "code"
    dependents = (
        Dependent(models.Provider, "state_id", "Cannot delete state as it is used by providers"),
    )


class StructureTypeService(CrudService):
    model = models.StructureType
    read_schema = StructureTypeRead
    entity_name = "StructureType"
    label = "Structure type"
    module = "administration"
    dependents = (
        Dependent(
            models.Structure,
            "structure_type_id",
            "Cannot delete structure type as it has structures",
        ),
    )


class StructureService(CrudService):
    model = models.Structure
    read_schema = StructureRead
    entity_name = "Structure"
    label = "Structure"
    module = "administration"
    fields = (
        "designation_ar",
        "designation_en",
        "designation_fr",
        "acronym_ar",
        "acronym_en",
        "acronym_fr",
    )
    references = (
        Reference("structure_type_id", models.StructureType, "Structure type", required=True),
        Reference("structure_up_id", models.Structure, "Parent structure"),
    )
    dependents = (
        Dependent(
            models.Structure, "structure_up_id", "Cannot delete structure as it has child structures"
        ),
        Dependent(models.Mail, "structure_id", "Cannot delete structure as it is used by mails"),
        Dependent(
            models.ItemDistribution,
            "structure_id",
            "Cannot delete structure as it is used by item distributions",
        ),
    )
    nested = ("structure_type", "structure_up")
    search_fields = (
        "designation_ar",
        "designation_en",
        "designation_fr",
        "acronym_ar",
        "acronym_en",
        "acronym_fr",
    )

    def validate(self, state, entity, creating):
        parent_id = state.get("structure_up_id")
        if parent_id is not None and not creating and parent_id == entity.id:
            raise ValidationFailedError.single(
                "structure_up_id", "A structure cannot be its own parent"
            )
