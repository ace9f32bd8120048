from app import models
from app.core.errors import ValidationFailedError
from app.schemas.communication import MailNatureRead, MailRead, MailTypeRead
from app.services.crud import Collection, CrudService, Dependent, Reference


class MailNatureService(CrudService):
    model = models.MailNature
    read_schema = MailNatureRead
    entity_name = "MailNature"
    label = "Mail nature"
    module = "communication"
    dependents = (
        Dependent(models.Mail, "mail_nature_id", "Cannot delete mail nature as it is used by mails"),
    )


class MailTypeService(CrudService):
    model = models.MailType
    read_schema = MailTypeRead
    entity_name = "MailType"
    label = "Mail type"
    module = "communication"
    dependents = (
        Dependent(models.Mail, "mail_type_id", "Cannot delete mail type as it is used by mails"),
    )


class MailService(CrudService):
    model = models.Mail
    read_schema = MailRead
    entity_name = "Mail"
    label = "Mail"
    module = "communication"
    fields = ("reference", "record_number", "subject", "mail_date", "record_date")
    required = {"reference": "Reference"}
    unique = (("reference",),)
    references = (
        Reference("mail_nature_id", models.MailNature, "Mail nature", required=True),
        Reference("mail_type_id", models.MailType, "Mail type", required=True),
        Reference("structure_id", models.Structure, "Structure", required=True),
        Reference("file_id", models.File, "File", required=True),
    )
    collections = (
        Collection(
            "referenced_mail_ids", "referenced_mails", models.Mail, "Some referenced mails were not found"
        ),
    )
    nested = ("mail_nature", "mail_type", "structure", "file")
    search_fields = ("reference", "subject", "record_number")
    order_by = "reference"

    def validate(self, state, entity, creating):
        if entity.id is not None and entity.id in (self.incoming.get("referenced_mail_ids") or ()):
            raise ValidationFailedError.single(
                "referenced_mail_ids", "A mail cannot reference itself"
            )
