from app import models
from app.core.errors import ValidationFailedError
from app.schemas.document import DocumentRead, DocumentTypeRead
from app.services.crud import CrudService, Dependent, Reference


class DocumentTypeService(CrudService):
    model = models.DocumentType
    read_schema = DocumentTypeRead
    entity_name = "DocumentType"
    label = "Document type"
    module = "document"
    fields = ("designation_ar", "designation_en", "designation_fr", "scope")
    required = {"scope": "Scope"}
    unique = (("designation_fr", "scope"),)
    dependents = (
        Dependent(
            models.Document, "document_type_id", "Cannot delete document type as it has documents"
        ),
    )

    def validate(self, state, entity, creating):
        designations = ("designation_ar", "designation_en", "designation_fr")
        if all(not (state.get(k) or "").strip() for k in designations):
            raise ValidationFailedError.single(
                "designation_fr", "At least one designation is required"
            )


class DocumentService(CrudService):
    model = models.Document
    read_schema = DocumentRead
    entity_name = "Document"
    label = "Document"
    module = "document"
    fields = ("reference", "issue_date")
    required = {"reference": "Reference"}
    unique = ()
    references = (
        Reference("document_type_id", models.DocumentType, "Document type", required=True),
        Reference("file_id", models.File, "File"),
    )
    nested = ("document_type", "file")
    search_fields = ("reference",)
    order_by = "reference"
