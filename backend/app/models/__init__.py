from app.models.administration import Country, State, Structure, StructureType
from app.models.amendment import Amendment, AmendmentPhase, AmendmentStep, AmendmentType
from app.models.audit import AuditAction, AuditLog, AuditStatus
from app.models.communication import Mail, MailNature, MailType
from app.models.consultation import (
    AwardMethod,
    Consultation,
    ConsultationPhase,
    ConsultationStep,
    Submission,
)
from app.models.contract import Contract, ContractItem, ContractPhase, ContractStep, ContractType
from app.models.core import (
    ApprovalStatus,
    Currency,
    RealizationDirector,
    RealizationNature,
    RealizationStatus,
)
from app.models.document import Document, DocumentType
from app.models.plan import (
    BudgetModification,
    BudgetType,
    Domain,
    FinancialOperation,
    Item,
    ItemDistribution,
    ItemStatus,
    PlannedItem,
    Rubric,
)
from app.models.provider import (
    Clearance,
    EconomicDomain,
    EconomicNature,
    ExclusionType,
    Provider,
    ProviderExclusion,
    ProviderRepresentator,
)
from app.models.security import Authority, Group, Permission, RefreshToken, Role, User
from app.models.utility import File

__all__ = [
    "Amendment",
    "AmendmentPhase",
    "AmendmentStep",
    "AmendmentType",
    "ApprovalStatus",
    "AuditAction",
    "AuditLog",
    "AuditStatus",
    "Authority",
    "AwardMethod",
    "BudgetModification",
    "BudgetType",
    "Clearance",
    "Consultation",
    "ConsultationPhase",
    "ConsultationStep",
    "Contract",
    "ContractItem",
    "ContractPhase",
    "ContractStep",
    "ContractType",
    "Country",
    "Currency",
    "Document",
    "DocumentType",
    "Domain",
    "EconomicDomain",
    "EconomicNature",
    "ExclusionType",
    "File",
    "FinancialOperation",
    "Group",
    "Item",
    "ItemDistribution",
    "ItemStatus",
    "Mail",
    "MailNature",
    "MailType",
    "Permission",
    "PlannedItem",
    "Provider",
    "ProviderExclusion",
    "ProviderRepresentator",
    "RealizationDirector",
    "RealizationNature",
    "RealizationStatus",
    "RefreshToken",
    "Role",
    "Rubric",
    "State",
    "Structure",
    "StructureType",
    "Submission",
    "User",
]
