"""initial procurement schema

Revision ID: 20261018_0001_initial_schema
Revises: None
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

# Indexed foreign keys, created after the tables.
_INDEXED = [
    ("structures", "structure_type_id"),
    ("structures", "structure_up_id"),
    ("documents", "document_type_id"),
    ("mails", "mail_nature_id"),
    ("mails", "mail_type_id"),
    ("mails", "structure_id"),
    ("providers", "economic_nature_id"),
    ("providers", "country_id"),
    ("provider_exclusions", "exclusion_type_id"),
    ("provider_exclusions", "provider_id"),
    ("provider_representators", "provider_id"),
    ("clearances", "provider_id"),
    ("rubrics", "domain_id"),
    ("items", "rubric_id"),
    ("financial_operations", "budget_type_id"),
    ("planned_items", "item_id"),
    ("planned_items", "financial_operation_id"),
    ("item_distributions", "planned_item_id"),
    ("consultation_steps", "consultation_phase_id"),
    ("submissions", "consultation_id"),
    ("submissions", "tender_id"),
    ("contract_steps", "contract_phase_id"),
    ("contracts", "provider_id"),
    ("contracts", "consultation_id"),
    ("contract_items", "contract_id"),
    ("amendment_steps", "amendment_phase_id"),
    ("amendments", "contract_id"),
    ("permissions", "authority_id"),
    ("users", "username"),
    ("refresh_tokens", "user_id"),
    ("audit_logs", "entity_name"),
    ("audit_logs", "entity_id"),
    ("audit_logs", "action"),
    ("audit_logs", "username"),
    ("audit_logs", "timestamp"),
    ("audit_logs", "request_id"),
]

_AUDIT_ACTIONS = (
    "CREATE",
    "UPDATE",
    "DELETE",
    "READ",
    "APPROVE",
    "REJECT",
    "SUBMIT",
    "CANCEL",
    "ARCHIVE",
    "RESTORE",
    "LOGIN",
    "LOGOUT",
)


def _id() -> sa.Column:
    return sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True)


def _designations() -> list:
    return [
        sa.Column("designation_ar", sa.String(length=200)),
        sa.Column("designation_en", sa.String(length=200)),
        sa.Column("designation_fr", sa.String(length=200)),
    ]


def _acronyms() -> list:
    return [
        sa.Column("acronym_ar", sa.String(length=50)),
        sa.Column("acronym_en", sa.String(length=50)),
        sa.Column("acronym_fr", sa.String(length=50)),
    ]


def _uq(table: str, *columns: str) -> sa.UniqueConstraint:
    return sa.UniqueConstraint(*columns, name=f"uq_{table}_{'_'.join(columns)}")


def _fk(table: str, column: str, target: str, nullable: bool = True, ondelete=None) -> sa.Column:
    return sa.Column(
        column,
        sa.Integer(),
        sa.ForeignKey(f"{target}.id", name=f"fk_{table}_{column}_{target}", ondelete=ondelete),
        nullable=nullable,
    )


def _link(table: str, left: tuple, right: tuple) -> None:
    op.create_table(
        table,
        sa.Column(
            left[0],
            sa.Integer(),
            sa.ForeignKey(f"{left[1]}.id", name=f"fk_{table}_{left[0]}_{left[1]}", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            right[0],
            sa.Integer(),
            sa.ForeignKey(
                f"{right[1]}.id", name=f"fk_{table}_{right[0]}_{right[1]}", ondelete="CASCADE"
            ),
            primary_key=True,
        ),
    )


def _designated(table: str, *extra, acronyms: bool = False, unique=(("designation_fr",),)) -> None:
    columns = [_id(), *_designations()]
    if acronyms:
        columns.extend(_acronyms())
    columns.extend(extra)
    op.create_table(table, *columns, *[_uq(table, *key) for key in unique])


def upgrade() -> None:
    op.create_table(
        "files",
        _id(),
        sa.Column("extension", sa.String(length=20)),
        sa.Column("size", sa.BigInteger()),
        sa.Column("path", sa.String(length=500)),
        sa.Column("file_type", sa.String(length=50)),
        sa.Column("original_name", sa.String(length=255)),
        sa.Column("content_type", sa.String(length=128)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Reference data
    _designated(
        "currencies",
        sa.Column("code_ar", sa.String(length=10)),
        sa.Column("code_lt", sa.String(length=10)),
        unique=(
            ("designation_ar",),
            ("designation_en",),
            ("designation_fr",),
            ("code_ar",),
            ("code_lt",),
        ),
    )
    for table in (
        "approval_statuses",
        "realization_statuses",
        "realization_natures",
        "realization_directors",
        "countries",
        "structure_types",
        "mail_natures",
        "mail_types",
        "exclusion_types",
        "domains",
        "item_statuses",
        "consultation_phases",
        "contract_types",
        "contract_phases",
        "amendment_types",
        "amendment_phases",
    ):
        _designated(table)

    op.create_table(
        "states",
        _id(),
        sa.Column("code", sa.Integer()),
        sa.Column("designation_ar", sa.String(length=200)),
        sa.Column("designation_lt", sa.String(length=200)),
        _uq("states", "code"),
        _uq("states", "designation_lt"),
    )
    _designated(
        "structures",
        _fk("structures", "structure_type_id", "structure_types", nullable=False),
        _fk("structures", "structure_up_id", "structures"),
        acronyms=True,
    )

    # Documents and mail
    _designated(
        "document_types",
        sa.Column("scope", sa.Integer(), nullable=False),
        unique=(("designation_fr", "scope"),),
    )
    op.create_table(
        "documents",
        _id(),
        sa.Column("reference", sa.String(length=100)),
        sa.Column("issue_date", sa.Date()),
        _fk("documents", "document_type_id", "document_types", nullable=False),
        _fk("documents", "file_id", "files"),
    )
    op.create_table(
        "mails",
        _id(),
        sa.Column("reference", sa.String(length=100)),
        sa.Column("record_number", sa.String(length=100)),
        sa.Column("subject", sa.String(length=500)),
        sa.Column("mail_date", sa.Date()),
        sa.Column("record_date", sa.Date()),
        _fk("mails", "mail_nature_id", "mail_natures", nullable=False),
        _fk("mails", "mail_type_id", "mail_types", nullable=False),
        _fk("mails", "structure_id", "structures", nullable=False),
        _fk("mails", "file_id", "files", nullable=False),
        _uq("mails", "reference"),
    )
    op.create_table(
        "mail_references",
        sa.Column(
            "mail_id",
            sa.Integer(),
            sa.ForeignKey("mails.id", name="fk_mail_references_mail_id_mails", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "referenced_mail_id",
            sa.Integer(),
            sa.ForeignKey(
                "mails.id", name="fk_mail_references_referenced_mail_id_mails", ondelete="CASCADE"
            ),
            primary_key=True,
        ),
    )

    # Providers
    _designated(
        "economic_natures",
        acronyms=True,
        unique=(("designation_fr",), ("acronym_fr",)),
    )
    _designated(
        "economic_domains",
        sa.Column("code", sa.Integer(), nullable=False),
        unique=(("code",), ("designation_fr",)),
    )
    op.create_table(
        "providers",
        _id(),
        sa.Column("designation_lt", sa.String(length=200)),
        sa.Column("designation_ar", sa.String(length=200)),
        sa.Column("acronym_lt", sa.String(length=50)),
        sa.Column("acronym_ar", sa.String(length=50)),
        sa.Column("address", sa.String(length=300)),
        sa.Column("capital", sa.Float()),
        sa.Column("comercial_registry_number", sa.String(length=50)),
        sa.Column("comercial_registry_date", sa.Date()),
        sa.Column("taxe_identity_number", sa.String(length=50)),
        sa.Column("stat_identity_number", sa.String(length=50)),
        sa.Column("bank", sa.String(length=100)),
        sa.Column("bank_account", sa.String(length=50)),
        sa.Column("swift_number", sa.String(length=20)),
        sa.Column("phone_numbers", sa.String(length=200)),
        sa.Column("fax_numbers", sa.String(length=200)),
        sa.Column("mail", sa.String(length=100)),
        sa.Column("website", sa.String(length=200)),
        _fk("providers", "logo_id", "files"),
        _fk("providers", "economic_nature_id", "economic_natures", nullable=False),
        _fk("providers", "country_id", "countries", nullable=False),
        _fk("providers", "state_id", "states"),
        _uq("providers", "designation_lt"),
        _uq("providers", "designation_ar"),
        _uq("providers", "comercial_registry_number"),
        _uq("providers", "taxe_identity_number"),
        _uq("providers", "stat_identity_number"),
    )
    _link(
        "provider_economic_domains",
        ("provider_id", "providers"),
        ("economic_domain_id", "economic_domains"),
    )
    op.create_table(
        "provider_exclusions",
        _id(),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date()),
        sa.Column("cause", sa.String(length=500)),
        _fk("provider_exclusions", "exclusion_type_id", "exclusion_types", nullable=False),
        _fk("provider_exclusions", "provider_id", "providers", nullable=False),
        _fk("provider_exclusions", "reference_id", "mails"),
    )
    op.create_table(
        "provider_representators",
        _id(),
        sa.Column("firstname", sa.String(length=100), nullable=False),
        sa.Column("lastname", sa.String(length=100), nullable=False),
        sa.Column("birth_date", sa.Date()),
        sa.Column("birth_place", sa.String(length=100)),
        sa.Column("address", sa.String(length=300)),
        sa.Column("job_title", sa.String(length=100)),
        sa.Column("mobile_phone_number", sa.String(length=30)),
        sa.Column("fix_phone_number", sa.String(length=30)),
        sa.Column("mail", sa.String(length=100)),
        _fk("provider_representators", "provider_id", "providers", nullable=False),
    )
    op.create_table(
        "clearances",
        _id(),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date()),
        _fk("clearances", "provider_id", "providers", nullable=False),
        _fk("clearances", "provider_representator_id", "provider_representators"),
        _fk("clearances", "reference_id", "mails"),
    )

    # Plans and budgets
    _designated("budget_types", acronyms=True, unique=(("designation_fr",), ("acronym_fr",)))
    _designated("rubrics", _fk("rubrics", "domain_id", "domains", nullable=False))
    _designated("items", _fk("items", "rubric_id", "rubrics", nullable=False))
    op.create_table(
        "financial_operations",
        _id(),
        sa.Column("operation", sa.String(length=200), nullable=False),
        sa.Column("budget_year", sa.String(length=4), nullable=False),
        _fk("financial_operations", "budget_type_id", "budget_types", nullable=False),
        _uq("financial_operations", "operation"),
    )
    op.create_table(
        "budget_modifications",
        _id(),
        sa.Column("object", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=500)),
        sa.Column("approval_date", sa.Date()),
        _fk("budget_modifications", "demande_id", "documents", nullable=False),
        _fk("budget_modifications", "response_id", "documents", nullable=False),
        _uq("budget_modifications", "approval_date", "demande_id"),
    )
    op.create_table(
        "planned_items",
        _id(),
        sa.Column("designation", sa.String(length=200), nullable=False),
        sa.Column("unitair_cost", sa.Float()),
        sa.Column("planed_quantity", sa.Float()),
        sa.Column("allocated_amount", sa.Float()),
        _fk("planned_items", "item_status_id", "item_statuses", nullable=False),
        _fk("planned_items", "item_id", "items", nullable=False),
        _fk("planned_items", "financial_operation_id", "financial_operations", nullable=False),
        _fk("planned_items", "budget_modification_id", "budget_modifications"),
    )
    op.create_table(
        "item_distributions",
        _id(),
        sa.Column("quantity", sa.Float(), nullable=False),
        _fk("item_distributions", "planned_item_id", "planned_items", nullable=False),
        _fk("item_distributions", "structure_id", "structures", nullable=False),
    )

    # Consultations
    _designated("award_methods", acronyms=True, unique=(("designation_fr",), ("acronym_fr",)))
    _designated(
        "consultation_steps",
        _fk("consultation_steps", "consultation_phase_id", "consultation_phases", nullable=False),
    )
    _designated(
        "consultations",
        sa.Column("internal_id", sa.String(length=20)),
        sa.Column("consultation_year", sa.Integer()),
        sa.Column("reference", sa.String(length=100)),
        sa.Column("allocated_amount", sa.Float()),
        sa.Column("financial_estimation", sa.Float()),
        sa.Column("start_date", sa.Date()),
        sa.Column("approval_reference", sa.String(length=100)),
        sa.Column("approval_date", sa.Date()),
        sa.Column("publish_date", sa.Date()),
        sa.Column("deadline", sa.Date()),
        sa.Column("observation", sa.Text()),
        _fk("consultations", "award_method_id", "award_methods"),
        _fk("consultations", "budget_type_id", "budget_types"),
        _fk("consultations", "realization_nature_id", "realization_natures"),
        _fk("consultations", "realization_status_id", "realization_statuses"),
        _fk("consultations", "approval_status_id", "approval_statuses"),
        _fk("consultations", "realization_director_id", "realization_directors"),
        _fk("consultations", "consultation_step_id", "consultation_steps"),
        unique=(("reference",), ("internal_id", "consultation_year")),
    )
    op.create_table(
        "submissions",
        _id(),
        sa.Column("submission_date", sa.Date()),
        sa.Column("financial_offer", sa.Float()),
        _fk("submissions", "consultation_id", "consultations", nullable=False),
        _fk("submissions", "tender_id", "providers", nullable=False),
        _fk("submissions", "administrative_part_id", "files"),
        _fk("submissions", "technical_part_id", "files"),
        _fk("submissions", "financial_part_id", "files"),
        _uq("submissions", "consultation_id", "tender_id"),
    )

    # Contracts
    _designated(
        "contract_steps",
        _fk("contract_steps", "contract_phase_id", "contract_phases", nullable=False),
    )
    _designated(
        "contracts",
        sa.Column("internal_id", sa.String(length=20), nullable=False),
        sa.Column("contract_year", sa.Integer()),
        sa.Column("reference", sa.String(length=100)),
        sa.Column("amount", sa.Float()),
        sa.Column("transferable_amount", sa.Float()),
        sa.Column("start_date", sa.Date()),
        sa.Column("approval_reference", sa.String(length=100)),
        sa.Column("approval_date", sa.Date()),
        sa.Column("contract_date", sa.Date()),
        sa.Column("notify_date", sa.Date()),
        sa.Column("contract_duration", sa.String(length=50)),
        sa.Column("observation", sa.Text()),
        _fk("contracts", "contract_type_id", "contract_types", nullable=False),
        _fk("contracts", "provider_id", "providers", nullable=False),
        _fk("contracts", "currency_id", "currencies", nullable=False),
        _fk("contracts", "realization_status_id", "realization_statuses"),
        _fk("contracts", "contract_step_id", "contract_steps"),
        _fk("contracts", "approval_status_id", "approval_statuses"),
        _fk("contracts", "consultation_id", "consultations"),
        _fk("contracts", "contract_up_id", "contracts"),
        unique=(("internal_id",),),
    )
    _link("contract_documents", ("contract_id", "contracts"), ("document_id", "documents"))
    _link("contract_mails", ("contract_id", "contracts"), ("mail_id", "mails"))
    _link(
        "contract_planned_items",
        ("contract_id", "contracts"),
        ("planned_item_id", "planned_items"),
    )
    op.create_table(
        "contract_items",
        _id(),
        sa.Column("designation", sa.String(length=200), nullable=False),
        sa.Column("reference", sa.String(length=100)),
        sa.Column("quantity", sa.Float()),
        sa.Column("unit_price", sa.Float()),
        sa.Column("observation", sa.Text()),
        _fk("contract_items", "contract_id", "contracts", nullable=False),
    )

    # Amendments
    _designated(
        "amendment_steps",
        _fk("amendment_steps", "amendment_phase_id", "amendment_phases", nullable=False),
    )
    _designated(
        "amendments",
        sa.Column("internal_id", sa.Integer(), nullable=False),
        sa.Column("reference", sa.String(length=100), nullable=False),
        sa.Column("amount", sa.Float()),
        sa.Column("transferable_amount", sa.Float()),
        sa.Column("start_date", sa.Date()),
        sa.Column("approval_date", sa.Date()),
        sa.Column("notify_date", sa.Date()),
        sa.Column("observation", sa.Text()),
        _fk("amendments", "contract_id", "contracts", nullable=False),
        _fk("amendments", "amendment_type_id", "amendment_types", nullable=False),
        _fk("amendments", "realization_status_id", "realization_statuses", nullable=False),
        _fk("amendments", "amendment_step_id", "amendment_steps", nullable=False),
        _fk("amendments", "approval_status_id", "approval_statuses"),
        _fk("amendments", "currency_id", "currencies", nullable=False),
        unique=(("reference",),),
    )
    _link("amendment_documents", ("amendment_id", "amendments"), ("document_id", "documents"))
    _link("amendment_mails", ("amendment_id", "amendments"), ("mail_id", "mails"))

    # Security
    op.create_table(
        "authorities",
        _id(),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("description", sa.String(length=255)),
        _uq("authorities", "name"),
    )
    op.create_table(
        "permissions",
        _id(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=255)),
        _fk("permissions", "authority_id", "authorities", nullable=False),
        _uq("permissions", "name"),
    )
    for table in ("roles", "groups"):
        op.create_table(
            table,
            _id(),
            sa.Column("name", sa.String(length=50), nullable=False),
            sa.Column("description", sa.String(length=255)),
            _uq(table, "name"),
        )
    op.create_table(
        "users",
        _id(),
        sa.Column("username", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        _uq("users", "username"),
        _uq("users", "email"),
    )
    _link("role_permissions", ("role_id", "roles"), ("permission_id", "permissions"))
    _link("group_roles", ("group_id", "groups"), ("role_id", "roles"))
    _link("user_roles", ("user_id", "users"), ("role_id", "roles"))
    _link("user_groups", ("user_id", "users"), ("group_id", "groups"))
    op.create_table(
        "refresh_tokens",
        _id(),
        sa.Column("token", sa.String(length=64), nullable=False),
        sa.Column("expiry_date", sa.DateTime(timezone=True), nullable=False),
        _fk("refresh_tokens", "user_id", "users", nullable=False, ondelete="CASCADE"),
        _uq("refresh_tokens", "token"),
    )

    op.create_table(
        "audit_logs",
        _id(),
        sa.Column("entity_name", sa.String(length=100)),
        sa.Column("entity_id", sa.Integer()),
        sa.Column(
            "action",
            sa.Enum(*_AUDIT_ACTIONS, name="auditaction", native_enum=False, create_constraint=False),
            nullable=False,
        ),
        sa.Column("username", sa.String(length=50)),
        sa.Column(
            "timestamp", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column("ip_address", sa.String(length=64)),
        sa.Column("user_agent", sa.String(length=256)),
        sa.Column("request_id", sa.String(length=64)),
        sa.Column("method_name", sa.String(length=100)),
        sa.Column("module", sa.String(length=50)),
        sa.Column("description", sa.String(length=500)),
        sa.Column("old_values", sa.Text()),
        sa.Column("new_values", sa.Text()),
        sa.Column("parameters", sa.Text()),
        sa.Column(
            "status",
            sa.Enum(
                "SUCCESS",
                "FAILED",
                "PARTIAL",
                name="auditstatus",
                native_enum=False,
                create_constraint=False,
            ),
            nullable=False,
        ),
        sa.Column("error_message", sa.Text()),
        sa.Column("duration_ms", sa.Integer()),
    )

    for table, column in _INDEXED:
        op.create_index(f"ix_{table}_{column}", table, [column])


def downgrade() -> None:
    for table, column in reversed(_INDEXED):
        op.drop_index(f"ix_{table}_{column}", table_name=table)
    for table in (
        "audit_logs",
        "refresh_tokens",
        "user_groups",
        "user_roles",
        "group_roles",
        "role_permissions",
        "users",
        "groups",
        "roles",
        "permissions",
        "authorities",
        "amendment_mails",
        "amendment_documents",
        "amendments",
        "amendment_steps",
        "amendment_phases",
        "amendment_types",
        "contract_items",
        "contract_planned_items",
        "contract_mails",
        "contract_documents",
        "contracts",
        "contract_steps",
        "contract_phases",
        "contract_types",
        "submissions",
        "consultations",
        "consultation_steps",
        "consultation_phases",
        "award_methods",
        "item_distributions",
        "planned_items",
        "budget_modifications",
        "financial_operations",
        "item_statuses",
        "items",
        "rubrics",
        "domains",
        "budget_types",
        "clearances",
        "provider_representators",
        "provider_exclusions",
        "provider_economic_domains",
        "providers",
        "exclusion_types",
        "economic_domains",
        "economic_natures",
        "mail_references",
        "mails",
        "mail_types",
        "mail_natures",
        "documents",
        "document_types",
        "structures",
        "structure_types",
        "states",
        "countries",
        "realization_directors",
        "realization_natures",
        "realization_statuses",
        "approval_statuses",
        "currencies",
        "files",
    ):
        op.drop_table(table)
