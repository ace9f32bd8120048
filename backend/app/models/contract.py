from datetime import date

from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String, Table, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.mixins import DesignationMixin

contract_documents = Table(
    "contract_documents",
    Base.metadata,
    Column("contract_id", ForeignKey("contracts.id", ondelete="CASCADE"), primary_key=True),
    Column("document_id", ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True),
)

contract_mails = Table(
    "contract_mails",
    Base.metadata,
    Column("contract_id", ForeignKey("contracts.id", ondelete="CASCADE"), primary_key=True),
    Column("mail_id", ForeignKey("mails.id", ondelete="CASCADE"), primary_key=True),
)

contract_planned_items = Table(
    "contract_planned_items",
    Base.metadata,
    Column("contract_id", ForeignKey("contracts.id", ondelete="CASCADE"), primary_key=True),
    Column("planned_item_id", ForeignKey("planned_items.id", ondelete="CASCADE"), primary_key=True),
)


class ContractType(DesignationMixin, Base):
    __tablename__ = "contract_types"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class ContractPhase(DesignationMixin, Base):
    __tablename__ = "contract_phases"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class ContractStep(DesignationMixin, Base):
    __tablename__ = "contract_steps"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contract_phase_id: Mapped[int] = mapped_column(
        ForeignKey("contract_phases.id"), nullable=False, index=True
    )

    contract_phase = relationship("ContractPhase")


class Contract(DesignationMixin, Base):
    __tablename__ = "contracts"
    __table_args__ = (UniqueConstraint("internal_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    internal_id: Mapped[str] = mapped_column(String(20), nullable=False)
    contract_year: Mapped[int | None] = mapped_column(Integer)
    reference: Mapped[str | None] = mapped_column(String(100))
    amount: Mapped[float | None] = mapped_column(Float)
    transferable_amount: Mapped[float | None] = mapped_column(Float)
    start_date: Mapped[date | None] = mapped_column(Date)
    approval_reference: Mapped[str | None] = mapped_column(String(100))
    approval_date: Mapped[date | None] = mapped_column(Date)
    contract_date: Mapped[date | None] = mapped_column(Date)
    notify_date: Mapped[date | None] = mapped_column(Date)
    contract_duration: Mapped[str | None] = mapped_column(String(50))
    observation: Mapped[str | None] = mapped_column(Text)
    contract_type_id: Mapped[int] = mapped_column(ForeignKey("contract_types.id"), nullable=False)
    provider_id: Mapped[int] = mapped_column(ForeignKey("providers.id"), nullable=False, index=True)
    currency_id: Mapped[int] = mapped_column(ForeignKey("currencies.id"), nullable=False)
    realization_status_id: Mapped[int | None] = mapped_column(
        ForeignKey("realization_statuses.id")
    )
    contract_step_id: Mapped[int | None] = mapped_column(ForeignKey("contract_steps.id"))
    approval_status_id: Mapped[int | None] = mapped_column(ForeignKey("approval_statuses.id"))
    consultation_id: Mapped[int | None] = mapped_column(ForeignKey("consultations.id"), index=True)
    contract_up_id: Mapped[int | None] = mapped_column(ForeignKey("contracts.id"))

    contract_type = relationship("ContractType")
    provider = relationship("Provider")
    currency = relationship("Currency")
    realization_status = relationship("RealizationStatus")
    contract_step = relationship("ContractStep")
    approval_status = relationship("ApprovalStatus")
    consultation = relationship("Consultation")
    contract_up = relationship("Contract", remote_side=[id])
    documents = relationship("Document", secondary=contract_documents)
    referenced_mails = relationship("Mail", secondary=contract_mails)
    planned_items = relationship("PlannedItem", secondary=contract_planned_items)


class ContractItem(Base):
    __tablename__ = "contract_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    designation: Mapped[str] = mapped_column(String(200), nullable=False)
    reference: Mapped[str | None] = mapped_column(String(100))
    quantity: Mapped[float | None] = mapped_column(Float)
    unit_price: Mapped[float | None] = mapped_column(Float)
    observation: Mapped[str | None] = mapped_column(Text)
    contract_id: Mapped[int] = mapped_column(ForeignKey("contracts.id"), nullable=False, index=True)

    contract = relationship("Contract")
