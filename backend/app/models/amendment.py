from datetime import date

from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String, Table, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.mixins import DesignationMixin

amendment_documents = Table(
    "amendment_documents",
    Base.metadata,
    Column("amendment_id", ForeignKey("amendments.id", ondelete="CASCADE"), primary_key=True),
    Column("document_id", ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True),
)

amendment_mails = Table(
    "amendment_mails",
    Base.metadata,
    Column("amendment_id", ForeignKey("amendments.id", ondelete="CASCADE"), primary_key=True),
    Column("mail_id", ForeignKey("mails.id", ondelete="CASCADE"), primary_key=True),
)


class AmendmentType(DesignationMixin, Base):
    __tablename__ = "amendment_types"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class AmendmentPhase(DesignationMixin, Base):
    __tablename__ = "amendment_phases"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    steps = relationship("AmendmentStep", back_populates="amendment_phase")


class AmendmentStep(DesignationMixin, Base):
    __tablename__ = "amendment_steps"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    amendment_phase_id: Mapped[int] = mapped_column(
        ForeignKey("amendment_phases.id"), nullable=False, index=True
    )

    amendment_phase = relationship("AmendmentPhase", back_populates="steps")


class Amendment(DesignationMixin, Base):
    __tablename__ = "amendments"
    __table_args__ = (UniqueConstraint("reference"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    internal_id: Mapped[int] = mapped_column(Integer, nullable=False)
    reference: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[float | None] = mapped_column(Float)
    transferable_amount: Mapped[float | None] = mapped_column(Float)
    start_date: Mapped[date | None] = mapped_column(Date)
    approval_date: Mapped[date | None] = mapped_column(Date)
    notify_date: Mapped[date | None] = mapped_column(Date)
    observation: Mapped[str | None] = mapped_column(Text)
    contract_id: Mapped[int] = mapped_column(ForeignKey("contracts.id"), nullable=False, index=True)
    amendment_type_id: Mapped[int] = mapped_column(ForeignKey("amendment_types.id"), nullable=False)
    realization_status_id: Mapped[int] = mapped_column(
        ForeignKey("realization_statuses.id"), nullable=False
    )
    amendment_step_id: Mapped[int] = mapped_column(ForeignKey("amendment_steps.id"), nullable=False)
    approval_status_id: Mapped[int | None] = mapped_column(ForeignKey("approval_statuses.id"))
    currency_id: Mapped[int] = mapped_column(ForeignKey("currencies.id"), nullable=False)

    contract = relationship("Contract")
    amendment_type = relationship("AmendmentType")
    realization_status = relationship("RealizationStatus")
    amendment_step = relationship("AmendmentStep")
    approval_status = relationship("ApprovalStatus")
    currency = relationship("Currency")
    documents = relationship("Document", secondary=amendment_documents)
    referenced_mails = relationship("Mail", secondary=amendment_mails)
