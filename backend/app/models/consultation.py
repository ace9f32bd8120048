from datetime import date

from sqlalchemy import Date, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.mixins import AcronymMixin, DesignationMixin


class AwardMethod(DesignationMixin, AcronymMixin, Base):
    __tablename__ = "award_methods"
    __table_args__ = (UniqueConstraint("designation_fr"), UniqueConstraint("acronym_fr"))

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class ConsultationPhase(DesignationMixin, Base):
    __tablename__ = "consultation_phases"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class ConsultationStep(DesignationMixin, Base):
    __tablename__ = "consultation_steps"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    consultation_phase_id: Mapped[int] = mapped_column(
        ForeignKey("consultation_phases.id"), nullable=False, index=True
    )

    consultation_phase = relationship("ConsultationPhase")


class Consultation(DesignationMixin, Base):
    __tablename__ = "consultations"
    __table_args__ = (
        UniqueConstraint("reference"),
        UniqueConstraint("internal_id", "consultation_year"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    internal_id: Mapped[str | None] = mapped_column(String(20))
    consultation_year: Mapped[int | None] = mapped_column(Integer)
    reference: Mapped[str | None] = mapped_column(String(100))
    allocated_amount: Mapped[float | None] = mapped_column(Float)
    financial_estimation: Mapped[float | None] = mapped_column(Float)
    start_date: Mapped[date | None] = mapped_column(Date)
    approval_reference: Mapped[str | None] = mapped_column(String(100))
    approval_date: Mapped[date | None] = mapped_column(Date)
    publish_date: Mapped[date | None] = mapped_column(Date)
    deadline: Mapped[date | None] = mapped_column(Date)
    observation: Mapped[str | None] = mapped_column(Text)
    award_method_id: Mapped[int | None] = mapped_column(ForeignKey("award_methods.id"))
    budget_type_id: Mapped[int | None] = mapped_column(ForeignKey("budget_types.id"))
    realization_nature_id: Mapped[int | None] = mapped_column(ForeignKey("realization_natures.id"))
    realization_status_id: Mapped[int | None] = mapped_column(
        ForeignKey("realization_statuses.id")
    )
    approval_status_id: Mapped[int | None] = mapped_column(ForeignKey("approval_statuses.id"))
    realization_director_id: Mapped[int | None] = mapped_column(
        ForeignKey("realization_directors.id")
    )
    consultation_step_id: Mapped[int | None] = mapped_column(ForeignKey("consultation_steps.id"))

    award_method = relationship("AwardMethod")
    budget_type = relationship("BudgetType")
    realization_nature = relationship("RealizationNature")
    realization_status = relationship("RealizationStatus")
    approval_status = relationship("ApprovalStatus")
    realization_director = relationship("RealizationDirector")
    consultation_step = relationship("ConsultationStep")
    submissions = relationship("Submission", back_populates="consultation")


class Submission(Base):
    __tablename__ = "submissions"
    __table_args__ = (UniqueConstraint("consultation_id", "tender_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    submission_date: Mapped[date | None] = mapped_column(Date)
    financial_offer: Mapped[float | None] = mapped_column(Float)
    consultation_id: Mapped[int] = mapped_column(
        ForeignKey("consultations.id"), nullable=False, index=True
    )
    tender_id: Mapped[int] = mapped_column(ForeignKey("providers.id"), nullable=False, index=True)
    administrative_part_id: Mapped[int | None] = mapped_column(ForeignKey("files.id"))
    technical_part_id: Mapped[int | None] = mapped_column(ForeignKey("files.id"))
    financial_part_id: Mapped[int | None] = mapped_column(ForeignKey("files.id"))

    consultation = relationship("Consultation", back_populates="submissions")
    tender = relationship("Provider")
    administrative_part = relationship("File", foreign_keys=[administrative_part_id])
    technical_part = relationship("File", foreign_keys=[technical_part_id])
    financial_part = relationship("File", foreign_keys=[financial_part_id])
