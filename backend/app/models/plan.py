from datetime import date

from sqlalchemy import Date, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.mixins import AcronymMixin, DesignationMixin


class BudgetType(DesignationMixin, AcronymMixin, Base):
    __tablename__ = "budget_types"
    __table_args__ = (UniqueConstraint("designation_fr"), UniqueConstraint("acronym_fr"))

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class Domain(DesignationMixin, Base):
    __tablename__ = "domains"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    rubrics = relationship("Rubric", back_populates="domain")


class Rubric(DesignationMixin, Base):
    __tablename__ = "rubrics"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    domain_id: Mapped[int] = mapped_column(ForeignKey("domains.id"), nullable=False, index=True)

    domain = relationship("Domain", back_populates="rubrics")


class Item(DesignationMixin, Base):
    __tablename__ = "items"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rubric_id: Mapped[int] = mapped_column(ForeignKey("rubrics.id"), nullable=False, index=True)

    rubric = relationship("Rubric")


class ItemStatus(DesignationMixin, Base):
    __tablename__ = "item_statuses"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class FinancialOperation(Base):
    __tablename__ = "financial_operations"
    __table_args__ = (UniqueConstraint("operation"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    operation: Mapped[str] = mapped_column(String(200), nullable=False)
    budget_year: Mapped[str] = mapped_column(String(4), nullable=False)
    budget_type_id: Mapped[int] = mapped_column(
        ForeignKey("budget_types.id"), nullable=False, index=True
    )

    budget_type = relationship("BudgetType")


class BudgetModification(Base):
    __tablename__ = "budget_modifications"
    __table_args__ = (UniqueConstraint("approval_date", "demande_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    object: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500))
    approval_date: Mapped[date | None] = mapped_column(Date)
    demande_id: Mapped[int] = mapped_column(ForeignKey("documents.id"), nullable=False)
    response_id: Mapped[int] = mapped_column(ForeignKey("documents.id"), nullable=False)

    demande = relationship("Document", foreign_keys=[demande_id])
    response = relationship("Document", foreign_keys=[response_id])


class PlannedItem(Base):
    __tablename__ = "planned_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    designation: Mapped[str] = mapped_column(String(200), nullable=False)
    unitair_cost: Mapped[float | None] = mapped_column(Float)
    planed_quantity: Mapped[float | None] = mapped_column(Float)
    allocated_amount: Mapped[float | None] = mapped_column(Float)
    item_status_id: Mapped[int] = mapped_column(ForeignKey("item_statuses.id"), nullable=False)
    item_id: Mapped[int] = mapped_column(ForeignKey("items.id"), nullable=False, index=True)
    financial_operation_id: Mapped[int] = mapped_column(
        ForeignKey("financial_operations.id"), nullable=False, index=True
    )
    budget_modification_id: Mapped[int | None] = mapped_column(
        ForeignKey("budget_modifications.id"), nullable=True
    )

    item_status = relationship("ItemStatus")
    item = relationship("Item")
    financial_operation = relationship("FinancialOperation")
    budget_modification = relationship("BudgetModification")
    distributions = relationship("ItemDistribution", back_populates="planned_item")


class ItemDistribution(Base):
    __tablename__ = "item_distributions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    planned_item_id: Mapped[int] = mapped_column(
        ForeignKey("planned_items.id"), nullable=False, index=True
    )
    structure_id: Mapped[int] = mapped_column(ForeignKey("structures.id"), nullable=False)

    planned_item = relationship("PlannedItem", back_populates="distributions")
    structure = relationship("Structure")
