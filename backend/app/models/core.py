from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import DesignationMixin


class Currency(DesignationMixin, Base):
    __tablename__ = "currencies"
    __table_args__ = (
        UniqueConstraint("designation_ar"),
        UniqueConstraint("designation_en"),
        UniqueConstraint("designation_fr"),
        UniqueConstraint("code_ar"),
        UniqueConstraint("code_lt"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code_ar: Mapped[str | None] = mapped_column(String(10))
    code_lt: Mapped[str | None] = mapped_column(String(10))


class ApprovalStatus(DesignationMixin, Base):
    __tablename__ = "approval_statuses"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class RealizationStatus(DesignationMixin, Base):
    __tablename__ = "realization_statuses"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class RealizationNature(DesignationMixin, Base):
    __tablename__ = "realization_natures"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class RealizationDirector(DesignationMixin, Base):
    __tablename__ = "realization_directors"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
