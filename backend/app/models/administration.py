from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.mixins import AcronymMixin, DesignationMixin


class Country(DesignationMixin, Base):
    __tablename__ = "countries"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class State(Base):
    __tablename__ = "states"
    __table_args__ = (UniqueConstraint("code"), UniqueConstraint("designation_lt"))

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[int | None] = mapped_column(Integer)
    designation_ar: Mapped[str | None] = mapped_column(String(200))
    designation_lt: Mapped[str | None] = mapped_column(String(200))


class StructureType(DesignationMixin, Base):
    __tablename__ = "structure_types"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class Structure(DesignationMixin, AcronymMixin, Base):
    __tablename__ = "structures"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    structure_type_id: Mapped[int] = mapped_column(
        ForeignKey("structure_types.id"), nullable=False, index=True
    )
    structure_up_id: Mapped[int | None] = mapped_column(
        ForeignKey("structures.id"), nullable=True, index=True
    )

    structure_type = relationship("StructureType")
    structure_up = relationship("Structure", remote_side=[id])
