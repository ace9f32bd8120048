from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.mixins import DesignationMixin


class DocumentType(DesignationMixin, Base):
    __tablename__ = "document_types"
    __table_args__ = (UniqueConstraint("designation_fr", "scope"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    scope: Mapped[int] = mapped_column(Integer, nullable=False)


class Document(Base):
    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reference: Mapped[str | None] = mapped_column(String(100))
    issue_date: Mapped[date | None] = mapped_column(Date)
    document_type_id: Mapped[int] = mapped_column(
        ForeignKey("document_types.id"), nullable=False, index=True
    )
    file_id: Mapped[int | None] = mapped_column(ForeignKey("files.id"), nullable=True)

    document_type = relationship("DocumentType")
    file = relationship("File")
