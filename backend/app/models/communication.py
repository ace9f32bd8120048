from datetime import date

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Table, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.mixins import DesignationMixin

mail_references = Table(
    "mail_references",
    Base.metadata,
    Column("mail_id", ForeignKey("mails.id", ondelete="CASCADE"), primary_key=True),
    Column("referenced_mail_id", ForeignKey("mails.id", ondelete="CASCADE"), primary_key=True),
)


class MailNature(DesignationMixin, Base):
    __tablename__ = "mail_natures"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class MailType(DesignationMixin, Base):
    __tablename__ = "mail_types"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class Mail(Base):
    __tablename__ = "mails"
    __table_args__ = (UniqueConstraint("reference"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reference: Mapped[str | None] = mapped_column(String(100))
    record_number: Mapped[str | None] = mapped_column(String(100))
    subject: Mapped[str | None] = mapped_column(String(500))
    mail_date: Mapped[date | None] = mapped_column(Date)
    record_date: Mapped[date | None] = mapped_column(Date)
    mail_nature_id: Mapped[int] = mapped_column(
        ForeignKey("mail_natures.id"), nullable=False, index=True
    )
    mail_type_id: Mapped[int] = mapped_column(
        ForeignKey("mail_types.id"), nullable=False, index=True
    )
    structure_id: Mapped[int] = mapped_column(
        ForeignKey("structures.id"), nullable=False, index=True
    )
    file_id: Mapped[int] = mapped_column(ForeignKey("files.id"), nullable=False)

    mail_nature = relationship("MailNature")
    mail_type = relationship("MailType")
    structure = relationship("Structure")
    file = relationship("File")
    referenced_mails = relationship(
        "Mail",
        secondary=mail_references,
        primaryjoin=lambda: Mail.id == mail_references.c.mail_id,
        secondaryjoin=lambda: Mail.id == mail_references.c.referenced_mail_id,
    )
