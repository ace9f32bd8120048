from datetime import date

from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String, Table, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.mixins import AcronymMixin, DesignationMixin

provider_economic_domains = Table(
    "provider_economic_domains",
    Base.metadata,
    Column("provider_id", ForeignKey("providers.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "economic_domain_id", ForeignKey("economic_domains.id", ondelete="CASCADE"), primary_key=True
    ),
)


class EconomicNature(DesignationMixin, AcronymMixin, Base):
    __tablename__ = "economic_natures"
    __table_args__ = (UniqueConstraint("designation_fr"), UniqueConstraint("acronym_fr"))

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class EconomicDomain(DesignationMixin, Base):
    __tablename__ = "economic_domains"
    __table_args__ = (UniqueConstraint("code"), UniqueConstraint("designation_fr"))

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[int] = mapped_column(Integer, nullable=False)


class ExclusionType(DesignationMixin, Base):
    __tablename__ = "exclusion_types"
    __table_args__ = (UniqueConstraint("designation_fr"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class Provider(Base):
    __tablename__ = "providers"
    __table_args__ = (
        UniqueConstraint("designation_lt"),
        UniqueConstraint("designation_ar"),
        UniqueConstraint("comercial_registry_number"),
        UniqueConstraint("taxe_identity_number"),
        UniqueConstraint("stat_identity_number"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    designation_lt: Mapped[str | None] = mapped_column(String(200))
    designation_ar: Mapped[str | None] = mapped_column(String(200))
    acronym_lt: Mapped[str | None] = mapped_column(String(50))
    acronym_ar: Mapped[str | None] = mapped_column(String(50))
    address: Mapped[str | None] = mapped_column(String(300))
    capital: Mapped[float | None] = mapped_column(Float)
    comercial_registry_number: Mapped[str | None] = mapped_column(String(50))
    comercial_registry_date: Mapped[date | None] = mapped_column(Date)
    taxe_identity_number: Mapped[str | None] = mapped_column(String(50))
    stat_identity_number: Mapped[str | None] = mapped_column(String(50))
    bank: Mapped[str | None] = mapped_column(String(100))
    bank_account: Mapped[str | None] = mapped_column(String(50))
    swift_number: Mapped[str | None] = mapped_column(String(20))
    phone_numbers: Mapped[str | None] = mapped_column(String(200))
    fax_numbers: Mapped[str | None] = mapped_column(String(200))
    mail: Mapped[str | None] = mapped_column(String(100))
    website: Mapped[str | None] = mapped_column(String(200))
    logo_id: Mapped[int | None] = mapped_column(ForeignKey("files.id"), nullable=True)
    economic_nature_id: Mapped[int] = mapped_column(
        ForeignKey("economic_natures.id"), nullable=False, index=True
    )
    country_id: Mapped[int] = mapped_column(ForeignKey("countries.id"), nullable=False, index=True)
    state_id: Mapped[int | None] = mapped_column(ForeignKey("states.id"), nullable=True)

    logo = relationship("File")
    economic_nature = relationship("EconomicNature")
    country = relationship("Country")
    state = relationship("State")
    economic_domains = relationship("EconomicDomain", secondary=provider_economic_domains)


class ProviderExclusion(Base):
    __tablename__ = "provider_exclusions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date)
    cause: Mapped[str | None] = mapped_column(String(500))
    exclusion_type_id: Mapped[int] = mapped_column(
        ForeignKey("exclusion_types.id"), nullable=False, index=True
    )
    provider_id: Mapped[int] = mapped_column(ForeignKey("providers.id"), nullable=False, index=True)
    reference_id: Mapped[int | None] = mapped_column(ForeignKey("mails.id"), nullable=True)

    exclusion_type = relationship("ExclusionType")
    provider = relationship("Provider")
    reference = relationship("Mail")


class ProviderRepresentator(Base):
    __tablename__ = "provider_representators"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    firstname: Mapped[str] = mapped_column(String(100), nullable=False)
    lastname: Mapped[str] = mapped_column(String(100), nullable=False)
    birth_date: Mapped[date | None] = mapped_column(Date)
    birth_place: Mapped[str | None] = mapped_column(String(100))
    address: Mapped[str | None] = mapped_column(String(300))
    job_title: Mapped[str | None] = mapped_column(String(100))
    mobile_phone_number: Mapped[str | None] = mapped_column(String(30))
    fix_phone_number: Mapped[str | None] = mapped_column(String(30))
    mail: Mapped[str | None] = mapped_column(String(100))
    provider_id: Mapped[int] = mapped_column(ForeignKey("providers.id"), nullable=False, index=True)

    provider = relationship("Provider")


class Clearance(Base):
    __tablename__ = "clearances"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date)
    provider_id: Mapped[int] = mapped_column(ForeignKey("providers.id"), nullable=False, index=True)
    provider_representator_id: Mapped[int | None] = mapped_column(
        ForeignKey("provider_representators.id"), nullable=True
    )
    reference_id: Mapped[int | None] = mapped_column(ForeignKey("mails.id"), nullable=True)

    provider = relationship("Provider")
    provider_representator = relationship("ProviderRepresentator")
    reference = relationship("Mail")
