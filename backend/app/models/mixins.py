from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column


class DesignationMixin:
    designation_ar: Mapped[str | None] = mapped_column(String(200))
    designation_en: Mapped[str | None] = mapped_column(String(200))
    designation_fr: Mapped[str | None] = mapped_column(String(200))


class AcronymMixin:
    acronym_ar: Mapped[str | None] = mapped_column(String(50))
    acronym_en: Mapped[str | None] = mapped_column(String(50))
    acronym_fr: Mapped[str | None] = mapped_column(String(50))
