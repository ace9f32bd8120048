from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.administration import CountryRead, StateRead
from app.schemas.common import AcronymFields, DesignationFields, DesignationRead, ReadModel
from app.schemas.files import FileRead


class EconomicNatureCreate(DesignationFields, AcronymFields):
    pass


class EconomicNatureRead(DesignationRead):
    acronym_ar: Optional[str] = None
    acronym_en: Optional[str] = None
    acronym_fr: Optional[str] = None


class EconomicDomainCreate(DesignationFields):
    code: Optional[int] = None


class EconomicDomainRead(DesignationRead):
    code: Optional[int] = None


class ExclusionTypeCreate(DesignationFields):
    pass


class ExclusionTypeRead(DesignationRead):
    pass


class ProviderCreate(BaseModel):
    designation_lt: Optional[str] = Field(None, max_length=200)
    designation_ar: Optional[str] = Field(None, max_length=200)
    acronym_lt: Optional[str] = Field(None, max_length=50)
    acronym_ar: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=300)
    capital: Optional[float] = Field(None, ge=0)
    comercial_registry_number: Optional[str] = Field(None, max_length=50)
    comercial_registry_date: Optional[date] = None
    taxe_identity_number: Optional[str] = Field(None, max_length=50)
    stat_identity_number: Optional[str] = Field(None, max_length=50)
    bank: Optional[str] = Field(None, max_length=100)
    bank_account: Optional[str] = Field(None, max_length=50)
    swift_number: Optional[str] = Field(None, max_length=20)
    phone_numbers: Optional[str] = Field(None, max_length=200)
    fax_numbers: Optional[str] = Field(None, max_length=200)
    mail: Optional[str] = Field(None, max_length=100)
    website: Optional[str] = Field(None, max_length=200)
    logo_id: Optional[int] = None
    economic_nature_id: Optional[int] = None
    country_id: Optional[int] = None
    state_id: Optional[int] = None
    economic_domain_ids: Optional[List[int]] = None


class ProviderRead(ReadModel):
    id: int
    designation_lt: Optional[str] = None
    designation_ar: Optional[str] = None
    acronym_lt: Optional[str] = None
    acronym_ar: Optional[str] = None
    address: Optional[str] = None
    capital: Optional[float] = None
    comercial_registry_number: Optional[str] = None
    comercial_registry_date: Optional[date] = None
    taxe_identity_number: Optional[str] = None
    stat_identity_number: Optional[str] = None
    bank: Optional[str] = None
    bank_account: Optional[str] = None
    swift_number: Optional[str] = None
    phone_numbers: Optional[str] = None
    fax_numbers: Optional[str] = None
    mail: Optional[str] = None
    website: Optional[str] = None
    logo_id: Optional[int] = None
    economic_nature_id: Optional[int] = None
    country_id: Optional[int] = None
    state_id: Optional[int] = None
    economic_domain_ids: List[int] = []

    logo: Optional[FileRead] = None
    economic_nature: Optional[EconomicNatureRead] = None
    country: Optional[CountryRead] = None
    state: Optional[StateRead] = None


class ProviderExclusionCreate(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    cause: Optional[str] = Field(None, max_length=500)
    exclusion_type_id: Optional[int] = None
    provider_id: Optional[int] = None
    reference_id: Optional[int] = None


class ProviderExclusionRead(ReadModel):
    id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    cause: Optional[str] = None
    exclusion_type_id: Optional[int] = None
    provider_id: Optional[int] = None
    reference_id: Optional[int] = None

    exclusion_type: Optional[ExclusionTypeRead] = None
    provider: Optional[ProviderRead] = None


class ProviderRepresentatorCreate(BaseModel):
    firstname: Optional[str] = Field(None, max_length=100)
    lastname: Optional[str] = Field(None, max_length=100)
    birth_date: Optional[date] = None
    birth_place: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = Field(None, max_length=300)
    job_title: Optional[str] = Field(None, max_length=100)
    mobile_phone_number: Optional[str] = Field(None, max_length=30)
    fix_phone_number: Optional[str] = Field(None, max_length=30)
    mail: Optional[str] = Field(None, max_length=100)
    provider_id: Optional[int] = None


class ProviderRepresentatorRead(ReadModel):
    id: int
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    birth_date: Optional[date] = None
    birth_place: Optional[str] = None
    address: Optional[str] = None
    job_title: Optional[str] = None
    mobile_phone_number: Optional[str] = None
    fix_phone_number: Optional[str] = None
    mail: Optional[str] = None
    provider_id: Optional[int] = None

    provider: Optional[ProviderRead] = None


class ClearanceCreate(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    provider_id: Optional[int] = None
    provider_representator_id: Optional[int] = None
    reference_id: Optional[int] = None


class ClearanceRead(ReadModel):
    id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    provider_id: Optional[int] = None
    provider_representator_id: Optional[int] = None
    reference_id: Optional[int] = None

    provider: Optional[ProviderRead] = None
    provider_representator: Optional[ProviderRepresentatorRead] = None
