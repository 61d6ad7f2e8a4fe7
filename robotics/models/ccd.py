"""Appeal case record models as stored in Core Case Data (CCD)."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..utils.errors import MappingError


class CcdModel(BaseModel):
    """Base for CCD case fields: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class BenefitType(CcdModel):
    code: Optional[str] = None
    description: Optional[str] = None


class Name(CcdModel):
    title: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        """Title, first and last name joined by single spaces, skipping blanks."""
        return " ".join(part for part in (self.title, self.first_name, self.last_name) if part)


class Address(CcdModel):
    line1: Optional[str] = None
    line2: Optional[str] = None
    town: Optional[str] = None
    county: Optional[str] = None
    postcode: Optional[str] = None


class Contact(CcdModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    mobile: Optional[str] = None


class Identity(CcdModel):
    nino: Optional[str] = None
    dob: Optional[str] = None


class Appointee(CcdModel):
    name: Optional[Name] = None
    identity: Optional[Identity] = None
    address: Optional[Address] = None
    contact: Optional[Contact] = None


class Appellant(CcdModel):
    name: Optional[Name] = None
    identity: Optional[Identity] = None
    address: Optional[Address] = None
    contact: Optional[Contact] = None
    appointee: Optional[Appointee] = None
    is_address_same_as_appointee: Optional[str] = None


class Representative(CcdModel):
    has_representative: Optional[str] = None
    name: Optional[Name] = None
    address: Optional[Address] = None
    contact: Optional[Contact] = None
    organisation: Optional[str] = None


class MrnDetails(CcdModel):
    mrn_date: Optional[str] = None
    mrn_late_reason: Optional[str] = None
    dwp_issuing_office: Optional[str] = None


class DateRange(CcdModel):
    start: Optional[str] = None
    end: Optional[str] = None


class ExcludeDate(CcdModel):
    value: Optional[DateRange] = None


class HearingOptions(CcdModel):
    wants_to_attend: Optional[str] = None
    language_interpreter: Optional[str] = None
    languages: Optional[str] = None
    sign_language_type: Optional[str] = None
    arrangements: Optional[List[str]] = None
    other: Optional[str] = None
    exclude_dates: Optional[List[ExcludeDate]] = None

    @property
    def wants_to_attend_hearing(self) -> bool:
        return (self.wants_to_attend or "").lower() == "yes"

    def _wants(self, arrangement: str) -> bool:
        return self.arrangements is not None and arrangement in self.arrangements

    @property
    def wants_sign_language_interpreter(self) -> bool:
        return self._wants("signLanguageInterpreter")

    @property
    def wants_hearing_loop(self) -> bool:
        return self._wants("hearingLoop")

    @property
    def wants_accessible_hearing_room(self) -> bool:
        return self._wants("disabledAccess")


class Appeal(CcdModel):
    benefit_type: Optional[BenefitType] = None
    appellant: Optional[Appellant] = None
    rep: Optional[Representative] = None
    mrn_details: Optional[MrnDetails] = None
    hearing_options: Optional[HearingOptions] = None


class RegionalProcessingCenter(CcdModel):
    name: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    address3: Optional[str] = None
    address4: Optional[str] = None
    city: Optional[str] = None
    postcode: Optional[str] = None
    phone_number: Optional[str] = None
    fax_number: Optional[str] = None


class DocumentLink(BaseModel):
    """Pointer to a stored document, in CCD's snake_case document shape."""

    document_url: str
    document_binary_url: Optional[str] = None
    document_filename: Optional[str] = None


class SscsCaseData(CcdModel):
    ccd_case_id: Optional[str] = None
    appeal: Optional[Appeal] = None
    evidence_present: Optional[str] = None
    regional_processing_center: Optional[RegionalProcessingCenter] = None
    robotics_json: Optional[DocumentLink] = None

    @classmethod
    def from_ccd(cls, raw: Dict[str, Any]) -> "SscsCaseData":
        """
        Parse CCD case data.

        Raises:
            MappingError: If a sub-structure has the wrong shape
        """
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise MappingError.malformed(_error_path(e), e) from e

    def to_ccd(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class SscsCaseDetails(BaseModel):
    """A case as returned by the CCD data store API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[int] = None
    jurisdiction: Optional[str] = None
    state: Optional[str] = None
    case_type_id: Optional[str] = None
    data: Optional[SscsCaseData] = Field(default=None, alias="case_data")

    @classmethod
    def from_ccd(cls, raw: Dict[str, Any]) -> "SscsCaseDetails":
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise MappingError.malformed(_error_path(e), e) from e


def _error_path(error: ValidationError) -> str:
    errors = error.errors()
    if not errors:
        return "caseData"
    return ".".join(str(part) for part in errors[0].get("loc", ())) or "caseData"
