"""Maps an SSCS appeal case record to the robotics JSON payload."""

import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, Optional

from ..models.ccd import (
    Address,
    Appeal,
    Appellant,
    Appointee,
    Contact,
    HearingOptions,
    Representative,
)
from ..models.robotics import RoboticsWrapper
from ..utils.errors import MappingError

logger = logging.getLogger(__name__)

YES = "Yes"
NO = "No"
ESA_CASE_CODE = "051DD"
PIP_CASE_CODE = "002DD"

# Pattern fillers the robot expects when a representative's name is incomplete
REP_DEFAULT_TITLE = "s/m"
REP_DEFAULT_FIRST_NAME = "."
REP_DEFAULT_LAST_NAME = "."


class RoboticsJsonMapper:
    """
    Builds the flat robotics payload from a case record.

    Keys are only inserted when their source data passes the field's
    inclusion rule, so the payload never carries null values. Mapping is
    deterministic for a given clock.

    Attributes:
        clock: Callable returning today's date, used for ``appealDate``
    """

    def __init__(self, clock: Callable[[], date] = date.today):
        self.clock = clock

    def map(self, wrapper: RoboticsWrapper) -> Dict[str, Any]:
        """
        Build the robotics payload.

        Args:
            wrapper: Case record plus case id, venue name and evidence flag

        Returns:
            Payload dictionary, keys in robot field order

        Raises:
            MappingError: If a required sub-structure is missing or unreadable
        """
        appeal = _require(wrapper.sscs_case_data.appeal, "appeal")
        appellant = _require(appeal.appellant, "appeal.appellant")

        obj = self._build_appeal_details(appeal, wrapper.venue_name)

        obj["caseId"] = wrapper.ccd_case_id
        obj["evidencePresent"] = wrapper.evidence_present

        if appellant.appointee is not None:
            same_address = (appellant.is_address_same_as_appointee or "").lower() == "yes"
            obj["appointee"] = _build_appointee_details(appellant.appointee, same_address)

        obj["appellant"] = _build_appellant_details(appellant)

        rep = appeal.rep
        if rep is not None and rep.has_representative == YES:
            obj["representative"] = _build_representative_details(rep)

        hearing_arrangements = _build_hearing_arrangements(appeal.hearing_options)
        if hearing_arrangements:
            obj["hearingArrangements"] = hearing_arrangements

        logger.debug(f"Mapped robotics JSON for case {wrapper.ccd_case_id}: {len(obj)} fields")
        return obj

    def _build_appeal_details(self, appeal: Appeal, venue_name: Optional[str]) -> Dict[str, Any]:
        benefit_type = _require(appeal.benefit_type, "appeal.benefitType")
        appellant = appeal.appellant
        identity = _require(appellant.identity, "appeal.appellant.identity")
        hearing_options = _require(appeal.hearing_options, "appeal.hearingOptions")

        obj: Dict[str, Any] = {
            "caseCode": get_case_code(_require(benefit_type.code, "appeal.benefitType.code")),
            "appellantNino": identity.nino,
            # Holds the hearing venue name, not a postcode; the robot reads this field as the venue
            "appellantPostCode": venue_name,
            "appealDate": self.clock().isoformat(),
        }

        mrn = appeal.mrn_details
        if mrn is not None:
            if mrn.mrn_date is not None:
                obj["mrnDate"] = mrn.mrn_date
            if mrn.mrn_late_reason is not None:
                obj["mrnReasonForBeingLate"] = mrn.mrn_late_reason
            if mrn.dwp_issuing_office is not None:
                obj["pipNumber"] = mrn.dwp_issuing_office

        wants_to_attend = hearing_options.wants_to_attend_hearing
        obj["hearingType"] = "Oral" if wants_to_attend else "Paper"

        if wants_to_attend:
            name = _require(appellant.name, "appeal.appellant.name")
            obj["hearingRequestParty"] = name.full_name

        return obj


def get_case_code(benefit_code: Optional[str]) -> str:
    """ESA appeals get the ESA code; every other benefit falls back to the PIP code."""
    if benefit_code is not None and benefit_code.lower() == "esa":
        return ESA_CASE_CODE
    return PIP_CASE_CODE


def _require(value: Any, path: str) -> Any:
    if value is None:
        raise MappingError.missing_field(path)
    return value


def _text(value: Optional[str]) -> str:
    return value if value is not None else ""


def _build_appellant_details(appellant: Appellant) -> Dict[str, Any]:
    name = _require(appellant.name, "appeal.appellant.name")
    json = {
        "title": _text(name.title),
        "firstName": _text(name.first_name),
        "lastName": _text(name.last_name),
    }
    return _build_contact_details(json, appellant.address, appellant.contact, "appeal.appellant")


def _build_appointee_details(appointee: Appointee, same_address_as_appellant: bool) -> Dict[str, Any]:
    name = _require(appointee.name, "appeal.appellant.appointee.name")
    json = {
        "title": _text(name.title),
        "firstName": _text(name.first_name),
        "lastName": _text(name.last_name),
        "sameAddressAsAppellant": YES if same_address_as_appellant else NO,
    }
    return _build_contact_details(json, appointee.address, appointee.contact, "appeal.appellant.appointee")


def _build_representative_details(rep: Representative) -> Dict[str, Any]:
    name = rep.name
    title = name.title if name is not None and name.title is not None else REP_DEFAULT_TITLE
    first_name = name.first_name if name is not None and name.first_name is not None else REP_DEFAULT_FIRST_NAME
    last_name = name.last_name if name is not None and name.last_name is not None else REP_DEFAULT_LAST_NAME

    json: Dict[str, Any] = {
        "title": title,
        "firstName": first_name,
        "lastName": last_name,
    }
    if rep.organisation is not None:
        json["organisation"] = rep.organisation

    return _build_contact_details(json, rep.address, rep.contact, "appeal.rep")


def _build_contact_details(
    json: Dict[str, Any],
    address: Optional[Address],
    contact: Optional[Contact],
    path: str
) -> Dict[str, Any]:
    address = _require(address, f"{path}.address")
    contact = _require(contact, f"{path}.contact")

    json["addressLine1"] = _text(address.line1)
    if address.line2 is not None:
        json["addressLine2"] = address.line2

    json["townOrCity"] = _text(address.town)
    json["county"] = _text(address.county)
    json["postCode"] = _text(address.postcode)
    json["phoneNumber"] = _text(contact.mobile)
    json["email"] = _text(contact.email)

    return json


def _build_hearing_arrangements(hearing_options: Optional[HearingOptions]) -> Dict[str, Any]:
    arrangements: Dict[str, Any] = {}
    if hearing_options is None:
        return arrangements

    if hearing_options.arrangements is not None:
        if hearing_options.language_interpreter == YES and hearing_options.languages is not None:
            arrangements["languageInterpreter"] = hearing_options.languages

        if hearing_options.wants_sign_language_interpreter and hearing_options.sign_language_type is not None:
            arrangements["signLanguageInterpreter"] = hearing_options.sign_language_type

        arrangements["hearingLoop"] = YES if hearing_options.wants_hearing_loop else NO
        arrangements["accessibleHearingRoom"] = YES if hearing_options.wants_accessible_hearing_room else NO
    elif hearing_options.other is not None or hearing_options.exclude_dates is not None:
        arrangements["hearingLoop"] = NO
        arrangements["accessibleHearingRoom"] = NO

    if hearing_options.other is not None:
        arrangements["other"] = hearing_options.other

    if hearing_options.exclude_dates:
        # Start and end are assumed to be the same day; only start is sent
        arrangements["datesCantAttend"] = [
            _exclude_date_start(exclude_date, index)
            for index, exclude_date in enumerate(hearing_options.exclude_dates)
        ]

    return arrangements


def _exclude_date_start(exclude_date, index: int) -> str:
    path = f"appeal.hearingOptions.excludeDates[{index}].value.start"
    value = _require(exclude_date.value, f"appeal.hearingOptions.excludeDates[{index}].value")
    start = _require(value.start, path)
    try:
        return datetime.strptime(start, "%Y-%m-%d").date().isoformat()
    except ValueError as e:
        raise MappingError.malformed(path, e) from e
