"""Tests for mapping appeal cases to robotics JSON."""

import json

import pytest

from conftest import FIXED_DATE
from robotics.mapping import RoboticsJsonMapper, RoboticsJsonValidator, get_case_code
from robotics.models import RoboticsWrapper
from robotics.utils.errors import MappingError


def _map(case_data, venue="Middlesbrough", case_id=123):
    mapper = RoboticsJsonMapper(clock=lambda: FIXED_DATE)
    return mapper.map(RoboticsWrapper(
        sscs_case_data=case_data,
        ccd_case_id=case_id,
        venue_name=venue,
        evidence_present=case_data.evidence_present,
    ))


def test_full_case_maps_every_field(case_data):
    payload = _map(case_data)

    assert payload == {
        "caseCode": "002DD",
        "appellantNino": "JT 12 31 23 D",
        "appellantPostCode": "Middlesbrough",
        "appealDate": "2026-10-19",
        "mrnDate": "2018-06-29",
        "mrnReasonForBeingLate": "Lost my paperwork",
        "pipNumber": "DWP PIP (1)",
        "hearingType": "Oral",
        "hearingRequestParty": "Mr Joe Bloggs",
        "caseId": 123,
        "evidencePresent": "Yes",
        "appellant": {
            "title": "Mr",
            "firstName": "Joe",
            "lastName": "Bloggs",
            "addressLine1": "4 Sutton Road",
            "addressLine2": "Flat 1",
            "townOrCity": "Middlesbrough",
            "county": "Cleveland",
            "postCode": "TS1 1ST",
            "phoneNumber": "07123456789",
            "email": "joe@bloggs.com",
        },
        "representative": {
            "title": "Mrs",
            "firstName": "Jane",
            "lastName": "Smith",
            "organisation": "Citizens Advice",
            "addressLine1": "1 Rep Street",
            "townOrCity": "Stockton",
            "county": "Cleveland",
            "postCode": "TS2 2AB",
            "phoneNumber": "07987654321",
            "email": "rep@example.com",
        },
        "hearingArrangements": {
            "languageInterpreter": "French",
            "signLanguageInterpreter": "British Sign Language",
            "hearingLoop": "Yes",
            "accessibleHearingRoom": "Yes",
            "other": "Morning hearings only",
            "datesCantAttend": ["2018-06-30", "2018-07-30"],
        },
    }


def test_full_case_payload_passes_schema(case_data):
    RoboticsJsonValidator().validate(_map(case_data))


def test_mapping_is_deterministic(case_data):
    assert json.dumps(_map(case_data)) == json.dumps(_map(case_data))


def test_mapping_does_not_modify_case_data(case_data):
    before = case_data.model_dump()
    _map(case_data)
    assert case_data.model_dump() == before


def test_appellant_post_code_holds_venue_name(case_data):
    payload = _map(case_data, venue="Teesside")
    assert payload["appellantPostCode"] == "Teesside"
    assert payload["appellant"]["postCode"] == "TS1 1ST"


@pytest.mark.parametrize("code, expected", [
    ("esa", "051DD"),
    ("ESA", "051DD"),
    ("pip", "002DD"),
    ("PIP", "002DD"),
    ("UC", "002DD"),
    (None, "002DD"),
])
def test_get_case_code(code, expected):
    assert get_case_code(code) == expected


def test_esa_benefit_gets_esa_case_code(build_case_data):
    def edit(raw):
        raw["appeal"]["benefitType"]["code"] = "ESA"
    assert _map(build_case_data(edit))["caseCode"] == "051DD"


def test_paper_hearing_has_no_request_party(build_case_data):
    def edit(raw):
        raw["appeal"]["hearingOptions"]["wantsToAttend"] = "No"
    payload = _map(build_case_data(edit))

    assert payload["hearingType"] == "Paper"
    assert "hearingRequestParty" not in payload


def test_oral_hearing_request_party_skips_missing_title(build_case_data):
    def edit(raw):
        del raw["appeal"]["appellant"]["name"]["title"]
    assert _map(build_case_data(edit))["hearingRequestParty"] == "Joe Bloggs"


def test_missing_mrn_details_omits_mrn_fields(build_case_data):
    def edit(raw):
        del raw["appeal"]["mrnDetails"]
    payload = _map(build_case_data(edit))

    for key in ("mrnDate", "mrnReasonForBeingLate", "pipNumber"):
        assert key not in payload


def test_partial_mrn_details_only_maps_present_fields(build_case_data):
    def edit(raw):
        raw["appeal"]["mrnDetails"] = {"mrnDate": "2018-06-29"}
    payload = _map(build_case_data(edit))

    assert payload["mrnDate"] == "2018-06-29"
    assert "mrnReasonForBeingLate" not in payload
    assert "pipNumber" not in payload


def test_representative_defaults_for_missing_name(build_case_data):
    def edit(raw):
        del raw["appeal"]["rep"]["name"]
    rep = _map(build_case_data(edit))["representative"]

    assert (rep["title"], rep["firstName"], rep["lastName"]) == ("s/m", ".", ".")


def test_representative_defaults_per_missing_name_part(build_case_data):
    def edit(raw):
        raw["appeal"]["rep"]["name"] = {"lastName": "Smith"}
    rep = _map(build_case_data(edit))["representative"]

    assert (rep["title"], rep["firstName"], rep["lastName"]) == ("s/m", ".", "Smith")


def test_representative_without_organisation(build_case_data):
    def edit(raw):
        del raw["appeal"]["rep"]["organisation"]
    assert "organisation" not in _map(build_case_data(edit))["representative"]


@pytest.mark.parametrize("has_representative", ["No", "yes", None])
def test_representative_omitted_unless_exactly_yes(build_case_data, has_representative):
    def edit(raw):
        raw["appeal"]["rep"]["hasRepresentative"] = has_representative
    assert "representative" not in _map(build_case_data(edit))


def test_appointee_block(build_case_data):
    def edit(raw):
        raw["appeal"]["appellant"]["isAddressSameAsAppointee"] = "yes"
        raw["appeal"]["appellant"]["appointee"] = {
            "name": {"title": "Ms", "firstName": "Ann", "lastName": "Bloggs"},
            "address": {"line1": "4 Sutton Road", "town": "Middlesbrough",
                        "county": "Cleveland", "postcode": "TS1 1ST"},
            "contact": {"email": "ann@bloggs.com", "mobile": "07000000000"},
        }
    payload = _map(build_case_data(edit))

    assert payload["appointee"] == {
        "title": "Ms",
        "firstName": "Ann",
        "lastName": "Bloggs",
        "sameAddressAsAppellant": "Yes",
        "addressLine1": "4 Sutton Road",
        "townOrCity": "Middlesbrough",
        "county": "Cleveland",
        "postCode": "TS1 1ST",
        "phoneNumber": "07000000000",
        "email": "ann@bloggs.com",
    }
    RoboticsJsonValidator().validate(payload)


def test_no_appointee_block_without_appointee(case_data):
    assert "appointee" not in _map(case_data)


def test_contact_block_blanks_missing_values(build_case_data):
    def edit(raw):
        raw["appeal"]["appellant"]["address"] = {"line1": "4 Sutton Road"}
        raw["appeal"]["appellant"]["contact"] = {}
    appellant = _map(build_case_data(edit))["appellant"]

    assert "addressLine2" not in appellant
    assert appellant["townOrCity"] == ""
    assert appellant["county"] == ""
    assert appellant["postCode"] == ""
    assert appellant["phoneNumber"] == ""
    assert appellant["email"] == ""


def test_arrangements_without_interpreter_requests(build_case_data):
    def edit(raw):
        options = raw["appeal"]["hearingOptions"]
        options["languageInterpreter"] = "No"
        options["arrangements"] = ["hearingLoop"]
        del options["other"]
        del options["excludeDates"]
    arrangements = _map(build_case_data(edit))["hearingArrangements"]

    assert arrangements == {"hearingLoop": "Yes", "accessibleHearingRoom": "No"}


def test_sign_language_needs_arrangement_and_type(build_case_data):
    def edit(raw):
        raw["appeal"]["hearingOptions"]["arrangements"] = ["hearingLoop"]
    arrangements = _map(build_case_data(edit))["hearingArrangements"]

    assert "signLanguageInterpreter" not in arrangements


def test_other_without_arrangements_defaults_loop_and_access(build_case_data):
    def edit(raw):
        options = raw["appeal"]["hearingOptions"]
        del options["arrangements"]
        del options["excludeDates"]
    arrangements = _map(build_case_data(edit))["hearingArrangements"]

    assert arrangements == {
        "hearingLoop": "No",
        "accessibleHearingRoom": "No",
        "other": "Morning hearings only",
    }


def test_no_arrangements_no_other_no_dates_omits_block(build_case_data):
    def edit(raw):
        options = raw["appeal"]["hearingOptions"]
        del options["arrangements"]
        del options["other"]
        del options["excludeDates"]
    assert "hearingArrangements" not in _map(build_case_data(edit))


def test_dates_cant_attend_uses_start_date_only(build_case_data):
    def edit(raw):
        raw["appeal"]["hearingOptions"]["excludeDates"] = [
            {"value": {"start": "2018-07-30", "end": "2018-08-02"}},
        ]
    arrangements = _map(build_case_data(edit))["hearingArrangements"]

    assert arrangements["datesCantAttend"] == ["2018-07-30"]


def test_unparseable_exclude_date_raises(build_case_data):
    def edit(raw):
        raw["appeal"]["hearingOptions"]["excludeDates"] = [{"value": {"start": "30/07/2018"}}]

    with pytest.raises(MappingError) as exc_info:
        _map(build_case_data(edit))
    assert "excludeDates[0]" in str(exc_info.value)


@pytest.mark.parametrize("path", [
    ("appeal", "appellant", "identity"),
    ("appeal", "hearingOptions"),
    ("appeal", "appellant", "address"),
    ("appeal", "appellant", "contact"),
    ("appeal", "benefitType"),
])
def test_missing_required_structure_raises(build_case_data, path):
    def edit(raw):
        node = raw
        for key in path[:-1]:
            node = node[key]
        del node[path[-1]]

    with pytest.raises(MappingError):
        _map(build_case_data(edit))


def test_missing_appeal_raises(build_case_data):
    def edit(raw):
        del raw["appeal"]

    with pytest.raises(MappingError) as exc_info:
        _map(build_case_data(edit))
    assert exc_info.value.context.details == {"field": "appeal"}
