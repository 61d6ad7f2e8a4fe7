"""Tests for robotics JSON schema validation."""

import json

import pytest

from robotics.mapping import RoboticsJsonValidator
from robotics.utils.errors import ConfigurationError, ErrorType, RoboticsValidationError


def _minimal_payload():
    contact = {
        "title": "Mr",
        "firstName": "Joe",
        "lastName": "Bloggs",
        "addressLine1": "4 Sutton Road",
        "townOrCity": "Middlesbrough",
        "county": "Cleveland",
        "postCode": "TS1 1ST",
        "phoneNumber": "07123456789",
        "email": "joe@bloggs.com",
    }
    return {
        "caseCode": "002DD",
        "appellantNino": "JT123123D",
        "appellantPostCode": "Middlesbrough",
        "appealDate": "2026-10-19",
        "hearingType": "Paper",
        "caseId": 123,
        "evidencePresent": "No",
        "appellant": contact,
    }


@pytest.fixture(scope="module")
def validator():
    return RoboticsJsonValidator()


def test_minimal_payload_is_valid(validator):
    validator.validate(_minimal_payload())


def test_missing_case_id_is_rejected(validator):
    payload = _minimal_payload()
    del payload["caseId"]

    with pytest.raises(RoboticsValidationError) as exc_info:
        validator.validate(payload)

    error = exc_info.value
    assert error.context.error_type == ErrorType.VALIDATION_FAILED
    assert any("caseId" in message for message in error.context.details["errors"])


def test_all_violations_are_reported(validator):
    payload = _minimal_payload()
    payload["hearingType"] = "Video"
    payload["appealDate"] = "19/10/2026"
    del payload["appellant"]["email"]

    with pytest.raises(RoboticsValidationError) as exc_info:
        validator.validate(payload)

    messages = exc_info.value.context.details["errors"]
    assert len(messages) == 3
    assert messages[0].startswith("appealDate:")
    assert messages[1].startswith("appellant:")
    assert messages[2].startswith("hearingType:")


def test_unknown_top_level_field_is_rejected(validator):
    payload = _minimal_payload()
    payload["notARobotField"] = "x"

    with pytest.raises(RoboticsValidationError):
        validator.validate(payload)


def test_empty_venue_is_rejected(validator):
    payload = _minimal_payload()
    payload["appellantPostCode"] = ""

    with pytest.raises(RoboticsValidationError):
        validator.validate(payload)


def test_missing_schema_file(tmp_path):
    with pytest.raises(ConfigurationError):
        RoboticsJsonValidator(tmp_path / "missing.json")


def test_custom_schema(tmp_path):
    schema_path = tmp_path / "schema.json"
    schema_path.write_text(json.dumps({"type": "object", "required": ["caseId"]}))
    validator = RoboticsJsonValidator(schema_path)

    validator.validate({"caseId": 1})
    with pytest.raises(RoboticsValidationError):
        validator.validate({})
