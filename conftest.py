"""Shared fixtures for robotics dispatch tests."""

import copy
from datetime import date

import pytest

from robotics.models import SscsCaseData

FIXED_DATE = date(2026, 10, 19)

CASE_DATA = {
    "ccdCaseId": "123456",
    "evidencePresent": "Yes",
    "regionalProcessingCenter": {"name": "CARDIFF", "city": "Cardiff", "postcode": "CF10 1ET"},
    "appeal": {
        "benefitType": {"code": "PIP", "description": "Personal Independence Payment"},
        "mrnDetails": {
            "mrnDate": "2018-06-29",
            "mrnLateReason": "Lost my paperwork",
            "dwpIssuingOffice": "DWP PIP (1)",
        },
        "appellant": {
            "name": {"title": "Mr", "firstName": "Joe", "lastName": "Bloggs"},
            "identity": {"nino": "JT 12 31 23 D", "dob": "1966-04-12"},
            "address": {
                "line1": "4 Sutton Road",
                "line2": "Flat 1",
                "town": "Middlesbrough",
                "county": "Cleveland",
                "postcode": "TS1 1ST",
            },
            "contact": {"email": "joe@bloggs.com", "phone": "01234567890", "mobile": "07123456789"},
            "isAddressSameAsAppointee": "No",
        },
        "rep": {
            "hasRepresentative": "Yes",
            "name": {"title": "Mrs", "firstName": "Jane", "lastName": "Smith"},
            "address": {
                "line1": "1 Rep Street",
                "town": "Stockton",
                "county": "Cleveland",
                "postcode": "TS2 2AB",
            },
            "contact": {"email": "rep@example.com", "mobile": "07987654321"},
            "organisation": "Citizens Advice",
        },
        "hearingOptions": {
            "wantsToAttend": "Yes",
            "languageInterpreter": "Yes",
            "languages": "French",
            "signLanguageType": "British Sign Language",
            "arrangements": ["signLanguageInterpreter", "hearingLoop", "disabledAccess"],
            "other": "Morning hearings only",
            "excludeDates": [
                {"value": {"start": "2018-06-30", "end": "2018-06-30"}},
                {"value": {"start": "2018-07-30", "end": "2018-07-31"}},
            ],
        },
    },
}


@pytest.fixture
def case_dict():
    """A fresh, fully populated CCD case data dictionary."""
    return copy.deepcopy(CASE_DATA)


@pytest.fixture
def build_case_data(case_dict):
    """Factory building SscsCaseData from the full case, with optional edits."""
    def _build(edit=None):
        raw = copy.deepcopy(case_dict)
        if edit is not None:
            edit(raw)
        return SscsCaseData.from_ccd(raw)
    return _build


@pytest.fixture
def case_data(build_case_data):
    return build_case_data()
