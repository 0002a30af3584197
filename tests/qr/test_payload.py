from __future__ import annotations

import json

import pytest

from src.qr_attendance.qr_attendance.core.exceptions import MalformedPayloadError
from src.qr_attendance.qr_attendance.qr.payload import parse_payload, validate_structure

VALID = {
    "employeeId": "emp-42",
    "firstName": "Ana",
    "lastName": "Silva",
    "role": "engineer",
    "department": "R&D",
    "checkInTime": "2026-02-02T09:00:00Z",
    "signature": "ab" * 32,
}


def test_parse_payload_maps_camel_case_fields():
    payload = parse_payload(json.dumps(VALID))

    assert payload.employee_id == "emp-42"
    assert payload.full_name == "Ana Silva"
    assert payload.department == "R&D"
    assert payload.to_dict() == VALID


def test_department_is_optional():
    data = dict(VALID)
    del data["department"]

    assert parse_payload(json.dumps(data)).department is None


def test_non_json_is_malformed():
    with pytest.raises(MalformedPayloadError, match="Invalid QR code format"):
        parse_payload("OFFICE_CHECKIN_SYSTEM")


def test_json_array_is_malformed():
    with pytest.raises(MalformedPayloadError):
        parse_payload("[1, 2, 3]")


@pytest.mark.parametrize("missing", ["employeeId", "firstName", "lastName", "role", "checkInTime", "signature"])
def test_each_required_field_is_enforced(missing):
    data = dict(VALID)
    data[missing] = ""

    assert validate_structure(data) is False
    with pytest.raises(MalformedPayloadError, match="missing required fields"):
        parse_payload(json.dumps(data))
