import pytest

from src.integrations.policy.response_wrappers import (
    IntegrationResponseError,
    normalize_crm_contact_response,
    parse_vicidial_response,
)


def test_add_lead_success_extracts_lead_id_and_notices():
    text = (
        "SUCCESS: add_lead LEAD HAS BEEN ADDED - 7275551111|1234|193715|-5|apiuser\n"
        "NOTICE: add_lead ADDED TO HOPPER - 7275551111|193715|1677922|apiuser\n"
    )
    result = parse_vicidial_response(text)

    assert result.ok is True
    assert result.status == "SUCCESS"
    assert result.function == "add_lead"
    assert result.message == "LEAD HAS BEEN ADDED"
    assert result.data == ["7275551111", "1234", "193715", "-5", "apiuser"]
    assert result.lead_id == "193715"
    assert len(result.notices) == 1
    assert result.notices[0].status == "NOTICE"
    assert result.notices[0].message == "ADDED TO HOPPER"
    assert result.raw == text


def test_error_line_is_not_ok():
    result = parse_vicidial_response("ERROR: add_lead INVALID PHONE NUMBER - 12|1234|apiuser")
    assert result.ok is False
    assert result.status == "ERROR"
    assert result.function == "add_lead"
    assert result.message == "INVALID PHONE NUMBER"
    assert result.lead_id is None


def test_error_without_function_token():
    result = parse_vicidial_response("ERROR: Invalid Username/Password: apiuser 0")
    assert result.status == "ERROR"
    assert result.function is None
    assert result.message == "Invalid Username/Password: apiuser 0"
    assert result.data == []


def test_update_lead_success_does_not_guess_lead_id():
    result = parse_vicidial_response("SUCCESS: update_lead LEAD HAS BEEN UPDATED - apiuser|42")
    assert result.ok is True
    assert result.function == "update_lead"
    assert result.data == ["apiuser", "42"]
    assert result.lead_id is None


@pytest.mark.parametrize("text", ["", None, "<html>Server error</html>", "   \n"])
def test_unrecognised_body_is_unknown(text):
    result = parse_vicidial_response(text)
    assert result.status == "UNKNOWN"
    assert result.ok is False


def test_to_dict_is_json_ready():
    out = parse_vicidial_response("SUCCESS: add_lead LEAD HAS BEEN ADDED - 1|2|3|4|5").to_dict()
    assert out["ok"] is True
    assert out["lead_id"] == "3"
    assert out["notices"] == []


def test_normalize_crm_contact_wrapped_and_bare():
    wrapped = normalize_crm_contact_response(
        {"contact": {"id": "c1", "phone": "+1555", "firstName": "Ann", "tags": ["hot"]}}
    )
    assert wrapped.id == "c1"
    assert wrapped.first_name == "Ann"
    assert wrapped.tags == ["hot"]

    bare = normalize_crm_contact_response({"id": "c2", "email": "a@b.co"})
    assert bare.id == "c2"
    assert bare.email == "a@b.co"
    assert bare.phone == ""


def test_normalize_crm_contact_without_id_raises():
    with pytest.raises(IntegrationResponseError) as exc:
        normalize_crm_contact_response({"contact": {"phone": "+1555"}})
    assert exc.value.payload == {"phone": "+1555"}


def test_normalize_crm_contact_rejects_non_dict():
    with pytest.raises(IntegrationResponseError):
        normalize_crm_contact_response(["not", "a", "contact"])
