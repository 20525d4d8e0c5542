"""Endpoint tests for the Vicidial relay routes (mock downstream clients)."""

import httpx

from src.api.dependencies import get_call_status_sync, get_dialer_client
from src.api.main import app
from src.integrations.clients.real_http.gohighlevel import GoHighLevelClient
from src.integrations.clients.real_http.vicidial import VicidialClient
from src.integrations.policy.call_status_sync import CallStatusSyncService
from src.utils.config_loader import VicidialConfig


def test_add_lead_success_json(api_client, mock_dialer):
    response = api_client.post(
        "/api/vici/add-lead", json={"phoneNumber": "+15551234567", "firstName": "Ann", "lastName": "Lee"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Phone number submitted successfully"
    assert body["response"].startswith("SUCCESS: add_lead LEAD HAS BEEN ADDED - 15551234567|1234|")
    assert body["result"]["ok"] is True
    assert body["result"]["lead_id"] == "100001"
    assert mock_dialer.calls == ["add_lead"]


def test_add_lead_accepts_urlencoded_form(api_client):
    response = api_client.post("/api/vici/add-lead", data={"phoneNumber": "15551234567"})

    assert response.status_code == 200
    assert response.json()["result"]["status"] == "SUCCESS"


def test_add_lead_missing_phone_is_400(api_client, mock_dialer):
    response = api_client.post("/api/vici/add-lead", json={"firstName": "Ann"})

    assert response.status_code == 400
    assert response.json() == {"error": "Phone number is required"}
    assert mock_dialer.calls == []


def test_add_lead_relays_dialer_error_text(api_client):
    response = api_client.post("/api/vici/add-lead", json={"phoneNumber": "555-CALL"})

    assert response.status_code == 200
    body = response.json()
    assert body["response"].startswith("ERROR: add_lead INVALID PHONE NUMBER")
    assert body["result"]["ok"] is False


def test_missing_credentials_checked_before_payload(api_client):
    app.dependency_overrides[get_dialer_client] = lambda: VicidialClient(VicidialConfig())

    for path in ("/api/vici/add-lead", "/api/vici/update-lead"):
        response = api_client.post(path, json={})
        assert response.status_code == 500
        assert response.json() == {"error": "Vicidial API credentials are not set"}


def test_downstream_failure_is_500(api_client, vicidial_config):
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="oops"))
    app.dependency_overrides[get_dialer_client] = lambda: VicidialClient(vicidial_config, transport=transport)

    add = api_client.post("/api/vici/add-lead", json={"phoneNumber": "1555"})
    update = api_client.post("/api/vici/update-lead", json={"leadId": "1", "phoneNumber": "1555"})

    assert add.status_code == 500
    assert add.json() == {"error": "Failed to submit phone number to Vicidial API"}
    assert update.status_code == 500
    assert update.json() == {"error": "Failed to update contact in Vicidial API"}


def test_update_lead_success(api_client, mock_dialer):
    response = api_client.post(
        "/api/vici/update-lead", json={"leadId": "42", "phoneNumber": "+15551234567", "firstName": "Bo"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Contact updated successfully"
    assert body["response"] == "SUCCESS: update_lead LEAD HAS BEEN UPDATED - apiuser|42\n"
    assert body["result"]["lead_id"] == "42"
    assert mock_dialer.calls == ["update_lead"]


def test_update_lead_requires_both_ids(api_client):
    response = api_client.post("/api/vici/update-lead", json={"phoneNumber": "1555"})

    assert response.status_code == 400
    assert response.json() == {"error": "leadId and phoneNumber are required"}


def test_call_status_post_syncs_to_crm(api_client, mock_crm):
    contact = api_client.post("/api/ghl/contacts", json={"phone_number": "15551234567"}).json()["contact"]

    response = api_client.post(
        "/api/vicidial-call-status",
        data={"lead_id": "101", "phone_number": "15551234567", "status": "SALE", "agent": "6666"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Call status received successfully"
    assert body["crm_sync"]["synced"] is True
    assert body["crm_sync"]["contact_id"] == contact["id"]
    assert "vicidial-sale" in mock_crm.contacts[contact["id"]]["tags"]


def test_call_status_get_query_string_always_acknowledged(api_client):
    app.dependency_overrides[get_call_status_sync] = lambda: CallStatusSyncService(None)

    response = api_client.get("/api/vicidial-call-status", params={"lead_id": "7", "status": "NA"})

    assert response.status_code == 200
    assert response.json() == {
        "message": "Call status received successfully",
        "crm_sync": {"synced": False, "contact_id": None, "reason": "crm_not_configured"},
    }


def test_call_status_empty_body(api_client):
    response = api_client.post("/api/vicidial-call-status")

    assert response.status_code == 200
    assert response.json()["crm_sync"]["reason"] == "missing_phone_number"


def test_call_status_acknowledged_when_crm_lookup_is_malformed(api_client, crm_config):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"contacts": ["abc"]}))
    crm = GoHighLevelClient(crm_config, transport=transport)
    app.dependency_overrides[get_call_status_sync] = lambda: CallStatusSyncService(crm)

    response = api_client.post("/api/vicidial-call-status", json={"lead_id": "7", "phone_number": "1555", "status": "SALE"})

    assert response.status_code == 200
    assert response.json()["crm_sync"] == {"synced": False, "contact_id": None, "reason": "crm_error"}
