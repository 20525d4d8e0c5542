import pytest

from src.api.dependencies import get_call_status_sync, get_crm_client, get_dialer_client
from src.integrations.clients.mocks.gohighlevel import MockGoHighLevelClient
from src.integrations.clients.mocks.vicidial import MockVicidialClient
from src.integrations.clients.real_http.gohighlevel import GoHighLevelClient
from src.integrations.clients.real_http.vicidial import VicidialClient
from src.integrations.contracts.interfaces import LeadRequest
from src.integrations.policy.response_wrappers import parse_vicidial_response
from src.utils.config_loader import RelayConfig, ServerConfig


def test_real_clients_selected_by_default(relay_config):
    assert isinstance(get_dialer_client(relay_config), VicidialClient)
    assert isinstance(get_crm_client(relay_config), GoHighLevelClient)


def test_mock_clients_selected_in_mock_mode():
    cfg = RelayConfig(server=ServerConfig(integrations_mode="mock"))
    dialer = get_dialer_client(cfg)
    crm = get_crm_client(cfg)

    assert isinstance(dialer, MockVicidialClient)
    assert isinstance(crm, MockGoHighLevelClient)
    assert get_crm_client(cfg) is crm


def test_call_status_sync_follows_config(relay_config, mock_crm):
    relay_config.crm.sync_call_status = False
    service = get_call_status_sync(relay_config, mock_crm)
    assert service.enabled is False
    assert service.crm_client is mock_crm


@pytest.mark.asyncio
async def test_mock_dialer_output_parses_like_the_real_api():
    dialer = MockVicidialClient(list_id="777", first_lead_id=5)
    result = parse_vicidial_response(await dialer.add_lead(LeadRequest("15551234567")))

    assert result.ok is True
    assert result.lead_id == "5"
    assert result.data[1] == "777"
    assert result.notices[0].message == "ADDED TO HOPPER"
