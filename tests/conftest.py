"""Pytest fixtures for relay client and endpoint tests."""

from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_call_status_sync, get_config, get_crm_client, get_dialer_client
from src.api.main import app
from src.integrations.clients.mocks.gohighlevel import MockGoHighLevelClient
from src.integrations.clients.mocks.vicidial import MockVicidialClient
from src.integrations.policy.call_status_sync import CallStatusSyncService
from src.utils.config_loader import CRMConfig, RelayConfig, VicidialConfig


@pytest.fixture
def vicidial_config():
    return VicidialConfig(
        api_username="apiuser",
        api_password="s3cret",
        base_url="https://dialer.example.com/vicidial/non_agent_api.php",
    )


@pytest.fixture
def crm_config():
    return CRMConfig(api_key="ghl-key", base_url="https://crm.example.com/v1")


@pytest.fixture
def relay_config(vicidial_config, crm_config):
    return RelayConfig(vicidial=vicidial_config, crm=crm_config)


@pytest.fixture
def recording_transport() -> Callable[..., httpx.MockTransport]:
    """Build an httpx.MockTransport that records requests and answers via `handler`."""

    def factory(handler, requests: List[httpx.Request]) -> httpx.MockTransport:
        def _handle(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        return httpx.MockTransport(_handle)

    return factory


@pytest.fixture
def mock_dialer():
    return MockVicidialClient(list_id="1234", user="apiuser")


@pytest.fixture
def mock_crm():
    return MockGoHighLevelClient()


@pytest.fixture
def api_client(relay_config, mock_dialer, mock_crm):
    """TestClient wired to mock downstream clients."""
    app.dependency_overrides[get_config] = lambda: relay_config
    app.dependency_overrides[get_dialer_client] = lambda: mock_dialer
    app.dependency_overrides[get_crm_client] = lambda: mock_crm
    app.dependency_overrides[get_call_status_sync] = lambda: CallStatusSyncService(mock_crm)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
