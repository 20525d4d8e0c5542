import logging
from functools import lru_cache

from fastapi import Depends

from src.integrations.clients.mocks.gohighlevel import MockGoHighLevelClient
from src.integrations.clients.mocks.vicidial import MockVicidialClient
from src.integrations.clients.real_http.gohighlevel import GoHighLevelClient
from src.integrations.clients.real_http.vicidial import VicidialClient
from src.integrations.contracts.interfaces import CRMClient, DialerClient
from src.integrations.policy.call_status_sync import CallStatusSyncService
from src.utils.config_loader import RelayConfig, load_relay_config

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_config() -> RelayConfig:
    return load_relay_config()


@lru_cache(maxsize=1)
def _mock_dialer() -> MockVicidialClient:
    return MockVicidialClient(list_id=get_config().vicidial.list_id)


@lru_cache(maxsize=1)
def _mock_crm() -> MockGoHighLevelClient:
    return MockGoHighLevelClient()


def get_dialer_client(config: RelayConfig = Depends(get_config)) -> DialerClient:
    if config.server.use_mock_integrations:
        return _mock_dialer()
    return VicidialClient(config.vicidial)


def get_crm_client(config: RelayConfig = Depends(get_config)) -> CRMClient:
    if config.server.use_mock_integrations:
        return _mock_crm()
    return GoHighLevelClient(config.crm)


def get_call_status_sync(
    config: RelayConfig = Depends(get_config),
    crm_client: CRMClient = Depends(get_crm_client),
) -> CallStatusSyncService:
    return CallStatusSyncService(crm_client, enabled=config.crm.sync_call_status)
