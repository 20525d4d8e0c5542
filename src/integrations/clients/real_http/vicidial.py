"""
Real Vicidial HTTP Client.

Purpose:
- Sends add_lead / update_lead calls to the Vicidial non-agent API
- Returns the raw text body; interpretation lives in policy/response_wrappers.py

Implementation notes:
- The non-agent API is a single GET endpoint driven by query-string parameters
- Parameter order is kept stable (matches what the dialer admins expect in logs)
- Values are percent-encoded the same way a browser's encodeURIComponent does
- Credentials are redacted before a URL is logged
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple
from urllib.parse import quote

import httpx

from src.integrations.contracts.interfaces import DialerClient, LeadRequest, LeadUpdateRequest, VicidialFunction
from src.utils.config_loader import VicidialConfig

logger = logging.getLogger(__name__)
# httpx logs the full request URL at INFO, and dialer URLs carry user/pass.
logging.getLogger("httpx").setLevel(logging.WARNING)

# encodeURIComponent leaves A-Z a-z 0-9 - _ . ! ~ * ' ( ) untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"
_SECRET_PARAMS_RE = re.compile(r"([?&](?:user|pass)=)[^&]*")


def encode_uri_component(value: object) -> str:
    return quote("" if value is None else str(value), safe=_URI_COMPONENT_SAFE)


def _build_url(base_url: str, params: List[Tuple[str, object]]) -> str:
    query = "&".join(f"{name}={encode_uri_component(value)}" for name, value in params)
    return f"{base_url}?{query}"


def redact_url(url: str) -> str:
    return _SECRET_PARAMS_RE.sub(r"\1***", url)


def build_add_lead_url(cfg: VicidialConfig, lead: LeadRequest) -> str:
    return _build_url(
        cfg.base_url,
        [
            ("user", cfg.api_username),
            ("pass", cfg.api_password),
            ("function", VicidialFunction.ADD_LEAD.value),
            ("source", cfg.source),
            ("phone_number", lead.phone_number),
            ("list_id", cfg.list_id),
            ("duplicate_check", cfg.duplicate_check),
            ("first_name", lead.first_name),
            ("last_name", lead.last_name),
        ],
    )


def build_update_lead_url(cfg: VicidialConfig, lead: LeadUpdateRequest) -> str:
    return _build_url(
        cfg.base_url,
        [
            ("source", cfg.source),
            ("user", cfg.api_username),
            ("pass", cfg.api_password),
            ("function", VicidialFunction.UPDATE_LEAD.value),
            ("lead_id", lead.lead_id),
            ("phone_number", lead.phone_number),
            ("first_name", lead.first_name),
            ("last_name", lead.last_name),
        ],
    )


class VicidialClient(DialerClient):
    def __init__(
        self,
        config: VicidialConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self._transport = transport

    def is_configured(self) -> bool:
        return self.config.is_configured()

    async def add_lead(self, lead: LeadRequest) -> str:
        return await self._get(build_add_lead_url(self.config, lead))

    async def update_lead(self, lead: LeadUpdateRequest) -> str:
        return await self._get(build_update_lead_url(self.config, lead))

    async def _get(self, url: str) -> str:
        if not self.is_configured():
            raise ValueError("Vicidial API credentials are not configured.")

        safe_url = redact_url(url)
        try:
            logger.debug("Calling Vicidial API: %s", safe_url)
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from Vicidial API: {e.response.status_code} ({safe_url})")
            raise
        except httpx.RequestError as e:
            logger.error(f"Request error connecting to Vicidial API: {type(e).__name__} ({safe_url})")
            raise
