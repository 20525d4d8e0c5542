"""
Real GoHighLevel HTTP Client.

Used when GHL_API_KEY is configured. Talks to the contacts resource of the
GoHighLevel REST API with a bearer token.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from src.integrations.contracts.interfaces import CRMClient, CRMContactRequest
from src.integrations.policy.response_wrappers import IntegrationResponseError
from src.utils.config_loader import CRMConfig

logger = logging.getLogger(__name__)

_NOT_FOUND_STATUSES = {404, 422}


def to_crm_phone(phone: str) -> str:
    """Dialer numbers come without "+"; the CRM stores E.164."""
    phone = (phone or "").strip()
    if not phone or phone.startswith("+"):
        return phone
    return f"+{phone}"


def build_contact_payload(contact: CRMContactRequest, cfg: CRMConfig) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "phone": to_crm_phone(contact.phone_number),
        "firstName": contact.first_name,
        "lastName": contact.last_name,
        "email": contact.email,
        "source": cfg.contact_source,
        "tags": list(contact.tags),
    }
    if contact.status:
        payload["tags"].append(f"vicidial-{contact.status.lower()}")
    if cfg.location_id:
        payload["locationId"] = cfg.location_id
    return {k: v for k, v in payload.items() if v}


class GoHighLevelClient(CRMClient):
    def __init__(
        self,
        config: CRMConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self._transport = transport

    def is_configured(self) -> bool:
        return self.config.is_configured()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def create_contact(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/contacts/", json=payload)

    async def update_contact(self, contact_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/contacts/{contact_id}", json=payload)

    async def lookup_contact_by_phone(self, phone: str) -> Optional[Dict[str, Any]]:
        try:
            data = await self._request("GET", "/contacts/lookup", params={"phone": to_crm_phone(phone)})
        except httpx.HTTPStatusError as e:
            if e.response.status_code in _NOT_FOUND_STATUSES:
                return None
            raise
        contacts = data.get("contacts") if isinstance(data, dict) else None
        if isinstance(contacts, list) and contacts:
            if not isinstance(contacts[0], dict):
                raise IntegrationResponseError(
                    f"Unexpected CRM contact type: {type(contacts[0]).__name__}", payload=data
                )
            return contacts[0]
        return None

    async def add_note(self, contact_id: str, body: str) -> Dict[str, Any]:
        return await self._request("POST", f"/contacts/{contact_id}/notes", json={"body": body})

    async def add_tags(self, contact_id: str, tags: List[str]) -> Dict[str, Any]:
        return await self._request("POST", f"/contacts/{contact_id}/tags", json={"tags": tags})

    async def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        if not self.is_configured():
            raise ValueError("GHL_API_KEY is not configured.")

        url = f"{self.base_url}{path}"
        try:
            logger.info(f"Calling GoHighLevel API: {method} {path}")
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds, transport=self._transport) as client:
                response = await client.request(method, url, headers=self._headers(), **kwargs)
                response.raise_for_status()
                try:
                    data = response.json() if response.content else {}
                except ValueError as e:
                    logger.error(f"Non-JSON body from GoHighLevel API: status={response.status_code}")
                    raise IntegrationResponseError(
                        "CRM returned a non-JSON body", payload={"body": response.text[:500]}
                    ) from e
                logger.info(f"GoHighLevel API response: status={response.status_code}")
                return data
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from GoHighLevel API: {e.response.status_code} {e.response.text}")
            raise
        except httpx.RequestError as e:
            logger.error(f"Request error connecting to GoHighLevel API: {e}")
            raise
