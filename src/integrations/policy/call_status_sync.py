"""
Call Status Sync Service

Pushes dialer call outcomes (the "dispo" Vicidial posts after each call) onto
the matching CRM contact as a note plus a status tag.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from src.integrations.contracts.interfaces import CallStatusEvent, CRMClient

logger = logging.getLogger(__name__)

_NOTE_FIELDS = (
    ("Status", "status"),
    ("Call date", "call_date"),
    ("Agent", "agent"),
    ("Campaign", "campaign_id"),
    ("List", "list_id"),
    ("User group", "user_group"),
    ("Dialer lead ID", "lead_id"),
    ("Comments", "comments"),
)


def status_tag(status: Optional[str]) -> Optional[str]:
    value = (status or "").strip().lower()
    if not value:
        return None
    return f"vicidial-{value}"


def build_call_note(event: CallStatusEvent) -> str:
    lines: List[str] = ["Vicidial call status update"]
    for label, attr in _NOTE_FIELDS:
        value = getattr(event, attr)
        if value not in (None, ""):
            lines.append(f"{label}: {value}")
    return "\n".join(lines)


class CallStatusSyncService:
    def __init__(self, crm_client: Optional[CRMClient], enabled: bool = True):
        self.crm_client = crm_client
        self.enabled = enabled

    async def sync(self, event: CallStatusEvent) -> Dict[str, Any]:
        if not self.enabled:
            return _result(False, reason="sync_disabled")
        if self.crm_client is None or not self.crm_client.is_configured():
            return _result(False, reason="crm_not_configured")
        if not (event.phone_number or "").strip():
            return _result(False, reason="missing_phone_number")

        try:
            contact = await self.crm_client.lookup_contact_by_phone(event.phone_number)
            if not isinstance(contact, dict) or not contact.get("id"):
                logger.info("No CRM contact found for call status (lead_id=%s)", event.lead_id)
                return _result(False, reason="contact_not_found")

            contact_id = str(contact["id"])
            await self.crm_client.add_note(contact_id, build_call_note(event))
            tag = status_tag(event.status)
            if tag:
                await self.crm_client.add_tags(contact_id, [tag])

            logger.info("Synced call status %s to CRM contact %s", event.status, contact_id)
            return _result(True, contact_id=contact_id)
        except (httpx.HTTPError, ValueError, AttributeError, TypeError, KeyError) as e:
            logger.error(f"Failed to sync call status to CRM: {e}")
            return _result(False, reason="crm_error")


def _result(synced: bool, *, contact_id: Optional[str] = None, reason: Optional[str] = None) -> Dict[str, Any]:
    return {"synced": synced, "contact_id": contact_id, "reason": reason}
