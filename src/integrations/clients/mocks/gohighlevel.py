"""
GoHighLevel contacts — MOCK client.

⚠️  This is a mock implementation for development and testing.
    Contacts, notes and tags live in memory for the lifetime of the process.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from src.integrations.clients.real_http.gohighlevel import to_crm_phone
from src.integrations.contracts.interfaces import CRMClient

logger = logging.getLogger(__name__)


class MockGoHighLevelClient(CRMClient):
    def __init__(self) -> None:
        self.contacts: Dict[str, Dict[str, Any]] = {}
        self.notes: Dict[str, List[str]] = {}

    def is_configured(self) -> bool:
        return True

    async def create_contact(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        contact_id = uuid.uuid4().hex[:20]
        contact = {"id": contact_id, "tags": [], **payload}
        self.contacts[contact_id] = contact
        logger.info(f"[MOCK] Created contact {contact_id}")
        return {"contact": dict(contact)}

    async def update_contact(self, contact_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        contact = self.contacts.setdefault(contact_id, {"id": contact_id, "tags": []})
        contact.update(payload)
        logger.info(f"[MOCK] Updated contact {contact_id}")
        return {"contact": dict(contact)}

    async def lookup_contact_by_phone(self, phone: str) -> Optional[Dict[str, Any]]:
        wanted = to_crm_phone(phone)
        for contact in self.contacts.values():
            if contact.get("phone") == wanted:
                return dict(contact)
        return None

    async def add_note(self, contact_id: str, body: str) -> Dict[str, Any]:
        self.notes.setdefault(contact_id, []).append(body)
        return {"id": uuid.uuid4().hex[:20], "body": body, "contactId": contact_id}

    async def add_tags(self, contact_id: str, tags: List[str]) -> Dict[str, Any]:
        contact = self.contacts.setdefault(contact_id, {"id": contact_id, "tags": []})
        contact["tags"] = sorted(set(contact.get("tags", [])) | set(tags))
        return {"tags": list(contact["tags"])}
