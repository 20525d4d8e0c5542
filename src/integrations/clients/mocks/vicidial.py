"""
Vicidial non-agent API — MOCK client.

⚠️  This is a mock implementation for development and testing.
    It answers with the same plain-text lines the real API produces, so the
    response parser and endpoints behave exactly as they do against a dialer.
"""

import logging
from itertools import count
from typing import List

from src.integrations.contracts.interfaces import DialerClient, LeadRequest, LeadUpdateRequest

logger = logging.getLogger(__name__)


class MockVicidialClient(DialerClient):
    def __init__(self, list_id: str = "1234", user: str = "mockapi", first_lead_id: int = 100001) -> None:
        self.list_id = list_id
        self.user = user
        self._lead_ids = count(first_lead_id)
        self.calls: List[str] = []

    def is_configured(self) -> bool:
        return True

    async def add_lead(self, lead: LeadRequest) -> str:
        lead_id = next(self._lead_ids)
        self.calls.append("add_lead")
        logger.info(f"[MOCK] add_lead phone={lead.phone_number} lead_id={lead_id}")
        if not lead.phone_number.isdigit():
            return f"ERROR: add_lead INVALID PHONE NUMBER - {lead.phone_number}|{self.list_id}|{self.user}\n"
        return (
            f"SUCCESS: add_lead LEAD HAS BEEN ADDED - {lead.phone_number}|{self.list_id}|{lead_id}|-5|{self.user}\n"
            f"NOTICE: add_lead ADDED TO HOPPER - {lead.phone_number}|{lead_id}|1|{self.user}\n"
        )

    async def update_lead(self, lead: LeadUpdateRequest) -> str:
        self.calls.append("update_lead")
        logger.info(f"[MOCK] update_lead lead_id={lead.lead_id}")
        return f"SUCCESS: update_lead LEAD HAS BEEN UPDATED - {self.user}|{lead.lead_id}\n"
