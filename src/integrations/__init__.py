"""
Integrations layer.
This package contains all code used to communicate with external systems:
- Vicidial non-agent API (add_lead / update_lead over query strings)
- GoHighLevel REST API (contacts, notes, tags over JSON with a bearer token)

Key rule:
- API endpoints MUST NOT build downstream URLs or call httpx directly.
- Endpoints call integration clients (under src/integrations/clients).
- MOCK clients are used when INTEGRATIONS_MODE=mock; REAL_HTTP clients otherwise.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (src/api/dependencies.py).
"""

from .contracts.interfaces import (
    CallStatusEvent,
    CRMClient,
    CRMContactRequest,
    DialerClient,
    LeadRequest,
    LeadUpdateRequest,
    VicidialFunction,
    VicidialNotice,
    VicidialResult,
    VicidialStatus,
)

__all__ = [
    "CallStatusEvent", "CRMClient", "CRMContactRequest", "DialerClient",
    "LeadRequest", "LeadUpdateRequest",
    "VicidialFunction", "VicidialNotice", "VicidialResult", "VicidialStatus",
]
