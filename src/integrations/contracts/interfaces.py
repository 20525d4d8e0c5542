from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class VicidialStatus(str, Enum):
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"
    NOTICE = "NOTICE"
    VERSION = "VERSION"
    UNKNOWN = "UNKNOWN"


class VicidialFunction(str, Enum):
    ADD_LEAD = "add_lead"
    UPDATE_LEAD = "update_lead"


# ---------------------------------------------------------------------------
# Inbound (webhook) models
# ---------------------------------------------------------------------------

@dataclass
class LeadRequest:
    phone_number: str                    # already sanitized, no leading "+"
    first_name: str = ""
    last_name: str = ""


@dataclass
class LeadUpdateRequest:
    lead_id: str
    phone_number: str
    first_name: str = ""
    last_name: str = ""


@dataclass
class CallStatusEvent:
    lead_id: Optional[str] = None
    phone_number: Optional[str] = None
    status: Optional[str] = None
    call_date: Optional[str] = None
    agent: Optional[str] = None
    campaign_id: Optional[str] = None
    list_id: Optional[str] = None
    user_group: Optional[str] = None
    comments: Optional[str] = None

    def log_fields(self) -> Dict[str, Any]:
        return {
            "lead_id": self.lead_id,
            "phone_number": self.phone_number,
            "status": self.status,
            "call_date": self.call_date,
            "agent": self.agent,
            "campaign_id": self.campaign_id,
            "list_id": self.list_id,
            "user_group": self.user_group,
            "comments": self.comments,
        }


@dataclass
class CRMContactRequest:
    phone_number: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    lead_id: str = ""
    status: str = ""
    tags: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Downstream results
# ---------------------------------------------------------------------------

@dataclass
class VicidialNotice:
    status: str
    function: Optional[str]
    message: str
    data: List[str] = field(default_factory=list)


@dataclass
class VicidialResult:
    status: str
    function: Optional[str]
    message: str
    data: List[str] = field(default_factory=list)
    lead_id: Optional[str] = None
    notices: List[VicidialNotice] = field(default_factory=list)
    raw: str = ""

    @property
    def ok(self) -> bool:
        return self.status == VicidialStatus.SUCCESS.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "status": self.status,
            "function": self.function,
            "message": self.message,
            "data": list(self.data),
            "lead_id": self.lead_id,
            "notices": [
                {"status": n.status, "function": n.function, "message": n.message, "data": list(n.data)}
                for n in self.notices
            ],
        }


# ---------------------------------------------------------------------------
# Client interfaces
# ---------------------------------------------------------------------------

class DialerClient(ABC):
    """Lead management on the dialer side. Methods return the raw response body."""

    @abstractmethod
    def is_configured(self) -> bool: ...

    @abstractmethod
    async def add_lead(self, lead: LeadRequest) -> str: ...

    @abstractmethod
    async def update_lead(self, lead: LeadUpdateRequest) -> str: ...


class CRMClient(ABC):
    """Contact management on the CRM side. Methods return decoded JSON."""

    @abstractmethod
    def is_configured(self) -> bool: ...

    @abstractmethod
    async def create_contact(self, payload: Dict[str, Any]) -> Dict[str, Any]: ...

    @abstractmethod
    async def update_contact(self, contact_id: str, payload: Dict[str, Any]) -> Dict[str, Any]: ...

    @abstractmethod
    async def lookup_contact_by_phone(self, phone: str) -> Optional[Dict[str, Any]]: ...

    @abstractmethod
    async def add_note(self, contact_id: str, body: str) -> Dict[str, Any]: ...

    @abstractmethod
    async def add_tags(self, contact_id: str, tags: List[str]) -> Dict[str, Any]: ...
