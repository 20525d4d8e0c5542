from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from src.integrations.contracts.interfaces import (
    VicidialFunction,
    VicidialNotice,
    VicidialResult,
    VicidialStatus,
)


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


# ---------------------------------------------------------------------------
# Vicidial (text)
# ---------------------------------------------------------------------------

# "SUCCESS: add_lead LEAD HAS BEEN ADDED - 7275551111|1234|101|-5|apiuser"
_STATUS_LINE_RE = re.compile(r"^\s*(?P<status>[A-Z][A-Z_]*)\s*:\s*(?P<rest>.*?)\s*$")
_FUNCTION_RE = re.compile(r"^[a-z][a-z0-9_]*$")
_DATA_SEPARATOR = " - "

# add_lead success data: phone_number|list_id|lead_id|gmt_offset|user
_ADD_LEAD_LEAD_ID_INDEX = 2


def _split_status_line(line: str) -> Optional[VicidialNotice]:
    match = _STATUS_LINE_RE.match(line)
    if not match:
        return None

    rest = match.group("rest")
    function = None
    head, sep, tail = rest.partition(" ")
    if _FUNCTION_RE.match(head):
        function = head
        rest = tail if sep else ""

    data: List[str] = []
    message = rest
    if _DATA_SEPARATOR in rest:
        message, _, raw_data = rest.partition(_DATA_SEPARATOR)
        data = [field.strip() for field in raw_data.split("|")]
    elif rest.endswith(" -"):
        message = rest[:-2]

    return VicidialNotice(
        status=match.group("status"),
        function=function,
        message=message.strip(),
        data=data,
    )


def parse_vicidial_response(text: Optional[str]) -> VicidialResult:
    """
    Interpret a Vicidial non-agent API response body.

    The API answers with plain text, one status line per row. The first status
    line decides the outcome; later lines (e.g. "NOTICE: add_lead ADDED TO
    HOPPER") are kept as notices. Never raises: unrecognised bodies come back
    with status UNKNOWN so the raw text can still be relayed.
    """
    raw = text or ""
    lines = [line for line in raw.splitlines() if line.strip()]

    parsed = [n for n in (_split_status_line(line) for line in lines) if n is not None]
    if not parsed:
        return VicidialResult(
            status=VicidialStatus.UNKNOWN.value,
            function=None,
            message=lines[0].strip() if lines else "",
            raw=raw,
        )

    head, notices = parsed[0], parsed[1:]
    lead_id = None
    if (
        head.status == VicidialStatus.SUCCESS.value
        and head.function == VicidialFunction.ADD_LEAD.value
        and len(head.data) > _ADD_LEAD_LEAD_ID_INDEX
    ):
        lead_id = head.data[_ADD_LEAD_LEAD_ID_INDEX] or None

    return VicidialResult(
        status=head.status,
        function=head.function,
        message=head.message,
        data=head.data,
        lead_id=lead_id,
        notices=notices,
        raw=raw,
    )


# ---------------------------------------------------------------------------
# GoHighLevel (JSON)
# ---------------------------------------------------------------------------

class CRMContactModel(BaseModel):
    id: str
    phone: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    raw: Dict[str, Any] = Field(default_factory=dict)


def normalize_crm_contact_response(raw: Dict[str, Any]) -> CRMContactModel:
    if not isinstance(raw, dict):
        raise IntegrationResponseError(f"Unexpected CRM response type: {type(raw).__name__}")

    contact = raw.get("contact") if isinstance(raw.get("contact"), dict) else raw
    contact_id = _first_non_empty(contact, "id", "_id", "contactId")
    tags = contact.get("tags") if isinstance(contact.get("tags"), list) else []

    return _build_model(
        CRMContactModel,
        {
            "id": str(contact_id),
            "phone": _first_non_empty(contact, "phone", default=""),
            "first_name": _first_non_empty(contact, "firstName", "first_name", default=""),
            "last_name": _first_non_empty(contact, "lastName", "last_name", default=""),
            "email": _first_non_empty(contact, "email", default=""),
            "tags": [str(t) for t in tags],
            "raw": raw,
        },
        raw,
    )


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not None:
        return default
    raise IntegrationResponseError(f"Missing required field. Checked keys: {', '.join(keys)}", payload=data)


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
