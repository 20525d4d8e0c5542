"""Validation and sanitization for inbound webhook payloads.

Webhook callers post either JSON or urlencoded forms; both arrive here as a
plain dict. These validators pick the fields the relay forwards, normalize
them, and build the contract objects the integration clients expect.

On validation failure, raise `PayloadValidationError` so the API can return
HTTP 400 with `{"error": message}`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from src.integrations.contracts.interfaces import (
    CallStatusEvent,
    CRMContactRequest,
    LeadRequest,
    LeadUpdateRequest,
)

CALL_STATUS_FIELDS = (
    "lead_id",
    "phone_number",
    "status",
    "call_date",
    "agent",
    "campaign_id",
    "list_id",
    "user_group",
    "comments",
)


@dataclass
class PayloadValidationError(Exception):
    """Exception raised for webhook payload validation failures.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: top-level message returned to the caller.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:  # pragma: no cover
        return self.message


def _as_str(v: Any) -> str:
    return "" if v is None else str(v)


def _strip(v: Any) -> str:
    return _as_str(v).strip()


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def require_str(payload: Dict[str, Any], field: str, errors: Dict[str, str], *, label: Optional[str] = None) -> str:
    value = _strip(payload.get(field))
    if not value:
        add_error(errors, field, f"{label or field} is required")
    return value


def optional_str(payload: Dict[str, Any], field: str) -> str:
    return _strip(payload.get(field))


def _optional_or_none(payload: Dict[str, Any], field: str) -> Optional[str]:
    value = payload.get(field)
    if value is None:
        return None
    return _as_str(value)


def sanitize_phone_number(value: Any) -> str:
    """Trim and drop a single leading "+" (the dialer wants bare digits)."""
    phone = _strip(value)
    if phone.startswith("+"):
        phone = phone[1:]
    return phone


def parse_tags(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = [_strip(v) for v in value]
    else:
        items = [_strip(v) for v in _as_str(value).split(",")]
    return [t for t in items if t]


def raise_if_errors(errors: Dict[str, str], message: Optional[str] = None) -> None:
    if errors:
        if message is None:
            message = next(iter(errors.values()))
        raise PayloadValidationError(field_errors=errors, message=message)


def validate_add_lead(payload: Dict[str, Any]) -> LeadRequest:
    errors: Dict[str, str] = {}
    phone = sanitize_phone_number(payload.get("phoneNumber"))
    if not phone:
        add_error(errors, "phoneNumber", "Phone number is required")
    raise_if_errors(errors)

    return LeadRequest(
        phone_number=phone,
        first_name=optional_str(payload, "firstName"),
        last_name=optional_str(payload, "lastName"),
    )


def validate_update_lead(payload: Dict[str, Any]) -> LeadUpdateRequest:
    errors: Dict[str, str] = {}
    lead_id = require_str(payload, "leadId", errors)
    phone = sanitize_phone_number(payload.get("phoneNumber"))
    if not phone:
        add_error(errors, "phoneNumber", "phoneNumber is required")
    raise_if_errors(errors, "leadId and phoneNumber are required")

    return LeadUpdateRequest(
        lead_id=lead_id,
        phone_number=phone,
        first_name=optional_str(payload, "firstName"),
        last_name=optional_str(payload, "lastName"),
    )


def validate_call_status(payload: Dict[str, Any]) -> CallStatusEvent:
    """Call status posts are informational; missing fields are kept as None."""
    return CallStatusEvent(**{name: _optional_or_none(payload, name) for name in CALL_STATUS_FIELDS})


def validate_crm_contact(payload: Dict[str, Any], *, require_phone: bool = True) -> CRMContactRequest:
    errors: Dict[str, str] = {}
    if require_phone:
        phone = require_str(payload, "phone_number", errors)
    else:
        phone = optional_str(payload, "phone_number")
    raise_if_errors(errors)

    return CRMContactRequest(
        phone_number=phone,
        first_name=optional_str(payload, "first_name"),
        last_name=optional_str(payload, "last_name"),
        email=optional_str(payload, "email"),
        lead_id=optional_str(payload, "lead_id"),
        status=optional_str(payload, "status"),
        tags=parse_tags(payload.get("tags")),
    )
