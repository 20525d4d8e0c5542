import logging

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_call_status_sync, get_dialer_client
from src.api.payload import read_payload
from src.error_handler import error_handler
from src.integrations.contracts.interfaces import DialerClient
from src.integrations.policy.call_status_sync import CallStatusSyncService
from src.integrations.policy.response_wrappers import parse_vicidial_response
from src.relay.validation import (
    PayloadValidationError,
    validate_add_lead,
    validate_call_status,
    validate_update_lead,
)

logger = logging.getLogger(__name__)

router = APIRouter()

CREDENTIALS_MISSING = "Vicidial API credentials are not set"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/vici/add-lead", tags=["Vicidial"])
async def add_lead(request: Request, client: DialerClient = Depends(get_dialer_client)):
    """
    Submit a phone number (and optional names) to Vicidial as a new lead.
    """
    if not client.is_configured():
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, CREDENTIALS_MISSING)

    try:
        lead = validate_add_lead(await read_payload(request))
    except PayloadValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, e.message)

    try:
        data = await client.add_lead(lead)
    except (httpx.HTTPError, ValueError) as e:
        body = error_handler.handle_exception(
            e, "Failed to submit phone number to Vicidial API", context={"function": "add_lead"}
        )
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)

    result = parse_vicidial_response(data)
    logger.info("Vicidial API Response: %s", data.strip())
    return {
        "message": "Phone number submitted successfully",
        "response": data,
        "result": result.to_dict(),
    }


@router.post("/vici/update-lead", tags=["Vicidial"])
async def update_lead(request: Request, client: DialerClient = Depends(get_dialer_client)):
    """
    Update an existing Vicidial lead's phone number and names.
    """
    if not client.is_configured():
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, CREDENTIALS_MISSING)

    try:
        lead = validate_update_lead(await read_payload(request))
    except PayloadValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, e.message)

    try:
        data = await client.update_lead(lead)
    except (httpx.HTTPError, ValueError) as e:
        body = error_handler.handle_exception(
            e, "Failed to update contact in Vicidial API", context={"function": "update_lead", "lead_id": lead.lead_id}
        )
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)

    result = parse_vicidial_response(data)
    if result.lead_id is None:
        result.lead_id = lead.lead_id
    logger.info("Vicidial API Update Response: %s", data.strip())
    return {
        "message": "Contact updated successfully",
        "response": data,
        "result": result.to_dict(),
    }


@router.api_route("/vicidial-call-status", methods=["GET", "POST"], tags=["Vicidial"])
async def call_status(request: Request, sync_service: CallStatusSyncService = Depends(get_call_status_sync)):
    """
    Receiver for Vicidial's dispo/call status callback. Always acknowledges.
    """
    event = validate_call_status(await read_payload(request))
    logger.info("Received call status from Vicidial: %s", event.log_fields())

    crm_sync = await sync_service.sync(event)
    return {"message": "Call status received successfully", "crm_sync": crm_sync}
