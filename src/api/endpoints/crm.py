import logging
from typing import Any, Dict

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_config, get_crm_client
from src.api.payload import read_payload
from src.error_handler import error_handler
from src.integrations.clients.real_http.gohighlevel import build_contact_payload
from src.integrations.contracts.interfaces import CRMClient
from src.integrations.policy.response_wrappers import IntegrationResponseError, normalize_crm_contact_response
from src.relay.validation import PayloadValidationError, validate_crm_contact
from src.utils.config_loader import RelayConfig

logger = logging.getLogger(__name__)

router = APIRouter()

CREDENTIALS_MISSING = "CRM API credentials are not set"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _invalid_response(e: IntegrationResponseError) -> JSONResponse:
    logger.error(f"Invalid CRM response: {e}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"error": str(e), "stage": "crm_response_validation"},
    )


def _contact_to_dict(raw: Dict[str, Any]) -> Dict[str, Any]:
    contact = normalize_crm_contact_response(raw)
    return contact.model_dump(exclude={"raw"})


@router.post("/ghl/contacts", tags=["CRM"])
async def create_contact(
    request: Request,
    client: CRMClient = Depends(get_crm_client),
    config: RelayConfig = Depends(get_config),
):
    """
    Create a GoHighLevel contact from a dialer-shaped (snake_case) payload.
    """
    if not client.is_configured():
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, CREDENTIALS_MISSING)

    try:
        contact = validate_crm_contact(await read_payload(request))
    except PayloadValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, e.message)

    try:
        raw = await client.create_contact(build_contact_payload(contact, config.crm))
        result = _contact_to_dict(raw)
    except IntegrationResponseError as e:
        return _invalid_response(e)
    except (httpx.HTTPError, ValueError) as e:
        body = error_handler.handle_exception(
            e, "Failed to submit contact to CRM API", context={"lead_id": contact.lead_id}
        )
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)

    logger.info("CRM contact created: %s", result["id"])
    return {"message": "Contact submitted successfully", "contact": result}


@router.put("/ghl/contacts/{contact_id}", tags=["CRM"])
async def update_contact(
    contact_id: str,
    request: Request,
    client: CRMClient = Depends(get_crm_client),
    config: RelayConfig = Depends(get_config),
):
    """
    Update a GoHighLevel contact; only the fields present in the body are sent.
    """
    if not client.is_configured():
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, CREDENTIALS_MISSING)

    try:
        contact = validate_crm_contact(await read_payload(request), require_phone=False)
    except PayloadValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, e.message)

    try:
        raw = await client.update_contact(contact_id, build_contact_payload(contact, config.crm))
        result = _contact_to_dict(raw)
    except IntegrationResponseError as e:
        return _invalid_response(e)
    except (httpx.HTTPError, ValueError) as e:
        body = error_handler.handle_exception(
            e, "Failed to update contact in CRM API", context={"contact_id": contact_id}
        )
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)

    logger.info("CRM contact updated: %s", result["id"])
    return {"message": "Contact updated successfully", "contact": result}
