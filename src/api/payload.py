import json
import logging
from typing import Any, Dict

from fastapi import Request

logger = logging.getLogger(__name__)

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_payload(request: Request) -> Dict[str, Any]:
    """
    Read a webhook body as a flat dict.

    Dialer and CRM webhooks post either JSON or urlencoded forms; query-string
    parameters are merged underneath so GET callbacks work the same way.
    An unreadable body is treated as empty so field validation reports it.
    """
    payload: Dict[str, Any] = dict(request.query_params)
    content_type = (request.headers.get("content-type") or "").split(";")[0].strip().lower()

    if content_type in _FORM_TYPES:
        form = await request.form()
        payload.update({k: v for k, v in form.items() if isinstance(v, str)})
        return payload

    body = await request.body()
    if not body.strip():
        return payload

    try:
        data = json.loads(body)
    except ValueError:
        logger.warning("Ignoring non-JSON webhook body (content-type=%s)", content_type or "<none>")
        return payload

    if isinstance(data, dict):
        payload.update(data)
    else:
        logger.warning("Ignoring JSON webhook body of type %s", type(data).__name__)
    return payload
