"""Error handling helpers for relay endpoints."""
from typing import Any, Dict, Optional
import logging

import httpx

logger = logging.getLogger(__name__)


class ErrorHandler:
    def describe(self, exc: Exception) -> str:
        if isinstance(exc, httpx.HTTPStatusError):
            return f"downstream returned HTTP {exc.response.status_code}"
        if isinstance(exc, httpx.RequestError):
            return f"downstream unreachable ({type(exc).__name__})"
        return str(exc)

    def handle_exception(self, exc: Exception, message: str, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Log a downstream failure and build the caller-facing error body."""
        logger.error("%s: %s (context=%s)", message, self.describe(exc), context or {})
        return {"error": message}


error_handler = ErrorHandler()
