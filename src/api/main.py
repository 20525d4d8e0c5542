"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime

from fastapi import Depends, FastAPI

from src.api.dependencies import get_config
from src.api.endpoints.crm import router as crm_router
from src.api.endpoints.vicidial import router as vicidial_router
from src.utils.config_loader import RelayConfig, validate_config

SERVICE_NAME = "Vicidial GoHighLevel Relay"
SERVICE_VERSION = "1.0.0"

# Setup logging
logging.basicConfig(
    level=getattr(logging, get_config().server.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Vicidial GoHighLevel Relay API",
    description="Webhook relay between the Vicidial non-agent API and the GoHighLevel contacts API",
    version=SERVICE_VERSION,
)

# Register relay routers
app.include_router(vicidial_router, prefix="/api")
app.include_router(crm_router, prefix="/api")


def _downstream_status(config: RelayConfig) -> dict:
    return {
        "vicidial": {"configured": config.vicidial.is_configured()},
        "crm": {"configured": config.crm.is_configured(), "sync_call_status": config.crm.sync_call_status},
        "integrations_mode": config.server.integrations_mode,
    }


def _health_body(config: RelayConfig) -> dict:
    return {
        "service": SERVICE_NAME,
        "status": "healthy",
        "version": SERVICE_VERSION,
        "downstream": _downstream_status(config),
        "timestamp": datetime.now().isoformat(),
    }


@app.get("/", tags=["Health"])
async def root(config: RelayConfig = Depends(get_config)):
    return _health_body(config)


@app.get("/health", tags=["Health"])
async def health_check(config: RelayConfig = Depends(get_config)):
    """Detailed health check (which downstream APIs are configured)."""
    return _health_body(config)


# ============================================================================
# STARTUP/SHUTDOWN EVENTS
# ============================================================================
@app.on_event("startup")
async def startup_event():
    """Log configuration problems on startup"""
    logger.info(f"Starting {SERVICE_NAME}...")

    config = get_config()
    config_errors = validate_config(config)
    if config_errors:
        logger.error("Configuration errors detected:")
        for error in config_errors:
            logger.error(f"  - {error}")
        logger.warning("Service starting with configuration issues - some endpoints will answer 500")
    else:
        logger.info("Configuration validated successfully")

    if config.server.use_mock_integrations:
        logger.warning("INTEGRATIONS_MODE=%s: using mock Vicidial and GoHighLevel clients", config.server.integrations_mode)


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info(f"Shutting down {SERVICE_NAME}...")
