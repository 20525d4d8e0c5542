"""
Configuration loader for the dialer/CRM relay
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "relay_config.yml"

_TRUE_VALUES = ("1", "true", "yes", "y", "on")


class VicidialConfig(BaseModel):
    """Vicidial non-agent API configuration"""

    api_username: str = ""
    api_password: str = ""
    base_url: str = ""
    list_id: str = "1234"
    source: str = "GoHighLevel"
    duplicate_check: str = "DUPCHECK"
    timeout_seconds: float = Field(default=15.0, gt=0, le=300)

    def is_configured(self) -> bool:
        return bool(self.api_username and self.api_password and self.base_url)


class CRMConfig(BaseModel):
    """GoHighLevel REST API configuration"""

    api_key: str = ""
    base_url: str = "https://rest.gohighlevel.com/v1"
    location_id: str = ""
    contact_source: str = "Vicidial"
    sync_call_status: bool = True
    timeout_seconds: float = Field(default=15.0, gt=0, le=300)

    def is_configured(self) -> bool:
        return bool(self.api_key and self.base_url)


class ServerConfig(BaseModel):
    """HTTP server configuration"""

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    log_level: str = "INFO"
    integrations_mode: str = "real"

    @property
    def use_mock_integrations(self) -> bool:
        return self.integrations_mode.strip().lower() in {"mock", "test"}


class RelayConfig(BaseModel):
    """Complete relay configuration"""

    vicidial: VicidialConfig = Field(default_factory=VicidialConfig)
    crm: CRMConfig = Field(default_factory=CRMConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


# (section, field) -> environment variable
_ENV_MAP = {
    ("vicidial", "api_username"): "VICIDIAL_API_USERNAME",
    ("vicidial", "api_password"): "VICIDIAL_API_PASSWORD",
    ("vicidial", "base_url"): "VICIDIAL_BASE_URL",
    ("vicidial", "list_id"): "VICIDIAL_LIST_ID",
    ("vicidial", "source"): "VICIDIAL_SOURCE",
    ("vicidial", "duplicate_check"): "VICIDIAL_DUPLICATE_CHECK",
    ("vicidial", "timeout_seconds"): "VICIDIAL_TIMEOUT_SECONDS",
    ("crm", "api_key"): "GHL_API_KEY",
    ("crm", "base_url"): "GHL_BASE_URL",
    ("crm", "location_id"): "GHL_LOCATION_ID",
    ("crm", "contact_source"): "GHL_CONTACT_SOURCE",
    ("crm", "sync_call_status"): "GHL_SYNC_CALL_STATUS",
    ("crm", "timeout_seconds"): "GHL_TIMEOUT_SECONDS",
    ("server", "host"): "HOST",
    ("server", "port"): "PORT",
    ("server", "log_level"): "LOG_LEVEL",
    ("server", "integrations_mode"): "INTEGRATIONS_MODE",
}


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        logger.debug(f"No relay config file at {config_path}; using defaults and environment")
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping at the top level: {config_path}")
    return data


def _apply_env(config_data: Dict[str, Any], environ: Mapping[str, str]) -> Dict[str, Any]:
    for (section, key), env_name in _ENV_MAP.items():
        raw = environ.get(env_name)
        if raw is None:
            continue
        value: Any = raw.strip()
        if key == "sync_call_status":
            value = value.lower() in _TRUE_VALUES
        config_data.setdefault(section, {})
        if not isinstance(config_data[section], dict):
            raise ValueError(f"Config section '{section}' must be a mapping")
        config_data[section][key] = value
    return config_data


def load_relay_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> RelayConfig:
    """
    Load and validate relay configuration.

    Defaults are overridden by the YAML file, which is overridden by
    environment variables (a .env file is loaded first when reading the
    process environment).

    Args:
        config_path: Path to config file. Defaults to RELAY_CONFIG_PATH or
            config/relay_config.yml
        environ: Environment mapping. Defaults to os.environ

    Returns:
        Validated RelayConfig object

    Raises:
        ValidationError: If config doesn't match schema
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    if config_path is None:
        config_path = Path(environ.get("RELAY_CONFIG_PATH") or DEFAULT_CONFIG_PATH)

    config_data = _apply_env(_read_yaml(Path(config_path)), environ)

    try:
        config = RelayConfig(**config_data)
        logger.info(f"Loaded relay config (file={config_path})")
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise


def validate_config(config: RelayConfig) -> List[str]:
    """
    Validate credentials needed at runtime.
    Returns list of error messages (empty if valid).
    """
    errors = []

    if not config.vicidial.api_username:
        errors.append("VICIDIAL_API_USERNAME not set")
    if not config.vicidial.api_password:
        errors.append("VICIDIAL_API_PASSWORD not set")
    if not config.vicidial.base_url:
        errors.append("VICIDIAL_BASE_URL not set")
    if not config.crm.api_key:
        errors.append("GHL_API_KEY not set (CRM endpoints and call status sync disabled)")
    elif not config.crm.base_url:
        errors.append("GHL_BASE_URL is empty (CRM endpoints and call status sync disabled)")

    return errors
