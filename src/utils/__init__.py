"""
Utility modules for the relay
"""
from .config_loader import CRMConfig, RelayConfig, ServerConfig, VicidialConfig, load_relay_config, validate_config

__all__ = [
    'CRMConfig',
    'RelayConfig',
    'ServerConfig',
    'VicidialConfig',
    'load_relay_config',
    'validate_config',
]
