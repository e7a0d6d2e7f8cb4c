"""CLI commands and configuration for trust-injector."""

from .config import load_config, create_default_config, validate_config, installer_options

__all__ = [
    "load_config",
    "create_default_config",
    "validate_config",
    "installer_options",
]
