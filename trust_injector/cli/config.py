"""
Configuration loader for YAML-based injector settings.

Lets the trust-store probe table, the NSS tool and extra NSS databases be
set from a file instead of command-line arguments.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, List

from ..exceptions import ValidationError
from ..trust_store import TrustStoreLayout

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config format is invalid

    Example:
        >>> config = load_config("trust-injector.yaml")
        >>> print(config["nss"]["enabled"])
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Create a config file using: trust-injector init-config"
        )

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in config file: {e}")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValidationError("Config file must contain a YAML dictionary")

    return config


def _require_str_list(value, key):
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{key} must be a list of strings")


def validate_config(config: Dict[str, Any]) -> bool:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    for section in ("trust_store", "nss", "logging"):
        if section in config and not isinstance(config[section], dict):
            raise ValidationError(f"{section} must be a mapping")

    layouts = config.get("trust_store", {}).get("layouts", [])
    if not isinstance(layouts, list):
        raise ValidationError("trust_store.layouts must be a list")
    for i, entry in enumerate(layouts):
        key = f"trust_store.layouts[{i}]"
        if not isinstance(entry, dict):
            raise ValidationError(f"{key} must be a mapping")
        for required in ("anchor_dir", "rebuild_binary"):
            if not isinstance(entry.get(required), str):
                raise ValidationError(f"{key}.{required} must be a string")
        if "rebuild_args" in entry:
            _require_str_list(entry["rebuild_args"], f"{key}.rebuild_args")
        if entry.get("registry_path") is not None and not isinstance(entry["registry_path"], str):
            raise ValidationError(f"{key}.registry_path must be a string")
        if "extension" in entry:
            ext = entry["extension"]
            if not isinstance(ext, str) or not ext.startswith("."):
                raise ValidationError(f"{key}.extension must be a string starting with '.'")

    nss = config.get("nss", {})
    if "enabled" in nss and not isinstance(nss["enabled"], bool):
        raise ValidationError("nss.enabled must be true or false")
    if "tool" in nss and not isinstance(nss["tool"], str):
        raise ValidationError("nss.tool must be a string")
    if "databases" in nss:
        _require_str_list(nss["databases"], "nss.databases")

    level = config.get("logging", {}).get("level")
    if level is not None and str(level).upper() not in LOG_LEVELS:
        raise ValidationError(f"logging.level must be one of {', '.join(LOG_LEVELS)}")

    return True


def layouts_from_config(config: Dict[str, Any]) -> List[TrustStoreLayout]:
    """Build the trust-store probe table from config (empty when not set)."""
    layouts = []
    for entry in config.get("trust_store", {}).get("layouts", []):
        registry_path = entry.get("registry_path")
        layouts.append(
            TrustStoreLayout(
                anchor_dir=Path(entry["anchor_dir"]),
                rebuild_binary=entry["rebuild_binary"],
                rebuild_args=tuple(entry.get("rebuild_args", ())),
                registry_path=Path(registry_path) if registry_path else None,
                extension=entry.get("extension", ".crt"),
            )
        )
    return layouts


def installer_options(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn a validated config into keyword arguments for install_ca/uninstall_ca.

    Example:
        >>> install_ca("ca.pem", **installer_options(load_config("trust-injector.yaml")))
    """
    nss = config.get("nss", {})
    options: Dict[str, Any] = {
        "nss": nss.get("enabled", True),
        "extra_nss_databases": list(nss.get("databases", [])),
    }
    if "tool" in nss:
        options["nss_tool"] = nss["tool"]

    layouts = layouts_from_config(config)
    if layouts:
        options["candidates"] = layouts
    return options


def create_default_config(output_path: str = "trust-injector.yaml"):
    """
    Create a default configuration file with all options.

    Args:
        output_path: Where to save the config file

    Example:
        >>> create_default_config("my-config.yaml")
    """
    default_config = {
        "trust_store": {
            # Empty means the built-in probe order
            "layouts": [],
        },
        "nss": {
            "enabled": True,
            "tool": "certutil",
            "databases": [],
        },
        "logging": {
            "level": "INFO",
        },
    }

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(default_config, f, default_flow_style=False, sort_keys=False)
