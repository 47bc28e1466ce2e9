"""
Bundler configuration loading and validation.
"""

import os
from typing import Any

import yaml
from dotenv import load_dotenv

from bundler_gas.core.gas.manager import FEE_MODES
from bundler_gas.core.networks import Networks
from bundler_gas.utils.logger import LOG_LEVELS

REQUIRED_FIELDS = [
    "name",
    "network",
    "rpc_endpoint",
]

CONFIG_VALIDATION_RULES = [
    ("rpc.timeout", (int, float), 0, 120, "rpc.timeout must be between 0 and 120 seconds"),
]

# Valid values for enum-like fields
VALID_VALUES = {
    "gas.fee_mode": list(FEE_MODES),
    "logging.level": list(LOG_LEVELS),
}

DEFAULTS = {
    "rpc": {"timeout": 10.0},
    "gas": {"fee_mode": "auto"},
    "logging": {"level": "INFO", "file": None},
}


def load_bundler_config(path: str) -> dict:
    """Load and validate a bundler configuration from a YAML file."""
    with open(path) as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    env_file = config.get("env_file")
    if env_file:
        env_path = os.path.join(os.path.dirname(path), env_file)
        if os.path.exists(env_path):
            load_dotenv(env_path, override=True)
        else:
            load_dotenv(env_file, override=True)

    resolve_env_vars(config)
    apply_defaults(config)
    validate_config(config)
    return config


def resolve_env_vars(config: dict) -> None:
    """Recursively resolve environment variables in the configuration."""
    def resolve_env(value):
        if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            env_value = os.getenv(env_var)
            if env_value is None:
                raise ValueError(f"Environment variable '{env_var}' not found")
            return env_value
        return value

    def resolve_all(d):
        for k, v in d.items():
            if isinstance(v, dict):
                resolve_all(v)
            else:
                d[k] = resolve_env(v)

    resolve_all(config)


def apply_defaults(config: dict) -> None:
    """Fill in optional sections that are missing from the configuration."""
    for section, values in DEFAULTS.items():
        current = config.setdefault(section, {})
        if not isinstance(current, dict):
            raise ValueError(f"Config section '{section}' must be a mapping")
        for key, value in values.items():
            current.setdefault(key, value)


def get_nested_value(config: dict, path: str) -> Any:
    """Get a nested value from the configuration using dot notation."""
    keys = path.split(".")
    value = config
    for key in keys:
        if not isinstance(value, dict) or key not in value:
            raise ValueError(f"Missing required config key: {path}")
        value = value[key]
    return value


def validate_config(config: dict) -> None:
    """Validate the configuration against defined rules."""
    for field in REQUIRED_FIELDS:
        get_nested_value(config, field)

    for path, expected_type, min_val, max_val, error_msg in CONFIG_VALIDATION_RULES:
        value = get_nested_value(config, path)
        if isinstance(value, bool) or not isinstance(value, expected_type):
            raise ValueError(f"Type error: {error_msg}")
        if not (min_val < value <= max_val):
            raise ValueError(f"Range error: {error_msg}")

    for path, valid_values in VALID_VALUES.items():
        value = get_nested_value(config, path)
        if value not in valid_values:
            raise ValueError(f"{path} must be one of {valid_values}")

    # Raises UnknownNetworkError, a ValueError, for networks outside the catalog
    Networks.chain_id(config["network"])

    log_file = config["logging"]["file"]
    if log_file is not None and not isinstance(log_file, str):
        raise ValueError("logging.file must be a file path")

    endpoint = config["rpc_endpoint"]
    if not isinstance(endpoint, str) or not endpoint.startswith(("http://", "https://")):
        raise ValueError("Invalid RPC endpoint. Must start with http:// or https://")


def print_config_summary(config: dict) -> None:
    """Print a summary of the loaded configuration."""
    network = config.get("network", "not configured")

    print(f"Bundler name: {config.get('name', 'unnamed')}")
    try:
        print(f"Network: {network} (chain id {Networks.chain_id(network)})")
    except ValueError:
        print(f"WARNING: Unknown network '{network}'")

    print(f"RPC timeout: {config.get('rpc', {}).get('timeout', 'not configured')}s")
    print(f"Fee mode: {config.get('gas', {}).get('fee_mode', 'not configured')}")
    print(f"Log level: {config.get('logging', {}).get('level', 'not configured')}")
    print("Configuration loaded successfully!")
