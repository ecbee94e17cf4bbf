# Area: Shared
"""
rps_client._config — Client Configuration
=========================================

Configuration is a plain dict. Sources, lowest priority first:

1. DEFAULT_CONFIG
2. JSON config file (optional)
3. .env file, loaded into the environment by python-dotenv
4. RPS_* environment variables
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from dotenv import load_dotenv

from ._chain.abi import DEFAULT_CONTRACT_ADDRESS

logger = logging.getLogger("rps_client")

DEFAULT_CONFIG: Dict[str, Any] = {
    "rpc_url": "https://bsc-testnet-rpc.publicnode.com",
    "chain_id": 97,
    "contract_address": DEFAULT_CONTRACT_ADDRESS,
    "vault_path": "rps_vault.db",
    "log_file": "rps_client.log",
    "poll_interval_seconds": 9.0,
    "max_concurrent_fetches": 8,
    "receipt_timeout_seconds": 120,
    "default_bet": "0.001",
}

# Environment variable -> (config key, converter)
ENV_OVERRIDES: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    "RPS_RPC_URL": ("rpc_url", str),
    "RPS_CHAIN_ID": ("chain_id", int),
    "RPS_CONTRACT_ADDRESS": ("contract_address", str),
    "RPS_PRIVATE_KEY": ("private_key", str),
    "RPS_VAULT_PATH": ("vault_path", str),
    "RPS_LOG_FILE": ("log_file", str),
    "RPS_POLL_INTERVAL_SECONDS": ("poll_interval_seconds", float),
    "RPS_MAX_CONCURRENT_FETCHES": ("max_concurrent_fetches", int),
    "RPS_RECEIPT_TIMEOUT_SECONDS": ("receipt_timeout_seconds", float),
}

# Required config keys (private key usually comes from .env)
REQUIRED_CONFIG_KEYS = [
    "rpc_url",
    "contract_address",
    "private_key",
]


def load_config(
    config_path: Optional[str] = None, env_file: Optional[str] = None
) -> Dict[str, Any]:
    """
    Load config from defaults, file and environment.

    Args:
        config_path: Optional JSON config file
        env_file: Optional .env path; python-dotenv searches upwards when None

    Returns:
        Merged configuration dict

    Raises:
        ValueError: If an environment override cannot be converted
    """
    config: Dict[str, Any] = dict(DEFAULT_CONFIG)

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config.update(json.load(f))
        else:
            logger.warning(f"Config file not found: {config_path}")

    load_dotenv(dotenv_path=env_file)

    for env_key, (config_key, convert) in ENV_OVERRIDES.items():
        if env_key in os.environ:
            raw = os.environ[env_key]
            try:
                config[config_key] = convert(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {env_key}: {raw!r}") from e

    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate required configuration keys.

    Args:
        config: Configuration dict

    Raises:
        ValueError: If required keys are missing or values are out of range
    """
    missing = [k for k in REQUIRED_CONFIG_KEYS if not config.get(k)]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")
    if float(config.get("poll_interval_seconds", 0)) <= 0:
        raise ValueError("poll_interval_seconds must be positive")
    if int(config.get("max_concurrent_fetches", 1)) < 1:
        raise ValueError("max_concurrent_fetches must be at least 1")
