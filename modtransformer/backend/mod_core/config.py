# mod_core/config.py
import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

logger = logging.getLogger(__name__)

# === DEFAULTS ===
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 1112
MAX_CHAIN_DEPTH = 256
DEFAULT_TAIL_CHILD = "last"

TAIL_CHILD_MODES = ("last", "leaf")
INTEGER_KEYS = ("port", "max_chain_depth")

ENV_OVERRIDES = {
    "MODTRANSFORMER_HOST": "host",
    "MODTRANSFORMER_PORT": "port",
    "MODTRANSFORMER_TAIL_CHILD": "tail_child",
    "MODTRANSFORMER_MAX_DEPTH": "max_chain_depth",
}


def default_config() -> Dict[str, Any]:
    return {
        "host": DEFAULT_HOST,
        "port": DEFAULT_PORT,
        "max_chain_depth": MAX_CHAIN_DEPTH,
        "tail_child": DEFAULT_TAIL_CHILD,
    }


def validate_tail_child(mode: str) -> str:
    if mode not in TAIL_CHILD_MODES:
        raise ValueError(f"Unknown tail_child mode '{mode}' (expected one of {', '.join(TAIL_CHILD_MODES)})")
    return mode


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Builds the runtime configuration.

    Defaults are overlaid with the YAML file at ``config_path`` (if given)
    and then with ``MODTRANSFORMER_*`` environment variables.
    """
    config = default_config()

    if config_path:
        target_path = Path(config_path)
        logger.info(f"Loading configuration from {target_path.resolve()}")
        with open(target_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file '{target_path}' must contain a mapping")
        config.update(loaded)

    for env_name, key in ENV_OVERRIDES.items():
        raw_value = os.environ.get(env_name)
        if raw_value is not None:
            config[key] = raw_value

    for key in INTEGER_KEYS:
        config[key] = _coerce_int(key, config[key])
    validate_tail_child(config["tail_child"])
    return config


def _coerce_int(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Configuration value '{key}' must be an integer, got {value!r}")
