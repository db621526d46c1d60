"""User configuration management.

This module manages user-specific settings, currently the split
configuration (group tiers) remembered per shopping list.

The configuration is stored in data/local/config.json.

Example usage:
    >>> from shopsplit.core.user_config import get_split_config, set_split_config
    >>> set_split_config("list-1", [GroupSpec(target_amount=40, count=1)])
    >>> specs = get_split_config("list-1")
"""

import json
from datetime import datetime

from shopsplit.core.config import LOCAL_DIR
from shopsplit.models.shopping import GroupSpec

CONFIG_PATH = LOCAL_DIR / "config.json"
DEFAULT_SPLIT_CONFIG = [{"target_amount": 25.0, "count": 2}]


def load_config() -> dict:
    """Load user configuration from file.

    Returns:
        Configuration dictionary (empty if missing or unreadable)
    """
    if not CONFIG_PATH.exists():
        return {}

    try:
        with open(CONFIG_PATH, encoding="utf-8") as f:
            config = json.load(f)
    except (json.JSONDecodeError, OSError):
        return {}

    return config if isinstance(config, dict) else {}


def save_config(config: dict) -> None:
    """Save user configuration to file.

    Args:
        config: Configuration dictionary to save
    """
    config["updated_at"] = datetime.now().isoformat()
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)

    with open(CONFIG_PATH, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2, ensure_ascii=False)


def _split_configs(config: dict) -> dict:
    split_configs = config.get("split_configs")
    return split_configs if isinstance(split_configs, dict) else {}


def get_split_config(list_id: str) -> list[GroupSpec]:
    """Get the remembered group tiers for a list.

    Returns:
        Saved specs, or the default of two groups of 25
    """
    raw = _split_configs(load_config()).get(list_id)
    try:
        specs = [GroupSpec.model_validate(spec) for spec in raw or ()]
    except (TypeError, ValueError):
        specs = []
    return specs or [GroupSpec.model_validate(spec) for spec in DEFAULT_SPLIT_CONFIG]


def set_split_config(list_id: str, specs: list[GroupSpec]) -> None:
    """Remember the group tiers for a list.

    Raises:
        ValueError: If no specs are given
    """
    if not specs:
        raise ValueError("At least one group spec is required")

    config = load_config()
    config["split_configs"] = _split_configs(config)
    config["split_configs"][list_id] = [spec.model_dump() for spec in specs]
    save_config(config)


def delete_split_config(list_id: str) -> None:
    """Forget the group tiers for a list."""
    config = load_config()
    split_configs = _split_configs(config)
    if list_id in split_configs:
        del split_configs[list_id]
        config["split_configs"] = split_configs
        save_config(config)
