"""Configuration loader for budget section settings."""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional

from ..cycle import DayFilter

# Configuration directory
CONFIG_DIR = Path(__file__).parent


@dataclass(frozen=True)
class SectionSettings:
    daily_release: Decimal
    spending_threshold: Decimal
    day_filter: DayFilter
    week_length: int
    pool: Optional[Decimal] = None


def load_config(config_name: str) -> Dict[str, Any]:
    """Load a configuration file by name.

    Args:
        config_name: Name of the config file (without .json extension)

    Returns:
        Dictionary containing the configuration

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        json.JSONDecodeError: If the configuration file is invalid JSON

    Example:
        >>> config = load_config('budgets')
        >>> config['burn-money']['pool']
        '500'
    """
    config_path = CONFIG_DIR / f"{config_name}.json"

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def get_config_value(config_name: str, *keys: str, default: Any = None) -> Any:
    """Get a nested configuration value by key path.

    Args:
        config_name: Name of the config file
        *keys: Path to the nested value (e.g., 'food-spending', 'daily_release')
        default: Default value if key path doesn't exist

    Returns:
        The configuration value at the specified path, or default if not found
    """
    try:
        config = load_config(config_name)
        value = config
        for key in keys:
            value = value[key]
        return value
    except (KeyError, FileNotFoundError):
        return default


def _section_settings(raw: Dict[str, Any]) -> SectionSettings:
    pool = raw.get('pool')
    return SectionSettings(
        daily_release=Decimal(str(raw['daily_release'])),
        spending_threshold=Decimal(str(raw.get('spending_threshold', '10'))),
        day_filter=DayFilter(raw.get('day_filter', DayFilter.ALL_DAYS.value)),
        week_length=int(raw.get('week_length', 7)),
        pool=None if pool is None else Decimal(str(pool)),
    )


def load_budget_settings(overrides: Optional[Dict[str, Dict[str, Any]]] = None) -> Dict[str, SectionSettings]:
    """Typed settings for each calendar section.

    Args:
        overrides: Optional per-section values merged over ``budgets.json``

    Returns:
        Dictionary mapping section slugs to their settings

    Raises:
        ValueError: If a daily release or pool is negative

    Example:
        >>> load_budget_settings()['burn-money'].pool
        Decimal('500')
    """
    config = load_config('budgets')
    for section, values in (overrides or {}).items():
        config[section] = {**config.get(section, {}), **values}

    settings = {section: _section_settings(raw) for section, raw in config.items()}
    for section, entry in settings.items():
        if entry.daily_release < 0 or (entry.pool is not None and entry.pool < 0):
            raise ValueError(f"negative amounts are not allowed in '{section}' settings")
    return settings
