"""
Configuration Loader

Loads YAML configuration files for the pricing tier table and the
browser automation settings (timeouts, delays, retry ceiling).
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'pricing_tiers.yaml')

    Returns:
        Parsed YAML content as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_pricing_tiers() -> List[Dict[str, Any]]:
    """
    Load the pricing tier table.

    Returns:
        Ascending list of tier dicts. The last tier has no 'up_to' bound.

    Example:
        [
            {'label': 'up to 100,00', 'up_to': '100.00',
             'marketing_percent': '10,00', 'markup_percent': '30,00',
             'promo_markup_percent': '20,00', 'shipping_price': '24,00'},
            ...
            {'label': 'above 500,00', 'marketing_percent': '7,00', ...},
        ]
    """
    config = load_config('pricing_tiers.yaml')
    return config.get('tiers', [])


def load_manage_shipping() -> bool:
    """
    Whether the back-office still exposes the shipping field in its calculator.

    Returns:
        True if shipping prices should be written (default True)
    """
    config = load_config('pricing_tiers.yaml')
    return bool(config.get('manage_shipping', True))


def load_automation_config() -> Dict[str, Any]:
    """
    Load browser automation settings.

    Returns:
        Dictionary of timeouts (milliseconds), delays (seconds) and
        retry settings. Unknown keys are ignored by AutomationSettings.
    """
    config = load_config('automation.yaml')
    return config.get('automation', {})
