"""
Run Settings

Environment-derived endpoints and the automation settings loaded from
config/automation.yaml. Timeouts are milliseconds (Playwright units),
controller delays are seconds.
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from .config_loader import load_automation_config
from .constants import (
    DEFAULT_API_URL,
    DEFAULT_BROWSER_DATA_DIR,
    DEFAULT_LISTING_URL,
    PRODUCT_FIND_PATH,
)

logger = logging.getLogger(__name__)


def get_api_url() -> str:
    """Base URL of the price lookup service (API_URL)."""
    return os.getenv("API_URL") or DEFAULT_API_URL


def get_product_find_url() -> str:
    return get_api_url().rstrip("/") + PRODUCT_FIND_PATH


def get_listing_url() -> str:
    return os.getenv("LISTING_URL") or DEFAULT_LISTING_URL


def get_browser_data_dir() -> str:
    return os.getenv("BROWSER_DATA_DIR") or DEFAULT_BROWSER_DATA_DIR


def is_headless() -> bool:
    return os.getenv("HEADLESS", "true").strip().lower() not in ("0", "false", "no")


@dataclass
class AutomationSettings:
    """Timeouts, settle waits, and retry policy for one run."""

    # Element waits (ms)
    default_timeout_ms: int = 30000
    row_timeout_ms: int = 5000
    confirmation_timeout_ms: int = 10000
    save_navigation_timeout_ms: int = 60000

    # Fixed settle waits (ms)
    initial_load_ms: int = 5000
    listing_settle_ms: int = 2000
    variant_settle_ms: int = 2000
    calculator_settle_ms: int = 2000
    recalculation_settle_ms: int = 1000
    apply_settle_ms: int = 1000
    main_save_settle_ms: int = 3000
    confirmation_settle_ms: int = 2000
    post_save_settle_ms: int = 5000

    # Batch controller (seconds / counts)
    max_attempts: int = 3
    retry_delay: float = 5.0
    cooldown: float = 2.0
    failure_threshold_divisor: int = 3

    # Listing pagination
    page_param: str = "page"
    max_pages: int = 0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AutomationSettings":
        """Build settings from a config dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in (data or {}).items():
            if key in known:
                values[key] = value
            else:
                logger.warning("Ignoring unknown automation setting: %s", key)

        settings = cls(**values)
        if settings.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if settings.failure_threshold_divisor < 1:
            raise ValueError("failure_threshold_divisor must be at least 1")
        return settings


def load_automation_settings() -> AutomationSettings:
    """Load AutomationSettings from config/automation.yaml."""
    return AutomationSettings.from_dict(load_automation_config())
