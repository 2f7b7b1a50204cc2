# Common utilities
from .config_loader import (
    load_automation_config,
    load_config,
    load_manage_shipping,
    load_pricing_tiers,
)
from .csv_utils import read_csv, write_csv
from .log_config import setup_logging
from .settings import AutomationSettings, load_automation_settings
