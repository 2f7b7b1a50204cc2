"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
"""

# Environment defaults
DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_LISTING_URL = "https://app.dropi.com.br/produtos"
DEFAULT_BROWSER_DATA_DIR = "browser-data"

# Pricing lookup endpoint, relative to API_URL
PRODUCT_FIND_PATH = "/api/products/find"

# Price lookup service returns minor currency units (centavos)
MINOR_UNITS_PER_MAJOR = 100

# Browser viewport used by the automated session
VIEWPORT = {"width": 1920, "height": 1080}

# Link CSV columns (harvest output / --links-file input)
LINK_FIELDNAMES = ["internal_ref", "external_ref", "sku"]
