"""
Catalog Repricer

Modules:
    models      - Data models (ProductLink, PricedVariant, PricingParameters, BatchOutcome)
    common      - Shared utilities (config loader, settings, logging, CSV utils)
    pricing     - Pricing rule engine and remote price lookup client
    browser     - Back-office page interfaces and their Playwright implementations
    discovery   - Product link harvesting from the paginated listing
    repricing   - Per-product commit workflow, batch controller, pipeline
"""
