"""
Product Commit Workflow

Reprices one product in the back-office: opens its prices tab, resolves
the supplier price of every variant, fills the profit calculator, and
runs the save / confirm sequence.

States, in order:

    NAVIGATED -> PRICES_TAB_OPENED
      -> per variant row: SKU_CAPTURED -> PRICE_RESOLVED -> FIELDS_FILLED
                          -> RULES_APPLIED -> CALCULATION_APPLIED
      -> MAIN_SAVE_CLICKED -> CONFIRMATION_HANDLED -> SAVED

A missing required element (prices tab, save buttons, return navigation)
fails the whole product with CommitError. Problems with a single variant
row are logged and only skip that row.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, TypeVar

from ..browser.pages import CalculatorField, InteractionError, ProductDetailPage, VariantRow
from ..common.settings import AutomationSettings
from ..models import ProductLink
from ..pricing.resolver import PriceLookupClient, ResolutionFailure
from ..pricing.rules import PricingRuleEngine, format_price, minor_to_major

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CommitStep(Enum):
    NAVIGATED = "navigated"
    PRICES_TAB_OPENED = "prices_tab_opened"
    SKU_CAPTURED = "sku_captured"
    PRICE_RESOLVED = "price_resolved"
    FIELDS_FILLED = "fields_filled"
    RULES_APPLIED = "rules_applied"
    CALCULATION_APPLIED = "calculation_applied"
    MAIN_SAVE_CLICKED = "main_save_clicked"
    CONFIRMATION_HANDLED = "confirmation_handled"
    SAVED = "saved"


class CommitError(Exception):
    """A product could not be committed. step is the state that was not reached."""

    def __init__(self, step: CommitStep, link: ProductLink, message: str):
        super().__init__(f"{step.value} failed for {link.internal_ref}: {message}")
        self.step = step
        self.link = link


@dataclass(frozen=True)
class SkippedRow:
    """A variant row that was left unpriced. step is the state it did not reach."""
    sku: str
    step: CommitStep
    reason: str


@dataclass
class CommitReport:
    """What happened to one product during a commit attempt."""
    internal_ref: str
    last_step: Optional[CommitStep] = None
    rows_seen: int = 0
    rows_priced: int = 0
    skipped_rows: List[SkippedRow] = field(default_factory=list)
    confirmation_shown: bool = False

    @property
    def skipped_skus(self) -> List[str]:
        return [row.sku for row in self.skipped_rows]

    @property
    def rows_skipped(self) -> int:
        return len(self.skipped_rows)


class ProductCommitWorkflow:
    """
    Drives the commit state machine for one product at a time.

    Usage:
        workflow = ProductCommitWorkflow(session.product_page(), client, engine, settings)
        report = workflow.commit(link)   # raises CommitError on product failure

    With dry_run=True the workflow reads SKUs, resolves prices and derives
    the parameters, but never touches the calculator or the save buttons.
    """

    def __init__(
        self,
        page: ProductDetailPage,
        resolver: PriceLookupClient,
        engine: PricingRuleEngine,
        settings: Optional[AutomationSettings] = None,
        dry_run: bool = False,
    ):
        self.page = page
        self.resolver = resolver
        self.engine = engine
        self.settings = settings or AutomationSettings()
        self.dry_run = dry_run

    def _required(self, step: CommitStep, link: ProductLink, report: CommitReport,
                  action: Callable[..., T], *args) -> T:
        """Run a step whose failure fails the product."""
        try:
            result = action(*args)
        except InteractionError as e:
            raise CommitError(step, link, str(e)) from e
        report.last_step = step
        return result

    def commit(self, link: ProductLink) -> CommitReport:
        """
        Reprice and save one product.

        Args:
            link: Product to commit; link.sku is updated for each variant row

        Returns:
            CommitReport for the product

        Raises:
            CommitError: If a required element or the save navigation times out
        """
        settings = self.settings
        report = CommitReport(internal_ref=link.internal_ref)
        logger.info("Processing: %s", link.internal_ref)

        self._required(CommitStep.NAVIGATED, link, report, self.page.open, link.internal_ref)
        self._required(CommitStep.PRICES_TAB_OPENED, link, report,
                       self.page.open_prices_tab, settings.default_timeout_ms)
        self._required(CommitStep.PRICES_TAB_OPENED, link, report,
                       self.page.wait_for_variant_rows, settings.default_timeout_ms)
        self.page.pause(settings.variant_settle_ms)

        rows = self._required(CommitStep.PRICES_TAB_OPENED, link, report, self.page.variant_rows)
        for row in rows:
            report.rows_seen += 1
            self._process_variant(link, row, report)

        logger.info("Priced %d of %d variant rows for %s",
                    report.rows_priced, report.rows_seen, link.internal_ref)

        if self.dry_run:
            logger.info("Dry run: not saving %s", link.internal_ref)
            return report

        self._save(link, report)
        return report

    def _process_variant(self, link: ProductLink, row: VariantRow, report: CommitReport) -> None:
        """
        Price one variant row. Never raises for row-level problems.

        step tracks the row state being worked towards; a skip is recorded
        against it:

            SKU_CAPTURED         read the row's SKU
            PRICE_RESOLVED       look up the supplier price
            FIELDS_FILLED        open the calculator, write the price
            RULES_APPLIED        write the tier parameters
            CALCULATION_APPLIED  let the calculator settle, press apply
        """
        step = CommitStep.SKU_CAPTURED
        sku = None
        try:
            sku = row.sku()
            if not sku:
                logger.debug("Variant row without SKU field, skipping")
                return

            # One link may carry several variants; the last SKU seen wins
            link.sku = sku
            logger.info("Found SKU: %s", sku)

            step = CommitStep.PRICE_RESOLVED
            result = self.resolver.resolve(sku, link.external_ref)
            if isinstance(result, ResolutionFailure):
                self._skip_row(report, sku, step, f"no price ({result.reason})")
                return

            price = minor_to_major(result.resolved_price_minor_units)
            parameters = self.engine.derive_parameters(price)
            price_text = format_price(price)

            if self.dry_run:
                logger.info("Dry run: SKU %s price=%s marketing=%s markup=%s promo=%s shipping=%s",
                            sku, price_text, parameters.marketing_percent, parameters.markup_percent,
                            parameters.promo_markup_percent, parameters.shipping_price)
                report.rows_priced += 1
                return

            step = CommitStep.FIELDS_FILLED
            if not row.open_calculator():
                self._skip_row(report, sku, step, "profit calculator button not found")
                return
            logger.info("Opened profit calculator for SKU: %s", sku)
            self.page.pause(self.settings.calculator_settle_ms)

            values = {
                CalculatorField.MARKETING: parameters.marketing_percent,
                CalculatorField.MARKUP: parameters.markup_percent,
                CalculatorField.PROMO_MARKUP: parameters.promo_markup_percent,
            }
            if parameters.shipping_price is not None:
                values[CalculatorField.SHIPPING] = parameters.shipping_price

            missing = self.page.missing_calculator_fields([CalculatorField.PRICE] + list(values))
            if missing:
                self._skip_row(report, sku, step, "calculator fields not found: "
                               + ", ".join(f.value for f in missing))
                return

            self.page.fill_calculator_field(CalculatorField.PRICE, price_text)
            logger.info("Updated price to: %s", price_text)

            step = CommitStep.RULES_APPLIED
            for calculator_field, value in values.items():
                self.page.fill_calculator_field(calculator_field, value)
                logger.info("Updated %s to: %s", calculator_field.value, value)

            step = CommitStep.CALCULATION_APPLIED
            self.page.pause(self.settings.recalculation_settle_ms)

            if not self.page.apply_calculation():
                self._skip_row(report, sku, step, "apply button not found")
                return
            logger.info("Applied calculation for SKU: %s", sku)
            self.page.pause(self.settings.apply_settle_ms)

            report.rows_priced += 1

        except InteractionError as e:
            self._skip_row(report, sku or "?", step, str(e))

    def _skip_row(self, report: CommitReport, sku: str, step: CommitStep, reason: str) -> None:
        logger.warning("Skipping variant %s of %s at step '%s': %s",
                       sku, report.internal_ref, step.value, reason)
        report.skipped_rows.append(SkippedRow(sku=sku, step=step, reason=reason))

    def _save(self, link: ProductLink, report: CommitReport) -> None:
        settings = self.settings

        self._required(CommitStep.MAIN_SAVE_CLICKED, link, report,
                       self.page.click_main_save, settings.default_timeout_ms)
        logger.info("Clicked main save button")
        self.page.pause(settings.main_save_settle_ms)

        confirmed = self._required(CommitStep.CONFIRMATION_HANDLED, link, report,
                                   self.page.confirm_ignore_cost, settings.confirmation_timeout_ms)
        report.confirmation_shown = confirmed
        if confirmed:
            logger.info("Acknowledged ignore-cost-update confirmation")
            self.page.pause(settings.confirmation_settle_ms)
        else:
            logger.debug("No ignore-cost-update confirmation shown")

        self._required(CommitStep.SAVED, link, report,
                       self.page.click_final_save, settings.default_timeout_ms)
        logger.info("Clicked final save button")

        self._required(CommitStep.SAVED, link, report,
                       self.page.wait_for_listing, settings.save_navigation_timeout_ms)
        logger.info("Saved %s", link.internal_ref)
        self.page.pause(settings.post_save_settle_ms)
