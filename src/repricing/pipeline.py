"""
Repricing Pipeline

Harvest-then-commit over a single browser session. The session is passed
in by the caller, who owns its lifetime.
"""

import logging
from pathlib import Path
from typing import List, Optional, Protocol

from ..browser.pages import InteractionError, ListingPage, ProductDetailPage
from ..common.settings import AutomationSettings
from ..discovery.link_harvester import LinkHarvester, ListingUnreachableError
from ..discovery.link_store import save_links
from ..models import BatchOutcome, ProductLink
from ..pricing.resolver import PriceLookupClient
from ..pricing.rules import PricingRuleEngine
from .batch_controller import BatchController, FailureThresholdExceeded
from .commit_workflow import ProductCommitWorkflow

logger = logging.getLogger(__name__)


class PageSession(Protocol):
    def listing_page(self) -> ListingPage:
        ...

    def product_page(self) -> ProductDetailPage:
        ...


class RepricingPipeline:
    """
    Wires harvester, commit workflow and batch controller to one session.

    Usage:
        with BrowserSession(...) as session, PriceLookupClient() as client:
            pipeline = RepricingPipeline(session, client, PricingRuleEngine.from_config())
            outcome = pipeline.run("https://app.dropi.com.br/produtos")
    """

    def __init__(
        self,
        session: PageSession,
        resolver: PriceLookupClient,
        engine: PricingRuleEngine,
        settings: Optional[AutomationSettings] = None,
        dry_run: bool = False,
    ):
        self.session = session
        self.resolver = resolver
        self.engine = engine
        self.settings = settings or AutomationSettings()
        self.dry_run = dry_run

    def harvest(self, listing_url: str, limit: int = 0) -> List[ProductLink]:
        """
        Open the listing and collect product links.

        Raises:
            ListingUnreachableError: If the listing cannot be opened or shows no rows
        """
        listing = self.session.listing_page()
        logger.info("Navigating to products page")
        try:
            listing.open(listing_url)
        except InteractionError as e:
            raise ListingUnreachableError(f"Listing unreachable at {listing_url}: {e}") from e
        listing.pause(self.settings.initial_load_ms)

        harvester = LinkHarvester(listing, self.settings)
        links = harvester.harvest(listing_url, limit=limit)
        logger.debug("Harvest stats: %s", harvester.get_stats())
        return links

    def commit(self, links: List[ProductLink], failed_output: Optional[str | Path] = None) -> BatchOutcome:
        """
        Commit links through the batch controller.

        Raises:
            FailureThresholdExceeded: When too many products fail
        """
        workflow = ProductCommitWorkflow(
            self.session.product_page(), self.resolver, self.engine, self.settings,
            dry_run=self.dry_run,
        )
        controller = BatchController(workflow, self.settings)

        try:
            outcome = controller.run(links)
        except FailureThresholdExceeded as e:
            self._write_failed(e.outcome, failed_output)
            raise

        self._write_failed(outcome, failed_output)
        return outcome

    def run(
        self,
        listing_url: str,
        limit: int = 0,
        links: Optional[List[ProductLink]] = None,
        links_output: Optional[str | Path] = None,
        failed_output: Optional[str | Path] = None,
    ) -> BatchOutcome:
        """
        Harvest (unless links are given) and commit.

        Args:
            listing_url: Listing root URL
            limit: Maximum number of links to harvest (0 = no limit)
            links: Pre-harvested links; skips the harvest when given
            links_output: Save harvested links to this CSV
            failed_output: Save products that exhausted their retries to this CSV

        Returns:
            BatchOutcome of the commit phase
        """
        if links is None:
            links = self.harvest(listing_url, limit=limit)
            if links_output:
                save_links(links, links_output)
        elif limit:
            links = links[:limit]

        logger.info("Processing %d product links", len(links))
        return self.commit(links, failed_output=failed_output)

    def _write_failed(self, outcome: BatchOutcome, failed_output: Optional[str | Path]) -> None:
        if not failed_output or not outcome.failed_links:
            return
        logger.warning("Writing %d failed products to %s", len(outcome.failed_links), failed_output)
        save_links(outcome.failed_links, failed_output)
