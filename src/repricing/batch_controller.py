"""
Batch Controller

Commits every harvested product with bounded retries and aborts the run
when failures look systemic rather than per-product flakiness.
"""

import logging
import time
from typing import Optional, Protocol, Sequence

from ..browser.pages import InteractionError
from ..common.settings import AutomationSettings
from ..models import BatchOutcome, ProductLink
from .commit_workflow import CommitError

logger = logging.getLogger(__name__)


class Committer(Protocol):
    def commit(self, link: ProductLink) -> object:
        ...


class FailureThresholdExceeded(Exception):
    """More than a third of the batch failed; the run is aborted."""

    def __init__(self, outcome: BatchOutcome):
        super().__init__(
            f"{outcome.failed_count} products failed, threshold is {outcome.threshold:.2f}"
        )
        self.outcome = outcome


class BatchController:
    """
    Runs the commit workflow over a batch of links.

    - Each product gets up to max_attempts attempts, retry_delay seconds apart.
    - A product that exhausts its attempts is counted as failed and the
      batch moves on.
    - cooldown seconds separate consecutive products, whatever the outcome.
    - When failed_count exceeds len(links) / failure_threshold_divisor the
      run stops with FailureThresholdExceeded.
    """

    def __init__(self, workflow: Committer, settings: Optional[AutomationSettings] = None):
        self.workflow = workflow
        self.settings = settings or AutomationSettings()

    def run(self, links: Sequence[ProductLink]) -> BatchOutcome:
        """
        Commit all links.

        Args:
            links: Products to commit, in order

        Returns:
            BatchOutcome with processed/failed counts

        Raises:
            FailureThresholdExceeded: When too many products fail
        """
        total = len(links)
        outcome = BatchOutcome(threshold=total / self.settings.failure_threshold_divisor)
        logger.info("Processing %d products (failure threshold %.2f)", total, outcome.threshold)

        for i, link in enumerate(links, 1):
            logger.info("[%d/%d] %s", i, total, link.internal_ref)

            if self._commit_with_retries(link):
                outcome.processed_count += 1
            else:
                outcome.failed_count += 1
                outcome.failed_links.append(link)
                if outcome.failed_count > outcome.threshold:
                    logger.error("Failure threshold exceeded: %d failed of %d (threshold %.2f)",
                                 outcome.failed_count, total, outcome.threshold)
                    raise FailureThresholdExceeded(outcome)

            if i < total:
                time.sleep(self.settings.cooldown)

        if outcome.has_failures:
            logger.warning("Completed with failures: processed=%d, failed=%d",
                           outcome.processed_count, outcome.failed_count)
        else:
            logger.info("Completed: processed=%d, failed=0", outcome.processed_count)
        return outcome

    def _commit_with_retries(self, link: ProductLink) -> bool:
        max_attempts = self.settings.max_attempts

        for attempt in range(1, max_attempts + 1):
            try:
                self.workflow.commit(link)
                return True
            except CommitError as e:
                logger.warning("Attempt %d/%d failed at step '%s' for %s (SKU %s): %s",
                               attempt, max_attempts, e.step.value, link.internal_ref,
                               link.sku or "-", e)
            except InteractionError as e:
                logger.warning("Attempt %d/%d failed for %s (SKU %s): %s",
                               attempt, max_attempts, link.internal_ref, link.sku or "-", e)

            if attempt < max_attempts:
                time.sleep(self.settings.retry_delay)

        logger.error("Giving up on %s after %d attempts", link.internal_ref, max_attempts)
        return False
