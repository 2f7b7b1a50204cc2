"""
Repricing modules.

Modules:
    commit_workflow  - Per-product calculator fill and save sequence
    batch_controller - Retry and failure-threshold policy over a batch
    pipeline         - Harvest-then-commit over one browser session
"""

from .batch_controller import BatchController, FailureThresholdExceeded
from .commit_workflow import CommitError, CommitReport, CommitStep, ProductCommitWorkflow, SkippedRow
from .pipeline import RepricingPipeline

__all__ = [
    'BatchController',
    'CommitError',
    'CommitReport',
    'CommitStep',
    'FailureThresholdExceeded',
    'ProductCommitWorkflow',
    'RepricingPipeline',
    'SkippedRow',
]
