"""Tests for src/repricing/batch_controller.py"""

from unittest.mock import patch

import pytest

from src.browser.pages import InteractionTimeout
from src.repricing.batch_controller import BatchController, FailureThresholdExceeded
from src.repricing.commit_workflow import CommitError, CommitStep


class ScriptedWorkflow:
    """Fails each link a scripted number of times before succeeding."""

    def __init__(self, failures_before_success=None, always_fail=()):
        self.failures_before_success = failures_before_success or {}
        self.always_fail = set(always_fail)
        self.calls = []

    def commit(self, link):
        self.calls.append(link.internal_ref)
        attempts = self.calls.count(link.internal_ref)
        if link.internal_ref in self.always_fail or \
                attempts <= self.failures_before_success.get(link.internal_ref, 0):
            raise CommitError(CommitStep.SAVED, link, "save navigation not observed")
        return None


class TestRetries:
    def test_success_on_third_attempt(self, make_link, fast_settings):
        link = make_link(1)
        workflow = ScriptedWorkflow(failures_before_success={link.internal_ref: 2})

        outcome = BatchController(workflow, fast_settings).run([link])

        assert outcome.processed_count == 1
        assert outcome.failed_count == 0
        assert workflow.calls.count(link.internal_ref) == 3

    def test_exhausted_retries_mark_failed_and_continue(self, make_link, fast_settings):
        links = [make_link(i) for i in range(1, 7)]
        workflow = ScriptedWorkflow(always_fail=[links[0].internal_ref])

        outcome = BatchController(workflow, fast_settings).run(links)

        assert outcome.processed_count == 5
        assert outcome.failed_count == 1
        assert outcome.failed_links == [links[0]]
        assert workflow.calls.count(links[0].internal_ref) == 3
        assert outcome.has_failures

    def test_interaction_error_is_retried(self, make_link, fast_settings):
        link = make_link()

        class FlakyOnce:
            calls = 0

            def commit(self, link):
                FlakyOnce.calls += 1
                if FlakyOnce.calls == 1:
                    raise InteractionTimeout("page closed")

        outcome = BatchController(FlakyOnce(), fast_settings).run([link])
        assert outcome.processed_count == 1
        assert FlakyOnce.calls == 2

    def test_retry_ceiling_is_configurable(self, make_link, fast_settings):
        fast_settings.max_attempts = 5
        links = [make_link(i) for i in range(1, 4)]
        workflow = ScriptedWorkflow(always_fail=[links[0].internal_ref])

        BatchController(workflow, fast_settings).run(links)
        assert workflow.calls.count(links[0].internal_ref) == 5


class TestFailureThreshold:
    def test_aborts_when_failures_exceed_a_third(self, make_link, fast_settings):
        links = [make_link(i) for i in range(1, 10)]
        workflow = ScriptedWorkflow(always_fail=[link.internal_ref for link in links[:4]])

        with pytest.raises(FailureThresholdExceeded) as exc_info:
            BatchController(workflow, fast_settings).run(links)

        outcome = exc_info.value.outcome
        assert outcome.failed_count == 4
        assert outcome.threshold == 3
        for link in links[4:]:
            assert link.internal_ref not in workflow.calls

    def test_failures_at_threshold_do_not_abort(self, make_link, fast_settings):
        links = [make_link(i) for i in range(1, 10)]
        workflow = ScriptedWorkflow(always_fail=[link.internal_ref for link in links[:3]])

        outcome = BatchController(workflow, fast_settings).run(links)

        assert outcome.failed_count == 3
        assert outcome.processed_count == 6

    def test_single_product_failure_exceeds_threshold_of_small_batch(self, make_link, fast_settings):
        link = make_link()
        workflow = ScriptedWorkflow(always_fail=[link.internal_ref])

        with pytest.raises(FailureThresholdExceeded):
            BatchController(workflow, fast_settings).run([link])

    def test_empty_batch(self, fast_settings):
        outcome = BatchController(ScriptedWorkflow(), fast_settings).run([])
        assert outcome.processed_count == 0
        assert outcome.threshold == 0


class TestDelays:
    def test_retry_delay_and_cooldown(self, make_link, fast_settings):
        fast_settings.retry_delay = 5.0
        fast_settings.cooldown = 2.0
        links = [make_link(1), make_link(2), make_link(3)]
        workflow = ScriptedWorkflow(failures_before_success={links[0].internal_ref: 1})

        with patch("src.repricing.batch_controller.time.sleep") as sleep:
            BatchController(workflow, fast_settings).run(links)

        delays = [call.args[0] for call in sleep.call_args_list]
        assert delays == [5.0, 2.0, 2.0]

    def test_no_retry_delay_after_last_attempt(self, make_link, fast_settings):
        fast_settings.retry_delay = 5.0
        links = [make_link(i) for i in range(1, 5)]
        workflow = ScriptedWorkflow(always_fail=[links[0].internal_ref])

        with patch("src.repricing.batch_controller.time.sleep") as sleep:
            BatchController(workflow, fast_settings).run(links)

        retry_delays = [call.args[0] for call in sleep.call_args_list if call.args[0] == 5.0]
        assert len(retry_delays) == 2
