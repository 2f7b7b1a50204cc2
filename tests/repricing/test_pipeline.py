"""Tests for src/repricing/pipeline.py"""

import pytest

from src.browser.pages import InteractionError
from src.discovery import ListingUnreachableError, load_links
from src.repricing.batch_controller import FailureThresholdExceeded
from src.repricing.pipeline import RepricingPipeline
from tests.fakes import (
    FakeListingPage,
    FakeListingRow,
    FakeProductDetailPage,
    FakeResolver,
    FakeSession,
    FakeVariantRow,
)

ROOT = "https://app.dropi.com.br/produtos"


class OpenFailsListing(FakeListingPage):
    def open(self, url):
        raise InteractionError("net::ERR_NAME_NOT_RESOLVED")


@pytest.fixture
def listing():
    return FakeListingPage([[
        FakeListingRow("edit/1", "item/1"),
        FakeListingRow("edit/2", "item/2"),
    ]])


class TestRun:
    def test_harvest_then_commit(self, listing, engine, fast_settings):
        product = FakeProductDetailPage(rows=[FakeVariantRow("SKU-1")])
        session = FakeSession(listing, product)
        pipeline = RepricingPipeline(session, FakeResolver({"SKU-1": 5000}), engine, fast_settings)

        outcome = pipeline.run(ROOT)

        assert listing.opened[0] == ROOT
        assert outcome.processed_count == 2
        assert [e for e in product.events if e.startswith("open")] == ["open edit/1", "open edit/2"]

    def test_given_links_skip_harvest(self, listing, engine, fast_settings, make_link):
        product = FakeProductDetailPage(rows=[FakeVariantRow("SKU-1")])
        pipeline = RepricingPipeline(FakeSession(listing, product), FakeResolver({"SKU-1": 5000}),
                                     engine, fast_settings)

        outcome = pipeline.run(ROOT, links=[make_link(1), make_link(2), make_link(3)], limit=2)

        assert listing.opened == []
        assert outcome.processed_count == 2

    def test_harvested_links_saved(self, listing, engine, fast_settings, tmp_path):
        output = tmp_path / "links.csv"
        product = FakeProductDetailPage(rows=[FakeVariantRow("SKU-1")])
        pipeline = RepricingPipeline(FakeSession(listing, product), FakeResolver({"SKU-1": 5000}),
                                     engine, fast_settings)

        pipeline.run(ROOT, links_output=output)

        assert [link.internal_ref for link in load_links(output)] == ["edit/1", "edit/2"]

    def test_dry_run_never_saves(self, listing, engine, fast_settings):
        product = FakeProductDetailPage(rows=[FakeVariantRow("SKU-1")])
        pipeline = RepricingPipeline(FakeSession(listing, product), FakeResolver({"SKU-1": 5000}),
                                     engine, fast_settings, dry_run=True)

        outcome = pipeline.run(ROOT)

        assert outcome.processed_count == 2
        assert "main_save" not in product.events

    def test_empty_listing_commits_nothing(self, engine, fast_settings):
        listing = FakeListingPage([[]])
        product = FakeProductDetailPage(rows=[FakeVariantRow("SKU-1")])
        pipeline = RepricingPipeline(FakeSession(listing, product), FakeResolver({}),
                                     engine, fast_settings)

        outcome = pipeline.run(ROOT)

        assert outcome.processed_count == 0
        assert product.events == []


class TestFailures:
    def test_unreachable_root(self, engine, fast_settings):
        session = FakeSession(OpenFailsListing([]), FakeProductDetailPage())
        pipeline = RepricingPipeline(session, FakeResolver({}), engine, fast_settings)

        with pytest.raises(ListingUnreachableError):
            pipeline.run(ROOT)

    def test_threshold_abort_writes_failed_links(self, listing, engine, fast_settings, tmp_path):
        failed_output = tmp_path / "failed.csv"
        product = FakeProductDetailPage(rows=[FakeVariantRow("SKU-1")], has_main_save=False)
        pipeline = RepricingPipeline(FakeSession(listing, product), FakeResolver({"SKU-1": 5000}),
                                     engine, fast_settings)

        with pytest.raises(FailureThresholdExceeded):
            pipeline.run(ROOT, failed_output=failed_output)

        assert [link.internal_ref for link in load_links(failed_output)] == ["edit/1"]

    def test_failed_links_written_when_run_completes(self, engine, fast_settings, tmp_path, make_link):
        failed_output = tmp_path / "failed.csv"

        class FirstProductBroken(FakeProductDetailPage):
            def open(self, url):
                super().open(url)
                self.has_prices_tab = not url.endswith("/1")

        product = FirstProductBroken(rows=[FakeVariantRow("SKU-1")])
        links = [make_link(i) for i in range(1, 5)]
        pipeline = RepricingPipeline(FakeSession(FakeListingPage([]), product),
                                     FakeResolver({"SKU-1": 5000}), engine, fast_settings)

        outcome = pipeline.run(ROOT, links=links, failed_output=failed_output)

        assert outcome.failed_count == 1
        saved = load_links(failed_output)
        assert [link.internal_ref for link in saved] == [links[0].internal_ref]
