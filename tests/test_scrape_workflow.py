"""
tests/test_scrape_workflow.py

Batch scraping: idempotent skip, YAML layout, empty results and
per-product failures that must not stop the batch.
"""
import asyncio

import yaml

from shop_automation.scraper import ScrapeStatus, ScrapeWorkflow, normalize_product_key
from shop_automation.scraper.extractor import CARD_SCRIPT

BASE_URL = "https://shop.example.test"


def _cards(*names):
    return [{"name": n, "href": f"/product/{i}", "price": f"€{i}.00", "pricePerUnit": ""} for i, n in enumerate(names, 1)]


def _search_url(config, name):
    return config.search_url(name)


class TestNormalizeKey:
    def test_lowercase_and_separators(self) -> None:
        assert normalize_product_key("Free Range Eggs") == "free_range_eggs"
        assert normalize_product_key("Salt/Pepper\\Mix") == "salt_pepper_mix"


class TestScrapeWorkflow:
    def test_existing_result_is_skipped_without_navigation(self, session, config, tmp_path) -> None:
        workflow = ScrapeWorkflow(session, config, db_path=tmp_path)
        path = workflow.result_path("Bananas")
        path.parent.mkdir(parents=True)
        path.write_bytes(b"supervalu: {}\n# hand edited\n")

        report = asyncio.run(workflow.run(["Bananas"]))

        assert session.navigations == []
        assert path.read_bytes() == b"supervalu: {}\n# hand edited\n"
        assert report.results[0].status == ScrapeStatus.SKIPPED

    def test_scraped_records_written_as_yaml(self, session, config, tmp_path) -> None:
        url = _search_url(config, "Bananas")
        session.on(url, CARD_SCRIPT, _cards("Organic Bananas (1 kg)", "Bananas Loose"))

        report = asyncio.run(ScrapeWorkflow(session, config, db_path=tmp_path).run(["Bananas"]))

        path = tmp_path / "bananas" / "shopping.yml"
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert list(document["supervalu"]) == ["opt_1", "opt_2"]
        assert document["supervalu"]["opt_1"] == {
            "name": "Organic Bananas",
            "url": BASE_URL + "/product/1",
            "price": "€1.00",
            "price_per_unit": "€1.00",
            "quantity": "1 kg",
        }
        assert "quantity" not in document["supervalu"]["opt_2"]
        assert report.results[0].status == ScrapeStatus.SCRAPED
        assert report.results[0].count == 2

    def test_search_url_is_encoded(self, config) -> None:
        assert config.search_url("milk & eggs").endswith("/sm/delivery/rsid/404/results?q=milk%20%26%20eggs")

    def test_empty_result_reported_and_batch_continues(self, session, config, tmp_path) -> None:
        session.on(_search_url(config, "Caviar"), CARD_SCRIPT, [])
        session.on(_search_url(config, "Milk"), CARD_SCRIPT, _cards("Whole Milk (2 L)"))

        report = asyncio.run(ScrapeWorkflow(session, config, db_path=tmp_path).run(["Caviar", "Milk"]))

        assert [r.status for r in report.results] == [ScrapeStatus.EMPTY, ScrapeStatus.SCRAPED]
        assert not (tmp_path / "caviar").exists()
        assert (tmp_path / "milk" / "shopping.yml").exists()

    def test_visible_mode_pauses_for_inspection_on_empty(self, session, tmp_path, config) -> None:
        config.inspect_delay = 15
        asyncio.run(ScrapeWorkflow(session, config, db_path=tmp_path, visible=True).run(["Caviar"]))
        assert 15 in session.pauses

    def test_navigation_failure_does_not_abort_batch(self, session, config, tmp_path) -> None:
        session.failing_urls.add(_search_url(config, "Bread"))
        session.on(_search_url(config, "Milk"), CARD_SCRIPT, _cards("Milk"))

        report = asyncio.run(ScrapeWorkflow(session, config, db_path=tmp_path).run(["Bread", "Milk"]))

        assert [r.status for r in report.results] == [ScrapeStatus.FAILED, ScrapeStatus.SCRAPED]
        assert "Bread" in report.render()
        assert report.failures[0].name == "Bread"

    def test_blank_names_ignored(self, session, config, tmp_path) -> None:
        report = asyncio.run(ScrapeWorkflow(session, config, db_path=tmp_path).run(["", "   "]))
        assert report.results == []
        assert session.navigations == []

    def test_waits_for_product_cards(self, session, config, tmp_path) -> None:
        asyncio.run(ScrapeWorkflow(session, config, db_path=tmp_path).run(["Milk"]))
        assert "ProductCardWrapper" in session.waits[0][0]
