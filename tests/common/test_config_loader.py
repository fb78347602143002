"""Tests for coral_compare/common/config_loader.py"""

from unittest.mock import patch

import pytest

from coral_compare.common import config_loader
from coral_compare.common.config_loader import (
    load_config,
    load_scrape_settings,
    load_shop_labels,
    load_sources,
)


@pytest.fixture
def config_dir(tmp_path):
    """Point the loader at a temporary config directory."""
    with patch.object(config_loader, "_get_config_dir", return_value=tmp_path):
        yield tmp_path


class TestLoadConfig:
    def test_missing_file_raises(self, config_dir):
        with pytest.raises(FileNotFoundError):
            load_config("nope.yaml")

    def test_empty_file_is_empty_dict(self, config_dir):
        (config_dir / "empty.yaml").write_text("", encoding="utf-8")
        assert load_config("empty.yaml") == {}


class TestLoadSources:
    def test_reads_sources_list(self, config_dir):
        (config_dir / "sources.yaml").write_text(
            "sources:\n"
            "  - url: https://fragbox.ca/collections/torch\n"
            "    shop_id: fragbox\n"
            "    category: torch\n"
            "    is_active: true\n",
            encoding="utf-8",
        )
        sources = load_sources()
        assert sources == [{
            "url": "https://fragbox.ca/collections/torch",
            "shop_id": "fragbox",
            "category": "torch",
            "is_active": True,
        }]

    def test_no_sources_key(self, config_dir):
        (config_dir / "sources.yaml").write_text("other: 1\n", encoding="utf-8")
        assert load_sources() == []


class TestLoadShopLabels:
    def test_lowercases_domains(self, config_dir):
        (config_dir / "shops.yaml").write_text("shops:\n  Fragbox.ca: Fragbox\n", encoding="utf-8")
        assert load_shop_labels() == {"fragbox.ca": "Fragbox"}


class TestLoadScrapeSettings:
    def test_defaults_without_file(self, config_dir):
        settings = load_scrape_settings()
        assert settings["max_fetch_attempts"] == 10
        assert settings["link_discovery_max_pages"] == 80
        assert settings["catalog_page_size"] == 100

    def test_yaml_overrides_and_casts(self, config_dir):
        (config_dir / "scrape_settings.yaml").write_text(
            "scrape:\n  page_delay: 2\n  catalog_max_pages: '5'\n  unknown_key: 1\n",
            encoding="utf-8",
        )
        settings = load_scrape_settings()
        assert settings["page_delay"] == 2.0
        assert isinstance(settings["page_delay"], float)
        assert settings["catalog_max_pages"] == 5
        assert "unknown_key" not in settings

    def test_explicit_overrides_win(self, config_dir):
        settings = load_scrape_settings({"source_delay": 0})
        assert settings["source_delay"] == 0


class TestRepoConfig:
    def test_shipped_sources_are_well_formed(self):
        for source in load_sources():
            assert source["url"].startswith("https://")
            assert source["shop_id"]
            assert source["category"]

    def test_shipped_shop_labels(self):
        labels = load_shop_labels()
        assert labels["reefsolution.com"] == "Reef Solution"
