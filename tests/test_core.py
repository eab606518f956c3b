"""Tests for core infrastructure."""

import logging

import pytest

from treecomplete.core.config import (
    get_catalog_dir,
    get_config_path,
    load_config,
    save_config,
    set_value,
    update_config,
)
from treecomplete.core.exceptions import CatalogCorruptError, ConfigError, TreeCompleteError, ValidationError
from treecomplete.core.log import configure_logging


class TestConfig:
    def test_defaults_when_missing(self, config_dir):
        config = load_config()
        assert config["catalog"]["root_name"] == "az"
        assert config["catalog"]["root_description"] == "Root command"
        assert config["logging"] == {"level": "WARNING", "file": ""}
        assert get_config_path() == config_dir / "treecomplete.toml"

    def test_user_values_merge_over_defaults(self, config_dir):
        get_config_path().write_text('[catalog]\nroot_name = "gcloud"\n', encoding="utf-8")
        config = load_config()
        assert config["catalog"]["root_name"] == "gcloud"
        assert config["catalog"]["path"] == "~/.local/share/treecomplete/catalog"

    def test_save_and_reload(self, config_dir):
        config = load_config()
        config["logging"]["level"] = "DEBUG"
        save_config(config)
        assert load_config()["logging"]["level"] == "DEBUG"

    def test_update_config(self, config_dir):
        updated = update_config(catalog={"root_description": "Azure CLI"})
        assert updated["catalog"]["root_description"] == "Azure CLI"
        assert updated["catalog"]["root_name"] == "az"

    def test_update_config_keeps_saved_values(self, config_dir):
        update_config(logging={"level": "INFO"})
        updated = update_config(logging={"file": "/tmp/tc.log"}, extra={"key": "value"})
        assert updated["logging"] == {"level": "INFO", "file": "/tmp/tc.log"}
        assert load_config()["extra"] == {"key": "value"}

    def test_set_value(self, config_dir, tmp_path):
        set_value("catalog.path", str(tmp_path / "cat"))
        assert get_catalog_dir() == tmp_path / "cat"

    def test_set_unknown_key(self, config_dir):
        with pytest.raises(ConfigError, match="Unknown config key"):
            set_value("catalog.colour", "blue")

    def test_invalid_toml(self, config_dir):
        get_config_path().write_text("[catalog\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Failed to load config"):
            load_config()

    def test_catalog_dir_expands_user(self):
        config = {"catalog": {"path": "~/catalog"}}
        assert "~" not in str(get_catalog_dir(config))


class TestExceptions:
    def test_hierarchy(self):
        assert issubclass(ValidationError, ValueError)
        assert issubclass(CatalogCorruptError, TreeCompleteError)

    def test_corrupt_message(self, tmp_path):
        err = CatalogCorruptError(tmp_path / "x.json", "file not found")
        assert err.path == tmp_path / "x.json"
        assert err.reason == "file not found"
        assert str(err) == f"Corrupt catalog file {tmp_path / 'x.json'}: file not found"


class TestLogging:
    def test_level(self):
        logger = configure_logging("debug")
        assert logger.name == "treecomplete"
        assert logger.level == logging.DEBUG

    def test_unknown_level_falls_back(self):
        assert configure_logging("chatty").level == logging.WARNING

    def test_reconfigure_replaces_handlers(self):
        configure_logging()
        logger = configure_logging()
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "treecomplete.log"
        logger = configure_logging("INFO", log_file)
        logging.getLogger("treecomplete.catalog.store").info("loaded %s", "vm")
        for handler in logger.handlers:
            handler.flush()
        assert "INFO treecomplete.catalog.store: loaded vm" in log_file.read_text(encoding="utf-8")
        configure_logging()
