# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from __future__ import annotations

import logging

from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from .fixture import ConfigFixture


@pytest.mark.config
class TestConfigLoader:
    def test_config_loads_yaml(self, config: ConfigFixture):
        config.create("""
            logging:
                levels:
                    tty: INFO
            sync:
                address: "0xABC"
        """)

        # Check that config object has expected attributes
        assert hasattr(config, "logging")
        assert hasattr(config, "app")
        assert isinstance(config.app.name, str)
        assert config.app.test is True
        # Check actual values
        assert config.logging.levels.tty == logging.INFO
        assert config.sync.address == "0xABC"
        assert config.sync.fetch_on_activate is True

    def test_config_defaults(self, config: ConfigFixture):
        config.create({})

        assert config.sync.address is None
        assert not config.run.has_action
        assert set(config.providers) == {"ledger"}
        assert config.providers["ledger"].package == "ledger.memory"

    def test_config_invalid_yaml(self, config: ConfigFixture):
        with pytest.raises(ValueError, match=r"Extra inputs are not permitted"):
            config.create("""
                any: text
            """)

    def test_config_reserved_app_section(self, config: ConfigFixture):
        with pytest.raises(ValueError, match=r"Configuration file contains 'app' section."):
            config.create("""
                app:
                  name: test
            """)

    def test_config_invalid_log_level(self, config: ConfigFixture):
        with pytest.raises(ValueError, match=r"Unknown logging level string: banana"):
            config.create("""
                logging:
                  levels:
                    tty: banana
            """)

    def test_config_empty(self, config: ConfigFixture):
        with pytest.raises(ValueError, match="Configuration is empty"):
            config.create("")

    def test_config_load_from_file(self, tmp_path, config: ConfigFixture):
        config_path = tmp_path / "test.yaml"
        with config_path.open("w") as f:
            f.write("""
                logging:
                    levels:
                        tty: INFO
            """)

        config.reset()
        config.open(config_path)

        assert hasattr(config, "logging")
        assert config.logging.levels.tty == logging.INFO
        assert config.logging.levels.tty == "INFO"
        assert str(config.app.paths.config) == str(config_path)

    def test_config_include(self, tmp_path, config: ConfigFixture):
        (tmp_path / "sync.yaml").write_text("address: '0xDEF'\nfetch_on_activate: false\n")
        config_path = tmp_path / "main.yaml"
        config_path.write_text("sync: !include sync.yaml\n")

        config.reset()
        config.open(config_path)

        assert config.sync.address == "0xDEF"
        assert config.sync.fetch_on_activate is False

    def test_config_custom_logging_levels(self, config: ConfigFixture):
        config.create("""
            logging:
                levels:
                    custom:
                        "^sync": DEBUG
        """)

        patterns = {pattern.pattern: level for pattern, level in config.logging.levels.custom.items()}
        assert patterns["^sync"] == logging.DEBUG
        assert "^asyncio" in patterns


@pytest.mark.config
class TestRunConfig:
    def test_add_with_iso_due_date(self, config: ConfigFixture):
        config.create({"run": {"add": "Study", "due": "2025-01-01"}})

        assert config.run.add == "Study"
        assert config.run.due == 1735689600
        assert config.run.has_action

    def test_rejects_multiple_actions(self, config: ConfigFixture):
        with pytest.raises(ValueError, match=r"Only one action may be requested per run"):
            config.create({"run": {"add": "Study", "delete": 2}})

    def test_rejects_due_without_add(self, config: ConfigFixture):
        with pytest.raises(ValueError, match=r"'due' requires 'add'"):
            config.create({"run": {"complete": 1, "due": 1735689600}})

    def test_rejects_negative_task_id(self, config: ConfigFixture):
        with pytest.raises(ValueError, match=r"greater than or equal to 0"):
            config.create({"run": {"delete": -1}})
