"""Tests for structlog setup."""

import json
import logging

import pytest
import structlog

from feerouter.log_config import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_json_lines(self, capsys):
        configure_logging("INFO", json=True)

        structlog.get_logger().info("tier_selected", fee=3000)

        line = json.loads(capsys.readouterr().out.strip())
        assert line["event"] == "tier_selected"
        assert line["fee"] == 3000
        assert line["level"] == "info"
        assert "timestamp" in line

    def test_level_filters(self, capsys):
        configure_logging(logging.WARNING, json=True)

        structlog.get_logger().info("quiet")

        assert capsys.readouterr().out == ""

    def test_unknown_level_name_defaults_to_info(self, capsys):
        configure_logging("chatty", json=True)

        structlog.get_logger().debug("hidden")
        structlog.get_logger().info("shown")

        out = capsys.readouterr().out
        assert "shown" in out
        assert "hidden" not in out
