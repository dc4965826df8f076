"""Tests for structured logging configuration."""

import asyncio
import io
import json
import logging
import re

import pytest
import structlog

from motia_studio.logging import (
    bind_deployment_context,
    clear_context,
    get_deployment_id,
    setup_logging,
)


def strip_ansi(text):
    """Strip ANSI escape sequences from text."""
    ansi_escape = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")
    return ansi_escape.sub("", text)


def parse_json_lines(output):
    """Parse output containing multiple JSON lines."""
    lines = output.strip().split("\n")
    return [json.loads(line) for line in lines if line.strip()]


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test."""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


class TestLoggingSetup:
    """Test logging setup and configuration."""

    def test_setup_logging_json_format(self, capsys):
        setup_logging(service_name="test_service", log_format="json", log_level="INFO")

        logger = structlog.get_logger()
        logger.info("test_event", key1="value1", key2=123)

        entries = parse_json_lines(capsys.readouterr().out)
        log_entry = next((e for e in entries if e.get("event") == "test_event"), None)
        assert log_entry is not None

        assert log_entry["service"] == "test_service"
        assert log_entry["key1"] == "value1"
        assert log_entry["key2"] == 123  # noqa: PLR2004
        assert log_entry["level"] == "info"
        assert "timestamp" in log_entry

    def test_setup_logging_console_format(self, capsys):
        setup_logging(service_name="test_service", log_format="console", log_level="INFO")

        structlog.get_logger().info("test_event", key1="value1")

        output = strip_ansi(capsys.readouterr().out)
        assert "test_event" in output
        assert "key1=value1" in output

    def test_setup_logging_from_env(self, monkeypatch, capsys):
        """Values missing from the call come from MOTIA_STUDIO_* settings."""
        monkeypatch.setenv("MOTIA_STUDIO_SERVICE_NAME", "env_service")
        monkeypatch.setenv("MOTIA_STUDIO_LOG_FORMAT", "json")
        monkeypatch.setenv("MOTIA_STUDIO_LOG_LEVEL", "DEBUG")

        setup_logging()
        structlog.get_logger().debug("debug_event", test=True)

        entries = parse_json_lines(capsys.readouterr().out)
        log_entry = next((e for e in entries if e.get("event") == "debug_event"), None)
        assert log_entry is not None
        assert log_entry["service"] == "env_service"
        assert log_entry["level"] == "debug"

    def test_log_level_filtering(self, capsys):
        setup_logging(service_name="test_service", log_format="console", log_level="WARNING")

        logger = structlog.get_logger()
        logger.info("info_event")
        logger.warning("warning_event")

        output = strip_ansi(capsys.readouterr().out)
        assert "info_event" not in output
        assert "warning_event" in output

    def test_custom_stream(self, capsys):
        stream = io.StringIO()
        setup_logging(service_name="cli", log_format="json", log_level="INFO", stream=stream)

        structlog.get_logger().info("to_stream")

        assert capsys.readouterr().out == ""
        assert parse_json_lines(stream.getvalue())[-1]["event"] == "to_stream"


class TestDeploymentContext:
    def test_bound_ids_appear_in_log_lines(self, capsys):
        setup_logging(service_name="test_service", log_format="json", log_level="INFO")

        bind_deployment_context("dep_1", "proj_1")
        structlog.get_logger().info("deployment_stage", stage="build")

        entries = parse_json_lines(capsys.readouterr().out)
        log_entry = next(e for e in entries if e.get("event") == "deployment_stage")
        assert log_entry["deployment_id"] == "dep_1"
        assert log_entry["project_id"] == "proj_1"
        assert get_deployment_id() == "dep_1"

    def test_clear_context(self):
        bind_deployment_context("dep_1", "proj_1")
        clear_context()

        assert get_deployment_id() is None

    @pytest.mark.asyncio
    async def test_context_is_isolated_per_task(self):
        async def bind_and_read(deployment_id):
            bind_deployment_context(deployment_id, "proj_1")
            await asyncio.sleep(0)
            return get_deployment_id()

        results = await asyncio.gather(bind_and_read("dep_a"), bind_and_read("dep_b"))

        assert results == ["dep_a", "dep_b"]
        assert get_deployment_id() is None
