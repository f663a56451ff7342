"""Tests for logging setup."""

import json
import logging
from unittest.mock import Mock

import pytest
import structlog

from service_hangar.builtins.queues import QueueFactory
from service_hangar.domain.contracts import IRegistryResolver, NullDiagnosticsSink
from service_hangar.domain.discovery import DiscoveryService, ProviderEnumerator
from service_hangar.domain.value_objects import LoaderContext
from service_hangar.infrastructure.context_provider import FixedSecondaryProvider
from service_hangar.infrastructure.resolvers import EntryPointRegistryResolver
from service_hangar.logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Put root handlers and structlog configuration back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()


class TestSetupLogging:
    def test_level_name_applied(self):
        setup_logging("warning")
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.INFO

    def test_json_records_written_to_file(self, tmp_path):
        """Keyword fields end up as JSON keys."""
        log_file = tmp_path / "hangar.log"
        setup_logging("INFO", json_format=True, log_file=str(log_file))

        get_logger("tests.hangar").warning("provider_load_failed", service="pkg.Formatter")
        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "provider_load_failed"
        assert record["service"] == "pkg.Formatter"
        assert record["level"] == "warning"
        assert record["logger"] == "tests.hangar"


class TestWithoutSetup:
    """Library logging when the host never calls setup_logging()."""

    @pytest.fixture(autouse=True)
    def unconfigured(self):
        structlog.reset_defaults()

    def test_quiet_discovery_writes_nothing_to_stdout(self, tmp_path, capsys):
        """Non-verbose discovery over empty and failing registries stays silent."""
        failing = Mock(spec=IRegistryResolver)
        failing.resolve.side_effect = OSError("unreadable")
        for resolver in (EntryPointRegistryResolver(), failing):
            service = DiscoveryService(
                ProviderEnumerator(resolver, NullDiagnosticsSink()),
                FixedSecondaryProvider(LoaderContext.named("extras")),
            )
            assert list(service.discover(QueueFactory, LoaderContext.from_paths([tmp_path]), True, verbose=False)) == []

        assert capsys.readouterr().out == ""

    def test_records_go_through_stdlib_logging(self, caplog):
        """Records reach stdlib handlers and honour stdlib levels."""
        logger = get_logger("tests.hangar.stdlib")

        with caplog.at_level(logging.INFO, logger="tests.hangar.stdlib"):
            logger.debug("hidden_event")
            logger.info("visible_event", service="pkg.Formatter")

        assert len(caplog.records) == 1
        assert "visible_event" in caplog.records[0].getMessage()
