"""
Unit tests for the service container, lazy service lookup and logging.
"""

from pathlib import Path

import pytest

from godo.core.bootstrap import bootstrap, is_initialized
from godo.core.container import ServiceContainer, get_container
from godo.core.di import LazyService
from godo.core.interfaces.logger import ILogger
from godo.core.interfaces.presenter import IPresenter
from godo.core.models.config import LoggingConfig
from godo.core.settings import GodoSettings
from godo.presenters.console import ConsolePresenter
from godo.services.logging import GodoLogger, NullLogger


class _Service:
    logger = LazyService(ILogger, NullLogger)

    def __init__(self, logger=None):
        self.logger = logger


class TestContainer:
    def test_singleton_factory_called_once(self):
        container = ServiceContainer()
        calls = []
        container.register_singleton(ILogger, factory=lambda: calls.append(1) or NullLogger())

        first = container.resolve(ILogger)

        assert container.resolve(ILogger) is first
        assert calls == [1]

    def test_requires_exactly_one_source(self):
        with pytest.raises(ValueError):
            ServiceContainer().register_singleton(ILogger)

    def test_unregistered(self):
        container = ServiceContainer()

        assert container.try_resolve(ILogger) is None
        with pytest.raises(KeyError):
            container.resolve(ILogger)


class TestLazyService:
    def test_falls_back_to_default(self):
        assert isinstance(_Service().logger, NullLogger)

    def test_explicit_instance_wins(self):
        logger = NullLogger()

        assert _Service(logger).logger is logger

    def test_resolves_registered_service(self):
        logger = NullLogger()
        get_container().register_singleton(ILogger, implementation=logger)

        assert _Service().logger is logger


class TestBootstrap:
    def test_registers_presenter_and_logger(self):
        container = bootstrap(GodoSettings())

        assert is_initialized()
        assert isinstance(container.resolve(IPresenter), ConsolePresenter)
        assert isinstance(container.resolve(ILogger), GodoLogger)


class TestGodoLogger:
    def test_silent_by_default(self):
        logger = GodoLogger.from_config(LoggingConfig())

        assert logger.handlers == []
        logger.debug("nothing %s", "happens")

    def test_file_output(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "godo.log"
        logger = GodoLogger.from_config(
            LoggingConfig(level="debug", file=True), log_file=log_file
        )

        logger.debug("built %s", "hello")
        logger.flush()

        text = log_file.read_text()
        assert "built hello" in text
        assert "DEBUG" in text

    def test_level_filters(self, tmp_path: Path):
        log_file = tmp_path / "godo.log"
        logger = GodoLogger(level="warning", file_enabled=True, log_file=log_file)

        logger.info("hidden")
        logger.warning("shown")
        logger.flush()

        text = log_file.read_text()
        assert "hidden" not in text
        assert "shown" in text
