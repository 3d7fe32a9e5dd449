"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

from networth.infrastructure.logging import logger as logger_module


def _stub_build(monkeypatch) -> list[dict]:
    """Replace LoggerBuilder.build and record the builder configuration."""
    built: list[dict] = []

    def _fake_build(self):
        built.append(
            {
                "name": self._name,
                "subdir": self._subdir,
                "prefix": self._prefix,
                "console": self._console,
            }
        )
        return MagicMock()

    monkeypatch.setattr(logger_module.LoggerBuilder, "build", _fake_build)
    return built


def test_builder_writes_daily_file_under_project_root(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240601"),
    )

    builder = (
        logger_module.LoggerBuilder()
        .name("networth.test.builder")
        .subdir("engine")
        .prefix("engine_logs")
        .level(logging.WARNING)
    )
    built = builder.build()

    assert built.level == logging.WARNING
    assert built.propagate is False
    file_handlers = [
        handler
        for handler in built.handlers
        if isinstance(handler, logging.FileHandler)
    ]
    assert [handler.baseFilename for handler in file_handlers] == [
        str(tmp_path / "logs" / "engine" / "20240601_engine_logs.log")
    ]
    assert builder.build() is built
    for handler in built.handlers:
        handler.close()


def test_console_handler_is_optional(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    console_handler = logging.NullHandler()

    built = (
        logger_module.LoggerBuilder()
        .name("networth.test.console")
        .console(True)
        .file_handler(lambda path, fmt: logging.NullHandler())
        .console_handler(lambda fmt: console_handler)
        .build()
    )

    assert console_handler in built.handlers
    assert len(built.handlers) == 2


def test_default_handlers_use_formatter(tmp_path):
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "networth.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt
    assert isinstance(console_handler, logging.StreamHandler)
    assert console_handler.formatter is fmt
    file_handler.close()


def test_logger_delegates_every_level(monkeypatch):
    _stub_build(monkeypatch)
    monkeypatch.setattr(logger_module.Logger, "_instance", None)

    wrapper = logger_module.Logger("networth")
    wrapper.info("saved")
    wrapper.warning("fallback rate")
    wrapper.error("commit failed")
    wrapper.debug("rows")
    wrapper.critical("down")

    wrapper.logger.info.assert_called_with("saved")
    wrapper.logger.warning.assert_called_with("fallback rate")
    wrapper.logger.error.assert_called_with("commit failed")
    wrapper.logger.debug.assert_called_with("rows")
    wrapper.logger.critical.assert_called_with("down")
    assert logger_module.Logger("other") is wrapper


def test_app_and_usage_loggers_are_separate_singletons(monkeypatch):
    built = _stub_build(monkeypatch)
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert built == [
        {
            "name": "networth.app",
            "subdir": "app",
            "prefix": "app_logs",
            "console": True,
        },
        {
            "name": "networth.usage",
            "subdir": "usage",
            "prefix": "usage_logs",
            "console": False,
        },
    ]
