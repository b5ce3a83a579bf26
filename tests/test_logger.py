"""Tests for the logging layer."""

import logging

import pytest

from pysatnav.gnss.position_store import SatellitePositionStore
from pysatnav.gnss.records import InterpolationMethod
from pysatnav.logger import ROOT_LOGGER, LogLevel, setup_logger, setup_logger_from_config

TIME_SERIES_LOGGER = "pysatnav.gnss.time_series"


def linear(sat_id, k):
    return 20000.0 + 2.0 * k, -15000.0, 8000.0, 50.0


def read_log(logger, path):
    for handler in logger.handlers:
        handler.flush()
    return path.read_text()


def test_trace_level_registered():
    assert logging.getLevelName(LogLevel.TRACE.value) == "TRACE"
    assert LogLevel.value_of("debug") == logging.DEBUG


def test_unknown_level():
    with pytest.raises(ValueError):
        LogLevel.value_of("verbose")


def test_setup_logger_writes_file(tmp_path):
    log_file = tmp_path / "engine.log"
    logger = setup_logger("pysatnav_test.file", "TRACE", str(log_file), console=False)
    logger.trace("window refreshed")
    logger.debug("page parsed")

    text = read_log(logger, log_file)
    assert "TRACE - window refreshed" in text
    assert "DEBUG - page parsed" in text


def test_setup_logger_replaces_handlers():
    setup_logger("pysatnav_test.handlers", "INFO")
    logger = setup_logger("pysatnav_test.handlers", "WARNING")
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


class TestSetupFromConfig:
    def test_engine_level(self, engine_loggers):
        engine_loggers(ROOT_LOGGER)
        root = setup_logger_from_config({'level': 'WARNING', 'console': False})
        assert root.name == ROOT_LOGGER
        assert root.level == logging.WARNING
        assert root.handlers == []

    def test_defaults(self, engine_loggers):
        engine_loggers(ROOT_LOGGER)
        root = setup_logger_from_config(None)
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_foreign_module_rejected(self, engine_loggers):
        engine_loggers(ROOT_LOGGER)
        with pytest.raises(ValueError):
            setup_logger_from_config({'console': False, 'module_levels': {'numba': 'DEBUG'}})

    def test_window_moves_traced(self, tmp_path, engine_loggers, sp3_page, start_unix):
        engine_loggers(ROOT_LOGGER, TIME_SERIES_LOGGER)
        log_file = tmp_path / "engine.log"
        setup_logger_from_config({
            'level': 'WARNING',
            'log_file': str(log_file),
            'console': False,
            'module_levels': {TIME_SERIES_LOGGER: 'TRACE'},
        })
        store = SatellitePositionStore()
        store.initialize([sp3_page(linear, num_epochs=12)], 4, InterpolationMethod.LAGRANGE)

        store.set_up(start_unix + 3 * 900.0, 1.0)
        store.update(start_unix + 3 * 900.0 + 300.0)
        module_logger = logging.getLogger(TIME_SERIES_LOGGER)
        assert "window moved" not in read_log(module_logger, log_file)

        store.update(start_unix + 3 * 900.0 + 600.0)
        text = read_log(module_logger, log_file)
        assert "TRACE - Satellite 0 window moved to samples (2, 6)" in text
        assert not module_logger.propagate
